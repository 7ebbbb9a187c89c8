from functools import wraps

from flask import request
from flask_login import current_user, login_required

from trivia.errors import Unauthorized, ValidationError


def admin_required(view):
    @wraps(view)
    @login_required
    def wrapper(*args, **kwargs):
        if not current_user.is_admin:
            raise Unauthorized('Admin access required')
        return view(*args, **kwargs)
    return wrapper


def editor_required(view):
    """Editors and admins only; plain players get 403."""
    @wraps(view)
    @login_required
    def wrapper(*args, **kwargs):
        if not current_user.can_edit_content:
            raise Unauthorized('Editor or admin access required')
        return view(*args, **kwargs)
    return wrapper


def json_body():
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    return data


def require_int(value, field):
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f'{field} must be an integer id')
    return value
