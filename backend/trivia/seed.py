from trivia import db
from trivia.models import Answer, Question, Topic, User, ROLE_ADMIN, ROLE_EDITOR, ROLE_PLAYER

DEMO_QUESTIONS = {
    'Geography': [
        ('What is the capital of France?', 1, ['Paris', 'Lyon', 'Marseille', 'Nice']),
        ('Which river flows through Vienna?', 2, ['Danube', 'Rhine', 'Elbe', 'Po']),
        ('What is the highest mountain in Africa?', 3, ['Kilimanjaro', 'Mount Kenya', 'Ras Dashen', 'Mount Stanley']),
    ],
    'Science': [
        ('What is the chemical symbol for gold?', 1, ['Au', 'Ag', 'Gd', 'Go']),
        ('How many bones are in the adult human body?', 4, ['206', '208', '212', '198']),
        ('What particle carries the electromagnetic force?', 5, ['Photon', 'Gluon', 'W boson', 'Graviton']),
    ],
}


def seed_demo_data():
    """Seed an admin, an editor, three players and a small question bank.

    The first answer of every demo question is the correct one.
    """
    accounts = [('admin', ROLE_ADMIN), ('editor', ROLE_EDITOR)]
    accounts += [(f'testuser{i}', ROLE_PLAYER) for i in range(1, 4)]
    for username, role in accounts:
        user = User(username=username, role=role)
        user.set_password('password')
        db.session.add(user)

    for topic_name, rows in DEMO_QUESTIONS.items():
        topic = Topic(text=topic_name)
        db.session.add(topic)
        for text, difficulty, choices in rows:
            question = Question(text=text, difficulty=difficulty, language='en', topic=topic)
            question.answers = [
                Answer(text=choice, correct=(i == 0), plausibility=4 - i)
                for i, choice in enumerate(choices)
            ]
            db.session.add(question)

    db.session.commit()
