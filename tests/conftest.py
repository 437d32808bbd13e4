import os
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from vocabpractice_app import create_app, db
from vocabpractice_app.config import Config
from vocabpractice_app.models import Teacher, Word, WordSet


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_ENGINE_OPTIONS = {
        'connect_args': {'check_same_thread': False}
    }
    WTF_CSRF_ENABLED = False
    LOG_DIR = None


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def login_client(client, teacher_id):
    with client.session_transaction() as session:
        session['_user_id'] = str(teacher_id)
        session['_fresh'] = True


@pytest.fixture
def make_teacher(app):
    def _make(full_name='Ms. Rivera', email='rivera@example.com', password='password123'):
        teacher = Teacher(full_name=full_name, email=email)
        teacher.set_password(password)
        db.session.add(teacher)
        db.session.commit()
        return teacher
    return _make


@pytest.fixture
def make_word_set(app):
    def _make(teacher, title='Lesson 1', words=('apple', 'banana')):
        word_set = WordSet(teacher_id=teacher.id, title=title)
        db.session.add(word_set)
        db.session.flush()
        for position, word in enumerate(words):
            db.session.add(Word(word_set_id=word_set.id, word=word, position=position))
        db.session.commit()
        return word_set
    return _make


@pytest.fixture
def teacher(make_teacher):
    return make_teacher()


@pytest.fixture
def other_teacher(make_teacher):
    return make_teacher(full_name='Mr. Chen', email='chen@example.com')


@pytest.fixture
def word_set(teacher, make_word_set):
    return make_word_set(teacher)


@pytest.fixture
def login(client):
    """Sign ``client`` in as the given teacher."""
    def _login(teacher):
        login_client(client, teacher.id)
        return client
    return _login
