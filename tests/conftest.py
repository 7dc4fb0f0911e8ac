import os
import sys
from datetime import timedelta

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from vocabreview_app import create_app, db
from vocabreview_app.config import Config
from vocabreview_app.models import User, Word, WordAntonym, WordDefinition, WordSynonym
from vocabreview_app.modules.vocabulary import SavedWordRepository
from vocabreview_app.utils.time_utils import utcnow


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_ENGINE_OPTIONS = {
        'connect_args': {'check_same_thread': False}
    }
    LOG_DIR = ''
    LOG_LEVEL = 'WARNING'


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def make_user(app):
    def _make_user(username='learner'):
        user = User(username=username, email=f'{username}@example.com')
        db.session.add(user)
        db.session.commit()
        return user
    return _make_user


def _get_or_create_word(text):
    word = Word.query.filter_by(word=text).first()
    if word is None:
        word = Word(word=text)
        db.session.add(word)
        db.session.flush()
    return word


@pytest.fixture
def make_word(app):
    def _make_word(text, definitions=(), synonyms=(), antonyms=()):
        word = _get_or_create_word(text)
        for definition in definitions:
            db.session.add(WordDefinition(word_id=word.word_id, definition=definition, part_of_speech='adj'))
        for synonym in synonyms:
            other = _get_or_create_word(synonym)
            db.session.add(WordSynonym(word_id=word.word_id, synonym_id=other.word_id))
        for antonym in antonyms:
            other = _get_or_create_word(antonym)
            db.session.add(WordAntonym(word_id=word.word_id, antonym_id=other.word_id))
        db.session.commit()
        return word
    return _make_word


@pytest.fixture
def save_word(app):
    """Save a word for a learner; ``due=True`` backdates it so it is up for review today."""
    def _save_word(user, word, due=True):
        saved_at = utcnow() - timedelta(days=2) if due else utcnow()
        saved = SavedWordRepository.save_word(user.user_id, word.word_id, now=saved_at)
        db.session.commit()
        return saved
    return _save_word


DICTIONARY = {
    'happy': 'feeling or showing pleasure',
    'brave': 'ready to face danger',
    'quick': 'moving fast',
    'calm': 'not showing nervousness',
    'eager': 'wanting to do something very much',
    'gentle': 'mild in temperament',
    'honest': 'free of deceit',
}


@pytest.fixture
def dictionary(make_word):
    """A small dictionary of words, each with one definition."""
    return {text: make_word(text, definitions=[definition]) for text, definition in DICTIONARY.items()}


@pytest.fixture
def learner(make_user):
    return make_user('learner')


@pytest.fixture
def due_words(learner, dictionary, save_word):
    """Saves the first ``count`` dictionary words for the learner, all due."""
    def _due_words(count):
        words = list(dictionary.values())[:count]
        for word in words:
            save_word(learner, word)
        return words
    return _due_words


@pytest.fixture
def auth_headers():
    def _auth_headers(user):
        return {'X-User-Id': str(user.user_id)}
    return _auth_headers
