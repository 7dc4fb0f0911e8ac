"""Database models package for VocabReview."""

from ..extensions import db

from .user import User
from .word import Word, WordAntonym, WordDefinition, WordSynonym
from .saved_word import UserSavedWord
from .learning_progress import WordLearningProgress
from .quiz import QuizQuestion, QuizSession

__all__ = [
    'db',
    'User',
    'Word',
    'WordDefinition',
    'WordSynonym',
    'WordAntonym',
    'UserSavedWord',
    'WordLearningProgress',
    'QuizSession',
    'QuizQuestion',
]
