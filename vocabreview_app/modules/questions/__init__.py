"""Question generation: prompts, correct answers and distractor options."""

from .engine import QUESTION_TYPE_GENERATORS, QUIZ_TYPE_GENERATORS, QuestionGenerator
from .schemas import (
    DefinitionRecord,
    GeneratedQuestion,
    QuestionType,
    QuizType,
    Relation,
    WordCorpus,
    WordRecord,
)

__all__ = [
    'QuestionGenerator',
    'QUIZ_TYPE_GENERATORS',
    'QUESTION_TYPE_GENERATORS',
    'DefinitionRecord',
    'GeneratedQuestion',
    'QuestionType',
    'QuizType',
    'Relation',
    'WordCorpus',
    'WordRecord',
]
