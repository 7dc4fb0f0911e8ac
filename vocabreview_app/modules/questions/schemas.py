from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class QuizType(str, Enum):
    """Question policy chosen by the learner for a whole session."""
    DEFINITION_TO_WORD = 'definition_to_word'
    WORD_TO_DEFINITION = 'word_to_definition'
    MIXED = 'mixed'


class QuestionType(str, Enum):
    """Kind of a single generated question."""
    DEFINITION_TO_WORD = 'definition_to_word'
    WORD_TO_DEFINITION = 'word_to_definition'
    SYNONYM = 'synonym'
    ANTONYM = 'antonym'


class Relation(str, Enum):
    SYNONYM = 'synonym'
    ANTONYM = 'antonym'


@dataclass(frozen=True)
class DefinitionRecord:
    id: int
    definition: str
    part_of_speech: Optional[str] = None


@dataclass(frozen=True)
class WordRecord:
    """Read-only view of a dictionary word handed to the generator."""
    id: int
    word: str
    phonetic: Optional[str] = None
    definitions: List[DefinitionRecord] = field(default_factory=list)
    synonyms: List[str] = field(default_factory=list)
    antonyms: List[str] = field(default_factory=list)

    def related(self, relation: Relation) -> List[str]:
        return self.synonyms if relation is Relation.SYNONYM else self.antonyms


@dataclass
class GeneratedQuestion:
    question_type: QuestionType
    question_text: str
    correct_answer: str
    options: Optional[List[str]] = None


class WordCorpus(ABC):
    """
    Source of distractor candidates.

    Every method returns at most ``limit`` values drawn at random and never
    anything belonging to ``exclude_word_id``.
    """

    @abstractmethod
    def sample_words(self, exclude_word_id: int, limit: int) -> List[str]:
        """Random word texts other than the target word."""
        ...

    @abstractmethod
    def sample_definitions(self, exclude_word_id: int, limit: int) -> List[str]:
        """Random definition texts belonging to other words."""
        ...

    @abstractmethod
    def sample_related_words(self, relation: Relation, exclude_word_id: int, limit: int) -> List[str]:
        """Random words taking part in ``relation`` rows that do not involve the target word."""
        ...
