# File: vocabreview_app/modules/vocabulary/repository.py
# Read access to the dictionary tables and the learner's saved words.

from typing import List, Optional, Set

from sqlalchemy import func, or_, select

from ...core.error_handlers import ConflictError, NotFoundError
from ...extensions import db
from ...models import (
    UserSavedWord,
    Word,
    WordAntonym,
    WordDefinition,
    WordLearningProgress,
    WordSynonym,
)
from ...utils.time_utils import start_of_next_day
from ..questions.schemas import DefinitionRecord, Relation, WordCorpus, WordRecord
from ..srs import SrsEngine

_RELATION_TABLES = {
    Relation.SYNONYM: (WordSynonym, WordSynonym.synonym_id),
    Relation.ANTONYM: (WordAntonym, WordAntonym.antonym_id),
}


class WordRepository(WordCorpus):
    """Dictionary queries used by quiz creation and question generation."""

    @staticmethod
    def to_record(word: Word) -> WordRecord:
        return WordRecord(
            id=word.word_id,
            word=word.word,
            phonetic=word.phonetic,
            definitions=[
                DefinitionRecord(
                    id=definition.definition_id,
                    definition=definition.definition,
                    part_of_speech=definition.part_of_speech,
                )
                for definition in word.definitions
            ],
            synonyms=word.synonyms,
            antonyms=word.antonyms,
        )

    def find_due_words(self, user_id: int, limit: int, now=None) -> List[WordRecord]:
        """
        Pick up to ``limit`` random words the learner should review today.

        A saved word is due when it has no progress yet, no scheduled review,
        or a review scheduled before the start of tomorrow (UTC). Words with
        no definitions are skipped since no question can be built for them.
        """
        cutoff = start_of_next_day(now)
        words = (
            db.session.query(Word)
            .join(UserSavedWord, UserSavedWord.word_id == Word.word_id)
            .outerjoin(WordLearningProgress, WordLearningProgress.saved_word_id == UserSavedWord.saved_word_id)
            .filter(UserSavedWord.user_id == user_id)
            .filter(or_(
                WordLearningProgress.progress_id.is_(None),
                WordLearningProgress.next_review_at.is_(None),
                WordLearningProgress.next_review_at < cutoff,
            ))
            .filter(Word.definitions.any())
            .order_by(func.random())
            .limit(limit)
            .all()
        )
        return [self.to_record(word) for word in words]

    # === WordCorpus ===

    def sample_words(self, exclude_word_id: int, limit: int) -> List[str]:
        rows = (
            db.session.query(Word.word)
            .filter(Word.word_id != exclude_word_id)
            .order_by(func.random())
            .limit(limit)
            .all()
        )
        return [row.word for row in rows]

    def sample_definitions(self, exclude_word_id: int, limit: int) -> List[str]:
        rows = (
            db.session.query(WordDefinition.definition)
            .filter(WordDefinition.word_id != exclude_word_id)
            .order_by(func.random())
            .limit(limit)
            .all()
        )
        return [row.definition for row in rows]

    def sample_related_words(self, relation: Relation, exclude_word_id: int, limit: int) -> List[str]:
        link, other_side = _RELATION_TABLES[Relation(relation)]
        linked_ids = self._linked_word_ids(exclude_word_id)

        rows = (
            db.session.query(Word.word)
            .filter(or_(Word.word_id.in_(select(link.word_id)), Word.word_id.in_(select(other_side))))
            .filter(Word.word_id.notin_(linked_ids))
            .order_by(func.random())
            .limit(limit)
            .all()
        )
        return [row.word for row in rows]

    @staticmethod
    def _linked_word_ids(word_id: int) -> Set[int]:
        """The word itself plus every word tied to it by a synonym or antonym row, in either direction."""
        linked = {word_id}
        for link, other_side in _RELATION_TABLES.values():
            rows = (
                db.session.query(link.word_id, other_side)
                .filter(or_(link.word_id == word_id, other_side == word_id))
                .all()
            )
            for left, right in rows:
                linked.update((left, right))
        return linked


class SavedWordRepository:
    """The learner's study list."""

    @staticmethod
    def get(user_id: int, word_id: int) -> Optional[UserSavedWord]:
        return UserSavedWord.query.filter_by(user_id=user_id, word_id=word_id).first()

    @staticmethod
    def save_word(user_id: int, word_id: int, notes: str = None, now=None) -> UserSavedWord:
        """
        Add a word to the learner's list with fresh progress (first review tomorrow).

        The caller owns the transaction; nothing is committed here.

        Raises:
            NotFoundError: If the word does not exist.
            ConflictError: If the learner already saved it.
        """
        if db.session.get(Word, word_id) is None:
            raise NotFoundError('Word not found', resource='word')
        if SavedWordRepository.get(user_id, word_id) is not None:
            raise ConflictError('Word already saved')

        saved_word = UserSavedWord(user_id=user_id, word_id=word_id, notes=notes)
        progress = WordLearningProgress()
        SrsEngine.initial_state(now).apply_to(progress)
        saved_word.learning_progress = progress

        db.session.add(saved_word)
        db.session.flush()
        return saved_word
