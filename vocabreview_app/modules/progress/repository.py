# File: vocabreview_app/modules/progress/repository.py
# Persistence of per-word scheduler state, keyed by (learner, word).

from typing import Optional

from sqlalchemy import case, func, literal_column

from ...core.error_handlers import NotFoundError
from ...extensions import db
from ...models import UserSavedWord, WordLearningProgress
from ..srs import ProgressState, SrsConstants
from .schemas import ProgressStats

# Saved words without a progress row count as fresh (level 0)
_LEVEL = func.coalesce(WordLearningProgress.mastery_level, literal_column(str(SrsConstants.MIN_MASTERY_LEVEL)))

STARTED_LEVEL = 1
INTERMEDIATE_LEVEL = 3


class ProgressRepository:
    """
    Reads and writes WordLearningProgress through the learner's saved word.

    Methods never commit: they run inside the caller's transaction.
    """

    @staticmethod
    def _saved_word(user_id: int, word_id: int, for_update: bool = False) -> Optional[UserSavedWord]:
        query = UserSavedWord.query.filter_by(user_id=user_id, word_id=word_id)
        if for_update:
            query = query.with_for_update(of=UserSavedWord)
        return query.first()

    @staticmethod
    def find(user_id: int, word_id: int) -> Optional[ProgressState]:
        """Progress for the word, or None when the word is not saved or never scheduled."""
        saved_word = ProgressRepository._saved_word(user_id, word_id)
        if saved_word is None or saved_word.learning_progress is None:
            return None
        return ProgressState.from_model(saved_word.learning_progress)

    @staticmethod
    def get(user_id: int, word_id: int) -> ProgressState:
        """
        Raises:
            NotFoundError: If the learner has no progress for the word.
        """
        state = ProgressRepository.find(user_id, word_id)
        if state is None:
            raise NotFoundError('Learning progress not found', resource='word_learning_progress')
        return state

    @staticmethod
    def upsert(user_id: int, word_id: int, state: ProgressState) -> WordLearningProgress:
        """
        Store ``state`` for the learner's word, creating the progress row if missing.

        Raises:
            NotFoundError: If the learner has not saved the word.
        """
        saved_word = ProgressRepository._saved_word(user_id, word_id, for_update=True)
        if saved_word is None:
            raise NotFoundError('Word is not in the saved list', resource='user_saved_word')

        progress = saved_word.learning_progress
        if progress is None:
            progress = WordLearningProgress(saved_word_id=saved_word.saved_word_id)
            saved_word.learning_progress = progress
            db.session.add(progress)

        state.apply_to(progress)
        db.session.flush()
        return progress

    @staticmethod
    def _saved_words_with_progress(*columns):
        return (
            db.session.query(*columns)
            .select_from(UserSavedWord)
            .outerjoin(WordLearningProgress, WordLearningProgress.saved_word_id == UserSavedWord.saved_word_id)
        )

    @staticmethod
    def stats(user_id: int) -> ProgressStats:
        """Totals and per-level counts over every word the learner saved."""
        totals = (
            ProgressRepository._saved_words_with_progress(
                func.count(UserSavedWord.saved_word_id).label('total'),
                func.count(case((_LEVEL >= STARTED_LEVEL, 1))).label('started'),
                func.count(case((_LEVEL >= INTERMEDIATE_LEVEL, 1))).label('intermediate'),
                func.count(case((_LEVEL >= SrsConstants.MAX_MASTERY_LEVEL, 1))).label('mastered'),
                func.avg(_LEVEL).label('average'),
            )
            .filter(UserSavedWord.user_id == user_id)
            .one()
        )

        per_level = (
            ProgressRepository._saved_words_with_progress(_LEVEL.label('level'), func.count().label('count'))
            .filter(UserSavedWord.user_id == user_id)
            .group_by(_LEVEL)
            .all()
        )
        mastery_counts = dict.fromkeys(
            range(SrsConstants.MIN_MASTERY_LEVEL, SrsConstants.MAX_MASTERY_LEVEL + 1), 0
        )
        mastery_counts.update({row.level: row.count for row in per_level})

        return ProgressStats(
            total_saved_words=totals.total,
            started_words=totals.started,
            intermediate_words=totals.intermediate,
            mastered_words=totals.mastered,
            average_mastery_level=round(float(totals.average or 0), 2),
            mastery_counts=mastery_counts,
        )
