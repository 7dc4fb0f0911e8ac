"""
SRS Engine - Pure Spaced Repetition Logic

Pure functions for the mastery-ladder scheduler.
No database access - only calculations based on inputs.

Each mastery level (0-5) owns a short ladder of review intervals in days.
A correct answer climbs one rung, moving up a level after the level's last
rung; a wrong answer drops one level and restarts at that level's first rung.
"""

import datetime
from dataclasses import replace
from typing import Optional, Tuple

from .config import SrsConstants
from .schemas import ProgressState


class SrsEngine:
    """
    Pure calculation engine for the mastery ladder.
    All methods are static and use only provided inputs (no DB access).
    """

    @staticmethod
    def ladder_for(mastery_level: int) -> Tuple[int, ...]:
        """
        Return the interval ladder for a mastery level.

        Raises:
            ValueError: If the level is outside 0-5.
        """
        try:
            return SrsConstants.INTERVAL_LADDER[mastery_level]
        except KeyError:
            raise ValueError(
                f"mastery_level must be between {SrsConstants.MIN_MASTERY_LEVEL} and "
                f"{SrsConstants.MAX_MASTERY_LEVEL}, got {mastery_level!r}"
            ) from None

    @staticmethod
    def next_position(mastery_level: int, review_interval: int) -> Tuple[int, int]:
        """
        Climb one rung after a correct answer.

        Args:
            mastery_level: Current mastery level (0-5)
            review_interval: Current interval in days

        Returns:
            Tuple of (new_mastery_level, new_review_interval)
        """
        ladder = SrsEngine.ladder_for(mastery_level)
        if review_interval not in ladder:
            # Unknown rung: restart the level
            return mastery_level, ladder[0]

        index = ladder.index(review_interval)
        if index < len(ladder) - 1:
            return mastery_level, ladder[index + 1]
        if mastery_level < SrsConstants.MAX_MASTERY_LEVEL:
            return mastery_level + 1, SrsEngine.ladder_for(mastery_level + 1)[0]
        # Level 5, last rung: capped
        return mastery_level, review_interval

    @staticmethod
    def previous_position(mastery_level: int) -> Tuple[int, int]:
        """Drop one level after a wrong answer and restart at its first rung."""
        SrsEngine.ladder_for(mastery_level)
        new_level = max(SrsConstants.MIN_MASTERY_LEVEL, mastery_level - 1)
        return new_level, SrsEngine.ladder_for(new_level)[0]

    @staticmethod
    def advance(
        progress: ProgressState,
        is_correct: bool,
        now: Optional[datetime.datetime] = None
    ) -> ProgressState:
        """
        Compute the learner's progress after one graded answer.

        Args:
            progress: Current progress (not mutated)
            is_correct: Whether the answer was graded correct
            now: Review time (default: datetime.now(UTC))

        Returns:
            The updated ProgressState with last/next review dates set.
        """
        if now is None:
            now = datetime.datetime.now(datetime.timezone.utc)

        if is_correct:
            level, interval = SrsEngine.next_position(progress.mastery_level, progress.review_interval)
            counters = {'correct_count': progress.correct_count + 1}
        else:
            level, interval = SrsEngine.previous_position(progress.mastery_level)
            counters = {'wrong_count': progress.wrong_count + 1}

        return replace(
            progress,
            mastery_level=level,
            review_interval=interval,
            last_reviewed_at=now,
            next_review_at=now + datetime.timedelta(days=interval),
            **counters,
        )

    @staticmethod
    def initial_state(now: Optional[datetime.datetime] = None) -> ProgressState:
        """Progress of a freshly saved word: level 0, first review tomorrow."""
        if now is None:
            now = datetime.datetime.now(datetime.timezone.utc)
        interval = SrsConstants.INITIAL_REVIEW_INTERVAL
        return ProgressState(
            mastery_level=SrsConstants.MIN_MASTERY_LEVEL,
            review_interval=interval,
            next_review_at=now + datetime.timedelta(days=interval),
        )
