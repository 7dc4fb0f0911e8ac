import datetime
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ProgressState:
    """DTO bridging the database (WordLearningProgress) and the scheduler."""
    mastery_level: int = 0
    review_interval: int = 0          # days
    correct_count: int = 0
    wrong_count: int = 0
    last_reviewed_at: Optional[datetime.datetime] = None
    next_review_at: Optional[datetime.datetime] = None

    @classmethod
    def from_model(cls, progress) -> "ProgressState":
        if progress is None:
            return cls()
        return cls(
            mastery_level=progress.mastery_level or 0,
            review_interval=progress.review_interval or 0,
            correct_count=progress.correct_count or 0,
            wrong_count=progress.wrong_count or 0,
            last_reviewed_at=progress.last_reviewed_at,
            next_review_at=progress.next_review_at,
        )

    def apply_to(self, progress) -> None:
        progress.mastery_level = self.mastery_level
        progress.review_interval = self.review_interval
        progress.correct_count = self.correct_count
        progress.wrong_count = self.wrong_count
        progress.last_reviewed_at = self.last_reviewed_at
        progress.next_review_at = self.next_review_at

    def to_dict(self) -> dict:
        return {
            'masteryLevel': self.mastery_level,
            'reviewInterval': self.review_interval,
            'correctCount': self.correct_count,
            'wrongCount': self.wrong_count,
            'lastReviewedAt': self.last_reviewed_at.isoformat() if self.last_reviewed_at else None,
            'nextReviewAt': self.next_review_at.isoformat() if self.next_review_at else None,
        }
