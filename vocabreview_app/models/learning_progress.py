"""Per-word spaced-repetition progress.

One row per saved word (and therefore per learner/word pair). Only the
scheduler writes these fields after a graded answer; the row disappears with
its saved word.
"""

from __future__ import annotations

from datetime import datetime, timezone

from ..extensions import db
from ..utils.time_utils import isoformat


class WordLearningProgress(db.Model):
    __tablename__ = 'word_learning_progress'

    progress_id = db.Column(db.Integer, primary_key=True)
    saved_word_id = db.Column(
        db.Integer,
        db.ForeignKey('user_saved_words.saved_word_id', ondelete='CASCADE'),
        nullable=False,
        unique=True,
    )

    # === Scheduler state ===
    mastery_level = db.Column(db.Integer, nullable=False, default=0)  # 0 - 5
    review_interval = db.Column(db.Integer, nullable=False, default=1)  # days
    last_reviewed_at = db.Column(db.DateTime(timezone=True))
    next_review_at = db.Column(db.DateTime(timezone=True), index=True)

    # === Statistics ===
    correct_count = db.Column(db.Integer, nullable=False, default=0)
    wrong_count = db.Column(db.Integer, nullable=False, default=0)

    created_at = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    saved_word = db.relationship('UserSavedWord', back_populates='learning_progress')

    def to_dict(self) -> dict:
        return {
            'id': self.progress_id,
            'userSavedWordId': self.saved_word_id,
            'masteryLevel': self.mastery_level,
            'reviewInterval': self.review_interval,
            'correctCount': self.correct_count,
            'wrongCount': self.wrong_count,
            'lastReviewedAt': isoformat(self.last_reviewed_at),
            'nextReviewAt': isoformat(self.next_review_at),
        }

    def __repr__(self):
        return f"<WordLearningProgress {self.progress_id}: level={self.mastery_level} interval={self.review_interval}>"
