from datetime import datetime, timezone

from ..extensions import db


class UserSavedWord(db.Model):
    """A word a learner added to their study list."""

    __tablename__ = 'user_saved_words'

    saved_word_id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.user_id', ondelete='CASCADE'), nullable=False, index=True)
    word_id = db.Column(db.Integer, db.ForeignKey('words.word_id', ondelete='CASCADE'), nullable=False, index=True)
    notes = db.Column(db.Text)
    created_at = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    word = db.relationship('Word', lazy='joined')
    learning_progress = db.relationship(
        'WordLearningProgress',
        back_populates='saved_word',
        uselist=False,
        cascade='all, delete-orphan',
        passive_deletes=True,
    )

    __table_args__ = (
        db.UniqueConstraint('user_id', 'word_id', name='uq_user_saved_word'),
    )
