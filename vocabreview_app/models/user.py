"""Learner model."""

from __future__ import annotations

from datetime import datetime, timezone

from flask_login import UserMixin

from ..extensions import db


class User(UserMixin, db.Model):
    """Owner of saved words and quiz sessions.

    Credentials and token issuance live in the upstream auth service; this
    row only anchors foreign keys.
    """

    __tablename__ = 'users'

    user_id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    def get_id(self):
        return str(self.user_id)

    def __repr__(self):
        return f"<User {self.user_id}: {self.username}>"
