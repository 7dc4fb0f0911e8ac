"""Quiz session and question models."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy.types import JSON

from ..extensions import db
from ..utils.time_utils import isoformat


def _format_score(score) -> str:
    return f"{Decimal(score or 0):.2f}"


class QuizSession(db.Model):
    """One run through a batch of due words.

    ``ended_at`` is NULL while the session is active; ``status`` tells a
    naturally completed session apart from a cancelled one.
    """

    __tablename__ = 'quiz_sessions'

    STATUS_ACTIVE = 'active'
    STATUS_COMPLETED = 'completed'
    STATUS_CANCELLED = 'cancelled'

    session_id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.user_id', ondelete='CASCADE'), nullable=False, index=True)
    quiz_type = db.Column(db.String(50), nullable=False)
    status = db.Column(db.String(20), nullable=False, default=STATUS_ACTIVE, index=True)

    # Session Stats
    total_questions = db.Column(db.Integer, nullable=False, default=0)
    correct_count = db.Column(db.Integer, nullable=False, default=0)
    wrong_count = db.Column(db.Integer, nullable=False, default=0)
    score = db.Column(db.Numeric(5, 2), nullable=False, default=Decimal('0.00'))

    # Timestamps
    started_at = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), index=True)
    updated_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
    ended_at = db.Column(db.DateTime(timezone=True))

    questions = db.relationship(
        'QuizQuestion',
        back_populates='session',
        lazy='selectin',
        cascade='all, delete-orphan',
        order_by='QuizQuestion.question_id',
    )

    __table_args__ = (
        # At most one active session per learner.
        db.Index(
            'uq_quiz_sessions_one_active',
            'user_id',
            unique=True,
            sqlite_where=db.text('ended_at IS NULL'),
            postgresql_where=db.text('ended_at IS NULL'),
        ),
    )

    @property
    def is_active(self) -> bool:
        return self.ended_at is None

    def to_dict(self, include_questions: bool = True) -> dict:
        data = {
            'id': self.session_id,
            'userId': self.user_id,
            'quizType': self.quiz_type,
            'status': self.status,
            'totalQuestions': self.total_questions,
            'correctCount': self.correct_count,
            'wrongCount': self.wrong_count,
            'score': _format_score(self.score),
            'startedAt': isoformat(self.started_at),
            'endedAt': isoformat(self.ended_at),
            'createdAt': isoformat(self.started_at),
            'updatedAt': isoformat(self.updated_at),
        }
        if include_questions:
            data['questions'] = [question.to_dict() for question in self.questions]
        return data

    def __repr__(self):
        return f"<QuizSession {self.session_id}: user={self.user_id} status={self.status}>"


class QuizQuestion(db.Model):
    __tablename__ = 'quiz_questions'

    question_id = db.Column(db.Integer, primary_key=True)
    session_id = db.Column(
        db.Integer, db.ForeignKey('quiz_sessions.session_id', ondelete='CASCADE'), nullable=False, index=True
    )
    word_id = db.Column(db.Integer, db.ForeignKey('words.word_id', ondelete='CASCADE'), nullable=False)

    question_type = db.Column(db.String(50), nullable=False)
    question_text = db.Column(db.Text, nullable=False)
    correct_answer = db.Column(db.Text, nullable=False)
    options = db.Column(JSON, nullable=True)

    # Set exactly once, when the learner answers
    user_answer = db.Column(db.Text, nullable=True)
    is_correct = db.Column(db.Boolean, nullable=True)

    created_at = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    session = db.relationship('QuizSession', back_populates='questions')

    @property
    def is_answered(self) -> bool:
        return self.user_answer is not None

    def to_summary(self) -> dict:
        """Shape used when a session is created: never reveals the answer."""
        return {
            'id': self.question_id,
            'questionType': self.question_type,
            'questionText': self.question_text,
            'options': self.options,
        }

    def to_prompt(self) -> dict:
        """Shape used for the ``nextQuestion`` field."""
        return {
            'id': self.question_id,
            'quizSessionId': self.session_id,
            'questionType': self.question_type,
            'questionText': self.question_text,
            'options': self.options,
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
        }

    def to_dict(self) -> dict:
        return {
            'id': self.question_id,
            'quizSessionId': self.session_id,
            'wordId': self.word_id,
            'questionType': self.question_type,
            'questionText': self.question_text,
            'correctAnswer': self.correct_answer,
            'options': self.options,
            'userAnswer': self.user_answer,
            'isCorrect': self.is_correct,
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
        }
