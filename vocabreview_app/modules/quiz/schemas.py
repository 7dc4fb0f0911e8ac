from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from flask import current_app
from marshmallow import EXCLUDE, Schema, ValidationError, fields, validate, validates

from ..questions.schemas import QuizType
from .config import QuizDefaultConfig, get_quiz_setting
from .logics.grading import completion_percentage, format_score

# --- Request Schemas ---


class CreateQuizSessionSchema(Schema):
    """Body of POST /api/quiz/."""

    class Meta:
        unknown = EXCLUDE

    quiz_type = fields.Str(
        required=True,
        data_key='quizType',
        validate=validate.OneOf([quiz_type.value for quiz_type in QuizType]),
    )
    question_per_session = fields.Int(required=True, strict=True, data_key='questionPerSession')

    @validates('question_per_session')
    def validate_question_per_session(self, value, **kwargs):
        maximum = get_quiz_setting(current_app, 'MAX_QUESTIONS_PER_SESSION')
        minimum = QuizDefaultConfig.MIN_QUESTIONS_PER_SESSION
        if isinstance(value, bool) or not minimum <= value <= maximum:
            raise ValidationError(f'Must be an integer between {minimum} and {maximum}.')


class SubmitAnswerSchema(Schema):
    """Body of POST /api/quiz/<session_id>/question/<question_id>/check-answer."""

    class Meta:
        unknown = EXCLUDE

    user_answer = fields.Str(required=True, data_key='userAnswer')

    @validates('user_answer')
    def validate_user_answer(self, value, **kwargs):
        if not value.strip():
            raise ValidationError('User answer is required.')


# --- Result DTOs ---


@dataclass
class SessionProgress:
    answered_questions: int
    total_questions: int
    correct_answers: int
    wrong_answers: int

    @classmethod
    def from_counts(cls, total_questions: int, correct_count: int, wrong_count: int) -> "SessionProgress":
        return cls(
            answered_questions=correct_count + wrong_count,
            total_questions=total_questions,
            correct_answers=correct_count,
            wrong_answers=wrong_count,
        )

    @property
    def percentage(self) -> float:
        return completion_percentage(self.answered_questions, self.total_questions)

    def to_dict(self) -> dict:
        return {
            'answeredQuestions': self.answered_questions,
            'totalQuestions': self.total_questions,
            'correctAnswers': self.correct_answers,
            'wrongAnswers': self.wrong_answers,
            'percentage': self.percentage,
        }


@dataclass
class FinalStats:
    total_questions: int
    correct_answers: int
    wrong_answers: int
    score: Any

    def to_dict(self) -> dict:
        return {
            'totalQuestions': self.total_questions,
            'correctAnswers': self.correct_answers,
            'wrongAnswers': self.wrong_answers,
            'answeredQuestions': self.total_questions,
            # Completion, not accuracy: a finished session is always 100
            'percentage': 100,
            'score': format_score(self.score),
        }


@dataclass
class SessionStart:
    session_id: int
    total_questions: int
    questions: List[Dict[str, Any]] = field(default_factory=list)
    has_active_session: bool = False

    @classmethod
    def from_session(cls, session, has_active_session: bool = False) -> "SessionStart":
        return cls(
            session_id=session.session_id,
            total_questions=session.total_questions,
            questions=[question.to_summary() for question in session.questions],
            has_active_session=has_active_session,
        )

    def to_dict(self) -> dict:
        return {
            'sessionId': self.session_id,
            'totalQuestions': self.total_questions,
            'hasActiveSession': self.has_active_session,
            'questions': self.questions,
        }


@dataclass
class AnswerOutcome:
    question_id: int
    user_answer: str
    correct_answer: str
    is_correct: bool
    session_complete: bool
    final_stats: Optional[FinalStats] = None
    next_question: Optional[Dict[str, Any]] = None
    session_progress: Optional[SessionProgress] = None

    def to_dict(self) -> dict:
        data = {
            'question': {
                'id': self.question_id,
                'userAnswer': self.user_answer,
                'correctAnswer': self.correct_answer,
                'isCorrect': self.is_correct,
            },
            'sessionComplete': self.session_complete,
        }
        if self.session_complete:
            data['finalStats'] = self.final_stats.to_dict()
        else:
            data['nextQuestion'] = self.next_question
            data['sessionProgress'] = self.session_progress.to_dict()
        return data
