# File: vocabreview_app/modules/quiz/repository.py
# Quiz session/question persistence. Writes that race are conditional and
# report how many rows they touched; nothing here commits.

from typing import List, Optional, Tuple

from ...extensions import db
from ...models import QuizQuestion, QuizSession
from ...utils.time_utils import utcnow


class QuizRepository:

    @staticmethod
    def find_active_session(user_id: int) -> Optional[QuizSession]:
        return (
            QuizSession.query
            .filter(QuizSession.user_id == user_id, QuizSession.ended_at.is_(None))
            .order_by(QuizSession.started_at.desc())
            .first()
        )

    @staticmethod
    def get_session(session_id: int) -> Optional[QuizSession]:
        return db.session.get(QuizSession, session_id)

    @staticmethod
    def get_session_for_update(session_id: int) -> Optional[QuizSession]:
        """Load the session row locked for the rest of the transaction (where the dialect supports it)."""
        return (
            QuizSession.query
            .filter(QuizSession.session_id == session_id)
            .with_for_update()
            .populate_existing()
            .first()
        )

    @staticmethod
    def get_question_in_session(session_id: int, question_id: int) -> Optional[QuizQuestion]:
        return QuizQuestion.query.filter_by(session_id=session_id, question_id=question_id).first()

    @staticmethod
    def record_answer(question_id: int, user_answer: str, is_correct: bool, now=None) -> bool:
        """Store the answer only if none was stored yet. Returns False when another writer got there first."""
        updated = (
            QuizQuestion.query
            .filter(QuizQuestion.question_id == question_id, QuizQuestion.user_answer.is_(None))
            .update(
                {
                    QuizQuestion.user_answer: user_answer,
                    QuizQuestion.is_correct: is_correct,
                    QuizQuestion.updated_at: now or utcnow(),
                },
                synchronize_session=False,
            )
        )
        return updated == 1

    @staticmethod
    def increment_counter(session_id: int, is_correct: bool, now=None) -> None:
        column = QuizSession.correct_count if is_correct else QuizSession.wrong_count
        (
            QuizSession.query
            .filter(QuizSession.session_id == session_id)
            .update({column: column + 1, QuizSession.updated_at: now or utcnow()}, synchronize_session=False)
        )

    @staticmethod
    def get_counts(session_id: int) -> Tuple[int, int, int]:
        """(total_questions, correct_count, wrong_count) as currently stored."""
        row = (
            db.session.query(QuizSession.total_questions, QuizSession.correct_count, QuizSession.wrong_count)
            .filter(QuizSession.session_id == session_id)
            .one()
        )
        return row.total_questions, row.correct_count, row.wrong_count

    @staticmethod
    def count_remaining(session_id: int) -> int:
        return (
            QuizQuestion.query
            .filter(QuizQuestion.session_id == session_id, QuizQuestion.user_answer.is_(None))
            .count()
        )

    @staticmethod
    def unanswered_question_ids(session_id: int) -> List[int]:
        rows = (
            db.session.query(QuizQuestion.question_id)
            .filter(QuizQuestion.session_id == session_id, QuizQuestion.user_answer.is_(None))
            .order_by(QuizQuestion.question_id)
            .all()
        )
        return [row.question_id for row in rows]

    @staticmethod
    def _end_session(session_id: int, values: dict) -> bool:
        updated = (
            QuizSession.query
            .filter(QuizSession.session_id == session_id, QuizSession.ended_at.is_(None))
            .update(values, synchronize_session=False)
        )
        return updated == 1

    @staticmethod
    def complete_session(session_id: int, score, now=None) -> bool:
        now = now or utcnow()
        return QuizRepository._end_session(session_id, {
            QuizSession.status: QuizSession.STATUS_COMPLETED,
            QuizSession.score: score,
            QuizSession.ended_at: now,
            QuizSession.updated_at: now,
        })

    @staticmethod
    def cancel_session(session_id: int, now=None) -> bool:
        now = now or utcnow()
        return QuizRepository._end_session(session_id, {
            QuizSession.status: QuizSession.STATUS_CANCELLED,
            QuizSession.ended_at: now,
            QuizSession.updated_at: now,
        })
