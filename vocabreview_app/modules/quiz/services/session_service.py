# File: vocabreview_app/modules/quiz/services/session_service.py
# QuizSessionService - lifecycle of a quiz session: create, answer, cancel, read.

import random
from typing import Optional

from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ....core.error_handlers import (
    AlreadyAnsweredError,
    ForbiddenError,
    NoWordsAvailableError,
    NotFoundError,
    QuizEngineError,
    SessionEndedError,
    StorageFailureError,
    ValidationError,
)
from ....core.signals import answer_graded, quiz_session_cancelled, quiz_session_completed
from ....extensions import db
from ....models import QuizQuestion, QuizSession
from ....utils.time_utils import utcnow
from ...progress import ProgressRepository
from ...questions import QuestionGenerator, QuizType
from ...srs import ProgressState, SrsEngine
from ...vocabulary import WordRepository
from ..config import get_quiz_setting
from ..logics.grading import calculate_score, grade_answer
from ..repository import QuizRepository
from ..schemas import AnswerOutcome, FinalStats, SessionProgress, SessionStart


class QuizSessionService:
    """
    Service layer for database-backed quiz sessions.

    Every public method runs in one transaction: it commits on success, and on
    failure rolls back before raising. Signals fire only after a commit.
    """

    def __init__(self, rng: Optional[random.Random] = None, words: WordRepository = None,
                 progress: ProgressRepository = None):
        self.rng = rng or random.Random()
        self.words = words or WordRepository()
        self.progress = progress or ProgressRepository()

    def _generator(self) -> QuestionGenerator:
        return QuestionGenerator(
            self.words,
            rng=self.rng,
            option_count=get_quiz_setting(current_app, 'OPTION_COUNT'),
            pool_size=get_quiz_setting(current_app, 'DISTRACTOR_POOL_SIZE'),
        )

    # === Create ===

    def create_session(self, user_id: int, quiz_type, question_count: int) -> SessionStart:
        """
        Start a session over the learner's due words, or return the one already running.

        Raises:
            NoWordsAvailableError: If nothing is due.
            InsufficientDataError: If a due word cannot back a question.
            StorageFailureError: If the store fails (other than losing the insert race).
        """
        quiz_type = QuizType(quiz_type)

        try:
            active = QuizRepository.find_active_session(user_id)
            if active is not None:
                current_app.logger.info(f"User {user_id} already has active quiz session {active.session_id}")
                return SessionStart.from_session(active, has_active_session=True)

            words = self.words.find_due_words(user_id, question_count)
            if not words:
                raise NoWordsAvailableError()

            # Sequential: the generator queries through the request's db.session
            generator = self._generator()
            generated = [(word, generator.generate(word, quiz_type)) for word in words]

            session = QuizSession(
                user_id=user_id,
                quiz_type=quiz_type.value,
                status=QuizSession.STATUS_ACTIVE,
                total_questions=len(generated),
            )
            for word, question in generated:
                session.questions.append(QuizQuestion(
                    word_id=word.id,
                    question_type=question.question_type.value,
                    question_text=question.question_text,
                    correct_answer=question.correct_answer,
                    options=question.options,
                ))

            db.session.add(session)
            db.session.commit()

            current_app.logger.info(
                f"Created quiz session {session.session_id} for user {user_id} "
                f"({quiz_type.value}, {session.total_questions} questions)"
            )
            return SessionStart.from_session(session)
        except IntegrityError:
            db.session.rollback()
            # Lost the race against a concurrent create for the same learner
            try:
                winner = QuizRepository.find_active_session(user_id)
            except SQLAlchemyError as exc:
                db.session.rollback()
                raise StorageFailureError('Could not create quiz session') from exc
            if winner is None:
                current_app.logger.error(f"Integrity error creating quiz session for user {user_id}", exc_info=True)
                raise StorageFailureError('Could not create quiz session')
            current_app.logger.info(f"Concurrent create for user {user_id}; returning session {winner.session_id}")
            return SessionStart.from_session(winner, has_active_session=True)
        except QuizEngineError:
            db.session.rollback()
            raise
        except SQLAlchemyError as exc:
            db.session.rollback()
            current_app.logger.error(f"Error creating quiz session for user {user_id}: {exc}", exc_info=True)
            raise StorageFailureError('Could not create quiz session') from exc

    # === Answer ===

    def submit_answer(self, user_id: int, session_id: int, question_id: int, raw_answer: str,
                      now=None) -> AnswerOutcome:
        """
        Grade one answer, update the session counters and the learner's progress.

        Raises:
            ValidationError: If the answer is blank.
            NotFoundError: If the session or the question (within it) does not exist.
            ForbiddenError: If the session belongs to someone else.
            AlreadyAnsweredError: If the question already has an answer.
            SessionEndedError: If the session is completed or cancelled.
            StorageFailureError: If the transaction fails; nothing is kept.
        """
        answer = (raw_answer or '').strip()
        if not answer:
            raise ValidationError('User answer is required.', {'userAnswer': ['User answer is required.']})
        now = now or utcnow()

        try:
            session = QuizRepository.get_session_for_update(session_id)
            question = QuizRepository.get_question_in_session(session_id, question_id) if session else None
            if question is None:
                raise NotFoundError('Question not found or not accessible.', resource='quiz_question')
            if session.user_id != user_id:
                raise ForbiddenError('You are not authorized to answer this question.')
            if question.is_answered:
                raise AlreadyAnsweredError()
            if not session.is_active:
                raise SessionEndedError()

            is_correct = grade_answer(answer, question.correct_answer)
            if not QuizRepository.record_answer(question.question_id, answer, is_correct, now):
                raise AlreadyAnsweredError()
            QuizRepository.increment_counter(session_id, is_correct, now)

            current = self.progress.find(user_id, question.word_id) or ProgressState()
            progress = SrsEngine.advance(current, is_correct, now)
            self.progress.upsert(user_id, question.word_id, progress)

            remaining = QuizRepository.count_remaining(session_id)
            total, correct_count, wrong_count = QuizRepository.get_counts(session_id)

            if remaining == 0:
                score = calculate_score(correct_count, total)
                if not QuizRepository.complete_session(session_id, score, now):
                    raise SessionEndedError()
                outcome = AnswerOutcome(
                    question_id=question.question_id,
                    user_answer=answer,
                    correct_answer=question.correct_answer,
                    is_correct=is_correct,
                    session_complete=True,
                    final_stats=FinalStats(total, correct_count, wrong_count, score),
                )
            else:
                next_id = self.rng.choice(QuizRepository.unanswered_question_ids(session_id))
                outcome = AnswerOutcome(
                    question_id=question.question_id,
                    user_answer=answer,
                    correct_answer=question.correct_answer,
                    is_correct=is_correct,
                    session_complete=False,
                    next_question=db.session.get(QuizQuestion, next_id).to_prompt(),
                    session_progress=SessionProgress.from_counts(total, correct_count, wrong_count),
                )
            word_id = question.word_id

            db.session.commit()
        except QuizEngineError:
            db.session.rollback()
            raise
        except SQLAlchemyError as exc:
            db.session.rollback()
            current_app.logger.error(
                f"Error submitting answer for question {question_id} in session {session_id}: {exc}",
                exc_info=True,
            )
            raise StorageFailureError('Could not save the answer') from exc

        sender = current_app._get_current_object()
        answer_graded.send(
            sender,
            user_id=user_id,
            session_id=session_id,
            question_id=question_id,
            word_id=word_id,
            is_correct=is_correct,
            progress=progress.to_dict(),
        )
        if outcome.session_complete:
            current_app.logger.info(f"Quiz session {session_id} completed with score {outcome.final_stats.score}")
            quiz_session_completed.send(
                sender,
                user_id=user_id,
                session_id=session_id,
                total_questions=total,
                correct_count=correct_count,
                wrong_count=wrong_count,
                score=outcome.final_stats.score,
            )
        return outcome

    # === Cancel ===

    def cancel_session(self, user_id: int, session_id: int, now=None) -> None:
        """
        Abandon an active session. The score keeps whatever value it had.

        Raises:
            NotFoundError: If the learner has no such session.
            SessionEndedError: If it already ended.
        """
        try:
            session = QuizRepository.get_session_for_update(session_id)
            if session is None or session.user_id != user_id:
                raise NotFoundError('Quiz session not found', resource='quiz_session')
            if not session.is_active or not QuizRepository.cancel_session(session_id, now):
                raise SessionEndedError('Session already ended')
            db.session.commit()
        except QuizEngineError:
            db.session.rollback()
            raise
        except SQLAlchemyError as exc:
            db.session.rollback()
            current_app.logger.error(f"Error cancelling quiz session {session_id}: {exc}", exc_info=True)
            raise StorageFailureError('Could not cancel quiz session') from exc

        current_app.logger.info(f"Quiz session {session_id} cancelled by user {user_id}")
        quiz_session_cancelled.send(current_app._get_current_object(), user_id=user_id, session_id=session_id)

    # === Read ===

    def get_question(self, user_id: int, session_id: int, question_id: int) -> dict:
        """
        One question with submission state and a progress snapshot.

        The correct answer is revealed only once the question is answered, and
        only then is a random unanswered ``nextQuestion`` attached.

        Raises:
            NotFoundError: If the session or the question (within it) does not exist.
            ForbiddenError: If the session belongs to someone else.
            StorageFailureError: If the store cannot be read.
        """
        try:
            session = QuizRepository.get_session(session_id)
            question = QuizRepository.get_question_in_session(session_id, question_id) if session else None
            if question is None:
                raise NotFoundError('Question not found', resource='quiz_question')
            if session.user_id != user_id:
                raise ForbiddenError("You don't have permission to access this question")

            progress = SessionProgress.from_counts(session.total_questions, session.correct_count, session.wrong_count)
            data = question.to_prompt()
            data.update({
                'userAnswer': question.user_answer,
                'correctAnswer': question.correct_answer if question.is_answered else None,
                'isCorrect': question.is_correct,
                'hasSubmitted': question.is_answered,
                'sessionProgress': progress.to_dict(),
            })
            if question.is_answered:
                unanswered = QuizRepository.unanswered_question_ids(session_id)
                data['nextQuestion'] = (
                    db.session.get(QuizQuestion, self.rng.choice(unanswered)).to_prompt() if unanswered else None
                )
            return data
        except SQLAlchemyError as exc:
            db.session.rollback()
            current_app.logger.error(f"Error reading question {question_id} in session {session_id}: {exc}", exc_info=True)
            raise StorageFailureError('Could not load the question') from exc

    def get_result(self, user_id: int, session_id: int) -> dict:
        try:
            session = QuizRepository.get_session(session_id)
            if session is None or session.user_id != user_id:
                raise NotFoundError('Quiz session not found or not completed yet', resource='quiz_session')
            return session.to_dict(include_questions=True)
        except SQLAlchemyError as exc:
            db.session.rollback()
            current_app.logger.error(f"Error reading quiz session {session_id}: {exc}", exc_info=True)
            raise StorageFailureError('Could not load quiz results') from exc
