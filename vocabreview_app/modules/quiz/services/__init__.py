from .session_service import QuizSessionService

__all__ = ['QuizSessionService']
