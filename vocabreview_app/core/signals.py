"""
Central Signal Registry for quiz events.

Usage:
    # Publisher (sender)
    from vocabreview_app.core.signals import answer_graded
    answer_graded.send(None, user_id=1, word_id=2, ...)

    # Subscriber (receiver)
    @answer_graded.connect
    def on_answer_graded(sender, **kwargs):
        ...
"""
from blinker import Namespace

quiz_signals = Namespace()

# Signal: Fired after an answer is graded and committed
# Payload: user_id, session_id, question_id, word_id, is_correct, progress (dict)
answer_graded = quiz_signals.signal('answer_graded')

# Signal: Fired when the last question of a session is answered
# Payload: user_id, session_id, total_questions, correct_count, wrong_count, score
quiz_session_completed = quiz_signals.signal('quiz_session_completed')

# Signal: Fired when a learner abandons an active session
# Payload: user_id, session_id
quiz_session_cancelled = quiz_signals.signal('quiz_session_cancelled')
