# File: vocabreview_app/modules/quiz/routes/api.py
# JSON endpoints for quiz sessions. The learner comes from Flask-Login's request loader.

from flask import request
from flask_login import current_user, login_required
from marshmallow import ValidationError as SchemaValidationError

from .. import blueprint
from ....core.error_handlers import ValidationError, success_response
from ..schemas import CreateQuizSessionSchema, SubmitAnswerSchema
from ..services import QuizSessionService


def _load_body(schema):
    """Validate the JSON body, mapping marshmallow errors onto the API's ValidationError."""
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise ValidationError('Request body must be a JSON object')
    try:
        return schema.load(payload)
    except SchemaValidationError as exc:
        raise ValidationError('Validation failed', exc.messages)


@blueprint.route('/', methods=['POST'])
@login_required
def create_quiz_session():
    data = _load_body(CreateQuizSessionSchema())
    result = QuizSessionService().create_session(
        current_user.user_id,
        data['quiz_type'],
        data['question_per_session'],
    )

    if result.has_active_session:
        return success_response(result.to_dict(), 'You already have an active quiz session'), 200
    return success_response(result.to_dict(), 'Quiz session created successfully.'), 201


@blueprint.route('/<int:session_id>/question/<int:question_id>', methods=['GET'])
@login_required
def get_question(session_id, question_id):
    data = QuizSessionService().get_question(current_user.user_id, session_id, question_id)
    return success_response(data, 'Question retrieved successfully')


@blueprint.route('/<int:session_id>/question/<int:question_id>/check-answer', methods=['POST'])
@login_required
def submit_answer(session_id, question_id):
    data = _load_body(SubmitAnswerSchema())
    outcome = QuizSessionService().submit_answer(
        current_user.user_id,
        session_id,
        question_id,
        data['user_answer'],
    )

    message = (
        'Answer submitted successfully. Quiz completed!'
        if outcome.session_complete
        else 'Answer submitted successfully.'
    )
    return success_response(outcome.to_dict(), message)


@blueprint.route('/<int:session_id>/cancel', methods=['DELETE'])
@login_required
def cancel_quiz_session(session_id):
    QuizSessionService().cancel_session(current_user.user_id, session_id)
    return success_response(message='Quiz session cancelled')


@blueprint.route('/<int:session_id>/result', methods=['GET'])
@login_required
def get_quiz_result(session_id):
    data = QuizSessionService().get_result(current_user.user_id, session_id)
    return success_response(data, 'Quiz results retrieved successfully')
