# File: vocabreview_app/modules/progress/routes/api.py
# Read-only learning statistics for the requesting learner.

from flask import current_app
from flask_login import current_user, login_required
from sqlalchemy.exc import SQLAlchemyError

from .. import blueprint
from ....core.error_handlers import StorageFailureError, success_response
from ....extensions import db
from ..repository import ProgressRepository


@blueprint.route('/stats', methods=['GET'])
@login_required
def get_learning_stats():
    user_id = current_user.user_id
    try:
        stats = ProgressRepository.stats(user_id)
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.error(f"Error reading learning stats for user {user_id}: {exc}", exc_info=True)
        raise StorageFailureError('Could not load learning statistics') from exc
    return success_response(stats.to_dict(), 'Learning statistics retrieved successfully')
