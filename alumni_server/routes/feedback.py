from flask import Blueprint

from alumni_server.utils.decorators import handle_errors, require_auth
from alumni_server.utils.helpers import respond_success, get_service, get_request_data

feedback_bp = Blueprint('feedback', __name__, url_prefix='/api/feedback')


@feedback_bp.route('', methods=['POST'])
@handle_errors
@require_auth
def submit_feedback(auth_payload):
    feedback = get_service('feedback').submit(auth_payload['user_id'], get_request_data())
    return respond_success({'message': 'Feedback submitted successfully', 'feedback': feedback}, status=201)


@feedback_bp.route('/public', methods=['GET'])
@handle_errors
@require_auth
def public_feedback(auth_payload):
    return respond_success({'feedback': get_service('feedback').list_public()})
