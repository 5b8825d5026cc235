"""Direct messaging REST API routes.

REST persists and reads; the realtime channel only pushes.

REST API Endpoints:
- GET  /api/messages/<otherUserId>       - Message history with a user, oldest first
- POST /api/messages                     - Send a message (JSON, or multipart with a 'media' file)
- POST /api/messages/<otherUserId>/read  - Mark that user's messages to me as read
- GET  /api/conversations                - Inbox, one entry per counterpart

Socket.IO Events:
- join_conversation / leave_conversation / typing (client -> server)
- new_message / user_typing / messages_read (server -> client)
"""
import logging

from flask import Blueprint, request, current_app

from alumni_server.utils.decorators import handle_errors, require_auth
from alumni_server.utils.helpers import respond_success, get_service, get_request_data
from alumni_server.utils.uploads import save_upload

logger = logging.getLogger(__name__)

# Blueprint
messages_bp = Blueprint('messages', __name__, url_prefix='/api')


def _media_from_request():
    """Message media only ever comes from an uploaded 'media' file."""
    upload = request.files.get('media')
    if upload is None or not upload.filename:
        return None
    return save_upload(upload, current_app.config['UPLOAD_DIR'], current_app.config['MAX_UPLOAD_SIZE_MB'])


@messages_bp.route('/messages/<other_user_id>', methods=['GET'])
@handle_errors
@require_auth
def get_messages(other_user_id, auth_payload):
    messages = get_service('messaging').messages_between(auth_payload['user_id'], other_user_id)
    return respond_success({'messages': messages})


@messages_bp.route('/messages', methods=['POST'])
@handle_errors
@require_auth
def send_message(auth_payload):
    data = get_request_data()
    message = get_service('messaging').send_message(
        auth_payload['user_id'],
        data.get('receiverId'),
        content=data.get('content'),
        media=_media_from_request(),
    )
    return respond_success({'message': message.to_dict()}, status=201)


@messages_bp.route('/messages/<other_user_id>/read', methods=['POST'])
@handle_errors
@require_auth
def mark_messages_read(other_user_id, auth_payload):
    count = get_service('messaging').mark_read(auth_payload['user_id'], other_user_id)
    return respond_success({'count': count})


@messages_bp.route('/conversations', methods=['GET'])
@handle_errors
@require_auth
def get_conversations(auth_payload):
    return respond_success({'conversations': get_service('messaging').conversations(auth_payload['user_id'])})
