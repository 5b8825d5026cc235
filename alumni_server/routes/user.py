"""Profile and alumni directory routes.

- GET  /api/profile/me        - Own profile
- POST /api/profile/update    - Update text fields, optional profilePicture / coverPhoto uploads
- GET  /api/users/search      - Directory search (?q=&classOf=&clan=)
- GET  /api/users/<username>  - Public profile of a verified user
"""
from flask import Blueprint, request

from alumni_server.utils.decorators import handle_errors, require_auth
from alumni_server.utils.helpers import respond_success, get_service, get_request_data

profile_bp = Blueprint('profile', __name__, url_prefix='/api/profile')
user_api_bp = Blueprint('user_api', __name__, url_prefix='/api/users')


@profile_bp.route('/me', methods=['GET'])
@handle_errors
@require_auth
def get_profile(auth_payload):
    return respond_success({'user': get_service('user').get_profile(auth_payload['user_id'])})


@profile_bp.route('/update', methods=['POST'])
@handle_errors
@require_auth
def update_profile(auth_payload):
    result = get_service('user').update_profile(auth_payload['user_id'], get_request_data(), request.files)
    message = 'Profile updated successfully' if result['updated'] else 'No changes to update'
    return respond_success({'message': message, 'user': result['user']})


@user_api_bp.route('/search', methods=['GET'])
@handle_errors
@require_auth
def search_users(auth_payload):
    users = get_service('user').search(
        q=request.args.get('q'),
        class_of=request.args.get('classOf'),
        clan=request.args.get('clan'),
    )
    return respond_success({'users': users})


@user_api_bp.route('/<username>', methods=['GET'])
@handle_errors
@require_auth
def get_user(username, auth_payload):
    return respond_success({'user': get_service('user').get_by_username(username)})
