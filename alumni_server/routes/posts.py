"""Community feed routes.

- GET    /api/posts                    - Feed, newest first
- POST   /api/posts                    - Create (content and/or one 'media' upload)
- GET    /api/posts/<id>               - Single post
- POST   /api/posts/<id>/reactions     - React (replaces any previous reaction)
- DELETE /api/posts/<id>/reactions     - Remove own reaction
- POST   /api/posts/<id>/comments      - Comment
"""
from flask import Blueprint, request, current_app

from alumni_server.utils.decorators import handle_errors, require_auth
from alumni_server.utils.helpers import respond_success, get_service, get_request_data
from alumni_server.utils.uploads import save_upload

posts_bp = Blueprint('posts', __name__, url_prefix='/api/posts')


@posts_bp.route('', methods=['GET'])
@handle_errors
@require_auth
def list_posts(auth_payload):
    return respond_success({'posts': get_service('post').list_posts()})


@posts_bp.route('', methods=['POST'])
@handle_errors
@require_auth
def create_post(auth_payload):
    data = get_request_data()
    media = None
    upload = request.files.get('media')
    if upload is not None and upload.filename:
        media = save_upload(upload, current_app.config['UPLOAD_DIR'], current_app.config['MAX_UPLOAD_SIZE_MB'])
    post = get_service('post').create_post(auth_payload['user_id'], content=data.get('content'), media=media)
    return respond_success({'post': post}, status=201)


@posts_bp.route('/<post_id>', methods=['GET'])
@handle_errors
@require_auth
def get_post(post_id, auth_payload):
    return respond_success({'post': get_service('post').get_post(post_id)})


@posts_bp.route('/<post_id>/reactions', methods=['POST'])
@handle_errors
@require_auth
def add_reaction(post_id, auth_payload):
    reaction = get_service('post').add_reaction(auth_payload['user_id'], post_id, get_request_data())
    return respond_success({'reaction': reaction}, status=201)


@posts_bp.route('/<post_id>/reactions', methods=['DELETE'])
@handle_errors
@require_auth
def remove_reaction(post_id, auth_payload):
    get_service('post').remove_reaction(auth_payload['user_id'], post_id)
    return respond_success({'message': 'Reaction removed'})


@posts_bp.route('/<post_id>/comments', methods=['POST'])
@handle_errors
@require_auth
def add_comment(post_id, auth_payload):
    comment = get_service('post').add_comment(auth_payload['user_id'], post_id, get_request_data())
    return respond_success({'comment': comment}, status=201)
