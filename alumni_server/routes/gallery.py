from flask import Blueprint, request

from alumni_server.utils.decorators import handle_errors, require_auth
from alumni_server.utils.helpers import respond_success, get_service, get_request_data

gallery_bp = Blueprint('gallery', __name__, url_prefix='/api/gallery')


@gallery_bp.route('', methods=['GET'])
@handle_errors
@require_auth
def list_gallery(auth_payload):
    return respond_success({'items': get_service('gallery').list_items()})


@gallery_bp.route('/upload', methods=['POST'])
@handle_errors
@require_auth
def upload_gallery_item(auth_payload):
    item = get_service('gallery').upload(
        auth_payload['user_id'],
        request.files.get('file'),
        title=request.form.get('title'),
        description=request.form.get('description'),
    )
    return respond_success({'item': item}, status=201)


@gallery_bp.route('/react', methods=['POST'])
@handle_errors
@require_auth
def react_to_gallery_item(auth_payload):
    item = get_service('gallery').react(auth_payload['user_id'], get_request_data())
    return respond_success({'item': item})
