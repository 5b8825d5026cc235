import logging

from flask import Blueprint, current_app, send_from_directory
from pymongo.errors import PyMongoError

from alumni_server.utils.helpers import respond_error, respond_success

logger = logging.getLogger(__name__)

public_bp = Blueprint('public', __name__)


@public_bp.route('/health', methods=['GET'])
def health_check():
    """Simple health endpoint for load balancers and uptime checks.

    Returns HTTP 200 if the application is up and the database answers a
    lightweight query. Does not expose internal details in the body.
    """
    try:
        current_app.extensions['alumni_repositories'].db.list_collection_names()
        return respond_success({'status': 'ok', 'db': 'reachable'})
    except PyMongoError as e:
        logger.exception(f'Health check DB error: {e}')
        return respond_error({'status': 'degraded'}, status=503)


@public_bp.route('/uploads/<path:filename>', methods=['GET'])
def serve_upload(filename):
    """Serve stored media; send_from_directory rejects paths escaping UPLOAD_DIR."""
    return send_from_directory(current_app.config['UPLOAD_DIR'], filename)
