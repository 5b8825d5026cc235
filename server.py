import argparse
import logging
import os

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO

# Register canonical blueprints from route modules
from alumni_server.routes.auth import auth_bp
from alumni_server.routes.user import profile_bp, user_api_bp
from alumni_server.routes.posts import posts_bp
from alumni_server.routes.messages import messages_bp
from alumni_server.routes.feedback import feedback_bp
from alumni_server.routes.gallery import gallery_bp
from alumni_server.routes.public import public_bp
from alumni_server.messaging.service import MessagingService
from alumni_server.repository.mongo_helper import MongoRepositorySingleton, Repositories
from alumni_server.security.authentication import AuthSecurity
from alumni_server.services.auth_service import AuthService
from alumni_server.services.email_service import EmailService
from alumni_server.services.feedback_service import FeedbackService
from alumni_server.services.gallery_service import GalleryService
from alumni_server.services.post_service import PostService
from alumni_server.services.user_service import UserService
from alumni_server.utils.helpers import respond_error
from alumni_server.websocket.hub import RealtimeNotifier
from config import config

logger = logging.getLogger(__name__)


def configure_auth_from_config():
    """Configure AuthSecurity from config.

    JWT_SECRET is required outside development; development falls back
    to a fixed secret (see config.settings).
    """
    secret = config.JWT_SECRET
    if not secret:
        raise RuntimeError('JWT_SECRET environment variable is required')
    AuthSecurity.configure(
        secret_key=secret,
        algorithm=config.JWT_ALGORITHM,
        access_token_expire_minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES,
    )


def _build_services(repositories, notifier, app):
    upload_dir = app.config['UPLOAD_DIR']
    max_mb = app.config['MAX_UPLOAD_SIZE_MB']
    email = EmailService(api_key=config.SENDGRID_API_KEY, from_email=config.EMAIL_FROM)
    return {
        'email': email,
        'auth': AuthService(
            repositories.user,
            email,
            code_length=config.VERIFICATION_CODE_LENGTH,
            reset_code_expire_minutes=config.RESET_CODE_EXPIRE_MINUTES,
        ),
        'user': UserService(repositories.user, upload_dir, max_mb),
        'messaging': MessagingService(repositories, notifier),
        'post': PostService(repositories.post, repositories.user),
        'feedback': FeedbackService(repositories.feedback, repositories.user),
        'gallery': GalleryService(repositories.gallery, repositories.user, upload_dir, max_mb),
    }


def create_app(db=None, **overrides) -> Flask:
    """Application factory used by server.py and tests.

    db: a pymongo-compatible database handle; defaults to the configured
    MongoDB. overrides are applied to app.config (e.g. UPLOAD_DIR).
    Each app gets its own Socket.IO server and realtime notifier.
    """
    app = Flask(__name__)
    app.config['UPLOAD_DIR'] = config.UPLOAD_DIR
    app.config['MAX_UPLOAD_SIZE_MB'] = config.MAX_UPLOAD_SIZE_MB
    app.config.update(overrides)
    app.config['UPLOAD_DIR'] = os.path.abspath(app.config['UPLOAD_DIR'])
    # One extra MB leaves room for multipart framing so oversized files reach validation
    app.config['MAX_CONTENT_LENGTH'] = (app.config['MAX_UPLOAD_SIZE_MB'] + 1) * 1024 * 1024

    configure_auth_from_config()
    CORS(app, origins=config.CORS_ORIGINS_LIST)

    repositories = Repositories(db) if db is not None else MongoRepositorySingleton.get_instance()
    cors_origins = '*' if config.CORS_ORIGINS == '*' else config.CORS_ORIGINS_LIST
    socketio = SocketIO(app, async_mode='threading', path=config.SOCKETIO_PATH, cors_allowed_origins=cors_origins)
    notifier = RealtimeNotifier().init_app(app, socketio)

    app.extensions['alumni_repositories'] = repositories
    app.extensions['alumni_notifier'] = notifier
    app.extensions['alumni_services'] = _build_services(repositories, notifier, app)

    app.register_blueprint(auth_bp)
    app.register_blueprint(profile_bp)
    app.register_blueprint(user_api_bp)
    app.register_blueprint(posts_bp)
    app.register_blueprint(messages_bp)
    app.register_blueprint(feedback_bp)
    app.register_blueprint(gallery_bp)
    app.register_blueprint(public_bp)

    @app.errorhandler(413)
    def request_too_large(e):
        return respond_error(f"File size must be less than {app.config['MAX_UPLOAD_SIZE_MB']}MB", status=413)

    @app.errorhandler(404)
    def not_found(e):
        return respond_error('Not found', status=404)

    return app


def parse_args():
    """Parse simple CLI arguments for running the server."""
    parser = argparse.ArgumentParser(description='Run the alumni network backend server')
    parser.add_argument('--port', type=int, default=config.PORT, help='TCP port to bind (default: 5000 or PORT env)')
    return parser.parse_args()


if __name__ == "__main__":
    args = parse_args()
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT, datefmt=config.LOG_DATE_FORMAT)
    config.validate_required()
    app = create_app()
    logger.info('Starting server with Socket.IO on port %s', args.port)
    app.extensions['socketio'].run(app, host="0.0.0.0", port=args.port, debug=config.DEBUG,
                                   allow_unsafe_werkzeug=True)
