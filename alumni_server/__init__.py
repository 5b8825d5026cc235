from .routes.auth import auth_bp
from .routes.user import profile_bp, user_api_bp
from .routes.posts import posts_bp
from .routes.messages import messages_bp
from .routes.feedback import feedback_bp
from .routes.gallery import gallery_bp
from .routes.public import public_bp

# Application factory is defined in server.py; the blueprints are
# re-exported here so that other code (tests, alternative runners) can
# build an app without importing server.py.

__all__ = [
    "auth_bp",
    "profile_bp", "user_api_bp",
    "posts_bp",
    "messages_bp",
    "feedback_bp",
    "gallery_bp",
    "public_bp",
]
