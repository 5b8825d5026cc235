"""Route decorators for common patterns like error handling and authentication.

This module provides reusable decorators to reduce boilerplate in route handlers.
"""
import functools
import logging
from typing import Callable

from flask import request

from alumni_server.exception import UnauthorizedError, ValidationError, NotFoundError, StorageError
from alumni_server.utils.helpers import respond_error
from alumni_server.security.authentication import get_auth_payload

logger = logging.getLogger(__name__)


def handle_errors(func: Callable) -> Callable:
    """Decorator to turn domain exceptions into JSON error responses.

    Catches:
    - UnauthorizedError -> 401/403
    - ValidationError -> 400
    - NotFoundError -> 404
    - StorageError and anything unexpected -> 500

    Usage:
        @bp.route('/example')
        @handle_errors
        def example_route():
            ...
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except UnauthorizedError as e:
            logger.warning("Unauthorized: %s", e)
            return respond_error(str(e), status=e.status)
        except ValidationError as e:
            logger.warning("Validation error: %s", e)
            if e.errors:
                return respond_error(e.errors, status=400)
            return respond_error(str(e), status=400)
        except NotFoundError as e:
            logger.info("Not found: %s", e)
            return respond_error(str(e), status=404)
        except StorageError:
            logger.exception("Storage failure in %s", func.__name__)
            return respond_error('Storage error', status=500)
        except Exception:
            logger.exception("Unexpected error in %s", func.__name__)
            return respond_error('Server error', status=500)
    return wrapper


def require_auth(func: Callable) -> Callable:
    """Decorator to require authentication and inject payload into handler.

    The decorated function receives `auth_payload` as a keyword argument.

    Usage:
        @bp.route('/protected')
        @require_auth
        def get_item(auth_payload):
            user_id = auth_payload.get('user_id')
            ...
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        payload = get_auth_payload(request)
        kwargs['auth_payload'] = payload
        return func(*args, **kwargs)
    return wrapper
