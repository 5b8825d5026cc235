import secrets
import string

from bson import ObjectId
from bson.errors import InvalidId


def generate_code(length=6):
    """Numeric one-time code used for email verification and password reset."""
    return ''.join(secrets.choice(string.digits) for _ in range(length))


def parse_object_id(value):
    """Return an ObjectId for a wire id, or None when it is not a valid id."""
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        return None
