"""Authentication service - registration, verification, login and password reset.

Codes are numeric one-time values stored on the user document. Access
tokens are issued by AuthSecurity and carry {user_id, email, type}.
"""
import logging
from typing import Dict, Any

from alumni_server.dto.user_dto import UserDTO
from alumni_server.exception import ValidationError, UnauthorizedError, NotFoundError
from alumni_server.security.authentication import AuthSecurity
from alumni_server.utils.generator import generate_code
from alumni_server.utils.security import hash_password, verify_password
from alumni_server.utils.time_utils import utc_now, minutes_from_now
from alumni_server.utils.validation import (
    validate_register, validate_login, validate_verification,
    validate_email_only, validate_reset_password
)

logger = logging.getLogger(__name__)


def _require_valid(result, message='Invalid input'):
    ok, errors = result
    if not ok:
        raise ValidationError(message, errors=errors)


def _clean(value):
    return str(value).strip() if value is not None else None


class AuthService:

    def __init__(self, user_repo, email_service, code_length=6, reset_code_expire_minutes=60):
        self.users = user_repo
        self.email = email_service
        self.code_length = code_length
        self.reset_code_expire_minutes = reset_code_expire_minutes

    # =========================================================================
    # Registration
    # =========================================================================

    def register(self, data: Dict[str, Any]) -> Dict[str, Any]:
        _require_valid(validate_register(data))
        email = _clean(data['email']).lower()
        username = _clean(data['username'])

        if self.users.get_by_email(email):
            raise ValidationError('User already exists with this email')
        if self.users.get_by_username(username):
            raise ValidationError('Username already taken')

        code = generate_code(self.code_length)
        doc = {
            'name': _clean(data['name']),
            'username': username,
            'email': email,
            'password': hash_password(data['password']),
            'class_of': _clean(data['classOf']),
            'clan': _clean(data['clan']),
            'profile_picture': None,
            'cover_photo': None,
            'bio': None,
            'favorite_teacher': None,
            'hobby': None,
            'is_verified': False,
            'verification_code': code,
            'reset_code': None,
            'reset_code_expires': None,
            'created_at': utc_now(),
        }
        user_id = self.users.create(doc)
        logger.info("Registered user %s (%s)", user_id, username)
        self.email.send_verification_email(email, code, doc['name'])
        return {'userId': str(user_id)}

    def verify_email(self, data: Dict[str, Any]) -> Dict[str, Any]:
        _require_valid(validate_verification(data, self.code_length))
        email = _clean(data['email']).lower()
        if not self.users.mark_verified(email, _clean(data['code'])):
            logger.warning("Verification failed for %s", email)
            raise ValidationError('Invalid verification code')
        user = self.users.get_by_email(email)
        if not user:
            raise NotFoundError('User not found')
        logger.info("Verified user %s", user['_id'])
        return {
            'token': AuthSecurity.create_access_token(user),
            'user': UserDTO.from_doc(user).to_profile(),
        }

    def resend_code(self, data: Dict[str, Any]) -> None:
        _require_valid(validate_email_only(data))
        email = _clean(data['email']).lower()
        user = self.users.get_by_email(email)
        if not user:
            raise NotFoundError('User not found')
        if user.get('is_verified'):
            raise ValidationError('Email is already verified')
        code = generate_code(self.code_length)
        self.users.update({'_id': user['_id']}, {'verification_code': code})
        self.email.send_verification_email(email, code, user.get('name'))

    # =========================================================================
    # Login
    # =========================================================================

    def login(self, data: Dict[str, Any]) -> Dict[str, Any]:
        _require_valid(validate_login(data))
        identifier = _clean(data['identifier'])
        user = self.users.get_by_identifier(identifier)
        if user is None and '@' in identifier:
            user = self.users.get_by_identifier(identifier.lower())
        if not user:
            logger.warning("Login failed: unknown identifier")
            raise UnauthorizedError('Invalid credentials')
        if not user.get('is_verified'):
            raise UnauthorizedError('Please verify your email first')
        if not verify_password(data['password'], user.get('password')):
            logger.warning("Login failed: bad password for user %s", user['_id'])
            raise UnauthorizedError('Invalid credentials')
        logger.info("User %s logged in", user['_id'])
        return {
            'token': AuthSecurity.create_access_token(user),
            'user': UserDTO.from_doc(user).to_profile(),
        }

    # =========================================================================
    # Password Reset
    # =========================================================================

    def forgot_password(self, data: Dict[str, Any]) -> None:
        _require_valid(validate_email_only(data))
        email = _clean(data['email']).lower()
        user = self.users.get_by_email(email)
        if not user:
            raise NotFoundError('User not found with this email')
        code = generate_code(self.code_length)
        self.users.set_reset_code(user['_id'], code, minutes_from_now(self.reset_code_expire_minutes))
        self.email.send_password_reset_email(email, code, user.get('name'), self.reset_code_expire_minutes)

    def reset_password(self, data: Dict[str, Any]) -> None:
        _require_valid(validate_reset_password(data, self.code_length))
        email = _clean(data['email']).lower()
        if not self.users.reset_password(email, _clean(data['code']), hash_password(data['newPassword'])):
            logger.warning("Password reset rejected for %s", email)
            raise ValidationError('Invalid or expired reset code')
        logger.info("Password reset for %s", email)
