from datetime import timedelta

from jose import jwt, JWTError, ExpiredSignatureError

from alumni_server.exception.UnauthorizedError import UnauthorizedError
from alumni_server.utils.time_utils import utc_now

MALFORMED_TOKEN = "Malformed or missing token. Please provide a valid JWT token in the Authorization header."
EXPIRED_TOKEN = "Token expired. Please login again or refresh your session."
INVALID_SIGNATURE = "Invalid token signature. Please login again or contact support if the problem persists."


class AuthSecurity:
    secret_key = None
    algorithm = 'HS256'
    # Default: access token valid for 7 days
    access_token_expire_minutes = 7 * 24 * 60

    @classmethod
    def configure(cls, secret_key, algorithm='HS256', access_token_expire_minutes=7*24*60):
        cls.secret_key = secret_key
        cls.algorithm = algorithm
        cls.access_token_expire_minutes = access_token_expire_minutes

    @classmethod
    def encode_token(cls, data: dict, expires_delta: timedelta = None) -> str:
        if not cls.secret_key:
            raise RuntimeError('AuthSecurity is not configured with a secret key')
        to_encode = data.copy()
        expire = utc_now() + (expires_delta or timedelta(minutes=cls.access_token_expire_minutes))
        to_encode.update({"exp": expire})
        return jwt.encode(to_encode, cls.secret_key, algorithm=cls.algorithm)

    @classmethod
    def create_access_token(cls, user: dict) -> str:
        """Issue the access token carried by REST calls and the realtime handshake."""
        return cls.encode_token({
            'user_id': str(user['_id']),
            'email': user.get('email'),
            'type': 'access',
        })

    @classmethod
    def decode_token(cls, token: str) -> dict:
        # A well-formed JWT has exactly 2 dots
        if not token or token.count('.') != 2:
            raise UnauthorizedError(MALFORMED_TOKEN, status=403)
        try:
            payload = jwt.decode(token, cls.secret_key, algorithms=[cls.algorithm])
        except ExpiredSignatureError:
            raise UnauthorizedError(EXPIRED_TOKEN, status=403)
        except JWTError as e:
            msg = str(e)
            if 'Not enough segments' in msg or 'Invalid header string' in msg:
                raise UnauthorizedError(MALFORMED_TOKEN, status=403)
            if 'Signature verification failed' in msg:
                raise UnauthorizedError(INVALID_SIGNATURE, status=403)
            raise UnauthorizedError(f"Invalid token: {msg}. Please check your authentication and try again.", status=403)
        if payload.get('type') not in (None, 'access') or not payload.get('user_id'):
            raise UnauthorizedError("Invalid token type.", status=403)
        return payload


def extract_bearer_token(auth_header):
    if not auth_header or not auth_header.startswith('Bearer '):
        return None
    return auth_header.split(' ', 1)[1].strip() or None


def get_auth_payload(request):
    """
    Extracts and decodes the Bearer token from the Authorization header in the request.
    Raises UnauthorizedError if missing or invalid.
    Returns the decoded payload.
    """
    token = extract_bearer_token(request.headers.get('Authorization'))
    if not token:
        raise UnauthorizedError('Access token required')
    return AuthSecurity.decode_token(token)
