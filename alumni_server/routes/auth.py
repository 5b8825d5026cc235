import logging

from flask import Blueprint

from alumni_server.utils.decorators import handle_errors
from alumni_server.utils.helpers import respond_success, get_service, get_request_data

logger = logging.getLogger(__name__)

# Blueprint for auth routes
auth_bp = Blueprint('auth', __name__, url_prefix='/api/auth')


# Authentication Endpoints
@auth_bp.route('/register', methods=['POST'])
@handle_errors
def register():
    logger.info("Register endpoint called")
    result = get_service('auth').register(get_request_data())
    return respond_success({
        'message': 'User registered successfully. Please check your email for verification code.',
        **result,
    }, status=201)


@auth_bp.route('/verify-email', methods=['POST'])
@handle_errors
def verify_email():
    result = get_service('auth').verify_email(get_request_data())
    return respond_success({'message': 'Email verified successfully', **result})


@auth_bp.route('/resend-code', methods=['POST'])
@handle_errors
def resend_code():
    get_service('auth').resend_code(get_request_data())
    return respond_success({'message': 'Verification code sent successfully'})


@auth_bp.route('/login', methods=['POST'])
@handle_errors
def login():
    logger.info("Login endpoint called")
    result = get_service('auth').login(get_request_data())
    return respond_success({'message': 'Login successful', **result})


@auth_bp.route('/forgot-password', methods=['POST'])
@handle_errors
def forgot_password():
    get_service('auth').forgot_password(get_request_data())
    return respond_success({'message': 'Password reset code sent to your email'})


@auth_bp.route('/reset-password', methods=['POST'])
@handle_errors
def reset_password():
    get_service('auth').reset_password(get_request_data())
    return respond_success({'message': 'Password reset successfully'})
