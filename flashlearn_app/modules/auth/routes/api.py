# File: flashlearn_app/modules/auth/routes/api.py
from flask import current_app
from flask_login import current_user, login_required
from flashlearn_app.core.error_handlers import success_response
from flashlearn_app.utils.validation import parse_payload
from .. import auth_bp as blueprint
from ..decorators import admin_required
from ..models import User
from ..schemas import (
    ChangePasswordRequest,
    EmailRequest,
    LoginRequest,
    ProfileUpdateRequest,
    RegisterRequest,
    ResetPasswordRequest,
)
from ..services.auth_service import AuthService

# ==================== PUBLIC ROUTES ====================

@blueprint.route('/register', methods=['POST'])
def register():
    data = parse_payload(RegisterRequest)
    user, token = AuthService.register_user(data)
    return success_response(
        {'user': user.to_dict(), 'token': token},
        message='User registered successfully. Please check your email for verification.',
        status_code=201,
    )


@blueprint.route('/login', methods=['POST'])
def login():
    data = parse_payload(LoginRequest)
    user, token = AuthService.login(data.email, data.password)
    return success_response({'user': user.to_dict(), 'token': token}, message='Login successful')


@blueprint.route('/verify/<string:token>', methods=['GET'])
def verify_email(token):
    AuthService.verify_email(token)
    return success_response(message='Email verified successfully')


@blueprint.route('/resend-verification', methods=['POST'])
def resend_verification():
    data = parse_payload(EmailRequest)
    AuthService.resend_verification(data.email)
    return success_response(message='Verification email sent')


@blueprint.route('/request-password-reset', methods=['POST'])
def request_password_reset():
    data = parse_payload(EmailRequest)
    AuthService.request_password_reset(data.email)
    return success_response(message='If the email exists, a password reset link has been sent')


@blueprint.route('/reset-password', methods=['POST'])
def reset_password():
    data = parse_payload(ResetPasswordRequest)
    AuthService.reset_password(data.token, data.new_password)
    return success_response(message='Password reset successfully')

# ==================== PROTECTED ROUTES ====================

@blueprint.route('/profile', methods=['GET'])
@login_required
def get_profile():
    return success_response({'user': current_user.to_dict()})


@blueprint.route('/profile', methods=['PUT'])
@login_required
def update_profile():
    data = parse_payload(ProfileUpdateRequest)
    user = AuthService.update_profile(current_user, data)
    return success_response({'user': user.to_dict()}, message='Profile updated successfully')


@blueprint.route('/change-password', methods=['PUT'])
@login_required
def change_password():
    data = parse_payload(ChangePasswordRequest)
    AuthService.change_password(current_user, data)
    current_app.logger.info(f"Password changed for user {current_user.user_id}")
    return success_response(message='Password changed successfully')


@blueprint.route('/users', methods=['GET'])
@admin_required
def list_users():
    users = User.query.order_by(User.created_at.desc(), User.user_id.desc()).all()
    return success_response({'users': [u.to_dict() for u in users]})
