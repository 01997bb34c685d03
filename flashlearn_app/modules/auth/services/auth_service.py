"""
Auth Service - Core authentication logic.

Handles registration, login, email verification, password reset and
profile updates. Decouples DB logic from Routes.
"""
from flask import current_app
from sqlalchemy import or_

from flashlearn_app.core.extensions import db
from flashlearn_app.core.error_handlers import AuthenticationError, ConflictError, NotFoundError
from flashlearn_app.core.signals import user_registered
from flashlearn_app.utils.time_utils import utcnow
from ..models import User
from ..schemas import ChangePasswordRequest, ProfileUpdateRequest, RegisterRequest
from .token_service import TokenService


class AuthService:
    """Service for Authentication related operations."""

    @staticmethod
    def register_user(data: RegisterRequest):
        """
        Register a new user, emit ``user_registered`` and return ``(user, token)``.

        Raises:
            ConflictError if the email or username is taken.
        """
        existing = User.query.filter(
            or_(User.email == data.email, User.username == data.username)
        ).first()
        if existing:
            raise ConflictError(
                'Email already registered' if existing.email == data.email else 'Username already taken'
            )

        user = User(
            username=data.username,
            email=data.email,
            user_role=User.ROLE_USER,
            first_name=data.first_name,
            last_name=data.last_name,
        )
        user.set_password(data.password)
        verification_token = user.generate_email_verification_token()
        db.session.add(user)
        db.session.commit()

        current_app.logger.info(f"User registered: {user.username} ({user.user_id})")
        # No mail transport; the token is logged for development
        current_app.logger.info(f"Email verification token for {user.email}: {verification_token}")

        try:
            user_registered.send(current_app._get_current_object(), user=user)
        except Exception as e:
            current_app.logger.error(f"Error emitting user_registered signal: {e}")

        return user, TokenService.issue_token(user)

    @staticmethod
    def authenticate_user(email, password):
        """
        Verify credentials.

        Returns:
            User object if valid, None otherwise.
        """
        user = User.query.filter_by(email=email).first()
        if user and user.check_password(password):
            return user
        return None

    @staticmethod
    def login(email, password):
        """Return ``(user, token)``; unknown email and wrong password look the same."""
        user = AuthService.authenticate_user(email, password)
        if user is None:
            raise AuthenticationError('Invalid email or password')

        if current_app.config.get('AUTH_REQUIRE_EMAIL_VERIFICATION') and not user.is_email_verified:
            raise AuthenticationError(
                'Please verify your email before logging in',
                details={'needs_verification': True},
            )

        user.last_login_at = utcnow()
        db.session.commit()
        return user, TokenService.issue_token(user)

    @staticmethod
    def verify_email(token):
        user = User.query.filter_by(email_verification_token=token).first()
        if user is None or not user.email_verification_valid():
            raise ConflictError('Invalid or expired verification token')

        user.is_email_verified = True
        user.email_verification_token = None
        user.email_verification_expires = None
        db.session.commit()
        return user

    @staticmethod
    def resend_verification(email):
        user = User.query.filter_by(email=email).first()
        if user is None:
            raise NotFoundError('User not found', resource='user')
        if user.is_email_verified:
            raise ConflictError('Email already verified')

        token = user.generate_email_verification_token()
        db.session.commit()
        current_app.logger.info(f"Resend verification token for {email}: {token}")
        return token

    @staticmethod
    def request_password_reset(email):
        """Issue a reset token if the account exists. Callers answer identically either way."""
        user = User.query.filter_by(email=email).first()
        if user is None:
            return None

        token = user.generate_password_reset_token()
        db.session.commit()
        current_app.logger.info(f"Password reset token for {email}: {token}")
        return token

    @staticmethod
    def reset_password(token, new_password):
        user = User.query.filter_by(password_reset_token=token).first()
        if user is None or not user.password_reset_valid():
            raise ConflictError('Invalid or expired reset token')

        user.set_password(new_password)
        user.password_reset_token = None
        user.password_reset_expires = None
        db.session.commit()
        return user

    @staticmethod
    def change_password(user: User, data: ChangePasswordRequest):
        if not user.check_password(data.current_password):
            raise ConflictError('Current password is incorrect')
        user.set_password(data.new_password)
        db.session.commit()
        return user

    @staticmethod
    def update_profile(user: User, data: ProfileUpdateRequest):
        for field in ('first_name', 'last_name', 'bio'):
            value = getattr(data, field)
            if value is not None:
                setattr(user, field, value)
        db.session.commit()
        return user
