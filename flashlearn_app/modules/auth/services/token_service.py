"""
Token Service - bearer credentials for the JSON API.

Tokens are ``itsdangerous`` timed signatures over ``{"user_id": ...}`` and are
resolved to a ``User`` through Flask-Login's ``request_loader`` so routes can
keep using ``@login_required`` and ``current_user``.
"""
from flask import current_app, g
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from flashlearn_app.core.extensions import db
from flashlearn_app.core.error_handlers import AuthenticationError, error_response
from ..models import User

MISSING_TOKEN_MESSAGE = 'Access denied. No token provided.'


def get_serializer():
    return URLSafeTimedSerializer(
        current_app.config['SECRET_KEY'],
        salt=current_app.config.get('AUTH_TOKEN_SALT', 'flashlearn-auth-token'),
    )


class TokenService:
    """Issue and resolve bearer tokens."""

    @staticmethod
    def issue_token(user: User) -> str:
        return get_serializer().dumps({'user_id': user.user_id})

    @staticmethod
    def resolve_token(token: str) -> User:
        """
        Return the user a token belongs to.

        Raises:
            AuthenticationError with the reason (expired, invalid, user gone).
        """
        max_age = current_app.config.get('AUTH_TOKEN_MAX_AGE')
        try:
            data = get_serializer().loads(token, max_age=max_age)
        except SignatureExpired:
            raise AuthenticationError('Token expired')
        except BadSignature:
            raise AuthenticationError('Invalid token')

        user_id = data.get('user_id') if isinstance(data, dict) else None
        if user_id is None:
            raise AuthenticationError('Invalid token')

        user = db.session.get(User, user_id)
        if user is None:
            # Account deleted after the token was issued
            raise AuthenticationError('Token is no longer valid')
        return user

    @staticmethod
    def extract_bearer_token(header_value):
        if not header_value:
            return None
        scheme, _, token = header_value.partition(' ')
        if scheme.lower() != 'bearer' or not token.strip():
            return None
        return token.strip()


def load_user_from_request(request):
    """Flask-Login request loader: resolve the ``Authorization: Bearer`` header."""
    token = TokenService.extract_bearer_token(request.headers.get('Authorization'))
    if token is None:
        g.auth_error = MISSING_TOKEN_MESSAGE
        return None
    try:
        return TokenService.resolve_token(token)
    except AuthenticationError as e:
        current_app.logger.info(f"Rejected bearer token: {e.message}")
        g.auth_error = e.message
        return None


def unauthorized_response():
    """Flask-Login unauthorized handler: JSON 401 with the resolver's reason."""
    return error_response(g.get('auth_error', MISSING_TOKEN_MESSAGE), 'UNAUTHENTICATED', 401)
