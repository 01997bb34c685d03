from functools import wraps
from flask_login import current_user, login_required
from flashlearn_app.core.error_handlers import AuthorizationError


def admin_required(f):
    """
    Route decorator for admin-only endpoints.
    Authenticates first (401 without a valid token), then checks the role (403).
    """
    @wraps(f)
    @login_required
    def decorated_function(*args, **kwargs):
        if not current_user.is_admin:
            raise AuthorizationError('Access denied. Admin privileges required.')
        return f(*args, **kwargs)
    return decorated_function
