"""
Auth Services
=============
- AuthService: accounts, credentials, verification, password reset
- TokenService: bearer token issue/resolve
"""

from .auth_service import AuthService
from .token_service import TokenService

__all__ = ['AuthService', 'TokenService']
