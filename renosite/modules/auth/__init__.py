"""
Auth Module
===========

Admin sign-in for the project panel. Credentials are checked by the remote
backend (POST /api/auth/login); the returned token is kept in the Flask session
and sent as a Bearer token on every backend write.

Provides:
- /admin/login and /admin/logout
- `admin_required` / `api_admin_required` decorators
- A request guard for everything under /admin and /api/admin
"""

from flask import Blueprint

auth_bp = Blueprint(
    'admin',
    __name__,
    url_prefix='/admin',
    template_folder='templates'
)

from . import routes
from .service import AuthService, AuthError
from .utils import admin_required, api_admin_required, is_authenticated

__all__ = ['auth_bp', 'AuthService', 'AuthError', 'admin_required',
           'api_admin_required', 'is_authenticated']
