from functools import wraps
from flask import redirect, url_for, request, session, jsonify

# Paths that require an admin session
PROTECTED_PREFIXES = ('/admin', '/api/admin')
PUBLIC_ADMIN_PATHS = ('/admin/login',)


def is_authenticated():
    return bool(session.get('admin_token'))


def get_token():
    return session.get('admin_token')


def get_user():
    return session.get('admin_user')


def is_protected_path(path):
    if path in PUBLIC_ADMIN_PATHS:
        return False
    return any(path == prefix or path.startswith(prefix + '/') for prefix in PROTECTED_PREFIXES)


def safe_next_url(target):
    """Only allow same-site relative redirects"""
    if target and target.startswith('/') and not target.startswith('//'):
        return target
    return None


def admin_required(f):
    """Decorator to require admin login"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not is_authenticated():
            return redirect(url_for('admin.login', next=request.path))
        return f(*args, **kwargs)
    return decorated_function


def api_admin_required(f):
    """Decorator for JSON endpoints: 401 instead of a redirect"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not is_authenticated():
            return jsonify({'error': 'Authentication required'}), 401
        return f(*args, **kwargs)
    return decorated_function
