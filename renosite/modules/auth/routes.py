"""
Admin Auth Routes
=================

Login/logout for the admin panel and the guard protecting /admin and /api/admin.
"""

from flask import render_template, request, redirect, url_for, flash, session, jsonify
from . import auth_bp
from .service import AuthService, AuthError
from .utils import is_authenticated, is_protected_path, safe_next_url
from ...core.config import get_config_value
from ...core.logging_service import LoggingService


def get_auth_service():
    return AuthService(get_config_value('BACKEND_API_URL'),
                       timeout=get_config_value('BACKEND_TIMEOUT', 15))


@auth_bp.before_app_request
def require_admin_session():
    """Guard every admin page and admin API path"""
    path = request.path
    if not is_protected_path(path) or is_authenticated():
        return None

    if path.startswith('/api/admin'):
        return jsonify({'error': 'Authentication required'}), 401
    return redirect(url_for('admin.login', next=request.full_path.rstrip('?')))


@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    """Admin login route"""
    next_page = safe_next_url(request.args.get('next') or request.args.get('callbackUrl'))

    if request.method == 'POST':
        username = request.form.get('username', '').strip()
        password = request.form.get('password', '')

        if not username or not password:
            flash('Please enter both username and password', 'error')
            return render_template('auth/login.html', username=username), 400

        try:
            data = get_auth_service().login(username, password)
        except AuthError as e:
            LoggingService.log_security_event('Failed admin login', {'username': username, 'error': str(e)})
            flash(str(e) or 'Failed to login. Please check your credentials.', 'error')
            return render_template('auth/login.html', username=username), 401

        session['admin_token'] = data['token']
        session['admin_user'] = data.get('user') or {'username': username}
        LoggingService.log_user_action('auth', 'admin login', user_id=username)
        flash('Login successful', 'success')
        return redirect(next_page or url_for('projects_admin.panel'))

    if is_authenticated():
        return redirect(next_page or url_for('projects_admin.panel'))
    return render_template('auth/login.html', username='')


@auth_bp.route('/logout')
def logout():
    """Admin logout route"""
    user = session.get('admin_user') or {}
    session.pop('admin_token', None)
    session.pop('admin_user', None)
    LoggingService.log_user_action('auth', 'admin logout', user_id=user.get('username'))
    flash('You have been logged out', 'info')
    return redirect(url_for('admin.login'))


@auth_bp.route('/')
def dashboard():
    """Admin home goes straight to the project panel"""
    return redirect(url_for('projects_admin.panel'))
