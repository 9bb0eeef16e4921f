"""
Ops Module
==========

Public /health endpoint for uptime monitors (no auth) and the admin error feed
read from app_logs.

Usage:
    from renosite.modules.ops import ops_health_bp, ops_admin_bp

    app.register_blueprint(ops_health_bp)  # Registers at /health
    app.register_blueprint(ops_admin_bp)   # Registers at /admin/ops
"""

from flask import Blueprint

# Public health endpoint (no auth, for uptime monitors)
ops_health_bp = Blueprint(
    'ops_health',
    __name__,
    url_prefix='/health'
)

# Admin ops endpoints (session auth)
ops_admin_bp = Blueprint(
    'ops_admin',
    __name__,
    url_prefix='/admin/ops'
)

from . import routes

__all__ = ['ops_health_bp', 'ops_admin_bp']
