"""
Images Module
=============

Image proxy routes and the image resolver used by every template that shows a
project image.

Provides:
- GET /api/images/<path> and GET /api/<path> upstream proxy with fallback
- `resolve_image()` template global and the `project_image` macro

Usage:
    from renosite.modules.images import images_bp, images_catchall_bp

    app.register_blueprint(images_bp)
    app.register_blueprint(images_catchall_bp)  # register last, it matches /api/<path>
"""

from flask import Blueprint

images_bp = Blueprint(
    'images',
    __name__,
    template_folder='templates',
    static_folder='static',
    static_url_path='/images/static'
)

# Second proxy variant; a catch-all under /api, so register it after other /api blueprints
images_catchall_bp = Blueprint('images_catchall', __name__)

from . import routes

__all__ = ['images_bp', 'images_catchall_bp']
