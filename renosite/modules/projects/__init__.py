"""
Projects Admin Module
=====================

Admin interface for the project portfolio. Project records live in the remote
backend; this module only talks to it.

Provides:
- Paginated project table with stats and recent projects
- Project creation, editing and deletion (HTML forms and JSON API)
- /api/admin/projects passthrough of the backend's project list
"""

from flask import Blueprint

projects_bp = Blueprint(
    'projects_admin',
    __name__,
    url_prefix='/admin/projects',
    template_folder='templates'
)

projects_admin_api_bp = Blueprint(
    'projects_admin_api',
    __name__,
    url_prefix='/api/admin/projects'
)

from . import routes
from .service import ProjectService, ProjectServiceError
from .forms import ProjectForm, AVAILABLE_TAGS
from .panel import ProjectPanel

__all__ = ['projects_bp', 'projects_admin_api_bp', 'ProjectService', 'ProjectServiceError',
           'ProjectForm', 'ProjectPanel', 'AVAILABLE_TAGS']
