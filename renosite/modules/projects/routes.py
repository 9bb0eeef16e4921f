"""
Projects Admin Routes
=====================

HTML panel (table, create/edit/delete forms) and JSON API for projects.
"""

from flask import render_template, request, redirect, url_for, flash, jsonify, Response, abort
from . import projects_bp, projects_admin_api_bp
from .forms import ProjectForm, AVAILABLE_TAGS
from .panel import ProjectPanel
from .service import ProjectService, ProjectServiceError
from ..auth.utils import admin_required, api_admin_required, get_token
from ...core.config import get_config_value
from ...core.logging_service import LoggingService


def get_project_service():
    """ProjectService bound to the backend and the signed-in admin's token"""
    return ProjectService(get_config_value('BACKEND_API_URL'),
                          token=get_token(),
                          timeout=get_config_value('BACKEND_TIMEOUT', 15))


def get_panel():
    return ProjectPanel(get_project_service(),
                        items_per_page=get_config_value('PROJECTS_PER_PAGE', 5))


def _form_from_request():
    """ProjectForm from the posted HTML form plus validation errors"""
    try:
        form = ProjectForm.from_request_data(request.form, multi=request.form.getlist)
    except ValueError as e:
        form = ProjectForm()
        for field in ProjectForm.FIELDS:
            form.change(field, request.form.get(field, ''))
        return form, [str(e)]
    return form, form.validate()


def _render_form(form, project_id=None, status=200):
    return render_template('projects/form.html',
                           form=form.to_dict(),
                           project_id=project_id,
                           available_tags=AVAILABLE_TAGS), status


# ===== HTML Routes =====

@projects_bp.route('/')
@admin_required
def panel():
    """Project table with stats and pagination"""
    project_panel = get_panel()
    project_panel.load()
    page = project_panel.clamp_page(request.args.get('page', 1))

    return render_template('projects/panel.html',
                           projects=project_panel.displayed(page),
                           page=page,
                           total_pages=project_panel.total_pages,
                           stats=project_panel.stats,
                           recent_projects=project_panel.recent(),
                           error=project_panel.error)


@projects_bp.route('/new', methods=['GET', 'POST'])
@admin_required
def create_project_page():
    """Create project form"""
    if request.method == 'GET':
        return _render_form(ProjectForm())

    form, errors = _form_from_request()
    if errors:
        for message in errors:
            flash(message, 'error')
        return _render_form(form, status=400)

    project_panel = get_panel()
    if project_panel.create(form):
        flash(project_panel.api_status['message'], 'success')
        return redirect(url_for('projects_admin.panel'))

    flash(project_panel.api_status['message'], 'error')
    return _render_form(form, status=502)


@projects_bp.route('/<project_id>/edit', methods=['GET', 'POST'])
@admin_required
def edit_project_page(project_id):
    """Edit project form"""
    if request.method == 'GET':
        try:
            project = get_project_service().fetch_project(project_id)
        except ProjectServiceError as e:
            flash(f"Could not load project: {e}", 'error')
            return redirect(url_for('projects_admin.panel'))
        if not project:
            abort(404)
        return _render_form(ProjectForm.from_project(project), project_id=project_id)

    form, errors = _form_from_request()
    if errors:
        for message in errors:
            flash(message, 'error')
        return _render_form(form, project_id=project_id, status=400)

    project_panel = get_panel()
    if project_panel.update(project_id, form):
        flash(project_panel.api_status['message'], 'success')
        return redirect(url_for('projects_admin.panel'))

    flash(project_panel.api_status['message'], 'error')
    return _render_form(form, project_id=project_id, status=502)


@projects_bp.route('/<project_id>/delete', methods=['POST'])
@admin_required
def delete_project_page(project_id):
    """Delete project (confirmation happens client-side)"""
    project_panel = get_panel()
    success = project_panel.delete(project_id)
    flash(project_panel.api_status['message'], 'success' if success else 'error')
    return redirect(url_for('projects_admin.panel'))


# ===== JSON API =====

@projects_bp.route('/api/projects', methods=['GET'])
@api_admin_required
def get_projects():
    """Get all projects"""
    try:
        return jsonify(get_project_service().fetch_projects())
    except ProjectServiceError as e:
        return jsonify({'error': str(e)}), 502


@projects_bp.route('/api/projects', methods=['POST'])
@api_admin_required
def create_project():
    """Create new project"""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'error': 'JSON body required'}), 400

    try:
        form = ProjectForm.from_request_data(data)
    except ValueError as e:
        return jsonify({'error': str(e)}), 400

    errors = form.validate()
    if errors:
        return jsonify({'error': ', '.join(errors)}), 400

    project_panel = get_panel()
    if project_panel.create(form):
        LoggingService.log_user_action('projects', f"created project {form.title!r}")
        return jsonify({'success': True, 'message': project_panel.api_status['message']}), 201
    return jsonify({'error': project_panel.api_status['message']}), 502


@projects_bp.route('/api/projects/<project_id>', methods=['PUT'])
@api_admin_required
def update_project(project_id):
    """Update existing project"""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'error': 'JSON body required'}), 400

    try:
        form = ProjectForm.from_request_data(data)
    except ValueError as e:
        return jsonify({'error': str(e)}), 400

    errors = form.validate()
    if errors:
        return jsonify({'error': ', '.join(errors)}), 400

    project_panel = get_panel()
    if project_panel.update(project_id, form):
        LoggingService.log_user_action('projects', f"updated project {project_id}")
        return jsonify({'success': True, 'message': project_panel.api_status['message']})
    return jsonify({'error': project_panel.api_status['message']}), 502


@projects_bp.route('/api/projects/<project_id>', methods=['DELETE'])
@api_admin_required
def delete_project(project_id):
    """Delete project"""
    project_panel = get_panel()
    if project_panel.delete(project_id):
        LoggingService.log_user_action('projects', f"deleted project {project_id}")
        return jsonify({'success': True, 'message': project_panel.api_status['message']})
    return jsonify({'error': project_panel.api_status['message']}), 502


@projects_admin_api_bp.route('', methods=['GET'])
@api_admin_required
def admin_projects_passthrough():
    """Backend project list fetched server-side"""
    try:
        data = get_project_service().fetch_admin_projects()
    except ProjectServiceError as e:
        if e.status_code is not None:
            return Response(f"HTTP error! Status: {e.status_code}", status=500, mimetype='text/plain')
        LoggingService.error('projects', f"Error fetching projects: {e}")
        return jsonify({'error': 'Failed to fetch projects'}), 500
    return jsonify(data), 200
