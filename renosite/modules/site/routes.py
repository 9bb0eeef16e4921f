"""
Site Routes
===========

Public pages and the public projects API.
"""

import os
from datetime import datetime

from flask import render_template, request, redirect, url_for, flash, jsonify, abort, send_from_directory

from . import site_bp
from .content import (
    HERO, SERVICES, ABOUT, CATEGORIES, SHOWCASE_PROJECTS, TESTIMONIALS, PARTNERS,
    decode_inquiry,
)
from ..images.resolver import image_references
from ..projects.forms import parse_date
from ..projects.service import ProjectService, ProjectServiceError
from ...core.config import get_config_value
from ...core.logging_service import LoggingService

CONTACT_FIELDS = ('name', 'email', 'phone', 'service', 'messageText')


def get_public_service():
    return ProjectService(get_config_value('BACKEND_API_URL'),
                          timeout=get_config_value('BACKEND_TIMEOUT', 15))


@site_bp.app_context_processor
def inject_site_context():
    phone = get_config_value('CONTACT_PHONE', '')
    return {
        'contact_info': {
            'address': get_config_value('CONTACT_ADDRESS', ''),
            'phone': phone,
            'phone_raw': ''.join(c for c in phone if c.isdigit()),
            'email': get_config_value('CONTACT_EMAIL', ''),
            'hours': get_config_value('CONTACT_HOURS', ''),
        },
        'current_year': datetime.now().year,
    }


@site_bp.app_template_filter('format_date')
def format_date(value):
    """Long US date ("January 5, 2024"), or TBD when unset"""
    try:
        parsed = parse_date(value)
    except ValueError:
        return str(value)
    if not parsed:
        return 'TBD'
    return f"{parsed:%B} {parsed.day}, {parsed.year}"


def portfolio_item(project):
    """Backend project -> portfolio card"""
    refs = image_references(project)
    tags = [str(t).lower() for t in project.get('tags') or []]
    completed = project.get('completed_at')
    try:
        completed_at = parse_date(completed)
    except ValueError:
        completed_at = None
    return {
        'id': project.get('id'),
        'title': project.get('title', ''),
        'description': project.get('description', ''),
        'image': refs[0] if refs else None,
        'category': tags[0] if tags else 'renovation',
        'categories': tags,
        'location': project.get('location') or '',
        'completed': str(completed_at.year) if completed_at else '',
        'detail_url': url_for('site.project_detail', project_id=project.get('id')),
    }


def load_portfolio():
    """Backend projects as portfolio cards, or the static showcase"""
    try:
        projects = get_public_service().fetch_projects()
    except ProjectServiceError as e:
        LoggingService.warning('site', f"Portfolio falling back to showcase: {e}")
        projects = []

    if projects:
        return [portfolio_item(p) for p in projects]
    return [dict(item, categories=[item['category']], detail_url=None) for item in SHOWCASE_PROJECTS]


def filter_portfolio(items, category):
    if not category or category == 'all':
        return items
    return [item for item in items if category in item['categories']]


# ===== Pages =====

@site_bp.route('/')
def home():
    """Home page"""
    active_category = request.args.get('category', 'all')
    if active_category not in {c['id'] for c in CATEGORIES}:
        active_category = 'all'

    return render_template('site/index.html',
                           hero=HERO,
                           services=SERVICES,
                           about=ABOUT,
                           categories=CATEGORIES,
                           active_category=active_category,
                           portfolio=filter_portfolio(load_portfolio(), active_category),
                           testimonials=TESTIMONIALS,
                           partners=PARTNERS)


@site_bp.route('/projects/<project_id>')
def project_detail(project_id):
    """Individual project page"""
    try:
        project = get_public_service().fetch_project(project_id)
    except ProjectServiceError as e:
        LoggingService.error('site', f"Error fetching project {project_id}: {e}")
        abort(503)

    if not project:
        abort(404)

    images = image_references(project)
    return render_template('site/project_detail.html',
                           project=project,
                           cover_image=images[0] if images else None,
                           gallery=images[1:])


@site_bp.route('/contact', methods=['GET', 'POST'])
def contact():
    """Contact page; ?iq=<base64> prefills the message"""
    if request.method == 'POST':
        form = {field: request.form.get(field, '').strip() for field in CONTACT_FIELDS}

        errors = []
        if not form['name']:
            errors.append('Please enter your name')
        if '@' not in form['email']:
            errors.append('Please enter a valid email address')
        if not form['messageText']:
            errors.append('Please enter a message')

        if errors:
            for message in errors:
                flash(message, 'error')
            return render_template('site/contact.html', form=form, services=SERVICES), 400

        LoggingService.info('contact', f"New inquiry from {form['name']}", form)
        flash("Thanks for reaching out! We'll get back to you shortly.", 'success')
        return redirect(url_for('site.contact'))

    form = {field: '' for field in CONTACT_FIELDS}
    form['messageText'] = decode_inquiry(request.args.get('iq'))
    return render_template('site/contact.html', form=form, services=SERVICES)


@site_bp.route('/placeholder.jpg')
def placeholder():
    """Terminal image candidate, served without going through the proxy"""
    return send_from_directory(os.path.join(site_bp.root_path, 'static', 'img'),
                               'placeholder.svg', mimetype='image/svg+xml')


# ===== API Routes =====

@site_bp.route('/api/projects', methods=['GET'])
def public_projects():
    """Public project list"""
    try:
        projects = get_public_service().fetch_projects()
    except ProjectServiceError as e:
        LoggingService.error('site', f"Error fetching public projects: {e}")
        return jsonify([]), 502

    return jsonify([
        {
            'id': p.get('id'),
            'title': p.get('title'),
            'description': p.get('description'),
            'images': image_references(p),
            'tags': p.get('tags') or [],
            'location': p.get('location'),
            'dateCompleted': p.get('completed_at'),
            'createdAt': p.get('created_at'),
        }
        for p in projects
    ])
