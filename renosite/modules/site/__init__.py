"""
Site Module
===========

Public marketing pages: home (hero, services, about, portfolio, testimonials),
project detail pages, the contact form and the public projects API.
"""

from flask import Blueprint

site_bp = Blueprint(
    'site',
    __name__,
    template_folder='templates',
    static_folder='static',
    static_url_path='/site/static'
)

from . import routes

__all__ = ['site_bp']
