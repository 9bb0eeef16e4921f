"""
renosite - Renovation Contractor Website
========================================

Marketing site and admin panel for a renovation contractor:
- Public pages (hero, services, portfolio, testimonials, contact)
- Password-protected project admin panel backed by a remote REST API
- Image proxy with upstream fallback and a client-side candidate resolver

Usage:
    from flask import Flask
    from renosite import RenoSite

    app = Flask(__name__)
    RenoSite(app)
"""

__version__ = '0.1.0'

from flask_cors import CORS

from .core.config import Config

DEFAULT_FEATURES = {
    'site': True,
    'auth': True,
    'projects': True,
    'ops': True,
    'images': True,
}

CORS_METHODS = ['GET', 'OPTIONS', 'PATCH', 'DELETE', 'POST', 'PUT']
CORS_HEADERS = [
    'X-CSRF-Token', 'X-Requested-With', 'Accept', 'Accept-Version', 'Content-Length',
    'Content-MD5', 'Content-Type', 'Date', 'X-Api-Version',
]


class RenoSite:
    """Flask extension that registers every renosite module on an app"""

    def __init__(self, app=None, config=None):
        self._config = config or {}
        self._registered = []
        if app is not None:
            self.init_app(app)

    @property
    def features(self):
        features = dict(DEFAULT_FEATURES)
        features.update(self._config.get('features', {}))
        return features

    @property
    def brand_name(self):
        return self._config.get('brand_name') or self._app.config.get('BRAND_NAME') or 'renosite'

    def init_app(self, app):
        self._app = app
        self._load_config(app)

        CORS(app, send_wildcard=True, resources={r'/api/*': {
            'origins': '*',
            'methods': CORS_METHODS,
            'allow_headers': CORS_HEADERS,
        }})

        self._register_modules(app)

        @app.context_processor
        def inject_renosite_config():
            return {
                'renosite_config': dict(self._config),
                'brand_name': self.brand_name,
            }

        app.extensions['renosite'] = self

    def _load_config(self, app):
        """Fill app.config from Config without overriding anything the app set"""
        for key, value in Config.as_dict().items():
            if app.config.get(key) is None:
                app.config[key] = value

        if self._config.get('brand_name'):
            app.config['BRAND_NAME'] = self._config['brand_name']

    def _register(self, app, name, blueprint):
        app.register_blueprint(blueprint)
        if name not in self._registered:
            self._registered.append(name)

    def _register_modules(self, app):
        features = self.features

        if features.get('site'):
            from .modules.site import site_bp
            self._register(app, 'site', site_bp)

        if features.get('auth'):
            from .modules.auth import auth_bp
            self._register(app, 'auth', auth_bp)

        if features.get('projects'):
            from .modules.projects import projects_bp, projects_admin_api_bp
            self._register(app, 'projects', projects_bp)
            self._register(app, 'projects', projects_admin_api_bp)

        if features.get('ops'):
            from .modules.ops import ops_health_bp, ops_admin_bp
            self._register(app, 'ops', ops_health_bp)
            self._register(app, 'ops', ops_admin_bp)

        # Last: the catch-all proxy matches any other GET under /api
        if features.get('images'):
            from .modules.images import images_bp, images_catchall_bp
            self._register(app, 'images', images_bp)
            self._register(app, 'images', images_catchall_bp)

    def get_registered_modules(self):
        return list(self._registered)


__all__ = ['RenoSite', 'Config', '__version__']
