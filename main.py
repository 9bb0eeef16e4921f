"""
renosite application entry point.

Run with:
    python main.py

Visit:
    http://localhost:5000        - Homepage
    http://localhost:5000/admin  - Admin panel
"""

from flask import Flask

from renosite import RenoSite
from renosite.core.config import Config


def create_app(config=None):
    app = Flask(__name__)
    app.config['SECRET_KEY'] = Config.SECRET_KEY

    # Session security
    app.config['SESSION_COOKIE_HTTPONLY'] = True
    app.config['SESSION_COOKIE_SAMESITE'] = 'Lax'

    if config:
        app.config.update(config)

    RenoSite(app)
    app.config['SESSION_COOKIE_SECURE'] = not app.debug and not app.testing
    return app


app = create_app()


if __name__ == '__main__':
    print("\n" + "=" * 60)
    print("renosite")
    print("=" * 60)
    print(f"Homepage:        http://localhost:{Config.port}")
    print(f"Admin Panel:     http://localhost:{Config.port}/admin")
    print("=" * 60 + "\n")

    app.run(host='0.0.0.0', port=Config.port, debug=True)
