"""
Flask Blueprints for the Node LAN Portal

Modular routing, organized by domain.
"""

from .pages import pages_bp
from .status import status_bp
from .files import files_bp

__all__ = [
    'pages_bp',
    'status_bp',
    'files_bp',
]


def register_blueprints(app):
    """Register all blueprints with the Flask app."""
    app.register_blueprint(pages_bp)
    app.register_blueprint(status_bp, url_prefix='/api')
    app.register_blueprint(files_bp, url_prefix='/files')
