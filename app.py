"""
Portfolio Site - Main Application Entry Point
Application Factory Pattern: configuration, blueprints,
error handlers and hooks are wired here; route handling lives in blueprints.
"""

import os
from datetime import datetime
from flask import Flask, render_template, url_for
from config import get_config

from blueprints.pages import pages_bp
from blueprints.projects import projects_bp
from blueprints.meta import meta_bp


def create_app(config_name=None):
    """
    Application Factory Pattern
    Creates and configures Flask application instance

    Args:
        config_name (str): Configuration environment name (optional)

    Returns:
        Flask: Configured Flask application instance
    """

    app = Flask(__name__)

    # Load configuration
    conf = get_config(config_name)
    app.config.from_object(conf)

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Register request/response hooks
    register_hooks(app)

    # Health check route
    @app.route('/health')
    def health_check():
        return {'status': 'ok', 'message': 'Portfolio site is running'}, 200

    app.logger.info(f"✓ Application created with {conf.__name__}")
    return app


def register_blueprints(app):
    """Register all application blueprints"""
    app.register_blueprint(pages_bp)
    app.register_blueprint(projects_bp)
    app.register_blueprint(meta_bp)


def register_error_handlers(app):
    """Register custom error handlers"""

    @app.errorhandler(404)
    def page_not_found(e):
        return render_template('404.html'), 404

    @app.errorhandler(500)
    def internal_server_error(e):
        app.logger.error(f"Server Error: {str(e)}")
        return render_template('500.html'), 500


def register_hooks(app):
    """Register request/response hooks and context processors"""

    @app.context_processor
    def inject_global_vars():
        """Site chrome shared by every template"""
        nav = [{'url': url_for(p['endpoint']), 'title': p['title']}
               for p in app.config['NAV_PAGES']]
        nav.append({'url': app.config['GITHUB_URL'], 'title': 'GitHub', 'external': True})
        return {
            'site_title': app.config['SITE_TITLE'],
            'nav_pages': nav,
            'current_year': datetime.now().year,
        }

    @app.after_request
    def add_security_headers(response):
        """Add security headers to all responses"""
        response.headers['X-Content-Type-Options'] = 'nosniff'
        return response


# Create app instance for gunicorn
app = create_app()

if __name__ == '__main__':
    # Get environment
    env = os.environ.get('FLASK_ENV', 'development')

    # Create app
    app = create_app(env)

    # Run development server
    app.run(
        host='0.0.0.0',
        port=5000,
        debug=(env == 'development')
    )
