"""
Portfolio Intake Backend - application factory

Serves the JSON consumed by the portfolio site: static content, the about
tabs, GitHub activity, remote collections, intake forms and the signed-in
dashboard. Routes live in the blueprints; this module only wires them up.
"""

import os
from flask import Flask, jsonify, request
from config import get_config
from extensions import db, login_manager
from utils.auth import load_auth_status

from blueprints.auth import auth_bp
from blueprints.booking import booking_bp
from blueprints.dashboard import dashboard_bp
from blueprints.pages import pages_bp
from blueprints.portfolio import portfolio_bp


def create_app(config_name=None):
    """
    Build a configured application

    Args:
        config_name (str): 'development', 'production' or 'testing';
            FLASK_ENV is used when omitted

    Returns:
        Flask: Application with extensions, blueprints and hooks registered
    """
    app = Flask(__name__)
    app.config.from_object(get_config(config_name))

    initialize_extensions(app)
    register_blueprints(app)
    register_error_handlers(app)
    register_hooks(app)

    @app.route('/health')
    def health_check():
        return {'status': 'ok', 'message': 'Portfolio intake backend is running'}, 200

    return app


def initialize_extensions(app):
    """Bind the database and session manager, then prepare the schema"""
    db.init_app(app)
    login_manager.init_app(app)

    @login_manager.user_loader
    def load_user(user_id):
        from models import User
        return db.session.get(User, user_id)

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({'success': False, 'message': 'Please sign in to continue.'}), 401

    with app.app_context():
        try:
            from sqlalchemy import text
            from utils.security import ensure_owner_account
            db.create_all()
            db.session.execute(text('SELECT 1'))
            app.logger.info("✓ Database ready")
            ensure_owner_account(app)
        except Exception as e:
            app.logger.error(f"✗ Database setup failed: {str(e)}")


def register_blueprints(app):
    for blueprint in (auth_bp, booking_bp, dashboard_bp, pages_bp, portfolio_bp):
        app.register_blueprint(blueprint)


def register_error_handlers(app):
    """Every error leaves the API as {'success': False, 'message': ...}"""

    def error_response(status, message):
        return jsonify({'success': False, 'message': message}), status

    @app.errorhandler(400)
    def bad_request(e):
        return error_response(400, 'Bad request.')

    @app.errorhandler(401)
    def unauthorized(e):
        return error_response(401, 'Please sign in to continue.')

    @app.errorhandler(403)
    def forbidden(e):
        return error_response(403, 'Access denied.')

    @app.errorhandler(404)
    def not_found(e):
        return error_response(404, 'Not found.')

    @app.errorhandler(413)
    def upload_too_large(e):
        return error_response(413, 'File is too large. Maximum size is 16MB.')

    @app.errorhandler(500)
    def server_error(e):
        app.logger.error(f"Unhandled error on {request.path}: {str(e)}")
        return error_response(500, 'Something went wrong. Please try again later.')


def register_hooks(app):
    # One AuthStatus per request, read by views instead of the session
    app.before_request(load_auth_status)

    @app.after_request
    def add_security_headers(response):
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'DENY'
        if not app.debug and request.is_secure:
            response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'
        return response


# Module-level instance for gunicorn (app:app)
app = create_app()

if __name__ == '__main__':
    env = os.environ.get('FLASK_ENV', 'development')
    app.run(host='0.0.0.0', port=int(os.environ.get('PORT', 5000)),
            debug=(env == 'development'))
