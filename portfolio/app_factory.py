# portfolio/app_factory.py
from flask import Flask, jsonify
from flask_login import LoginManager
from sqlalchemy import text
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from portfolio.init_db import db
from portfolio.errors import register_error_handlers
from portfolio.logging_config import setup_logging
from portfolio.authentication.views import load_user_from_request, create_admin_from_config


def create_app(config_class='portfolio.config.Config'):
    app = Flask(__name__)
    app.config.from_object(config_class)

    setup_logging(app.config.get('LOG_TIMEZONE'))

    db.init_app(app)

    login_manager = LoginManager()
    login_manager.init_app(app)

    # Bearer tokens only; nothing is kept in the cookie session
    login_manager.request_loader(load_user_from_request)

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({'error': 'Authentication required'}), 401

    @app.after_request
    def add_cors_headers(response):
        response.headers['Access-Control-Allow-Origin'] = app.config.get('FRONTEND_URL') or '*'
        response.headers['Access-Control-Allow-Headers'] = 'Authorization, Content-Type'
        response.headers['Access-Control-Allow-Methods'] = 'GET, POST, PUT, PATCH, DELETE, OPTIONS'
        return response

    register_error_handlers(app)

    # Import and register blueprints
    from portfolio.authentication.routes import auth_bp, create_admin_cmd
    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.cli.add_command(create_admin_cmd)

    from portfolio.content.routes import projects_bp, blogs_bp, experiences_bp, achievements_bp
    app.register_blueprint(projects_bp, url_prefix='/api/projects')
    app.register_blueprint(blogs_bp, url_prefix='/api/blogs')
    app.register_blueprint(experiences_bp, url_prefix='/api/experiences')
    app.register_blueprint(achievements_bp, url_prefix='/api/achievements')

    from portfolio.contact.routes import contact_bp
    app.register_blueprint(contact_bp, url_prefix='/api/contact')

    from portfolio.analytics.routes import analytics_bp
    app.register_blueprint(analytics_bp, url_prefix='/api/analytics')

    @app.route('/health', methods=['GET'])
    def health():
        try:
            db.session.execute(text('SELECT 1'))
        except SQLAlchemyError as e:
            app.logger.error(f"Health check failed: {e}")
            return jsonify({'status': 'ERROR', 'database': 'unavailable'}), 503
        return jsonify({'status': 'OK', 'database': 'connected'}), 200

    with app.app_context():
        # Models must be imported before create_all sees their tables
        import portfolio.authentication.models  # noqa: F401
        import portfolio.content.models  # noqa: F401
        import portfolio.contact.models  # noqa: F401
        import portfolio.analytics.models  # noqa: F401
        try:
            db.create_all()
            create_admin_from_config(app)
        except OperationalError as e:
            app.logger.error(f"OperationalError during database initialization: {e}")

    return app
