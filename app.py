"""
Rose Garden - Restaurant Reservation Service
Flask application factory and initialization
"""

import os
import click
import logging
from flask import Flask, g
from dotenv import load_dotenv
from werkzeug.exceptions import HTTPException

# Load environment variables
load_dotenv()

# Import configuration
from config import config

# Import extensions
from extensions import login_manager, csrf

# Import database functions
from database import close_db, init_db, ensure_schema


def create_app(config_name=None):
    """
    Application factory for Flask app.

    Args:
        config_name: Configuration name ('development', 'production', 'test')

    Returns:
        Flask application instance
    """
    # Determine config
    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    # Create Flask app
    app = Flask(__name__)

    # Load configuration
    config_class = config[config_name]
    if config_name == 'production':
        config_class.validate()
    app.config.from_object(config_class)

    # Initialize extensions
    initialize_extensions(app)

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Register CLI commands
    register_cli_commands(app)

    # Connect notification subscribers to reservation events
    register_event_subscribers(app)

    # Register teardown handlers
    register_teardown_handlers(app)

    # Configure logging
    configure_logging(app)

    return app


def initialize_extensions(app):
    """Initialize Flask extensions."""
    # Initialize Flask-Login
    login_manager.init_app(app)
    # Initialize CSRF Protection
    csrf.init_app(app)


def register_blueprints(app):
    """Register Flask blueprints."""
    # Import blueprints
    from blueprints.auth.routes import auth_bp
    from blueprints.admin.routes import admin_bp
    from blueprints.reservations import reservations_bp, slots_bp
    from blueprints.api.routes import api_bp

    # Register blueprints
    app.register_blueprint(auth_bp, url_prefix='/auth')
    app.register_blueprint(admin_bp, url_prefix='/admin')
    app.register_blueprint(reservations_bp, url_prefix='/reservations')
    app.register_blueprint(slots_bp, url_prefix='/slots')
    app.register_blueprint(api_bp, url_prefix='/api')


def register_error_handlers(app):
    """Map domain errors and HTTP errors to the JSON envelope."""
    from utils.api_response import api_error, api_exception
    from utils.exceptions import ReservationSystemError
    from utils.messages import MESSAGES

    def _rollback():
        db = g.get('db')
        if db:
            db.rollback()

    @app.errorhandler(ReservationSystemError)
    def domain_error(error):
        """Validation, conflict, not-found and authorization failures."""
        _rollback()
        return api_exception(error)

    @app.errorhandler(404)
    def not_found_error(error):
        """Handle 404 errors."""
        return api_error(MESSAGES['not_found'], status=404)

    @app.errorhandler(405)
    def method_not_allowed_error(error):
        """Handle 405 errors."""
        return api_error(MESSAGES['method_not_allowed'], status=405)

    @app.errorhandler(HTTPException)
    def http_error(error):
        """Other HTTP errors (CSRF failures, bad requests)."""
        return api_error(error.description or error.name, status=error.code)

    @app.errorhandler(Exception)
    def internal_error(error):
        """Handle unexpected errors."""
        # Rollback database on error
        _rollback()
        app.logger.error('Unhandled error: %s', error, exc_info=True)
        return api_error(MESSAGES['internal_error'], status=500)


def register_cli_commands(app):
    """Register Flask CLI commands."""

    @app.cli.command('init-db')
    def init_db_command():
        """Initialize database with schema and seed data. Deletes existing data."""
        click.echo('Initializing database...')
        with app.app_context():
            init_db()
        click.echo('Database initialized successfully!')

    @app.cli.command('create-manager')
    @click.argument('username')
    @click.argument('email')
    @click.password_option()
    def create_manager_command(username, email, password):
        """Create a manager account (first-run setup from the shell)."""
        from models.user import create_user
        from utils.exceptions import ReservationSystemError
        from utils.validators import validate_password

        is_valid, error = validate_password(password)
        if not is_valid:
            raise click.ClickException(error)

        with app.app_context():
            ensure_schema()
            try:
                user_id = create_user(
                    username=username,
                    email=email,
                    password=password,
                    role='manager',
                    created_by='cli'
                )
            except ReservationSystemError as e:
                raise click.ClickException(e.message)
            click.echo(f'Manager created successfully! ID: {user_id}')


def register_event_subscribers(app):
    """Connect notification dispatch to reservation events."""
    from notifications.subscribers import register_subscribers

    register_subscribers(app)


def register_teardown_handlers(app):
    """Register teardown handlers."""

    @app.teardown_appcontext
    def teardown_db(error):
        """Close database connection at end of request."""
        close_db(error)


def configure_logging(app):
    """Configure application logging."""
    if not app.debug and not app.testing:
        # Production logging
        if not os.path.exists('logs'):
            os.mkdir('logs')

        file_handler = logging.FileHandler('logs/reservations.log')
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s %(name)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(logging.INFO)
        app.logger.addHandler(file_handler)
        # Dispatcher and other module loggers
        logging.getLogger('notifications').addHandler(file_handler)
        logging.getLogger('notifications').setLevel(logging.INFO)

        app.logger.setLevel(logging.INFO)
        app.logger.info('Rose Garden reservations startup')
    else:
        # Development logging
        app.logger.setLevel(logging.DEBUG)
        logging.getLogger('notifications').setLevel(logging.DEBUG)


# Create application instance for development server
if __name__ == '__main__':
    app = create_app()
    with app.app_context():
        ensure_schema()
    # host='0.0.0.0' allows access from other devices on the network
    app.run(host='0.0.0.0', debug=True)
