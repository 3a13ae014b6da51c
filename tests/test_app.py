"""
Test application factory and configuration.
"""

import pytest
from app import create_app


class TestAppFactory:
    """Test Flask application factory."""

    def test_create_app_development(self):
        """Test app creation with development config."""
        app = create_app('development')
        assert app is not None
        assert app.config['DEBUG'] is True
        assert app.config['TESTING'] is False

    def test_create_app_test(self):
        """Test app creation with test config."""
        app = create_app('test')
        assert app is not None
        assert app.config['TESTING'] is True
        assert app.config['WTF_CSRF_ENABLED'] is False
        assert app.config['NOTIFICATIONS_DRY_RUN'] is False

    def test_create_app_default(self):
        """Test app creation with default config."""
        app = create_app()
        assert app is not None

    def test_production_requires_secret_key(self, monkeypatch):
        """Production refuses to start without a strong SECRET_KEY."""
        monkeypatch.delenv('SECRET_KEY', raising=False)
        with pytest.raises(ValueError, match='SECRET_KEY'):
            create_app('production')

    def test_production_never_dry_runs(self):
        """Simulated sends are disabled in production."""
        from config import ProductionConfig
        assert ProductionConfig.NOTIFICATIONS_DRY_RUN is False

    def test_app_has_blueprints(self):
        """Test that all blueprints are registered."""
        app = create_app('test')
        blueprint_names = list(app.blueprints.keys())

        assert 'auth' in blueprint_names
        assert 'admin' in blueprint_names
        assert 'reservations' in blueprint_names
        assert 'slots' in blueprint_names
        assert 'api' in blueprint_names

    def test_app_has_extensions(self):
        """Test that extensions are initialized."""
        app = create_app('test')
        assert hasattr(app, 'login_manager')

    def test_cli_commands_registered(self):
        """init-db and create-manager are available on the flask CLI."""
        app = create_app('test')
        assert 'init-db' in app.cli.commands
        assert 'create-manager' in app.cli.commands


class TestErrorHandlers:
    """Errors come back in the JSON envelope."""

    def test_unknown_route_is_json_404(self, client):
        response = client.get('/does-not-exist')
        assert response.status_code == 404
        assert response.get_json() == {'success': False, 'error': 'Resource not found'}

    def test_wrong_method_is_json_405(self, client):
        response = client.put('/api/health')
        assert response.status_code == 405
        assert response.get_json()['success'] is False

    def test_unauthenticated_is_json_401(self, client):
        response = client.get('/reservations')
        assert response.status_code == 401
        assert response.get_json()['error'] == 'Please sign in to continue'


class TestHealth:

    def test_health_check(self, client):
        response = client.get('/api/health')
        assert response.status_code == 200
        data = response.get_json()['data']
        assert data['status'] == 'ok'
        assert data['app'] == 'Rose Garden Reservations'


class TestCli:

    def test_create_manager_command(self, app):
        """create-manager adds a manager that can sign in."""
        from models.user import get_user_by_username

        runner = app.test_cli_runner()
        result = runner.invoke(args=[
            'create-manager', 'owner', 'owner@rosegarden.test',
            '--password', 'Owner1234'
        ])

        assert result.exit_code == 0, result.output
        assert 'Manager created' in result.output
        assert get_user_by_username('owner')['role'] == 'manager'

    def test_create_manager_rejects_weak_password(self, app):
        runner = app.test_cli_runner()
        result = runner.invoke(args=[
            'create-manager', 'owner', 'owner@rosegarden.test', '--password', 'weak'
        ])
        assert result.exit_code != 0
        assert 'at least 8 characters' in result.output
