"""
User management tests: model functions, admin rules and admin/auth routes.
"""

import pytest

from utils.exceptions import ConflictError, ValidationError


class TestUserModel:

    def test_create_staff_gets_default_permissions(self, app):
        from models.user import create_user, get_user_by_id, check_password, get_user_by_username

        user_id = create_user('ama', 'ama@rosegarden.test', 'Secret123', full_name='Ama')
        user = get_user_by_id(user_id)

        assert user['role'] == 'staff'
        assert user['permissions'] == ['view_reservations', 'manage_reservations', 'mark_attendance']
        assert 'password_hash' not in user
        assert check_password(get_user_by_username('ama', include_hash=True), 'Secret123')

    def test_create_with_explicit_permissions(self, app):
        from models.user import create_user, get_user_by_id

        user_id = create_user('host', 'host@rosegarden.test', 'Secret123',
                              permissions=['view_reservations'])
        assert get_user_by_id(user_id)['permissions'] == ['view_reservations']

    def test_duplicate_username_conflicts(self, app, staff_user):
        from models.user import create_user

        with pytest.raises(ConflictError, match='already exists'):
            create_user('staff', 'other@rosegarden.test', 'Secret123')

    def test_unknown_role_rejected(self, app):
        from models.user import create_user

        with pytest.raises(ValidationError, match='Role'):
            create_user('chef', 'chef@rosegarden.test', 'Secret123', role='chef')

    def test_unknown_permission_leaves_no_user(self, app):
        from models.user import create_user, get_user_by_username

        with pytest.raises(ValidationError):
            create_user('ghost', 'ghost@rosegarden.test', 'Secret123', permissions=['fly'])
        assert get_user_by_username('ghost') is None

    def test_update_and_password(self, app, staff_user):
        from models.user import (
            update_user, update_password, get_user_by_id, get_user_by_username, check_password
        )

        assert update_user(staff_user, full_name='Kofi B.', is_active=0) is True
        user = get_user_by_id(staff_user)
        assert user['full_name'] == 'Kofi B.'
        assert user['is_active'] == 0

        assert update_password(staff_user, 'NewSecret9') is True
        assert check_password(get_user_by_username('staff', include_hash=True), 'NewSecret9')

    def test_update_without_changes(self, app, staff_user):
        from models.user import update_user
        assert update_user(staff_user) is False

    def test_delete_user(self, app, staff_user):
        from models.user import delete_user, get_user_by_id
        from models.permission import get_user_permission_codes

        assert delete_user(staff_user) is True
        assert get_user_by_id(staff_user) is None
        assert get_user_permission_codes(staff_user) == []


class TestAdminRules:

    def test_validate_user_creation(self):
        from blueprints.admin.services import validate_user_creation

        assert validate_user_creation('ama', 'ama@x.com', 'Secret123') == (True, '')
        assert validate_user_creation('', 'ama@x.com', 'Secret123')[0] is False
        assert validate_user_creation('ama', 'bad', 'Secret123')[0] is False
        assert validate_user_creation('ama', 'ama@x.com', 'short')[0] is False
        assert validate_user_creation('ama', 'ama@x.com', 'Secret123', role='chef')[0] is False

    def test_cannot_delete_self(self, app, manager_user):
        from blueprints.admin.services import can_delete_user

        can_delete, error = can_delete_user(manager_user, manager_user)
        assert can_delete is False
        assert 'own account' in error

    def test_last_manager_protected(self, app, manager_user, staff_user):
        from blueprints.admin.services import can_delete_user, can_update_user

        assert can_delete_user(manager_user, staff_user)[0] is False
        assert can_update_user(manager_user, {'role': 'staff'})[0] is False
        assert can_update_user(manager_user, {'is_active': 0})[0] is False
        assert can_update_user(manager_user, {'full_name': 'Ama M.'}) == (True, '')

    def test_second_manager_can_be_removed(self, app, manager_user):
        from blueprints.admin.services import can_delete_user
        from models.user import create_user

        other = create_user('deputy', 'deputy@rosegarden.test', 'Secret123', role='manager')
        assert can_delete_user(other, manager_user) == (True, '')


class TestAuthRoutes:

    def test_setup_creates_first_manager(self, client):
        response = client.post('/auth/setup', json={
            'username': 'owner',
            'email': 'owner@rosegarden.test',
            'password': 'Owner1234',
        })

        assert response.status_code == 201
        assert response.get_json()['data']['role'] == 'manager'

    def test_setup_only_once(self, client, manager_user):
        response = client.post('/auth/setup', json={
            'username': 'intruder',
            'email': 'intruder@example.com',
            'password': 'Intruder1',
        })
        assert response.status_code == 409

    def test_setup_rejects_weak_password(self, client):
        response = client.post('/auth/setup', json={
            'username': 'owner',
            'email': 'owner@rosegarden.test',
            'password': 'owner',
        })
        assert response.status_code == 400

    def test_login_and_me(self, client, staff_user):
        response = client.post('/auth/login', json={'username': 'staff', 'password': 'Staff1234'})
        assert response.status_code == 200
        assert response.get_json()['message'] == 'Welcome Kofi Boateng'

        me = client.get('/auth/me').get_json()['data']
        assert me['username'] == 'staff'
        assert me['permissions'] == ['manage_reservations', 'mark_attendance', 'view_reservations']

    def test_manager_session_lists_whole_catalog(self, client, manager_user):
        from models.permission import PERMISSION_CODES, set_user_permissions

        set_user_permissions(manager_user, [])
        response = client.post('/auth/login', json={'username': 'manager', 'password': 'Manager123'})

        assert response.get_json()['data']['permissions'] == sorted(PERMISSION_CODES)
        assert client.get('/auth/me').get_json()['data']['permissions'] == sorted(PERMISSION_CODES)

    def test_login_wrong_password(self, client, staff_user):
        response = client.post('/auth/login', json={'username': 'staff', 'password': 'nope'})
        assert response.status_code == 401
        assert response.get_json()['error'] == 'Invalid username or password'

    def test_login_disabled_account(self, client, staff_user):
        from models.user import update_user

        update_user(staff_user, is_active=0)
        response = client.post('/auth/login', json={'username': 'staff', 'password': 'Staff1234'})
        assert response.status_code == 403

    def test_login_missing_fields(self, client):
        response = client.post('/auth/login', json={'username': 'staff'})
        assert response.status_code == 400
        assert response.get_json()['error'] == 'Password is required'

    def test_logout(self, staff_client):
        assert staff_client.post('/auth/logout').status_code == 200
        assert staff_client.get('/auth/me').status_code == 401

    def test_change_password(self, staff_client):
        response = staff_client.post('/auth/change-password', json={
            'current_password': 'Staff1234',
            'new_password': 'Better1234',
            'confirm_password': 'Better1234',
        })
        assert response.status_code == 200

        staff_client.post('/auth/logout')
        response = staff_client.post('/auth/login', json={'username': 'staff', 'password': 'Better1234'})
        assert response.status_code == 200

    def test_change_password_mismatch(self, staff_client):
        response = staff_client.post('/auth/change-password', json={
            'current_password': 'Staff1234',
            'new_password': 'Better1234',
            'confirm_password': 'Different1',
        })
        assert response.status_code == 400
        assert response.get_json()['error'] == 'Passwords do not match'


class TestAdminUserRoutes:

    def test_staff_cannot_manage_users(self, staff_client):
        response = staff_client.get('/admin/users')
        assert response.status_code == 403

    def test_list_users(self, manager_client, staff_user):
        response = manager_client.get('/admin/users?role=staff')
        users = response.get_json()['data']
        assert [u['username'] for u in users] == ['staff']

    def test_create_user(self, manager_client):
        response = manager_client.post('/admin/users', json={
            'username': 'host',
            'email': 'host@rosegarden.test',
            'password': 'Secret123',
            'permissions': ['view_reservations', 'manage_slots'],
        })

        assert response.status_code == 201
        data = response.get_json()['data']
        assert data['role'] == 'staff'
        assert data['permissions'] == ['view_reservations', 'manage_slots']

    def test_create_duplicate_user(self, manager_client, staff_user):
        response = manager_client.post('/admin/users', json={
            'username': 'staff',
            'email': 'dup@rosegarden.test',
            'password': 'Secret123',
        })
        assert response.status_code == 409

    def test_create_with_unknown_permission(self, manager_client):
        response = manager_client.post('/admin/users', json={
            'username': 'host',
            'email': 'host@rosegarden.test',
            'password': 'Secret123',
            'permissions': ['fly_drones'],
        })
        assert response.status_code == 400

    def test_edit_user_permissions(self, manager_client, staff_user):
        response = manager_client.put(f'/admin/users/{staff_user}', json={
            'permissions': ['view_reservations', 'view_analytics'],
        })
        assert response.status_code == 200
        assert response.get_json()['data']['permissions'] == ['view_reservations', 'view_analytics']

    @pytest.mark.parametrize('email', ['', '   ', None, 'not-an-email'])
    def test_edit_rejects_bad_email(self, manager_client, staff_user, email):
        response = manager_client.put(f'/admin/users/{staff_user}', json={'email': email})

        assert response.status_code == 400
        assert response.get_json()['error'] == 'Please enter a valid email address'
        user = manager_client.get('/admin/users').get_json()['data']
        assert [u['email'] for u in user if u['id'] == staff_user] == ['staff@rosegarden.test']

    def test_edit_strips_name_and_email(self, manager_client, staff_user):
        response = manager_client.put(f'/admin/users/{staff_user}', json={
            'email': '  kofi@rosegarden.test ',
            'full_name': '  Kofi B. ',
        })

        data = response.get_json()['data']
        assert data['email'] == 'kofi@rosegarden.test'
        assert data['full_name'] == 'Kofi B.'

    def test_cannot_demote_last_manager(self, manager_client, manager_user):
        response = manager_client.put(f'/admin/users/{manager_user}', json={'role': 'staff'})
        assert response.status_code == 400

    def test_edit_unknown_user(self, manager_client):
        response = manager_client.put('/admin/users/9999', json={'full_name': 'Nobody'})
        assert response.status_code == 404

    def test_delete_user(self, manager_client, staff_user):
        response = manager_client.delete(f'/admin/users/{staff_user}')
        assert response.status_code == 200

    def test_cannot_delete_self(self, manager_client, manager_user):
        response = manager_client.delete(f'/admin/users/{manager_user}')
        assert response.status_code == 400

    def test_deactivated_user_loses_session(self, manager_client, staff_client, staff_user):
        manager_client.put(f'/admin/users/{staff_user}', json={'is_active': False})
        assert staff_client.get('/reservations').status_code == 401

    def test_permission_catalog(self, manager_client):
        data = manager_client.get('/admin/permissions').get_json()['data']
        assert len(data['permissions']) == 9
        assert data['role_defaults']['staff'] == [
            'view_reservations', 'manage_reservations', 'mark_attendance'
        ]
