"""
Tests for authentication API endpoints.
"""
import pytest
from rest_framework import status
from rest_framework.test import APIClient

from apps.rbac.models import AuditLog, User
from apps.rbac.roles import Role
from apps.rbac.services import AuthService


@pytest.mark.django_db
class TestSignupEndpoint:
    """Test POST /v1/auth/signup endpoint."""

    def test_signup_creates_customer(self, branch_a):
        client = APIClient()
        data = {
            'email': 'New.Diner@Example.com',
            'password': 'abc',
            'name': 'New Diner',
            'branch_id': branch_a.id,
        }

        response = client.post('/v1/auth/signup', data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['token']
        assert response.data['user']['email'] == 'new.diner@example.com'
        assert response.data['user']['role'] == Role.CUSTOMER
        assert response.data['user']['branch_id'] == branch_a.id
        assert 'password' not in response.data['user']

        user = User.objects.get(email='new.diner@example.com')
        assert user.check_password('abc')
        assert AuditLog.objects.filter(action='user_signup', target_id=user.id).exists()

    def test_signup_ignores_requested_role(self, branch_a):
        client = APIClient()
        data = {'email': 'sneaky@example.com', 'password': 'abc', 'branch_id': branch_a.id, 'role': 'ADMIN'}

        response = client.post('/v1/auth/signup', data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert User.objects.get(email='sneaky@example.com').role == Role.CUSTOMER

    def test_signup_duplicate_email(self, branch_a, customer):
        client = APIClient()
        data = {'email': 'CUSTOMER@email.com', 'password': 'abc', 'branch_id': branch_a.id}

        response = client.post('/v1/auth/signup', data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error']['code'] == 'VALIDATION_ERROR'
        assert 'email' in response.data['error']['details']

    def test_signup_unknown_branch(self, db):
        client = APIClient()
        data = {'email': 'lost@example.com', 'password': 'abc', 'branch_id': 999}

        response = client.post('/v1/auth/signup', data, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['error']['code'] == 'NOT_FOUND'
        assert not User.objects.filter(email='lost@example.com').exists()

    def test_signup_short_password(self, branch_a):
        client = APIClient()
        data = {'email': 'short@example.com', 'password': 'ab', 'branch_id': branch_a.id}

        response = client.post('/v1/auth/signup', data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'password' in response.data['error']['details']

    def test_signup_requires_branch(self, db):
        client = APIClient()
        response = client.post('/v1/auth/signup', {'email': 'x@example.com', 'password': 'abc'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'branch_id' in response.data['error']['details']


@pytest.mark.django_db
class TestLoginEndpoint:
    """Test POST /v1/auth/login endpoint."""

    def test_login_success(self, manager):
        client = APIClient()

        response = client.post(
            '/v1/auth/login',
            {'email': 'Manager@Steakz.com', 'password': 'password123'},
            format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['user']['id'] == manager.id
        assert AuthService.get_user_from_jwt(response.data['token']) == manager

        manager.refresh_from_db()
        assert manager.last_login_at is not None

    def test_login_wrong_password(self, manager):
        client = APIClient()

        response = client.post(
            '/v1/auth/login',
            {'email': 'manager@steakz.com', 'password': 'wrong'},
            format='json'
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data['error']['code'] == 'UNAUTHENTICATED'

    def test_login_unknown_email_is_indistinguishable(self, manager):
        client = APIClient()

        unknown = client.post('/v1/auth/login', {'email': 'nobody@steakz.com', 'password': 'x'}, format='json')
        wrong = client.post('/v1/auth/login', {'email': 'manager@steakz.com', 'password': 'x'}, format='json')

        assert unknown.status_code == wrong.status_code == status.HTTP_401_UNAUTHORIZED
        assert unknown.data['error']['message'] == wrong.data['error']['message']

    def test_login_inactive_user(self, manager):
        manager.is_active = False
        manager.save()
        client = APIClient()

        response = client.post(
            '/v1/auth/login',
            {'email': 'manager@steakz.com', 'password': 'password123'},
            format='json'
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_login_missing_fields(self, db):
        client = APIClient()
        response = client.post('/v1/auth/login', {'email': 'manager@steakz.com'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error']['code'] == 'VALIDATION_ERROR'


@pytest.mark.django_db
class TestMeEndpoint:
    """Test GET /v1/auth/me endpoint."""

    def test_me_returns_profile(self, auth_client, manager, branch_a):
        response = auth_client(manager).get('/v1/auth/me')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['email'] == 'manager@steakz.com'
        assert response.data['role'] == Role.MANAGER
        assert response.data['branch']['id'] == branch_a.id
        assert response.data['active_branch'] is None

    def test_me_customer_without_branch(self, auth_client, make_user):
        loner = make_user('loner@email.com', Role.CUSTOMER)

        response = auth_client(loner).get('/v1/auth/me')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['branch'] is None

    def test_me_requires_authentication(self, api_client, db):
        response = api_client.get('/v1/auth/me')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data['error']['code'] == 'UNAUTHENTICATED'

    def test_me_rejects_garbage_token(self, api_client, db):
        api_client.credentials(HTTP_AUTHORIZATION='Bearer not-a-jwt')

        response = api_client.get('/v1/auth/me')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_token_of_deactivated_user_is_rejected(self, auth_client, manager):
        client = auth_client(manager)
        manager.is_active = False
        manager.save()

        response = client.get('/v1/auth/me')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
