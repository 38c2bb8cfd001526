import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.groups.services import create_group_with_members
from apps.realtime.backends import locmem


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Create and return a test user (with personal list)."""
    return User.objects.create_user(
        email='alice@example.com',
        password='TestPass123!',
        first_name='Alice',
        last_name='Shopper',
    )


@pytest.fixture
def other_user(db):
    """Create and return a second user."""
    return User.objects.create_user(
        email='bob@example.com',
        password='TestPass123!',
        first_name='Bob',
    )


@pytest.fixture
def outsider(db):
    """User that belongs to no group."""
    return User.objects.create_user(
        email='carol@example.com',
        password='TestPass123!',
        first_name='Carol',
    )


@pytest.fixture
def authenticated_client(api_client, user):
    """Return an API client authenticated as ``user``."""
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def outsider_client(outsider):
    refresh = RefreshToken.for_user(outsider)
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def group(user, other_user):
    """Two-member group with its shared list."""
    return create_group_with_members(name='Flatmates', members=[user, other_user])


@pytest.fixture
def group_list(group):
    return group.shopping_list


@pytest.fixture
def personal_list(user):
    return user.personal_list


@pytest.fixture
def outbox():
    """Events delivered through the in-memory backend during the test."""
    locmem.outbox.clear()
    yield locmem.outbox
    locmem.outbox.clear()
