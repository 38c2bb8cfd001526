import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.groups.models import GroupMembership
from apps.groups.services import create_group_with_members
from apps.realtime.backends import locmem

# 1x1 transparent GIF
TINY_GIF = (
    b'GIF89a\x01\x00\x01\x00\x80\x00\x00\x00\x00\x00\xff\xff\xff!\xf9\x04'
    b'\x01\x00\x00\x00\x00,\x00\x00\x00\x00\x01\x00\x01\x00\x00\x02\x02D\x01\x00;'
)


def make_user(email, first_name):
    return User.objects.create_user(email=email, password='TestPass123!', first_name=first_name)


def client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def founder(db):
    """User who proposed the group."""
    return make_user('founder@example.com', 'Fran')


@pytest.fixture
def member_user(db):
    """Second founding member."""
    return make_user('member@example.com', 'Max')


@pytest.fixture
def third_user(db):
    return make_user('third@example.com', 'Tess')


@pytest.fixture
def group_other_user(db):
    """User not in any group."""
    return make_user('other@example.com', 'Olly')


@pytest.fixture
def authenticated_client(founder):
    """API client authenticated as the founder."""
    return client_for(founder)


@pytest.fixture
def member_client(member_user):
    return client_for(member_user)


@pytest.fixture
def other_client(group_other_user):
    """API client authenticated as a non-member."""
    return client_for(group_other_user)


@pytest.fixture
def group(founder, member_user):
    """Two-member group with its shared list."""
    return create_group_with_members(name='Flatmates', members=[founder, member_user])


@pytest.fixture
def group_of_three(group, third_user):
    GroupMembership.objects.create(user=third_user, group=group)
    return group


@pytest.fixture
def outbox():
    """Events delivered through the in-memory backend during the test."""
    locmem.outbox.clear()
    yield locmem.outbox
    locmem.outbox.clear()
