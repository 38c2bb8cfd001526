import pytest
from datetime import timedelta
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.groups.services import create_group_with_members
from apps.invitations.models import Invitation
from apps.realtime.backends import locmem


def make_user(email, first_name, last_name=''):
    return User.objects.create_user(
        email=email,
        password='TestPass123!',
        first_name=first_name,
        last_name=last_name,
    )


def client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


def expire(invitation):
    """Move an invitation's expiry into the past."""
    Invitation.objects.filter(id=invitation.id).update(expires_at=timezone.now() - timedelta(minutes=1))
    invitation.refresh_from_db()
    return invitation


@pytest.fixture
def alice(db):
    return make_user('alice@example.com', 'Alice', 'Adams')


@pytest.fixture
def bob(db):
    return make_user('bob@example.com', 'Bob', 'Baker')


@pytest.fixture
def carol(db):
    """User outside every group."""
    return make_user('carol@example.com', 'Carol')


@pytest.fixture
def dave(db):
    return make_user('dave@example.com', 'Dave')


@pytest.fixture
def group(alice, bob):
    """Two-member group of Alice and Bob."""
    return create_group_with_members(name='Flatmates', members=[alice, bob])


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def alice_client(alice):
    return client_for(alice)


@pytest.fixture
def bob_client(bob):
    return client_for(bob)


@pytest.fixture
def carol_client(carol):
    return client_for(carol)


@pytest.fixture
def outbox():
    """Events delivered through the in-memory backend during the test."""
    locmem.outbox.clear()
    yield locmem.outbox
    locmem.outbox.clear()
