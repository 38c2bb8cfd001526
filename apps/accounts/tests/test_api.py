import pytest
from decimal import Decimal
from django.urls import reverse
from rest_framework import status
from rest_framework_simplejwt.tokens import RefreshToken

from apps.accounts.models import User
from apps.accounts.services import add_personal_item
from apps.groups.services import create_group_with_members
from apps.invitations.services import start_group
from apps.lists.models import ShoppingList

from .conftest import gif


# =============================================================================
# Authentication Tests
# =============================================================================

@pytest.mark.django_db
class TestSignup:
    """Tests for POST /api/auth/signup/"""

    def test_signup_success(self, api_client):
        url = reverse('accounts:signup')
        data = {
            'email': 'newuser@example.com',
            'password': 'SecurePass123!',
            'first_name': 'New',
        }
        response = api_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        body = response.data
        assert body['success'] is True
        assert body['status'] == 201
        assert body['data']['user']['email'] == 'newuser@example.com'
        assert len(body['data']['user']['user_code']) == 7
        assert 'access' in body['data']['tokens']
        assert 'refresh' in body['data']['tokens']
        assert 'password' not in body['data']['user']

        user = User.objects.get(email='newuser@example.com')
        assert ShoppingList.objects.filter(owner_user=user).exists()

    def test_signup_duplicate_email(self, api_client, user):
        url = reverse('accounts:signup')
        data = {
            'email': 'testuser@example.com',
            'password': 'SecurePass123!',
            'first_name': 'Dup',
        }
        response = api_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['success'] is False

    def test_signup_weak_password(self, api_client):
        url = reverse('accounts:signup')
        data = {
            'email': 'weak@example.com',
            'password': '123',
            'first_name': 'Weak',
        }
        response = api_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['errorMessage'].startswith('password:')

    def test_signup_missing_first_name(self, api_client):
        url = reverse('accounts:signup')
        response = api_client.post(url, {'email': 'a@example.com', 'password': 'SecurePass123!'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'first_name' in response.data['errorMessage']


@pytest.mark.django_db
class TestSignin:
    """Tests for POST /api/auth/signin/"""

    def test_signin_success(self, api_client, user):
        url = reverse('accounts:signin')
        response = api_client.post(url, {'email': 'testuser@example.com', 'password': 'TestPass123!'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['data']['user']['id'] == str(user.id)
        assert 'access' in response.data['data']['tokens']

    def test_signin_wrong_password(self, api_client, user):
        url = reverse('accounts:signin')
        response = api_client.post(url, {'email': 'testuser@example.com', 'password': 'WrongPass!'}, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data['errorMessage'] == 'Invalid credentials'

    def test_signin_inactive_user(self, api_client, user_inactive):
        url = reverse('accounts:signin')
        response = api_client.post(url, {'email': 'inactive@example.com', 'password': 'TestPass123!'}, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestTokens:
    """Tests for /api/auth/refresh/, /signout/ and /me/"""

    def test_refresh(self, api_client, user):
        refresh = RefreshToken.for_user(user)

        url = reverse('accounts:refresh')
        response = api_client.post(url, {'refresh': str(refresh)}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert 'access' in response.data['data']

    def test_refresh_invalid_token(self, api_client):
        url = reverse('accounts:refresh')
        response = api_client.post(url, {'refresh': 'not-a-token'}, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data['success'] is False

    def test_signout(self, authenticated_client, user):
        refresh = RefreshToken.for_user(user)

        url = reverse('accounts:signout')
        response = authenticated_client.post(url, {'refresh': str(refresh)}, format='json')

        assert response.status_code == status.HTTP_200_OK

    def test_signout_invalid_token(self, authenticated_client):
        url = reverse('accounts:signout')
        response = authenticated_client.post(url, {'refresh': 'garbage'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['errorMessage'] == 'Invalid refresh token'

    def test_me(self, authenticated_client, user):
        url = reverse('accounts:me')
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['data']['user_code'] == user.user_code

    def test_me_unauthenticated(self, api_client):
        url = reverse('accounts:me')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data['success'] is False


# =============================================================================
# User Endpoint Tests
# =============================================================================

@pytest.mark.django_db
class TestUserProfile:
    """Tests for /api/users/{id}/"""

    def test_get_own_profile(self, authenticated_client, user):
        url = reverse('accounts:user-detail', kwargs={'pk': user.id})
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['data']['email'] == user.email

    def test_get_other_profile_forbidden(self, authenticated_client, other_user):
        url = reverse('accounts:user-detail', kwargs={'pk': other_user.id})
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_update_names(self, authenticated_client, user):
        url = reverse('accounts:user-detail', kwargs={'pk': user.id})
        response = authenticated_client.put(url, {'first_name': 'Updated'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        user.refresh_from_db()
        assert user.first_name == 'Updated'

    def test_update_requires_a_field(self, authenticated_client, user):
        url = reverse('accounts:user-detail', kwargs={'pk': user.id})
        response = authenticated_client.put(url, {}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_upload_profile_pic(self, authenticated_client, user, media_root):
        url = reverse('accounts:user-detail', kwargs={'pk': user.id})
        response = authenticated_client.put(url, {'profile_pic': gif()}, format='multipart')

        assert response.status_code == status.HTTP_200_OK
        assert f'profile-pics/{user.id}/' in response.data['data']['profile_pic']

    def test_reject_non_image(self, authenticated_client, user, media_root):
        from django.core.files.uploadedfile import SimpleUploadedFile

        url = reverse('accounts:user-detail', kwargs={'pk': user.id})
        bogus = SimpleUploadedFile('notes.txt', b'not an image', content_type='text/plain')
        response = authenticated_client.put(url, {'profile_pic': bogus}, format='multipart')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_delete_account(self, authenticated_client, user):
        url = reverse('accounts:user-detail', kwargs={'pk': user.id})
        response = authenticated_client.delete(url)

        assert response.status_code == status.HTTP_200_OK
        assert not User.objects.filter(id=user.id).exists()

    def test_delete_other_account_forbidden(self, authenticated_client, other_user):
        url = reverse('accounts:user-detail', kwargs={'pk': other_user.id})
        response = authenticated_client.delete(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert User.objects.filter(id=other_user.id).exists()


@pytest.mark.django_db
class TestUserCollections:
    """Tests for the user's groups, personal list and invitations."""

    def test_groups(self, authenticated_client, user, other_user):
        create_group_with_members(name='Pair', members=[user, other_user])

        url = reverse('accounts:user-groups', kwargs={'pk': user.id})
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['data'][0]['group']['name'] == 'Pair'
        assert response.data['data'][0]['member_count'] == 2

    def test_personal_list(self, authenticated_client, user):
        add_personal_item(user_id=user.id, acting_user=user, name='Milk', price=Decimal('2.00'))

        url = reverse('accounts:user-personal-list', kwargs={'pk': user.id})
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['data']['item_count'] == 1
        assert response.data['data']['expected_total'] == '2.00'

    def test_add_personal_item(self, authenticated_client, user):
        url = reverse('accounts:user-list-items', kwargs={'pk': user.id})
        response = authenticated_client.post(
            url,
            {'name': 'Milk', 'price': '3.99', 'quantity': 2, 'status': 'NEEDED'},
            format='json'
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['data']['item']['name'] == 'Milk'
        assert response.data['data']['list']['expected_total'] == '7.98'

    def test_add_item_to_other_users_list(self, authenticated_client, other_user):
        url = reverse('accounts:user-list-items', kwargs={'pk': other_user.id})
        response = authenticated_client.post(url, {'name': 'Milk'}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_clear_personal_list(self, authenticated_client, user):
        add_personal_item(user_id=user.id, acting_user=user, name='Milk', price=Decimal('2.00'))

        url = reverse('accounts:user-list-clear', kwargs={'pk': user.id})
        response = authenticated_client.put(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['data']['items'] == []
        assert response.data['data']['expected_total'] == '0.00'

    def test_received_and_sent_invitations(self, authenticated_client, user, other_user):
        start_group(from_user=other_user, to_user_code=user.user_code, group_name='Received')
        start_group(from_user=user, to_user_code=User.objects.create_user(
            email='x@example.com', password='TestPass123!', first_name='X'
        ).user_code, group_name='Sent')

        response = authenticated_client.get(reverse('accounts:user-invitations-received', kwargs={'pk': user.id}))
        assert response.status_code == status.HTTP_200_OK
        assert [inv['group_name'] for inv in response.data['data']] == ['Received']

        response = authenticated_client.get(reverse('accounts:user-invitations-sent', kwargs={'pk': user.id}))
        assert response.status_code == status.HTTP_200_OK
        assert [inv['group_name'] for inv in response.data['data']] == ['Sent']

    def test_other_users_invitations_forbidden(self, authenticated_client, other_user):
        url = reverse('accounts:user-invitations-received', kwargs={'pk': other_user.id})
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN
