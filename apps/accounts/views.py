from rest_framework import status, viewsets
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework_simplejwt.exceptions import InvalidToken, TokenError
from rest_framework_simplejwt.serializers import TokenRefreshSerializer
from rest_framework_simplejwt.tokens import RefreshToken
from drf_spectacular.utils import extend_schema

from apps.core.exceptions import BadRequestError
from apps.core.responses import success_response
from apps.groups.serializers import UserGroupSerializer
from apps.invitations.serializers import InvitationSerializer
from apps.invitations.services import get_received_invitations, get_sent_invitations
from apps.lists.serializers import ItemCreateSerializer, ShoppingListSerializer, item_with_totals

from .serializers import (
    AuthResponseSerializer,
    RefreshTokenSerializer,
    SigninSerializer,
    SignupSerializer,
    TokensSerializer,
    UserSerializer,
    UserUpdateSerializer,
)
from .services import (
    add_personal_item,
    authenticate_user,
    clear_personal_list,
    delete_user_account,
    ensure_account_owner,
    get_personal_list,
    get_user_groups,
    get_user_profile,
    register_user,
    update_user_profile,
)

UUID_PATTERN = '[0-9a-fA-F-]{36}'


def _tokens_for(user) -> dict:
    refresh = RefreshToken.for_user(user)
    return {
        'refresh': str(refresh),
        'access': str(refresh.access_token),
    }


# =============================================================================
# Authentication
# =============================================================================

@extend_schema(
    request=SignupSerializer,
    responses={201: AuthResponseSerializer},
    description="Create an account (and its personal list) and receive JWT tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def signup(request):
    serializer = SignupSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    user = register_user(**serializer.validated_data)

    return success_response({
        'user': UserSerializer(user).data,
        'tokens': _tokens_for(user),
    }, 'Account created successfully', status.HTTP_201_CREATED)


@extend_schema(
    request=SigninSerializer,
    responses={200: AuthResponseSerializer},
    description="Authenticate with email and password to receive JWT tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def signin(request):
    serializer = SigninSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    user = authenticate_user(request=request, **serializer.validated_data)

    return success_response({
        'user': UserSerializer(user).data,
        'tokens': _tokens_for(user),
    }, 'Signed in successfully')


@extend_schema(
    request=RefreshTokenSerializer,
    description="Sign out. The refresh token is validated; clients discard both tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def signout(request):
    serializer = RefreshTokenSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        RefreshToken(serializer.validated_data['refresh'])
    except TokenError:
        raise BadRequestError('Invalid refresh token')

    return success_response(None, 'Signed out successfully')


@extend_schema(
    request=RefreshTokenSerializer,
    responses={200: TokensSerializer},
    description="Exchange a refresh token for a new access token.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def refresh(request):
    serializer = TokenRefreshSerializer(data=request.data)
    try:
        serializer.is_valid(raise_exception=True)
    except TokenError as e:
        raise InvalidToken(e.args[0])

    return success_response(serializer.validated_data, 'Token refreshed successfully')


@extend_schema(
    responses={200: UserSerializer},
    description="Get the current authenticated user's profile.",
    tags=['auth'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def me(request):
    return success_response(UserSerializer(request.user).data, 'User retrieved successfully')


# =============================================================================
# Users
# =============================================================================

class UserViewSet(viewsets.ViewSet):
    """
    Account endpoints, limited to the account owner.

    retrieve: Profile
    update: Update names and/or profile picture
    destroy: Delete the account
    """

    permission_classes = [IsAuthenticated]
    lookup_value_regex = UUID_PATTERN

    @extend_schema(responses={200: UserSerializer}, tags=['users'])
    def retrieve(self, request, pk=None):
        user = get_user_profile(user_id=pk, acting_user=request.user)
        return success_response(UserSerializer(user).data, 'User retrieved successfully')

    @extend_schema(request=UserUpdateSerializer, responses={200: UserSerializer}, tags=['users'])
    def update(self, request, pk=None):
        ensure_account_owner(user_id=pk, acting_user=request.user)
        serializer = UserUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = update_user_profile(user_id=pk, acting_user=request.user, **serializer.validated_data)
        return success_response(UserSerializer(user).data, 'Profile updated successfully')

    @extend_schema(tags=['users'])
    def destroy(self, request, pk=None):
        delete_user_account(user_id=pk, acting_user=request.user)
        return success_response(None, 'Account deleted successfully')

    @extend_schema(responses={200: UserGroupSerializer(many=True)}, tags=['users'])
    @action(detail=True, methods=['get'])
    def groups(self, request, pk=None):
        memberships = get_user_groups(user_id=pk, acting_user=request.user)
        return success_response(
            UserGroupSerializer(memberships, many=True).data,
            'Groups retrieved successfully'
        )

    @extend_schema(responses={200: ShoppingListSerializer}, tags=['users'])
    @action(detail=True, methods=['get'], url_path='list', url_name='personal-list')
    def personal_list(self, request, pk=None):
        shopping_list = get_personal_list(user_id=pk, acting_user=request.user)
        return success_response(
            ShoppingListSerializer(shopping_list).data,
            'List retrieved successfully'
        )

    @extend_schema(request=ItemCreateSerializer, tags=['users'])
    @action(detail=True, methods=['post'], url_path='list/items', url_name='list-items')
    def list_items(self, request, pk=None):
        ensure_account_owner(user_id=pk, acting_user=request.user)
        serializer = ItemCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        item = add_personal_item(user_id=pk, acting_user=request.user, **serializer.validated_data)
        return success_response(
            item_with_totals(item),
            'Item added successfully',
            status.HTTP_201_CREATED
        )

    @extend_schema(responses={200: ShoppingListSerializer}, tags=['users'])
    @action(detail=True, methods=['put'], url_path='list/clear', url_name='list-clear')
    def clear_list(self, request, pk=None):
        clear_personal_list(user_id=pk, acting_user=request.user)
        shopping_list = get_personal_list(user_id=pk, acting_user=request.user)
        return success_response(
            ShoppingListSerializer(shopping_list).data,
            'List cleared successfully'
        )

    @extend_schema(responses={200: InvitationSerializer(many=True)}, tags=['users'])
    @action(detail=True, methods=['get'], url_path='invitations/received', url_name='invitations-received')
    def received_invitations(self, request, pk=None):
        ensure_account_owner(user_id=pk, acting_user=request.user)
        invitations = get_received_invitations(user=request.user)
        return success_response(
            InvitationSerializer(invitations, many=True).data,
            'Received invitations retrieved successfully'
        )

    @extend_schema(responses={200: InvitationSerializer(many=True)}, tags=['users'])
    @action(detail=True, methods=['get'], url_path='invitations/sent', url_name='invitations-sent')
    def sent_invitations(self, request, pk=None):
        ensure_account_owner(user_id=pk, acting_user=request.user)
        invitations = get_sent_invitations(user=request.user)
        return success_response(
            InvitationSerializer(invitations, many=True).data,
            'Sent invitations retrieved successfully'
        )
