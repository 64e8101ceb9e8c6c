from rest_framework import status, viewsets, serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.activity.models import ActivityAction
from apps.activity.services import log_activity

from .access import Action
from .permissions import HasViewAction, requires, FORBIDDEN
from .serializers import (
    UserSerializer,
    UserLoginSerializer,
    UserCreateSerializer,
    UserUpdateSerializer,
)
from .services import (
    authenticate_user,
    issue_tokens,
    list_users,
    create_user,
    update_user,
    delete_user,
    # Exceptions
    InvalidCredentialsError,
    InactiveAccountError,
    UserNotFoundError,
    DuplicateUsernameError,
    AccessDeniedError,
)


# Response serializers for API documentation
class TokensResponseSerializer(serializers.Serializer):
    refresh = serializers.CharField()
    access = serializers.CharField()


class AuthResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    user = UserSerializer()
    tokens = TokensResponseSerializer()


class MessageResponseSerializer(serializers.Serializer):
    message = serializers.CharField()


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()


@extend_schema(
    request=UserLoginSerializer,
    responses={
        200: AuthResponseSerializer,
        400: ErrorResponseSerializer,
        401: ErrorResponseSerializer,
        403: ErrorResponseSerializer,
    },
    description="Authenticate with username and password to receive JWT tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def login(request):
    """Login with username and password."""
    serializer = UserLoginSerializer(data=request.data)

    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        user = authenticate_user(**serializer.validated_data)
    except InvalidCredentialsError:
        return Response({
            'error': 'Invalid credentials'
        }, status=status.HTTP_401_UNAUTHORIZED)
    except InactiveAccountError:
        return Response({
            'error': 'Account is deactivated'
        }, status=status.HTTP_403_FORBIDDEN)

    return Response({
        'message': 'Login successful',
        'user': UserSerializer(user).data,
        'tokens': issue_tokens(user),
    })


@extend_schema(
    request=None,
    responses={200: MessageResponseSerializer},
    description="Logout and record the event in the audit trail.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def logout(request):
    """Logout. Tokens are stateless; the client discards them."""
    log_activity(actor=request.user, action=ActivityAction.LOGOUT, details='User logged out')
    return Response({'message': 'Logout successful'})


@extend_schema(
    responses={200: UserSerializer},
    description="Get the current authenticated user's profile.",
    tags=['auth'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, requires(Action.PROFILE_READ)])
def get_current_user(request):
    """Get current authenticated user profile."""
    return Response(UserSerializer(request.user).data)


class UserViewSet(viewsets.ViewSet):
    """
    User management (root only).

    list: All users sorted by username
    create: Create an admin user (root users only by the super root)
    partial_update / update: Edit username, password or role
    destroy: Delete a user
    """

    permission_classes = [IsAuthenticated, HasViewAction]
    lookup_value_regex = '[0-9a-fA-F-]{36}'
    required_actions = {
        'list': Action.USER_LIST,
        'create': Action.USER_CREATE,
        'update': Action.USER_UPDATE,
        'partial_update': Action.USER_UPDATE,
        'destroy': Action.USER_DELETE,
    }

    @extend_schema(responses={200: UserSerializer(many=True)}, tags=['users'])
    def list(self, request):
        users = list_users(actor=request.user)
        return Response(UserSerializer(users, many=True).data)

    @extend_schema(request=UserCreateSerializer, responses={201: UserSerializer}, tags=['users'])
    def create(self, request):
        serializer = UserCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            user = create_user(actor=request.user, **serializer.validated_data)
        except AccessDeniedError:
            return Response({'error': FORBIDDEN}, status=status.HTTP_403_FORBIDDEN)
        except DuplicateUsernameError as e:
            return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)

        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=UserUpdateSerializer, responses={200: UserSerializer}, tags=['users'])
    def partial_update(self, request, pk=None):
        serializer = UserUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            user = update_user(actor=request.user, user_id=pk, **serializer.validated_data)
        except UserNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except AccessDeniedError:
            return Response({'error': FORBIDDEN}, status=status.HTTP_403_FORBIDDEN)
        except DuplicateUsernameError as e:
            return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)

        return Response(UserSerializer(user).data)

    @extend_schema(request=UserUpdateSerializer, responses={200: UserSerializer}, tags=['users'])
    def update(self, request, pk=None):
        return self.partial_update(request, pk=pk)

    @extend_schema(responses={204: None}, tags=['users'])
    def destroy(self, request, pk=None):
        try:
            delete_user(actor=request.user, user_id=pk)
        except UserNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except AccessDeniedError:
            return Response({'error': FORBIDDEN}, status=status.HTTP_403_FORBIDDEN)

        return Response(status=status.HTTP_204_NO_CONTENT)
