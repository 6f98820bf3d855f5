"""
Session authentication endpoints.

Login and registration start a server-side session (cookie based);
logout ends it. ``/api/user`` reports the identity bound to the current
session and ``/api/users`` lists accounts for staff assignment.
"""
from __future__ import annotations

import structlog
from django.contrib.auth import authenticate, login, logout
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.exceptions import AuthenticationFailed
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from clinic.permissions import UserDirectoryPolicy
from clinic.serializers.auth import LoginSerializer, RegisterSerializer, UserSerializer
from clinic.services import users as user_service
from clinic.throttling import LoginRateThrottle

logger = structlog.get_logger(__name__)


@api_view(['POST'])
@permission_classes([AllowAny])
def register_view(request):
    """Create an account.

    A self-registration signs the new account in; an authenticated caller
    registering someone else keeps their own session.
    """
    s = RegisterSerializer(data=request.data, context={'request': request})
    s.is_valid(raise_exception=True)
    user = user_service.create_user(**s.validated_data)
    actor = request.user
    if actor.is_authenticated:
        logger.info('auth.registered', user_id=user.id, role=user.role, registered_by=actor.id)
    else:
        login(request, user, backend='django.contrib.auth.backends.ModelBackend')
        logger.info('auth.registered', user_id=user.id, role=user.role)
    return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)


@api_view(['POST'])
@permission_classes([AllowAny])
@throttle_classes([LoginRateThrottle])
def login_view(request):
    s = LoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data

    user = authenticate(request, email=vd['email'], password=vd['password'])
    if user is None:
        logger.warning('auth.login_failed', email=vd['email'], ip=request.META.get('REMOTE_ADDR'))
        raise AuthenticationFailed('Invalid email or password')

    login(request, user)
    logger.info('auth.login', user_id=user.id, role=user.role)
    return Response(UserSerializer(user).data)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def logout_view(request):
    user_id = request.user.id
    logout(request)
    logger.info('auth.logout', user_id=user_id)
    return Response({'message': 'Logged out'})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def current_user_view(request):
    return Response(UserSerializer(request.user).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated, UserDirectoryPolicy])
def users_view(request):
    return Response(UserSerializer(user_service.list_users(), many=True).data)
