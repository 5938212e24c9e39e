"""
Authentication endpoints shared by every role
- register: self-service accounts for trainers (pending approval) and workers
- login: email + password, answers with a signed bearer token
"""
import logging

from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import AuthenticationFailed, PermissionDenied
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from .authentication import issue_token
from .models import ApprovalStatus, Role, UserProfile
from .serializers import LoginSerializer, RegisterSerializer, UserProfileSerializer

logger = logging.getLogger(__name__)


@api_view(['POST'])
@permission_classes([AllowAny])
def register(request):
    """
    Request body:
    {
        "name": "Jane Doe",
        "email": "jane@example.com",
        "password": "secret123",
        "password_confirmation": "secret123",
        "role": "trainer|worker"
    }

    Trainers start pending until an admin approves them.
    """
    serializer = RegisterSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    role = serializer.validated_data['role']
    initial_status = ApprovalStatus.PENDING if role == Role.TRAINER else ApprovalStatus.APPROVED
    profile = serializer.save(status=initial_status)
    logger.info(f"Registered {profile.role} account {profile.email} ({profile.status})")

    payload = {
        'message': 'Registration successful',
        'user': UserProfileSerializer(profile).data,
    }
    if profile.status == ApprovalStatus.APPROVED:
        payload['token'] = issue_token(profile)
    else:
        payload['message'] = 'Registration successful. Your trainer account is awaiting admin approval.'
    return Response(payload, status=status.HTTP_201_CREATED)


@api_view(['POST'])
@permission_classes([AllowAny])
def login(request):
    """
    Request body:
    {
        "email": "user@example.com",
        "password": "password123"
    }

    Response:
    {
        "message": "Login successful",
        "user": {...},
        "token": "<jwt>"
    }
    """
    serializer = LoginSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    email = serializer.validated_data['email'].strip().lower()
    password = serializer.validated_data['password']

    # case-insensitive email lookup
    user = UserProfile.objects.filter(email__iexact=email).first()
    if user is None or not user.check_password(password):
        logger.warning(f"Failed login attempt for {email}")
        raise AuthenticationFailed('Invalid email or password')

    if user.role == Role.TRAINER and user.status != ApprovalStatus.APPROVED:
        if user.status == ApprovalStatus.REJECTED:
            raise PermissionDenied('Your trainer account has been rejected.')
        raise PermissionDenied('Your trainer account is pending admin approval.')

    user.last_login = timezone.now()
    user.save(update_fields=['last_login'])
    logger.info(f"User {user.email} logged in as {user.role}")

    return Response({
        'message': 'Login successful',
        'user': UserProfileSerializer(user).data,
        'token': issue_token(user),
    })
