"""
JWT bearer authentication for the UserProfile model
"""
import datetime

import jwt
from django.conf import settings
from django.core.exceptions import ValidationError
from django.utils import timezone
from rest_framework.authentication import BaseAuthentication
from rest_framework.exceptions import AuthenticationFailed

from .models import UserProfile


def issue_token(profile):
    """Sign a bearer token for the given profile."""
    now = timezone.now()
    payload = {
        'user_id': str(profile.id),
        'email': profile.email,
        'role': profile.role,
        'iat': now,
        'exp': now + datetime.timedelta(hours=settings.JWT_EXPIRATION_HOURS),
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


class JWTAuthentication(BaseAuthentication):
    """
    Authenticates ``Authorization: Bearer <token>`` headers.
    Requests without a bearer header stay anonymous so the permission
    layer can answer 401.
    """
    keyword = 'Bearer'

    def authenticate(self, request):
        auth_header = request.META.get('HTTP_AUTHORIZATION', '')

        if not auth_header.startswith(f'{self.keyword} '):
            return None

        token = auth_header[len(self.keyword) + 1:].strip()
        if not token:
            raise AuthenticationFailed('Invalid token')

        try:
            payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
        except jwt.ExpiredSignatureError:
            raise AuthenticationFailed('Token has expired')
        except jwt.InvalidTokenError:
            raise AuthenticationFailed('Invalid token')

        user_id = payload.get('user_id')
        if not user_id:
            raise AuthenticationFailed('Invalid token: missing user_id')

        try:
            profile = UserProfile.objects.get(id=user_id)
        except (UserProfile.DoesNotExist, ValidationError):
            raise AuthenticationFailed('User not found')

        return (profile, token)

    def authenticate_header(self, request):
        return f'{self.keyword} realm="api"'
