"""
Role-based access control for API views.

Anonymous requests get False so DRF answers 401; authenticated users with
the wrong role get 403 with the class message.
"""
from rest_framework import permissions

from admin.models import Role


class _RolePermission(permissions.BasePermission):
    roles = ()

    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False
        return getattr(request.user, 'role', None) in self.roles


class IsAdminRole(_RolePermission):
    """Only admins"""
    roles = (Role.ADMIN,)
    message = 'Forbidden: admins only'


class IsTrainerRole(_RolePermission):
    """Only trainers"""
    roles = (Role.TRAINER,)
    message = 'Forbidden: trainers only'


class IsWorkerRole(_RolePermission):
    """Only workers"""
    roles = (Role.WORKER,)
    message = 'Forbidden: workers only'


class IsTrainerOrAdmin(_RolePermission):
    """Only trainers and admins"""
    roles = (Role.TRAINER, Role.ADMIN)
    message = 'Forbidden: trainers or admins only'
