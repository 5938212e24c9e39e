"""
Account models - every actor of the platform is a UserProfile with one role
"""
import uuid

from django.contrib.auth.hashers import check_password, make_password
from django.db import models


class Role(models.TextChoices):
    ADMIN = 'admin', 'Admin'
    TRAINER = 'trainer', 'Trainer'
    WORKER = 'worker', 'Worker'


class ApprovalStatus(models.TextChoices):
    """Approval gate shared by trainer accounts and courses"""
    PENDING = 'pending', 'Pending'
    APPROVED = 'approved', 'Approved'
    REJECTED = 'rejected', 'Rejected'


class UserProfile(models.Model):
    """Platform account. Status only gates trainers; workers and admins are approved on creation."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, db_column='user_id')
    name = models.CharField(max_length=255, db_column='name')
    email = models.EmailField(max_length=255, unique=True, db_column='email')
    password_hash = models.CharField(max_length=255, db_column='password_hash')
    role = models.CharField(max_length=20, choices=Role.choices, default=Role.WORKER, db_column='role')
    status = models.CharField(max_length=20, choices=ApprovalStatus.choices, default=ApprovalStatus.APPROVED, db_column='status')
    last_login = models.DateTimeField(blank=True, null=True, db_column='last_login')
    created_at = models.DateTimeField(auto_now_add=True, db_column='created_at')
    updated_at = models.DateTimeField(auto_now=True, db_column='updated_at')

    class Meta:
        db_table = 'users'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.name} <{self.email}>"

    # DRF treats the authenticated UserProfile as request.user
    @property
    def is_authenticated(self):
        return True

    @property
    def is_anonymous(self):
        return False

    def set_password(self, raw_password):
        self.password_hash = make_password(raw_password)

    def check_password(self, raw_password):
        if not self.password_hash:
            return False
        return check_password(raw_password, self.password_hash)
