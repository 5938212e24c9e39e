"""
Worker app models - enrollments, assessments and certificates per (worker, course) pair
"""
import uuid

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from admin.models import UserProfile
from trainer.models import Course


class Enrollment(models.Model):
    """Maps to the enrollments table"""
    class Status(models.TextChoices):
        PENDING = 'pending', 'Pending'
        APPROVED = 'approved', 'Approved'

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, db_column='enrollment_id')
    worker = models.ForeignKey(UserProfile, on_delete=models.CASCADE, related_name='enrollments', db_column='worker_id')
    course = models.ForeignKey(Course, on_delete=models.CASCADE, related_name='enrollments', db_column='course_id')
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.APPROVED, db_column='status')
    progress_percentage = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=0,
        validators=[MinValueValidator(0), MaxValueValidator(100)],
        db_column='progress_percentage'
    )
    completed_at = models.DateTimeField(blank=True, null=True, db_column='completed_at')
    created_at = models.DateTimeField(auto_now_add=True, db_column='created_at')
    updated_at = models.DateTimeField(auto_now=True, db_column='updated_at')

    class Meta:
        db_table = 'enrollments'
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(fields=['worker', 'course'], name='unique_enrollment_per_worker_course'),
        ]

    def __str__(self):
        return f"{self.worker.name} - {self.course.title}"


class Assessment(models.Model):
    """Maps to the assessments table"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, db_column='assessment_id')
    worker = models.ForeignKey(UserProfile, on_delete=models.CASCADE, related_name='assessments', db_column='worker_id')
    course = models.ForeignKey(Course, on_delete=models.CASCADE, related_name='assessments', db_column='course_id')
    score = models.PositiveIntegerField(validators=[MinValueValidator(0), MaxValueValidator(100)], db_column='score')
    remarks = models.TextField(blank=True, null=True, db_column='remarks')
    completed_at = models.DateTimeField(blank=True, null=True, db_column='completed_at')
    created_at = models.DateTimeField(auto_now_add=True, db_column='created_at')
    updated_at = models.DateTimeField(auto_now=True, db_column='updated_at')

    class Meta:
        db_table = 'assessments'
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(fields=['worker', 'course'], name='unique_assessment_per_worker_course'),
        ]

    def __str__(self):
        return f"{self.worker.name} - {self.course.title}: {self.score}"

    @property
    def passed(self):
        return self.score >= settings.ASSESSMENT_PASSING_SCORE

    @property
    def result(self):
        return 'passed' if self.passed else 'failed'


class Certificate(models.Model):
    """Maps to the certificates table"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, db_column='certificate_id')
    worker = models.ForeignKey(UserProfile, on_delete=models.CASCADE, related_name='certificates', db_column='worker_id')
    course = models.ForeignKey(Course, on_delete=models.CASCADE, related_name='certificates', db_column='course_id')
    certificate_path = models.CharField(max_length=500, db_column='certificate_path')
    issued_at = models.DateTimeField(db_column='issued_at')
    created_at = models.DateTimeField(auto_now_add=True, db_column='created_at')
    updated_at = models.DateTimeField(auto_now=True, db_column='updated_at')

    class Meta:
        db_table = 'certificates'
        ordering = ['-issued_at']
        constraints = [
            models.UniqueConstraint(fields=['worker', 'course'], name='unique_certificate_per_worker_course'),
        ]

    def __str__(self):
        return f"Certificate: {self.worker.name} - {self.course.title}"
