"""
Trainer app models - courses, lessons and quizzes owned by trainers
"""
import uuid

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import F

from admin.models import ApprovalStatus, UserProfile


class CourseQuerySet(models.QuerySet):
    def listed(self):
        """Courses whose trainer account still exists"""
        return self.filter(trainer__isnull=False)

    def approved(self):
        return self.filter(status=ApprovalStatus.APPROVED)


class Course(models.Model):
    """Maps to the courses table"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, db_column='course_id')
    trainer = models.ForeignKey(
        UserProfile,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='courses',
        db_column='trainer_id'
    )
    title = models.CharField(max_length=255, db_column='title')
    description = models.TextField(blank=True, null=True, db_column='description')
    category = models.CharField(max_length=255, blank=True, null=True, db_column='category')
    status = models.CharField(
        max_length=20,
        choices=ApprovalStatus.choices,
        default=ApprovalStatus.PENDING,
        db_column='status'
    )
    approved_by = models.ForeignKey(
        UserProfile,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='approved_courses',
        db_column='approved_by'
    )
    approved_at = models.DateTimeField(blank=True, null=True, db_column='approved_at')
    enrollment_limit = models.PositiveIntegerField(
        blank=True,
        null=True,
        validators=[MinValueValidator(1)],
        db_column='enrollment_limit'
    )
    created_at = models.DateTimeField(auto_now_add=True, db_column='created_at')
    updated_at = models.DateTimeField(auto_now=True, db_column='updated_at')

    objects = CourseQuerySet.as_manager()

    class Meta:
        db_table = 'courses'
        ordering = ['-created_at']

    def __str__(self):
        return self.title

    @property
    def is_approved(self):
        return self.status == ApprovalStatus.APPROVED


class Lesson(models.Model):
    """Maps to the lessons table"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, db_column='lesson_id')
    course = models.ForeignKey(Course, on_delete=models.CASCADE, related_name='lessons', db_column='course_id')
    title = models.CharField(max_length=255, db_column='title')
    content = models.TextField(blank=True, null=True, db_column='content')
    file_path = models.CharField(max_length=500, blank=True, null=True, db_column='file_path')
    order = models.PositiveIntegerField(blank=True, null=True, db_column='lesson_order')
    # minutes; null means unlimited
    duration = models.PositiveIntegerField(blank=True, null=True, db_column='duration')
    created_at = models.DateTimeField(auto_now_add=True, db_column='created_at')
    updated_at = models.DateTimeField(auto_now=True, db_column='updated_at')

    class Meta:
        db_table = 'lessons'
        ordering = [F('order').asc(nulls_last=True), 'created_at', 'id']

    def __str__(self):
        return f"{self.course.title} - {self.title}"


class Quiz(models.Model):
    """Maps to the quizzes table"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, db_column='quiz_id')
    course = models.ForeignKey(Course, on_delete=models.CASCADE, related_name='quizzes', db_column='course_id')
    trainer = models.ForeignKey(
        UserProfile, on_delete=models.SET_NULL, null=True, blank=True, related_name='quizzes', db_column='trainer_id'
    )
    title = models.CharField(max_length=255, db_column='title')
    description = models.TextField(blank=True, null=True, db_column='description')
    time_limit = models.PositiveIntegerField(
        blank=True,
        null=True,
        validators=[MinValueValidator(1)],
        db_column='time_limit'
    )
    passing_score = models.PositiveIntegerField(
        default=70,
        validators=[MinValueValidator(0), MaxValueValidator(100)],
        db_column='passing_score'
    )
    is_active = models.BooleanField(default=True, db_column='is_active')
    created_at = models.DateTimeField(auto_now_add=True, db_column='created_at')
    updated_at = models.DateTimeField(auto_now=True, db_column='updated_at')

    class Meta:
        db_table = 'quizzes'
        ordering = ['-created_at']

    def __str__(self):
        return self.title


class QuizQuestion(models.Model):
    """Maps to the quiz_questions table"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, db_column='question_id')
    quiz = models.ForeignKey(Quiz, on_delete=models.CASCADE, related_name='questions', db_column='quiz_id')
    question = models.TextField(db_column='question')
    options = models.JSONField(default=list, db_column='options')
    correct_answer = models.PositiveIntegerField(db_column='correct_answer')
    points = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)], db_column='points')
    order = models.PositiveIntegerField(default=0, db_column='question_order')
    created_at = models.DateTimeField(auto_now_add=True, db_column='created_at')
    updated_at = models.DateTimeField(auto_now=True, db_column='updated_at')

    class Meta:
        db_table = 'quiz_questions'
        ordering = ['quiz', 'order']

    def __str__(self):
        return f"{self.quiz.title} - Q{self.order + 1}"
