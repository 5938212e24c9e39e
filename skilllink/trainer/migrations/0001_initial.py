import uuid

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('skilllink_admin', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Course',
            fields=[
                ('id', models.UUIDField(db_column='course_id', default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('title', models.CharField(db_column='title', max_length=255)),
                ('description', models.TextField(blank=True, db_column='description', null=True)),
                ('category', models.CharField(blank=True, db_column='category', max_length=255, null=True)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('approved', 'Approved'), ('rejected', 'Rejected')], db_column='status', default='pending', max_length=20)),
                ('approved_at', models.DateTimeField(blank=True, db_column='approved_at', null=True)),
                ('enrollment_limit', models.PositiveIntegerField(blank=True, db_column='enrollment_limit', null=True, validators=[django.core.validators.MinValueValidator(1)])),
                ('created_at', models.DateTimeField(auto_now_add=True, db_column='created_at')),
                ('updated_at', models.DateTimeField(auto_now=True, db_column='updated_at')),
                ('approved_by', models.ForeignKey(blank=True, db_column='approved_by', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='approved_courses', to='skilllink_admin.userprofile')),
                ('trainer', models.ForeignKey(blank=True, db_column='trainer_id', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='courses', to='skilllink_admin.userprofile')),
            ],
            options={
                'db_table': 'courses',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='Lesson',
            fields=[
                ('id', models.UUIDField(db_column='lesson_id', default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('title', models.CharField(db_column='title', max_length=255)),
                ('content', models.TextField(blank=True, db_column='content', null=True)),
                ('file_path', models.CharField(blank=True, db_column='file_path', max_length=500, null=True)),
                ('order', models.PositiveIntegerField(blank=True, db_column='lesson_order', null=True)),
                ('duration', models.PositiveIntegerField(blank=True, db_column='duration', null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_column='created_at')),
                ('updated_at', models.DateTimeField(auto_now=True, db_column='updated_at')),
                ('course', models.ForeignKey(db_column='course_id', on_delete=django.db.models.deletion.CASCADE, related_name='lessons', to='trainer.course')),
            ],
            options={
                'db_table': 'lessons',
                'ordering': [models.OrderBy(models.F('order'), nulls_last=True), 'created_at', 'id'],
            },
        ),
        migrations.CreateModel(
            name='Quiz',
            fields=[
                ('id', models.UUIDField(db_column='quiz_id', default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('title', models.CharField(db_column='title', max_length=255)),
                ('description', models.TextField(blank=True, db_column='description', null=True)),
                ('time_limit', models.PositiveIntegerField(blank=True, db_column='time_limit', null=True, validators=[django.core.validators.MinValueValidator(1)])),
                ('passing_score', models.PositiveIntegerField(db_column='passing_score', default=70, validators=[django.core.validators.MinValueValidator(0), django.core.validators.MaxValueValidator(100)])),
                ('is_active', models.BooleanField(db_column='is_active', default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_column='created_at')),
                ('updated_at', models.DateTimeField(auto_now=True, db_column='updated_at')),
                ('course', models.ForeignKey(db_column='course_id', on_delete=django.db.models.deletion.CASCADE, related_name='quizzes', to='trainer.course')),
                ('trainer', models.ForeignKey(db_column='trainer_id', on_delete=django.db.models.deletion.CASCADE, related_name='quizzes', to='skilllink_admin.userprofile')),
            ],
            options={
                'db_table': 'quizzes',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='QuizQuestion',
            fields=[
                ('id', models.UUIDField(db_column='question_id', default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('question', models.TextField(db_column='question')),
                ('options', models.JSONField(db_column='options', default=list)),
                ('correct_answer', models.PositiveIntegerField(db_column='correct_answer')),
                ('points', models.PositiveIntegerField(db_column='points', default=1, validators=[django.core.validators.MinValueValidator(1)])),
                ('order', models.PositiveIntegerField(db_column='question_order', default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_column='created_at')),
                ('updated_at', models.DateTimeField(auto_now=True, db_column='updated_at')),
                ('quiz', models.ForeignKey(db_column='quiz_id', on_delete=django.db.models.deletion.CASCADE, related_name='questions', to='trainer.quiz')),
            ],
            options={
                'db_table': 'quiz_questions',
                'ordering': ['quiz', 'order'],
            },
        ),
    ]
