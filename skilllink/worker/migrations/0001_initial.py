import uuid

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('skilllink_admin', '0001_initial'),
        ('trainer', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Enrollment',
            fields=[
                ('id', models.UUIDField(db_column='enrollment_id', default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('approved', 'Approved')], db_column='status', default='approved', max_length=20)),
                ('progress_percentage', models.DecimalField(db_column='progress_percentage', decimal_places=2, default=0, max_digits=5, validators=[django.core.validators.MinValueValidator(0), django.core.validators.MaxValueValidator(100)])),
                ('completed_at', models.DateTimeField(blank=True, db_column='completed_at', null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_column='created_at')),
                ('updated_at', models.DateTimeField(auto_now=True, db_column='updated_at')),
                ('course', models.ForeignKey(db_column='course_id', on_delete=django.db.models.deletion.CASCADE, related_name='enrollments', to='trainer.course')),
                ('worker', models.ForeignKey(db_column='worker_id', on_delete=django.db.models.deletion.CASCADE, related_name='enrollments', to='skilllink_admin.userprofile')),
            ],
            options={
                'db_table': 'enrollments',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='Assessment',
            fields=[
                ('id', models.UUIDField(db_column='assessment_id', default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('score', models.PositiveIntegerField(db_column='score', validators=[django.core.validators.MinValueValidator(0), django.core.validators.MaxValueValidator(100)])),
                ('remarks', models.TextField(blank=True, db_column='remarks', null=True)),
                ('completed_at', models.DateTimeField(blank=True, db_column='completed_at', null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_column='created_at')),
                ('updated_at', models.DateTimeField(auto_now=True, db_column='updated_at')),
                ('course', models.ForeignKey(db_column='course_id', on_delete=django.db.models.deletion.CASCADE, related_name='assessments', to='trainer.course')),
                ('worker', models.ForeignKey(db_column='worker_id', on_delete=django.db.models.deletion.CASCADE, related_name='assessments', to='skilllink_admin.userprofile')),
            ],
            options={
                'db_table': 'assessments',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='Certificate',
            fields=[
                ('id', models.UUIDField(db_column='certificate_id', default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('certificate_path', models.CharField(db_column='certificate_path', max_length=500)),
                ('issued_at', models.DateTimeField(db_column='issued_at')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_column='created_at')),
                ('updated_at', models.DateTimeField(auto_now=True, db_column='updated_at')),
                ('course', models.ForeignKey(db_column='course_id', on_delete=django.db.models.deletion.CASCADE, related_name='certificates', to='trainer.course')),
                ('worker', models.ForeignKey(db_column='worker_id', on_delete=django.db.models.deletion.CASCADE, related_name='certificates', to='skilllink_admin.userprofile')),
            ],
            options={
                'db_table': 'certificates',
                'ordering': ['-issued_at'],
            },
        ),
        migrations.AddConstraint(
            model_name='enrollment',
            constraint=models.UniqueConstraint(fields=('worker', 'course'), name='unique_enrollment_per_worker_course'),
        ),
        migrations.AddConstraint(
            model_name='assessment',
            constraint=models.UniqueConstraint(fields=('worker', 'course'), name='unique_assessment_per_worker_course'),
        ),
        migrations.AddConstraint(
            model_name='certificate',
            constraint=models.UniqueConstraint(fields=('worker', 'course'), name='unique_certificate_per_worker_course'),
        ),
    ]
