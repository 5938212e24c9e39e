import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('skilllink_admin', '0001_initial'),
        ('trainer', '0001_initial'),
    ]

    operations = [
        migrations.AlterField(
            model_name='quiz',
            name='trainer',
            field=models.ForeignKey(blank=True, db_column='trainer_id', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='quizzes', to='skilllink_admin.userprofile'),
        ),
    ]
