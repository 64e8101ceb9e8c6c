# Generated manually for the activity app

import uuid
from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='ActivityLog',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('username', models.CharField(max_length=150)),
                ('role', models.CharField(max_length=10)),
                ('action', models.CharField(choices=[('LOGIN', 'Login'), ('LOGOUT', 'Logout'), ('ADD_BILL', 'Add bill'), ('UPDATE_BILL', 'Update bill'), ('DELETE_BILL', 'Delete bill'), ('CREATE_USER', 'Create user'), ('UPDATE_USER', 'Update user'), ('DELETE_USER', 'Delete user'), ('ADD_FARMER', 'Add farmer'), ('UPDATE_FARMER', 'Update farmer'), ('DELETE_FARMER', 'Delete farmer'), ('UPDATE_SETTINGS', 'Update settings'), ('ADD_PRICE_CONFIG', 'Add price config'), ('UPDATE_PRICE_CONFIG', 'Update price config'), ('DELETE_PRICE_CONFIG', 'Delete price config'), ('CREATE_SHARE_LINK', 'Create share link'), ('PRUNE_LOGS', 'Prune activity logs')], max_length=32)),
                ('details', models.TextField(blank=True)),
                ('timestamp', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='activity_logs', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'activity_logs',
                'ordering': ['-timestamp'],
            },
        ),
    ]
