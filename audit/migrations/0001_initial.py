# Generated manually for the AuditEntry model

from django.conf import settings
import django.core.serializers.json
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='AuditEntry',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('action', models.CharField(choices=[('CREATE', 'Create'), ('UPDATE', 'Update'), ('DELETE', 'Delete')], help_text='Type of action performed', max_length=10)),
                ('entity_type', models.CharField(choices=[('expense', 'Expense'), ('income', 'Income'), ('customer-payment', 'Customer Payment'), ('customer', 'Customer'), ('employee', 'Employee'), ('landlord', 'Landlord'), ('project', 'Project'), ('category', 'Category')], help_text='Type of record affected', max_length=30)),
                ('entity_id', models.CharField(help_text='ID of the record affected', max_length=64)),
                ('changes_old', models.JSONField(blank=True, encoder=django.core.serializers.json.DjangoJSONEncoder, help_text='Record state before the action (empty for creations)', null=True)),
                ('changes_new', models.JSONField(blank=True, encoder=django.core.serializers.json.DjangoJSONEncoder, help_text='Record state after the action (empty for deletions)', null=True)),
                ('user_agent', models.TextField(blank=True, default='', help_text='User agent string from request')),
                ('ip_address', models.GenericIPAddressField(blank=True, help_text='IP address of the user', null=True)),
                ('description', models.TextField(help_text='Human-readable description of the action')),
                ('timestamp', models.DateTimeField(auto_now_add=True, help_text='When the entry was written')),
                ('owner', models.ForeignKey(help_text='User who performed the action', on_delete=django.db.models.deletion.CASCADE, related_name='audit_entries', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Audit Entry',
                'verbose_name_plural': 'Audit Entries',
                'ordering': ['-timestamp', '-id'],
                'indexes': [
                    models.Index(fields=['owner', '-timestamp'], name='audit_owner_ts_idx'),
                    models.Index(fields=['owner', 'entity_type', '-timestamp'], name='audit_owner_type_ts_idx'),
                    models.Index(fields=['owner', 'action', '-timestamp'], name='audit_owner_action_ts_idx'),
                    models.Index(fields=['owner', 'entity_id', '-timestamp'], name='audit_owner_entity_ts_idx'),
                ],
            },
        ),
    ]
