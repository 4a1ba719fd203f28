# Generated manually for the bookkeeping models

from django.conf import settings
import django.core.validators
from django.db import migrations, models
import django.db.models.deletion


def owner_field():
    return models.ForeignKey(
        help_text='User this record belongs to',
        on_delete=django.db.models.deletion.CASCADE,
        related_name='+',
        to=settings.AUTH_USER_MODEL,
    )


def money(max_digits=14):
    return models.DecimalField(
        decimal_places=2,
        max_digits=max_digits,
        validators=[django.core.validators.MinValueValidator(0)],
    )


PAYMENT_MODES = [('cash', 'Cash'), ('online', 'Online'), ('cheque', 'Cheque')]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Project',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('name', models.CharField(max_length=100)),
                ('color', models.CharField(help_text='Hex colour used in charts', max_length=7)),
                ('location', models.CharField(max_length=500)),
                ('commence_date', models.DateField()),
                ('owner', owner_field()),
            ],
            options={
                'ordering': ['name'],
                'indexes': [models.Index(fields=['owner', 'name'], name='project_owner_name_idx')],
            },
        ),
        migrations.CreateModel(
            name='Category',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('slug', models.CharField(help_text='Stable identifier used by expenses', max_length=100)),
                ('name', models.CharField(max_length=100)),
                ('icon', models.CharField(max_length=50)),
                ('subcategories', models.JSONField(blank=True, default=list)),
                ('owner', owner_field()),
            ],
            options={
                'verbose_name_plural': 'Categories',
                'ordering': ['name'],
                'constraints': [
                    models.UniqueConstraint(fields=('owner', 'slug'), name='unique_category_slug_per_owner'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Employee',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('employee_code', models.CharField(max_length=50)),
                ('name', models.CharField(max_length=200)),
                ('job_title', models.CharField(max_length=100)),
                ('salary', money(12)),
                ('phone', models.CharField(max_length=20)),
                ('email', models.EmailField(blank=True, default='', max_length=254)),
                ('address', models.TextField()),
                ('joining_date', models.DateField()),
                ('status', models.CharField(choices=[('active', 'Active'), ('inactive', 'Inactive')], default='active', max_length=10)),
                ('owner', owner_field()),
            ],
            options={
                'ordering': ['name'],
                'indexes': [models.Index(fields=['owner', 'status'], name='employee_owner_status_idx')],
                'constraints': [
                    models.UniqueConstraint(fields=('owner', 'employee_code'), name='unique_employee_code_per_owner'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Landlord',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('name', models.CharField(max_length=200)),
                ('phone', models.CharField(blank=True, default='', max_length=20)),
                ('email', models.EmailField(blank=True, default='', max_length=254)),
                ('address', models.TextField(blank=True, default='')),
                ('properties', models.JSONField(blank=True, default=list)),
                ('bank_name', models.CharField(blank=True, default='', max_length=100)),
                ('account_number', models.CharField(blank=True, default='', max_length=50)),
                ('account_title', models.CharField(blank=True, default='', max_length=100)),
                ('preferred_payment_method', models.CharField(choices=[('bank', 'Bank'), ('cash', 'Cash'), ('check', 'Check'), ('other', 'Other')], default='cash', max_length=10)),
                ('notes', models.TextField(blank=True, default='')),
                ('owner', owner_field()),
            ],
            options={
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Income',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('amount', money()),
                ('date', models.DateField()),
                ('description', models.TextField()),
                ('payment_mode', models.CharField(choices=PAYMENT_MODES, max_length=10)),
                ('cheque_number', models.CharField(blank=True, default='', max_length=50)),
                ('transaction_id', models.CharField(blank=True, default='', max_length=100)),
                ('source', models.CharField(max_length=200)),
                ('payee', models.CharField(max_length=200)),
                ('owner', owner_field()),
            ],
            options={
                'verbose_name_plural': 'Income',
                'ordering': ['-date', '-created_at'],
                'indexes': [models.Index(fields=['owner', '-date'], name='income_owner_date_idx')],
            },
        ),
        migrations.CreateModel(
            name='Customer',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('name', models.CharField(max_length=200)),
                ('plot_number', models.CharField(max_length=50)),
                ('plot_size', money(10)),
                ('built_up_area', money(10)),
                ('sale_price', money()),
                ('price_per_yard', money(12)),
                ('construction_price', money()),
                ('construction_price_per_sqft', money(12)),
                ('phone', models.CharField(blank=True, default='', max_length=20)),
                ('email', models.EmailField(blank=True, default='', max_length=254)),
                ('address', models.TextField(blank=True, default='')),
                ('owner', owner_field()),
                ('project', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='customers', to='bookkeeping.project')),
            ],
            options={
                'ordering': ['-created_at'],
                'constraints': [
                    models.UniqueConstraint(fields=('owner', 'plot_number'), name='unique_plot_per_owner'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Expense',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('amount', money()),
                ('date', models.DateField()),
                ('category', models.CharField(max_length=100)),
                ('subcategory', models.CharField(max_length=100)),
                ('description', models.TextField()),
                ('payment_mode', models.CharField(choices=PAYMENT_MODES, max_length=10)),
                ('cheque_number', models.CharField(blank=True, default='', max_length=50)),
                ('transaction_id', models.CharField(blank=True, default='', max_length=100)),
                ('salary_month', models.CharField(blank=True, default='', help_text='YYYY-MM', max_length=7)),
                ('land_details', models.TextField(blank=True, default='')),
                ('owner', owner_field()),
                ('project', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='expenses', to='bookkeeping.project')),
                ('employee', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='salary_expenses', to='bookkeeping.employee')),
                ('landlord', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='land_expenses', to='bookkeeping.landlord')),
            ],
            options={
                'ordering': ['-date', '-created_at'],
                'indexes': [
                    models.Index(fields=['owner', '-date'], name='expense_owner_date_idx'),
                    models.Index(fields=['owner', 'category'], name='expense_owner_category_idx'),
                    models.Index(fields=['owner', 'project'], name='expense_owner_project_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='CustomerPayment',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('amount', money()),
                ('date', models.DateField()),
                ('description', models.TextField()),
                ('payment_mode', models.CharField(choices=PAYMENT_MODES, max_length=10)),
                ('cheque_number', models.CharField(blank=True, default='', max_length=50)),
                ('transaction_id', models.CharField(blank=True, default='', max_length=100)),
                ('invoice_number', models.CharField(blank=True, default='', max_length=50)),
                ('payment_category', models.CharField(choices=[('token', 'Token'), ('advance', 'Advance'), ('booking', 'Booking'), ('construction', 'Construction'), ('development', 'Development'), ('clubhouse', 'Clubhouse'), ('final', 'Final')], max_length=20)),
                ('owner', owner_field()),
                ('customer', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='payments', to='bookkeeping.customer')),
            ],
            options={
                'ordering': ['-date', '-created_at'],
                'indexes': [
                    models.Index(fields=['owner', '-date'], name='custpay_owner_date_idx'),
                    models.Index(fields=['owner', 'payment_category'], name='custpay_owner_category_idx'),
                ],
            },
        ),
    ]
