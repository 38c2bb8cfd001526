# Generated manually for the grocery lists lists app

import uuid
from decimal import Decimal
from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('groups', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='ShoppingList',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('expected_total', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12)),
                ('actual_total', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('owner_group', models.OneToOneField(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='shopping_list', to='groups.group')),
                ('owner_user', models.OneToOneField(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='personal_list', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'lists',
                'constraints': [
                    models.CheckConstraint(
                        condition=(
                            models.Q(owner_user__isnull=False, owner_group__isnull=True)
                            | models.Q(owner_user__isnull=True, owner_group__isnull=False)
                        ),
                        name='list_has_exactly_one_owner',
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name='Item',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=200)),
                ('quantity', models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])),
                ('price', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True, validators=[MinValueValidator(Decimal('0.00'))])),
                ('status', models.CharField(choices=[('NEEDED', 'Needed'), ('OPTIONAL', 'Optional'), ('PURCHASED', 'Purchased')], default='NEEDED', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('added_by', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='added_items', to=settings.AUTH_USER_MODEL)),
                ('shopping_list', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='items', to='lists.shoppinglist')),
            ],
            options={
                'db_table': 'items',
                'ordering': ['created_at'],
                'indexes': [models.Index(fields=['shopping_list', 'status'], name='items_list_status_idx')],
            },
        ),
    ]
