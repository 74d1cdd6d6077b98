# Generated migration for menu and stock models

from django.db import migrations, models
import django.core.validators
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('branches', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='MenuItem',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, help_text='Timestamp when the record was created')),
                ('updated_at', models.DateTimeField(auto_now=True, help_text='Timestamp when the record was last updated')),
                ('name', models.CharField(help_text='Dish name', max_length=255)),
                ('description', models.TextField(blank=True)),
                ('price', models.DecimalField(decimal_places=2, default=0, help_text='Unit price', max_digits=10, validators=[django.core.validators.MinValueValidator(0)])),
                ('category', models.CharField(db_index=True, default='Other', help_text="Menu section, e.g. 'Steaks'", max_length=100)),
                ('branch', models.ForeignKey(help_text='Branch that owns this record', on_delete=django.db.models.deletion.PROTECT, related_name='+', to='branches.branch')),
            ],
            options={
                'db_table': 'menu_items',
                'ordering': ['category', 'name'],
                'indexes': [models.Index(fields=['branch', 'category'], name='menu_branch_category_idx')],
            },
        ),
        migrations.CreateModel(
            name='InventoryItem',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, help_text='Timestamp when the record was created')),
                ('updated_at', models.DateTimeField(auto_now=True, help_text='Timestamp when the record was last updated')),
                ('quantity', models.PositiveIntegerField(default=0, help_text='Units on hand')),
                ('min_quantity', models.PositiveIntegerField(default=10, help_text='Low-stock threshold')),
                ('branch', models.ForeignKey(help_text='Branch that owns this record', on_delete=django.db.models.deletion.PROTECT, related_name='+', to='branches.branch')),
                ('menu_item', models.ForeignKey(help_text='Menu item this stock belongs to', on_delete=django.db.models.deletion.CASCADE, related_name='inventory_items', to='inventory.menuitem')),
            ],
            options={
                'db_table': 'inventory_items',
                'ordering': ['menu_item__name'],
                'constraints': [models.UniqueConstraint(fields=('menu_item', 'branch'), name='unique_menu_item_per_branch')],
            },
        ),
    ]
