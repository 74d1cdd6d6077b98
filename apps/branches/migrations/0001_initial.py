# Generated migration for branch model

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='Branch',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, help_text='Timestamp when the record was created')),
                ('updated_at', models.DateTimeField(auto_now=True, help_text='Timestamp when the record was last updated')),
                ('name', models.CharField(db_index=True, help_text="Display name, e.g. 'Steakz London'", max_length=255)),
                ('location', models.CharField(help_text='Short location label', max_length=255)),
                ('country', models.CharField(blank=True, max_length=100)),
                ('city', models.CharField(blank=True, max_length=100)),
                ('address', models.CharField(blank=True, max_length=255)),
                ('postal_code', models.CharField(blank=True, max_length=20)),
                ('phone', models.CharField(blank=True, max_length=50)),
                ('email', models.EmailField(blank=True, max_length=254)),
                ('timezone', models.CharField(blank=True, help_text="IANA timezone, e.g. 'Europe/London'", max_length=64)),
                ('latitude', models.FloatField(blank=True, null=True)),
                ('longitude', models.FloatField(blank=True, null=True)),
                ('opening_time', models.CharField(blank=True, help_text='Opening time as HH:MM', max_length=5)),
                ('closing_time', models.CharField(blank=True, help_text='Closing time as HH:MM', max_length=5)),
                ('holidays', models.JSONField(blank=True, default=list, help_text='Dates the branch is closed')),
            ],
            options={
                'db_table': 'branches',
                'ordering': ['name'],
            },
        ),
    ]
