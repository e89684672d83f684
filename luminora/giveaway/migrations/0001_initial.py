import django.db.models.deletion
from django.db import migrations, models

import giveaway.models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Giveaway',
            fields=[
                ('id', models.CharField(default=giveaway.models.new_id, editable=False, max_length=36, primary_key=True, serialize=False)),
                ('title', models.CharField(max_length=200)),
                ('host', models.CharField(max_length=200)),
                ('phone', models.CharField(max_length=50)),
                ('channel_url', models.URLField(max_length=500)),
                ('end_time', models.BigIntegerField()),
                ('created_at', models.BigIntegerField()),
                ('creator_ip', models.CharField(db_index=True, max_length=64)),
                ('status', models.CharField(default='active', max_length=20)),
            ],
            options={
                'db_table': 'giveaway',
            },
        ),
        migrations.CreateModel(
            name='Participant',
            fields=[
                ('id', models.CharField(default=giveaway.models.new_id, editable=False, max_length=36, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=100)),
                ('name_key', models.CharField(max_length=200)),
                ('avatar', models.CharField(max_length=500)),
                ('ref_count', models.IntegerField(default=0)),
                ('joined_at', models.BigIntegerField()),
                ('ip', models.CharField(max_length=64)),
                ('device_fingerprint', models.CharField(max_length=64)),
                ('giveaway', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='participants', to='giveaway.giveaway')),
            ],
            options={
                'db_table': 'participant',
                'ordering': ['-ref_count', 'joined_at', 'id'],
            },
        ),
        migrations.AddConstraint(
            model_name='participant',
            constraint=models.UniqueConstraint(fields=('giveaway', 'name_key', 'device_fingerprint'), name='participant_unique_name_device'),
        ),
    ]
