import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('giveaway', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Referral',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('key', models.CharField(max_length=128)),
                ('created_at', models.BigIntegerField()),
                ('giveaway', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='referrals', to='giveaway.giveaway')),
                ('participant', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='referrals', to='giveaway.participant')),
            ],
            options={
                'db_table': 'referral',
            },
        ),
        migrations.AddConstraint(
            model_name='referral',
            constraint=models.UniqueConstraint(fields=('giveaway', 'key'), name='referral_unique_key'),
        ),
    ]
