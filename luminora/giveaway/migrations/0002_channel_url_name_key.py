from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('giveaway', '0001_initial'),
    ]

    operations = [
        migrations.AlterField(
            model_name='giveaway',
            name='channel_url',
            field=models.CharField(max_length=500),
        ),
        migrations.AlterField(
            model_name='participant',
            name='name_key',
            field=models.CharField(max_length=300),
        ),
    ]
