import uuid

from django.db import models

from . import utils


def new_id():
    return str(uuid.uuid4())


class Giveaway(models.Model):

    class Meta:
        db_table = 'giveaway'

    STATUS_ACTIVE = 'active'

    id = models.CharField(primary_key=True, max_length=36, default=new_id, editable=False)
    title = models.CharField(max_length=200)
    host = models.CharField(max_length=200)
    phone = models.CharField(max_length=50)
    channel_url = models.CharField(max_length=500)
    end_time = models.BigIntegerField()
    created_at = models.BigIntegerField()
    creator_ip = models.CharField(max_length=64, db_index=True)
    status = models.CharField(max_length=20, default=STATUS_ACTIVE)

    def __str__(self):
        return self.title

    @property
    def is_ended(self):
        return utils.is_ended(self.end_time)

    @property
    def remaining(self):
        return utils.remaining_ms(self.end_time)

    @property
    def winner(self):
        if not self.is_ended:
            return None
        return utils.pick_winner(self.participants.all())


class Participant(models.Model):

    class Meta:
        db_table = 'participant'
        ordering = ['-ref_count', 'joined_at', 'id']
        constraints = [
            models.UniqueConstraint(
                fields=['giveaway', 'name_key', 'device_fingerprint'],
                name='participant_unique_name_device',
            ),
        ]

    id = models.CharField(primary_key=True, max_length=36, default=new_id, editable=False)
    giveaway = models.ForeignKey(Giveaway, related_name='participants', on_delete=models.CASCADE)
    name = models.CharField(max_length=100)
    # casefold() can grow a name up to three times its length.
    name_key = models.CharField(max_length=300)
    avatar = models.CharField(max_length=500)
    ref_count = models.IntegerField(default=0)
    joined_at = models.BigIntegerField()
    ip = models.CharField(max_length=64)
    device_fingerprint = models.CharField(max_length=64)

    def __str__(self):
        return self.name
