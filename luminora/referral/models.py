from django.db import models


class Referral(models.Model):

    class Meta:
        db_table = 'referral'
        constraints = [
            models.UniqueConstraint(fields=['giveaway', 'key'], name='referral_unique_key'),
        ]

    giveaway = models.ForeignKey('giveaway.Giveaway', related_name='referrals', on_delete=models.CASCADE)
    participant = models.ForeignKey('giveaway.Participant', related_name='referrals', on_delete=models.CASCADE)
    key = models.CharField(max_length=128)
    created_at = models.BigIntegerField()
