from django.db import models


class BlockedIP(models.Model):

    class Meta:
        db_table = 'blocked_ip'

    ip = models.CharField(max_length=64, unique=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return self.ip
