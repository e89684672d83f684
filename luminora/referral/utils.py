import logging

from django.db import IntegrityError, transaction
from django.db.models import F

from giveaway import utils as giveaway_utils
from giveaway.models import Participant
from referral.models import Referral


logger = logging.getLogger('referral.utils')


def attribution_key(ip, fingerprint):
    # Neither an IP address nor a hex digest contains an underscore.
    return f'{ip}_{fingerprint}'


def credit_referral(giveaway, referrer, ip, fingerprint):
    """
    Credit ``referrer`` for a visit coming from (ip, fingerprint).

    Returns True when a new referral was recorded. Visits to an ended
    giveaway, unknown referrers and visitors already credited within the
    giveaway are no-ops, so repeated visits never count twice.
    """
    if not referrer or giveaway.is_ended:
        return False

    key = attribution_key(ip, fingerprint)
    with transaction.atomic():
        participant = Participant.objects.select_for_update().filter(
            giveaway=giveaway, pk=referrer,
        ).first()
        if participant is None:
            return False

        if Referral.objects.filter(giveaway=giveaway, key=key).exists():
            return False

        try:
            with transaction.atomic():
                Referral.objects.create(
                    giveaway=giveaway,
                    participant=participant,
                    key=key,
                    created_at=giveaway_utils.now_ms(),
                )
        except IntegrityError:
            # A concurrent visit recorded the same key first.
            return False

        Participant.objects.filter(pk=participant.pk).update(ref_count=F('ref_count') + 1)

    logger.info('Referral credited to %s in giveaway %s', referrer, giveaway.id)
    return True
