import logging

from django.core.management.base import BaseCommand

from giveaway import utils
from giveaway.models import Giveaway

logger = logging.getLogger('giveaway_winners')


class Command(BaseCommand):
    help = 'Report the winner of every ended giveaway.'

    def handle(self, *args, **options):
        now = utils.now_ms()
        for giveaway in Giveaway.objects.filter(end_time__lt=now).order_by('end_time'):
            winner = giveaway.winner
            if winner is None:
                logger.info('%s (%s): no participants', giveaway.title, giveaway.id)
                self.stdout.write(f'{giveaway.id}\t-\t0')
                continue
            logger.info(
                '%s (%s): %s wins with %d referrals', giveaway.title, giveaway.id, winner.name, winner.ref_count,
            )
            self.stdout.write(f'{giveaway.id}\t{winner.name}\t{winner.ref_count}')
