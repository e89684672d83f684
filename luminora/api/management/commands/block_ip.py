import logging

from django.core.management.base import BaseCommand

from api.models import BlockedIP

logger = logging.getLogger('block_ip')


class Command(BaseCommand):
    help = 'Deny all access to the given IP addresses.'

    def add_arguments(self, parser):
        parser.add_argument('ips', nargs='+')
        parser.add_argument('--remove', action='store_true', help='Unblock instead')

    def handle(self, *args, **options):
        for ip in options['ips']:
            if options['remove']:
                BlockedIP.objects.filter(ip=ip).delete()
                logger.info('Unblocked IP %s', ip)
            else:
                BlockedIP.objects.get_or_create(ip=ip)
                logger.warning('Blocked IP %s', ip)
