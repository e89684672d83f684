import datetime

from django.core.management.base import BaseCommand, CommandError
from rest_framework.exceptions import ValidationError

from api.exceptions import error_message
from giveaway import lifecycle, utils


class Command(BaseCommand):
    help = 'Create a giveaway from the command line.'

    def add_arguments(self, parser):
        parser.add_argument('--title', required=True)
        parser.add_argument('--host', required=True)
        parser.add_argument('--phone', required=True)
        parser.add_argument('--channel-url', required=True)
        parser.add_argument('--hours', type=float, default=24 * 7, help='Duration (default: one week)')
        parser.add_argument('--creator-ip', default='127.0.0.1')

    def handle(self, *args, **options):
        end_time = utils.now_ms() + int(datetime.timedelta(hours=options['hours']).total_seconds() * 1000)
        try:
            giveaway = lifecycle.create_giveaway({
                'title': options['title'],
                'host': options['host'],
                'phone': options['phone'],
                'channelUrl': options['channel_url'],
                'endTime': end_time,
            }, creator_ip=options['creator_ip'])
        except ValidationError as e:
            raise CommandError(error_message(e.detail))
        self.stdout.write(giveaway.id)
