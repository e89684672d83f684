from django.conf import settings
from django.core.management.base import BaseCommand

from giveaway.snapshot import dump_snapshot


class Command(BaseCommand):
    help = 'Write the four JSON collection files of the flat-file store.'

    def add_arguments(self, parser):
        parser.add_argument('directory', nargs='?', default=str(settings.DATA_DIR))

    def handle(self, *args, **options):
        stats = dump_snapshot(options['directory'])
        self.stdout.write(', '.join(f'{k}={v}' for k, v in stats.items()))
