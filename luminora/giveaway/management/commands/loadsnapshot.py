import os

from django.core.management.base import BaseCommand, CommandError

from giveaway.snapshot import load_snapshot


class Command(BaseCommand):
    help = 'Import the JSON collection files of the flat-file store.'

    def add_arguments(self, parser):
        parser.add_argument('directory')

    def handle(self, *args, **options):
        if not os.path.isdir(options['directory']):
            raise CommandError(f'{options["directory"]} is not a directory.')
        stats = load_snapshot(options['directory'])
        self.stdout.write(', '.join(f'{k}={v}' for k, v in stats.items()))
