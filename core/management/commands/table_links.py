from __future__ import annotations

from django.core.management.base import BaseCommand

from core.tables import menu_url, qr_filename, table_numbers


class Command(BaseCommand):
    help = "Print each table's menu link (the URL its QR code encodes)."

    def add_arguments(self, parser):
        parser.add_argument("--origin", default=None, help="Public origin (default: SITE_URL)")

    def handle(self, *args, **options):
        for number in table_numbers():
            self.stdout.write(f"{number}\t{menu_url(number, options['origin'])}\t{qr_filename(number)}")
