from __future__ import annotations

from django.core.management.base import BaseCommand


class Command(BaseCommand):
    help = "Create the sample menu items that do not exist yet (matched by name)."

    def handle(self, *args, **options):
        from menu.seed import SAMPLE_MENU
        from menu.services import seed_menu

        created = seed_menu(SAMPLE_MENU)
        self.stdout.write(self.style.SUCCESS(
            f"Seed complete: {created} new item(s), {len(SAMPLE_MENU) - created} already present"
        ))
