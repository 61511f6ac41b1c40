from django.core.management.base import BaseCommand
from django.utils import timezone

from sales.models import Quote


class Command(BaseCommand):
    help = "Mark draft, sent and pending-approval quotes past their validity date as expired"

    def add_arguments(self, parser):
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="List the quotes that would expire without changing them",
        )

    def handle(self, *args, **options):
        dry_run = options["dry_run"]
        sources, _ = Quote.TRANSITIONS["expire"]
        candidates = Quote.objects.filter(status__in=sources, valid_until__lt=timezone.localdate()).order_by("valid_until")

        expired_count = 0
        for quote in candidates:
            if dry_run:
                self.stdout.write(f"Would expire quote {quote.number} (valid until {quote.valid_until})")
                expired_count += 1
                continue
            if quote.refresh_expiry_status():
                expired_count += 1
                self.stdout.write(f"Expired quote {quote.number}")

        verb = "would expire" if dry_run else "expired"
        self.stdout.write(self.style.SUCCESS(f"{expired_count} quote(s) {verb}"))
