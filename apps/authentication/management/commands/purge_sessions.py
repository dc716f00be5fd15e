from django.core.management.base import BaseCommand

from apps.authentication.session_service import SessionService


class Command(BaseCommand):
    help = "Delete expired staff sessions"

    def handle(self, *args, **options):
        purged = SessionService.purge_expired()
        self.stdout.write(self.style.SUCCESS(f"Purged {purged} expired session(s)"))
