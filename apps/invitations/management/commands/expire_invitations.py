"""
Management command to expire overdue invitations.

Intended to run on a schedule (cron, Render cron job):

    python manage.py expire_invitations
"""

from django.core.management.base import BaseCommand

from apps.invitations.services import expire_overdue_invitations


class Command(BaseCommand):
    help = 'Mark pending invitations past their expiry time as EXPIRED'

    def handle(self, *args, **options):
        expired = expire_overdue_invitations()
        self.stdout.write(self.style.SUCCESS(f'Expired {expired} invitation(s)'))
