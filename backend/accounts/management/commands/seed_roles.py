# accounts/management/commands/seed_roles.py


from django.contrib.auth.models import Group, Permission
from django.core.management.base import BaseCommand, CommandError

from accounts.authz import CLEAR_LEDGER, FINALIZE_TRADE, MANAGE_COUNTERS, POST_JOURNAL_ENTRY

ROLES = {
    "Brokerage Manager": [FINALIZE_TRADE, POST_JOURNAL_ENTRY, CLEAR_LEDGER, MANAGE_COUNTERS],
    "Bookkeeper": [FINALIZE_TRADE, POST_JOURNAL_ENTRY],
}


class Command(BaseCommand):
    help = "Create the default brokerage groups and grant their permissions"

    def add_arguments(self, parser):
        parser.add_argument("--user", help="Username to add to the Brokerage Manager group")

    def handle(self, *args, **options):
        created = 0
        for name, codes in ROLES.items():
            group, was_created = Group.objects.get_or_create(name=name)
            created += was_created
            group.permissions.set([self._permission(code) for code in codes])

        username = options.get("user")
        if username:
            from django.contrib.auth import get_user_model

            User = get_user_model()
            try:
                user = User.objects.get(username=username)
            except User.DoesNotExist:
                raise CommandError(f"User {username!r} not found.")
            user.groups.add(Group.objects.get(name="Brokerage Manager"))

        self.stdout.write(self.style.SUCCESS(f"Done! Created {created}, updated {len(ROLES) - created}."))

    @staticmethod
    def _permission(code):
        app_label, codename = code.split(".")
        try:
            return Permission.objects.get(content_type__app_label=app_label, codename=codename)
        except Permission.DoesNotExist:
            raise CommandError(f"Permission {code} is missing; run migrate first.")
