from django.core.management.base import BaseCommand, CommandError

from authx.services import AuthService
from core.constants import ROLE_ADMIN, ROLE_CHOICES
from core.exceptions import DeskError


class Command(BaseCommand):
    help = "Give an existing desk account a new role (admin by default)"

    def add_arguments(self, parser):
        parser.add_argument("email")
        parser.add_argument(
            "--role",
            default=ROLE_ADMIN,
            choices=[value for value, _ in ROLE_CHOICES],
        )

    def handle(self, *args, **options):
        try:
            user = AuthService().set_role(options["email"], options["role"])
        except DeskError as exc:
            raise CommandError(str(exc.detail))

        self.stdout.write(self.style.SUCCESS(f"Promoted {user.email} to {user.role}"))
