import logging

from django.core.management.base import BaseCommand, CommandError

from staff.models import AdminUser

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Create a back-office admin user"

    def add_arguments(self, parser):
        parser.add_argument("username")
        parser.add_argument("password")
        parser.add_argument(
            "--role",
            default=AdminUser.ROLE_ADMIN,
            choices=[role for role, _ in AdminUser.ROLE_CHOICES],
        )

    def handle(self, *args, **options):
        username = options["username"]
        if AdminUser.objects.filter(username=username).exists():
            raise CommandError(f"Admin {username} already exists")

        try:
            admin = AdminUser.objects.create_admin(
                username, options["password"], role=options["role"]
            )
        except ValueError as e:
            raise CommandError(str(e))

        logger.info(f"[Admin Auth] Created admin {admin.id}")
        self.stdout.write(
            self.style.SUCCESS(f"Created admin {admin.username} ({admin.role})")
        )
