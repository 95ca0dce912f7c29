from django.contrib.auth.models import User
from django.core.management.base import BaseCommand, CommandError

from HUMPIZZA.models import get_profile


class Command(BaseCommand):
    help = "Tạo (hoặc đặt lại mật khẩu) tài khoản admin cho trang quản trị"

    def add_arguments(self, parser):
        parser.add_argument("username", type=str)
        parser.add_argument("password", type=str)
        parser.add_argument("--full-name", default="", help="Tên hiển thị")
        parser.add_argument("--email", default="")

    def handle(self, *args, **options):
        username = options["username"].strip()
        password = options["password"]
        if not username:
            raise CommandError("Username is required")
        if len(password) < 6:
            raise CommandError("Password must be at least 6 characters")

        user, created = User.objects.get_or_create(username=username)
        user.set_password(password)
        user.is_staff = True
        user.is_active = True
        if options["email"]:
            user.email = options["email"]
        user.save()

        profile = get_profile(user)
        profile.role = "admin"
        if options["full_name"]:
            profile.full_name = options["full_name"]
        profile.save()

        action = "created" if created else "updated"
        self.stdout.write(self.style.SUCCESS(f"Admin {username} {action}"))
