from django.core.management.base import BaseCommand, CommandError
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError

from admin.models import ApprovalStatus, Role, UserProfile


class Command(BaseCommand):
    help = 'Create an admin account (use it to bootstrap the first administrator)'

    def add_arguments(self, parser):
        parser.add_argument('email')
        parser.add_argument('password')
        parser.add_argument('--name', default='Administrator')

    def handle(self, *args, **options):
        email = options['email'].strip().lower()
        password = options['password']

        if UserProfile.objects.filter(email__iexact=email).exists():
            raise CommandError(f"An account with email {email} already exists")

        try:
            validate_password(password)
        except ValidationError as e:
            raise CommandError(' '.join(e.messages))

        profile = UserProfile(
            name=options['name'],
            email=email,
            role=Role.ADMIN,
            status=ApprovalStatus.APPROVED,
        )
        profile.set_password(password)
        profile.save()
        self.stdout.write(self.style.SUCCESS(f"Admin {profile.email} created ({profile.id})"))
