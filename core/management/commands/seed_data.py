from django.core.management.base import BaseCommand

from core.constants import TYPE_SOLO, TYPE_TEAM
from events.services import ParticipantService, SettingsService

SAMPLE_SOLOS = [
    {"name": "Alice Johnson", "email": "alice@example.com", "phone": "555-0101"},
    {"name": "Bob Smith", "email": "bob@example.com", "phone": "555-0102"},
]

SAMPLE_TEAM_NAME = "Code Crafters"


class Command(BaseCommand):
    help = "Seeds the desk with a couple of solo participants and one team"

    def handle(self, *args, **options):
        self.stdout.write("Seeding data...")

        participants = ParticipantService()
        settings = SettingsService().get()

        for solo in SAMPLE_SOLOS:
            participants.register({"type": TYPE_SOLO, **solo})

        members = [
            {"name": f"Member {n}", "email": f"member{n}@example.com", "phone": ""}
            for n in range(1, settings.min_team_size + 1)
        ]
        participants.register({
            "type": TYPE_TEAM,
            "teamName": SAMPLE_TEAM_NAME,
            "email": "team@example.com",
            "members": members,
        })

        self.stdout.write(self.style.SUCCESS(
            f"Seeded {len(SAMPLE_SOLOS)} solo participants and team '{SAMPLE_TEAM_NAME}' "
            f"for {settings.event_name}"
        ))
