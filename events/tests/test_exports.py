import csv
import io
import json

from django.test import SimpleTestCase

from core.constants import EXPORT_VERSION, MSG_INVALID_IMPORT, MSG_UNREADABLE_IMPORT
from core.exceptions import InvalidImport
from core.records import Participant
from core.state import StateRepository
from core.tests.helpers import TempStoreMixin
from events.exports import CSV_HEADERS, ExportService, build_csv
from events.services import ParticipantService, SettingsService


class CSVExportTests(SimpleTestCase):
    def test_fields_are_quoted_and_quotes_doubled(self):
        participant = Participant(
            id="participant_1_aaaaaaa",
            type="solo",
            name='Ada "The Countess" Lovelace',
            email="ada@example.com",
            registered_at="2024-05-01T09:30:00+00:00",
        )

        lines = build_csv([participant]).splitlines()

        self.assertEqual(lines[0], ",".join(f'"{h}"' for h in CSV_HEADERS))
        self.assertEqual(
            lines[1],
            '"solo","Ada ""The Countess"" Lovelace","ada@example.com","","","No","2024-05-01"',
        )

    def test_team_members_column(self):
        content = build_csv([
            Participant(
                id="team_1_aaaaaaa",
                type="team",
                team_name="Byte Club",
                members=[],
                present=True,
                registered_at="2024-05-01T09:30:00+00:00",
            )
        ])

        row = list(csv.reader(io.StringIO(content)))[1]
        self.assertEqual(row[1], "Byte Club")
        self.assertEqual(row[5], "Yes")


class ExportServiceTests(TempStoreMixin, SimpleTestCase):
    def setUp(self):
        super().setUp()
        SettingsService().apply({
            "eventName": "Hack Night",
            "eventDate": "2024-06-01",
            "minTeamSize": "1",
            "maxTeamSize": "3",
        })
        participants = ParticipantService()
        self.solo = participants.register({"type": "solo", "name": "Ada", "email": "ada@example.com"})
        self.team = participants.register({
            "type": "team",
            "teamName": "Byte Club",
            "members": [{"name": "Tom", "email": "tom@example.com"}],
        })
        participants.toggle_attendance(self.team.id)
        self.exports = ExportService()

    def test_csv_export(self):
        filename, content = self.exports.export_csv()

        self.assertEqual(filename, "Hack_Night_participants.csv")
        rows = list(csv.reader(io.StringIO(content)))
        self.assertEqual(len(rows), 3)
        self.assertEqual(rows[2][4], "Tom (tom@example.com)")

    def test_json_round_trip(self):
        filename, content = self.exports.export_json()
        snapshot = json.loads(content)
        self.assertEqual(filename, "Hack_Night_backup.json")
        self.assertEqual(snapshot["version"], EXPORT_VERSION)

        before = StateRepository().read()
        SettingsService().clear_all(confirm=True)

        settings, participants = self.exports.import_json(content)

        self.assertEqual(settings, before.settings)
        self.assertEqual(participants, before.participants)
        self.assertEqual(StateRepository().read().participants, before.participants)

    def test_import_accepts_bytes(self):
        _, content = self.exports.export_json()

        _, participants = self.exports.import_json(content.encode("utf-8"))

        self.assertEqual([p.id for p in participants], [self.solo.id, self.team.id])

    def test_unreadable_import(self):
        with self.assertRaisesMessage(InvalidImport, MSG_UNREADABLE_IMPORT):
            self.exports.import_json("{broken")

    def test_import_requires_settings_and_participants(self):
        for snapshot in [[], {"participants": []}, {"settings": {}, "participants": {}}]:
            with self.subTest(snapshot=snapshot):
                with self.assertRaisesMessage(InvalidImport, MSG_INVALID_IMPORT):
                    self.exports.import_json(json.dumps(snapshot))

    def test_invalid_record_rejects_whole_import(self):
        _, content = self.exports.export_json()
        snapshot = json.loads(content)
        snapshot["participants"][1]["type"] = "squad"

        with self.assertRaises(InvalidImport) as ctx:
            self.exports.import_json(json.dumps(snapshot))

        self.assertIn("1", ctx.exception.detail["records"]["participants"])
        self.assertEqual(len(StateRepository().read().participants), 2)
        self.assertTrue(StateRepository().read().find_participant(self.team.id).present)
