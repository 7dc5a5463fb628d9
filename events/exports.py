# events/exports.py
"""
CSV / JSON export and JSON backup import.
"""
import csv
import io
import json
import logging
from typing import List, Tuple

from django.utils.text import get_valid_filename

from core.constants import EXPORT_VERSION, MSG_INVALID_IMPORT, MSG_UNREADABLE_IMPORT
from core.exceptions import InvalidImport
from core.records import EventSettings, Participant, now_iso
from core.serializers import EventSettingsRecordSerializer, ParticipantRecordSerializer
from core.state import StateRepository
from .datetime_utils import local_date_string

logger = logging.getLogger("ems.events")

CSV_HEADERS = ["Type", "Name/Team", "Email", "Phone", "Members", "Present", "Registered At"]


def participant_csv_row(participant: Participant) -> list:
    members = ""
    if participant.is_team:
        members = "; ".join(f"{m.name} ({m.email})" for m in participant.members)

    return [
        participant.type,
        participant.label,
        participant.email or "",
        participant.phone or "",
        members,
        "Yes" if participant.present else "No",
        local_date_string(participant.registered_at),
    ]


def build_csv(participants: List[Participant]) -> str:
    """
    Every field is quoted; embedded quotes are doubled.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for participant in participants:
        writer.writerow(participant_csv_row(participant))
    return buffer.getvalue()


def build_snapshot(settings: EventSettings, participants: List[Participant]) -> dict:
    return {
        "settings": settings.to_dict(),
        "participants": [p.to_dict() for p in participants],
        "exportDate": now_iso(),
        "version": EXPORT_VERSION,
    }


def parse_snapshot(content) -> Tuple[EventSettings, List[Participant]]:
    """
    Decode a JSON backup. The top level must be an object with a
    ``settings`` object and a ``participants`` list; every record is
    checked against the stored-record schemas.
    """
    try:
        if isinstance(content, bytes):
            content = content.decode("utf-8")
        data = json.loads(content)
    except (TypeError, ValueError):
        raise InvalidImport(MSG_UNREADABLE_IMPORT)

    if (
        not isinstance(data, dict)
        or not isinstance(data.get("settings"), dict)
        or not isinstance(data.get("participants"), list)
    ):
        raise InvalidImport()

    errors = {}

    settings_serializer = EventSettingsRecordSerializer(data=data["settings"])
    if not settings_serializer.is_valid():
        errors["settings"] = settings_serializer.errors

    participants = []
    record_errors = {}
    for position, item in enumerate(data["participants"]):
        serializer = ParticipantRecordSerializer(data=item)
        if serializer.is_valid():
            participants.append(serializer.save())
        else:
            record_errors[str(position)] = serializer.errors
    if record_errors:
        errors["participants"] = record_errors

    if errors:
        raise InvalidImport({"detail": MSG_INVALID_IMPORT, "records": errors})

    return settings_serializer.save(), participants


def export_filename(event_name: str, suffix: str) -> str:
    return get_valid_filename(f"{event_name}_{suffix}")


class ExportService:
    def __init__(self, repository: StateRepository = None):
        self.repository = repository or StateRepository()

    def export_csv(self) -> Tuple[str, str]:
        state = self.repository.read()
        filename = export_filename(state.settings.event_name, "participants.csv")
        return filename, build_csv(state.participants)

    def export_json(self) -> Tuple[str, str]:
        state = self.repository.read()
        filename = export_filename(state.settings.event_name, "backup.json")
        snapshot = build_snapshot(state.settings, state.participants)
        return filename, json.dumps(snapshot, indent=2, ensure_ascii=False)

    def import_json(self, content) -> Tuple[EventSettings, List[Participant]]:
        """
        Replace settings and participants wholesale with a JSON backup.
        Users, session and theme are left alone.
        """
        settings, participants = parse_snapshot(content)

        with self.repository.transaction() as state:
            state.settings = settings
            state.participants = participants
            logger.info(f"Backup imported: {len(participants)} participants")
            return state.settings, state.participants
