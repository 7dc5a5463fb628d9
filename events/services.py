# events/services.py
"""
Participant registration, attendance and event settings.

Every mutating call runs inside ``StateRepository.transaction()``: the
snapshot is loaded, changed, and written back whole. Raising inside the
block (validation failure, unknown id) leaves the stored state untouched.
"""
import logging
from typing import List, Optional

from django.utils.dateparse import parse_date

from core.constants import (
    DEFAULT_MAX_TEAM_SIZE,
    DEFAULT_MIN_TEAM_SIZE,
    ID_PREFIX_SOLO,
    ID_PREFIX_TEAM,
    PARTICIPANT_TYPES,
    RESET_EVENT_NAME,
    TYPE_SOLO,
    TYPE_TEAM,
)
from core.exceptions import (
    ConfirmationRequired,
    ParticipantNotFound,
    ValidationFailed,
)
from core.records import EventSettings, Member, Participant, generate_id, today_iso
from core.state import AppState, StateRepository
from .qr import build_payload, decode_payload
from .sanitizers import lenient_int, sanitize_text, sanitize_title

logger = logging.getLogger("ems.events")


# -------------------------
# Form reading & validation
# -------------------------
def read_registration_form(data) -> Participant:
    """
    Build an unsaved participant from a solo or team registration form.
    Member rows without a name are dropped.
    """
    kind = data.get("type") or TYPE_SOLO
    if kind not in PARTICIPANT_TYPES:
        raise ValidationFailed(f"Unknown registration type '{kind}'.")

    if kind == TYPE_SOLO:
        return Participant(
            id="",
            type=TYPE_SOLO,
            name=sanitize_title(data.get("name")),
            email=sanitize_text(data.get("email"), max_length=254),
            phone=sanitize_text(data.get("phone"), max_length=32),
        )

    members = []
    for row in data.get("members") or []:
        member = Member(
            name=sanitize_title(row.get("name")),
            email=sanitize_text(row.get("email"), max_length=254),
            phone=sanitize_text(row.get("phone"), max_length=32),
        )
        if member.name:
            members.append(member)

    return Participant(
        id="",
        type=TYPE_TEAM,
        email=sanitize_text(data.get("email"), max_length=254),
        phone=sanitize_text(data.get("phone"), max_length=32),
        team_name=sanitize_title(data.get("teamName")),
        members=members,
    )


def is_valid_participant(participant: Participant, settings: EventSettings) -> bool:
    if participant.type == TYPE_SOLO:
        return len(participant.name) > 0

    if not participant.team_name:
        return False
    return settings.allows_team_size(participant.member_count)


def blank_member_rows(count: int) -> list:
    return [Member(name="").to_dict() for _ in range(count)]


class ParticipantService:
    def __init__(self, repository: StateRepository = None):
        self.repository = repository or StateRepository()

    # -------------------------
    # Registration
    # -------------------------
    def register(self, form) -> Participant:
        with self.repository.transaction() as state:
            participant = self._read_valid(form, state)
            prefix = ID_PREFIX_SOLO if participant.type == TYPE_SOLO else ID_PREFIX_TEAM
            participant.id = generate_id(prefix)
            state.participants.append(participant)

            logger.info(f"Registration saved: {participant.id} ({participant.type})")
            return participant

    def update(self, participant_id: str, form) -> Participant:
        with self.repository.transaction() as state:
            index = state.participant_index(participant_id)
            if index == -1:
                raise ParticipantNotFound()

            existing = state.participants[index]
            participant = self._read_valid(form, state)
            participant.id = existing.id
            participant.present = existing.present
            participant.registered_at = existing.registered_at
            state.participants[index] = participant

            logger.info(f"Registration updated: {participant.id}")
            return participant

    def _read_valid(self, form, state: AppState) -> Participant:
        participant = read_registration_form(form)
        if not is_valid_participant(participant, state.settings):
            logger.warning(
                f"Registration rejected: type={participant.type}, "
                f"members={participant.member_count}, bounds={state.settings.team_size_range}"
            )
            raise ValidationFailed()
        return participant

    def blank_form(self, size: Optional[int] = None) -> dict:
        settings = self.repository.read().settings
        if size is None or size == "":
            size = settings.min_team_size
        try:
            size = int(size)
        except (TypeError, ValueError):
            size = 0
        if not settings.allows_team_size(size):
            raise ValidationFailed(
                f"Please enter a number between {settings.min_team_size} and {settings.max_team_size}"
            )
        return {
            "type": TYPE_SOLO,
            "name": "",
            "email": "",
            "phone": "",
            "teamName": "",
            "members": blank_member_rows(size),
            "teamSizeRange": settings.team_size_range,
        }

    def edit_form(self, participant_id: str) -> dict:
        """
        The stored registration laid out as a form. Team member rows are
        padded or cut to the configured size range.
        """
        state = self.repository.read()
        participant = self._get(state, participant_id)
        settings = state.settings

        row_count = max(
            settings.min_team_size,
            min(settings.max_team_size, len(participant.members) or settings.min_team_size),
        )
        rows = [m.to_dict() for m in participant.members[:row_count]]
        rows += blank_member_rows(row_count - len(rows))

        form = participant.to_dict()
        form["members"] = rows if participant.is_team else []
        form["teamSizeRange"] = settings.team_size_range
        return form

    # -------------------------
    # Attendance
    # -------------------------
    def get(self, participant_id: str) -> Participant:
        return self._get(self.repository.read(), participant_id)

    def search(self, query: str = "") -> List[Participant]:
        needle = (query or "").lower()
        participants = self.repository.read().participants
        return [p for p in participants if needle in p.search_text]

    def toggle_attendance(self, participant_id: str) -> Participant:
        with self.repository.transaction() as state:
            participant = self._get(state, participant_id)
            participant.present = not participant.present
            logger.info(f"Attendance toggled: {participant.id} present={participant.present}")
            return participant

    def delete(self, participant_id: str) -> Participant:
        with self.repository.transaction() as state:
            index = state.participant_index(participant_id)
            if index == -1:
                raise ParticipantNotFound()
            removed = state.participants.pop(index)
            logger.info(f"Participant deleted: {removed.id}")
            return removed

    def qr_payload(self, participant_id: str) -> str:
        state = self.repository.read()
        return build_payload(self._get(state, participant_id), state.settings)

    def check_in(self, qr_text: str) -> Participant:
        """
        Mark the participant named by a pasted QR payload as present.

        The payload is not signed; any well-formed payload carrying a known
        id checks that participant in.
        """
        payload = decode_payload(qr_text)
        with self.repository.transaction() as state:
            participant = state.find_participant(payload["id"])
            if participant is None:
                logger.warning(f"Check-in for unknown participant id={payload['id']!r}")
                raise ParticipantNotFound()
            participant.present = True
            logger.info(f"Checked in via QR: {participant.id}")
            return participant

    @staticmethod
    def _get(state: AppState, participant_id: str) -> Participant:
        participant = state.find_participant(participant_id)
        if participant is None:
            raise ParticipantNotFound()
        return participant


class SettingsService:
    def __init__(self, repository: StateRepository = None):
        self.repository = repository or StateRepository()

    def get(self) -> EventSettings:
        return self.repository.read().settings

    def apply(self, form) -> EventSettings:
        event_name = sanitize_title(form.get("eventName")) or RESET_EVENT_NAME

        event_date = sanitize_text(form.get("eventDate")) or today_iso()
        try:
            parsed_date = parse_date(event_date)
        except ValueError:
            parsed_date = None
        if parsed_date is None:
            raise ValidationFailed("Event date must be a valid YYYY-MM-DD date.")

        min_size = max(1, lenient_int(form.get("minTeamSize"), DEFAULT_MIN_TEAM_SIZE))
        max_size = max(min_size, lenient_int(form.get("maxTeamSize"), DEFAULT_MAX_TEAM_SIZE))

        with self.repository.transaction() as state:
            state.settings = EventSettings(
                event_name=event_name,
                event_date=parsed_date.isoformat(),
                min_team_size=min_size,
                max_team_size=max_size,
            )
            # Existing teams are not re-checked against the new bounds
            logger.info(f"Settings saved: team size {state.settings.team_size_range}")
            return state.settings

    def clear_all(self, confirm: bool = False) -> EventSettings:
        if not confirm:
            raise ConfirmationRequired()

        with self.repository.transaction() as state:
            removed = len(state.participants)
            state.participants = []
            state.settings = EventSettings.reset()
            logger.info(f"All event data cleared ({removed} participants removed)")
            return state.settings
