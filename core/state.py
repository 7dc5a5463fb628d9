# core/state.py
"""
Application state for the event desk.

``AppState`` is the whole object graph (settings, participants, users,
session, theme). ``StateRepository`` owns loading it from the key-value
store and writing the full snapshot back. Services mutate state only
inside ``transaction()``, which saves every key once the block finishes
and saves nothing if it raises.
"""
import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import List, Optional

from rest_framework.exceptions import ValidationError

from .constants import (
    KEY_PARTICIPANTS,
    KEY_SESSION,
    KEY_SETTINGS,
    KEY_THEME,
    KEY_USERS,
    SCHEMA_VERSION,
    THEME_LIGHT,
)
from .records import EventSettings, Participant, Session, UserAccount, session_to_dict
from .serializers import (
    EventSettingsRecordSerializer,
    ParticipantRecordSerializer,
    SessionRecordSerializer,
    ThemeRecordSerializer,
    UserAccountRecordSerializer,
    build_record,
)
from .storage import KeyValueStore

logger = logging.getLogger("ems.core")

# One snapshot per process; every load-mutate-save cycle holds this lock.
_state_lock = threading.RLock()


@dataclass
class AppState:
    settings: EventSettings
    participants: List[Participant] = field(default_factory=list)
    users: List[UserAccount] = field(default_factory=list)
    session: Optional[Session] = None
    theme: str = THEME_LIGHT

    def find_participant(self, participant_id: str) -> Optional[Participant]:
        for participant in self.participants:
            if participant.id == participant_id:
                return participant
        return None

    def participant_index(self, participant_id: str) -> int:
        for index, participant in enumerate(self.participants):
            if participant.id == participant_id:
                return index
        return -1

    def find_user(self, email: str) -> Optional[UserAccount]:
        for user in self.users:
            if user.matches_email(email):
                return user
        return None


class StateRepository:
    def __init__(self, store: Optional[KeyValueStore] = None):
        self.store = store if store is not None else KeyValueStore()

    # -------------------------
    # Reading
    # -------------------------
    def load(self) -> AppState:
        return AppState(
            settings=self._load_settings(),
            participants=self._load_list(KEY_PARTICIPANTS, ParticipantRecordSerializer),
            users=self._load_list(KEY_USERS, UserAccountRecordSerializer),
            session=self._load_session(),
            theme=self._load_theme(),
        )

    def read(self) -> AppState:
        """Load a consistent snapshot for read-only use."""
        with _state_lock:
            return self.load()

    # -------------------------
    # Writing
    # -------------------------
    def save(self, state: AppState) -> bool:
        results = [
            self._save_key(KEY_SETTINGS, state.settings.to_dict()),
            self._save_key(KEY_PARTICIPANTS, [p.to_dict() for p in state.participants]),
            self._save_key(KEY_USERS, [u.to_dict() for u in state.users]),
            self._save_key(KEY_SESSION, session_to_dict(state.session)),
            self._save_key(KEY_THEME, state.theme),
        ]
        return all(results)

    @contextmanager
    def transaction(self):
        """
        Load the state, hand it to the caller, then persist the whole
        snapshot. An exception inside the block skips the save.
        """
        with _state_lock:
            state = self.load()
            yield state
            if not self.save(state):
                logger.warning("State snapshot was only partially persisted")

    def _save_key(self, key, value) -> bool:
        return self.store.save(key, {"version": SCHEMA_VERSION, "data": value})

    # -------------------------
    # Envelopes & schemas
    # -------------------------
    def _unwrap(self, key):
        raw = self.store.load(key, None)
        if isinstance(raw, dict) and set(raw) == {"version", "data"}:
            version = raw["version"]
            if version == SCHEMA_VERSION:
                return raw["data"]
            logger.warning(f"Ignoring '{key}': unsupported schema version {version!r}")
            return None
        # Bare values come from the browser tool (schema version 0)
        return raw

    def _load_settings(self) -> EventSettings:
        data = self._unwrap(KEY_SETTINGS)
        if data is None:
            return EventSettings.first_run()
        try:
            return build_record(EventSettingsRecordSerializer, data)
        except ValidationError as exc:
            logger.warning(f"Stored settings rejected, using defaults: {exc.detail}")
            return EventSettings.first_run()

    def _load_list(self, key, serializer_class) -> list:
        data = self._unwrap(key)
        if data is None:
            return []
        if not isinstance(data, list):
            logger.warning(f"Stored '{key}' is not a list, ignoring it")
            return []

        records = []
        for position, item in enumerate(data):
            try:
                records.append(build_record(serializer_class, item))
            except ValidationError as exc:
                logger.warning(f"Dropping '{key}' record #{position}: {exc.detail}")
        return records

    def _load_session(self) -> Optional[Session]:
        data = self._unwrap(KEY_SESSION)
        if data is None:
            return None
        try:
            return build_record(SessionRecordSerializer, data)
        except ValidationError as exc:
            logger.warning(f"Stored session rejected: {exc.detail}")
            return None

    def _load_theme(self) -> str:
        data = self._unwrap(KEY_THEME)
        if data is None:
            return THEME_LIGHT
        serializer = ThemeRecordSerializer(data={"theme": data})
        if not serializer.is_valid():
            logger.warning(f"Stored theme rejected: {serializer.errors}")
            return THEME_LIGHT
        return serializer.validated_data["theme"]
