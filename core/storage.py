# core/storage.py
"""
Namespaced JSON key-value store on top of Django's file storage.

Each key lives at ``<namespace>/<key>.json`` on ``default_storage`` (local
MEDIA_ROOT in dev, S3 when USE_S3_MEDIA=1). Reads never raise: a missing
key or an unreadable blob returns the caller's fallback. Writes report
success as a boolean and log failures instead of raising.
"""
import json
import logging

from django.conf import settings
from django.core.files.base import ContentFile
from django.core.files.storage import default_storage

logger = logging.getLogger("ems.core")


class KeyValueStore:
    def __init__(self, storage=None, namespace=None):
        self.storage = storage if storage is not None else default_storage
        self.namespace = namespace or getattr(settings, "EMS_STORAGE_NAMESPACE", "ems")

    def path_for(self, key: str) -> str:
        return f"{self.namespace}/{key}.json"

    def load(self, key: str, fallback=None):
        """
        Return the decoded value stored under ``key`` or ``fallback``.
        """
        path = self.path_for(key)
        try:
            if not self.storage.exists(path):
                return fallback
            with self.storage.open(path, "rb") as fh:
                raw = fh.read()
            return json.loads(raw.decode("utf-8"))
        except Exception as exc:
            logger.warning(f"Error loading '{key}' from storage: {exc}")
            return fallback

    def save(self, key: str, value) -> bool:
        path = self.path_for(key)
        try:
            payload = json.dumps(value, ensure_ascii=False).encode("utf-8")
            # storage.save() picks a fresh name when the path exists
            if self.storage.exists(path):
                self.storage.delete(path)
            self.storage.save(path, ContentFile(payload))
            return True
        except Exception as exc:
            logger.error(f"Error saving '{key}' to storage: {exc}")
            return False

    def delete(self, key: str) -> bool:
        path = self.path_for(key)
        try:
            if self.storage.exists(path):
                self.storage.delete(path)
            return True
        except Exception as exc:
            logger.error(f"Error deleting '{key}' from storage: {exc}")
            return False
