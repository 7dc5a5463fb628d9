import json
import os

from django.test import SimpleTestCase
from django.core.files.storage import FileSystemStorage

from core.constants import KEY_PARTICIPANTS, KEY_SETTINGS, KEY_THEME, THEME_DARK
from core.storage import KeyValueStore
from core.tests.helpers import TempStoreMixin


class BrokenStorage:
    def exists(self, name):
        raise OSError("disk on fire")

    def open(self, name, mode="rb"):
        raise OSError("disk on fire")

    def save(self, name, content):
        raise OSError("disk on fire")

    def delete(self, name):
        raise OSError("disk on fire")


class KeyValueStoreTests(TempStoreMixin, SimpleTestCase):
    def setUp(self):
        super().setUp()
        self.store = KeyValueStore(storage=FileSystemStorage(location=self.temp_media))

    def test_missing_key_returns_fallback(self):
        self.assertEqual(self.store.load(KEY_PARTICIPANTS, []), [])
        self.assertIsNone(self.store.load(KEY_SETTINGS))

    def test_save_then_load(self):
        self.assertTrue(self.store.save(KEY_THEME, THEME_DARK))
        self.assertEqual(self.store.load(KEY_THEME), THEME_DARK)

    def test_save_overwrites_in_place(self):
        self.store.save(KEY_PARTICIPANTS, [1])
        self.store.save(KEY_PARTICIPANTS, [1, 2])

        self.assertEqual(self.store.load(KEY_PARTICIPANTS), [1, 2])
        self.assertEqual(os.listdir(os.path.join(self.temp_media, "ems")), ["participants.json"])

    def test_corrupt_value_returns_fallback(self):
        path = os.path.join(self.temp_media, "ems")
        os.makedirs(path)
        with open(os.path.join(path, "settings.json"), "w") as fh:
            fh.write("{not json")

        self.assertEqual(self.store.load(KEY_SETTINGS, {"ok": True}), {"ok": True})

    def test_namespace_prefixes_path(self):
        store = KeyValueStore(storage=self.store.storage, namespace="desk2")
        store.save(KEY_THEME, "light")

        with open(os.path.join(self.temp_media, "desk2", "theme.json")) as fh:
            self.assertEqual(json.load(fh), "light")

    def test_storage_failures_are_reported_not_raised(self):
        store = KeyValueStore(storage=BrokenStorage())

        with self.assertLogs("ems.core", level="WARNING"):
            self.assertEqual(store.load(KEY_THEME, "light"), "light")
        with self.assertLogs("ems.core", level="ERROR"):
            self.assertFalse(store.save(KEY_THEME, "dark"))
        with self.assertLogs("ems.core", level="ERROR"):
            self.assertFalse(store.delete(KEY_THEME))
