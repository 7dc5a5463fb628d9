import shutil
import tempfile

from django.test import override_settings


class TempStoreMixin:
    """
    Points MEDIA_ROOT (and with it the desk's key-value store) at a fresh
    temporary directory for every test.
    """

    def setUp(self):
        super().setUp()
        self.temp_media = tempfile.mkdtemp(prefix="test_media_")
        self._media_override = override_settings(MEDIA_ROOT=self.temp_media)
        self._media_override.enable()

    def tearDown(self):
        self._media_override.disable()
        shutil.rmtree(self.temp_media, ignore_errors=True)
        super().tearDown()
