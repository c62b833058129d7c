"""Shared fixtures pointing the document store at a temporary directory."""

import tempfile

from travel_map_api.app.core.config import settings


class TempDataDirMixin:
    """Swap ``settings.data_dir`` for a fresh temporary directory per test."""

    def setUp(self):
        super().setUp()
        self._tmp = tempfile.TemporaryDirectory()
        self._saved_data_dir = settings.data_dir
        self._saved_audit_limit = settings.audit_log_limit
        settings.data_dir = self._tmp.name

    def tearDown(self):
        settings.data_dir = self._saved_data_dir
        settings.audit_log_limit = self._saved_audit_limit
        self._tmp.cleanup()
        super().tearDown()
