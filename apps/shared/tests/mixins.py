"""
Test helpers shared across apps.
"""

import shutil
import tempfile
from pathlib import Path

from django.test import override_settings


class TempPublicRootMixin:
    """Points PUBLIC_ROOT at a throwaway directory for the duration of each test"""

    def setUp(self):
        super().setUp()
        self.public_root = Path(tempfile.mkdtemp(prefix='public-'))
        self.addCleanup(shutil.rmtree, self.public_root, ignore_errors=True)

        settings_override = override_settings(PUBLIC_ROOT=self.public_root)
        settings_override.enable()
        self.addCleanup(settings_override.disable)

    def public_file(self, stored_path: str) -> Path:
        return self.public_root / stored_path.lstrip('/')
