"""
Tests for Settings.
"""

import tempfile
import zipfile

from templatequill.settings import Settings, TEMP_DIR_ENV


class TestSettings:

    def test_system_default(self, monkeypatch):
        monkeypatch.delenv(TEMP_DIR_ENV, raising=False)
        settings = Settings.default()
        assert settings.temp_dir == tempfile.gettempdir()
        assert settings.temp_prefix == "TemplateQuill"
        assert settings.compression == zipfile.ZIP_DEFLATED

    def test_environment_override(self, monkeypatch, temp_dir):
        monkeypatch.setenv(TEMP_DIR_ENV, str(temp_dir))
        assert Settings.default().temp_dir == str(temp_dir)

    def test_explicit_value_wins(self, monkeypatch, temp_dir):
        monkeypatch.setenv(TEMP_DIR_ENV, "/elsewhere")
        assert Settings(temp_dir=str(temp_dir)).temp_dir == str(temp_dir)

    def test_repr(self):
        assert "temp_prefix='TemplateQuill'" in repr(Settings(temp_dir="/tmp"))
