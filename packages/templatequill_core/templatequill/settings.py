"""
Settings for template processing.

Holds the working-file location and package compression used by
TemplateProcessor. Defaults come from the environment.
"""

import os
import tempfile
import zipfile
from typing import Optional

TEMP_DIR_ENV = "TEMPLATEQUILL_TEMP_DIR"


class Settings:
    """Template processing settings."""

    def __init__(
        self,
        temp_dir: Optional[str] = None,
        temp_prefix: str = "TemplateQuill",
        compression: int = zipfile.ZIP_DEFLATED
    ):
        """
        Initializes settings.

        Args:
            temp_dir: Directory for working files (None = environment or system default)
            temp_prefix: File name prefix of working files
            compression: zipfile compression constant used when rewriting packages
        """
        self.temp_dir = temp_dir or os.environ.get(TEMP_DIR_ENV) or tempfile.gettempdir()
        self.temp_prefix = temp_prefix
        self.compression = compression

    @classmethod
    def default(cls) -> "Settings":
        """Builds settings from the environment."""
        return cls()

    def __repr__(self) -> str:
        return (
            f"Settings(temp_dir={self.temp_dir!r}, temp_prefix={self.temp_prefix!r}, "
            f"compression={self.compression!r})"
        )
