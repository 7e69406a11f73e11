"""
Zip package for DOCX files.

Handles opening a package, reading and replacing named entries, and
writing the package back to disk.
"""

import logging
import os
import tempfile
import zipfile
from pathlib import Path
from typing import Dict, Optional, Union

logger = logging.getLogger(__name__)


class ZipPackage:
    """
    Editable view of a DOCX (ZIP) package.

    zipfile cannot overwrite or remove members in place, so entries are held
    in memory in archive order and the whole package is rewritten on close().
    """

    def __init__(self, compression: int = zipfile.ZIP_DEFLATED):
        """
        Initialize zip package.

        Args:
            compression: zipfile compression constant used by close()
        """
        self.compression = compression
        self.filename: Optional[Path] = None
        self._entries: Dict[str, bytes] = {}
        self._opened = False
        self._closed = False

    def open(self, path: Union[str, Path]) -> "ZipPackage":
        """
        Open package and load its entries.

        Args:
            path: Path to DOCX file

        Returns:
            self
        """
        self.filename = Path(path)
        if not self.filename.exists():
            raise FileNotFoundError(f"DOCX file not found: {self.filename}")

        with zipfile.ZipFile(self.filename, 'r') as zip_file:
            for file_info in zip_file.infolist():
                if file_info.is_dir():
                    continue
                self._entries[file_info.filename] = zip_file.read(file_info.filename)

        self._opened = True
        logger.info(f"Opened DOCX package: {self.filename}")
        logger.debug(f"Loaded {len(self._entries)} entries")
        return self

    def _check_open(self) -> None:
        if not self._opened:
            raise ValueError("Package not opened")
        if self._closed:
            raise ValueError("Package already closed")

    def locate_entry(self, name: str) -> bool:
        """Check whether an entry exists."""
        self._check_open()
        return name in self._entries

    def read_entry(self, name: str) -> bytes:
        """
        Get binary content of an entry.

        Raises:
            KeyError: If the entry does not exist
        """
        self._check_open()
        if name not in self._entries:
            raise KeyError(f"Part not found: {name}")
        return self._entries[name]

    def read_text(self, name: str) -> str:
        """Get entry content decoded as UTF-8."""
        return self.read_entry(name).decode('utf-8')

    def write_entry(self, name: str, data: Union[str, bytes]) -> None:
        """Create or overwrite an entry."""
        self._check_open()
        if isinstance(data, str):
            data = data.encode('utf-8')
        self._entries[name] = data
        logger.debug(f"Wrote entry {name} ({len(data)} bytes)")

    def add_file(self, name: str, source_path: Union[str, Path]) -> None:
        """Create or overwrite an entry from a file on disk."""
        self.write_entry(name, Path(source_path).read_bytes())

    def delete_entry(self, name: str) -> bool:
        """
        Remove an entry.

        Returns:
            True if the entry existed
        """
        self._check_open()
        if self._entries.pop(name, None) is None:
            return False
        logger.debug(f"Deleted entry {name}")
        return True

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> bool:
        """
        Write all entries back to the package file.

        Returns:
            False if the package could not be written
        """
        self._check_open()
        self._closed = True

        fd, temp_name = tempfile.mkstemp(
            dir=str(self.filename.parent), prefix=".tq_", suffix=".zip"
        )
        os.close(fd)
        try:
            with zipfile.ZipFile(temp_name, 'w', self.compression) as zip_file:
                for name, content in self._entries.items():
                    zip_file.writestr(name, content)
            os.replace(temp_name, self.filename)
        except (OSError, zipfile.BadZipFile, zipfile.LargeZipFile) as e:
            logger.error(f"Failed to write DOCX package {self.filename}: {e}")
            if os.path.exists(temp_name):
                os.remove(temp_name)
            return False

        logger.info(f"Saved DOCX package: {self.filename}")
        return True

    def __enter__(self):
        """Enter context manager."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit context manager."""
        if self._opened and not self._closed:
            self.close()
