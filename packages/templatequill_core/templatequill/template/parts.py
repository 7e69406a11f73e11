"""
Part store - XML text of the main document part, headers and footers.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

logger = logging.getLogger(__name__)

MAIN_PART_NAME = "word/document.xml"


def header_name(index: int) -> str:
    """Archive entry of header number index (1-based)."""
    return f"word/header{index}.xml"


def footer_name(index: int) -> str:
    """Archive entry of footer number index (1-based)."""
    return f"word/footer{index}.xml"


class PartStore:
    """
    In-memory text of the template parts.

    Headers and footers are keyed by their 1-based index. Every edit
    replaces the text held here; save() writes it back verbatim.
    """

    def __init__(self, main: str = "", headers: Optional[Dict[int, str]] = None,
                 footers: Optional[Dict[int, str]] = None):
        self.main = main
        self.headers: Dict[int, str] = dict(headers or {})
        self.footers: Dict[int, str] = dict(footers or {})

    @classmethod
    def load(cls, package, normalize: Callable[[str], str]) -> "PartStore":
        """
        Read parts from an open package.

        Headers and footers are read for index 1, 2, ... until the first
        missing entry.
        """
        store = cls()
        store.headers = cls._load_numbered(package, header_name, normalize)
        store.footers = cls._load_numbered(package, footer_name, normalize)
        store.main = normalize(package.read_text(MAIN_PART_NAME))
        logger.debug(f"Loaded main part, {len(store.headers)} headers, {len(store.footers)} footers")
        return store

    @staticmethod
    def _load_numbered(package, name_for: Callable[[int], str],
                       normalize: Callable[[str], str]) -> Dict[int, str]:
        parts = {}
        index = 1
        while package.locate_entry(name_for(index)):
            parts[index] = normalize(package.read_text(name_for(index)))
            index += 1
        return parts

    def apply(self, edit: Callable[[str], str]) -> None:
        """Run an edit over headers, the main part and footers."""
        for index, xml in self.headers.items():
            self.headers[index] = edit(xml)
        self.main = edit(self.main)
        for index, xml in self.footers.items():
            self.footers[index] = edit(xml)

    def write_headers(self, package) -> None:
        for index, xml in self.headers.items():
            package.write_entry(header_name(index), xml)

    def write_main(self, package) -> None:
        package.write_entry(MAIN_PART_NAME, self.main)

    def write_footers(self, package) -> None:
        for index, xml in self.footers.items():
            package.write_entry(footer_name(index), xml)
