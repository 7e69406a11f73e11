"""DOCX package access: archive entries, relationships and content types."""

from .zip_package import ZipPackage
from .relationships import (
    DOCUMENT_RELS_PATH,
    build_relationships_xml,
    read_relationships,
)
from .content_types import CONTENT_TYPES_PATH, ensure_default_content_type

__all__ = [
    "ZipPackage",
    "DOCUMENT_RELS_PATH",
    "build_relationships_xml",
    "read_relationships",
    "CONTENT_TYPES_PATH",
    "ensure_default_content_type",
]
