"""
TemplateQuill - DOCX template filling on raw WordprocessingML.

Placeholders are written as ${name} in a Word document. TemplateQuill edits
the XML of the document, header and footer parts as text, so every byte of
markup outside the edited spans survives unchanged.

Features:
- Value substitution in the body, headers and footers
- Repair of placeholders split across runs by the editor
- Table row cloning, including vertically merged rows
- Block cloning, replacement and deletion between ${block} and ${/block}
- Inline images with relationship and content type updates
- Optional XSL transformation of the main part

Quick Start:
    from templatequill import TemplateProcessor

    processor = TemplateProcessor("template.docx")
    processor.set_value("customer", "ACME Sp. z o.o.")
    processor.save_as("filled.docx")
"""

from .version import __version__, __version_info__

from .exceptions import (
    TemplateError,
    TemporaryFileCreationError,
    CopyFileError,
    StructuralNotFoundError,
    PlaceholderNotFoundError,
    RowBoundaryNotFoundError,
    StylesheetTransformError,
    ArchiveCloseError,
)
from .settings import Settings
from .processor import TemplateProcessor
from .api import fill_template

__all__ = [
    # Version
    "__version__",
    "__version_info__",

    # API
    "TemplateProcessor",
    "fill_template",
    "Settings",

    # Exceptions
    "TemplateError",
    "TemporaryFileCreationError",
    "CopyFileError",
    "StructuralNotFoundError",
    "PlaceholderNotFoundError",
    "RowBoundaryNotFoundError",
    "StylesheetTransformError",
    "ArchiveCloseError",
]
