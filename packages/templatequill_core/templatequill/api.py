"""
Simple high-level API.

    from templatequill import fill_template

    fill_template(
        "letter.docx",
        {"name": "Jan Kowalski", "date": "2024-05-01"},
        "letter-filled.docx",
        images={"logo": ("logo.png", "assets/logo.png")},
    )
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from .processor import TemplateProcessor
from .settings import Settings

PathLike = Union[str, Path]


def fill_template(
    template_path: PathLike,
    values: Mapping[str, Any],
    output_path: PathLike,
    images: Optional[Dict[str, Tuple[str, PathLike]]] = None,
    settings: Optional[Settings] = None
) -> Path:
    """Fills template macros and images and saves the result (convenience function)."""
    processor = TemplateProcessor(template_path, settings=settings)
    with processor:
        for search, (file_name, source_path) in (images or {}).items():
            processor.set_image_value(search, file_name, source_path)
        for search, replace in values.items():
            processor.set_value(search, replace)
        processor.save_as(output_path)
    return Path(output_path)
