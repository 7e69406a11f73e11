"""
Inline image support - relationship ids, EMU sizing and drawing markup.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Tuple, Union
from xml.sax.saxutils import escape

from PIL import Image as PILImage

logger = logging.getLogger(__name__)

EMU_PER_PIXEL = 9525  # 914400 EMU per inch / 96 DPI
IMAGE_ID_BASE = 1000  # above the ids a template is likely to use
DEFAULT_IMAGE_SIZE = 100 * EMU_PER_PIXEL

MEDIA_DIR = "word/media"

_ID_SUFFIX = re.compile(r'\s*([+-]?\d+)')


def media_entry_name(file_name: str) -> str:
    """Archive entry of an injected image."""
    return f"{MEDIA_DIR}/{file_name}"


def image_relationship_id(search: str) -> int:
    """
    Numeric part of the relationship id for an image macro.

    'logo#3' -> 1003, 'logo' -> 1000. Two macros with the same '#n'
    suffix share an id.
    """
    pos = search.find('#')
    if pos > 0:
        match = _ID_SUFFIX.match(search[pos + 1:])
        if match:
            return IMAGE_ID_BASE + int(match.group(1))
    return IMAGE_ID_BASE


def image_size(image_path: Union[str, Path]) -> Tuple[int, int]:
    """Image width and height in EMU."""
    with PILImage.open(image_path) as pil_img:
        width, height = pil_img.size
    logger.debug(f"Image {image_path}: {width}x{height}px")
    return width * EMU_PER_PIXEL, height * EMU_PER_PIXEL


def drawing_markup(image_id: int, file_name: str, width: int, height: int) -> str:
    """
    Inline drawing for an image, sized in EMU.

    The macro it replaces sits inside <w:t>, so the markup closes the
    surrounding text and run, adds a drawing run and reopens both.
    """
    name = escape(file_name, {'"': '&quot;'})
    return (
        '</w:t></w:r>'
        '<w:r>'
        '<w:rPr><w:noProof/></w:rPr>'
        '<w:drawing>'
        '<wp:inline distT="0" distB="0" distL="0" distR="0">'
        f'<wp:extent cx="{width}" cy="{height}"/>'
        '<wp:effectExtent l="0" t="0" r="0" b="0"/>'
        f'<wp:docPr id="{image_id}" name="{name}"/>'
        '<wp:cNvGraphicFramePr>'
        '<a:graphicFrameLocks xmlns:a="http://schemas.openxmlformats.org/drawingml/2006/main" noChangeAspect="1"/>'
        '</wp:cNvGraphicFramePr>'
        '<a:graphic xmlns:a="http://schemas.openxmlformats.org/drawingml/2006/main">'
        '<a:graphicData uri="http://schemas.openxmlformats.org/drawingml/2006/picture">'
        '<pic:pic xmlns:pic="http://schemas.openxmlformats.org/drawingml/2006/picture">'
        '<pic:nvPicPr>'
        f'<pic:cNvPr id="{image_id}" name="{name}"/>'
        '<pic:cNvPicPr/>'
        '</pic:nvPicPr>'
        '<pic:blipFill>'
        f'<a:blip r:embed="rId{image_id}"/>'
        '<a:stretch><a:fillRect/></a:stretch>'
        '</pic:blipFill>'
        '<pic:spPr>'
        '<a:xfrm>'
        '<a:off x="0" y="0"/>'
        f'<a:ext cx="{width}" cy="{height}"/>'
        '</a:xfrm>'
        '<a:prstGeom prst="rect"><a:avLst/></a:prstGeom>'
        '</pic:spPr>'
        '</pic:pic>'
        '</a:graphicData>'
        '</a:graphic>'
        '</wp:inline>'
        '</w:drawing>'
        '</w:r>'
        '<w:r><w:t xml:space="preserve">'
    )
