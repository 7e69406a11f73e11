"""[Content_Types].xml helpers for injected media."""

import logging
import xml.etree.ElementTree as ET
from typing import Optional

logger = logging.getLogger(__name__)

CONTENT_TYPES_NS = "http://schemas.openxmlformats.org/package/2006/content-types"
CONTENT_TYPES_PATH = "[Content_Types].xml"

MEDIA_CONTENT_TYPES = {
    'png': 'image/png',
    'jpg': 'image/jpeg',
    'jpeg': 'image/jpeg',
    'gif': 'image/gif',
    'bmp': 'image/bmp',
    'tif': 'image/tiff',
    'tiff': 'image/tiff',
    'wmf': 'image/x-wmf',
    'emf': 'image/x-emf',
}


def media_content_type(extension: str) -> Optional[str]:
    return MEDIA_CONTENT_TYPES.get(extension.lower().lstrip('.'))


def ensure_default_content_type(content_types_xml: bytes, extension: str) -> bytes:
    """
    Add a Default element for a media extension if the package lacks one.

    The document is edited as text so existing declarations are kept byte for byte.
    """
    extension = extension.lower().lstrip('.')
    content_type = media_content_type(extension)
    if content_type is None:
        return content_types_xml

    root = ET.fromstring(content_types_xml)
    for default in root.findall(f"{{{CONTENT_TYPES_NS}}}Default"):
        if default.get("Extension", "").lower() == extension:
            return content_types_xml

    text = content_types_xml.decode('utf-8')
    close_pos = text.rfind('</Types>')
    if close_pos == -1:
        logger.warning("[Content_Types].xml has no closing Types tag, leaving it unchanged")
        return content_types_xml

    element = f'<Default Extension="{extension}" ContentType="{content_type}"/>'
    logger.debug(f"Registering content type {content_type} for .{extension}")
    return (text[:close_pos] + element + text[close_pos:]).encode('utf-8')
