"""
Macro helpers - finding, repairing and replacing ${name} placeholders.

All functions work on the raw XML text of a part and return new text;
markup outside the affected macros is left untouched.
"""

from __future__ import annotations

import logging
import re
from typing import Any, List, Optional

logger = logging.getLogger(__name__)

MACRO_OPEN = "${"
MACRO_CLOSE = "}"

# ${name} as it appears after normalization
MACRO_PATTERN = re.compile(r'\$\{(.*?)\}', re.DOTALL)

# ${name} possibly torn apart by run markup. Markup between '$' and '{' is
# only bridged when the '$' opens its text element, so 'Price $' followed by
# a separate '{note}' run stays as it is.
BROKEN_MACRO_PATTERN = re.compile(
    r'\$'
    r'(?:(?<=>\$)(?:<[^>]*>)+)?'     # markup between '$' and '{'
    r'\{[^}]+\}',
    re.DOTALL
)

TAG_PATTERN = re.compile(r'<[^>]*>')


def ensure_macro(search: str) -> str:
    """Wrap a bare variable name in ${ }."""
    if search.startswith(MACRO_OPEN) and search.endswith(MACRO_CLOSE):
        return search
    return f"{MACRO_OPEN}{search}{MACRO_CLOSE}"


def strip_tags(text: str) -> str:
    return TAG_PATTERN.sub('', text)


def fix_broken_macros(part_xml: str) -> str:
    """
    Glue macros back together after an editor split them into several runs.

    '${na</w:t></w:r><w:r><w:t>me}' becomes '${name}'.
    """
    return BROKEN_MACRO_PATTERN.sub(lambda match: strip_tags(match.group(0)), part_xml)


def variables_in(part_xml: str) -> List[str]:
    """Names of every macro in a part, in document order, duplicates kept."""
    return MACRO_PATTERN.findall(part_xml)


def ensure_utf8(value: Any) -> str:
    """
    Coerce a replacement value to text that encodes cleanly as UTF-8.

    Bytes that are not valid UTF-8 are read as Latin-1.
    """
    if value is None:
        return ''
    if isinstance(value, (bytes, bytearray)):
        try:
            return bytes(value).decode('utf-8')
        except UnicodeDecodeError:
            logger.debug("Replacement is not valid UTF-8, decoding as Latin-1")
            return bytes(value).decode('latin-1')
    if not isinstance(value, str):
        return str(value)
    try:
        value.encode('utf-8')
    except UnicodeEncodeError:
        # lone surrogates
        return value.encode('utf-8', 'replace').decode('utf-8')
    return value


def replace_macro(part_xml: str, search: str, replace: Any, limit: Optional[int] = None) -> str:
    """
    Replace a macro with literal text.

    Args:
        part_xml: Part content
        search: Variable name or ${name}
        replace: Replacement text (inserted as-is, not XML-escaped)
        limit: Maximum number of replacements in this part (None or negative = all)

    Returns:
        New part content
    """
    if limit is not None and limit == 0:
        return part_xml

    pattern = re.compile(re.escape(ensure_macro(search)))
    replacement = ensure_utf8(replace)
    count = 0 if limit is None or limit < 0 else limit
    return pattern.sub(lambda _match: replacement, part_xml, count=count)


def suffix_macros(xml: str, index: int) -> str:
    """Rename every ${name} in a fragment to ${name#index}."""
    return MACRO_PATTERN.sub(
        lambda match: f"{MACRO_OPEN}{match.group(1)}#{index}{MACRO_CLOSE}", xml
    )
