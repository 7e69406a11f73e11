"""
Block location for ${name} ... ${/name} regions.

A block marker counts only when it is the whole text of its paragraph.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from .macros import MACRO_CLOSE, MACRO_OPEN, strip_tags

logger = logging.getLogger(__name__)

PARAGRAPH_OPEN_TAGS = ('<w:p ', '<w:p>')
PARAGRAPH_CLOSE_TAG = '</w:p>'


@dataclass
class BlockMatch:
    """Offsets of a matched block in a part."""
    start: int          # open marker paragraph start
    end: int            # close marker paragraph end
    body: str


def block_markers(blockname: str) -> Tuple[str, str]:
    """Open and close markers of a block, '${name}' and '${/name}'."""
    if blockname.startswith(MACRO_OPEN) and blockname.endswith(MACRO_CLOSE):
        blockname = blockname[len(MACRO_OPEN):-len(MACRO_CLOSE)]
    return f"{MACRO_OPEN}{blockname}{MACRO_CLOSE}", f"{MACRO_OPEN}/{blockname}{MACRO_CLOSE}"


def find_marker_paragraph(xml: str, marker: str, start: int = 0) -> Optional[Tuple[int, int]]:
    """
    Find the first paragraph at or after start whose whole text is marker.

    Returns:
        (paragraph start, position just past </w:p>) or None
    """
    pos = xml.find(marker, start)
    while pos != -1:
        para_start = max(xml.rfind(tag, start, pos) for tag in PARAGRAPH_OPEN_TAGS)
        close_pos = xml.find(PARAGRAPH_CLOSE_TAG, pos)
        if para_start != -1 and close_pos != -1:
            para_end = close_pos + len(PARAGRAPH_CLOSE_TAG)
            inside = PARAGRAPH_CLOSE_TAG not in xml[para_start:pos]
            if inside and strip_tags(xml[para_start:para_end]).strip() == marker:
                return para_start, para_end
        pos = xml.find(marker, pos + len(marker))
    return None


def match_block(xml: str, blockname: str) -> Optional[BlockMatch]:
    """
    Locate a block: open marker paragraph, body, close marker paragraph.

    Returns:
        BlockMatch or None when either marker paragraph is missing
    """
    open_marker, close_marker = block_markers(blockname)

    opening = find_marker_paragraph(xml, open_marker)
    if opening is None:
        return None
    closing = find_marker_paragraph(xml, close_marker, opening[1])
    if closing is None:
        return None

    return BlockMatch(
        start=opening[0],
        end=closing[1],
        body=xml[opening[1]:closing[0]],
    )


def replace_block_xml(xml: str, match: BlockMatch, replacement: str) -> str:
    """Replace a matched block, markers included."""
    return xml[:match.start] + replacement + xml[match.end:]


def clone_block_xml(xml: str, match: BlockMatch, clones: int) -> str:
    """Replace a matched block with clones copies of its body."""
    return replace_block_xml(xml, match, match.body * clones)
