"""
Table row cloning on raw WordprocessingML text.

Row boundaries are found by offset search for <w:tr> and </w:tr>, so the
markup around the cloned row is never re-serialized. Rows of nested tables
are counted, so the boundaries always belong to the innermost row that
encloses the macro.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from ..exceptions import PlaceholderNotFoundError, RowBoundaryNotFoundError
from .macros import ensure_macro, suffix_macros

logger = logging.getLogger(__name__)

ROW_OPEN_PATTERN = re.compile(r'<w:tr(?=[\s>])')
ROW_CLOSE_TAG = '</w:tr>'
ROW_TAG_PATTERN = re.compile(r'</w:tr>|<w:tr(?=[\s>])')
TABLE_CLOSE_TAG = '</w:tbl>'

VMERGE_RESTART = re.compile(r'<w:vMerge\s+w:val="restart"\s*/>')
VMERGE_CONTINUE = re.compile(r'<w:vMerge\s*/>|<w:vMerge\s+w:val="continue"\s*/>')


def get_slice(xml: str, start: int, end: Optional[int] = None) -> str:
    """Text between two offsets; end=None means up to the end of the part."""
    if end is None:
        end = len(xml)
    return xml[start:end]


def find_row_start(xml: str, offset: int) -> int:
    """
    Find the start position of the innermost table row still open at offset.

    Raises:
        RowBoundaryNotFoundError: If no row encloses offset
    """
    open_rows = []
    for match in ROW_TAG_PATTERN.finditer(xml, 0, offset):
        if match.group(0) == ROW_CLOSE_TAG:
            if open_rows:
                open_rows.pop()
        else:
            open_rows.append(match.start())
    if not open_rows:
        raise RowBoundaryNotFoundError("Can not find the start position of the row to clone")
    return open_rows[-1]


def find_next_row_start(xml: str, offset: int) -> int:
    """Start position of the first table row at or after offset, -1 if none."""
    match = ROW_OPEN_PATTERN.search(xml, offset)
    return match.start() if match else -1


def find_row_end(xml: str, offset: int) -> int:
    """
    Position just past the </w:tr> closing the row that holds offset.

    An offset at a row's opening tag selects that row. Rows of nested
    tables opened after offset are skipped.

    Returns:
        End position, or -1 if the row is never closed
    """
    opening = ROW_OPEN_PATTERN.match(xml, offset)
    if opening:
        offset = opening.end()

    depth = 0
    for match in ROW_TAG_PATTERN.finditer(xml, offset):
        if match.group(0) != ROW_CLOSE_TAG:
            depth += 1
        elif depth:
            depth -= 1
        else:
            return match.end()
    return -1


def find_row_span(xml: str, row_start: int, row_end: int) -> int:
    """
    Extend a row to cover the rows merged into it vertically.

    A row holding a vMerge restart cell swallows every directly following row
    of the same table that holds a vMerge continue cell.

    Returns:
        End position of the last row in the span
    """
    if not VMERGE_RESTART.search(get_slice(xml, row_start, row_end)):
        return row_end

    while True:
        next_start = find_next_row_start(xml, row_end)
        if next_start == -1 or TABLE_CLOSE_TAG in get_slice(xml, row_end, next_start):
            break
        next_end = find_row_end(xml, next_start)
        if next_end == -1:
            break
        if not VMERGE_CONTINUE.search(get_slice(xml, next_start, next_end)):
            break
        row_end = next_end

    return row_end


def clone_row_xml(xml: str, search: str, number_of_clones: int) -> str:
    """
    Duplicate the table row holding a macro.

    The first occurrence of the macro selects the row. Clone i gets every
    ${name} in it renamed to ${name#i}.

    Raises:
        PlaceholderNotFoundError: If the macro is not in the part
        RowBoundaryNotFoundError: If no row encloses the macro
    """
    macro = ensure_macro(search)
    tag_pos = xml.find(macro)
    if tag_pos == -1:
        raise PlaceholderNotFoundError(macro)

    row_start = find_row_start(xml, tag_pos)
    row_end = find_row_end(xml, tag_pos)
    if row_end == -1:
        raise RowBoundaryNotFoundError("Can not find the end position of the row to clone")

    row_end = find_row_span(xml, row_start, row_end)
    row_xml = get_slice(xml, row_start, row_end)
    logger.debug(f"Cloning row [{row_start}:{row_end}] for {macro} x{number_of_clones}")

    clones = ''.join(suffix_macros(row_xml, index) for index in range(1, number_of_clones + 1))
    return get_slice(xml, 0, row_start) + clones + get_slice(xml, row_end)
