"""Text-level template editing: macros, rows, blocks, images and XSL."""

from .parts import PartStore, header_name, footer_name, MAIN_PART_NAME
from .macros import ensure_macro, fix_broken_macros, replace_macro, variables_in
from .rows import clone_row_xml
from .blocks import BlockMatch, clone_block_xml, match_block, replace_block_xml
from .images import EMU_PER_PIXEL, drawing_markup, image_relationship_id, image_size

__all__ = [
    "PartStore",
    "header_name",
    "footer_name",
    "MAIN_PART_NAME",
    "ensure_macro",
    "fix_broken_macros",
    "replace_macro",
    "variables_in",
    "clone_row_xml",
    "BlockMatch",
    "match_block",
    "clone_block_xml",
    "replace_block_xml",
    "EMU_PER_PIXEL",
    "drawing_markup",
    "image_relationship_id",
    "image_size",
]
