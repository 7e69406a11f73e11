"""
Template processor - fills DOCX templates by editing part XML as text.

Supports:
- ${name} value substitution in the main part, headers and footers
- Table row cloning (with vertically merged rows)
- ${block} ... ${/block} cloning, replacement and deletion
- Inline images with relationship updates
- Optional XSL transformation of the main part

Example:
    processor = TemplateProcessor("invoice.docx")
    processor.clone_row("item", 2)
    processor.set_value("item#1", "Paper")
    processor.set_value("item#2", "Ink")
    processor.save_as("invoice-0042.docx")
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, Set, Union

from .exceptions import ArchiveCloseError, CopyFileError, TemporaryFileCreationError
from .package import (
    CONTENT_TYPES_PATH,
    DOCUMENT_RELS_PATH,
    ZipPackage,
    build_relationships_xml,
    ensure_default_content_type,
    read_relationships,
)
from .settings import Settings
from .template.blocks import clone_block_xml, match_block, replace_block_xml
from .template.images import (
    DEFAULT_IMAGE_SIZE,
    drawing_markup,
    image_relationship_id,
    image_size,
    media_entry_name,
)
from .template.macros import fix_broken_macros, replace_macro, variables_in
from .template.parts import PartStore
from .template.rows import clone_row_xml
from .template.stylesheet import StylesheetSource, transform_part

logger = logging.getLogger(__name__)


class TemplateProcessor:
    """
    Fills a DOCX template in a private working copy.

    The template is copied to a temporary file on construction; edits act on
    the in-memory part text and are written to the working copy by save().
    Call save() or save_as() (or use the processor as a context manager) so
    the working copy does not outlive the processor.

    Not thread-safe.
    """

    def __init__(self, template_path: Union[str, Path], settings: Optional[Settings] = None):
        """
        Initializes template processor.

        Args:
            template_path: Path to the DOCX template
            settings: Working-file settings (None = Settings.default())

        Raises:
            TemporaryFileCreationError: If no working file can be created
            CopyFileError: If the template cannot be copied
        """
        self.settings = settings or Settings.default()
        self.template_path = Path(template_path)
        self.temp_document_filename = self._create_working_file()

        try:
            shutil.copyfile(self.template_path, self.temp_document_filename)
        except OSError as e:
            os.remove(self.temp_document_filename)
            raise CopyFileError(str(self.template_path), self.temp_document_filename, str(e)) from e

        try:
            self._package = ZipPackage(self.settings.compression).open(self.temp_document_filename)
            self.parts = PartStore.load(self._package, fix_broken_macros)
        except Exception:
            os.remove(self.temp_document_filename)
            raise

        self._image_data: Dict[str, Dict[str, str]] = {}
        self.image_width = DEFAULT_IMAGE_SIZE
        self.image_height = DEFAULT_IMAGE_SIZE
        self._saved = False

        logger.info(f"Loaded template {self.template_path} into {self.temp_document_filename}")

    def _create_working_file(self) -> str:
        try:
            fd, temp_name = tempfile.mkstemp(
                prefix=self.settings.temp_prefix, suffix=".docx", dir=self.settings.temp_dir
            )
        except OSError as e:
            raise TemporaryFileCreationError(self.settings.temp_dir, str(e)) from e
        os.close(fd)
        return temp_name

    @property
    def main_part(self) -> str:
        """XML text of word/document.xml."""
        return self.parts.main

    @main_part.setter
    def main_part(self, xml: str) -> None:
        self.parts.main = xml

    def apply_xsl_stylesheet(self, stylesheet: StylesheetSource,
                             parameters: Optional[Dict[str, Any]] = None) -> None:
        """
        Transforms the main part with an XSL style sheet.

        Args:
            stylesheet: lxml tree, XSL text/bytes or path
            parameters: Style sheet parameters, passed as strings

        Raises:
            StylesheetTransformError: If any step of the transformation fails
        """
        self.parts.main = transform_part(self.parts.main, stylesheet, parameters)

    def set_value(self, search: str, replace: Any, limit: Optional[int] = None) -> None:
        """
        Replaces a macro in headers, the main part and footers.

        Args:
            search: Variable name or ${name}
            replace: Replacement text, inserted as-is
            limit: Maximum replacements per part (None = all)
        """
        self.parts.apply(lambda xml: replace_macro(xml, search, replace, limit))

    def set_image_value(self, search: str, image_file_name: str,
                        image_source_path: Union[str, Path]) -> None:
        """
        Replaces a macro with an inline image.

        The image is stored as word/media/<image_file_name>; its relationship
        id is rId(1000 + n) for a macro ending in '#n'. Does nothing if the
        source file does not exist.
        """
        source = Path(image_source_path)
        if not source.is_file():
            logger.warning(f"Image source not found, skipping {search}: {source}")
            return

        width, height = image_size(source)

        entry = media_entry_name(image_file_name)
        self._package.delete_entry(entry)
        self._package.add_file(entry, source)

        image_id = image_relationship_id(search)
        self._image_data[f"rId{image_id}"] = {
            "type": "image",
            "target": f"media/{image_file_name}",
            "docPart": f"media/{image_file_name}",
        }
        self.image_width, self.image_height = width, height

        logger.debug(f"Inserting image {image_file_name} as rId{image_id} for {search}")
        self.set_value(
            search, drawing_markup(image_id, image_file_name, self.image_width, self.image_height)
        )

    def get_variables(self) -> Set[str]:
        """Returns the distinct macro names of all parts."""
        variables = variables_in(self.parts.main)
        for xml in self.parts.headers.values():
            variables.extend(variables_in(xml))
        for xml in self.parts.footers.values():
            variables.extend(variables_in(xml))
        return set(variables)

    def clone_row(self, search: str, number_of_clones: int) -> None:
        """
        Clones the table row holding a macro.

        Raises:
            PlaceholderNotFoundError: If the macro is not in the main part
            RowBoundaryNotFoundError: If the macro is not inside a table row
        """
        self.parts.main = clone_row_xml(self.parts.main, search, number_of_clones)

    def clone_block(self, blockname: str, clones: int = 1, replace: bool = True) -> Optional[str]:
        """
        Clones a ${blockname} ... ${/blockname} block.

        Args:
            blockname: Block name
            clones: Number of copies of the block body
            replace: Whether to put the copies in place of the block

        Returns:
            Block body, or None if the block was not found
        """
        match = match_block(self.parts.main, blockname)
        if match is None:
            logger.debug(f"Block {blockname} not found")
            return None

        if replace:
            self.parts.main = clone_block_xml(self.parts.main, match, clones)
        return match.body

    def replace_block(self, blockname: str, replacement: str) -> None:
        """Replaces a block, markers included, with literal text."""
        match = match_block(self.parts.main, blockname)
        if match is None:
            logger.debug(f"Block {blockname} not found")
            return
        self.parts.main = replace_block_xml(self.parts.main, match, replacement)

    def delete_block(self, blockname: str) -> None:
        """Removes a block, markers included."""
        self.replace_block(blockname, '')

    def save(self) -> str:
        """
        Writes the edited parts to the working copy.

        Returns:
            Path of the working copy

        Raises:
            ArchiveCloseError: If the package cannot be written
        """
        self.parts.write_headers(self._package)
        self.parts.write_main(self._package)

        relationships = read_relationships(self.temp_document_filename)
        if self._image_data:
            document_rels = dict(relationships.get("document", {}))
            document_rels.update(self._image_data)
            self._package.write_entry(DOCUMENT_RELS_PATH, build_relationships_xml(document_rels))
            self._register_image_types()
            self._image_data = {}

        self.parts.write_footers(self._package)

        if not self._package.close():
            raise ArchiveCloseError("Could not close zip file", self.temp_document_filename)

        self._saved = True
        return self.temp_document_filename

    def _register_image_types(self) -> None:
        if not self._package.locate_entry(CONTENT_TYPES_PATH):
            return
        content_types = self._package.read_entry(CONTENT_TYPES_PATH)
        for entry in self._image_data.values():
            extension = Path(entry["target"]).suffix
            if extension:
                content_types = ensure_default_content_type(content_types, extension)
        self._package.write_entry(CONTENT_TYPES_PATH, content_types)

    def save_as(self, file_name: Union[str, Path]) -> None:
        """
        Saves the result document to file_name, replacing any existing file.

        The working copy is copied, not renamed, so the result gets the
        caller's default ownership and permissions.
        """
        temp_file_name = self.save()
        destination = Path(file_name)

        if destination.exists():
            destination.unlink()

        shutil.copyfile(temp_file_name, destination)
        os.remove(temp_file_name)
        logger.info(f"Saved document to {destination}")

    def discard(self) -> None:
        """Drops the working copy without saving."""
        if self._saved:
            return
        self._saved = True
        if os.path.exists(self.temp_document_filename):
            os.remove(self.temp_document_filename)
            logger.debug(f"Discarded working copy {self.temp_document_filename}")

    def __enter__(self):
        """Enter context manager."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit context manager, dropping the working copy if it was never saved."""
        self.discard()
