"""
Relationships for DOCX packages.

Reads existing relationship files into plain dictionaries and serializes
a relationship set back to a .rels document.
"""

import logging
import posixpath
import xml.etree.ElementTree as ET
import zipfile
from pathlib import Path
from typing import Dict, Union

logger = logging.getLogger(__name__)

# OPC namespaces
OPC_NS = "http://schemas.openxmlformats.org/package/2006/relationships"
REL_TYPE_PREFIX = "http://schemas.openxmlformats.org/officeDocument/2006/relationships/"

PACKAGE_RELS_PATH = "_rels/.rels"
DOCUMENT_RELS_DIR = "word/_rels"
DOCUMENT_RELS_PATH = "word/_rels/document.xml.rels"

Relationship = Dict[str, str]
RelationshipSet = Dict[str, Relationship]


def relationship_source(rels_path: str) -> str:
    """
    Map a .rels entry name to the key of its source part.

    'word/_rels/document.xml.rels' -> 'document', '_rels/.rels' -> 'main'.
    """
    name = posixpath.basename(rels_path)
    if name == '.rels':
        return 'main'
    name = name[:-len('.rels')] if name.endswith('.rels') else name
    return name[:-len('.xml')] if name.endswith('.xml') else name


def is_template_relationships(rels_path: str) -> bool:
    """
    Whether a .rels entry belongs to the package or a top-level word part.

    Nested parts such as word/glossary/ carry their own document.xml.rels
    and are left out so they cannot shadow the main document's set.
    """
    if rels_path == PACKAGE_RELS_PATH:
        return True
    return posixpath.dirname(rels_path) == DOCUMENT_RELS_DIR and rels_path.endswith('.rels')


def parse_relationship_xml(rels_xml: Union[str, bytes]) -> RelationshipSet:
    """Parse relationship XML content."""
    relationships: RelationshipSet = {}
    root = ET.fromstring(rels_xml)
    for rel in root.findall(f"{{{OPC_NS}}}Relationship"):
        rel_id = rel.get("Id", "")
        target = rel.get("Target", "")
        rel_type = rel.get("Type", "")
        if not rel_id:
            continue
        if rel_type.startswith(REL_TYPE_PREFIX):
            rel_type = rel_type[len(REL_TYPE_PREFIX):]
        entry = {
            "type": rel_type,
            "target": target,
            "docPart": target[:-len('.xml')] if target.endswith('.xml') else target,
        }
        target_mode = rel.get("TargetMode")
        if target_mode:
            entry["targetMode"] = target_mode
        relationships[rel_id] = entry
    return relationships


def read_relationships(package_path: Union[str, Path]) -> Dict[str, RelationshipSet]:
    """
    Read the package relationships and those of the top-level word parts.

    Args:
        package_path: Path to DOCX file

    Returns:
        Mapping of source part name to {rel_id: {"type", "target", "docPart"}}.
        The 'document' key is always present and always means
        word/_rels/document.xml.rels.
    """
    relationships: Dict[str, RelationshipSet] = {"document": {}}
    with zipfile.ZipFile(package_path, 'r') as zip_file:
        for name in zip_file.namelist():
            if not is_template_relationships(name):
                continue
            try:
                relationships[relationship_source(name)] = parse_relationship_xml(zip_file.read(name))
            except ET.ParseError as e:
                logger.warning(f"Failed to parse relationships from {name}: {e}")

    logger.debug(f"Parsed {len(relationships)} relationship files from {package_path}")
    return relationships


def relationship_target(entry: Relationship) -> str:
    """Target attribute written for a relationship entry."""
    doc_part = entry.get("docPart", "")
    if entry.get("type") == "image":
        return doc_part
    target = entry.get("target")
    if target is not None and not target.endswith('.xml'):
        return target
    return f"{doc_part}.xml"


def build_relationships_xml(relationships: RelationshipSet) -> bytes:
    """
    Generate relationships XML.

    Args:
        relationships: {rel_id: {"type", "docPart"[, "target", "targetMode"]}}

    Returns:
        Serialized .rels document
    """
    ET.register_namespace('', OPC_NS)

    root = ET.Element(f'{{{OPC_NS}}}Relationships')

    for rel_id, entry in relationships.items():
        rel_type = entry.get("type", "")
        if "://" not in rel_type:
            rel_type = f"{REL_TYPE_PREFIX}{rel_type}"
        rel_elem = ET.SubElement(root, f'{{{OPC_NS}}}Relationship')
        rel_elem.set('Id', rel_id)
        rel_elem.set('Type', rel_type)
        rel_elem.set('Target', relationship_target(entry))
        if entry.get("targetMode"):
            rel_elem.set('TargetMode', entry["targetMode"])

    ET.indent(root, space='  ')
    return ET.tostring(root, encoding='utf-8', xml_declaration=True)
