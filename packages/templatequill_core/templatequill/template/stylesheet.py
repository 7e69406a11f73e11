"""XSL transformation of a part with lxml."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Dict, Optional, Union

from lxml import etree as lxml_etree

from ..exceptions import StylesheetTransformError

logger = logging.getLogger(__name__)

StylesheetSource = Union[str, bytes, Path, Any]

_PARAM_NAME = re.compile(r'^[A-Za-z_][\w.-]*$')


def load_stylesheet(stylesheet: StylesheetSource) -> lxml_etree.XSLT:
    """
    Compile an XSL style sheet.

    Args:
        stylesheet: lxml element/tree, XML text or bytes, or a file path
    """
    try:
        if isinstance(stylesheet, (lxml_etree._Element, lxml_etree._ElementTree)):
            document = stylesheet
        elif isinstance(stylesheet, bytes) or (isinstance(stylesheet, str) and stylesheet.lstrip().startswith('<')):
            if isinstance(stylesheet, str):
                stylesheet = stylesheet.encode('utf-8')
            document = lxml_etree.fromstring(stylesheet)
        else:
            document = lxml_etree.parse(str(Path(stylesheet)))
        return lxml_etree.XSLT(document)
    except (lxml_etree.XMLSyntaxError, lxml_etree.XSLTParseError, OSError) as e:
        raise StylesheetTransformError("Could not load the given XSL style sheet", str(e)) from e


def bind_parameters(parameters: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Quote parameter values as XPath string literals."""
    bound = {}
    for name, value in (parameters or {}).items():
        if not isinstance(name, str) or not _PARAM_NAME.match(name):
            raise StylesheetTransformError(
                "Could not set values for the given XSL style sheet parameters", repr(name)
            )
        bound[name] = lxml_etree.XSLT.strparam(str(value))
    return bound


def transform_part(
    part_xml: str,
    stylesheet: StylesheetSource,
    parameters: Optional[Dict[str, Any]] = None
) -> str:
    """
    Apply an XSL style sheet to a part.

    Raises:
        StylesheetTransformError: On style sheet load, parameter binding,
            part load or transformation failure
    """
    transform = load_stylesheet(stylesheet)
    params = bind_parameters(parameters)

    try:
        document = lxml_etree.fromstring(part_xml.encode('utf-8'))
    except lxml_etree.XMLSyntaxError as e:
        raise StylesheetTransformError("Could not load XML from the given template", str(e)) from e

    try:
        result = transform(document, **params)
    except lxml_etree.XSLTApplyError as e:
        raise StylesheetTransformError("Could not transform the given XML document", str(e)) from e

    output = str(result)
    if not output:
        raise StylesheetTransformError(
            "Could not transform the given XML document",
            "; ".join(str(entry) for entry in transform.error_log) or "empty result",
        )
    logger.debug(f"XSL transform produced {len(output)} characters")
    return output
