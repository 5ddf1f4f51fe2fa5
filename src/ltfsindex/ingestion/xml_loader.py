"""LTFS index XML loading.

Uses lxml to read the index and converts it into plain nested mappings.
A tag that occurs once under its parent becomes a single value, a repeated
tag becomes a list in document order. Callers reading a field that may
repeat go through :func:`as_sequence` instead of checking the shape
themselves.
"""

from __future__ import annotations

import logging
from os import PathLike
from typing import IO, Any, Dict, Tuple, Union

from lxml import etree

from ltfsindex.errors import IndexFormatError

LOGGER = logging.getLogger(__name__)

ROOT_TAG = "ltfsindex"

RawNode = Union[Dict[str, Any], list, str]
IndexSource = Union[str, "PathLike[str]", bytes, IO[bytes]]


def _make_parser() -> etree.XMLParser:
    return etree.XMLParser(
        remove_comments=True,
        remove_pis=True,
        resolve_entities=False,
        no_network=True,
        huge_tree=True,
    )


def _local_name(tag: str) -> str:
    return etree.QName(tag).localname


def element_to_node(element: etree._Element) -> RawNode:
    """Convert one element and its subtree into a raw node."""
    children = [child for child in element if isinstance(child.tag, str)]
    text = element.text or ""

    if not children and not element.attrib:
        return text if text.strip() else {}

    node: Dict[str, Any] = {_local_name(key): value for key, value in element.attrib.items()}
    repeated: set[str] = set()
    for child in children:
        key = _local_name(child.tag)
        value = element_to_node(child)
        if key not in node:
            node[key] = value
        elif key in repeated:
            node[key].append(value)
        else:
            node[key] = [node[key], value]
            repeated.add(key)

    if text.strip() and not children:
        node["content"] = text
    return node


def load_index_document(source: IndexSource) -> Dict[str, Any]:
    """Parse an LTFS index and return the content of its root element."""
    parser = _make_parser()
    try:
        if isinstance(source, (bytes, bytearray)):
            root = etree.fromstring(bytes(source), parser)
        elif isinstance(source, (str, PathLike)):
            root = etree.parse(str(source), parser).getroot()
        else:
            root = etree.parse(source, parser).getroot()
    except etree.XMLSyntaxError as exc:
        raise IndexFormatError(f"Index is not well-formed XML: {exc}") from exc

    if root is None or _local_name(root.tag) != ROOT_TAG:
        tag = None if root is None else _local_name(root.tag)
        raise IndexFormatError(f"Expected <{ROOT_TAG}> root element, found <{tag}>")

    document = element_to_node(root)
    if not isinstance(document, dict):
        raise IndexFormatError(f"<{ROOT_TAG}> element is empty")
    LOGGER.debug("Loaded index document with fields: %s", ", ".join(sorted(document)))
    return document


def as_sequence(value: Any) -> Tuple[Any, ...]:
    """Return a field that may occur once or many times as a tuple."""
    if value is None:
        return ()
    if isinstance(value, (list, tuple)):
        return tuple(value)
    return (value,)
