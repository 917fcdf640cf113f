"""Version bumping for Apple property lists (Info.plist).

A plist is 'Apple flavoured' XML: a field is a ``key`` element whose text names
it, and its value is the ``string`` element following that key::

    <key>CFBundleShortVersionString</key>
    <string>1.0.2</string>
    <key>CFBundleVersion</key>
    <string>5</string>

``CFBundleShortVersionString`` is a triple (the only form the store accepts),
``CFBundleVersion`` acts as the revision counter of that triple and is usually
a plain integer.
"""

import logging
import pathlib
import re
import xml.etree.ElementTree as ET
from typing import Optional

from . import errors, version
from .report import UpdateReport

__all__ = [
    "SHORT_VERSION_KEY",
    "BUNDLE_VERSION_KEY",
    "find_value_node",
    "update_plist",
    "serialize_plist",
    "update_file",
]

logger = logging.getLogger(__name__)

SHORT_VERSION_KEY = "CFBundleShortVersionString"
BUNDLE_VERSION_KEY = "CFBundleVersion"

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'
INDENT = "  "
NEWLINE = "\r\n"

_DOCTYPE_MATCHER = re.compile(r"<!DOCTYPE[^>]*>")


def find_value_node(root: ET.Element, name: str) -> Optional[ET.Element]:
    """Equivalent of ``/plist/dict/key[contains(., name)]/following-sibling::string[1]``"""
    if root.tag != "plist":
        return None
    for d in root.findall("dict"):
        children = list(d)
        for i, child in enumerate(children):
            if child.tag != "key" or name not in (child.text or ""):
                continue
            for sibling in children[i + 1 :]:
                if sibling.tag == "string":
                    return sibling
    return None


def _get_required_node(root: ET.Element, name: str, path: pathlib.Path) -> ET.Element:
    node = find_value_node(root, name)
    if node is None:
        raise errors.StructuralError(f"Cannot find {name} in plist {path}")
    logger.info(f"Found {name}: '{node.text or ''}'")
    return node


def _set_text(
    node: ET.Element, name: str, old: str, new: str, report: UpdateReport
) -> None:
    if new == old:
        return
    node.text = new
    report.add_change(name, old, new)


def _increment_bundle_version(text: str, report: UpdateReport) -> str:
    if version.is_bare_integer(text):
        return version.increment_integer(text)

    v = version.parse_version(text, version.Arity.QUARTET)
    if v is not None:
        return str(v.increment(version.IncrementMode.REVISION))

    report.add_warning(
        f"{BUNDLE_VERSION_KEY} '{text}' is neither an integer nor a quartet, leaving it"
    )
    return text


def update_plist(
    root: ET.Element, mode: version.IncrementMode, report: UpdateReport
) -> None:
    """Bump the short version and its paired bundle version in place.

    Both nodes are looked up before anything is modified, so a missing one
    leaves the document untouched.
    """
    short_node = _get_required_node(root, SHORT_VERSION_KEY, report.path)
    bundle_node = _get_required_node(root, BUNDLE_VERSION_KEY, report.path)

    short_old = short_node.text or ""
    bundle_old = bundle_node.text or ""

    short_text = short_old
    if not short_text.strip():
        short_text = version.default_version(version.Arity.TRIPLE)

    short = version.parse_version(short_text, version.Arity.TRIPLE)
    if short is not None:
        short_new = str(short.increment(mode))
        if mode == version.IncrementMode.BUILD:
            bundle_new = "0"
        else:
            bundle_new = _increment_bundle_version(bundle_old, report)
    elif version.is_bare_integer(short_text):
        # Legacy single number short version, the bundle version is reset
        # whatever the mode is.
        report.add_warning(
            f"{SHORT_VERSION_KEY} '{short_old}' is a bare integer,"
            f" incrementing it and resetting {BUNDLE_VERSION_KEY} to 0"
        )
        short_new = version.increment_integer(short_text)
        bundle_new = "0"
    else:
        report.add_warning(
            f"{SHORT_VERSION_KEY} '{short_old}' is not a triple version, leaving it"
        )
        short_new = short_old
        if mode == version.IncrementMode.BUILD:
            bundle_new = bundle_old
        else:
            bundle_new = _increment_bundle_version(bundle_old, report)

    _set_text(short_node, SHORT_VERSION_KEY, short_old, short_new, report)
    _set_text(bundle_node, BUNDLE_VERSION_KEY, bundle_old, bundle_new, report)


def serialize_plist(root: ET.Element, doctype: Optional[str]) -> bytes:
    ET.indent(root, space=INDENT)
    body = ET.tostring(root, encoding="unicode").replace(" />", "/>")

    lines = [XML_DECLARATION]
    if doctype is not None:
        lines.append(doctype)
    lines.append(body)

    text = "\n".join(lines) + "\n"
    text = text.replace("[]>", ">")
    text = text.replace("\r\n", "\n").replace("\n", NEWLINE)
    return text.encode("utf-8")


def update_file(path: pathlib.Path, mode: version.IncrementMode) -> UpdateReport:
    report = UpdateReport(path=path)

    logger.info(f"Loading: {path}")
    raw = path.read_bytes()
    parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=True))
    try:
        root = ET.fromstring(raw, parser=parser)
    except ET.ParseError as e:
        raise errors.StructuralError(f"Cannot parse {path}: {e}") from e

    m = _DOCTYPE_MATCHER.search(raw.decode("utf-8", errors="replace"))
    doctype = m.group(0) if m is not None else None

    update_plist(root, mode, report)

    if report.changes:
        logger.info(f"Saving: {path}")
        path.write_bytes(serialize_plist(root, doctype))
        report.written = True
    else:
        report.add_warning(f"Nothing to update in {path}")

    logger.info("Done")
    return report
