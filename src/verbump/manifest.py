import logging
import pathlib
import xml.etree.ElementTree as ET

from . import errors, version
from .report import UpdateReport

__all__ = [
    "ANDROID_NS",
    "update_manifest",
    "update_file",
]

logger = logging.getLogger(__name__)

ANDROID_NS = "http://schemas.android.com/apk/res/android"

VERSION_CODE = "versionCode"
VERSION_NAME = "versionName"


def _android_attr(name: str) -> str:
    return f"{{{ANDROID_NS}}}{name}"


def _register_namespaces(path: pathlib.Path) -> None:
    # Without this ElementTree writes the prefixes back as ns0, ns1, ...
    for _, (prefix, uri) in ET.iterparse(path, events=("start-ns",)):
        if prefix:
            ET.register_namespace(prefix, uri)


def _load(path: pathlib.Path) -> ET.ElementTree:
    parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=True))
    try:
        _register_namespaces(path)
        return ET.parse(path, parser=parser)
    except ET.ParseError as e:
        raise errors.StructuralError(f"Cannot parse {path}: {e}") from e


def _update_version_code(manifest: ET.Element, report: UpdateReport) -> bool:
    attr = _android_attr(VERSION_CODE)
    old = manifest.get(attr)
    if old is None:
        report.add_warning(f"Did not find android:{VERSION_CODE} attribute, skipping")
        return False

    logger.info(f"Found android:{VERSION_CODE} attribute: {old}")
    if not version.is_bare_integer(old):
        report.add_warning(f"android:{VERSION_CODE} '{old}' is not an integer, leaving it")
        return True

    new = version.increment_integer(old)
    manifest.set(attr, new)
    report.add_change(f"android:{VERSION_CODE}", old, new)
    return True


def _update_version_name(
    manifest: ET.Element, mode: version.IncrementMode, report: UpdateReport
) -> bool:
    attr = _android_attr(VERSION_NAME)
    old = manifest.get(attr)
    if old is None:
        report.add_warning(f"Did not find android:{VERSION_NAME} attribute, skipping")
        return False

    logger.info(f"Found android:{VERSION_NAME} attribute: {old}")
    new = version.increment_version(old, version.Arity.QUARTET, mode)
    if new == old:
        report.add_warning(
            f"android:{VERSION_NAME} '{old}' is not a quartet version, leaving it"
        )
        return True

    manifest.set(attr, new)
    report.add_change(f"android:{VERSION_NAME}", old, new)
    return True


def update_manifest(
    tree: ET.ElementTree, mode: version.IncrementMode, report: UpdateReport
) -> bool:
    """Bump versionCode and versionName of a parsed manifest in place.

    Returns True when at least one of the two attributes exists, i.e. when the
    document is worth writing back.
    """
    manifest = tree.getroot()
    if manifest.tag != "manifest":
        raise errors.StructuralError(f"No top level manifest element in {report.path}")

    found_code = _update_version_code(manifest, report)
    found_name = _update_version_name(manifest, mode, report)
    return found_code or found_name


def update_file(path: pathlib.Path, mode: version.IncrementMode) -> UpdateReport:
    report = UpdateReport(path=path)

    logger.info(f"Loading {path}")
    tree = _load(path)
    logger.info(f"Loaded {path}")

    if update_manifest(tree, mode, report):
        logger.info(f"Writing out updated manifest file: {path}")
        tree.write(path, encoding="utf-8", xml_declaration=True)
        report.written = True
    else:
        report.add_warning(f"Nothing to update in {path}")

    logger.info("Done")
    return report
