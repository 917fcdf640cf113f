import codecs
import logging
import pathlib
from collections.abc import Sequence

from . import errors, version
from .report import UpdateReport

__all__ = [
    "DEFAULT_KEYS",
    "COMMENT_MARKER",
    "update_lines",
    "update_file",
]

logger = logging.getLogger(__name__)

# [assembly: AssemblyVersion("1.0.2.0")]
# [assembly: AssemblyFileVersion("1.0.2.0")]
DEFAULT_KEYS = (
    "AssemblyVersion",
    "AssemblyFileVersion",
    "AssemblyInformationalVersion",
)

COMMENT_MARKER = "//"


def _find_line_index(lines: Sequence[str], key: str) -> int | None:
    for i, line in enumerate(lines):
        if key in line and COMMENT_MARKER not in line:
            return i
    return None


def update_lines(
    lines: list[str],
    mode: version.IncrementMode,
    report: UpdateReport,
    keys: Sequence[str] = DEFAULT_KEYS,
) -> set[str]:
    """Bump the version of each declaration in ``lines`` in place.

    Returns the set of keys whose declaration line was found.
    """
    found = set()
    for key in keys:
        logger.info(f"Looking for {key} line...")
        i = _find_line_index(lines, key)
        if i is None:
            report.add_warning(f"Did not find the '{key}' code line, skipping")
            continue

        found.add(key)
        new_line, old, new = version.search_and_increment(
            lines[i], version.Arity.QUARTET, mode
        )
        if old is None or new is None:
            report.add_warning(
                f"The '{key}' code line holds no quartet version, leaving it"
            )
            continue

        lines[i] = new_line
        report.add_change(key, str(old), str(new))
    return found


def update_file(
    path: pathlib.Path,
    mode: version.IncrementMode,
    keys: Sequence[str] = DEFAULT_KEYS,
) -> UpdateReport:
    report = UpdateReport(path=path)

    logger.info(f"Loading {path}")
    data = path.read_bytes()
    bom = codecs.BOM_UTF8 if data.startswith(codecs.BOM_UTF8) else b""
    # Bytes that are not UTF-8 (e.g. cp1252 sources) are carried through as is
    text = data[len(bom) :].decode("utf-8", errors="surrogateescape")
    lines = text.splitlines(keepends=True)
    logger.info(f"Loaded {path}")

    found = update_lines(lines, mode, report, keys=keys)
    if not found:
        raise errors.StructuralError(
            f"Did not find any of {', '.join(keys)} code lines in {path}"
        )

    if report.changes:
        logger.info(f"Revision updated. Writing out new {path}")
        new_text = "".join(lines)
        path.write_bytes(bom + new_text.encode("utf-8", errors="surrogateescape"))
        report.written = True
    else:
        report.add_warning(f"Nothing to update in {path}")

    logger.info("Done")
    return report
