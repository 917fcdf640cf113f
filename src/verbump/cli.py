import argparse
import dataclasses
import logging
import pathlib
import sys
from collections.abc import Callable, Sequence
from typing import Optional

from . import assemblyinfo, configurator, errors, manifest, plist
from ._version import __version__
from .report import UpdateReport
from .version import IncrementMode

__all__ = [
    "Tool",
    "ANDROID_MANIFEST",
    "ASSEMBLY_INFO",
    "PLIST",
    "setup_logging",
    "run",
    "main_android_manifest",
    "main_assembly_info",
    "main_plist",
]

logger = logging.getLogger(__name__)

FILENAME_TOKEN = "-filename"
INCREMENT_BUILD_NUMBER_TOKEN = "-increment-build-number"
RESET_REVISION_NUMBER_TOKEN = "-reset-revision-number"
VERSION_TOKEN = "-version"

_FLAG_TOKENS = (
    INCREMENT_BUILD_NUMBER_TOKEN,
    RESET_REVISION_NUMBER_TOKEN,
    VERSION_TOKEN,
)


@dataclasses.dataclass(frozen=True)
class Tool:
    prog: str
    file_help: str
    example: str
    update_file: Callable[[pathlib.Path, IncrementMode], UpdateReport]

    def usage(self) -> str:
        return (
            f"Usage: {self.prog} {FILENAME_TOKEN}=<{self.file_help}>"
            f" [{INCREMENT_BUILD_NUMBER_TOKEN}]\n"
            f"e.g. {self.prog} {self.example}"
        )


ANDROID_MANIFEST = Tool(
    prog="androidmanifest-util",
    file_help="path/to/AndroidManifest.xml",
    example=(
        f"{FILENAME_TOKEN}=src/MyProject/Properties/AndroidManifest.xml\t"
        "Will increment manifest/android:versionCode and the REVISION of"
        " manifest/android:versionName"
    ),
    update_file=manifest.update_file,
)

ASSEMBLY_INFO = Tool(
    prog="assemblyinfo-util",
    file_help="file containing assembly version",
    example=(
        f"{FILENAME_TOKEN}=src/MyProject/SharedAssemblyVersion.cs\t"
        "Will increment the REVISION (i.e. last in the quartet) of"
        " AssemblyVersion, AssemblyFileVersion and AssemblyInformationalVersion"
    ),
    update_file=assemblyinfo.update_file,
)

PLIST = Tool(
    prog="plist-util",
    file_help="path/to/Info.plist",
    example=(
        f"{FILENAME_TOKEN}=Info.plist\t"
        "Will increment CFBundleVersion if used by itself, otherwise it will"
        " increment the BUILD of CFBundleShortVersionString and reset"
        " CFBundleVersion to '0'"
    ),
    update_file=plist.update_file,
)


def setup_logging() -> None:
    fmt = (
        "%(asctime)s.%(msecs)03d: %(levelname).1s "
        + "%(name)s.py:%(lineno)d] %(message)s"
    )
    logging.basicConfig(
        level=logging.WARNING,
        format=fmt,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )
    logging.getLogger("verbump").setLevel(logging.INFO)


def _split_argv(argv: Sequence[str]) -> tuple[list[str], list[str]]:
    # Only exact tokens are accepted, matched case-insensitively
    known = []
    unknown = []
    for arg in argv:
        key, sep, value = arg.partition("=")
        if sep and key.lower() == FILENAME_TOKEN:
            known.append(FILENAME_TOKEN + sep + value)
        elif arg.lower() in _FLAG_TOKENS:
            known.append(arg.lower())
        else:
            unknown.append(arg)
    return known, unknown


def parse_args(argv: Sequence[str], tool: Tool) -> tuple[argparse.Namespace, list[str]]:
    parser = argparse.ArgumentParser(prog=tool.prog, allow_abbrev=False)
    parser.add_argument(FILENAME_TOKEN, dest="filename", default=None)
    parser.add_argument(
        INCREMENT_BUILD_NUMBER_TOKEN,
        dest="increment_build_number",
        action="store_true",
    )
    parser.add_argument(
        RESET_REVISION_NUMBER_TOKEN,
        dest="reset_revision_number",
        action="store_true",
    )
    parser.add_argument(VERSION_TOKEN, dest="version", action="store_true")
    known, unknown = _split_argv(argv)
    return parser.parse_args(known), unknown


def get_mode(args: argparse.Namespace) -> IncrementMode:
    if args.increment_build_number or args.reset_revision_number:
        return IncrementMode.BUILD
    return IncrementMode.REVISION


def run(argv: Sequence[str], tool: Tool) -> int:
    if not argv:
        print(tool.usage())
        return 0

    args, unknown = parse_args(argv, tool)
    if args.version:
        print(f"{tool.prog} {__version__}")
        return 0

    if args.filename is None:
        print(tool.usage())
        return 0

    for arg in unknown:
        logger.warning(f"Ignoring unknown argument {arg}")

    try:
        config = configurator.build_config(args.filename, get_mode(args))
        logger.info(f"Increment mode: {config.mode.value}")
        report = tool.update_file(config.path, config.mode)
    except errors.VerbumpError as e:
        logger.error(f"Error: {e}")
        return 1

    for line in report.format_lines():
        print(line)
    return 0


def _main(tool: Tool, argv: Optional[Sequence[str]]) -> int:
    setup_logging()
    if argv is None:
        argv = sys.argv[1:]
    return run(argv, tool)


def main_android_manifest(argv: Optional[Sequence[str]] = None) -> int:
    return _main(ANDROID_MANIFEST, argv)


def main_assembly_info(argv: Optional[Sequence[str]] = None) -> int:
    return _main(ASSEMBLY_INFO, argv)


def main_plist(argv: Optional[Sequence[str]] = None) -> int:
    return _main(PLIST, argv)
