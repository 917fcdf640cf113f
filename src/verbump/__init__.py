from . import assemblyinfo, cli, configurator, errors, manifest, plist, version
from ._version import __version__, __version_info__
from .errors import *  # noqa: F403
from .report import *  # noqa: F403
from .version import *  # noqa: F403

__all__ = (
    [
        "assemblyinfo",
        "cli",
        "configurator",
        "manifest",
        "plist",
        "__version__",
        "__version_info__",
    ]
    + errors.__all__  # type: ignore # noqa: F405
    + report.__all__  # type: ignore # noqa: F405
    + version.__all__  # type: ignore # noqa: F405
)
