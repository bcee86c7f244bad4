from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from .proxy import Liquefied, liquefy
from .transforms import formatted, pipeline, query

try:
    __version__ = version("liquefied")
except PackageNotFoundError:  # pragma: no cover - running from a source tree
    __version__ = "0.0.0"

__all__ = [
    "Liquefied",
    "liquefy",
    "formatted",
    "pipeline",
    "query",
    "__version__",
]
