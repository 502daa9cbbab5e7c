"""Version lookup for source checkouts, installs and frozen builds."""

import json
from importlib import metadata
from os import PathLike
from pathlib import Path
import sys

PACKAGE_NAME = "spinwheel"
VERSION_FILENAME = "version.json"
FALLBACK_VERSION = "0.0.0"


def get_embedded_path(name: str | PathLike[str]) -> Path:
    """Return the path to an embedded resource shipped with the binary."""

    base = Path(getattr(sys, "_MEIPASS", Path(__file__).resolve().parent))
    return base / Path(name)


def get_version() -> str:
    """
    Get version for application.

    Frozen executables read the ``version.json`` written at build time. A
    git checkout asks setuptools_scm; anything else uses the installed
    distribution metadata.

    :return: Version number.
    """
    if getattr(sys, "frozen", False):  # *.exe
        with open(get_embedded_path(VERSION_FILENAME), "r") as f:
            return str(json.load(f)["version"])

    root = Path(__file__).resolve().parents[2]
    if (root / ".git").exists():
        import setuptools_scm  # type: ignore[import-untyped]

        return setuptools_scm.get_version(
            root=str(root), fallback_version=FALLBACK_VERSION
        )
    try:
        return metadata.version(PACKAGE_NAME)
    except metadata.PackageNotFoundError:
        return FALLBACK_VERSION


__all__ = ["get_version", "get_embedded_path", "PACKAGE_NAME", "VERSION_FILENAME"]
