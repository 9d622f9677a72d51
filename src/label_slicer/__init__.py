"""Top-level package for the Label Slicer.

Provides subpackages:
- label_slicer.slicer – band slicing, label detection and deduplication
- label_slicer.printing – file/printer selection dialogs and print dispatch
- label_slicer.cli – command line entry point
"""

from importlib.metadata import PackageNotFoundError, version as pkg_version


def _get_version() -> str:
    """Installed distribution version, or "0.0.0" when running from a source tree."""
    try:
        return pkg_version("label_slicer")
    except PackageNotFoundError:
        return "0.0.0"


__version__ = _get_version()
__all__: list[str] = ["__version__"]
