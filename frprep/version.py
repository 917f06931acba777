"""FrPrep version information."""

from importlib import metadata

__all__ = ["__version__"]

# Release of the FrPrep launcher this tree corresponds to; reported when
# running from a source checkout without installed metadata.
SOURCE_VERSION = "1.2rc6"


def _installed_version() -> str:
    try:
        return metadata.version("frprep")
    except metadata.PackageNotFoundError:
        return SOURCE_VERSION


__version__ = _installed_version()
