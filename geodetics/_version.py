"""
Exposes the version of geodetics
"""
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Optional

# Source checkouts carry the version at the repository root
_VERSION_FILE = Path(__file__).resolve().parents[1] / 'VERSION'


def _source_version() -> Optional[str]:
    """The version recorded in the VERSION file, without any leading 'v'"""
    try:
        text = _VERSION_FILE.read_text(encoding='utf-8')
    except OSError:
        return None

    for line in text.splitlines():
        line = line.strip()
        if line and not line.startswith('#'):
            return line.lstrip('v')

    return None


try:
    __version__ = version('geodetics')
except PackageNotFoundError:
    __version__ = _source_version()

__all__ = ['__version__']
