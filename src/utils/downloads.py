"""
Download Listing Utilities

Pure Python helpers for the download center and the raw /files/ listing.
These don't depend on Flask and can be tested independently.
"""

import logging
import os
import stat
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union
from urllib.parse import quote

logger = logging.getLogger(__name__)

# Curated packages shown on the download center page.
# 'file' is None for entries that are not published yet.
DOWNLOAD_CATALOG = [
    {
        'title': 'ATAK for Raspberry Pi',
        'description': 'Latest Android Team Awareness Kit client build packaged for Raspberry Pi devices.',
        'file': '/files/atak.apk',
    },
    {
        'title': 'Sideband Communications Suite',
        'description': 'Secure messaging and voice add-on to enhance field communications and coordination.',
        'file': '/files/sideband.apk',
    },
    {
        'title': 'RNS Field Tools (Coming Soon)',
        'description': 'Utility toolkit for managing RNS deployments. Subscribe for alerts when the APK is published.',
        'file': None,
    },
]

_SIZE_UNITS = ('B', 'KB', 'MB', 'GB', 'TB')


@dataclass(frozen=True)
class DownloadEntry:
    """A single file in the download directory."""
    name: str
    size: int
    modified: datetime
    url: str

    @property
    def size_display(self) -> str:
        return format_size(self.size)


def format_size(num_bytes: int) -> str:
    """Format a byte count for humans, e.g. 1536 -> '1.5 KB'.

    Args:
        num_bytes: Size in bytes

    Returns:
        Size string with one decimal place above bytes
    """
    if num_bytes < 1024:
        return f"{num_bytes} B"
    size = float(num_bytes)
    for unit in _SIZE_UNITS[1:]:
        size /= 1024
        if size < 1024 or unit == _SIZE_UNITS[-1]:
            return f"{size:.1f} {unit}"


def _is_listable(name: str) -> bool:
    return bool(name) and not name.startswith('.')


def list_directory(directory: Union[str, Path], url_prefix: str = '/files/') -> List[DownloadEntry]:
    """List regular, non-hidden files in a directory. Symlinks are skipped.

    Args:
        directory: Directory to scan (not recursive)
        url_prefix: URL prefix that the directory is served under

    Returns:
        Entries sorted case-insensitively by name; empty if the
        directory does not exist or cannot be read
    """
    if not url_prefix.endswith('/'):
        url_prefix += '/'

    entries = []
    try:
        with os.scandir(directory) as it:
            for item in it:
                if not _is_listable(item.name) or item.is_symlink():
                    continue
                try:
                    st = item.stat()
                except OSError as e:
                    logger.debug(f"Skipping {item.name}: {e}")
                    continue
                if not stat.S_ISREG(st.st_mode):
                    continue
                entries.append(DownloadEntry(
                    name=item.name,
                    size=st.st_size,
                    modified=datetime.fromtimestamp(st.st_mtime),
                    url=url_prefix + quote(item.name),
                ))
    except FileNotFoundError:
        logger.debug(f"Download directory not found: {directory}")
        return []
    except OSError as e:
        logger.warning(f"Cannot list download directory {directory}: {e}")
        return []

    entries.sort(key=lambda e: (e.name.casefold(), e.name))
    return entries


def resolve_download(directory: Union[str, Path], name: str) -> Optional[Path]:
    """Resolve a requested file name inside the download directory.

    Args:
        directory: Download directory
        name: File name from the request

    Returns:
        Path to the file, or None if the name is hidden, nested, a symlink,
        escapes the directory, or is not a regular file
    """
    if not _is_listable(name) or '/' in name or '\\' in name or '\x00' in name:
        return None

    base = Path(directory).resolve()
    requested = base / name
    if requested.is_symlink():
        return None
    candidate = requested.resolve()
    if candidate.parent != base:
        return None
    if not candidate.is_file():
        return None
    return candidate
