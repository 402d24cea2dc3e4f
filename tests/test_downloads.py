"""
Tests for download listing utilities.

Run: python3 -m pytest tests/test_downloads.py -v
"""

import os
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from utils.downloads import (
    DOWNLOAD_CATALOG,
    format_size,
    list_directory,
    resolve_download,
)


@pytest.fixture
def files_dir(tmp_path):
    """Download directory with a mix of files, hidden entries and subdirs."""
    (tmp_path / 'sideband.apk').write_bytes(b'x' * 2048)
    (tmp_path / 'ATAK.apk').write_bytes(b'x' * 10)
    (tmp_path / 'readme.txt').write_text('hello')
    (tmp_path / '.htaccess').write_text('deny')
    (tmp_path / 'images').mkdir()
    (tmp_path / 'images' / 'logo.svg').write_text('<svg/>')
    return tmp_path


class TestFormatSize:
    """Tests for human-readable sizes."""

    def test_bytes(self):
        assert format_size(0) == "0 B"
        assert format_size(1023) == "1023 B"

    def test_kilobytes(self):
        assert format_size(1024) == "1.0 KB"
        assert format_size(1536) == "1.5 KB"

    def test_megabytes(self):
        assert format_size(1024 * 1024) == "1.0 MB"
        assert format_size(5 * 1024 * 1024 + 512 * 1024) == "5.5 MB"

    def test_gigabytes(self):
        assert format_size(3 * 1024 ** 3) == "3.0 GB"


class TestListDirectory:
    """Tests for the /files/ directory scan."""

    def test_sorted_case_insensitively(self, files_dir):
        names = [e.name for e in list_directory(files_dir)]
        assert names == ['ATAK.apk', 'readme.txt', 'sideband.apk']

    def test_excludes_hidden_and_directories(self, files_dir):
        names = [e.name for e in list_directory(files_dir)]
        assert '.htaccess' not in names
        assert 'images' not in names

    def test_entry_fields(self, files_dir):
        entry = [e for e in list_directory(files_dir) if e.name == 'sideband.apk'][0]
        assert entry.size == 2048
        assert entry.size_display == "2.0 KB"
        assert entry.url == '/files/sideband.apk'
        assert entry.modified.year >= 2000

    def test_url_quoting(self, tmp_path):
        (tmp_path / 'field guide #2.pdf').write_text('pdf')
        entry = list_directory(tmp_path, url_prefix='/dl')[0]
        assert entry.url == '/dl/field%20guide%20%232.pdf'

    def test_missing_directory(self, tmp_path):
        assert list_directory(tmp_path / 'nope') == []

    def test_empty_directory(self, tmp_path):
        assert list_directory(tmp_path) == []

    @pytest.mark.skipif(not hasattr(os, 'symlink'), reason="symlinks unsupported")
    def test_symlink_to_directory_excluded(self, files_dir):
        (files_dir / 'linked').symlink_to(files_dir / 'images')
        names = [e.name for e in list_directory(files_dir)]
        assert 'linked' not in names

    @pytest.mark.skipif(not hasattr(os, 'symlink'), reason="symlinks unsupported")
    def test_symlinked_file_excluded(self, tmp_path):
        files = tmp_path / 'files'
        outside = tmp_path / 'outside'
        files.mkdir()
        outside.mkdir()
        (outside / 'real.apk').write_bytes(b'apk')
        (files / 'linked.apk').symlink_to(outside / 'real.apk')
        (files / 'plain.apk').write_bytes(b'apk')

        names = [e.name for e in list_directory(files)]

        assert names == ['plain.apk']
        # Listing and download agree on every entry
        assert all(resolve_download(files, n) is not None for n in names)
        assert resolve_download(files, 'linked.apk') is None


class TestResolveDownload:
    """Tests for safe file resolution."""

    def test_regular_file(self, files_dir):
        assert resolve_download(files_dir, 'readme.txt') == (files_dir / 'readme.txt').resolve()

    def test_missing_file(self, files_dir):
        assert resolve_download(files_dir, 'missing.apk') is None

    def test_hidden_file(self, files_dir):
        assert resolve_download(files_dir, '.htaccess') is None

    def test_directory(self, files_dir):
        assert resolve_download(files_dir, 'images') is None

    def test_nested_path(self, files_dir):
        assert resolve_download(files_dir, 'images/logo.svg') is None

    def test_traversal(self, files_dir):
        assert resolve_download(files_dir, '../etc/passwd') is None
        assert resolve_download(files_dir, '..') is None

    def test_empty_name(self, files_dir):
        assert resolve_download(files_dir, '') is None

    @pytest.mark.skipif(not hasattr(os, 'symlink'), reason="symlinks unsupported")
    def test_symlink_inside_directory(self, files_dir):
        (files_dir / 'alias.txt').symlink_to(files_dir / 'readme.txt')
        assert resolve_download(files_dir, 'alias.txt') is None


class TestCatalog:
    """Tests for the curated download catalog."""

    def test_entries_have_required_keys(self):
        for item in DOWNLOAD_CATALOG:
            assert {'title', 'description', 'file'} <= set(item)

    def test_coming_soon_entry(self):
        pending = [item for item in DOWNLOAD_CATALOG if item['file'] is None]
        assert len(pending) == 1
        assert 'Coming Soon' in pending[0]['title']
