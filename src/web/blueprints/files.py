"""
Files Blueprint - raw download directory

Serves a generated listing of the download directory and the files in it.
The same helpers back the mesh resource libraries under /mesh/.
"""

from pathlib import Path

from flask import Blueprint, abort, current_app, send_file

from utils.downloads import list_directory, resolve_download
from web.templates import FILES_TEMPLATE
from web.utils import render_page

files_bp = Blueprint('files', __name__)

URL_PREFIX = '/files/'


def render_listing(directory, url_prefix: str, description: str) -> str:
    """Render the index page for one served directory."""
    return render_page(
        FILES_TEMPLATE,
        title=f'Index of {url_prefix}',
        description=description,
        entries=list_directory(directory, url_prefix=url_prefix),
        url_prefix=url_prefix,
    )


def send_download(directory, name: str):
    """Send a file from a served directory as an attachment, or 404."""
    path = resolve_download(directory, name)
    if path is None:
        abort(404)
    return send_file(path, as_attachment=True, download_name=path.name)


def files_root() -> Path:
    return Path(current_app.config['FILES_DIR'])


@files_bp.route('/')
def listing():
    return render_listing(files_root(), URL_PREFIX,
                          'Raw listing of files served by this node.')


@files_bp.route('/<path:name>')
def download(name):
    return send_download(files_root(), name)
