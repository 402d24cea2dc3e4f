"""
Pages Blueprint - server-rendered portal pages

Home, download center, mesh resources and the system status page.
"""

from flask import Blueprint, abort

from utils.downloads import DOWNLOAD_CATALOG
from web.blueprints.files import files_root, render_listing, send_download
from web.templates import DOWNLOADS_TEMPLATE, INDEX_TEMPLATE, MESH_TEMPLATE, STATUS_TEMPLATE
from web.utils import get_aggregator, get_check_groups, render_page

pages_bp = Blueprint('pages', __name__)

# Mesh resource libraries, served from <files dir>/mesh/<section>/
MESH_LIBRARIES = {
    'docs': 'Mesh documentation',
    'field-cards': 'Field reference cards',
    'tools': 'Mesh tooling suite',
}

MESH_SECTIONS = [
    {
        'title': 'Documentation',
        'summary': 'Field manuals, quick start cards, and network design references to help '
                   'your team stage and maintain resilient coverage.',
        'links': [
            {'label': MESH_LIBRARIES['docs'], 'href': '/mesh/docs/'},
            {'label': MESH_LIBRARIES['field-cards'], 'href': '/mesh/field-cards/'},
        ],
    },
    {
        'title': 'Operational tooling',
        'summary': 'Live utilities for monitoring nodes, planning routes, and coordinating with '
                   'partner teams across the mesh.',
        'links': [
            {'label': MESH_LIBRARIES['tools'], 'href': '/mesh/tools/'},
            {'label': 'Network status board', 'href': '/status'},
        ],
    },
]


@pages_bp.route('/')
def index():
    return render_page(
        INDEX_TEMPLATE,
        title='Node LAN portal',
        description='Access node portal, mesh info and download server.',
    )


@pages_bp.route('/downloads')
def downloads():
    return render_page(
        DOWNLOADS_TEMPLATE,
        title='Download Center',
        description='Browse and download files available from this node.',
        catalog=DOWNLOAD_CATALOG,
    )


@pages_bp.route('/mesh')
def mesh():
    return render_page(
        MESH_TEMPLATE,
        title='Mesh Network Resources',
        description='Mesh network documentation and tools available from this node.',
        sections=MESH_SECTIONS,
    )


@pages_bp.route('/status')
def system_status():
    """Render the grouped system status page.

    Probes run synchronously on every request; individual probe failures
    only affect their own row.
    """
    report = get_aggregator().build_report(get_check_groups())
    return render_page(
        STATUS_TEMPLATE,
        title='System status - Node LAN portal',
        description='Check the health of mesh tooling and LAN portal services.',
        report=report,
        counts=report.counts(),
    )


def _mesh_library_dir(section: str):
    if section not in MESH_LIBRARIES:
        abort(404)
    return files_root() / 'mesh' / section


@pages_bp.route('/mesh/<section>/')
def mesh_library(section):
    directory = _mesh_library_dir(section)
    return render_listing(directory, f'/mesh/{section}/', MESH_LIBRARIES[section])


@pages_bp.route('/mesh/<section>/<path:name>')
def mesh_library_file(section, name):
    return send_download(_mesh_library_dir(section), name)
