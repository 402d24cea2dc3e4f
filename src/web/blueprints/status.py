"""
Status Blueprint - JSON status API

Same data as the status page, for scripts and dashboards.
"""

from flask import Blueprint, jsonify

from status.checks import find_group
from web.utils import get_aggregator, get_check_groups

status_bp = Blueprint('status', __name__)


@status_bp.route('/status')
def api_status():
    """Get status of every configured check group."""
    report = get_aggregator().build_report(get_check_groups())
    return jsonify(report.to_dict())


@status_bp.route('/status/<group_key>')
def api_group_status(group_key):
    """Get status of a single check group.

    Args:
        group_key: Group key, e.g. 'mesh'

    Returns:
        JSON group result, or 404 if the group is not configured
    """
    group = find_group(get_check_groups(), group_key)
    if group is None:
        return jsonify({'error': f'Unknown status group: {group_key}'}), 404

    results = get_aggregator().classify_groups([group])
    return jsonify(results[0].to_dict())
