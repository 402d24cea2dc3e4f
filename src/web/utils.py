"""
Web Utilities - helpers shared by the portal blueprints

Page rendering with the common layout context, and access to the
per-app status configuration.
"""

from flask import current_app, render_template_string

from __version__ import __version__
from status.aggregator import StatusAggregator
from status.checks import DEFAULT_CHECK_GROUPS
from status.probes import DEFAULT_PROBE_TIMEOUT, SystemProbeProvider


def render_page(template: str, title: str, description: str = '', **context) -> str:
    """Render a page template with the shared layout variables."""
    return render_template_string(
        template,
        title=title,
        description=description,
        version=__version__,
        **context
    )


def get_check_groups():
    """Check groups configured for this app (validated at startup)."""
    return current_app.config.get('CHECK_GROUPS', DEFAULT_CHECK_GROUPS)


def get_aggregator() -> StatusAggregator:
    """Build a fresh aggregator for the current request.

    Tests can inject a fake provider through the PROBE_PROVIDER setting.
    """
    provider = current_app.config.get('PROBE_PROVIDER')
    if provider is None:
        provider = SystemProbeProvider(
            timeout=current_app.config.get('PROBE_TIMEOUT', DEFAULT_PROBE_TIMEOUT)
        )
    return StatusAggregator(provider)
