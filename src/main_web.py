#!/usr/bin/env python3
"""
Node LAN Portal - Web UI

Local portal for a field-deployed mesh node: download center, mesh
resources, raw file listing and a live system status page.
Access via http://your-node-ip:8080/

Usage:
    python3 src/main_web.py                       # Localhost on port 8080
    python3 src/main_web.py --host 0.0.0.0        # Listen on all interfaces
    python3 src/main_web.py --check               # Print status table and exit
"""

import argparse
import logging
import socket
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent))

from flask import Flask
from rich.console import Console
from rich.table import Table

from __version__ import __version__
from status.aggregator import StatusAggregator
from status.checks import CheckConfigError, get_check_groups
from status.models import HealthState
from status.probes import DEFAULT_PROBE_TIMEOUT, SystemProbeProvider
from utils.env_config import (
    get_config,
    get_config_float,
    get_config_int,
    load_env_file,
    show_config_summary,
)
from utils.logging_config import parse_level, setup_logging
from web.blueprints import register_blueprints

logger = logging.getLogger(__name__)

console = Console()

STATE_STYLES = {
    HealthState.ONLINE: 'green',
    HealthState.OFFLINE: 'red',
    HealthState.UNKNOWN: 'yellow',
}


def create_app(files_dir=None, check_groups=None, probe_timeout=DEFAULT_PROBE_TIMEOUT,
               probe_provider=None):
    """
    Build the portal Flask app.

    Args:
        files_dir: Directory served at /files/
        check_groups: Status check groups (defaults to the built-in table)
        probe_timeout: Seconds allowed per external probe
        probe_provider: Optional ProbeProvider, used instead of the host

    Returns:
        Configured Flask app
    """
    app = Flask(__name__)
    app.config.update(
        FILES_DIR=str(files_dir or get_config('NODEPORTAL_FILES_DIR')),
        CHECK_GROUPS=(check_groups if check_groups is not None
                      else get_check_groups(get_config('NODEPORTAL_CHECKS_FILE') or None)),
        PROBE_TIMEOUT=probe_timeout,
        PROBE_PROVIDER=probe_provider,
    )

    register_blueprints(app)

    @app.after_request
    def add_security_headers(response):
        """Add security headers to all responses"""
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'SAMEORIGIN'
        response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'
        response.headers['Content-Security-Policy'] = (
            "default-src 'self'; "
            "script-src 'self' 'unsafe-inline'; "
            "style-src 'self' 'unsafe-inline'; "
            "img-src 'self' data:"
        )
        return response

    @app.route('/favicon.ico')
    def favicon():
        """Return empty favicon to avoid 404"""
        return '', 204

    return app


def print_status_table(report) -> None:
    """Print a status report as one rich table per group."""
    for group_result in report.groups:
        table = Table(title=group_result.group.title, show_header=True, header_style="bold cyan")
        table.add_column("Check", style="cyan")
        table.add_column("Target")
        table.add_column("State")
        table.add_column("Message")
        for result in group_result.results:
            style = STATE_STYLES[result.state]
            table.add_row(
                result.label,
                result.check.target,
                f"[{style}]{result.state.value}[/{style}]",
                result.message,
            )
        console.print(table)

    counts = report.counts()
    console.print(
        f"[green]{counts['online']} online[/green], "
        f"[red]{counts['offline']} offline[/red], "
        f"[yellow]{counts['unknown']} unknown[/yellow]"
    )


def run_check(check_groups, probe_timeout: float) -> int:
    """Probe every check once and print the result; returns an exit code."""
    aggregator = StatusAggregator(SystemProbeProvider(timeout=probe_timeout))
    report = aggregator.build_report(check_groups)
    print_status_table(report)
    return 1 if report.counts()['offline'] else 0


def check_port_available(host: str, port: int) -> bool:
    """Check if a port is available for binding."""
    test_socket = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    test_socket.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    try:
        test_socket.bind((host, port))
        return True
    except OSError:
        return False
    finally:
        test_socket.close()


def build_parser() -> argparse.ArgumentParser:
    load_env_file()
    default_host = get_config('NODEPORTAL_WEB_HOST')
    default_port = get_config_int('NODEPORTAL_WEB_PORT', 8080)

    parser = argparse.ArgumentParser(
        description='Node LAN Portal - Web UI',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  python3 src/main_web.py                              # Localhost only
  python3 src/main_web.py --host 0.0.0.0 --port 80     # Serve the LAN
  python3 src/main_web.py --check                      # Console status report

Environment variables:
  NODEPORTAL_WEB_HOST, NODEPORTAL_WEB_PORT, NODEPORTAL_FILES_DIR,
  NODEPORTAL_CHECKS_FILE, NODEPORTAL_PROBE_TIMEOUT, LOG_LEVEL, NODEPORTAL_LOG_FILE
'''
    )
    parser.add_argument('--host', default=default_host,
                        help=f'Host to bind to (default: {default_host})')
    parser.add_argument('--port', '-p', type=int, default=default_port,
                        help=f'Port to listen on (default: {default_port})')
    parser.add_argument('--files-dir', default=get_config('NODEPORTAL_FILES_DIR'),
                        help='Directory served at /files/')
    parser.add_argument('--checks-file', default=get_config('NODEPORTAL_CHECKS_FILE') or None,
                        help='YAML file with status check groups')
    parser.add_argument('--probe-timeout', type=float,
                        default=get_config_float('NODEPORTAL_PROBE_TIMEOUT', DEFAULT_PROBE_TIMEOUT),
                        help='Seconds allowed per service probe')
    parser.add_argument('--debug', action='store_true',
                        help='Enable debug mode')
    parser.add_argument('--check', action='store_true',
                        help='Print the system status report and exit')
    parser.add_argument('--show-config', action='store_true',
                        help='Show configuration summary and exit')
    parser.add_argument('--version', action='version',
                        version=f'%(prog)s {__version__}')
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.DEBUG if args.debug else parse_level(get_config('LOG_LEVEL'))
    setup_logging(level=level, log_file=get_config('NODEPORTAL_LOG_FILE') or None)

    if args.show_config:
        show_config_summary()
        return 0

    if args.probe_timeout <= 0:
        parser.error('--probe-timeout must be positive')

    try:
        check_groups = get_check_groups(args.checks_file)
    except CheckConfigError as e:
        console.print(f"[red]Error: {e}[/red]")
        return 2

    if args.check:
        return run_check(check_groups, args.probe_timeout)

    if not check_port_available(args.host, args.port):
        console.print(f"[red]Error: port {args.port} on {args.host} is already in use[/red]")
        console.print("Use --port to pick another port")
        return 1

    if not Path(args.files_dir).is_dir():
        logger.warning(f"Files directory {args.files_dir} does not exist; /files/ will be empty")

    app = create_app(
        files_dir=args.files_dir,
        check_groups=check_groups,
        probe_timeout=args.probe_timeout,
    )

    logger.info(f"Node LAN portal v{__version__} on http://{args.host}:{args.port}/")
    app.run(
        host=args.host,
        port=args.port,
        debug=args.debug,
        threaded=True,
        use_reloader=False
    )
    return 0


if __name__ == '__main__':
    sys.exit(main())
