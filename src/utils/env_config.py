"""Environment configuration loader and validator"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import dotenv_values, load_dotenv
from rich.console import Console
from rich.table import Table

console = Console()

# Default configuration values
DEFAULTS = {
    # Web server
    'NODEPORTAL_WEB_HOST': '127.0.0.1',
    'NODEPORTAL_WEB_PORT': '8080',

    # Raw download directory served at /files/
    'NODEPORTAL_FILES_DIR': '/var/www/files',

    # Status checks
    'NODEPORTAL_CHECKS_FILE': '',
    'NODEPORTAL_PROBE_TIMEOUT': '2.0',

    # Logging
    'LOG_LEVEL': 'INFO',
    'NODEPORTAL_LOG_FILE': '',
}

VALID_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


def find_env_file() -> Optional[Path]:
    """Find the .env file in standard locations"""
    search_paths = [
        Path.cwd() / '.env',
        Path('/etc/nodeportal/nodeportal.env'),
        Path(__file__).parent.parent.parent / '.env',
    ]

    for path in search_paths:
        if path.exists():
            return path

    return None


def load_env_file(env_path: Optional[Path] = None) -> Dict[str, str]:
    """Load variables from a .env file without overriding the environment

    Args:
        env_path: Optional path to .env file. If None, auto-discovers.

    Returns:
        Dictionary of variables defined in the file
    """
    if env_path is None:
        env_path = find_env_file()

    if env_path is None or not Path(env_path).exists():
        return {}

    try:
        loaded = {k: v for k, v in dotenv_values(env_path).items() if v is not None}
        load_dotenv(env_path, override=False)
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[yellow]Warning: Could not load .env file: {e}[/yellow]")
        return {}

    return loaded


def get_config(key: str, default: Optional[str] = None) -> str:
    """Get configuration value from environment or defaults

    Priority:
    1. Environment variable
    2. Provided default
    3. Built-in default
    """
    if key in os.environ:
        return os.environ[key]
    if default is not None:
        return default
    return DEFAULTS.get(key, '')


def get_config_bool(key: str, default: bool = False) -> bool:
    """Get boolean configuration value"""
    value = get_config(key, str(default).lower())
    return value.lower() in ('true', 'yes', '1', 'on')


def get_config_int(key: str, default: int = 0) -> int:
    """Get integer configuration value"""
    try:
        return int(get_config(key, str(default)))
    except ValueError:
        return default


def get_config_float(key: str, default: float = 0.0) -> float:
    """Get float configuration value"""
    try:
        return float(get_config(key, str(default)))
    except ValueError:
        return default


def validate_config() -> Dict[str, Any]:
    """Validate current configuration and return status

    Returns:
        Dictionary with validation results
    """
    results = {
        'valid': True,
        'warnings': [],
        'errors': [],
        'config': {}
    }

    port_value = get_config('NODEPORTAL_WEB_PORT')
    try:
        port = int(port_value)
        if not 0 < port < 65536:
            raise ValueError
    except ValueError:
        results['errors'].append(f"Invalid NODEPORTAL_WEB_PORT: {port_value}")
        results['valid'] = False
        port = None
    results['config']['port'] = port

    timeout_value = get_config('NODEPORTAL_PROBE_TIMEOUT')
    try:
        timeout = float(timeout_value)
        if timeout <= 0:
            raise ValueError
    except ValueError:
        results['errors'].append(f"Invalid NODEPORTAL_PROBE_TIMEOUT: {timeout_value}")
        results['valid'] = False
        timeout = None
    results['config']['probe_timeout'] = timeout

    log_level = get_config('LOG_LEVEL').upper()
    if log_level not in VALID_LOG_LEVELS:
        results['errors'].append(f"Invalid LOG_LEVEL: {log_level}")
        results['valid'] = False
    results['config']['log_level'] = log_level

    files_dir = Path(get_config('NODEPORTAL_FILES_DIR'))
    if not files_dir.is_dir():
        results['warnings'].append(f"Files directory does not exist: {files_dir}")
    results['config']['files_dir'] = str(files_dir)

    checks_file = get_config('NODEPORTAL_CHECKS_FILE')
    if checks_file and not Path(checks_file).exists():
        results['errors'].append(f"Checks file not found: {checks_file}")
        results['valid'] = False
    results['config']['checks_file'] = checks_file or None

    return results


def show_config_summary():
    """Display current configuration summary"""
    table = Table(title="Current Configuration", show_header=True, header_style="bold cyan")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    table.add_column("Source", style="yellow")

    env_file = find_env_file()
    file_values = load_env_file(env_file) if env_file else {}

    for key in sorted(DEFAULTS.keys()):
        env_value = os.environ.get(key)
        if env_value is not None:
            value = env_value
            source = ".env" if key in file_values else "env var"
        else:
            value = DEFAULTS[key]
            source = "default"
        table.add_row(key, value or "(unset)", source)

    console.print(table)

    results = validate_config()
    for error in results['errors']:
        console.print(f"[red]Error: {error}[/red]")
    for warning in results['warnings']:
        console.print(f"[yellow]Warning: {warning}[/yellow]")
