"""
Status Check Configuration

Built-in check table for the node, plus a YAML loader for sites that want
to monitor a different set of services.

YAML format:
    groups:
      - key: mesh
        title: Mesh stack
        description: Core services and tooling
        checks:
          - label: Reticulum daemon (rnsd)
            type: service
            target: rnsd
"""

import logging
from pathlib import Path
from typing import List, Optional, Tuple, Union

import yaml

from status.models import CheckDefinition, CheckGroup, CheckKind

logger = logging.getLogger(__name__)


class CheckConfigError(ValueError):
    """Raised when a check configuration file is missing or invalid."""


def _service(label: str, target: str) -> CheckDefinition:
    return CheckDefinition(label, CheckKind.SERVICE, target)


def _command(label: str, target: str) -> CheckDefinition:
    return CheckDefinition(label, CheckKind.COMMAND, target)


MESH_CHECKS = (
    _service('Mesh supervisor (mesh)', 'mesh'),
    _service('Reticulum daemon (rnsd)', 'rnsd'),
    _service('Meshtastic daemon', 'meshtasticd'),
    _command('Reticulum CLI (rns)', 'rns'),
    _command('Meshtastic CLI', 'meshtastic'),
)

LAN_PORTAL_CHECKS = (
    _service('Web server (nginx)', 'nginx'),
    _service('PHP FastCGI (php-fpm)', 'php-fpm'),
    _service('Database server (mariadb)', 'mariadb'),
    _service('Flask bridge (flask-app)', 'flask-app'),
    _service('Firewall (nftables)', 'nftables'),
)

TOOLING_CHECKS = (
    _command('Git client', 'git'),
    _command('batctl utility', 'batctl'),
    _command('Python 3', 'python3'),
)

DEFAULT_CHECK_GROUPS = (
    CheckGroup(
        key='mesh',
        title='Mesh stack',
        description='Core services and tooling deployed via install_mesh.sh.',
        checks=MESH_CHECKS,
    ),
    CheckGroup(
        key='lan-portal',
        title='LAN portal',
        description='Services required to keep the local web portal responsive.',
        checks=LAN_PORTAL_CHECKS,
    ),
    CheckGroup(
        key='tooling',
        title='Supporting tools',
        description='Utility binaries used for maintenance and diagnostics.',
        checks=TOOLING_CHECKS,
    ),
)


def _parse_check(entry, where: str) -> CheckDefinition:
    if not isinstance(entry, dict):
        raise CheckConfigError(f"{where}: expected a mapping, got {type(entry).__name__}")

    kind_value = entry.get('type', entry.get('kind'))
    try:
        kind = CheckKind(str(kind_value).lower())
    except ValueError:
        raise CheckConfigError(f"{where}: type must be 'service' or 'command', got {kind_value!r}")

    target = entry.get('target')
    if not isinstance(target, str) or not target.strip():
        raise CheckConfigError(f"{where}: target must be a non-empty string")

    label = entry.get('label') or target
    return CheckDefinition(label=str(label), kind=kind, target=target.strip())


def _parse_group(entry, index: int) -> CheckGroup:
    where = f"group[{index}]"
    if not isinstance(entry, dict):
        raise CheckConfigError(f"{where}: expected a mapping")

    title = entry.get('title')
    if not title:
        raise CheckConfigError(f"{where}: missing title")
    key = str(entry.get('key') or title).strip().lower().replace(' ', '-')
    where = f"group '{key}'"

    raw_checks = entry.get('checks') or []
    if not isinstance(raw_checks, list):
        raise CheckConfigError(f"{where}: checks must be a list")

    checks = tuple(_parse_check(c, f"{where} check[{i}]") for i, c in enumerate(raw_checks))
    return CheckGroup(
        key=key,
        title=str(title),
        description=str(entry.get('description') or ''),
        checks=checks,
    )


def parse_check_groups(data) -> Tuple[CheckGroup, ...]:
    """Build check groups from an already-loaded YAML document."""
    if not isinstance(data, dict) or not isinstance(data.get('groups'), list):
        raise CheckConfigError("Check configuration must contain a 'groups' list")

    groups = tuple(_parse_group(g, i) for i, g in enumerate(data['groups']))

    keys = [g.key for g in groups]
    duplicates = sorted({k for k in keys if keys.count(k) > 1})
    if duplicates:
        raise CheckConfigError(f"Duplicate group keys: {', '.join(duplicates)}")
    return groups


def load_check_groups(path: Union[str, Path]) -> Tuple[CheckGroup, ...]:
    """
    Load check groups from a YAML file.

    Args:
        path: Path to the YAML file

    Returns:
        Tuple of CheckGroup in file order

    Raises:
        CheckConfigError: If the file is unreadable or invalid
    """
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except (OSError, UnicodeDecodeError) as e:
        raise CheckConfigError(f"Cannot read check configuration {path}: {e}")
    except yaml.YAMLError as e:
        raise CheckConfigError(f"Invalid YAML in {path}: {e}")

    groups = parse_check_groups(data)
    logger.info(f"Loaded {sum(len(g.checks) for g in groups)} checks from {path}")
    return groups


def get_check_groups(checks_file: Optional[str] = None) -> Tuple[CheckGroup, ...]:
    """Return configured check groups, falling back to the built-in table."""
    if checks_file:
        return load_check_groups(checks_file)
    return DEFAULT_CHECK_GROUPS


def find_group(groups, key: str) -> Optional[CheckGroup]:
    for group in groups:
        if group.key == key:
            return group
    return None
