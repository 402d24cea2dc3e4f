"""
Host Probe Provider

Read-only access to the host facilities the status page relies on:
executable lookup on PATH, the systemd service manager, and the legacy
``service`` status command.

Security: targets are always passed as discrete argv entries and never
through a shell, so check names from configuration cannot inject commands.

Usage:
    from status.probes import SystemProbeProvider, MechanismAnswer

    provider = SystemProbeProvider(timeout=2.0)
    if provider.command_exists('batctl'):
        ...
    if provider.service_manager_status('rnsd') is MechanismAnswer.ACTIVE:
        ...
"""

import logging
import shutil
import subprocess
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_PROBE_TIMEOUT = 2.0

SERVICE_MANAGER_BIN = 'systemctl'
LEGACY_SERVICE_BIN = 'service'

# Substrings in legacy status output that mean the service is up
LEGACY_RUNNING_MARKERS = ('running', 'started')


class MechanismAnswer(Enum):
    """What a single service-query mechanism reported."""
    ABSENT = "absent"        # mechanism not installed on this host
    FAILED = "failed"        # mechanism present but could not be queried
    ACTIVE = "active"
    INACTIVE = "inactive"


class ProbeProvider:
    """Capability interface for host probing.

    Subclass this to fake host state in tests.
    """

    def command_exists(self, name: str) -> bool:
        raise NotImplementedError

    def service_manager_status(self, name: str) -> MechanismAnswer:
        raise NotImplementedError

    def legacy_service_status(self, name: str) -> MechanismAnswer:
        raise NotImplementedError


class SystemProbeProvider(ProbeProvider):
    """Probe provider backed by the real host."""

    def __init__(self, timeout: float = DEFAULT_PROBE_TIMEOUT,
                 search_path: Optional[str] = None):
        """
        Args:
            timeout: Seconds allowed for each external process call
            search_path: PATH override for executable lookup (None uses $PATH)
        """
        self.timeout = timeout
        self.search_path = search_path

    def command_exists(self, name: str) -> bool:
        """Check whether an executable is resolvable on the search path."""
        if not name:
            return False
        try:
            return shutil.which(name, path=self.search_path) is not None
        except (OSError, ValueError) as e:
            logger.debug(f"Executable lookup failed for {name!r}: {e}")
            return False

    def _run(self, argv):
        """Run a query command; returns CompletedProcess or None on failure."""
        try:
            return subprocess.run(
                argv,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                stdin=subprocess.DEVNULL,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            logger.warning(f"{argv[0]} timed out after {self.timeout}s")
        except (OSError, ValueError) as e:
            logger.warning(f"Could not run {argv[0]}: {e}")
        return None

    def service_manager_status(self, name: str) -> MechanismAnswer:
        """Ask systemd whether the unit is active."""
        if not self.command_exists(SERVICE_MANAGER_BIN):
            return MechanismAnswer.ABSENT

        result = self._run([SERVICE_MANAGER_BIN, 'is-active', name])
        if result is None:
            return MechanismAnswer.FAILED

        logger.debug(f"systemctl is-active {name}: exit {result.returncode}")
        if result.returncode == 0:
            return MechanismAnswer.ACTIVE
        return MechanismAnswer.INACTIVE

    def legacy_service_status(self, name: str) -> MechanismAnswer:
        """Ask the init-style ``service`` command for status."""
        if not self.command_exists(LEGACY_SERVICE_BIN):
            return MechanismAnswer.ABSENT

        result = self._run([LEGACY_SERVICE_BIN, name, 'status'])
        if result is None:
            return MechanismAnswer.FAILED

        logger.debug(f"service {name} status: exit {result.returncode}")
        if result.returncode == 0:
            return MechanismAnswer.ACTIVE

        output = (result.stdout or '').lower()
        if any(marker in output for marker in LEGACY_RUNNING_MARKERS):
            return MechanismAnswer.ACTIVE
        return MechanismAnswer.INACTIVE
