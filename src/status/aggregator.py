"""
Status Aggregator

Classifies each configured check into Online / Offline / Unknown and keeps
results in the caller's grouping and order. One probe attempt per check per
render; nothing is cached or retried.

Usage:
    from status.aggregator import StatusAggregator
    from status.checks import DEFAULT_CHECK_GROUPS

    report = StatusAggregator().build_report(DEFAULT_CHECK_GROUPS)
    for group in report.groups:
        for result in group.results:
            print(result.as_tuple())
"""

import logging
from typing import Iterable, List, Optional

from status.models import (
    CheckDefinition,
    CheckGroup,
    CheckKind,
    CheckResult,
    GroupResult,
    HealthState,
    StatusReport,
)
from status.probes import MechanismAnswer, ProbeProvider, SystemProbeProvider

logger = logging.getLogger(__name__)


def resolve_service_state(primary: MechanismAnswer,
                          legacy: Optional[MechanismAnswer]) -> HealthState:
    """
    Combine the service manager and legacy answers into a health state.

    A mechanism that is absent or failed could not answer; only when neither
    mechanism answered is the state Unknown.

    Args:
        primary: Answer from the service manager
        legacy: Answer from the legacy mechanism (None if not consulted)

    Returns:
        HealthState for the service
    """
    if primary is MechanismAnswer.ACTIVE:
        return HealthState.ONLINE

    if legacy is MechanismAnswer.ACTIVE:
        return HealthState.ONLINE
    if legacy is MechanismAnswer.INACTIVE:
        return HealthState.OFFLINE

    if primary is MechanismAnswer.INACTIVE:
        return HealthState.OFFLINE
    return HealthState.UNKNOWN


# State used when the provider itself blows up mid-check
_DEGRADED_STATE = {
    CheckKind.SERVICE: HealthState.UNKNOWN,
    CheckKind.COMMAND: HealthState.OFFLINE,
}


class StatusAggregator:
    """Probe checks and produce classified results."""

    def __init__(self, provider: Optional[ProbeProvider] = None):
        self.provider = provider or SystemProbeProvider()

    def service_state(self, name: str) -> HealthState:
        primary = self.provider.service_manager_status(name)
        if primary is MechanismAnswer.ACTIVE:
            return HealthState.ONLINE
        legacy = self.provider.legacy_service_status(name)
        return resolve_service_state(primary, legacy)

    def command_state(self, name: str) -> HealthState:
        if self.provider.command_exists(name):
            return HealthState.ONLINE
        return HealthState.OFFLINE

    def classify(self, check: CheckDefinition) -> CheckResult:
        """Classify a single check. Never raises for probe failures."""
        try:
            if check.kind is CheckKind.SERVICE:
                state = self.service_state(check.target)
            else:
                state = self.command_state(check.target)
        except Exception as e:
            state = _DEGRADED_STATE[check.kind]
            logger.warning(f"Probe for {check.label} ({check.target}) failed: {e}")

        logger.debug(f"{check.kind.value} {check.target}: {state.value}")
        return CheckResult.from_state(check, state)

    def classify_all(self, checks: Iterable[CheckDefinition]) -> List[CheckResult]:
        return [self.classify(check) for check in checks]

    def classify_groups(self, groups: Iterable[CheckGroup]) -> List[GroupResult]:
        return [GroupResult(group=g, results=self.classify_all(g.checks)) for g in groups]

    def build_report(self, groups: Iterable[CheckGroup]) -> StatusReport:
        """Classify every group and wrap the results with a timestamp."""
        return StatusReport(groups=self.classify_groups(groups))
