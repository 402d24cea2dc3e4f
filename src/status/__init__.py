"""
System status checks for the node portal.

Probes mesh services, portal dependencies, and supporting tools and reports
each as online, offline, or unknown.
"""

from .models import (
    CheckDefinition,
    CheckGroup,
    CheckKind,
    CheckResult,
    GroupResult,
    HealthState,
    StatusReport,
)
from .probes import MechanismAnswer, ProbeProvider, SystemProbeProvider
from .aggregator import StatusAggregator, resolve_service_state

__all__ = [
    'CheckDefinition',
    'CheckGroup',
    'CheckKind',
    'CheckResult',
    'GroupResult',
    'HealthState',
    'StatusReport',
    'MechanismAnswer',
    'ProbeProvider',
    'SystemProbeProvider',
    'StatusAggregator',
    'resolve_service_state',
]
