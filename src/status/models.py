"""
Status Data Model

Check definitions come from configuration; results are produced fresh on
every status render and never cached.

Usage:
    from status.models import CheckDefinition, CheckKind

    check = CheckDefinition('Git client', CheckKind.COMMAND, 'git')
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Tuple


class CheckKind(Enum):
    """How a check target is probed."""
    SERVICE = "service"
    COMMAND = "command"


class HealthState(Enum):
    """Tri-state health of a single check."""
    ONLINE = "online"
    OFFLINE = "offline"
    UNKNOWN = "unknown"

    @property
    def css_class(self) -> str:
        return f"status-indicator--{self.value}"


# Message table keyed by (kind, state)
MESSAGES = {
    (CheckKind.SERVICE, HealthState.ONLINE): "Running",
    (CheckKind.SERVICE, HealthState.OFFLINE): "Not running",
    (CheckKind.SERVICE, HealthState.UNKNOWN): "Status unavailable",
    (CheckKind.COMMAND, HealthState.ONLINE): "Available",
    (CheckKind.COMMAND, HealthState.OFFLINE): "Not available",
}


def message_for(kind: CheckKind, state: HealthState) -> str:
    """Return the display message for a kind/state pair."""
    try:
        return MESSAGES[(kind, state)]
    except KeyError:
        raise ValueError(f"{kind.value} checks cannot be {state.value}") from None


@dataclass(frozen=True)
class CheckDefinition:
    """A single named thing to probe."""
    label: str
    kind: CheckKind
    target: str

    def __post_init__(self):
        if not isinstance(self.kind, CheckKind):
            raise ValueError(f"Invalid check kind: {self.kind!r}")
        if not self.target or not self.target.strip():
            raise ValueError(f"Check '{self.label}' has an empty target")


@dataclass(frozen=True)
class CheckResult:
    """Outcome of probing one CheckDefinition."""
    check: CheckDefinition
    state: HealthState
    message: str

    @classmethod
    def from_state(cls, check: CheckDefinition, state: HealthState) -> 'CheckResult':
        return cls(check=check, state=state, message=message_for(check.kind, state))

    @property
    def label(self) -> str:
        return self.check.label

    def as_tuple(self) -> Tuple[str, HealthState, str]:
        return self.check.label, self.state, self.message

    def to_dict(self) -> Dict[str, str]:
        return {
            'label': self.check.label,
            'kind': self.check.kind.value,
            'target': self.check.target,
            'state': self.state.value,
            'message': self.message,
        }


def _count_states(results) -> Dict[str, int]:
    counts = {state.value: 0 for state in HealthState}
    for result in results:
        counts[result.state.value] += 1
    return counts


@dataclass(frozen=True)
class CheckGroup:
    """Named, ordered section of checks (e.g. "Mesh stack")."""
    key: str
    title: str
    checks: Tuple[CheckDefinition, ...]
    description: str = ""


@dataclass
class GroupResult:
    """Results for one group, in the group's original check order."""
    group: CheckGroup
    results: List[CheckResult]

    def counts(self) -> Dict[str, int]:
        return _count_states(self.results)

    def to_dict(self) -> dict:
        return {
            'key': self.group.key,
            'title': self.group.title,
            'description': self.group.description,
            'counts': self.counts(),
            'checks': [r.to_dict() for r in self.results],
        }


@dataclass
class StatusReport:
    """Every group result from a single status render."""
    groups: List[GroupResult]
    generated_at: datetime = field(default_factory=datetime.now)

    @property
    def results(self) -> List[CheckResult]:
        return [r for g in self.groups for r in g.results]

    def counts(self) -> Dict[str, int]:
        return _count_states(self.results)

    def to_dict(self) -> dict:
        return {
            'generated_at': self.generated_at.isoformat(),
            'counts': self.counts(),
            'groups': [g.to_dict() for g in self.groups],
        }
