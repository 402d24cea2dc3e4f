"""
Tests for the status aggregator and its service decision table.

Run: python3 -m pytest tests/test_status_aggregator.py -v
"""

import sys
from pathlib import Path

import pytest
from unittest.mock import patch

sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from status.aggregator import StatusAggregator, resolve_service_state
from status.checks import DEFAULT_CHECK_GROUPS
from status.models import CheckDefinition, CheckGroup, CheckKind, HealthState
from status.probes import MechanismAnswer, ProbeProvider

ABSENT = MechanismAnswer.ABSENT
FAILED = MechanismAnswer.FAILED
ACTIVE = MechanismAnswer.ACTIVE
INACTIVE = MechanismAnswer.INACTIVE


class FakeProvider(ProbeProvider):
    """In-memory host: records every probe call."""

    def __init__(self, commands=(), primary=None, legacy=None,
                 default_primary=ABSENT, default_legacy=ABSENT):
        self.commands = set(commands)
        self.primary = primary or {}
        self.legacy = legacy or {}
        self.default_primary = default_primary
        self.default_legacy = default_legacy
        self.calls = []

    def command_exists(self, name):
        self.calls.append(('command', name))
        return name in self.commands

    def service_manager_status(self, name):
        self.calls.append(('primary', name))
        return self.primary.get(name, self.default_primary)

    def legacy_service_status(self, name):
        self.calls.append(('legacy', name))
        return self.legacy.get(name, self.default_legacy)


class ExplodingProvider(ProbeProvider):
    def command_exists(self, name):
        raise RuntimeError("spawn facility broken")

    def service_manager_status(self, name):
        raise RuntimeError("spawn facility broken")

    def legacy_service_status(self, name):
        raise RuntimeError("spawn facility broken")


def service(target, label=None):
    return CheckDefinition(label or target, CheckKind.SERVICE, target)


def command(target, label=None):
    return CheckDefinition(label or target, CheckKind.COMMAND, target)


class TestResolveServiceState:
    """Tests for the primary/legacy decision table."""

    @pytest.mark.parametrize('legacy', [None, ABSENT, FAILED, ACTIVE, INACTIVE])
    def test_primary_active_always_online(self, legacy):
        assert resolve_service_state(ACTIVE, legacy) is HealthState.ONLINE

    @pytest.mark.parametrize('primary', [ABSENT, FAILED, INACTIVE])
    def test_legacy_active_is_online(self, primary):
        assert resolve_service_state(primary, ACTIVE) is HealthState.ONLINE

    @pytest.mark.parametrize('primary', [ABSENT, FAILED, INACTIVE])
    def test_legacy_inactive_is_offline(self, primary):
        assert resolve_service_state(primary, INACTIVE) is HealthState.OFFLINE

    def test_primary_inactive_without_legacy_is_offline(self):
        assert resolve_service_state(INACTIVE, ABSENT) is HealthState.OFFLINE

    def test_no_mechanism_is_unknown(self):
        assert resolve_service_state(ABSENT, ABSENT) is HealthState.UNKNOWN

    def test_failed_mechanisms_are_unknown(self):
        assert resolve_service_state(FAILED, ABSENT) is HealthState.UNKNOWN
        assert resolve_service_state(ABSENT, FAILED) is HealthState.UNKNOWN
        assert resolve_service_state(FAILED, FAILED) is HealthState.UNKNOWN

    def test_primary_inactive_legacy_failed_is_offline(self):
        assert resolve_service_state(INACTIVE, FAILED) is HealthState.OFFLINE


class TestClassifyCommand:
    """Tests for command (executable presence) checks."""

    def test_available(self):
        agg = StatusAggregator(FakeProvider(commands={'git'}))
        result = agg.classify(command('git', 'Git client'))
        assert result.state is HealthState.ONLINE
        assert result.message == "Available"

    def test_git_lookup_fails(self):
        """Git client with a failed lookup is offline, not unknown."""
        agg = StatusAggregator(FakeProvider())
        result = agg.classify(command('git', 'Git client'))
        assert result.state is HealthState.OFFLINE
        assert result.message == "Not available"

    def test_never_unknown(self):
        provider = FakeProvider(default_primary=ABSENT, default_legacy=ABSENT)
        agg = StatusAggregator(provider)
        for name in ('batctl', 'python3', 'rns'):
            assert agg.classify(command(name)).state is not HealthState.UNKNOWN

    def test_uses_exact_target(self):
        provider = FakeProvider(commands={'meshtastic'})
        StatusAggregator(provider).classify(command('meshtastic', 'Meshtastic CLI'))
        assert provider.calls == [('command', 'meshtastic')]

    def test_does_not_query_services(self):
        provider = FakeProvider(commands={'git'})
        StatusAggregator(provider).classify(command('git'))
        assert all(kind == 'command' for kind, _ in provider.calls)


class TestClassifyService:
    """Tests for service checks."""

    def test_nginx_legacy_only_running(self):
        """Legacy-only host reporting running gives Online/Running."""
        provider = FakeProvider(legacy={'nginx': ACTIVE})
        result = StatusAggregator(provider).classify(service('nginx', 'Web server (nginx)'))
        assert result.state is HealthState.ONLINE
        assert result.message == "Running"
        assert result.label == "Web server (nginx)"

    def test_rnsd_no_mechanisms(self):
        result = StatusAggregator(FakeProvider()).classify(
            service('rnsd', 'Reticulum daemon (rnsd)'))
        assert result.state is HealthState.UNKNOWN
        assert result.message == "Status unavailable"

    def test_primary_active_skips_legacy(self):
        provider = FakeProvider(primary={'rnsd': ACTIVE}, legacy={'rnsd': INACTIVE})
        result = StatusAggregator(provider).classify(service('rnsd'))
        assert result.state is HealthState.ONLINE
        assert ('legacy', 'rnsd') not in provider.calls

    def test_primary_inactive_no_legacy(self):
        provider = FakeProvider(primary={'mariadb': INACTIVE})
        result = StatusAggregator(provider).classify(service('mariadb'))
        assert result.state is HealthState.OFFLINE
        assert result.message == "Not running"

    def test_primary_inactive_falls_through_to_legacy(self):
        provider = FakeProvider(primary={'mesh': INACTIVE}, legacy={'mesh': ACTIVE})
        result = StatusAggregator(provider).classify(service('mesh'))
        assert result.state is HealthState.ONLINE
        assert provider.calls == [('primary', 'mesh'), ('legacy', 'mesh')]


class TestFailureIsolation:
    """A broken provider degrades only the affected check."""

    def test_service_degrades_to_unknown(self):
        result = StatusAggregator(ExplodingProvider()).classify(service('nginx'))
        assert result.state is HealthState.UNKNOWN
        assert result.message == "Status unavailable"

    def test_command_degrades_to_offline(self):
        result = StatusAggregator(ExplodingProvider()).classify(command('git'))
        assert result.state is HealthState.OFFLINE

    def test_failure_is_logged(self):
        with patch('status.aggregator.logger') as mock_logger:
            StatusAggregator(ExplodingProvider()).classify(service('nginx'))
            mock_logger.warning.assert_called_once()

    def test_one_bad_check_does_not_block_others(self):
        class HalfBroken(FakeProvider):
            def service_manager_status(self, name):
                if name == 'nginx':
                    raise OSError("fork failed")
                return super().service_manager_status(name)

        provider = HalfBroken(commands={'git'}, primary={'rnsd': ACTIVE})
        results = StatusAggregator(provider).classify_all(
            [service('nginx'), service('rnsd'), command('git')])
        assert [r.state for r in results] == [
            HealthState.UNKNOWN, HealthState.ONLINE, HealthState.ONLINE]


class TestOrderingAndGrouping:
    """Order-preserving, independent classification."""

    def test_idempotent(self):
        agg = StatusAggregator(FakeProvider(legacy={'nginx': ACTIVE}))
        check = service('nginx')
        assert agg.classify(check) == agg.classify(check)

    def test_classify_all_preserves_order(self):
        provider = FakeProvider(commands={'b'}, primary={'a': INACTIVE})
        checks = [service('a'), command('b'), service('c')]
        results = StatusAggregator(provider).classify_all(checks)
        assert [r.check for r in results] == checks
        assert [r.state for r in results] == [
            HealthState.OFFLINE, HealthState.ONLINE, HealthState.UNKNOWN]

    def test_results_independent_of_neighbours(self):
        provider = FakeProvider(commands={'git'})
        agg = StatusAggregator(provider)
        alone = agg.classify(command('git'))
        together = agg.classify_all([service('x'), command('git'), service('y')])[1]
        assert alone == together

    def test_classify_groups_keeps_partition(self):
        groups = [
            CheckGroup('one', 'One', (command('git'), command('nope'))),
            CheckGroup('two', 'Two', (service('nginx'),)),
        ]
        provider = FakeProvider(commands={'git'}, legacy={'nginx': ACTIVE})
        results = StatusAggregator(provider).classify_groups(groups)
        assert [g.group.key for g in results] == ['one', 'two']
        assert [len(g.results) for g in results] == [2, 1]
        assert results[0].counts() == {'online': 1, 'offline': 1, 'unknown': 0}

    def test_build_report_over_defaults(self):
        report = StatusAggregator(FakeProvider()).build_report(DEFAULT_CHECK_GROUPS)
        total = sum(len(g.checks) for g in DEFAULT_CHECK_GROUPS)
        assert len(report.results) == total
        counts = report.counts()
        assert counts['online'] == 0
        assert sum(counts.values()) == total

    def test_empty_group(self):
        results = StatusAggregator(FakeProvider()).classify_groups(
            [CheckGroup('empty', 'Empty', ())])
        assert results[0].results == []
