from __future__ import annotations

import pytest

from evtsyslog.domain.lifecycle import ServiceState
from tests.os_markers import OS_AGNOSTIC

pytestmark = [OS_AGNOSTIC]

LEGAL = {
    (ServiceState.STOPPED, ServiceState.START_PENDING),
    (ServiceState.START_PENDING, ServiceState.RUNNING),
    (ServiceState.START_PENDING, ServiceState.STOP_PENDING),
    (ServiceState.START_PENDING, ServiceState.STOPPED),
    (ServiceState.RUNNING, ServiceState.STOP_PENDING),
    (ServiceState.STOP_PENDING, ServiceState.STOPPED),
}


@pytest.mark.parametrize("source", list(ServiceState))
@pytest.mark.parametrize("target", list(ServiceState))
def test_transition_table(source: ServiceState, target: ServiceState) -> None:
    assert source.can_transition_to(target) is ((source, target) in LEGAL)


def test_only_transitional_states_are_pending() -> None:
    assert [state for state in ServiceState if state.is_pending] == [ServiceState.START_PENDING, ServiceState.STOP_PENDING]
