from __future__ import annotations

import logging

import pytest

from evtsyslog.adapters.settings import MappingSettingsStore
from evtsyslog.application.use_cases.load_config import HOST_KEY, PORT_KEY, load_config
from evtsyslog.domain.destination import Destination
from evtsyslog.domain.errors import ConfigError
from tests.fakes import StaticResolver
from tests.os_markers import OS_AGNOSTIC

pytestmark = [OS_AGNOSTIC]


@pytest.fixture
def resolver() -> StaticResolver:
    return StaticResolver({"syslog.example.com": ["10.0.0.5", "10.0.0.9"], "v6only.example.com": []})


def test_resolved_host_and_port_form_the_destination(resolver: StaticResolver) -> None:
    store = MappingSettingsStore({HOST_KEY: "syslog.example.com", PORT_KEY: "5140"})

    result = load_config(store, resolver)

    assert result.destination == Destination("10.0.0.5", 5140)
    assert result.complete is True
    assert result.problems == ()
    assert result.require_destination() == Destination("10.0.0.5", 5140)


def test_first_ipv4_address_is_selected_deterministically(resolver: StaticResolver) -> None:
    store = MappingSettingsStore({HOST_KEY: "syslog.example.com", PORT_KEY: "514"})

    picks = {load_config(store, resolver).destination for _ in range(5)}

    assert picks == {Destination("10.0.0.5", 514)}


@pytest.mark.parametrize("raw_port", ["0", "70000", "syslog", "", "1" * 5000, None])
def test_bad_port_falls_back_to_default_and_reports_partial_failure(
    resolver: StaticResolver, raw_port: str | None, caplog: pytest.LogCaptureFixture
) -> None:
    store = MappingSettingsStore({HOST_KEY: "syslog.example.com", PORT_KEY: raw_port})

    with caplog.at_level(logging.WARNING):
        result = load_config(store, resolver)

    assert result.destination == Destination("10.0.0.5", 514)
    assert result.complete is False
    assert any(PORT_KEY in problem for problem in result.problems)
    assert any(PORT_KEY in record.getMessage() for record in caplog.records)


def test_unresolvable_host_yields_no_destination(resolver: StaticResolver) -> None:
    store = MappingSettingsStore({HOST_KEY: "bad.invalid", PORT_KEY: "514"})

    result = load_config(store, resolver)

    assert result.destination is None
    assert resolver.calls == ["bad.invalid"]
    with pytest.raises(ConfigError, match="bad.invalid"):
        result.require_destination()


def test_host_without_ipv4_address_yields_no_destination(resolver: StaticResolver) -> None:
    result = load_config(MappingSettingsStore({HOST_KEY: "v6only.example.com", PORT_KEY: "514"}), resolver)

    assert result.destination is None
    assert result.complete is False


@pytest.mark.parametrize("host", [None, "", "   "])
def test_missing_host_is_reported_without_resolving(resolver: StaticResolver, host: str | None) -> None:
    result = load_config(MappingSettingsStore({HOST_KEY: host, PORT_KEY: "514"}), resolver)

    assert result.destination is None
    assert resolver.calls == []
    assert result.problems == (f"{HOST_KEY} is not set",)


def test_idna_failures_count_as_unresolvable() -> None:
    def explode(host: str) -> list[str]:
        raise UnicodeError("label too long")

    result = load_config(MappingSettingsStore({HOST_KEY: "x" * 300, PORT_KEY: "514"}), explode)

    assert result.destination is None
