import pytest

from core.neighbor_table import NeighborEntry
from defenses.binding_classifier import BindingClassifier, Disposition, classify_entry
from defenses.binding_store import Binding, BindingStore
from defenses.events import AlarmKind


SERVER = "00:11:22:33:44:55"


@pytest.fixture
def store():
    return BindingStore([
        Binding("eth2", SERVER, "192.168.1.10"),
        Binding("eth2", "66:77:88:99:aa:bb", None),
    ])


def test_exact_match_is_ok(store):
    verdict = classify_entry(store, NeighborEntry("192.168.1.10", SERVER, "eth2"))

    assert verdict.ok
    assert verdict.disposition is Disposition.MATCHED


@pytest.mark.parametrize("ip", ["192.168.1.99", "10.0.0.1", "192.168.1.11"])
def test_different_ip_is_mismatch_not_unknown(store, ip):
    verdict = classify_entry(store, NeighborEntry(ip, SERVER, "eth2"))

    assert verdict.disposition is Disposition.MISMATCH
    assert verdict.event.kind is AlarmKind.BINDING_MISMATCH


@pytest.mark.parametrize("ip", ["192.168.1.10", "192.168.1.200", "10.9.9.9"])
def test_mac_only_binding_accepts_any_ip(store, ip):
    verdict = classify_entry(store, NeighborEntry(ip, "66:77:88:99:aa:bb", "eth2"))

    assert verdict.ok
    assert verdict.disposition is Disposition.MAC_ONLY


def test_unbound_mac_is_unknown(store):
    verdict = classify_entry(store, NeighborEntry("192.168.1.77", "de:ad:be:ef:00:01", "eth2"))

    assert verdict.disposition is Disposition.UNKNOWN_MAC
    assert verdict.event.hook_args() == ("eth2", "de:ad:be:ef:00:01", "192.168.1.77")


def test_mismatch_event_payload(store):
    verdict = classify_entry(store, NeighborEntry("192.168.1.99", SERVER, "eth2"))

    event = verdict.event
    assert event.hook_args() == ("eth2", SERVER, "192.168.1.99", SERVER)
    assert event.bound_ip == "192.168.1.10"


def test_first_duplicate_decides():
    store = BindingStore([
        Binding("eth2", SERVER, "192.168.1.10"),
        Binding("eth2", SERVER, "192.168.1.20"),
    ])

    assert classify_entry(store, NeighborEntry("192.168.1.10", SERVER, "eth2")).ok
    assert not classify_entry(store, NeighborEntry("192.168.1.20", SERVER, "eth2")).ok


def test_classifier_only_looks_at_its_interfaces(store):
    classifier = BindingClassifier(store, ["eth2"])

    verdicts = classifier.classify([
        NeighborEntry("192.168.1.10", SERVER, "eth2"),
        NeighborEntry("10.0.0.1", "de:ad:be:ef:00:01", "eth0"),
    ])

    assert [v.entry.interface for v in verdicts] == ["eth2"]


def test_classification_is_deterministic(store):
    classifier = BindingClassifier(store, ["eth2"])
    entries = [NeighborEntry("192.168.1.99", SERVER, "eth2")]

    first = [v.disposition for v in classifier.classify(entries)]
    second = [v.disposition for v in classifier.classify(entries)]

    assert first == second == [Disposition.MISMATCH]
