from defenses.binding_store import Binding, BindingStore, DynamicBindingStore, StaticBindingStore


def test_static_file_parsing(write_list):
    path = write_list("static.list", """\
# full line comment
   # indented comment
eth2 00:11:22:33:44:55 192.168.1.10   # file server
eth2 66:77:88:99:AA:BB
eth3 00:11:22:33:44:55 10.0.0.1

""")

    store = StaticBindingStore.from_file(path)

    assert list(store) == [
        Binding("eth2", "00:11:22:33:44:55", "192.168.1.10"),
        Binding("eth2", "66:77:88:99:aa:bb", None),
        Binding("eth3", "00:11:22:33:44:55", "10.0.0.1"),
    ]


def test_malformed_lines_are_skipped(write_list):
    path = write_list("static.list", """\
eth2
eth2 not-a-mac 192.168.1.10
eth2 00:11:22:33:44:55 192.168.1.10
""")

    store = StaticBindingStore.from_file(path)

    assert len(store) == 1


def test_invalid_ip_leaves_binding_mac_only(write_list):
    path = write_list("static.list", "eth2 00:11:22:33:44:55 300.1.1.1\n")

    binding = StaticBindingStore.from_file(path).lookup("eth2", "00:11:22:33:44:55")

    assert binding.mac_only


def test_missing_file_gives_empty_store(tmp_path):
    store = StaticBindingStore.from_file(str(tmp_path / "nope.list"))

    assert len(store) == 0
    assert store.lookup("eth0", "00:11:22:33:44:55") is None


def test_lookup_is_scoped_to_interface():
    store = BindingStore([Binding("eth2", "00:11:22:33:44:55", "192.168.1.10")])

    assert store.lookup("eth2", "00:11:22:33:44:55") is not None
    assert store.lookup("eth1", "00:11:22:33:44:55") is None


def test_lookup_normalizes_mac():
    store = BindingStore([Binding("eth2", "00:11:22:33:44:55", "192.168.1.10")])

    assert store.lookup("eth2", "00-11-22-33-44-55").ip == "192.168.1.10"


def test_first_duplicate_wins():
    store = BindingStore([
        Binding("eth2", "00:11:22:33:44:55", "192.168.1.10"),
        Binding("eth2", "00:11:22:33:44:55", "192.168.1.20"),
    ])

    assert store.lookup("eth2", "00:11:22:33:44:55").ip == "192.168.1.10"
    assert len(store) == 2


def test_dynamic_learn_is_idempotent():
    store = DynamicBindingStore()

    first = store.learn("eth1", "AA:BB:CC:DD:EE:FF", "10.0.0.5")
    second = store.learn("eth1", "aa:bb:cc:dd:ee:ff", "10.0.0.6")

    assert first == Binding("eth1", "aa:bb:cc:dd:ee:ff", "10.0.0.5")
    assert second is None
    assert len(store) == 1


def test_dynamic_same_mac_on_other_interface_is_new():
    store = DynamicBindingStore()

    store.learn("eth1", "aa:bb:cc:dd:ee:ff", "10.0.0.5")
    store.learn("eth3", "aa:bb:cc:dd:ee:ff", "10.0.1.5")

    assert len(store) == 2


def test_dynamic_state_file_is_truncated_then_appended(tmp_path):
    state = tmp_path / "state" / "learned.list"
    state.parent.mkdir()
    state.write_text("eth1 11:11:11:11:11:11 10.0.0.9\n")

    store = DynamicBindingStore(str(state))
    assert state.read_text() == ""

    store.learn("eth1", "aa:bb:cc:dd:ee:ff", "10.0.0.5")
    store.learn("eth1", "aa:bb:cc:dd:ee:ff", "10.0.0.5")

    assert state.read_text() == "eth1 aa:bb:cc:dd:ee:ff 10.0.0.5\n"
