"""Tests for the parameter store backends"""

import numpy as np
import pytest
from navparam.core.errors import TypeMismatchError
from navparam.params.accessors import declare_boolean, get_integer, get_integer_sequence
from navparam.params.store import (
    DictParameterStore,
    EnvParameterStore,
    OmegaConfParameterStore,
    ParameterStore,
    split_key,
)


def test_split_key():
    """Slashes and dots are both namespace separators"""
    assert split_key("/gnss/rate") == ["gnss", "rate"]
    assert split_key("gnss.rate") == ["gnss", "rate"]
    assert split_key("rate") == ["rate"]
    with pytest.raises(ValueError):
        split_key("/")


@pytest.fixture(params=["dict", "omegaconf", "env"])
def store(request, monkeypatch):
    """Each backend, empty"""
    if request.param == "dict":
        return DictParameterStore()
    if request.param == "omegaconf":
        return OmegaConfParameterStore()
    return EnvParameterStore(prefix="NAVPARAM_TEST_", environ={})


def test_backends_satisfy_protocol(store):
    """Every backend is a ParameterStore"""
    assert isinstance(store, ParameterStore)


def test_set_then_get(store):
    """Values written are read back with the same type"""
    assert not store.has_key("device/baudrate")
    assert store.get_param("device/baudrate") == (None, False)

    store.set_param("device/baudrate", 9600)
    store.set_param("device/enabled", True)
    store.set_param("device/prns", [1, 2, 3])

    assert store.has_key("device/baudrate")
    assert store.get_param("device/baudrate") == (9600, True)
    assert store.get_param("device.enabled") == (True, True)
    assert store.get_param("/device/prns") == ([1, 2, 3], True)


def test_declare_boolean_on_every_backend(store):
    """First declaration wins regardless of backend"""
    assert declare_boolean(store, "publish/aid/alm", False) is False
    assert declare_boolean(store, "publish/aid/alm", True) is False


def test_omegaconf_from_yaml_merges(tmp_path):
    """Later YAML files override earlier ones"""
    base = tmp_path / "base.yaml"
    base.write_text("uart1:\n  baudrate: 9600\n  in: 7\nsbas:\n  prns: [120, 124]\n")
    override = tmp_path / "override.yaml"
    override.write_text("uart1:\n  baudrate: 115200\n")

    store = OmegaConfParameterStore.from_yaml(base, override)

    assert get_integer(store, "uart1/baudrate", np.uint32) == (115200, True)
    assert get_integer(store, "uart1/in", np.uint16) == (7, True)
    values, found = get_integer_sequence(store, "sbas/prns", np.uint8)
    assert found and values.tolist() == [120, 124]


def test_omegaconf_nested_node_returned_as_container():
    """Sub-trees are returned as plain dicts"""
    store = OmegaConfParameterStore.from_dict({"tmode3": {"lla": [1, 2, 3]}})
    value, found = store.get_param("tmode3")

    assert found
    assert value == {"lla": [1, 2, 3]}
    assert isinstance(value, dict)


def test_env_store_decodes_yaml(monkeypatch):
    """Environment strings are decoded as YAML scalars and lists"""
    monkeypatch.setenv("NAVPARAM_GNSS_GPS", "true")
    monkeypatch.setenv("NAVPARAM_NAV_RATE", "4")
    monkeypatch.setenv("NAVPARAM_SBAS_PRNS", "[120, 124]")
    store = EnvParameterStore()

    assert store.variable_name("/gnss/gps") == "NAVPARAM_GNSS_GPS"
    assert store.get_param("gnss/gps") == (True, True)
    assert get_integer(store, "nav/rate", np.uint16) == (4, True)
    assert store.get_param("sbas/prns") == ([120, 124], True)


def test_env_store_reads_integers_as_decimal():
    """Leading zeros and colons are not octal or base-60 numbers"""
    environ = {"NAVPARAM_UART_IN": "010", "NAVPARAM_UART_OUT": "1:30", "NAVPARAM_UART_BAUD": "-0"}
    store = EnvParameterStore(environ=environ)

    assert get_integer(store, "uart/in", np.uint16) == (10, True)
    assert store.get_param("uart/out") == ("1:30", True)
    assert store.get_param("uart/baud") == (0, True)
    with pytest.raises(TypeMismatchError):
        get_integer(store, "uart/out", np.uint16)


def test_env_store_keeps_other_yaml_scalars():
    """Booleans, floats and lists still decode"""
    environ = {"NAVPARAM_A": "false", "NAVPARAM_B": "1.5", "NAVPARAM_C": "[010, 2]"}
    store = EnvParameterStore(environ=environ)

    assert store.get_param("a") == (False, True)
    assert store.get_param("b") == (1.5, True)
    assert store.get_param("c") == ([10, 2], True)


def test_dict_store_does_not_overwrite_scalar_parent():
    """Writing below an existing scalar fails and leaves it intact"""
    store = DictParameterStore({"a": 5})
    with pytest.raises(TypeMismatchError, match="parent 'a'"):
        declare_boolean(store, "a/b", True)

    assert store.data == {"a": 5}


def test_env_store_encodes_values():
    """set_param writes YAML text without document markers"""
    environ = {}
    store = EnvParameterStore(environ=environ)
    store.set_param("inf/all", True)
    store.set_param("usb/tx", [1, 2])

    assert environ == {"NAVPARAM_INF_ALL": "true", "NAVPARAM_USB_TX": "[1, 2]"}


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
