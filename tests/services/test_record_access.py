# tests/services/test_record_access.py
from fleet_console.services.record_access import resolve


def test_direct_key_wins():
    assert resolve({"vehicles.reg_number": "flat", "vehicles": {"reg_number": "nested"}}, "vehicles.reg_number") == "flat"


def test_nested_walk():
    assert resolve({"a": {"b": {"c": 3}}}, "a.b.c") == 3


def test_missing_or_non_mapping_steps_give_none():
    assert resolve({"a": None}, "a.b") is None
    assert resolve({"a": "text"}, "a.b") is None
    assert resolve({}, "a") is None
    assert resolve(None, "a") is None
