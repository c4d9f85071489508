import pytest
from dlcity.domain.centers import DEFAULT_CENTERS, CenterEntry, CenterRegistry, default_registry


def test_default_registry_has_all_production_centers():
    reg = default_registry()
    assert len(reg) == 10
    assert reg.get(2) == CenterEntry(center_id=2, name="Kutaisi")
    assert reg.get(15).name == "Rustavi"
    assert {e.center_id for e in reg} == set(DEFAULT_CENTERS)


def test_lookup_of_unknown_center_returns_none():
    reg = default_registry()
    assert reg.get(999) is None
    assert 999 not in reg
    assert 3 in reg


def test_duplicate_names_are_rejected():
    with pytest.raises(ValueError, match="duplicate center name"):
        CenterRegistry([CenterEntry(1, "Gori"), CenterEntry(2, "Gori")])


def test_duplicate_ids_are_rejected():
    with pytest.raises(ValueError, match="duplicate center id"):
        CenterRegistry([CenterEntry(1, "Gori"), CenterEntry(1, "Poti")])


def test_entries_are_immutable():
    entry = CenterEntry(3, "Batumi")
    with pytest.raises(AttributeError):
        entry.name = "Tbilisi"  # type: ignore[misc]
