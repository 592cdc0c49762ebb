"""Unit tests for IconSet."""

import logging

import pytest

from viewmodel.table import FieldColor, IconRef, IconSet


@pytest.fixture
def status_icons() -> IconSet:
    """Icon set with online/offline states.

    Returns:
        IconSet with two registered values.
    """
    icons = IconSet()
    icons.add("online", "wifi", FieldColor.PRIMARY, "ONLINE")
    icons.add("offline", "wifi_off", FieldColor.WARNING, "OFFLINE")
    return icons


class TestIconSet:
    def test_add_returns_ref(self) -> None:
        icons = IconSet()
        assert icons.add("ok", "check") == IconRef("ok")

    def test_membership_and_order(self, status_icons: IconSet) -> None:
        assert "online" in status_icons
        assert IconRef("offline") in status_icons
        assert "unknown" not in status_icons
        assert list(status_icons) == ["online", "offline"]
        assert len(status_icons) == 2

    def test_resolve_known(self, status_icons: IconSet) -> None:
        assert status_icons.resolve("online") == IconRef("online")

    def test_resolve_unknown_warns(self, status_icons: IconSet, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING):
            assert status_icons.resolve("broken") is None
        assert "broken" in caplog.text

    def test_definition_json(self, status_icons: IconSet) -> None:
        icon = status_icons.get("offline")
        assert icon.to_json(lambda key: key.title()) == {
            "icon": "wifi_off",
            "color": "warn",
            "hint": "Offline",
        }

    def test_options_merged_into_json(self) -> None:
        icons = IconSet()
        icons.add_with_options("busy", "hourglass_empty", options={"spin": True})
        assert icons.get("busy").to_json()["spin"] is True
