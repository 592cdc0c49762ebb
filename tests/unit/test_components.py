"""Unit tests for URL, button and query components."""

from viewmodel.component import (
    Button,
    ButtonAction,
    ButtonType,
    Color,
    Component,
    Query,
    TableButton,
    Url,
    as_url,
    with_new_row,
)


class TestUrl:
    def test_prefix_only_applied_when_printed_with_prefix(self) -> None:
        url = Url("/trips", prefix="/portal")
        assert url.print() == "/trips"
        assert url.print_prefix() == "/portal/trips"

    def test_add_segment(self) -> None:
        assert Url("/trips").add("42").print() == "/trips/42"

    def test_as_url(self) -> None:
        assert as_url(None) is None
        assert as_url("/a").print() == "/a"
        url = Url("/b")
        assert as_url(url) is url


class TestButton:
    def test_stroked_button_has_translated_text(self) -> None:
        button = Button(ButtonAction.LINK, "SPEICHERN", Url("/save"), hint="HINT")
        printed = button.print(lambda key: key.lower())
        assert printed["text"] == "speichern"
        assert printed["hint"] == "hint"
        assert printed["url"] == "/save"
        assert printed["type"] == "stroked"
        assert "icon" not in printed

    def test_download_filename(self) -> None:
        button = Button(ButtonAction.DOWNLOAD, "CSV", filename="trips.csv")
        assert button.print()["filename"] == "trips.csv"

    def test_table_button_is_icon_only(self) -> None:
        button = TableButton(
            ButtonAction.DOWNLOAD, "csv", Url("/data"), "CSV", Color.ACCENT, options={"data": {"_csv": True}}
        )
        printed = button.print()
        assert printed["type"] == ButtonType.ICON.value
        assert printed["icon"] == "csv"
        assert printed["color"] == "accent"
        assert printed["data"] == {"_csv": True}
        assert isinstance(button, Component)


class TestQuery:
    def test_wraps_components(self) -> None:
        query = Query([{"id": "q"}], save_state_id="trips")
        query.add_printed({"type": "table"})
        printed = query.print()
        assert printed["type"] == "query"
        assert printed["data"]["fields"] == [{"id": "q"}]
        assert printed["data"]["dyn"] == [{"type": "table"}]
        assert printed["data"]["saveState"] is True
        assert printed["data"]["url"] is None


def test_with_new_row() -> None:
    assert with_new_row({"type": "table"}) == {"type": "table", "newRow": True}
