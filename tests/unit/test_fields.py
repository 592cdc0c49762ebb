"""Unit tests for field kinds, built-in formatters and FieldBuilder options."""

from typing import Any, Callable

import pytest

from viewmodel.context import DistanceUnit, UserContext
from viewmodel.table import (
    FORMATTERS,
    KIND_DEFAULTS,
    FieldAlign,
    FieldButtonAction,
    FieldColor,
    FieldKind,
    IconSet,
    OutputTarget,
    TableBuilder,
)


def render(
    ctx: UserContext,
    register: Callable[[TableBuilder], Any],
    rows: list[dict[str, Any]],
    target: OutputTarget = OutputTarget.WEB,
    translator: Callable[[str], str] = None,
) -> list[dict[str, Any]]:
    builder: TableBuilder[dict[str, Any]] = TableBuilder(ctx, translator)
    register(builder)
    table = builder.build()
    table.set_data(rows)
    return table.get_data(target)


class TestKindRegistry:
    def test_every_kind_has_formatter_and_defaults(self) -> None:
        for kind in FieldKind:
            assert kind in FORMATTERS, kind
            assert kind in KIND_DEFAULTS, kind

    def test_numeric_defaults(self) -> None:
        assert KIND_DEFAULTS[FieldKind.FLOAT].decimals == 2
        assert KIND_DEFAULTS[FieldKind.SPEED].decimals == 1
        assert KIND_DEFAULTS[FieldKind.DISTANCE].align == FieldAlign.RIGHT
        assert KIND_DEFAULTS[FieldKind.ID].csv is False
        assert KIND_DEFAULTS[FieldKind.BUTTONS].search is False


class TestNumericFields:
    def test_web_value_is_display_and_raw_pair(self, de_ctx: UserContext) -> None:
        data = render(de_ctx, lambda b: b.distance_field("km", "KM", lambda r: r["km"]), [{"km": 196.5}])
        assert data == [{"km": ["196,50 km", 196.5]}]

    def test_export_value_is_display_string(self, de_ctx: UserContext) -> None:
        register = lambda b: b.distance_field("km", "KM", lambda r: r["km"])
        for target in (OutputTarget.CSV, OutputTarget.PDF, OutputTarget.EXCEL):
            assert render(de_ctx, register, [{"km": 196.5}], target) == [{"km": "196,50 km"}]

    def test_miles_user(self, en_ctx: UserContext) -> None:
        data = render(en_ctx, lambda b: b.distance_field("km", "KM", lambda r: r["km"]), [{"km": 196.5}])
        assert data[0]["km"] == ["122.10 mi", 196.5]

    def test_decimals_prefix_and_suffix(self, de_ctx: UserContext) -> None:
        register = lambda b: (
            b.float_field("price", "PRICE", lambda r: r["price"])
            .with_decimals(1)
            .with_text_prefix("~")
            .with_text_suffix(" EUR")
        )
        data = render(de_ctx, register, [{"price": 1234.56}], OutputTarget.CSV)
        assert data == [{"price": "~1.234,6 EUR"}]

    def test_integer_and_none(self, de_ctx: UserContext) -> None:
        data = render(de_ctx, lambda b: b.int_field("n", "N", lambda r: r["n"]), [{"n": 4200}, {"n": None}])
        assert data[0]["n"] == ["4.200", 4200]
        assert data[1]["n"] == ["", None]

    def test_non_number_raises(self, de_ctx: UserContext) -> None:
        with pytest.raises(TypeError, match="'n'"):
            render(de_ctx, lambda b: b.int_field("n", "N", lambda r: r["n"]), [{"n": "12"}])

    def test_negative_decimals_rejected(self, de_ctx: UserContext) -> None:
        builder: TableBuilder[dict] = TableBuilder(de_ctx)
        with pytest.raises(ValueError, match="decimals"):
            builder.float_field("x", "X", lambda r: r).with_decimals(-1)

    def test_id_is_plain_int(self, de_ctx: UserContext) -> None:
        assert render(de_ctx, lambda b: b.id_field("id", "ID", lambda r: r["id"]), [{"id": 7}]) == [{"id": 7}]


class TestBoolAndTimeFields:
    def test_bool_texts_translated(self, de_ctx: UserContext, translator: Callable[[str], str]) -> None:
        register = lambda b: b.bool_field("active", "ACTIVE", lambda r: r["active"])
        data = render(de_ctx, register, [{"active": True}, {"active": False}, {"active": None}], translator=translator)
        assert [row["active"] for row in data] == ["Ja", "Nein", ""]

    def test_custom_bool_texts(self, de_ctx: UserContext) -> None:
        register = lambda b: b.bool_field("on", "ON", lambda r: r["on"]).with_bool_text("ON", "OFF")
        assert render(de_ctx, register, [{"on": True}])[0]["on"] == "ON"

    def test_time_length_web_and_csv(self, de_ctx: UserContext, trips: list[dict[str, Any]]) -> None:
        register = lambda b: b.time_length_field("duration", "DAUER", lambda r: r["duration"])
        web = [row["duration"] for row in render(de_ctx, register, trips)]
        csv = [row["duration"] for row in render(de_ctx, register, trips, OutputTarget.CSV)]
        assert web == ["00:45", "05:30", "2d 03:05"]
        assert csv == ["45", "330", "3065"]

    def test_datetime_web_and_csv(self, de_ctx: UserContext) -> None:
        register = lambda b: b.datetime_field("at", "AT", lambda r: r["at"])
        rows = [{"at": 1640000000}, {"at": 0}]
        assert [r["at"] for r in render(de_ctx, register, rows)] == ["2021-12-20 12:33", ""]
        assert render(de_ctx, register, rows, OutputTarget.CSV)[0]["at"] == "2021-12-20 12:33:20"

    def test_date_same_for_all_targets(self, de_ctx: UserContext) -> None:
        register = lambda b: b.date_field("day", "DAY", lambda r: r["day"])
        for target in OutputTarget:
            assert render(de_ctx, register, [{"day": 1640000000}], target)[0]["day"] == "2021-12-20"


class TestStructuredFields:
    def test_link_splits_on_web(self, de_ctx: UserContext) -> None:
        register = lambda b: b.link_field("site", "SITE", lambda r: (r["name"], r["url"]))
        rows = [{"name": "Depot", "url": "/depots/1"}]
        assert render(de_ctx, register, rows) == [{"site": "Depot", "siteLink": "/depots/1"}]
        assert render(de_ctx, register, rows, OutputTarget.CSV) == [{"site": "Depot"}]

    def test_link_wrong_arity_raises(self, de_ctx: UserContext) -> None:
        register = lambda b: b.link_field("site", "SITE", lambda r: ("a", "b", "c"))
        with pytest.raises(TypeError, match="'site'"):
            render(de_ctx, register, [{}])

    def test_unknown_icon_is_empty_and_row_still_renders(self, de_ctx: UserContext) -> None:
        icons = IconSet()
        online = icons.add("online", "wifi")

        def register(b: TableBuilder) -> None:
            b.icon_field("status", "STATUS", lambda r: r["status"], icons)
            b.text_field("name", "NAME", lambda r: r["name"])

        rows = [{"status": online, "name": "A"}, {"status": "broken", "name": "B"}]
        data = render(de_ctx, register, rows)
        assert data[0] == {"status": "online", "name": "A"}
        assert data[1] == {"status": "", "name": "B"}

    def test_non_string_icon_key_falls_back(self, de_ctx: UserContext) -> None:
        icons = IconSet()
        icons.add("1", "check")

        def register(b: TableBuilder) -> None:
            b.icon_field("s", "S", lambda r: r["s"], icons)
            b.text_field("t", "T", lambda r: r["t"])

        rows = [{"s": 7, "t": "x"}, {"s": 1, "t": "y"}]
        assert render(de_ctx, register, rows) == [{"s": "", "t": "x"}, {"s": "1", "t": "y"}]

    def test_icon_unknown_sentinel(self, de_ctx: UserContext) -> None:
        icons = IconSet()
        icons.add("ok", "check")
        register = lambda b: b.icon_field("s", "S", lambda r: r["s"], icons, unknown_value="help")
        assert render(de_ctx, register, [{"s": None}])[0]["s"] == "help"

    def test_buttons_normalize_falsy(self, de_ctx: UserContext) -> None:
        register = lambda b: (
            b.buttons_field("actions", "", lambda r: {0: "/edit/1", 1: None, 2: ""})
            .add_button(0, FieldButtonAction.LINK, "edit")
        )
        data = render(de_ctx, register, [{}])
        assert data[0]["actions"] == {"0": "/edit/1", "1": False, "2": False}

    def test_buttons_excluded_from_csv_and_empty_in_pdf(self, de_ctx: UserContext) -> None:
        register = lambda b: b.buttons_field("actions", "", lambda r: {0: "/x"}).add_button(
            0, FieldButtonAction.LINK, "edit"
        )
        assert render(de_ctx, register, [{}], OutputTarget.CSV) == [{}]
        assert render(de_ctx, register, [{}], OutputTarget.PDF) == [{"actions": ""}]

    def test_buttons_non_mapping_raises(self, de_ctx: UserContext) -> None:
        register = lambda b: b.buttons_field("actions", "", lambda r: ["/x"])
        with pytest.raises(TypeError, match="'actions'"):
            render(de_ctx, register, [{}])

    def test_menu_items_injected_per_row(self, de_ctx: UserContext) -> None:
        def register(b: TableBuilder) -> None:
            (
                b.buttons_field("actions", "", lambda r: {0: "/edit", 1: "menu"})
                .add_button(0, FieldButtonAction.LINK, "edit")
                .add_menu(1, "more_vert", FieldColor.PRIMARY, "MORE", lambda r: r["menu"])
                .add_menu_item(1, FieldButtonAction.DIALOG, "share", text="TEILEN")
                .add_menu_item(1, FieldButtonAction.DELETE, "delete", FieldColor.WARNING, "LOESCHEN")
            )

        data = render(de_ctx, register, [{"menu": ["/share", ""]}, {"menu": None}])
        assert data[0]["actions"] == {"0": "/edit", "1": ["/share", False]}
        assert data[1]["actions"] == {"0": "/edit", "1": False}

    def test_menu_item_requires_menu(self, de_ctx: UserContext) -> None:
        builder: TableBuilder[dict] = TableBuilder(de_ctx)
        field = builder.buttons_field("actions", "", lambda r: {})
        with pytest.raises(ValueError, match="add_menu"):
            field.add_menu_item(0, FieldButtonAction.LINK, "open")

    def test_row_hint(self, de_ctx: UserContext) -> None:
        register = lambda b: b.text_field("name", "NAME", lambda r: r["name"]).with_row_hint(lambda r: r["hint"])
        data = render(de_ctx, register, [{"name": "A", "hint": "late"}, {"name": "B", "hint": ""}])
        assert data[0] == {"name": "A", "nameHint": "late"}
        assert data[1] == {"name": "B"}

    def test_html_and_input(self, de_ctx: UserContext) -> None:
        def register(b: TableBuilder) -> None:
            b.html_field("note", "NOTE", lambda r: "<b>x</b>")
            b.input_field("qty", "QTY", lambda r: 3)

        assert render(de_ctx, register, [{}]) == [{"note": "<b>x</b>", "qty": 3}]

    def test_header_never_reads_row(self, de_ctx: UserContext) -> None:
        def register(b: TableBuilder) -> None:
            b.header_field("group", "GROUP")
            b.text_field("name", "NAME", lambda r: r["name"])

        assert render(de_ctx, register, [{"name": "A"}]) == [{"name": "A"}]


class TestTwoLineAndNFields:
    def test_text2_web_pair_and_csv_join(self, de_ctx: UserContext) -> None:
        register = lambda b: b.text2_field("who", "WHO", lambda r: (r["a"], r["b"]))
        rows = [{"a": "Anna", "b": "Driver"}, {"a": "Bob", "b": ""}]
        assert render(de_ctx, register, rows)[0]["who"] == ["Anna", "Driver"]
        csv = render(de_ctx, register, rows, OutputTarget.CSV)
        assert [row["who"] for row in csv] == ["Anna - Driver", "Bob"]

    def test_text2_int_drops_zero_secondary_in_csv(self, de_ctx: UserContext) -> None:
        register = lambda b: b.text2_int_field("n", "N", lambda r: r["n"])
        assert render(de_ctx, register, [{"n": (5, 0)}], OutputTarget.CSV)[0]["n"] == "5"
        assert render(de_ctx, register, [{"n": (5, 0)}])[0]["n"] == ["5", "0"]

    def test_text2_distance_uses_units(self, en_ctx: UserContext) -> None:
        register = lambda b: b.text2_distance_field("d", "D", lambda r: (100, 50))
        assert render(en_ctx, register, [{}])[0]["d"] == ["62.14 mi", "31.07 mi"]

    def test_text2_wrong_arity_raises(self, de_ctx: UserContext) -> None:
        register = lambda b: b.text2_field("who", "WHO", lambda r: "Anna")
        with pytest.raises(TypeError, match="'who'"):
            render(de_ctx, register, [{}])

    def test_n_field_is_list_for_every_target(self, de_ctx: UserContext) -> None:
        register = lambda b: b.distance_n_field("legs", "LEGS", lambda r: r["legs"])
        rows = [{"legs": [1.5, 2]}, {"legs": None}]
        for target in OutputTarget:
            data = render(de_ctx, register, rows, target)
            assert data[0]["legs"] == ["1,50 km", "2,00 km"]
            assert data[1]["legs"] == []


class TestCustomFormatting:
    def test_target_formatter_overrides_only_that_target(self, de_ctx: UserContext) -> None:
        register = lambda b: b.text_field("name", "NAME", lambda r: r["name"]).with_csv_formatter(
            lambda value, row, target, ctx: value.upper()
        )
        assert render(de_ctx, register, [{"name": "abc"}])[0]["name"] == "abc"
        assert render(de_ctx, register, [{"name": "abc"}], OutputTarget.CSV)[0]["name"] == "ABC"

    def test_formatter_reads_sibling_values(self, de_ctx: UserContext) -> None:
        def register(b: TableBuilder) -> None:
            b.text_field("unit", "UNIT", lambda r: r["unit"]).hide()
            b.float_field("value", "VALUE", lambda r: r["value"]).with_formatter(
                lambda value, row, target, ctx: f"{value} {row.get_str('unit')}"
            )

        assert render(de_ctx, register, [{"unit": "l", "value": 3.5}]) == [{"value": ["3.5 l", 3.5]}]
        assert render(de_ctx, register, [{"unit": "l", "value": 3.5}], OutputTarget.CSV) == [
            {"value": "3.5 l"}
        ]

    def test_custom_web_formatter_keeps_numeric_pair(self, de_ctx: UserContext) -> None:
        register = lambda b: b.distance_field("km", "KM", lambda r: r["km"]).with_web_formatter(
            lambda value, row, target, ctx: f"{value} custom"
        )
        assert render(de_ctx, register, [{"km": 196.5}]) == [{"km": ["196.5 custom", 196.5]}]

    def test_custom_formatter_on_text_is_not_paired(self, de_ctx: UserContext) -> None:
        register = lambda b: b.text_field("name", "NAME", lambda r: r["name"]).with_formatter(
            lambda value, row, target, ctx: value.upper()
        )
        assert render(de_ctx, register, [{"name": "abc"}]) == [{"name": "ABC"}]

    def test_per_row_context_override(self, de_ctx: UserContext) -> None:
        register = lambda b: b.distance_field("km", "KM", lambda r: r["km"]).with_context_override(
            lambda row, ctx: ctx.with_units(distance_unit=DistanceUnit.MILES) if row["imperial"] else ctx
        )
        rows = [{"km": 10, "imperial": True}, {"km": 10, "imperial": False}]
        data = render(de_ctx, register, rows, OutputTarget.CSV)
        assert [row["km"] for row in data] == ["6,21 mi", "10,00 km"]


class TestFieldDefinition:
    def test_width_and_min_width_are_exclusive(self, de_ctx: UserContext) -> None:
        builder: TableBuilder[dict] = TableBuilder(de_ctx)
        field = builder.text_field("a", "A", lambda r: r).with_width("120px").with_min_width("80px").field
        assert field.width is None
        assert field.min_width == "80px"

    def test_json_export(self, de_ctx: UserContext, translator: Callable[[str], str]) -> None:
        builder: TableBuilder[dict] = TableBuilder(de_ctx, translator)
        field = (
            builder.distance_field("km", "DISTANZ", lambda r: r["km"])
            .with_footer_sum()
            .with_width("100px")
            .with_sticky()
            .with_access("fleet.read")
            .field
        )
        assert field.to_json(translator) == {
            "id": "km",
            "name": "Distanz",
            "format": "number",
            "align": "right",
            "width": "100px",
            "sticky": True,
            "footer": "sum",
            "access": ["fleet.read"],
        }

    def test_buttons_json_is_indexed_array(self, de_ctx: UserContext) -> None:
        builder: TableBuilder[dict] = TableBuilder(de_ctx)
        field = (
            builder.buttons_field("actions", "", lambda r: {})
            .add_button(0, FieldButtonAction.LINK, "edit", hint="EDIT")
            .add_button(2, FieldButtonAction.DELETE, "delete", FieldColor.WARNING)
            .field
        )
        buttons = field.to_json()["buttons"]
        assert len(buttons) == 3
        assert buttons[0] == {"icon": "edit", "color": "primary", "hint": "EDIT", "action": "link"}
        assert buttons[1] is None
        assert buttons[2]["action"] == "delete"

    def test_icon_json_lists_definitions(self, de_ctx: UserContext) -> None:
        icons = IconSet()
        icons.add("online", "wifi", FieldColor.ACCENT, "ONLINE")
        builder: TableBuilder[dict] = TableBuilder(de_ctx)
        field = builder.icon_field("s", "S", lambda r: r, icons).field
        assert field.to_json()["icons"] == {"online": {"icon": "wifi", "color": "accent", "hint": "ONLINE"}}

    def test_input_json(self, de_ctx: UserContext) -> None:
        builder: TableBuilder[dict] = TableBuilder(de_ctx)
        field = builder.input_field("qty", "QTY", lambda r: r).with_input_type("number").with_input_required().field
        data = field.to_json()
        assert data["inputType"] == "number"
        assert data["inputRequired"] is True
        assert data["search"] is False
        assert data["sort"] is False
