import pytest

from sc_ui.tui.system.components.box_table import (
    DEFAULT_TABLE_STYLE,
    build_table,
    column_widths,
    draw_border,
    stringify,
)

pytestmark = pytest.mark.unit_ui


RECORDS = [
    {"Name": "alpha", "Id": "i-1"},
    {"Name": "b", "Id": "i-22"},
]


def test_two_column_table_renders_exact_lines():
    table = build_table(["Name", "Id"], RECORDS)

    assert table.header == (
        "  ┌───────┬──────┐\n"
        "  │ Name  │ Id   │\n"
        "  ├───────┼──────┤\n"
    )
    assert table.footer == "\n  └───────┴──────┘\n"
    assert [row.line for row in table.rows] == [
        "│ alpha │ i-1  │",
        "│ b     │ i-22 │",
    ]


def test_rows_carry_original_records():
    table = build_table(["Name", "Id"], RECORDS)

    assert table.rows[0].value is RECORDS[0]
    assert table.rows[1].value is RECORDS[1]


def test_width_is_max_of_label_and_values():
    widths = column_widths(["Name", "Id"], RECORDS, ["Instance name", "Id"])

    assert widths == {"Name": len("Instance name"), "Id": 4}


def test_every_line_has_same_display_width():
    records = [{"a": "x" * n, "b": n} for n in range(1, 6)]
    table = build_table(["a", "b"], records, ["A", "Bee"])

    header_lines = table.header.rstrip("\n").split("\n")
    footer_line = table.footer.strip("\n")
    widths = {len(line) for line in header_lines + [footer_line]}
    widths |= {len(row.line) + 2 for row in table.rows}
    assert len(widths) == 1


def test_missing_and_none_values_render_blank():
    table = build_table(["Name", "Ip"], [{"Name": "web", "Ip": None}, {"Name": "db"}])

    assert table.rows[0].line == "│ web  │    │"
    assert table.rows[1].line == "│ db   │    │"
    assert stringify(None) == ""
    assert stringify(0) == "0"


def test_zero_records_still_draw_header_and_footer():
    table = build_table(["Name"], [])

    assert table.rows == ()
    assert table.header.startswith("  ┌──────┐\n")
    assert table.footer == "\n  └──────┘\n"


def test_label_count_mismatch_fails_at_build_time():
    with pytest.raises(ValueError):
        build_table(["Name", "Id"], RECORDS, ["Only one"])


def test_draw_border_uses_charset():
    line = draw_border(["x", "y"], {"x": 1, "y": 2}, DEFAULT_TABLE_STYLE.header_bottom)

    assert line == "├───┼────┤\n"
