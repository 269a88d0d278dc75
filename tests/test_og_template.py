import datetime as dt

import pytest

from blogsite.og.template import DEFAULT_BRAND, OgData, build_layout, coerce_date, format_og_date

UTC = dt.timezone.utc


class TestCoerceDate:
    def test_date_string_is_midnight_utc(self):
        assert coerce_date("2024-01-15") == dt.datetime(2024, 1, 15, tzinfo=UTC)

    def test_datetime_string_with_offset_converts_to_utc(self):
        assert coerce_date("2024-01-15T22:00:00-05:00") == dt.datetime(2024, 1, 16, 3, tzinfo=UTC)

    def test_naive_datetime_is_read_as_utc(self):
        assert coerce_date(dt.datetime(2024, 1, 15, 8)) == dt.datetime(2024, 1, 15, 8, tzinfo=UTC)

    def test_date(self):
        assert coerce_date(dt.date(2024, 1, 15)) == dt.datetime(2024, 1, 15, tzinfo=UTC)

    def test_epoch_milliseconds(self):
        assert coerce_date(86_400_000) == dt.datetime(1970, 1, 2, tzinfo=UTC)

    def test_invalid_string_raises(self):
        with pytest.raises(ValueError):
            coerce_date("not a date")

    def test_unsupported_type_raises(self):
        with pytest.raises(TypeError):
            coerce_date(["2024-01-15"])


@pytest.mark.parametrize(
    "value, expected",
    [
        (dt.date(2024, 3, 2), "March 2, 2024"),
        (dt.datetime(2023, 12, 31, 23, 59), "December 31, 2023"),
        (dt.datetime(2024, 3, 2, 22, 0, tzinfo=dt.timezone(dt.timedelta(hours=-5))), "March 3, 2024"),
    ],
)
def test_format_og_date(value, expected):
    assert format_og_date(value) == expected


def _data(tags=None):
    return OgData(title="T", description="D", date=coerce_date("2024-03-02"), tags=tags)


def test_layout_order_without_tags():
    layout = build_layout(_data())
    assert [block.kind for block in layout.blocks] == ["text", "text", "text", "text"]
    assert layout.texts() == [DEFAULT_BRAND, "T", "D", "March 2, 2024"]


def test_layout_includes_tags_and_date():
    layout = build_layout(_data(tags=("go", "rust")))
    texts = layout.texts()
    assert "go" in texts
    assert "rust" in texts
    assert "March 2, 2024" in texts
    tag_block = layout.blocks[3]
    assert tag_block.kind == "tags"
    assert tag_block.items == ("go", "rust")
    assert tag_block.pill_radius > 0


def test_empty_tags_render_no_tag_row():
    layout = build_layout(_data(tags=()))
    assert all(block.kind == "text" for block in layout.blocks)


def test_title_and_description_are_centered_and_description_is_lighter():
    layout = build_layout(_data(), brand="DB")
    brand, title, description, date = layout.blocks
    assert brand.text == "DB"
    assert title.align == description.align == "center"
    assert description.color != title.color
    assert date.font_size < title.font_size
