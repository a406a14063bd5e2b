from __future__ import annotations

from datetime import datetime

from fintable.models.layout import ColumnLayout
from fintable.services.category_keys import build_category_key, category_label, extract_display_value, period_key


def test_extract_display_value_fallback_chain():
    assert extract_display_value({"name": {"en": "Revenue", "fr": "Recettes"}}, "fr") == "Recettes"
    assert extract_display_value({"name": "", "label": "Label"}, "en") == "Label"
    assert extract_display_value({"id": 7}, "en") == "7"
    assert extract_display_value(None, "en") == ""
    assert extract_display_value(12, "en") == "12"


def test_timestamp_levels_become_dates():
    # 2024-01-01T00:00:00Z in epoch milliseconds
    assert category_label(1704067200000, "datetime", "en") == "2024-01-01"
    assert category_label(datetime(2024, 3, 5, 12, 30), "date", "en") == "2024-03-05"
    assert category_label({"id": 1704067200000}, "timestamp", "en") == "2024-01-01"


def test_non_timestamp_numbers_stay_numbers():
    assert category_label(1704067200000, "hierarchy", "en") == "1704067200000"


def test_build_category_key_joins_labels():
    layout = ColumnLayout(has_order=True, category_levels=2, measure_count=1)
    key = build_category_key(["2024-01", 1, "Revenue", {"name": "Sales"}, 5], layout)
    assert key.key == "Revenue || Sales"
    assert key.labels == ("Revenue", "Sales")


def test_build_category_key_custom_separator_and_localize():
    layout = ColumnLayout(has_order=False, category_levels=2, measure_count=1)
    key = build_category_key(
        ["2024-01", "a", "b", 5],
        layout,
        separator="/",
        localize_fn=lambda value, language: str(value).upper(),
    )
    assert key.key == "A/B"


def test_zero_levels_give_empty_key():
    layout = ColumnLayout(has_order=False, category_levels=0, measure_count=2)
    key = build_category_key(["2024-01", 1, 2], layout)
    assert key.key == ""
    assert key.labels == ()


def test_period_key_uses_id_then_display_name():
    assert period_key({"id": "2024-01", "name": {"en": "Jan"}}, "en") == "2024-01"
    assert period_key({"name": {"en": "Jan", "fr": "Janv."}}, "fr") == "Janv."
    assert period_key("2024-03", "en") == "2024-03"
    assert period_key(202401, "en") == 202401
