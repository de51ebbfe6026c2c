"""
Tests for the price-calculate command line, run against the bundled sample data.
"""
from datetime import datetime

import pytest

from pricing_calculator.cli import EXIT_DATA_ERROR, EXIT_NOT_FOUND, EXIT_OK, format_price, main
from pricing_calculator.config.settings import get_sample_data_dir

from test_repository import write_data


NOW = datetime(2026, 6, 15, 12, 0, 0)
SAMPLE = str(get_sample_data_dir())


def run(capsys, *args):
    code = main(["--data-dir", SAMPLE, *args], now=NOW)
    out, err = capsys.readouterr()
    return code, out, err


def test_prints_valid_modifiers_and_best_price(capsys):
    code, out, _ = run(capsys, "--product", "1", "--venue", "1", "--member", "2")

    assert code == EXIT_OK
    assert "Product 1: Off-peak Squash Court" in out
    assert "Venue 1: Kelvin Hall (Glasgow)" in out
    assert "Member 2: Sam Taylor (silver member, 24 years old)" in out
    assert "Original product price: £10.00" in out
    assert "The conditions were met for the following pricing modifiers:" in out
    assert "Under 25s 20% off" in out
    assert "Glasgow flat rate" in out
    assert out.strip().endswith("Best price: £3.00")


def test_table_lists_modifiers_in_evaluation_order(capsys):
    _, out, _ = run(capsys, "--product", "1", "--venue", "1", "--member", "2")

    assert out.index("Under 25s 20% off") < out.index("Glasgow flat rate")


def test_reports_when_no_modifiers_apply(capsys):
    code, out, _ = run(capsys, "--product", "1", "--venue", "3", "--member", "3")

    assert code == EXIT_OK
    assert "No valid pricing modifiers for this product/venue/member combination." in out
    assert "Best price: £10.00" in out


def test_unknown_entity_exits_with_error(capsys):
    code, out, err = run(capsys, "--product", "999", "--venue", "1", "--member", "1")

    assert code == EXIT_NOT_FOUND
    assert "No product found with ID 999" in err
    assert "Best price" not in out


def test_random_selection_when_ids_omitted(capsys):
    code, out, _ = run(capsys, "--seed", "5")

    assert code == EXIT_OK
    assert out.startswith("Product ")
    assert "Best price: £" in out


def test_invalid_stored_modifier_exits_with_data_error(tmp_path, capsys):
    write_data(
        tmp_path,
        modifiers="id,name,conditions,adjustment_type,adjustment_value\n1,Bad,{},percent,10\n",
        links="pricing_option_id,pricing_modifier_id,valid_from,valid_to,active\n1,1,2020-01-01,,true\n",
    )

    code = main(["--data-dir", str(tmp_path), "--product", "1", "--venue", "1", "--member", "1"], now=NOW)
    _, err = capsys.readouterr()

    assert code == EXIT_DATA_ERROR
    assert "percent" in err


@pytest.mark.parametrize("conditions", [
    "not json",
    "\"{\"\"venue_locations\"\": \"\"Glasgow\"\"}\"",
    "\"{\"\"age_range\"\": [18, 25]}\"",
], ids=["invalid json", "locations as string", "age range as list"])
def test_malformed_stored_conditions_exit_with_data_error(tmp_path, capsys, conditions):
    write_data(
        tmp_path,
        modifiers=f"id,name,conditions,adjustment_type,adjustment_value\n1,Bad,{conditions},override,1\n",
        links="pricing_option_id,pricing_modifier_id,valid_from,valid_to,active\n1,1,2020-01-01,,true\n",
    )

    code = main(["--data-dir", str(tmp_path), "--product", "1", "--venue", "1", "--member", "1"], now=NOW)
    out, err = capsys.readouterr()

    assert code == EXIT_DATA_ERROR
    assert "Invalid pricing modifier data" in err
    assert "Best price" not in out


@pytest.mark.parametrize("price, expected", [
    ("3", "£3.00"),
    ("0", "£0.00"),
    ("1234.5", "£1,234.50"),
])
def test_format_price(price, expected):
    from decimal import Decimal

    assert format_price(Decimal(price)) == expected
