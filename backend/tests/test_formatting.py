from datetime import date

import pytest

from invoicedesk.utils.formatting import (
    format_currency,
    format_date_to_local,
    generate_pagination,
    generate_y_axis,
)


@pytest.mark.parametrize(
    "cents, expected",
    [(123456, "$1,234.56"), (0, "$0.00"), (5, "$0.05"), (-500, "-$5.00"), (100000000, "$1,000,000.00")],
)
def test_format_currency(cents, expected):
    assert format_currency(cents) == expected


def test_format_date_to_local():
    assert format_date_to_local(date(2022, 12, 6)) == "Dec 6, 2022"


def test_y_axis_rounds_up_to_next_thousand():
    labels, top = generate_y_axis([2000, 4800, 3100])
    assert top == 5000
    assert labels == ["$5K", "$4K", "$3K", "$2K", "$1K", "$0K"]


def test_y_axis_without_revenue():
    assert generate_y_axis([]) == (["$0K"], 0)


@pytest.mark.parametrize(
    "current, total, expected",
    [
        (1, 0, []),
        (1, 5, [1, 2, 3, 4, 5]),
        (2, 10, [1, 2, 3, "...", 9, 10]),
        (9, 10, [1, 2, "...", 8, 9, 10]),
        (5, 10, [1, "...", 4, 5, 6, "...", 10]),
    ],
)
def test_generate_pagination(current, total, expected):
    assert generate_pagination(current, total) == expected
