"""Display helpers shared by the dashboard endpoints."""
import math
from datetime import date
from decimal import Decimal
from typing import List, Sequence, Tuple, Union

ELLIPSIS = "..."


def format_currency(cents: int) -> str:
    """Render minor units as US dollars, e.g. 123456 -> "$1,234.56"."""
    dollars = Decimal(cents or 0) / 100
    sign = "-" if dollars < 0 else ""
    return f"{sign}${abs(dollars):,.2f}"


def format_date_to_local(value: date) -> str:
    """e.g. "Dec 6, 2022"."""
    return f"{value:%b} {value.day}, {value.year}"


def generate_y_axis(revenue: Sequence[int]) -> Tuple[List[str], int]:
    """Chart labels in $1K steps from the top of the range down to $0K."""
    highest = max(revenue, default=0)
    top_label = math.ceil(highest / 1000) * 1000
    labels = [f"${i // 1000}K" for i in range(top_label, -1, -1000)]
    return labels, top_label


def generate_pagination(current_page: int, total_pages: int) -> List[Union[int, str]]:
    """Page links to show, with ``...`` standing in for skipped runs."""
    if total_pages <= 7:
        return list(range(1, total_pages + 1))

    if current_page <= 3:
        return [1, 2, 3, ELLIPSIS, total_pages - 1, total_pages]

    if current_page >= total_pages - 2:
        return [1, 2, ELLIPSIS, total_pages - 2, total_pages - 1, total_pages]

    return [
        1,
        ELLIPSIS,
        current_page - 1,
        current_page,
        current_page + 1,
        ELLIPSIS,
        total_pages,
    ]
