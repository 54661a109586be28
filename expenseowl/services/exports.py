"""Export renderers for the download endpoints.

CSV is deliberately minimal: commas inside a name become semicolons and
nothing else is quoted, so a line splits into exactly five fields as long
as the category has no comma.
"""

from __future__ import annotations

import json
from typing import Iterable, List

from expenseowl.models import Expense
from expenseowl.models.constants import CSV_DATE_FORMAT, CSV_HEADER, JSON_EXPORT_INDENT


def csv_line(expense: Expense) -> str:
    return "{},{},{},{:.2f},{}\n".format(
        expense.id,
        expense.name.replace(",", ";"),
        expense.category,
        expense.amount,
        expense.date.strftime(CSV_DATE_FORMAT) if expense.date else "",
    )


def render_csv(expenses: Iterable[Expense]) -> str:
    return CSV_HEADER + "\n" + "".join(csv_line(e) for e in expenses)


def render_json(expenses: List[Expense]) -> str:
    """Serialize with 4-space indentation; raises TypeError/ValueError on failure."""
    return json.dumps(
        [e.model_dump(mode="json") for e in expenses], indent=JSON_EXPORT_INDENT
    )
