from typing import Sequence

from .models import StatementSummary, Transaction


def summarize(
    transactions: Sequence[Transaction], start_date: str = "", end_date: str = ""
) -> StatementSummary:
    """Derive income/expense/balance totals from a transaction list.

    The period bounds are passed through as given; they are never re-derived
    from the transactions. ``balance`` is the balance of the last transaction
    in the sequence as supplied, so the caller's ordering matters.
    """
    total_income = sum((t.money_in for t in transactions if t.money_in is not None), 0.0)
    total_expenses = sum(
        (abs(t.money_out) for t in transactions if t.money_out is not None), 0.0
    )
    balance = transactions[-1].balance if transactions else 0.0

    return StatementSummary(
        total_income=total_income,
        total_expenses=total_expenses,
        balance=balance,
        start_date=start_date,
        end_date=end_date,
    )
