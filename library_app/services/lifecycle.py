"""
Borrowing state rules as plain functions over dates.

Status is never trusted from storage: every reader goes through
``derive_status``. Fines are display values and are not persisted.
"""
from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal
from typing import Optional

from library_app.models.borrowing import STATUS_BORROWED, STATUS_OVERDUE, STATUS_RETURNED
from library_app.services.policy import LoanPolicy

WEEK = 7


def due_date_for(borrow_date: date, policy: LoanPolicy) -> date:
    return borrow_date + timedelta(days=policy.loan_period_days)


def derive_status(borrow_date: date, due_date: date, return_date: Optional[date], today: date) -> str:
    """
    returned -> return_date set, whatever the timing
    overdue  -> not returned and today is past due_date
    borrowed -> otherwise
    """
    if return_date is not None:
        return STATUS_RETURNED
    if today > due_date:
        return STATUS_OVERDUE
    return STATUS_BORROWED


def days_overdue(due_date: date, return_date: Optional[date], today: date) -> int:
    """Days past due, counted up to the return date if there is one. No grace period."""
    end = return_date if return_date is not None else today
    return max(0, (end - due_date).days)


def compute_fine(due_date: date, return_date: Optional[date], today: date, policy: LoanPolicy) -> Decimal:
    """
    Tiered daily fee:
    - days 1..7   -> fine_rate_week1
    - days 8..14  -> fine_rate_week2
    - days 15..   -> fine_rate_week3
    """
    days = days_overdue(due_date, return_date, today)
    if days <= 0:
        return Decimal("0.00")

    week1 = min(days, WEEK)
    week2 = min(max(days - WEEK, 0), WEEK)
    rest = max(days - 2 * WEEK, 0)

    amount = (
        policy.fine_rate_week1 * week1
        + policy.fine_rate_week2 * week2
        + policy.fine_rate_week3 * rest
    )
    return amount.quantize(Decimal("0.01"))


def needs_escalation(due_date: date, return_date: Optional[date], today: date, policy: LoanPolicy) -> bool:
    if return_date is not None:
        return False
    return days_overdue(due_date, None, today) > policy.escalation_after_days
