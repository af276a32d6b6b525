from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping


def _as_flag(value: Any) -> bool:
    # env-sourced config arrives as text; "0" and "false" are off
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes")
    return bool(value)


@dataclass(frozen=True)
class LoanPolicy:
    """Circulation rules, built once from app config and handed to services."""

    loan_period_days: int = 7
    fine_rate_week1: Decimal = Decimal("0.50")
    fine_rate_week2: Decimal = Decimal("1.00")
    fine_rate_week3: Decimal = Decimal("2.00")
    escalation_after_days: int = 21
    rating_min: int = 1
    rating_max: int = 10
    refuse_frozen_borrowers: bool = True

    def __post_init__(self):
        if self.loan_period_days <= 0:
            raise ValueError("loan_period_days must be positive")
        if self.rating_min > self.rating_max:
            raise ValueError("rating_min must not exceed rating_max")

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "LoanPolicy":
        defaults = cls()
        return cls(
            loan_period_days=int(config.get("LOAN_PERIOD_DAYS", defaults.loan_period_days)),
            fine_rate_week1=Decimal(str(config.get("FINE_RATE_WEEK1", defaults.fine_rate_week1))),
            fine_rate_week2=Decimal(str(config.get("FINE_RATE_WEEK2", defaults.fine_rate_week2))),
            fine_rate_week3=Decimal(str(config.get("FINE_RATE_WEEK3", defaults.fine_rate_week3))),
            escalation_after_days=int(config.get("ESCALATION_AFTER_DAYS", defaults.escalation_after_days)),
            rating_min=int(config.get("RATING_MIN", defaults.rating_min)),
            rating_max=int(config.get("RATING_MAX", defaults.rating_max)),
            refuse_frozen_borrowers=_as_flag(config.get("REFUSE_FROZEN_BORROWERS", defaults.refuse_frozen_borrowers)),
        )
