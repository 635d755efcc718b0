from __future__ import annotations

import logging
import math
from datetime import datetime, timedelta

from chameleon_app.core import catalog
from chameleon_app.core.errors import InsufficientFundsError, PreconditionError, UnknownIntentError, ValidationError
from chameleon_app.core.state import Expense, GameState

LOGGER = logging.getLogger(__name__)


def whole_dollars(raw: int | float) -> int:
    if isinstance(raw, int):
        return int(raw)
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid amount: {raw!r}") from None
    if not math.isfinite(value) or not value.is_integer():
        raise ValidationError(f"Amount must be a whole number of dollars: {raw!r}")
    return int(value)


class EconomyLedger:
    """Balance, earned/spent totals and the capped expense log of one game state."""

    def __init__(self, state: GameState, now: datetime, log_cap: int = catalog.EXPENSE_LOG_CAP) -> None:
        self.state = state
        self.now = now
        self.log_cap = max(1, int(log_cap))

    @property
    def balance(self) -> int:
        return self.state.finances.balance

    def can_afford(self, amount: int) -> bool:
        return self.state.finances.balance >= whole_dollars(amount)

    def charge(self, amount: int, category: str, description: str) -> bool:
        amount = whole_dollars(amount)
        if amount < 0:
            raise ValidationError("Charge amount cannot be negative.")
        if category not in catalog.EXPENSE_CATEGORIES:
            raise ValidationError(f"Unknown expense category: {category}")
        if not self.can_afford(amount):
            return False

        finances = self.state.finances
        finances.balance -= amount
        finances.total_spent += amount
        expense = Expense(category=category, description=description, amount=amount, timestamp=self.now)
        finances.expenses.insert(0, expense)
        del finances.expenses[self.log_cap :]
        LOGGER.debug("charged amount=%s category=%s balance=%s", amount, category, finances.balance)
        return True

    def require_charge(self, amount: int, category: str, description: str) -> None:
        if not self.charge(amount, category, description):
            raise InsufficientFundsError(needed=whole_dollars(amount), balance=self.balance)

    def credit(self, amount: int, source_id: str) -> int:
        amount = whole_dollars(amount)
        if amount <= 0:
            raise ValidationError("Earned amount must be positive.")
        source = str(source_id).strip()
        if not source:
            raise ValidationError("A chore id is required to earn money.")

        finances = self.state.finances
        finances.balance += amount
        finances.total_earned += amount
        self.state.completed_chores.append(source)
        LOGGER.debug("credited amount=%s source=%s balance=%s", amount, source, finances.balance)
        return amount


def chore_cooldown_remaining(state: GameState, chore_id: str, now: datetime) -> timedelta:
    chore = catalog.CHORES.get(chore_id)
    last_done = state.chore_last_completed.get(chore_id)
    if chore is None or last_done is None:
        return timedelta(0)
    remaining = last_done + timedelta(minutes=chore.cooldown_minutes) - now
    return max(timedelta(0), remaining)


def complete_chore(state: GameState, chore_id: str, now: datetime) -> int:
    chore = catalog.CHORES.get(chore_id)
    if chore is None:
        raise UnknownIntentError(f"Unknown chore: {chore_id}")
    remaining = chore_cooldown_remaining(state, chore_id, now)
    if remaining > timedelta(0):
        minutes = int(-(-remaining.total_seconds() // 60))
        raise PreconditionError(f"{chore.name} is on cooldown for {minutes} more minute(s).")

    EconomyLedger(state, now).credit(chore.reward, chore.id)
    state.chore_last_completed[chore.id] = now
    return chore.reward
