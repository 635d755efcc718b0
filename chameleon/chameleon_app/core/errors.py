from __future__ import annotations


class GameRuleError(Exception):
    """A player intent was refused. State is left untouched."""

    kind = "rule"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(GameRuleError):
    kind = "validation"


class InsufficientFundsError(GameRuleError):
    kind = "insufficient_funds"

    def __init__(self, needed: int, balance: int) -> None:
        super().__init__(
            f"You need ${needed} but only have ${balance}. Complete chores to earn more!"
        )
        self.needed = needed
        self.balance = balance


class PreconditionError(GameRuleError):
    kind = "precondition"


class UnknownIntentError(GameRuleError):
    kind = "unknown"
