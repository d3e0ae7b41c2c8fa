"""Data models and type aliases for ``budgetflow``.

Domain values (transactions, goals, debts, payoff results) are frozen
dataclasses: every operation in the package returns new instances instead of
mutating caller-owned data. Records read back from the key-value store are
validated through the pydantic DTOs at the bottom of this module before they
are turned into domain values.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

# ---------------------------------------------------------------------------
# Vocabularies
# ---------------------------------------------------------------------------

TransactionCategory = Literal[
    "Food & Dining",
    "Transportation",
    "Shopping",
    "Entertainment",
    "Bills & Utilities",
    "Healthcare",
    "Education",
    "Travel",
    "Investment",
    "Salary",
    "Freelance",
    "Business",
    "Other",
]

CATEGORIES: tuple[TransactionCategory, ...] = (
    "Food & Dining",
    "Transportation",
    "Shopping",
    "Entertainment",
    "Bills & Utilities",
    "Healthcare",
    "Education",
    "Travel",
    "Investment",
    "Salary",
    "Freelance",
    "Business",
    "Other",
)
"""The fixed transaction category labels, in display order."""

TransactionType = Literal["income", "expense"]
TRANSACTION_TYPES: tuple[TransactionType, ...] = ("income", "expense")

GoalCategory = Literal["Emergency Fund", "Vacation", "Investment", "Purchase", "Other"]
GOAL_CATEGORIES: tuple[GoalCategory, ...] = (
    "Emergency Fund",
    "Vacation",
    "Investment",
    "Purchase",
    "Other",
)

DebtType = Literal["Credit Card", "Personal Loan", "Student Loan", "Mortgage", "Other"]
DEBT_TYPES: tuple[DebtType, ...] = (
    "Credit Card",
    "Personal Loan",
    "Student Loan",
    "Mortgage",
    "Other",
)


def validate_category(raw: str | None) -> TransactionCategory:
    """Return the category label matching ``raw`` case-insensitively, else ``"Other"``."""

    wanted = (raw or "").lower()
    for label in CATEGORIES:
        if label.lower() == wanted:
            return label
    return "Other"


# ---------------------------------------------------------------------------
# Core records
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Transaction:
    """A single income or expense entry.

    Attributes
    ----------
    id:
        Opaque identifier, unique within the owning user's collection.
    date:
        Calendar date as an ISO-8601 ``YYYY-MM-DD`` string.
    description:
        Free text.
    amount:
        Non-negative amount. The sign of the money movement is carried by
        ``type``, never by ``amount``.
    category:
        One of :data:`CATEGORIES`.
    type:
        ``"income"`` or ``"expense"``.
    """

    id: str
    date: str
    description: str
    amount: float
    category: TransactionCategory
    type: TransactionType

    def __post_init__(self) -> None:
        if isinstance(self.amount, bool) or not isinstance(self.amount, int | float):
            raise ValueError("Transaction.amount must be a number")
        if math.isnan(self.amount) or self.amount < 0:
            raise ValueError("Transaction.amount must be a non-negative number")
        if self.category not in CATEGORIES:
            raise ValueError(f"Transaction.category must be one of {CATEGORIES}, got {self.category!r}")
        if self.type not in TRANSACTION_TYPES:
            raise ValueError(f"Transaction.type must be 'income' or 'expense', got {self.type!r}")

    @property
    def signed_amount(self) -> float:
        """Amount with expenses negative, income positive."""
        return -self.amount if self.type == "expense" else self.amount


@dataclass(frozen=True, slots=True)
class Goal:
    """A savings goal tracked towards ``target_amount`` by ``target_date``."""

    id: str
    title: str
    description: str
    target_amount: float
    current_amount: float
    target_date: str
    category: GoalCategory
    created_at: str

    def __post_init__(self) -> None:
        if self.target_amount < 0 or self.current_amount < 0:
            raise ValueError("Goal amounts must be non-negative")
        if self.category not in GOAL_CATEGORIES:
            raise ValueError(f"Goal.category must be one of {GOAL_CATEGORIES}, got {self.category!r}")


@dataclass(frozen=True, slots=True)
class Debt:
    """An outstanding debt.

    Only ``balance``, ``interest_rate`` (annual percent, 0-100) and
    ``minimum_payment`` feed the payoff calculator; the remaining fields are
    descriptive.
    """

    id: str
    creditor: str
    balance: float
    interest_rate: float
    minimum_payment: float
    due_date: str
    type: DebtType
    created_at: str

    def __post_init__(self) -> None:
        if self.balance < 0:
            raise ValueError("Debt.balance must be non-negative")
        if not 0 <= self.interest_rate <= 100:
            raise ValueError("Debt.interest_rate must be within [0, 100]")
        if self.minimum_payment < 0:
            raise ValueError("Debt.minimum_payment must be non-negative")
        if self.type not in DEBT_TYPES:
            raise ValueError(f"Debt.type must be one of {DEBT_TYPES}, got {self.type!r}")


# ---------------------------------------------------------------------------
# Payoff results (tagged variant)
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Finite:
    """A reachable payoff: ``months`` fixed payments clear the balance."""

    months: int
    total_interest: float
    total_payment: float

    @property
    def reachable(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Unreachable:
    """The balance can never be repaid with the given fixed payment.

    ``reason`` is ``"no_payment"`` when the payment is not positive and
    ``"interest_exceeds_payment"`` when the payment does not cover the
    monthly interest accrual.
    """

    reason: Literal["no_payment", "interest_exceeds_payment"]

    @property
    def reachable(self) -> bool:
        return False


type PayoffResult = Finite | Unreachable
"""Derived, never persisted. Callers must check for :class:`Unreachable`."""


# ---------------------------------------------------------------------------
# Filtering
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class FilterOptions:
    """Transaction filter; ``None`` / ``"all"`` disables a criterion.

    ``start_date`` and ``end_date`` are inclusive ISO ``YYYY-MM-DD`` bounds.
    """

    category: TransactionCategory | None = None
    type: TransactionType | Literal["all"] = "all"
    start_date: str | None = None
    end_date: str | None = None

    def __post_init__(self) -> None:
        if self.category is not None and self.category not in CATEGORIES:
            raise ValueError(f"FilterOptions.category must be one of {CATEGORIES}")
        if self.type not in (*TRANSACTION_TYPES, "all"):
            raise ValueError("FilterOptions.type must be 'income', 'expense' or 'all'")


type Transactions = Sequence[Transaction]


# ---------------------------------------------------------------------------
# DTOs for persisted JSON
# ---------------------------------------------------------------------------

# Stored JSON uses camelCase keys (``targetAmount``, ``minimumPayment``).


class _StoredRecord(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        str_strip_whitespace=True,
    )


class TransactionRecord(_StoredRecord):
    id: str
    date: str
    description: str
    amount: float
    category: str
    type: TransactionType

    @field_validator("amount")
    @classmethod
    def _non_negative(cls, v: float) -> float:
        if math.isnan(v) or v < 0:
            raise ValueError("amount must be a non-negative number")
        return v

    @classmethod
    def from_domain(cls, tx: Transaction) -> TransactionRecord:
        return cls(
            id=tx.id,
            date=tx.date,
            description=tx.description,
            amount=tx.amount,
            category=tx.category,
            type=tx.type,
        )

    def to_domain(self) -> Transaction:
        return Transaction(
            id=self.id,
            date=self.date,
            description=self.description,
            amount=self.amount,
            category=validate_category(self.category),
            type=self.type,
        )


class GoalRecord(_StoredRecord):
    id: str
    title: str
    description: str = ""
    target_amount: float
    current_amount: float = 0.0
    target_date: str
    category: GoalCategory = "Other"
    created_at: str

    @classmethod
    def from_domain(cls, goal: Goal) -> GoalRecord:
        return cls(
            id=goal.id,
            title=goal.title,
            description=goal.description,
            target_amount=goal.target_amount,
            current_amount=goal.current_amount,
            target_date=goal.target_date,
            category=goal.category,
            created_at=goal.created_at,
        )

    def to_domain(self) -> Goal:
        return Goal(
            id=self.id,
            title=self.title,
            description=self.description,
            target_amount=self.target_amount,
            current_amount=self.current_amount,
            target_date=self.target_date,
            category=self.category,
            created_at=self.created_at,
        )


class DebtRecord(_StoredRecord):
    id: str
    creditor: str
    balance: float
    interest_rate: float
    minimum_payment: float
    due_date: str
    type: DebtType = "Other"
    created_at: str

    @classmethod
    def from_domain(cls, debt: Debt) -> DebtRecord:
        return cls(
            id=debt.id,
            creditor=debt.creditor,
            balance=debt.balance,
            interest_rate=debt.interest_rate,
            minimum_payment=debt.minimum_payment,
            due_date=debt.due_date,
            type=debt.type,
            created_at=debt.created_at,
        )

    def to_domain(self) -> Debt:
        return Debt(
            id=self.id,
            creditor=self.creditor,
            balance=self.balance,
            interest_rate=self.interest_rate,
            minimum_payment=self.minimum_payment,
            due_date=self.due_date,
            type=self.type,
            created_at=self.created_at,
        )


class UserRecord(_StoredRecord):
    """A locally registered user. ``password_hash`` is ``salt$hexdigest``."""

    id: str
    email: str
    name: str | None = None
    created_at: str
    password_hash: str


__all__ = [
    "CATEGORIES",
    "DEBT_TYPES",
    "GOAL_CATEGORIES",
    "TRANSACTION_TYPES",
    "Debt",
    "DebtRecord",
    "DebtType",
    "FilterOptions",
    "Finite",
    "Goal",
    "GoalCategory",
    "GoalRecord",
    "PayoffResult",
    "Transaction",
    "TransactionCategory",
    "TransactionRecord",
    "TransactionType",
    "Transactions",
    "Unreachable",
    "UserRecord",
    "validate_category",
]
