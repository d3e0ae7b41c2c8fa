# ruff: noqa: I001
"""CLI for the ``budgetflow`` package.

This module exposes callable command handlers (``cmd_import_csv``,
``cmd_payoff``, ...) and a Typer-based console interface on top of them.
Environment variables (``BUDGETFLOW_DATABASE_URL``, ``BUDGETFLOW_LOG_LEVEL``,
``BUDGETFLOW_SEED_SAMPLES``) are loaded from a local ``.env`` using
``python-dotenv`` before any command runs. Business logic lives in the
library modules; handlers only parse, call and print.

Every handler returns a process exit code: ``0`` on success, ``1`` after
printing ``Error: ...`` to stderr.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Annotated, Any

import typer
from dotenv import load_dotenv
from typer.models import ArgumentInfo

from .logging_setup import configure_logging, get_logger

logger = get_logger("budgetflow.cli")


@dataclass(frozen=True, slots=True)
class _Options:
    database_url: str | None = None
    seed_samples: bool | None = None


# ---- Small module-level helpers used by CLI commands -------------------------


def _err(message: str) -> int:
    print(f"Error: {message}", file=sys.stderr)
    return 1


def _current_user_id(database_url: str | None) -> str | None:
    from .accounts import Accounts
    from .storage import KeyValueStore

    user = Accounts(KeyValueStore(database_url=database_url)).current_user()
    return user.id if user else None


def _stores(database_url: str | None, seed_samples: bool | None):
    from .storage import open_stores

    return open_stores(
        user_id=_current_user_id(database_url),
        database_url=database_url,
        seed_samples=seed_samples,
    )


def _iso_date(raw: str, what: str) -> str:
    from .ingest.delimited import parse_date

    parsed = parse_date(raw)
    if parsed is None:
        raise ValueError(f"invalid {what}: {raw!r}")
    return parsed.isoformat()


def _pick(raw: str, allowed: tuple[str, ...], what: str) -> str:
    for label in allowed:
        if label.lower() == raw.strip().lower():
            return label
    raise ValueError(f"{what} must be one of: {', '.join(allowed)}")


def _edit(store, item_id: str, what: str, changes: dict[str, Any]) -> int:
    from dataclasses import replace

    item = store.get(item_id)
    if item is None:
        return _err(f"No {what} with id {item_id}")
    changes = {k: v for k, v in changes.items() if v is not None}
    if not changes:
        return _err("nothing to change; pass at least one option")
    try:
        replace(item, **changes)
    except ValueError as e:
        return _err(str(e))
    store.update(item_id, **changes)
    print(f"Updated {what} {item_id}")
    return 0


def _format_payoff(result) -> str:
    from .calculations import format_currency
    from .models import Unreachable

    if isinstance(result, Unreachable):
        if result.reason == "no_payment":
            return "Payoff impossible: the monthly payment must be positive."
        return (
            "Minimum payment does not cover monthly interest. "
            "Increase payment to start reducing balance."
        )
    years, months = divmod(result.months, 12)
    span = f"{years}y {months}m" if years else f"{months}m"
    return (
        f"Payoff in {result.months} months ({span}); "
        f"total interest {format_currency(result.total_interest)}; "
        f"total paid {format_currency(result.total_payment)}"
    )


# ---- Command handlers ---------------------------------------------------------


def cmd_import_csv(
    csv_path: str,
    *,
    database_url: str | None = None,
    seed_samples: bool | None = None,
    dry_run: bool = False,
) -> int:
    """Import a bank CSV export into the current user's transactions.

    With ``dry_run`` the first five parsed transactions are printed and
    nothing is stored.
    """

    from .calculations import format_currency
    from .errors import ImportFailedError
    from .ingest.utils import load_transactions_from_csv

    try:
        result = load_transactions_from_csv(csv_path)
    except FileNotFoundError:
        return _err(f"File not found: {csv_path}")
    except PermissionError:
        return _err(f"Permission denied: {csv_path}")
    except UnicodeDecodeError as e:
        return _err(f"Failed to decode CSV as UTF-8: {e}")
    except ImportFailedError as e:
        return _err(str(e))

    if dry_run:
        for t in result.transactions[:5]:
            print(f"{t.date}\t{t.type}\t{format_currency(t.amount)}\t{t.category}\t{t.description}")
        print(f"{len(result.transactions)} transaction(s) ready; {len(result.skipped)} row(s) skipped")
        return 0

    stores = _stores(database_url, seed_samples)
    stores.transactions.add_many(result.transactions)
    print(f"Imported {len(result.transactions)} transaction(s); skipped {len(result.skipped)} row(s)")
    return 0


def cmd_payoff(balance: float, annual_rate: float, monthly_payment: float) -> int:
    """Print the payoff plan for a single debt."""

    from .debts import calculate_payoff

    if balance <= 0:
        return _err("balance must be positive")
    if not 0 <= annual_rate <= 100:
        return _err("interest rate must be between 0 and 100")
    print(_format_payoff(calculate_payoff(balance, annual_rate, monthly_payment)))
    return 0


def cmd_list_transactions(
    *,
    database_url: str | None = None,
    seed_samples: bool | None = None,
    category: str | None = None,
    tx_type: str = "all",
    start_date: str | None = None,
    end_date: str | None = None,
) -> int:
    from .calculations import filter_transactions, format_currency, total_expenses, total_income
    from .models import CATEGORIES, FilterOptions

    try:
        options = FilterOptions(
            category=_pick(category, CATEGORIES, "category") if category else None,
            type=_pick(tx_type, ("income", "expense", "all"), "type"),
            start_date=_iso_date(start_date, "start date") if start_date else None,
            end_date=_iso_date(end_date, "end date") if end_date else None,
        )
    except ValueError as e:
        return _err(str(e))

    rows = filter_transactions(_stores(database_url, seed_samples).transactions.load(), options)
    for t in rows:
        sign = "-" if t.type == "expense" else "+"
        print(f"{t.id}\t{t.date}\t{sign}{format_currency(t.amount)}\t{t.category}\t{t.description}")
    print(
        f"{len(rows)} transaction(s); income {format_currency(total_income(rows))}; "
        f"expenses {format_currency(total_expenses(rows))}"
    )
    return 0


def cmd_add_transaction(
    *,
    tx_date: str,
    description: str,
    amount: float,
    category: str,
    tx_type: str,
    database_url: str | None = None,
    seed_samples: bool | None = None,
) -> int:
    from .models import CATEGORIES, TRANSACTION_TYPES, Transaction
    from .storage import new_id

    try:
        tx = Transaction(
            id=new_id(),
            date=_iso_date(tx_date, "date"),
            description=description.strip() or "Untitled",
            amount=abs(amount),
            category=_pick(category, CATEGORIES, "category"),
            type=_pick(tx_type, TRANSACTION_TYPES, "type"),
        )
    except ValueError as e:
        return _err(str(e))
    if tx.amount == 0:
        return _err("amount must be non-zero")

    _stores(database_url, seed_samples).transactions.add(tx)
    print(tx.id)
    return 0


def cmd_edit_transaction(
    tx_id: str,
    *,
    tx_date: str | None = None,
    description: str | None = None,
    amount: float | None = None,
    category: str | None = None,
    tx_type: str | None = None,
    database_url: str | None = None,
    seed_samples: bool | None = None,
) -> int:
    """Change the given fields of one transaction; ``None`` leaves a field as is."""

    from .models import CATEGORIES, TRANSACTION_TYPES

    if amount is not None and amount == 0:
        return _err("amount must be non-zero")
    try:
        changes = {
            "date": _iso_date(tx_date, "date") if tx_date else None,
            "description": (description.strip() or "Untitled") if description is not None else None,
            "amount": abs(amount) if amount is not None else None,
            "category": _pick(category, CATEGORIES, "category") if category else None,
            "type": _pick(tx_type, TRANSACTION_TYPES, "type") if tx_type else None,
        }
    except ValueError as e:
        return _err(str(e))
    return _edit(_stores(database_url, seed_samples).transactions, tx_id, "transaction", changes)


def cmd_delete_transaction(
    tx_id: str, *, database_url: str | None = None, seed_samples: bool | None = None
) -> int:
    store = _stores(database_url, seed_samples).transactions
    if store.get(tx_id) is None:
        return _err(f"No transaction with id {tx_id}")
    store.delete(tx_id)
    return 0


def cmd_list_debts(
    *,
    database_url: str | None = None,
    seed_samples: bool | None = None,
    today: date | None = None,
) -> int:
    from .calculations import format_currency
    from .debts import debt_payoff, due_status, summarize_debts

    debts = _stores(database_url, seed_samples).debts.load()
    for d in debts:
        try:
            status = due_status(d, today)
        except ValueError:
            status = "unknown due date"
        print(
            f"{d.id}\t{d.creditor}\t{d.type}\t{format_currency(d.balance)}\t"
            f"{d.interest_rate}% APR\tmin {format_currency(d.minimum_payment)}\t"
            f"due {d.due_date} ({status})"
        )
        print(f"\t{_format_payoff(debt_payoff(d))}")
    summary = summarize_debts(debts)
    print(
        f"Total debt {format_currency(summary.total_balance)}; "
        f"monthly payments {format_currency(summary.total_minimum_payments)}; "
        f"avg. interest {summary.average_interest_rate:.1f}%"
    )
    return 0


def cmd_add_debt(
    *,
    creditor: str,
    balance: float,
    interest_rate: float,
    minimum_payment: float,
    due_date: str,
    debt_type: str,
    database_url: str | None = None,
    seed_samples: bool | None = None,
) -> int:
    from datetime import UTC, datetime

    from .models import DEBT_TYPES, Debt
    from .storage import new_id

    try:
        debt = Debt(
            id=new_id(),
            creditor=creditor.strip(),
            balance=balance,
            interest_rate=interest_rate,
            minimum_payment=minimum_payment,
            due_date=_iso_date(due_date, "due date"),
            type=_pick(debt_type, DEBT_TYPES, "debt type"),
            created_at=datetime.now(UTC).isoformat(),
        )
    except ValueError as e:
        return _err(str(e))

    _stores(database_url, seed_samples).debts.add(debt)
    print(debt.id)
    return 0


def cmd_pay_debt(
    debt_id: str,
    amount: float,
    *,
    database_url: str | None = None,
    seed_samples: bool | None = None,
) -> int:
    from .calculations import format_currency
    from .debts import apply_payment

    store = _stores(database_url, seed_samples).debts
    debt = store.get(debt_id)
    if debt is None:
        return _err(f"No debt with id {debt_id}")
    try:
        paid = apply_payment(debt, amount)
    except ValueError as e:
        return _err(str(e))
    store.update(debt_id, balance=paid.balance)
    print(f"{debt.creditor}: balance {format_currency(paid.balance)}")
    return 0


def cmd_plan_debts(
    strategy: str, *, database_url: str | None = None, seed_samples: bool | None = None
) -> int:
    from .calculations import format_currency
    from .debts import payoff_order

    try:
        ordered = payoff_order(_stores(database_url, seed_samples).debts.load(), strategy)  # type: ignore[arg-type]
    except ValueError as e:
        return _err(str(e))
    for pos, d in enumerate(ordered, start=1):
        focus = "\tFocus Here" if pos == 1 else ""
        print(
            f"{pos}. {d.creditor}\t{format_currency(d.balance)}\t{d.interest_rate}% APR\t"
            f"min {format_currency(d.minimum_payment)}{focus}"
        )
    return 0


def cmd_edit_debt(
    debt_id: str,
    *,
    creditor: str | None = None,
    balance: float | None = None,
    interest_rate: float | None = None,
    minimum_payment: float | None = None,
    due_date: str | None = None,
    debt_type: str | None = None,
    database_url: str | None = None,
    seed_samples: bool | None = None,
) -> int:
    from .models import DEBT_TYPES

    try:
        changes = {
            "creditor": creditor.strip() if creditor is not None else None,
            "balance": balance,
            "interest_rate": interest_rate,
            "minimum_payment": minimum_payment,
            "due_date": _iso_date(due_date, "due date") if due_date else None,
            "type": _pick(debt_type, DEBT_TYPES, "debt type") if debt_type else None,
        }
    except ValueError as e:
        return _err(str(e))
    return _edit(_stores(database_url, seed_samples).debts, debt_id, "debt", changes)


def cmd_delete_debt(
    debt_id: str, *, database_url: str | None = None, seed_samples: bool | None = None
) -> int:
    store = _stores(database_url, seed_samples).debts
    if store.get(debt_id) is None:
        return _err(f"No debt with id {debt_id}")
    store.delete(debt_id)
    return 0


def cmd_list_goals(
    *,
    database_url: str | None = None,
    seed_samples: bool | None = None,
    today: date | None = None,
) -> int:
    from .calculations import format_currency
    from .goals import days_remaining, goal_status, progress_percentage

    for g in _stores(database_url, seed_samples).goals.load():
        try:
            days = days_remaining(g, today)
            status = goal_status(g, today)
        except ValueError:
            days, status = 0, "unknown target date"
        when = f"{abs(days)} days overdue" if days < 0 else f"{days} days remaining"
        print(
            f"{g.id}\t{g.title}\t{format_currency(g.current_amount)} of "
            f"{format_currency(g.target_amount)} ({progress_percentage(g):.1f}%)\t"
            f"{status}\t{when}"
        )
    return 0


def cmd_add_goal(
    *,
    title: str,
    target_amount: float,
    target_date: str,
    category: str,
    description: str = "",
    current_amount: float = 0.0,
    database_url: str | None = None,
    seed_samples: bool | None = None,
) -> int:
    from datetime import UTC, datetime

    from .models import GOAL_CATEGORIES, Goal
    from .storage import new_id

    if target_amount <= 0:
        return _err("target amount must be positive")
    try:
        goal = Goal(
            id=new_id(),
            title=title.strip(),
            description=description.strip(),
            target_amount=target_amount,
            current_amount=current_amount,
            target_date=_iso_date(target_date, "target date"),
            category=_pick(category, GOAL_CATEGORIES, "goal category"),
            created_at=datetime.now(UTC).isoformat(),
        )
    except ValueError as e:
        return _err(str(e))

    _stores(database_url, seed_samples).goals.add(goal)
    print(goal.id)
    return 0


def cmd_contribute_goal(
    goal_id: str,
    amount: float,
    *,
    database_url: str | None = None,
    seed_samples: bool | None = None,
) -> int:
    from .goals import contribute, progress_percentage

    store = _stores(database_url, seed_samples).goals
    goal = store.get(goal_id)
    if goal is None:
        return _err(f"No goal with id {goal_id}")
    try:
        updated = contribute(goal, amount)
    except ValueError as e:
        return _err(str(e))
    store.update(goal_id, current_amount=updated.current_amount)
    print(f"{updated.title}: {progress_percentage(updated):.1f}%")
    return 0


def cmd_edit_goal(
    goal_id: str,
    *,
    title: str | None = None,
    description: str | None = None,
    target_amount: float | None = None,
    current_amount: float | None = None,
    target_date: str | None = None,
    category: str | None = None,
    database_url: str | None = None,
    seed_samples: bool | None = None,
) -> int:
    from .models import GOAL_CATEGORIES

    if target_amount is not None and target_amount <= 0:
        return _err("target amount must be positive")
    try:
        changes = {
            "title": title.strip() if title is not None else None,
            "description": description.strip() if description is not None else None,
            "target_amount": target_amount,
            "current_amount": current_amount,
            "target_date": _iso_date(target_date, "target date") if target_date else None,
            "category": _pick(category, GOAL_CATEGORIES, "goal category") if category else None,
        }
    except ValueError as e:
        return _err(str(e))
    return _edit(_stores(database_url, seed_samples).goals, goal_id, "goal", changes)


def cmd_delete_goal(
    goal_id: str, *, database_url: str | None = None, seed_samples: bool | None = None
) -> int:
    store = _stores(database_url, seed_samples).goals
    if store.get(goal_id) is None:
        return _err(f"No goal with id {goal_id}")
    store.delete(goal_id)
    return 0


def cmd_report(
    *,
    period: str = "ytd",
    output: str | None = None,
    database_url: str | None = None,
    seed_samples: bool | None = None,
    today: date | None = None,
) -> int:
    """Build a report; print its JSON or write it to ``output``.

    ``output`` may be a file path or an existing directory, in which case the
    default ``budget-report-<period>-<date>.json`` file name is used.
    """

    from .reports import REPORT_PERIODS, build_report, report_filename, to_json

    if period not in REPORT_PERIODS:
        return _err(f"period must be one of: {', '.join(REPORT_PERIODS)}")

    stores = _stores(database_url, seed_samples)
    report = build_report(
        stores.transactions.load(),
        stores.goals.load(),
        stores.debts.load(),
        period=period,  # type: ignore[arg-type]
        today=today,
    )
    text = to_json(report)
    if output is None:
        print(text)
        return 0

    target = Path(output)
    if target.is_dir():
        target = target / report_filename(report.period, today or report.generated_at.date())
    try:
        target.write_text(text + "\n", encoding="utf-8")
    except OSError as e:
        return _err(f"failed to write report: {e}")
    print(str(target))
    return 0


def cmd_signup(name: str, email: str, password: str, *, database_url: str | None = None) -> int:
    from .accounts import Accounts
    from .errors import AccountError
    from .storage import KeyValueStore

    if len(password) < 6:
        return _err("password must be at least 6 characters")
    try:
        user = Accounts(KeyValueStore(database_url=database_url)).sign_up(name, email, password)
    except AccountError as e:
        return _err(str(e))
    print(f"Signed in as {user.email}")
    return 0


def cmd_signin(email: str, password: str, *, database_url: str | None = None) -> int:
    from .accounts import Accounts
    from .errors import AccountError
    from .storage import KeyValueStore

    try:
        user = Accounts(KeyValueStore(database_url=database_url)).sign_in(email, password)
    except AccountError as e:
        return _err(str(e))
    print(f"Signed in as {user.email}")
    return 0


def cmd_signout(*, database_url: str | None = None) -> int:
    from .accounts import Accounts
    from .storage import KeyValueStore

    Accounts(KeyValueStore(database_url=database_url)).sign_out()
    print("Signed out")
    return 0


def cmd_whoami(*, database_url: str | None = None) -> int:
    from .accounts import Accounts
    from .storage import KeyValueStore

    user = Accounts(KeyValueStore(database_url=database_url)).current_user()
    print(f"{user.name or user.email} <{user.email}>" if user else "guest")
    return 0


# ---- Typer wiring --------------------------------------------------------------

app = typer.Typer(
    help="Personal finance tracker: transactions, CSV import, goals, debts and reports.",
    no_args_is_help=False,
    add_completion=False,
)
transactions_app = typer.Typer(help="Manage transactions.")
debts_app = typer.Typer(help="Track debts and plan payoff.")
goals_app = typer.Typer(help="Track savings goals.")
app.add_typer(transactions_app, name="transactions")
app.add_typer(debts_app, name="debts")
app.add_typer(goals_app, name="goals")


def _opts(ctx: typer.Context) -> _Options:
    obj = ctx.find_root().obj
    return obj if isinstance(obj, _Options) else _Options()


def _done(code: int) -> None:
    if code != 0:
        raise typer.Exit(code)


# Module-level argument object to satisfy ruff B008 (no calls in parameter
# defaults). Typer inspects it when used as a default value below.
CSV_PATH_ARGUMENT: ArgumentInfo = typer.Argument(
    ...,
    help="Path to a bank CSV export (comma, semicolon or tab separated).",
    dir_okay=False,
    file_okay=True,
    exists=False,  # the handler reports missing files itself
)


@app.command("import-csv")
def import_csv_cmd(
    ctx: typer.Context,
    csv_path: Annotated[Path, CSV_PATH_ARGUMENT],
    dry_run: bool = typer.Option(False, "--dry-run", help="Preview without storing."),
) -> None:
    """Import transactions from a CSV file."""

    o = _opts(ctx)
    _done(
        cmd_import_csv(
            str(csv_path),
            database_url=o.database_url,
            seed_samples=o.seed_samples,
            dry_run=dry_run,
        )
    )


@app.command("payoff")
def payoff_cmd(
    balance: float = typer.Argument(..., help="Outstanding balance."),
    rate: float = typer.Argument(..., help="Annual interest rate in percent."),
    payment: float = typer.Argument(..., help="Fixed monthly payment."),
) -> None:
    """Compute months to payoff and total interest for one debt."""

    _done(cmd_payoff(balance, rate, payment))


@app.command("report")
def report_cmd(
    ctx: typer.Context,
    period: str = typer.Option("ytd", help="all, ytd, last12 or last30."),
    output: str | None = typer.Option(None, help="Write JSON to this file or directory."),
) -> None:
    """Export a financial report as JSON."""

    o = _opts(ctx)
    _done(
        cmd_report(
            period=period,
            output=output,
            database_url=o.database_url,
            seed_samples=o.seed_samples,
        )
    )


@transactions_app.command("list")
def transactions_list_cmd(
    ctx: typer.Context,
    category: str | None = typer.Option(None, help="Only this category."),
    tx_type: str = typer.Option("all", "--type", help="income, expense or all."),
    start: str | None = typer.Option(None, help="Earliest date (inclusive)."),
    end: str | None = typer.Option(None, help="Latest date (inclusive)."),
) -> None:
    """List transactions, newest additions first."""

    o = _opts(ctx)
    _done(
        cmd_list_transactions(
            database_url=o.database_url,
            seed_samples=o.seed_samples,
            category=category,
            tx_type=tx_type,
            start_date=start,
            end_date=end,
        )
    )


@transactions_app.command("add")
def transactions_add_cmd(
    ctx: typer.Context,
    tx_date: str = typer.Option(..., "--date", help="Transaction date."),
    description: str = typer.Option(..., help="Description."),
    amount: float = typer.Option(..., help="Amount (sign is ignored; use --type)."),
    category: str = typer.Option("Other", help="One of the fixed categories."),
    tx_type: str = typer.Option("expense", "--type", help="income or expense."),
) -> None:
    """Add a transaction manually."""

    o = _opts(ctx)
    _done(
        cmd_add_transaction(
            tx_date=tx_date,
            description=description,
            amount=amount,
            category=category,
            tx_type=tx_type,
            database_url=o.database_url,
            seed_samples=o.seed_samples,
        )
    )


@transactions_app.command("edit")
def transactions_edit_cmd(
    ctx: typer.Context,
    tx_id: str = typer.Argument(...),
    tx_date: str | None = typer.Option(None, "--date", help="New date."),
    description: str | None = typer.Option(None, help="New description."),
    amount: float | None = typer.Option(None, help="New amount (sign is ignored)."),
    category: str | None = typer.Option(None, help="New category."),
    tx_type: str | None = typer.Option(None, "--type", help="income or expense."),
) -> None:
    """Change fields of a transaction."""

    o = _opts(ctx)
    _done(
        cmd_edit_transaction(
            tx_id,
            tx_date=tx_date,
            description=description,
            amount=amount,
            category=category,
            tx_type=tx_type,
            database_url=o.database_url,
            seed_samples=o.seed_samples,
        )
    )


@transactions_app.command("delete")
def transactions_delete_cmd(ctx: typer.Context, tx_id: str = typer.Argument(...)) -> None:
    """Delete a transaction by id."""

    o = _opts(ctx)
    _done(cmd_delete_transaction(tx_id, database_url=o.database_url, seed_samples=o.seed_samples))


@debts_app.command("list")
def debts_list_cmd(ctx: typer.Context) -> None:
    """List debts with payoff estimates at the minimum payment."""

    o = _opts(ctx)
    _done(cmd_list_debts(database_url=o.database_url, seed_samples=o.seed_samples))


@debts_app.command("add")
def debts_add_cmd(
    ctx: typer.Context,
    creditor: str = typer.Option(...),
    balance: float = typer.Option(...),
    rate: float = typer.Option(..., help="Annual interest rate in percent."),
    minimum_payment: float = typer.Option(..., help="Minimum monthly payment."),
    due_date: str = typer.Option(..., help="Next due date."),
    debt_type: str = typer.Option("Other", "--type", help="Credit Card, Personal Loan, ..."),
) -> None:
    """Add a debt."""

    o = _opts(ctx)
    _done(
        cmd_add_debt(
            creditor=creditor,
            balance=balance,
            interest_rate=rate,
            minimum_payment=minimum_payment,
            due_date=due_date,
            debt_type=debt_type,
            database_url=o.database_url,
            seed_samples=o.seed_samples,
        )
    )


@debts_app.command("pay")
def debts_pay_cmd(
    ctx: typer.Context,
    debt_id: str = typer.Argument(...),
    amount: float = typer.Argument(...),
) -> None:
    """Record a payment against a debt."""

    o = _opts(ctx)
    _done(cmd_pay_debt(debt_id, amount, database_url=o.database_url, seed_samples=o.seed_samples))


@debts_app.command("plan")
def debts_plan_cmd(
    ctx: typer.Context,
    strategy: str = typer.Option("avalanche", help="snowball or avalanche."),
) -> None:
    """Show the order in which to focus extra payments."""

    o = _opts(ctx)
    _done(cmd_plan_debts(strategy, database_url=o.database_url, seed_samples=o.seed_samples))


@debts_app.command("edit")
def debts_edit_cmd(
    ctx: typer.Context,
    debt_id: str = typer.Argument(...),
    creditor: str | None = typer.Option(None),
    balance: float | None = typer.Option(None),
    rate: float | None = typer.Option(None, help="Annual interest rate in percent."),
    minimum_payment: float | None = typer.Option(None),
    due_date: str | None = typer.Option(None),
    debt_type: str | None = typer.Option(None, "--type"),
) -> None:
    """Change fields of a debt."""

    o = _opts(ctx)
    _done(
        cmd_edit_debt(
            debt_id,
            creditor=creditor,
            balance=balance,
            interest_rate=rate,
            minimum_payment=minimum_payment,
            due_date=due_date,
            debt_type=debt_type,
            database_url=o.database_url,
            seed_samples=o.seed_samples,
        )
    )


@debts_app.command("delete")
def debts_delete_cmd(ctx: typer.Context, debt_id: str = typer.Argument(...)) -> None:
    """Delete a debt by id."""

    o = _opts(ctx)
    _done(cmd_delete_debt(debt_id, database_url=o.database_url, seed_samples=o.seed_samples))


@goals_app.command("list")
def goals_list_cmd(ctx: typer.Context) -> None:
    """List savings goals and their progress."""

    o = _opts(ctx)
    _done(cmd_list_goals(database_url=o.database_url, seed_samples=o.seed_samples))


@goals_app.command("add")
def goals_add_cmd(
    ctx: typer.Context,
    title: str = typer.Option(...),
    target_amount: float = typer.Option(...),
    target_date: str = typer.Option(...),
    category: str = typer.Option("Other", help="Emergency Fund, Vacation, Investment, Purchase, Other."),
    description: str = typer.Option(""),
    current_amount: float = typer.Option(0.0),
) -> None:
    """Add a savings goal."""

    o = _opts(ctx)
    _done(
        cmd_add_goal(
            title=title,
            target_amount=target_amount,
            target_date=target_date,
            category=category,
            description=description,
            current_amount=current_amount,
            database_url=o.database_url,
            seed_samples=o.seed_samples,
        )
    )


@goals_app.command("contribute")
def goals_contribute_cmd(
    ctx: typer.Context,
    goal_id: str = typer.Argument(...),
    amount: float = typer.Argument(...),
) -> None:
    """Add money to a goal."""

    o = _opts(ctx)
    _done(cmd_contribute_goal(goal_id, amount, database_url=o.database_url, seed_samples=o.seed_samples))


@goals_app.command("edit")
def goals_edit_cmd(
    ctx: typer.Context,
    goal_id: str = typer.Argument(...),
    title: str | None = typer.Option(None),
    description: str | None = typer.Option(None),
    target_amount: float | None = typer.Option(None),
    current_amount: float | None = typer.Option(None),
    target_date: str | None = typer.Option(None),
    category: str | None = typer.Option(None),
) -> None:
    """Change fields of a savings goal."""

    o = _opts(ctx)
    _done(
        cmd_edit_goal(
            goal_id,
            title=title,
            description=description,
            target_amount=target_amount,
            current_amount=current_amount,
            target_date=target_date,
            category=category,
            database_url=o.database_url,
            seed_samples=o.seed_samples,
        )
    )


@goals_app.command("delete")
def goals_delete_cmd(ctx: typer.Context, goal_id: str = typer.Argument(...)) -> None:
    """Delete a goal by id."""

    o = _opts(ctx)
    _done(cmd_delete_goal(goal_id, database_url=o.database_url, seed_samples=o.seed_samples))


@app.command("signup")
def signup_cmd(
    ctx: typer.Context,
    name: str = typer.Option(..., prompt=True),
    email: str = typer.Option(..., prompt=True),
    password: str = typer.Option(..., prompt=True, hide_input=True, confirmation_prompt=True),
) -> None:
    """Create a local account and sign in."""

    _done(cmd_signup(name, email, password, database_url=_opts(ctx).database_url))


@app.command("signin")
def signin_cmd(
    ctx: typer.Context,
    email: str = typer.Option(..., prompt=True),
    password: str = typer.Option(..., prompt=True, hide_input=True),
) -> None:
    """Sign in; later commands use your own data partition."""

    _done(cmd_signin(email, password, database_url=_opts(ctx).database_url))


@app.command("signout")
def signout_cmd(ctx: typer.Context) -> None:
    """Sign out; later commands use the guest partition."""

    _done(cmd_signout(database_url=_opts(ctx).database_url))


@app.command("whoami")
def whoami_cmd(ctx: typer.Context) -> None:
    """Show the signed-in user."""

    _done(cmd_whoami(database_url=_opts(ctx).database_url))


@app.callback(invoke_without_command=True)
def _root(
    ctx: typer.Context,
    *,
    database_url: str | None = typer.Option(
        None, help="Override BUDGETFLOW_DATABASE_URL (falls back to env var)."
    ),
    no_samples: bool = typer.Option(
        False, "--no-samples", help="Do not seed sample data into empty partitions."
    ),
    log_level: str | None = typer.Option(
        None, help="Logging level (falls back to BUDGETFLOW_LOG_LEVEL, then INFO)."
    ),
) -> None:
    """Root command.

    Loads ``.env`` from the current working directory (without overriding any
    already-set environment variables), configures logging, and records the
    global options for subcommands.
    """

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)

    # Central logging setup so child loggers inherit configuration
    configure_logging(log_level)

    ctx.obj = _Options(database_url=database_url, seed_samples=False if no_samples else None)

    if ctx.invoked_subcommand is None:
        typer.echo("No subcommand provided. Use --help to see available commands.")
        raise typer.Exit(1)


def main() -> None:  # pragma: no cover - console script entry
    app()


if __name__ == "__main__":  # pragma: no cover
    # Running as a module: `python -m budgetflow.cli`
    main()
