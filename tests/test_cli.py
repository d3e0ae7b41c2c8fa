# ruff: noqa: E501
import json
import textwrap
from datetime import date

from typer.testing import CliRunner

from budgetflow.cli import app, cmd_import_csv, cmd_payoff, cmd_report
from budgetflow.storage import open_stores

runner = CliRunner()


def _write_csv(tmp_path, name="export.csv"):
    path = tmp_path / name
    path.write_text(
        textwrap.dedent(
            """\
            Date,Description,Amount,Category
            2024-01-05,Coffee,-4.50,Food & Dining
            2024-01-06,Paycheck,2000,Salary
            2024-01-07,Broken,,Other
            """
        ),
        encoding="utf-8",
    )
    return path


def test_payoff_command_prints_plan():
    result = runner.invoke(app, ["--no-samples", "payoff", "1000", "0", "100"])

    assert result.exit_code == 0
    assert "Payoff in 10 months (10m)" in result.output
    assert "total interest $0.00" in result.output


def test_payoff_reports_unreachable_and_bad_input(capsys):
    assert cmd_payoff(1000, 24, 10) == 0
    assert "Minimum payment does not cover monthly interest" in capsys.readouterr().out

    assert cmd_payoff(0, 5, 10) == 1
    assert "Error: balance must be positive" in capsys.readouterr().err


def test_import_csv_stores_transactions(tmp_path, capsys):
    path = _write_csv(tmp_path)

    assert cmd_import_csv(str(path), seed_samples=False) == 0
    assert "Imported 2 transaction(s); skipped 1 row(s)" in capsys.readouterr().out

    stored = open_stores(user_id=None, seed_samples=False).transactions.load()
    assert [t.description for t in stored] == ["Paycheck", "Coffee"]


def test_import_csv_dry_run_stores_nothing(tmp_path, capsys):
    assert cmd_import_csv(str(_write_csv(tmp_path)), seed_samples=False, dry_run=True) == 0

    assert "2 transaction(s) ready; 1 row(s) skipped" in capsys.readouterr().out
    assert open_stores(user_id=None, seed_samples=False).transactions.load() == []


def test_import_csv_errors(tmp_path, capsys):
    assert cmd_import_csv(str(tmp_path / "missing.csv")) == 1
    assert "File not found" in capsys.readouterr().err

    other = tmp_path / "export.txt"
    other.write_text("Date,Amount\n2024-01-01,5\n", encoding="utf-8")
    assert cmd_import_csv(str(other)) == 1
    assert "Please upload a CSV file" in capsys.readouterr().err

    empty = tmp_path / "empty.csv"
    empty.write_text("Date,Amount\n2024-01-01,0\n", encoding="utf-8")
    assert cmd_import_csv(str(empty)) == 1
    assert "No valid transactions found in the CSV file" in capsys.readouterr().err


def test_transaction_add_list_delete_via_cli():
    added = runner.invoke(
        app,
        [
            "--no-samples",
            "transactions",
            "add",
            "--date",
            "2024-03-01",
            "--description",
            "Bus pass",
            "--amount",
            "60",
            "--category",
            "transportation",
        ],
    )
    assert added.exit_code == 0
    tx_id = added.output.strip()

    listed = runner.invoke(app, ["--no-samples", "transactions", "list", "--type", "expense"])
    assert listed.exit_code == 0
    assert "Bus pass" in listed.output
    assert "Transportation" in listed.output

    deleted = runner.invoke(app, ["--no-samples", "transactions", "delete", tx_id])
    assert deleted.exit_code == 0
    assert open_stores(user_id=None, seed_samples=False).transactions.load() == []


def test_unknown_category_is_rejected():
    result = runner.invoke(
        app,
        ["transactions", "add", "--date", "2024-03-01", "--description", "X", "--amount", "1", "--category", "Gadgets"],
    )

    assert result.exit_code == 1
    assert "category must be one of" in result.output


def test_debt_plan_and_payment_on_samples():
    plan = runner.invoke(app, ["debts", "plan", "--strategy", "snowball"])
    assert plan.exit_code == 0
    first, second = plan.output.strip().splitlines()
    assert first.startswith("1. Chase Credit Card") and first.endswith("Focus Here")
    assert second.startswith("2. Student Loan")

    debt = open_stores(user_id=None).debts.load()[0]
    paid = runner.invoke(app, ["debts", "pay", debt.id, "200"])
    assert paid.exit_code == 0
    assert open_stores(user_id=None).debts.get(debt.id).balance == debt.balance - 200


def test_goal_contribution():
    goal = open_stores(user_id=None).goals.load()[0]

    result = runner.invoke(app, ["goals", "contribute", goal.id, "500"])

    assert result.exit_code == 0
    assert open_stores(user_id=None).goals.get(goal.id).current_amount == goal.current_amount + 500


def test_report_to_directory(tmp_path, capsys):
    assert cmd_report(period="all", output=str(tmp_path), today=date(2024, 6, 30)) == 0

    written = tmp_path / "budget-report-all-2024-06-30.json"
    assert capsys.readouterr().out.strip() == str(written)
    payload = json.loads(written.read_text(encoding="utf-8"))
    assert payload["summary"]["totalIncome"] == 5000
    assert payload["debts"]["totalDebts"] == 2


def test_report_rejects_unknown_period(capsys):
    assert cmd_report(period="weekly") == 1
    assert "period must be one of" in capsys.readouterr().err


def test_accounts_switch_partitions():
    signup = runner.invoke(
        app,
        ["--no-samples", "signup", "--name", "Ada", "--email", "ada@example.com"],
        input="hunter22\nhunter22\n",
    )
    assert signup.exit_code == 0
    assert "Signed in as ada@example.com" in signup.output

    runner.invoke(
        app,
        ["--no-samples", "transactions", "add", "--date", "2024-03-01", "--description", "Mine", "--amount", "5"],
    )
    assert runner.invoke(app, ["whoami"]).output.strip() == "Ada <ada@example.com>"

    assert runner.invoke(app, ["signout"]).output.strip() == "Signed out"
    assert runner.invoke(app, ["whoami"]).output.strip() == "guest"
    assert open_stores(user_id=None, seed_samples=False).transactions.load() == []

    bad = runner.invoke(app, ["signin", "--email", "ada@example.com"], input="wrong\n")
    assert bad.exit_code == 1
    assert "Invalid email or password" in bad.output


def test_no_subcommand_exits_with_hint():
    result = runner.invoke(app, [])

    assert result.exit_code == 1
    assert "No subcommand provided" in result.output


def test_edit_transaction_changes_only_given_fields():
    result = runner.invoke(app, ["transactions", "edit", "2", "--amount", "130", "--category", "shopping"])

    assert result.exit_code == 0
    assert "Updated transaction 2" in result.output
    tx = open_stores(user_id=None).transactions.get("2")
    assert (tx.amount, tx.category, tx.description, tx.type) == (130.0, "Shopping", "Grocery Shopping", "expense")


def test_edit_rejects_unknown_id_and_empty_change():
    missing = runner.invoke(app, ["transactions", "edit", "nope", "--amount", "5"])
    assert missing.exit_code == 1
    assert "No transaction with id nope" in missing.output

    empty = runner.invoke(app, ["transactions", "edit", "2"])
    assert empty.exit_code == 1
    assert "nothing to change" in empty.output


def test_edit_debt_and_goal():
    debt = open_stores(user_id=None).debts.load()[0]
    goal = open_stores(user_id=None).goals.load()[0]

    assert runner.invoke(app, ["debts", "edit", debt.id, "--rate", "12.5", "--due-date", "03/01/2024"]).exit_code == 0
    assert runner.invoke(app, ["goals", "edit", goal.id, "--title", "Rainy Day"]).exit_code == 0

    edited_debt = open_stores(user_id=None).debts.get(debt.id)
    assert (edited_debt.interest_rate, edited_debt.due_date, edited_debt.balance) == (12.5, "2024-03-01", debt.balance)
    assert open_stores(user_id=None).goals.get(goal.id).title == "Rainy Day"


def test_edit_debt_validates_rate():
    debt = open_stores(user_id=None).debts.load()[0]

    result = runner.invoke(app, ["debts", "edit", debt.id, "--rate", "150"])

    assert result.exit_code == 1
    assert "interest_rate" in result.output
    assert open_stores(user_id=None).debts.get(debt.id).interest_rate == debt.interest_rate
