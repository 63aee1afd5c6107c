import pytest


STATEMENT_LINES = [
    "Capitec Bank",
    "Account Number: 1234567890",
    "From Date: 01/03/2024 To Date: 31/03/2024 Print Date: 02/04/2024",
    "Posting Date Transaction Date Description Money In Money Out Balance",
    "01/03/2024 01/03/2024 Opening Deposit 1000.00 1000.00",
    "05/03/2024 04/03/2024 Grocery Store -150.00 850.00",
    "10/03/2024 Salary 2,500.00 3 350.00",
    "* Fees are charged monthly",
    "Available Balance: 3 350.00",
    "",
]

CSV_HEADER = (
    "Account,Reference,Posting Date,Transaction Date,Description,"
    "Original Description,Category,Money In,Money Out,Fee,Balance"
)


@pytest.fixture
def statement_text():
    """Extracted text of a three-transaction statement."""
    return "\n".join(STATEMENT_LINES)


@pytest.fixture
def write_csv(tmp_path):
    """Write CSV rows (with the export header) to a file and return its path."""

    def _write(*rows, header=True, name="statement.csv"):
        lines = ([CSV_HEADER] if header else []) + list(rows)
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return str(path)

    return _write
