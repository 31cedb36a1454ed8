"""Default chart of accounts seeded for new companies."""

from typing import NamedTuple, Optional

from ledgerkit.domain.entities import AccountCategory, AccountType

# Codes of the accounts the cash flow statement treats as cash
CASH_ACCOUNT_CODES = ("1-1100", "1-1200")


class ChartTemplateAccount(NamedTuple):
    code: str
    name: str
    account_type: AccountType
    category: AccountCategory
    level: int
    is_header: bool
    parent_code: Optional[str]


_A = AccountType
_C = AccountCategory

# Parents are listed before their children
DEFAULT_CHART = [
    # Assets
    ChartTemplateAccount("1-0000", "Assets", _A.ASSET, _C.CURRENT_ASSET, 1, True, None),
    ChartTemplateAccount("1-1000", "Current Assets", _A.ASSET, _C.CURRENT_ASSET, 2, True, "1-0000"),
    ChartTemplateAccount("1-1100", "Cash", _A.ASSET, _C.CURRENT_ASSET, 3, False, "1-1000"),
    ChartTemplateAccount("1-1200", "Bank", _A.ASSET, _C.CURRENT_ASSET, 3, False, "1-1000"),
    ChartTemplateAccount("1-1300", "Accounts Receivable", _A.ASSET, _C.CURRENT_ASSET, 3, False, "1-1000"),
    ChartTemplateAccount("1-1400", "Inventory", _A.ASSET, _C.CURRENT_ASSET, 3, False, "1-1000"),
    ChartTemplateAccount("1-2000", "Fixed Assets", _A.ASSET, _C.FIXED_ASSET, 2, True, "1-0000"),
    ChartTemplateAccount("1-2100", "Equipment", _A.ASSET, _C.FIXED_ASSET, 3, False, "1-2000"),
    ChartTemplateAccount("1-2200", "Vehicles", _A.ASSET, _C.FIXED_ASSET, 3, False, "1-2000"),
    ChartTemplateAccount("1-2300", "Buildings", _A.ASSET, _C.FIXED_ASSET, 3, False, "1-2000"),
    # Liabilities
    ChartTemplateAccount("2-0000", "Liabilities", _A.LIABILITY, _C.CURRENT_LIABILITY, 1, True, None),
    ChartTemplateAccount("2-1000", "Current Liabilities", _A.LIABILITY, _C.CURRENT_LIABILITY, 2, True, "2-0000"),
    ChartTemplateAccount("2-1100", "Accounts Payable", _A.LIABILITY, _C.CURRENT_LIABILITY, 3, False, "2-1000"),
    ChartTemplateAccount("2-1200", "Taxes Payable", _A.LIABILITY, _C.CURRENT_LIABILITY, 3, False, "2-1000"),
    ChartTemplateAccount("2-2000", "Long-term Liabilities", _A.LIABILITY, _C.LONG_TERM_LIABILITY, 2, True, "2-0000"),
    ChartTemplateAccount("2-2100", "Long-term Bank Loans", _A.LIABILITY, _C.LONG_TERM_LIABILITY, 3, False, "2-2000"),
    # Equity
    ChartTemplateAccount("3-0000", "Equity", _A.EQUITY, _C.EQUITY, 1, True, None),
    ChartTemplateAccount("3-1000", "Owner's Capital", _A.EQUITY, _C.EQUITY, 2, False, "3-0000"),
    ChartTemplateAccount("3-2000", "Retained Earnings", _A.EQUITY, _C.EQUITY, 2, False, "3-0000"),
    # Revenue
    ChartTemplateAccount("4-0000", "Revenue", _A.REVENUE, _C.OPERATING_REVENUE, 1, True, None),
    ChartTemplateAccount("4-1000", "Sales Revenue", _A.REVENUE, _C.OPERATING_REVENUE, 2, False, "4-0000"),
    ChartTemplateAccount("4-2000", "Other Income", _A.REVENUE, _C.OTHER_REVENUE, 2, False, "4-0000"),
    # Expenses
    ChartTemplateAccount("5-0000", "Expenses", _A.EXPENSE, _C.OPERATING_EXPENSE, 1, True, None),
    ChartTemplateAccount("5-1000", "Operating Expenses", _A.EXPENSE, _C.OPERATING_EXPENSE, 2, True, "5-0000"),
    ChartTemplateAccount("5-1100", "Salaries Expense", _A.EXPENSE, _C.OPERATING_EXPENSE, 3, False, "5-1000"),
    ChartTemplateAccount("5-1200", "Rent Expense", _A.EXPENSE, _C.OPERATING_EXPENSE, 3, False, "5-1000"),
    ChartTemplateAccount("5-1300", "Utilities Expense", _A.EXPENSE, _C.OPERATING_EXPENSE, 3, False, "5-1000"),
    ChartTemplateAccount("5-1400", "Telephone & Internet Expense", _A.EXPENSE, _C.OPERATING_EXPENSE, 3, False, "5-1000"),
    ChartTemplateAccount("5-2000", "Other Expenses", _A.EXPENSE, _C.OTHER_EXPENSE, 2, False, "5-0000"),
]
