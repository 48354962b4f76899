"""Loan calculation engine: pure functions over funding snapshots."""

from pawnbook.engine.activity import InvestorActivity, PendingDisbursement, investor_activity, total_amount_due
from pawnbook.engine.cashflows import (
    build_loan_cash_flows,
    loan_cash_flows,
    requires_cash_flow_regeneration,
    running_balances,
)
from pawnbook.engine.dates import (
    LoanDuration,
    PeriodDate,
    add_months,
    generate_default_interest_periods,
    loan_duration,
    months_between,
    needs_multiple_periods,
)
from pawnbook.engine.grouping import InvestorGroup, group_by_investor
from pawnbook.engine.interest import investment_total, resolve_interest
from pawnbook.engine.rollups import (
    InvestorStats,
    LoanStats,
    balance_status,
    count_unique_investors,
    current_balance,
    investor_stats,
    loan_stats,
)
from pawnbook.engine.schedule import (
    PaymentProgress,
    amount_due_on_date,
    multiple_interest_payment_status,
    overdue_amount,
)
from pawnbook.engine.status import (
    SweepResult,
    derive_loan_status,
    reconcile_loan_status,
    sweep_loan,
    sweep_loans,
    sweep_period_statuses,
)
from pawnbook.engine.totals import (
    TransactionStats,
    average_rate,
    calculate_transaction_stats,
    has_unpaid_records,
    loan_balance,
    total_amount,
    total_interest,
    total_principal,
)

__all__ = [
    "InvestorActivity",
    "InvestorGroup",
    "InvestorStats",
    "LoanDuration",
    "LoanStats",
    "PaymentProgress",
    "PendingDisbursement",
    "PeriodDate",
    "SweepResult",
    "TransactionStats",
    "add_months",
    "amount_due_on_date",
    "average_rate",
    "balance_status",
    "build_loan_cash_flows",
    "calculate_transaction_stats",
    "count_unique_investors",
    "current_balance",
    "derive_loan_status",
    "generate_default_interest_periods",
    "group_by_investor",
    "has_unpaid_records",
    "investment_total",
    "investor_activity",
    "investor_stats",
    "loan_balance",
    "loan_cash_flows",
    "loan_duration",
    "loan_stats",
    "months_between",
    "multiple_interest_payment_status",
    "needs_multiple_periods",
    "overdue_amount",
    "reconcile_loan_status",
    "requires_cash_flow_regeneration",
    "resolve_interest",
    "running_balances",
    "sweep_loan",
    "sweep_loans",
    "sweep_period_statuses",
    "total_amount",
    "total_amount_due",
    "total_interest",
    "total_principal",
]
