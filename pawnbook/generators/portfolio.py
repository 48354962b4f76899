"""Synthetic pawn lending portfolios for demos and tests."""

from __future__ import annotations

import itertools
import logging
from collections.abc import Iterator
from dataclasses import dataclass, field, replace
from datetime import date, timedelta
from decimal import Decimal

from pawnbook.engine.cashflows import loan_cash_flows, running_balances
from pawnbook.engine.dates import generate_default_interest_periods, needs_multiple_periods
from pawnbook.engine.status import derive_loan_status
from pawnbook.engine.totals import has_unpaid_records
from pawnbook.generators.base import BaseGenerator
from pawnbook.models import (
    Direction,
    EntryType,
    Fixed,
    FundingRecord,
    InterestPeriod,
    InterestSpec,
    Investor,
    InvestorFunding,
    LedgerEntry,
    Loan,
    LoanStatus,
    LoanType,
    PeriodStatus,
    Rate,
)

logger = logging.getLogger(__name__)


@dataclass
class Portfolio:
    """Generated investors and loans, cross-referenced."""

    investors: list[Investor] = field(default_factory=list)
    loans: list[Loan] = field(default_factory=list)

    def investor(self, investor_id: int) -> Investor:
        """Look up an investor by id."""
        for investor in self.investors:
            if investor.investor_id == investor_id:
                return investor
        raise KeyError(investor_id)

    def summary(self) -> dict[str, int]:
        """Return summary counts of all entities."""
        return {
            "investors": len(self.investors),
            "loans": len(self.loans),
            "funding_records": sum(len(loan.funding) for loan in self.loans),
            "ledger_entries": sum(len(inv.entries) for inv in self.investors),
        }


class PortfolioGenerator(BaseGenerator):
    """Generate investors, pawn loans and their ledgers."""

    RATES = [Decimal("3"), Decimal("5"), Decimal("7"), Decimal("10")]
    FIXED_AMOUNTS = [Decimal("500"), Decimal("1000"), Decimal("2500"), Decimal("5000")]

    def __init__(
        self,
        seed: int | None = None,
        locale: str | None = None,
        today: date | None = None,
        fixed_interest_rate: float = 0.25,
        multi_period_rate: float = 0.40,
        completed_rate: float = 0.50,
    ) -> None:
        """Initialize the portfolio generator.

        Parameters
        ----------
        seed : int | None
            Random seed for reproducibility.
        locale : str | None
            Faker locale for names and contact details.
        today : date | None
            Reference date for paid/overdue decisions (default: today).
        fixed_interest_rate : float
            Share of investors lending at a fixed amount instead of a rate.
        multi_period_rate : float
            Share of eligible loans split into monthly interest periods.
        completed_rate : float
            Share of past-due loans marked Completed.
        """
        super().__init__(seed, locale)
        self.today = today or date.today()
        self.fixed_interest_rate = fixed_interest_rate
        self.multi_period_rate = multi_period_rate
        self.completed_rate = completed_rate
        self._record_ids: Iterator[int] = itertools.count(1)
        self._period_ids: Iterator[int] = itertools.count(1)

    def generate_investor(self, investor_id: int) -> Investor:
        """Generate an investor without funding or ledger entries."""
        return Investor(
            investor_id=investor_id,
            name=self.fake.name(),
            email=self.fake.email(),
            contact_number=self._contact_number(),
        )

    def _contact_number(self) -> str:
        # en_PH has mobile_number/landline_number instead of phone_number
        if hasattr(self.fake, "mobile_number"):
            return self.fake.mobile_number()
        return self.fake.phone_number()

    def _interest(self) -> InterestSpec:
        if self.rng.random() < self.fixed_interest_rate:
            return Fixed(self.rng.choice(self.FIXED_AMOUNTS))
        return Rate(self.rng.choice(self.RATES))

    def _periods(self, sent_date: date, due_date: date, completed: bool) -> tuple[InterestPeriod, ...]:
        rate = Rate(self.rng.choice(self.RATES))
        periods = []
        for checkpoint in generate_default_interest_periods(sent_date, due_date):
            if completed:
                status = PeriodStatus.COMPLETED
            elif checkpoint.due_date <= self.today:
                status = PeriodStatus.COMPLETED if self.rng.random() < 0.6 else PeriodStatus.OVERDUE
            else:
                status = PeriodStatus.PENDING
            periods.append(
                InterestPeriod(
                    due_date=checkpoint.due_date,
                    interest=rate,
                    status=status,
                    period_id=next(self._period_ids),
                )
            )
        return tuple(periods)

    def generate_loan(self, loan_id: int, investor_ids: list[int]) -> Loan:
        """Generate a loan funded by one to three of ``investor_ids``.

        Each participating investor disburses once or twice. Long enough
        loans may be split into monthly interest periods, attached to the
        investor's first disbursement.
        """
        loan_type = self.rng.choice(list(LoanType))
        first_sent = self.today - timedelta(days=self.rng.randint(0, 120))
        due_date = first_sent + timedelta(days=self.rng.randint(20, 150))
        completed = due_date <= self.today and self.rng.random() < self.completed_rate
        multi = needs_multiple_periods(first_sent, due_date) and self.rng.random() < self.multi_period_rate

        participants = self.rng.sample(investor_ids, k=min(len(investor_ids), self.rng.randint(1, 3)))
        records = []
        for investor_id in participants:
            interest = self._interest()
            for index in range(self.rng.randint(1, 2)):
                sent_date = first_sent if index == 0 else first_sent + timedelta(days=self.rng.randint(1, 10))
                with_periods = multi and index == 0
                records.append(
                    FundingRecord(
                        amount=Decimal(self.rng.randint(1, 40) * 5000),
                        interest=interest,
                        sent_date=sent_date,
                        investor_id=investor_id,
                        is_paid=completed or sent_date <= self.today,
                        has_multiple_periods=with_periods,
                        periods=self._periods(first_sent, due_date, completed) if with_periods else (),
                        record_id=next(self._record_ids),
                        loan_id=loan_id,
                    )
                )

        if completed:
            status = LoanStatus.COMPLETED
        else:
            status = derive_loan_status(due_date, has_unpaid_records(records), self.today)

        return Loan(
            loan_id=loan_id,
            name=f"{self.fake.last_name()} {loan_type.value}",
            loan_type=loan_type,
            status=status,
            due_date=due_date,
            funding=tuple(records),
            free_lot_sqm=self.rng.randint(100, 1000) if loan_type == LoanType.LOT_TITLE else None,
        )

    def _opening_deposit(self, investor_id: int) -> LedgerEntry:
        return LedgerEntry(
            investor_id=investor_id,
            date=self.today - timedelta(days=365),
            entry_type=EntryType.INVESTMENT,
            direction=Direction.IN,
            name="Opening capital",
            amount=Decimal(self.rng.randint(20, 200) * 5000),
            balance=Decimal(0),
        )

    def generate_portfolio(self, num_investors: int = 10, num_loans: int = 25) -> Portfolio:
        """Generate investors, loans, and each investor's running-balance ledger.

        Parameters
        ----------
        num_investors : int
            Number of investors.
        num_loans : int
            Number of loans.

        Returns
        -------
        Portfolio
            Generated investors (with funding and ledger) and loans.
        """
        logger.info("Generating portfolio: %d investors, %d loans", num_investors, num_loans)

        investors = [self.generate_investor(i) for i in range(1, num_investors + 1)]
        investor_ids = [inv.investor_id for inv in investors]
        loans = [self.generate_loan(loan_id, investor_ids) for loan_id in range(1, num_loans + 1)]

        drafts = [self._opening_deposit(i) for i in investor_ids]
        for loan in loans:
            drafts.extend(loan_cash_flows(loan))
        entry_ids = itertools.count(1)
        ledger = running_balances(replace(e, entry_id=next(entry_ids)) for e in drafts)

        funding: dict[int, list[InvestorFunding]] = {i: [] for i in investor_ids}
        for loan in loans:
            for record in loan.funding:
                funding[record.investor_id].append(
                    InvestorFunding(record=record, loan_id=loan.loan_id, loan_status=loan.status, loan_name=loan.name)
                )

        entries: dict[int, list[LedgerEntry]] = {i: [] for i in investor_ids}
        for entry in ledger:
            entries[entry.investor_id].append(entry)

        portfolio = Portfolio(
            investors=[
                replace(inv, funding=tuple(funding[inv.investor_id]), entries=tuple(entries[inv.investor_id]))
                for inv in investors
            ],
            loans=loans,
        )
        summary = portfolio.summary()
        logger.info("Generated portfolio: %s", summary, extra=summary)
        return portfolio
