"""Discount engine - core business logic for receivables anticipation quotes"""

from datetime import date
from decimal import Decimal
from typing import List, Sequence, Tuple

from nova_verte.domain.currency import parse_currency, parse_rate
from nova_verte.domain.exceptions import EmptyTitleListError, IncompleteTitleError, PastDueDateError
from nova_verte.domain.models import CalculationLine, CalculationResult, FeeSchedule, Title
from nova_verte.utils.date_utils import days_between, parse_iso_date

FEES = FeeSchedule()

MIN_DAYS = 1
SETTLEMENT_BUFFER_DAYS = 2
DAYS_PER_MONTH = 30


def validate_title(title: Title, today: date) -> Tuple[Decimal, date]:
    """
    Check a single title and return its parsed (face value, due date).

    Raises:
        IncompleteTitleError: empty fields, malformed date or zero face value
        PastDueDateError: due date before today
    """
    if not title.face_value or not title.due_date:
        raise IncompleteTitleError()

    face_value = parse_currency(title.face_value)
    due_date = parse_iso_date(title.due_date)

    if not face_value or due_date is None:
        raise IncompleteTitleError()

    if due_date < today:
        raise PastDueDateError()

    return face_value, due_date


def effective_days(due_date: date, today: date) -> int:
    """
    Days charged for a title.

    At least 1 day to maturity, plus a fixed settlement buffer, so a title
    due today is charged for 3 days.
    """
    return max(MIN_DAYS, days_between(today, due_date)) + SETTLEMENT_BUFFER_DAYS


def title_discount(face_value: Decimal, monthly_rate: Decimal, days: int) -> Decimal:
    """
    Simple (non-compounded) discount for one title.

    Daily rate is monthly_rate / 30 percentage points, so the discount is
    face * (monthly_rate / 30 / 100) * days. Division happens last so round
    inputs produce exact cents (1000 at 5% for 3 days -> 5.00).
    """
    return face_value * monthly_rate * days / (DAYS_PER_MONTH * 100)


def calculate_fees(title_count: int, fees: FeeSchedule = FEES) -> Decimal:
    """Inclusion fee plus the per-title registration fee (wire fee excluded)"""
    return fees.inclusion_fee + fees.registration_fee * title_count


def calculate_discount(
    titles: Sequence[Title],
    monthly_rate: str,
    today: date,
    fees: FeeSchedule = FEES,
) -> CalculationResult:
    """
    Main entry point: validate titles and build the full quote.

    Requirements:
    - Titles are processed in input order, labelled "Título 1", "Título 2", ...
    - The first invalid title aborts the whole run (nothing partial is returned)
    - net_amount = gross - discounts - (inclusion + registration * n) - wire fee
    """
    if not titles:
        raise EmptyTitleListError()

    rate = parse_rate(monthly_rate)

    gross_total = Decimal("0")
    discount_total = Decimal("0")
    lines: List[CalculationLine] = []

    for index, title in enumerate(titles, start=1):
        face_value, due_date = validate_title(title, today)

        days = effective_days(due_date, today)
        discount = title_discount(face_value, rate, days)

        gross_total += face_value
        discount_total += discount

        lines.append(
            CalculationLine(
                title=f"Título {index}",
                days=days,
                face_value=face_value,
                discount=discount,
                net_value=face_value - discount,
            )
        )

    fees_total = calculate_fees(len(titles), fees)
    net_amount = gross_total - discount_total - fees_total - fees.wire_fee

    return CalculationResult(
        gross_total=gross_total,
        discount_total=discount_total,
        fees_total=fees_total,
        net_amount=net_amount,
        lines=lines,
    )
