'''
Derived financial state of lessons.

Everything here is pure: no I/O and no side effects. Every view that shows a
payment status goes through classify_payment so the rules live in one place.
'''
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, TYPE_CHECKING

from ..models.enums import PaymentStatus
from ..models.finance import PaymentSummary, StudentFinancials, DashboardStats

if TYPE_CHECKING:
    from ..models.lesson import LessonRead
    from ..models.student import StudentRead

ZERO = Decimal("0")


def to_amount(value: Any) -> Decimal:
    """
    Coerces an amount to Decimal. Absent, blank or non-numeric values become 0
    instead of raising.
    """
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            amount = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            return ZERO
    if not amount.is_finite():
        return ZERO
    return amount


def classify_payment(amount_due: Any, amount_paid: Any, is_paid: bool = False) -> PaymentSummary:
    """
    Classifies a lesson's payment state. The checks run in a fixed order and
    the first match wins:

    1. due > 0 and paid >= due               -> PAID (shows the amount paid)
    2. due > 0 and paid > 0 and remaining > 0 -> OUTSTANDING (shows the remaining balance)
    3. due > 0 and paid == 0                 -> UNPAID (shows the amount due)
    4. anything else                         -> NOT_SET (label from the legacy is_paid flag)

    Overpayment is classified as PAID.
    """
    due = to_amount(amount_due)
    paid = to_amount(amount_paid)
    remaining = due - paid
    is_paid = bool(is_paid)

    if due > 0 and paid >= due:
        status, label, display = PaymentStatus.PAID, "Paid", paid
    elif due > 0 and paid > 0 and remaining > 0:
        status, label, display = PaymentStatus.OUTSTANDING, "Outstanding", remaining
    elif due > 0 and paid == 0:
        status, label, display = PaymentStatus.UNPAID, "Unpaid", due
    else:
        status = PaymentStatus.NOT_SET
        label = "Paid" if is_paid else "Unpaid"
        display = None

    return PaymentSummary(
        status=status,
        label=label,
        amount_due=due,
        amount_paid=paid,
        remaining=remaining,
        display_amount=display,
        is_paid=is_paid,
    )


def summarize_lessons(lessons: Iterable["LessonRead"]) -> StudentFinancials:
    """
    Totals for a single student's lessons. The outstanding balance is the plain
    sum of (due - paid), so an overpaid lesson offsets another lesson's debt.
    """
    total_lessons = 0
    outstanding = ZERO
    revenue = ZERO
    for lesson in lessons:
        due = to_amount(lesson.amount_due)
        paid = to_amount(lesson.amount_paid)
        total_lessons += 1
        outstanding += due - paid
        revenue += paid
    return StudentFinancials(
        total_lessons=total_lessons,
        outstanding_balance=outstanding,
        total_revenue=revenue,
    )


def compute_dashboard_stats(
    students: Iterable["StudentRead"],
    lessons: Iterable["LessonRead"]
) -> DashboardStats:
    """
    Dashboard totals. An empty collection simply yields zeros.
    """
    total_students = sum(1 for _ in students)
    total_lessons = 0
    unpaid_lessons = 0
    revenue = ZERO
    for lesson in lessons:
        total_lessons += 1
        summary = classify_payment(lesson.amount_due, lesson.amount_paid, lesson.is_paid)
        if summary.counts_as_unpaid:
            unpaid_lessons += 1
        revenue += summary.amount_paid
    return DashboardStats(
        total_students=total_students,
        total_lessons=total_lessons,
        unpaid_lessons=unpaid_lessons,
        total_revenue=revenue,
    )
