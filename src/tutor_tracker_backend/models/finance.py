'''
Read models for the derived financial state of lessons and students.
'''
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, computed_field

from .enums import PaymentStatus

class PaymentSummary(BaseModel):
    """
    Payment classification of one lesson, as produced by core.finance.classify_payment.
    """
    status: PaymentStatus
    label: str
    amount_due: Decimal
    amount_paid: Decimal
    # amount_due - amount_paid, negative when overpaid
    remaining: Decimal
    # Paid -> amount paid, Outstanding -> remaining, Unpaid -> amount due, NotSet -> None
    display_amount: Optional[Decimal] = None
    is_paid: bool = False

    @computed_field
    @property
    def counts_as_unpaid(self) -> bool:
        if self.status == PaymentStatus.UNPAID:
            return True
        return self.status == PaymentStatus.NOT_SET and not self.is_paid

class StudentFinancials(BaseModel):
    """Totals over one student's lessons."""
    total_lessons: int
    outstanding_balance: Decimal
    total_revenue: Decimal

class DashboardStats(BaseModel):
    """Totals over every student and lesson."""
    total_students: int
    total_lessons: int
    unpaid_lessons: int
    total_revenue: Decimal
