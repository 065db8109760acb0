"""Loan data models.

Loan terms, amortization entries and the outputs of the payment and
borrowing capacity calculators.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, computed_field


class LoanTerms(BaseModel):
    """Terms of a fixed-rate amortizing loan."""

    principal: float = Field(..., ge=0, description="Borrowed amount in €")
    annual_rate_pct: float = Field(..., ge=0, description="Annual interest rate % (0 allowed)")
    term_years: int = Field(..., ge=1, description="Loan duration in years")
    insurance_rate_pct: float = Field(default=0.0, ge=0, description="Annual borrower insurance % of principal")

    model_config = {"frozen": True}

    @computed_field
    @property
    def months(self) -> int:
        """Number of monthly installments."""
        return self.term_years * 12


class AmortizationEntry(BaseModel):
    """One period (month or year) of an amortization schedule."""

    period: int = Field(..., ge=1, description="Month or year number, 1-based")
    payment: float = Field(..., description="Installment paid during the period")
    principal_portion: float = Field(..., description="Share of the payment repaying principal")
    interest_portion: float = Field(..., description="Share of the payment paying interest")
    remaining_principal: float = Field(..., ge=0, description="Balance after the period")

    model_config = {"frozen": True}


class LoanPaymentBreakdown(BaseModel):
    """Monthly loan service split between repayment and insurance."""

    loan_payment: float = Field(default=0.0, description="Principal + interest per month")
    insurance_payment: float = Field(default=0.0, description="Insurance per month")

    model_config = {"frozen": True}

    @computed_field
    @property
    def total_payment(self) -> float:
        """Total monthly payment."""
        return self.loan_payment + self.insurance_payment


class CapacityResult(BaseModel):
    """Outcome of the borrowing capacity solver."""

    amount: float = Field(default=0.0, ge=0, description="Borrowable principal, floored to the euro")
    max_monthly_payment: float = Field(default=0.0, ge=0, description="Monthly budget the loan must fit in")
    converged: bool = Field(default=True, description="Solver reached the payment tolerance")
    iterations: int = Field(default=0, ge=0, description="Solver iterations performed")

    model_config = {"frozen": True}
