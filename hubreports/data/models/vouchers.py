from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Literal, Protocol, Union

from pydantic import BaseModel, Field


class HasPreDiscountTotal(Protocol):
    @property
    def pre_discount_total(self) -> float:
        ...


class VoucherRate(BaseModel, ABC):
    """Common fields for vouchers; subclasses decide how the discount is computed."""
    code: str = Field(min_length=1, description="Code the customer enters at checkout")
    enterprise_id: int = Field(description="Hub offering the voucher")

    @abstractmethod
    def compute_amount(self, order: HasPreDiscountTotal) -> float:
        """Signed adjustment to the order total (negative for a discount)."""


class PercentageRate(VoucherRate):
    """Discount of a fixed percentage of the order's pre-discount total."""
    voucher_type: Literal["percentage_rate"] = "percentage_rate"
    amount: float = Field(gt=0, le=100, description="Percentage taken off the order, in (0, 100]")

    def compute_amount(self, order: HasPreDiscountTotal) -> float:
        # Negative: the adjustment is subtracted from the order total.
        return -(order.pre_discount_total * self.amount / 100)


class FlatRate(VoucherRate):
    """Discount of a fixed amount, never more than the order itself."""
    voucher_type: Literal["flat_rate"] = "flat_rate"
    amount: float = Field(gt=0, description="Amount taken off the order")

    def compute_amount(self, order: HasPreDiscountTotal) -> float:
        return -min(self.amount, order.pre_discount_total)


Voucher = Union[PercentageRate, FlatRate]

VOUCHER_TYPES = {
    "percentage_rate": PercentageRate,
    "flat_rate": FlatRate,
}


def build_voucher(voucher_type: str, **fields) -> Voucher:
    """Construct and validate a voucher of the given type.

    Raises:
        ValueError: If the voucher type is unknown.
        pydantic.ValidationError: If the amount is missing or out of range.
    """
    cls = VOUCHER_TYPES.get(voucher_type)
    if cls is None:
        raise ValueError(f"Unknown voucher type: {voucher_type}")
    return cls(**fields)
