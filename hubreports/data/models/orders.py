from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field

from .addresses import ADDRESS_FIELDS, Address

REPORTABLE_STATES = ("complete", "resumed")


# The helpers below take scalars or pandas Series alike, so the backend and
# report frames compute exactly what the model properties do.

def line_amount(quantity, price):
    """Cost of a line item at the price paid."""
    return quantity * price


def order_total_before_discount(
    item_total, line_fees_total, admin_and_handling_total, ship_total, payment_fee_total
):
    return item_total + line_fees_total + admin_and_handling_total + ship_total + payment_fee_total


def is_paid(payment_state):
    return payment_state == "paid"


class OrderResponse(BaseModel):
    """Response model for order data."""
    order_id: int = Field(description="Unique order identifier")
    number: str = Field(description="Customer facing order number")
    state: str = Field(default="complete", description="Checkout state, e.g. cart, complete, resumed, canceled")
    completed_at: Optional[datetime] = Field(default=None, description="When checkout completed")
    distributor_id: int = Field(description="Hub the order was placed with")
    order_cycle_id: Optional[int] = Field(default=None, description="Order cycle the order belongs to")
    email: Optional[str] = Field(default=None, description="Customer email")
    customer_code: Optional[str] = Field(default=None, description="Hub specific customer code")
    customer_tags: Optional[str] = Field(default=None, description="Comma separated customer tags")
    bill_address: Address = Field(default_factory=Address, description="Billing address")
    ship_address: Address = Field(default_factory=Address, description="Shipping address")
    shipping_method: Optional[str] = Field(default=None, description="Name of the chosen shipping method")
    requires_delivery: bool = Field(default=False, description="Whether the shipping method delivers")
    admin_and_handling_total: float = Field(default=0.0, description="Order level enterprise fees")
    ship_total: float = Field(default=0.0, description="Shipping fees")
    payment_fee_total: float = Field(default=0.0, description="Payment method fees")
    payment_method: Optional[str] = Field(default=None, description="Name of the payment method")
    payment_state: Optional[str] = Field(default=None, description="Payment state, 'paid' once settled")
    special_instructions: Optional[str] = Field(default=None, description="Customer comments")
    voucher_code: Optional[str] = Field(default=None, description="Voucher applied to the order")
    item_total: float = Field(default=0.0, description="Sum of line item costs")
    line_fees_total: float = Field(default=0.0, description="Sum of fees charged on line items")

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "OrderResponse":
        """Build an order from a flat row using ``bill_*`` / ``ship_*`` address columns."""
        data = {k: v for k, v in record.items() if v is not None}
        for prefix in ("bill", "ship"):
            data[f"{prefix}_address"] = Address(
                **{f: data.pop(f"{prefix}_{f}") for f in ADDRESS_FIELDS if f"{prefix}_{f}" in data}
            )
        return cls.model_validate(data)

    @property
    def pre_discount_total(self) -> float:
        return order_total_before_discount(
            self.item_total,
            self.line_fees_total,
            self.admin_and_handling_total,
            self.ship_total,
            self.payment_fee_total,
        )

    @property
    def paid(self) -> bool:
        return is_paid(self.payment_state)
