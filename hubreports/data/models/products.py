from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field

WEIGHT_UNITS = {1.0: "g", 1000.0: "kg", 1000000.0: "T"}
VOLUME_UNITS = {0.001: "mL", 1.0: "L", 1000.0: "kL"}


def _format_quantity(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def unit_scale_factor(variant_unit: Optional[str]) -> float:
    """Divisor turning unit values into report units (grams to kilograms for weight)."""
    return 1000.0 if variant_unit == "weight" else 1.0


class ProductResponse(BaseModel):
    """Response model for product data."""
    product_id: int = Field(description="Unique product identifier")
    name: str = Field(description="Product name")
    supplier_id: int = Field(description="Enterprise producing the product")
    variant_unit: Literal["weight", "volume", "items"] = Field(default="weight", description="Unit family for variants")
    variant_unit_scale: Optional[float] = Field(default=1.0, description="Scale of the displayed unit (1 = g or L)")
    variant_unit_name: Optional[str] = Field(default=None, description="Unit name for item based products")

    @property
    def scale_factor(self) -> float:
        return unit_scale_factor(self.variant_unit)


class VariantResponse(BaseModel):
    """Response model for variant data."""
    variant_id: int = Field(description="Unique variant identifier")
    product_id: int = Field(description="Product this variant belongs to")
    sku: Optional[str] = Field(default=None, description="Stock keeping unit code")
    unit_value: Optional[float] = Field(default=None, description="Amount of product per unit, in base units")
    unit_description: Optional[str] = Field(default=None, description="Free text unit description, e.g. 'Big'")
    display_name: Optional[str] = Field(default=None, description="Optional variant display name")
    price: float = Field(description="Current cost per unit")

    def unit_presentation(self, product: ProductResponse) -> str:
        if self.unit_value is None:
            return ""
        if product.variant_unit == "items":
            name = product.variant_unit_name or "items"
            return f"{_format_quantity(self.unit_value)} {name}"
        scale = product.variant_unit_scale or 1.0
        units = WEIGHT_UNITS if product.variant_unit == "weight" else VOLUME_UNITS
        unit = units.get(scale, "")
        return f"{_format_quantity(self.unit_value / scale)}{unit}"

    def options_text(self, product: ProductResponse) -> str:
        parts = [self.unit_presentation(product), self.unit_description or ""]
        return " ".join(p for p in parts if p)

    def full_name(self, product: ProductResponse) -> str:
        unit = self.options_text(product)
        display = self.display_name or ""
        if not display:
            return unit
        if unit.lower() in display.lower():
            return display
        if display.lower() in unit.lower():
            return unit
        return f"{display} ({unit})"
