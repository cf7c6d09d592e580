from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path
from typing import Dict, List

import pandas as pd
import pytest

from hubreports.config import set_config_for_test
from hubreports.data.backends.csv_backend import SCHEMAS, CsvDataAccess

NOW = datetime(2026, 10, 19, 12, 0, 0)


class DatasetBuilder:
    """Collects rows for each CSV table and writes them to a data directory."""

    def __init__(self) -> None:
        self.tables: Dict[str, List[dict]] = {t: [] for t in SCHEMAS}

    def _add(self, table: str, id_column: str, **fields) -> int:
        row_id = fields.pop(id_column, None) or len(self.tables[table]) + 1
        self.tables[table].append({id_column: row_id, **fields})
        return row_id

    def enterprise(self, name: str, producer: bool = False, distributor: bool = False, **fields) -> int:
        return self._add(
            "enterprises", "enterprise_id", name=name, is_producer=producer, is_distributor=distributor, **fields
        )

    def order_cycle(self, name: str, opens: datetime = None, closes: datetime = None) -> int:
        return self._add(
            "order_cycles", "order_cycle_id", name=name,
            orders_open_at=opens.isoformat() if opens else "",
            orders_close_at=closes.isoformat() if closes else "",
        )

    def product(self, name: str, supplier_id: int, variant_unit: str = "weight", variant_unit_scale=1, **fields) -> int:
        return self._add(
            "products", "product_id", name=name, supplier_id=supplier_id,
            variant_unit=variant_unit, variant_unit_scale=variant_unit_scale, **fields,
        )

    def variant(self, product_id: int, unit_description: str = "", unit_value=1, price: float = 10.0, **fields) -> int:
        variant_id = len(self.tables["variants"]) + 1
        fields.setdefault("sku", f"SKU{variant_id:03d}")
        return self._add(
            "variants", "variant_id", product_id=product_id, unit_description=unit_description,
            unit_value=unit_value, price=price, **fields,
        )

    def order(self, distributor_id: int, completed_at: datetime = None, state: str = "complete", **fields) -> int:
        order_id = len(self.tables["orders"]) + 1
        fields.setdefault("number", f"R{order_id:09d}")
        fields.setdefault("bill_firstname", "Bilbo")
        fields.setdefault("bill_lastname", "ABRA")
        fields.setdefault("email", "bilbo@example.com")
        fields.setdefault("payment_state", "paid")
        return self._add(
            "orders", "order_id", distributor_id=distributor_id,
            completed_at=completed_at.isoformat() if completed_at else "", state=state, **fields,
        )

    def line_item(self, order_id: int, variant_id: int, quantity: int, price: float = 10.0, fees_total: float = 0.0) -> int:
        return self._add(
            "line_items", "line_item_id", order_id=order_id, variant_id=variant_id,
            quantity=quantity, price=price, fees_total=fees_total,
        )

    def voucher(self, code: str, enterprise_id: int, amount: float, voucher_type: str = "percentage_rate") -> None:
        self.tables["vouchers"].append(
            {"code": code, "enterprise_id": enterprise_id, "voucher_type": voucher_type, "amount": amount}
        )

    def write(self, data_dir: Path) -> Path:
        data_dir.mkdir(parents=True, exist_ok=True)
        for table, rows in self.tables.items():
            pd.DataFrame(rows, columns=list(SCHEMAS[table])).to_csv(data_dir / f"{table}.csv", index=False)
        return data_dir


@dataclass
class FoodHub:
    """Ids of the shared scenario: one hub, one producer, two variants of Baked Beans."""
    builder: DatasetBuilder
    distributor: int
    supplier: int
    order_cycle: int
    product: int
    variant_big: int
    variant_small: int
    order1: int
    order2: int


@pytest.fixture(autouse=True)
def test_config():
    set_config_for_test(log_level="WARNING")
    yield


@pytest.fixture
def builder() -> DatasetBuilder:
    return DatasetBuilder()


@pytest.fixture
def food_hub(builder: DatasetBuilder) -> FoodHub:
    distributor = builder.enterprise(
        "Distributor", distributor=True, address1="distributor address", city="The Shire", zipcode="1234"
    )
    supplier = builder.enterprise("Supplier Name", producer=True)
    order_cycle = builder.order_cycle("My Order Cycle", opens=NOW - timedelta(hours=2000))
    product = builder.product("Baked Beans", supplier)
    variant_big = builder.variant(product, "Big")
    variant_small = builder.variant(product, "Small")
    order1 = builder.order(
        distributor, NOW - timedelta(hours=1500), order_cycle_id=order_cycle, shipping_method="Pickup",
    )
    order2 = builder.order(
        distributor, NOW - timedelta(hours=1700), order_cycle_id=order_cycle, shipping_method="Home delivery",
        requires_delivery=True, ship_total=5.0,
    )
    # order1 has two line items / variants, order2 has one
    builder.line_item(order1, variant_big, 1)
    builder.line_item(order1, variant_small, 3)
    builder.line_item(order2, variant_big, 2)
    return FoodHub(
        builder=builder,
        distributor=distributor,
        supplier=supplier,
        order_cycle=order_cycle,
        product=product,
        variant_big=variant_big,
        variant_small=variant_small,
        order1=order1,
        order2=order2,
    )


@pytest.fixture
def load(tmp_path):
    """Write a builder's tables to a temp directory and open it."""
    def _load(b: DatasetBuilder) -> CsvDataAccess:
        return CsvDataAccess(data_dir=b.write(tmp_path / "data"))
    return _load
