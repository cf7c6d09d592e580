from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd
from pydantic import ValidationError

from ..frames import frame_records, match, to_naive_timestamp
from ..interface import DataAccess
from ..models import (
    ReportFilters, OrderCycleResponse, OrderResponse, ProductResponse, VariantResponse,
    Voucher, build_voucher, NamedOption, OptionList, DateBounds, REPORTABLE_STATES,
    ADDRESS_FIELDS, line_amount,
)
from ...config import get_config
from ...logging import get_logger


# Column kinds per table. Optional columns missing from a file are added empty.
SCHEMAS: Dict[str, Dict[str, str]] = {
    "enterprises": {
        "enterprise_id": "id", "name": "str", "is_producer": "bool", "is_distributor": "bool",
        **{c: "str" for c in ADDRESS_FIELDS},
    },
    "order_cycles": {
        "order_cycle_id": "id", "name": "str",
        "orders_open_at": "datetime", "orders_close_at": "datetime",
    },
    "products": {
        "product_id": "id", "name": "str", "supplier_id": "id",
        "variant_unit": "str", "variant_unit_scale": "float", "variant_unit_name": "str",
    },
    "variants": {
        "variant_id": "id", "product_id": "id", "sku": "str", "unit_value": "float",
        "unit_description": "str", "display_name": "str", "price": "float",
    },
    "orders": {
        "order_id": "id", "number": "str", "state": "str", "completed_at": "datetime",
        "distributor_id": "id", "order_cycle_id": "nullable_id",
        "email": "str", "customer_code": "str", "customer_tags": "str",
        **{f"bill_{c}": "str" for c in ADDRESS_FIELDS},
        **{f"ship_{c}": "str" for c in ADDRESS_FIELDS},
        "shipping_method": "str", "requires_delivery": "bool",
        "admin_and_handling_total": "float", "ship_total": "float", "payment_fee_total": "float",
        "payment_method": "str", "payment_state": "str", "special_instructions": "str",
        "voucher_code": "str",
    },
    "line_items": {
        "line_item_id": "id", "order_id": "id", "variant_id": "id",
        "quantity": "int", "price": "float", "fees_total": "float",
    },
    "vouchers": {
        "code": "str", "enterprise_id": "id", "voucher_type": "str", "amount": "float",
    },
}

REQUIRED_TABLES = ["enterprises", "order_cycles", "products", "variants", "orders", "line_items"]
OPTIONAL_TABLES = ["vouchers"]

# Money columns where a blank cell means zero
_ZERO_DEFAULTS = {"admin_and_handling_total", "ship_total", "payment_fee_total", "fees_total"}


@dataclass
class _Tables:
    enterprises: pd.DataFrame
    order_cycles: pd.DataFrame
    products: pd.DataFrame
    variants: pd.DataFrame
    orders: pd.DataFrame  # with item_total / line_fees_total from all line items
    line_items: pd.DataFrame
    vouchers: Dict[str, Voucher]
    # Pre-joined "lines" view to avoid re-joining every call
    lines: pd.DataFrame  # columns after join; see _build_lines()


class CsvDataAccess(DataAccess):
    """
    CSV-backed implementation.
    - Loads CSVs from `data_dir` once at construction.
    - Every method call performs a fresh filter pass over the loaded frames
      and hands back copies, so the loaded snapshot is never mutated.
    """

    def __init__(self, data_dir: str | Path = None) -> None:
        self.logger = get_logger(__name__)
        if data_dir is None:
            config = get_config()
            data_dir = config.data_dir

        self.data_dir = Path(data_dir)

        # If the path is relative, make it relative to the repository root
        if not self.data_dir.is_absolute():
            current = Path.cwd()
            repo_root = None

            # Look up the directory tree for pyproject.toml
            for parent in [current] + list(current.parents):
                if (parent / "pyproject.toml").exists():
                    repo_root = parent
                    break

            if repo_root:
                self.data_dir = repo_root / self.data_dir
            else:
                # Fallback to current directory
                self.data_dir = current / self.data_dir

        self._tables = self._load_tables(self.data_dir)
        self.logger.info(
            f"Loaded {len(self._tables.orders)} orders and {len(self._tables.line_items)} "
            f"line items from {self.data_dir}"
        )

    # ---------- loading / join helpers ----------

    @staticmethod
    def _read_table(path: Path, schema: Dict[str, str]) -> pd.DataFrame:
        df = pd.read_csv(path, dtype=str)
        for col, kind in schema.items():
            if col not in df.columns:
                df[col] = None
            if kind == "id":
                df[col] = pd.to_numeric(df[col]).astype("int64")
            elif kind == "nullable_id":
                df[col] = pd.to_numeric(df[col]).astype("Int64")
            elif kind == "int":
                df[col] = pd.to_numeric(df[col]).fillna(0).astype("int64")
            elif kind == "float":
                values = pd.to_numeric(df[col]).astype(float)
                df[col] = values.fillna(0.0) if col in _ZERO_DEFAULTS else values
            elif kind == "bool":
                df[col] = df[col].fillna("").str.strip().str.lower().isin(["true", "t", "1", "yes"])
            elif kind == "datetime":
                values = pd.to_datetime(df[col], format="ISO8601")
                if getattr(values.dt, "tz", None) is not None:
                    values = values.dt.tz_convert("UTC").dt.tz_localize(None)
                df[col] = values
        return df[list(schema)]

    @staticmethod
    def _load_tables(data_dir: Path) -> _Tables:
        # Check if data directory exists
        if not data_dir.exists():
            raise FileNotFoundError(
                f"Data directory not found: {data_dir}\n"
                f"Please either:\n"
                f"  1. Generate sample data: python -m hubreports.seed_data\n"
                f"  2. Set DATA_DIR environment variable to point to your data directory\n"
                f"  3. Create a .env file with DATA_DIR=/path/to/your/data"
            )

        required_files = [f"{t}.csv" for t in REQUIRED_TABLES]
        missing_files = [f for f in required_files if not (data_dir / f).exists()]

        if missing_files:
            raise FileNotFoundError(
                f"Required CSV files missing in {data_dir}:\n"
                f"  Missing: {', '.join(missing_files)}\n"
                f"  Expected files: {', '.join(required_files)}\n\n"
                f"Please either:\n"
                f"  1. Generate sample data: python -m hubreports.seed_data\n"
                f"  2. Ensure your data directory contains all required CSV files\n"
                f"  3. Set DATA_DIR environment variable to point to a directory with the required files"
            )

        try:
            frames = {t: CsvDataAccess._read_table(data_dir / f"{t}.csv", SCHEMAS[t]) for t in REQUIRED_TABLES}
            for t in OPTIONAL_TABLES:
                path = data_dir / f"{t}.csv"
                frames[t] = (
                    CsvDataAccess._read_table(path, SCHEMAS[t]) if path.exists()
                    else pd.DataFrame(columns=list(SCHEMAS[t]))
                )
        except Exception as e:
            raise RuntimeError(
                f"Error reading CSV files from {data_dir}: {e}\n"
                f"Please check that the CSV files are valid and readable."
            ) from e

        try:
            vouchers = CsvDataAccess._build_vouchers(frames["vouchers"])
        except (ValidationError, ValueError) as e:
            raise RuntimeError(f"Invalid voucher configuration in {data_dir / 'vouchers.csv'}: {e}") from e

        try:
            orders = CsvDataAccess._build_order_totals(frames["orders"], frames["line_items"])
            lines = CsvDataAccess._build_lines(
                orders, frames["line_items"], frames["variants"], frames["products"],
                frames["enterprises"], frames["order_cycles"],
            )
        except (ValidationError, ValueError) as e:
            raise RuntimeError(
                f"Invalid product or order data in {data_dir}: {e}\n"
                f"Please check products.csv, variants.csv and orders.csv."
            ) from e

        return _Tables(
            enterprises=frames["enterprises"],
            order_cycles=frames["order_cycles"],
            products=frames["products"],
            variants=frames["variants"],
            orders=orders,
            line_items=frames["line_items"],
            vouchers=vouchers,
            lines=lines,
        )

    @staticmethod
    def _build_vouchers(vouchers: pd.DataFrame) -> Dict[str, Voucher]:
        out: Dict[str, Voucher] = {}
        for record in frame_records(vouchers):
            voucher_type = record.pop("voucher_type") or "percentage_rate"
            voucher = build_voucher(voucher_type, **{k: v for k, v in record.items() if v is not None})
            out[voucher.code] = voucher
        return out

    @staticmethod
    def _build_order_totals(orders: pd.DataFrame, line_items: pd.DataFrame) -> pd.DataFrame:
        totals = (
            line_items.assign(amount=line_amount(line_items["quantity"], line_items["price"]))
                      .groupby("order_id", as_index=False)
                      .agg(item_total=("amount", "sum"), line_fees_total=("fees_total", "sum"))
        )
        df = orders.merge(totals, on="order_id", how="left")
        df["item_total"] = df["item_total"].fillna(0.0).astype(float)
        df["line_fees_total"] = df["line_fees_total"].fillna(0.0).astype(float)
        return df

    @staticmethod
    def _variant_names(variants: pd.DataFrame, products: pd.DataFrame) -> pd.Series:
        product_models = {
            r["product_id"]: ProductResponse.model_validate(
                {k: v for k, v in r.items() if v is not None}
            )
            for r in frame_records(products)
        }
        names = {}
        for r in frame_records(variants):
            variant = VariantResponse.model_validate({k: v for k, v in r.items() if v is not None})
            product = product_models.get(variant.product_id)
            names[variant.variant_id] = variant.full_name(product) if product else (variant.display_name or "")
        return pd.Series(names, dtype=object)

    @staticmethod
    def _build_lines(
        orders: pd.DataFrame,
        line_items: pd.DataFrame,
        variants: pd.DataFrame,
        products: pd.DataFrame,
        enterprises: pd.DataFrame,
        order_cycles: pd.DataFrame,
    ) -> pd.DataFrame:
        enterprise_names = enterprises.set_index("enterprise_id")["name"]
        cycle_names = order_cycles.set_index("order_cycle_id")["name"]

        df = (
            line_items.merge(
                variants.rename(columns={"price": "variant_price"}), on="variant_id", how="left"
            )
            .merge(
                products.rename(columns={"name": "product_name"}), on="product_id", how="left"
            )
            .merge(orders, on="order_id", how="inner")
            .copy()
        )
        # Ensure types
        df["quantity"] = df["quantity"].astype("int64")
        df["price"] = df["price"].astype(float)
        df["variant_price"] = df["variant_price"].astype(float)
        # Convenience fields
        df["variant_name"] = df["variant_id"].map(CsvDataAccess._variant_names(variants, products))
        df["producer"] = df["supplier_id"].map(enterprise_names)
        df["hub"] = df["distributor_id"].map(enterprise_names)
        df["order_cycle_name"] = df["order_cycle_id"].map(cycle_names)
        return df

    # ---------- contract helpers ----------

    @staticmethod
    def _filter_orders(df: pd.DataFrame, filters: ReportFilters) -> pd.DataFrame:
        df = df[df["state"].isin(REPORTABLE_STATES) & df["completed_at"].notna()]

        start = to_naive_timestamp(filters.completed_at_gt)
        end = to_naive_timestamp(filters.completed_at_lt)
        if start is not None:
            df = df[df["completed_at"] >= start]
        if end is not None:
            df = df[df["completed_at"] < end]

        df = match(df, "order_cycle_id", filters.order_cycle_id)
        df = match(df, "distributor_id", filters.distributor_id)
        return df

    # ---------- interface implementation ----------

    def get_date_bounds(self) -> Optional[DateBounds]:
        completed = self._tables.orders["completed_at"].dropna()
        if completed.empty:
            return None
        return DateBounds(
            start_ts=pd.to_datetime(completed.min()).to_pydatetime(),
            end_ts=pd.to_datetime(completed.max()).to_pydatetime(),
        )

    def list_order_cycles(self) -> List[OrderCycleResponse]:
        df = self._tables.order_cycles.sort_values("orders_open_at", ascending=False, na_position="last")
        return [
            OrderCycleResponse.model_validate({k: v for k, v in r.items() if v is not None})
            for r in frame_records(df)
        ]

    def get_order_cycle(self, order_cycle_id: int) -> Optional[OrderCycleResponse]:
        return next((oc for oc in self.list_order_cycles() if oc.order_cycle_id == order_cycle_id), None)

    def _list_enterprises(self, flag: str) -> OptionList:
        df = self._tables.enterprises
        df = df[df[flag]].sort_values("name")
        return OptionList(values=[
            NamedOption(id=int(r["enterprise_id"]), name=r["name"]) for r in frame_records(df)
        ])

    def list_distributors(self) -> OptionList:
        return self._list_enterprises("is_distributor")

    def list_suppliers(self) -> OptionList:
        return self._list_enterprises("is_producer")

    # Order data queries
    def get_orders(self, filters: ReportFilters) -> pd.DataFrame:
        df = self._filter_orders(self._tables.orders, filters)
        if filters.supplier_id:
            lines = match(self._tables.lines, "supplier_id", filters.supplier_id)
            df = df[df["order_id"].isin(lines["order_id"])]
        self.logger.debug(f"get_orders matched {len(df)} orders")
        return df.sort_values(["completed_at", "order_id"]).reset_index(drop=True)

    def get_order(self, order_id: int) -> Optional[OrderResponse]:
        df = self._tables.orders
        records = frame_records(df[df["order_id"] == order_id])
        if not records:
            return None
        return OrderResponse.from_record(records[0])

    # Line item data queries
    def get_line_items(self, filters: ReportFilters) -> pd.DataFrame:
        df = self._filter_orders(self._tables.lines, filters)
        df = match(df, "supplier_id", filters.supplier_id)
        self.logger.debug(f"get_line_items matched {len(df)} line items")
        return df.sort_values(["completed_at", "order_id", "line_item_id"]).reset_index(drop=True)

    # Voucher data queries
    def get_vouchers(self) -> Dict[str, Voucher]:
        return dict(self._tables.vouchers)
