#!/usr/bin/env python3
"""
seed_data.py

Generates a consistent fake food-hub data set to CSVs under a local folder (default: sample_data).

Entities:
- enterprises (producers and hubs), order_cycles, products, variants, orders, line_items, vouchers

Run:
  python -m hubreports.seed_data --scale small --days 14
"""

from __future__ import annotations
import argparse
import csv
import os
import random
import sys
from dataclasses import dataclass
from datetime import datetime, timedelta, date, time, timezone
from typing import Dict, List, Optional, Tuple

from hubreports.config import get_config
from hubreports.logging import get_logger

logger = get_logger(__name__)

# -----------------------------
# Config & helper structures
# -----------------------------

PRODUCE = {
    "weight": ["Baked Beans", "Carrots", "Potatoes", "Apples", "Honey", "Oats", "Cheddar"],
    "volume": ["Milk", "Apple Juice", "Olive Oil", "Kombucha"],
    "items": ["Eggs", "Sourdough Loaf", "Cauliflower", "Pumpkin"],
}

UNIT_DESCRIPTIONS = ["", "Big", "Small", "Organic", "Bunch"]

CITIES = ["The Shire", "Bree", "Rivendell", "Lake-town", "Dale", "Edoras"]
STREETS = ["Bagshot Row", "Hill Road", "Market Lane", "Mill Street", "Orchard Way"]
FIRST_NAMES = ["Frodo", "Sam", "Rosie", "Merry", "Pippin", "Bilbo", "Lobelia", "Hamfast"]
LAST_NAMES = ["Baggins", "Gamgee", "Cotton", "Brandybuck", "Took", "Proudfoot", "Sackville"]

SHIPPING_METHODS = [("Pickup", False), ("Home delivery", True)]
PAYMENT_METHODS = ["Cash", "Card", "Bank transfer"]
CUSTOMER_TAGS = ["", "member", "wholesale", "member, volunteer"]

@dataclass
class Scale:
    producers: int
    hubs: int
    products: int
    orders_estimate: int  # over the full window (rough target)

SCALES: Dict[str, Scale] = {
    "small":  Scale(5,   2,   30,    300),
    "medium": Scale(20,  6,  200,  5_000),
    "large":  Scale(80, 20, 1_000, 50_000),
}


# -----------------------------
# Utility functions
# -----------------------------

def ensure_dir(path: str) -> None:
    if not os.path.exists(path):
        os.makedirs(path, exist_ok=True)

def price_round(p: float) -> float:
    return round(max(p, 0.01), 2)

def random_address(rnd: random.Random) -> Dict[str, str]:
    return {
        "firstname": rnd.choice(FIRST_NAMES),
        "lastname": rnd.choice(LAST_NAMES),
        "address1": f"{rnd.randint(1, 200)} {rnd.choice(STREETS)}",
        "address2": "",
        "city": rnd.choice(CITIES),
        "zipcode": f"{rnd.randint(1000, 9999)}",
        "state": "Middle-earth",
        "phone": f"0{rnd.randint(400000000, 499999999)}",
    }


# -----------------------------
# Core generators
# -----------------------------

def gen_enterprises(scale: Scale, rnd: random.Random) -> List[Dict]:
    enterprises = []
    for i in range(1, scale.producers + scale.hubs + 1):
        is_hub = i > scale.producers
        address = random_address(rnd)
        enterprises.append({
            "enterprise_id": i,
            "name": f"{address['city']} {'Food Hub' if is_hub else 'Farm'} {i:02d}",
            "is_producer": not is_hub,
            "is_distributor": is_hub,
            **{k: v for k, v in address.items() if k not in ("firstname", "lastname")},
        })
    return enterprises

def gen_order_cycles(start_d: date, days: int) -> List[Dict]:
    """Weekly cycles over the window; the last one is still open (no close time)."""
    cycles = []
    weeks = max(1, (days + 6) // 7)
    for w in range(weeks):
        opens = datetime.combine(start_d + timedelta(days=7 * w), time(8, 0))
        closes = opens + timedelta(days=7)
        cycles.append({
            "order_cycle_id": w + 1,
            "name": f"Week {w + 1}",
            "orders_open_at": opens.isoformat(timespec="seconds"),
            "orders_close_at": "" if w == weeks - 1 else closes.isoformat(timespec="seconds"),
        })
    return cycles

def gen_products_and_variants(
    n: int, producer_ids: List[int], rnd: random.Random
) -> Tuple[List[Dict], List[Dict]]:
    products: List[Dict] = []
    variants: List[Dict] = []
    families = list(PRODUCE.items())
    for product_id in range(1, n + 1):
        unit, names = families[(product_id - 1) % len(families)]
        products.append({
            "product_id": product_id,
            "name": rnd.choice(names),
            "supplier_id": rnd.choice(producer_ids),
            "variant_unit": unit,
            "variant_unit_scale": {"weight": 1000, "volume": 1, "items": ""}[unit],
            "variant_unit_name": "each" if unit == "items" else "",
        })
        for desc in rnd.sample(UNIT_DESCRIPTIONS, k=rnd.randint(1, 2)):
            unit_value = {
                "weight": rnd.choice([250, 500, 1000, 2000]),
                "volume": rnd.choice([0.5, 1, 2]),
                "items": rnd.choice([1, 6, 12]),
            }[unit]
            variants.append({
                "variant_id": len(variants) + 1,
                "product_id": product_id,
                "sku": f"SKU{product_id:04d}{len(variants) + 1:03d}",
                "unit_value": unit_value,
                "unit_description": desc,
                "display_name": "",
                "price": price_round(rnd.uniform(1.0, 25.0)),
            })
    return products, variants

def gen_vouchers(hub_ids: List[int], rnd: random.Random) -> List[Dict]:
    vouchers = []
    for hub_id in hub_ids:
        vouchers.append({
            "code": f"HUB{hub_id}-10PCT", "enterprise_id": hub_id,
            "voucher_type": "percentage_rate", "amount": 10,
        })
        vouchers.append({
            "code": f"HUB{hub_id}-FIVE", "enterprise_id": hub_id,
            "voucher_type": "flat_rate", "amount": 5,
        })
    return vouchers

def gen_orders_and_items(
    hub_ids: List[int],
    cycles: List[Dict],
    variants: List[Dict],
    vouchers: List[Dict],
    start_dt: datetime,
    end_dt: datetime,
    orders_estimate: int,
    seed: int,
) -> Tuple[List[Dict], List[Dict]]:
    rnd = random.Random(seed + 777)
    total_seconds = int((end_dt - start_dt).total_seconds())
    vouchers_by_hub: Dict[int, List[str]] = {}
    for v in vouchers:
        vouchers_by_hub.setdefault(v["enterprise_id"], []).append(v["code"])

    orders: List[Dict] = []
    items: List[Dict] = []

    for order_id in range(1, orders_estimate + 1):
        completed = start_dt + timedelta(seconds=rnd.randint(0, max(1, total_seconds)))
        cycle = next(
            (c for c in cycles
             if datetime.fromisoformat(c["orders_open_at"]) <= completed
             and (not c["orders_close_at"] or completed < datetime.fromisoformat(c["orders_close_at"]))),
            None,
        )
        hub_id = rnd.choice(hub_ids)
        shipping, delivers = rnd.choice(SHIPPING_METHODS)
        state = rnd.choices(["complete", "canceled", "cart"], weights=[0.9, 0.05, 0.05])[0]
        bill = random_address(rnd)
        ship = bill if rnd.random() < 0.8 else random_address(rnd)
        use_voucher = rnd.random() < 0.15

        orders.append({
            "order_id": order_id,
            "number": f"R{100000000 + order_id}",
            "state": state,
            "completed_at": "" if state == "cart" else completed.isoformat(timespec="seconds"),
            "distributor_id": hub_id,
            "order_cycle_id": cycle["order_cycle_id"] if cycle else "",
            "email": f"{bill['firstname'].lower()}.{bill['lastname'].lower()}@example.com",
            "customer_code": f"C{rnd.randint(100, 999)}",
            "customer_tags": rnd.choice(CUSTOMER_TAGS),
            **{f"bill_{k}": v for k, v in bill.items()},
            **{f"ship_{k}": v for k, v in ship.items()},
            "shipping_method": shipping,
            "requires_delivery": delivers,
            "admin_and_handling_total": price_round(rnd.uniform(0.5, 3.0)),
            "ship_total": price_round(rnd.uniform(3.0, 9.0)) if delivers else 0.0,
            "payment_fee_total": rnd.choice([0.0, 0.3, 1.0]),
            "payment_method": rnd.choice(PAYMENT_METHODS),
            "payment_state": rnd.choices(["paid", "balance_due"], weights=[0.8, 0.2])[0],
            "special_instructions": rnd.choice(["", "", "Leave at the door", "Ring twice"]),
            "voucher_code": rnd.choice(vouchers_by_hub.get(hub_id, [""])) if use_voucher else "",
        })

        # basket size: 1–6, skew small
        basket_size = min(max(1, 1 + int(abs(rnd.gauss(1.0, 1.0)) * 2)), 6)
        for variant in rnd.sample(variants, k=min(basket_size, len(variants))):
            items.append({
                "line_item_id": len(items) + 1,
                "order_id": order_id,
                "variant_id": variant["variant_id"],
                "quantity": 1 if rnd.random() < 0.7 else rnd.randint(2, 6),
                "price": variant["price"],
                "fees_total": price_round(variant["price"] * 0.1),
            })

    return orders, items


# -----------------------------
# CSV writer
# -----------------------------

def write_csv(path: str, rows: List[Dict], headers: List[str]) -> None:
    with open(path, "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=headers)
        w.writeheader()
        for r in rows:
            w.writerow(r)


# -----------------------------
# Main
# -----------------------------

def main(argv: Optional[List[str]] = None) -> int:
    config = get_config()

    parser = argparse.ArgumentParser(description="Generate fake food-hub order data to CSVs.")
    parser.add_argument("--scale", choices=SCALES.keys(), default=config.default_seed_scale)
    parser.add_argument("--days", type=int, default=config.default_seed_days, help="Number of days of order history.")
    parser.add_argument("--start-date", type=str, default=None, help="YYYY-MM-DD (defaults to today - days + 1)")
    parser.add_argument("--output-dir", type=str, default=config.data_dir)
    parser.add_argument("--seed", type=int, default=config.default_seed_value)
    parser.add_argument("--no-overwrite", action="store_true", help="Fail if CSVs already exist.")
    args = parser.parse_args(argv)

    rnd = random.Random(args.seed)

    scale = SCALES[args.scale]
    outdir = args.output_dir
    ensure_dir(outdir)

    tables = ["enterprises", "order_cycles", "products", "variants", "orders", "line_items", "vouchers"]
    files = {t: os.path.join(outdir, f"{t}.csv") for t in tables}
    if args.no_overwrite:
        for p in files.values():
            if os.path.exists(p):
                print(f"Refusing to overwrite existing file: {p}", file=sys.stderr)
                return 2

    # time window
    if args.start_date:
        start_d = date.fromisoformat(args.start_date)
    else:
        start_d = (datetime.now(timezone.utc).date() - timedelta(days=args.days - 1))
    end_d = start_d + timedelta(days=args.days - 1)

    start_dt = datetime.combine(start_d, time(0, 0, 0))
    end_dt = datetime.combine(end_d, time(23, 59, 0))

    enterprises = gen_enterprises(scale, rnd)
    producer_ids = [e["enterprise_id"] for e in enterprises if e["is_producer"]]
    hub_ids = [e["enterprise_id"] for e in enterprises if e["is_distributor"]]
    cycles = gen_order_cycles(start_d, args.days)
    products, variants = gen_products_and_variants(scale.products, producer_ids, rnd)
    vouchers = gen_vouchers(hub_ids, rnd)
    orders, items = gen_orders_and_items(
        hub_ids=hub_ids,
        cycles=cycles,
        variants=variants,
        vouchers=vouchers,
        start_dt=start_dt,
        end_dt=end_dt,
        orders_estimate=scale.orders_estimate,
        seed=args.seed,
    )

    for name, rows in [
        ("enterprises", enterprises), ("order_cycles", cycles), ("products", products),
        ("variants", variants), ("orders", orders), ("line_items", items), ("vouchers", vouchers),
    ]:
        write_csv(files[name], rows, list(rows[0].keys()))

    logger.info(f"Generated data in {outdir}")
    logger.info(f" enterprises: {len(enterprises)} | order cycles: {len(cycles)} | products: {len(products)} | variants: {len(variants)}")
    logger.info(f" orders: {len(orders)} | line_items: {len(items)} | vouchers: {len(vouchers)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
