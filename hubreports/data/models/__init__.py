from .data_filters import (
    ReportFilters,
    ReportOptions,
)

from .addresses import Address, ADDRESS_FIELDS, join_name_parts
from .order_cycles import OrderCycleResponse
from .products import ProductResponse, VariantResponse, unit_scale_factor
from .orders import (
    OrderResponse,
    REPORTABLE_STATES,
    line_amount,
    order_total_before_discount,
    is_paid,
)
from .vouchers import (
    VoucherRate,
    PercentageRate,
    FlatRate,
    Voucher,
    build_voucher,
)
from .list_response import (
    NamedOption,
    OptionList,
    DateBounds,
)

__all__ = [
    # Filter classes
    "ReportFilters",
    "ReportOptions",
    # Response models
    "Address",
    "ADDRESS_FIELDS",
    "OrderCycleResponse",
    "ProductResponse",
    "VariantResponse",
    "OrderResponse",
    "REPORTABLE_STATES",
    # Row level computations shared with the report frames
    "join_name_parts",
    "unit_scale_factor",
    "line_amount",
    "order_total_before_discount",
    "is_paid",
    # Vouchers
    "VoucherRate",
    "PercentageRate",
    "FlatRate",
    "Voucher",
    "build_voucher",
    # List response models
    "NamedOption",
    "OptionList",
    "DateBounds",
]
