"""
ReportRecord schema definition.

This TypedDict represents the normalized structure used across the whole
report pipeline. Every source (manual entry, spreadsheet upload, AI image
extraction) must map its output into these keys before it is merged into the
working record.

FIELD_SPECS is the single per-field descriptor table. The normalizer, the
alias resolver and the extraction prompt all read from it, so adding a field
means adding one entry here (plus the matching TypedDict key).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple, TypedDict, Union


class ReportRecord(TypedDict):
    store_name: str
    optimization_percent: str
    total_revenue: float

    revenue_coverage: float
    funnel_coverage: float
    widget_utilization: float

    product_rev: float
    post_purchase_rev: float
    checkout_rev: float
    thank_you_rev: float
    cart_rev: float
    other_rev: float

    widget1_name: str
    widget1_rev: float
    widget2_name: str
    widget2_rev: float
    widget3_name: str
    widget3_rev: float

    projected_current: float
    projected_optimized: float


class FieldKind(str, Enum):
    TEXT = "text"
    NUMBER = "number"
    SCORE = "score"


@dataclass(frozen=True)
class FieldSpec:
    kind: FieldKind
    fallback: Union[str, float]
    aliases: Tuple[str, ...] = ()
    clamp_range: Optional[Tuple[float, float]] = None
    prompt_hint: Optional[str] = None

    @property
    def is_numeric(self) -> bool:
        return self.kind is not FieldKind.TEXT


def _text(fallback: str = "", *aliases: str, hint: Optional[str] = None) -> FieldSpec:
    return FieldSpec(FieldKind.TEXT, fallback, aliases, prompt_hint=hint)


def _number(*aliases: str) -> FieldSpec:
    return FieldSpec(FieldKind.NUMBER, 0, aliases)


def _score(*aliases: str) -> FieldSpec:
    return FieldSpec(FieldKind.SCORE, 0, aliases, clamp_range=(0, 100))


FIELD_SPECS: Dict[str, FieldSpec] = {
    "store_name": _text("Unknown", "store name", "store", "shop name", "shop"),
    "optimization_percent": _text(
        "",
        "optimization percent",
        "optimization coverage",
        "optimization",
        "coverage percent",
        hint='string, e.g. "60-65"',
    ),
    "total_revenue": _number("total revenue", "revenue", "total wiser revenue", "wiser revenue"),
    "revenue_coverage": _score("revenue coverage"),
    "funnel_coverage": _score("funnel coverage"),
    "widget_utilization": _score("widget utilization"),
    "product_rev": _number("product rev", "product page", "product page revenue", "product revenue"),
    "post_purchase_rev": _number(
        "post purchase rev", "post purchase", "post-purchase", "post purchase revenue"
    ),
    "checkout_rev": _number("checkout rev", "checkout", "checkout revenue"),
    "thank_you_rev": _number("thank you rev", "thank you", "thankyou", "thank you revenue"),
    "cart_rev": _number("cart rev", "cart", "cart revenue"),
    "other_rev": _number("other rev", "other", "others", "other revenue"),
    "widget1_name": _text("", "widget 1 name", "top widget 1 name", "first widget name"),
    "widget1_rev": _number(
        "widget 1 rev", "widget 1 revenue", "top widget 1 revenue", "first widget revenue"
    ),
    "widget2_name": _text("", "widget 2 name", "top widget 2 name", "second widget name"),
    "widget2_rev": _number(
        "widget 2 rev", "widget 2 revenue", "top widget 2 revenue", "second widget revenue"
    ),
    "widget3_name": _text("", "widget 3 name", "top widget 3 name", "third widget name"),
    "widget3_rev": _number(
        "widget 3 rev", "widget 3 revenue", "top widget 3 revenue", "third widget revenue"
    ),
    "projected_current": _number("projected current", "current monthly", "current projection"),
    "projected_optimized": _number(
        "projected optimized", "with optimization", "optimized projection"
    ),
}

TEXT_FIELDS = tuple(f for f, spec in FIELD_SPECS.items() if spec.kind is FieldKind.TEXT)
NUMERIC_FIELDS = tuple(f for f, spec in FIELD_SPECS.items() if spec.is_numeric)
SCORE_FIELDS = tuple(f for f, spec in FIELD_SPECS.items() if spec.kind is FieldKind.SCORE)

# Safe values every field falls back to when the working record lacks it.
DEFAULT_RECORD = ReportRecord(**{f: spec.fallback for f, spec in FIELD_SPECS.items()})

# Sample store shown when a new editing session starts.
INITIAL_RECORD = ReportRecord(
    store_name="Wooden Ships",
    optimization_percent="60-65",
    total_revenue=31371.00,
    revenue_coverage=65,
    funnel_coverage=55,
    widget_utilization=50,
    product_rev=24498.91,
    post_purchase_rev=5145.00,
    checkout_rev=862.85,
    thank_you_rev=450.00,
    cart_rev=149.00,
    other_rev=265.24,
    widget1_name="Related Products",
    widget1_rev=20163.21,
    widget2_name="Inspired by Your Views",
    widget2_rev=3311.90,
    widget3_name="Top Selling Products",
    widget3_rev=1438.00,
    projected_current=15685,
    projected_optimized=23685,
)
