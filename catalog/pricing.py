from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path
from typing import Dict, List, Optional

from django.conf import settings

from .catalog import PriceItem

logger = logging.getLogger(__name__)


@dataclass
class PriceCategory:
    code: str
    name: str
    min_tons: Decimal
    markup_percent: Decimal


@dataclass
class PricingConfig:
    rub_rate: Decimal  # tenge por rublo
    categories: List[PriceCategory]
    default_delivery_rate: Decimal
    delivery_rates: Dict[str, Decimal] = field(default_factory=dict)

    def delivery_rate(self, branch: str) -> Decimal:
        return self.delivery_rates.get(branch, self.default_delivery_rate)

    def category_for(self, tons: Decimal) -> PriceCategory:
        eligible = [c for c in self.categories if c.min_tons <= tons]
        if not eligible:
            return self.categories[0]
        return max(eligible, key=lambda c: c.min_tons)


@dataclass(frozen=True)
class Quote:
    price_per_ton_tenge: Decimal
    price_per_ton_rub: Decimal
    delivery_price: Decimal
    price_category: str


_DEFAULT_CONFIG = PricingConfig(
    rub_rate=Decimal("5.60"),
    categories=[PriceCategory(code="retail", name="Розница", min_tons=Decimal("0"), markup_percent=Decimal("0"))],
    default_delivery_rate=Decimal("12000"),
)


def _data_path() -> Path:
    configured = getattr(settings, "PRICING_DATA_FILE", None)
    if configured:
        return Path(configured)
    return Path(__file__).resolve().parent / "data" / "pricing.json"


def load_config(path: Optional[Path] = None) -> PricingConfig:
    data_path = Path(path) if path else _data_path()
    cfg = _DEFAULT_CONFIG
    if data_path.exists():
        try:
            data = json.loads(data_path.read_text(encoding="utf-8"))
            delivery = data.get("delivery", {})
            categories = [
                PriceCategory(
                    code=c["code"],
                    name=c["name"],
                    min_tons=Decimal(str(c.get("min_tons", "0"))),
                    markup_percent=Decimal(str(c.get("markup_percent", "0"))),
                )
                for c in data.get("categories", [])
            ]
            cfg = PricingConfig(
                rub_rate=Decimal(str(data.get("rub_rate", _DEFAULT_CONFIG.rub_rate))),
                categories=categories or _DEFAULT_CONFIG.categories,
                default_delivery_rate=Decimal(str(delivery.get("default_rate", _DEFAULT_CONFIG.default_delivery_rate))),
                delivery_rates={k: Decimal(str(v)) for k, v in delivery.get("branches", {}).items()},
            )
        except (ValueError, KeyError, TypeError, ArithmeticError) as exc:
            logger.warning("Invalid pricing file %s, using defaults: %s", data_path, exc)
            cfg = _DEFAULT_CONFIG

    # RUB_RATE en el entorno pisa el valor del fichero
    rub_rate = getattr(settings, "RUB_RATE", None)
    if rub_rate:
        cfg = PricingConfig(
            rub_rate=Decimal(str(rub_rate)),
            categories=cfg.categories,
            default_delivery_rate=cfg.default_delivery_rate,
            delivery_rates=cfg.delivery_rates,
        )
    return cfg


def _whole(value: Decimal) -> Decimal:
    return value.quantize(Decimal("1"), rounding=ROUND_HALF_UP)


def quote(item: PriceItem, tons: Decimal, config: Optional[PricingConfig] = None) -> Quote:
    """Per-ton prices in both currencies, price category and delivery for ``tons`` of ``item``."""
    tons = Decimal(str(tons))
    if tons <= 0:
        raise ValueError("tons must be > 0")
    cfg = config or load_config()
    category = cfg.category_for(tons)
    per_ton = _whole(item.price_per_ton * (1 + category.markup_percent / Decimal(100)))
    per_ton_rub = (per_ton / cfg.rub_rate).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return Quote(
        price_per_ton_tenge=per_ton,
        price_per_ton_rub=per_ton_rub,
        delivery_price=_whole(cfg.delivery_rate(item.branch) * tons),
        price_category=category.code,
    )


def format_amount(value) -> str:
    """Whole tenge grouped by thousands with spaces: 1010000 -> '1 010 000'."""
    whole = int(_whole(Decimal(str(value))))
    return f"{whole:,}".replace(",", " ")
