from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from decimal import Decimal
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional

from django.conf import settings
from django.http import Http404


@dataclass(frozen=True)
class PriceItem:
    """Reference product row of the price list. Loaded once, never mutated."""
    id: int
    category: str
    name: str
    size: str
    steel_grade: str
    gost: str
    branch: str
    weight_per_piece: Decimal  # kg
    length_value: Decimal      # meters per piece
    price_per_ton: Decimal     # base price, tenge

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PriceItem":
        return cls(
            id=int(data["id"]),
            category=str(data["category"]),
            name=str(data["name"]),
            size=str(data["size"]),
            steel_grade=str(data.get("steel_grade", "")),
            gost=str(data.get("gost", "")),
            branch=str(data["branch"]),
            weight_per_piece=Decimal(str(data["weight_per_piece"])),
            length_value=Decimal(str(data["length_value"])),
            price_per_ton=Decimal(str(data.get("price_per_ton", "0"))),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        # Decimal se guarda como str (igual que el precio en la sesión)
        for key in ("weight_per_piece", "length_value", "price_per_ton"):
            data[key] = str(data[key])
        return data

    @property
    def title(self) -> str:
        return f"{self.name} {self.size}"


@dataclass
class Highlight:
    title: str
    amount: str
    city: str
    status: str


@dataclass
class Category:
    slug: str
    title: str
    subtitle: str = ""
    description: str = ""
    cta_label: str = ""
    order_label: str = ""
    highlights_title: str = ""
    highlights: List[Highlight] = field(default_factory=list)


@dataclass
class Catalog:
    categories: List[Category]
    items: List[PriceItem]

    def get_item(self, item_id: int) -> PriceItem:
        for item in self.items:
            if item.id == item_id:
                return item
        raise KeyError(item_id)

    def items_for(self, category_slug: str) -> List[PriceItem]:
        return [i for i in self.items if i.category == category_slug]

    def get_category(self, slug: Optional[str]) -> Category:
        """Category by slug; unknown or empty slugs fall back to the first tab."""
        for category in self.categories:
            if category.slug == slug:
                return category
        return self.categories[0]


def default_catalog_path() -> Path:
    configured = getattr(settings, "CATALOG_DATA_FILE", None)
    if configured:
        return Path(configured)
    return Path(__file__).resolve().parent / "data" / "catalog.json"


def load_catalog(path: Optional[Path] = None) -> Catalog:
    data_path = Path(path) if path else default_catalog_path()
    data = json.loads(data_path.read_text(encoding="utf-8"))
    categories = [
        Category(
            slug=c["slug"],
            title=c["title"],
            subtitle=c.get("subtitle", ""),
            description=c.get("description", ""),
            cta_label=c.get("cta_label", ""),
            order_label=c.get("order_label", ""),
            highlights_title=c.get("highlights_title", ""),
            highlights=[Highlight(**h) for h in c.get("highlights", [])],
        )
        for c in data.get("categories", [])
    ]
    if not categories:
        raise ValueError(f"Catalog {data_path} defines no categories")
    items = [PriceItem.from_dict(d) for d in data.get("items", [])]
    return Catalog(categories=categories, items=items)


@lru_cache(maxsize=1)
def get_catalog() -> Catalog:
    return load_catalog()


def get_item_or_404(item_id: int) -> PriceItem:
    try:
        return get_catalog().get_item(int(item_id))
    except (KeyError, ValueError):
        raise Http404(f"No price item {item_id}")
