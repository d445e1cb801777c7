import json
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Callable, Dict, Iterator, List, Optional

from django.utils import timezone

from catalog.catalog import PriceItem
from .storage import SessionStorage

logger = logging.getLogger(__name__)

Listener = Callable[["Cart"], None]


def pieces_for(item: PriceItem, tons: Decimal) -> int:
    """Whole pieces in ``tons`` of ``item``, rounded half up."""
    pieces = (tons * 1000 / item.weight_per_piece).quantize(Decimal('1'), rounding=ROUND_HALF_UP)
    return int(pieces)


@dataclass
class CartItem:
    id: str
    item: PriceItem
    quantity_tons: Decimal
    quantity_pieces: int
    quantity_meters: Decimal
    price_per_ton_tenge: Decimal
    price_per_ton_rub: Decimal
    total_price_tenge: Decimal
    total_price_rub: Decimal
    delivery_price: Decimal
    total_with_delivery: Decimal
    price_category: str
    added_at: datetime

    def set_quantity(self, tons: Decimal) -> None:
        """Recompute the derived quantities and totals; per-ton prices and delivery stay."""
        tons = Decimal(str(tons))
        self.quantity_tons = tons
        self.quantity_pieces = pieces_for(self.item, tons)
        self.quantity_meters = self.quantity_pieces * self.item.length_value
        self.total_price_tenge = self.price_per_ton_tenge * tons
        self.total_price_rub = self.price_per_ton_rub * tons
        self.total_with_delivery = self.total_price_tenge + self.delivery_price

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'item': self.item.to_dict(),
            'quantity_tons': str(self.quantity_tons),
            'quantity_pieces': self.quantity_pieces,
            'quantity_meters': str(self.quantity_meters),
            'price_per_ton_tenge': str(self.price_per_ton_tenge),
            'price_per_ton_rub': str(self.price_per_ton_rub),
            'total_price_tenge': str(self.total_price_tenge),
            'total_price_rub': str(self.total_price_rub),
            'delivery_price': str(self.delivery_price),
            'total_with_delivery': str(self.total_with_delivery),
            'price_category': self.price_category,
            'added_at': self.added_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CartItem':
        return cls(
            id=str(data['id']),
            item=PriceItem.from_dict(data['item']),
            quantity_tons=Decimal(data['quantity_tons']),
            quantity_pieces=int(data['quantity_pieces']),
            quantity_meters=Decimal(data['quantity_meters']),
            price_per_ton_tenge=Decimal(data['price_per_ton_tenge']),
            price_per_ton_rub=Decimal(data['price_per_ton_rub']),
            total_price_tenge=Decimal(data['total_price_tenge']),
            total_price_rub=Decimal(data['total_price_rub']),
            delivery_price=Decimal(data['delivery_price']),
            total_with_delivery=Decimal(data['total_with_delivery']),
            price_category=str(data.get('price_category', '')),
            added_at=datetime.fromisoformat(data['added_at']),
        )


class Cart:
    """
    Ordered cart lines, persisted wholesale after every mutation.
    Listeners registered with ``subscribe`` run after each save.
    """

    def __init__(self, storage):
        self.storage = storage
        self._listeners: List[Listener] = []
        self._items: List[CartItem] = self._load()

    def _load(self) -> List[CartItem]:
        raw = self.storage.load()
        if not raw:
            return []
        try:
            records = json.loads(raw)
            if not isinstance(records, list):
                raise TypeError(f"expected a list, got {type(records).__name__}")
            return [CartItem.from_dict(r) for r in records]
        except (ValueError, KeyError, TypeError, AttributeError, ArithmeticError) as exc:
            logger.warning("Could not load stored cart, starting empty: %s", exc)
            return []

    def save(self) -> None:
        self.storage.save(json.dumps([i.to_dict() for i in self._items], ensure_ascii=False))
        for listener in list(self._listeners):
            listener(self)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

    def add(self, item: PriceItem, quantity_tons, price_per_ton_tenge, price_per_ton_rub=Decimal('0'),
            delivery_price=Decimal('0'), price_category: str = '') -> CartItem:
        """
        Add a new line. Identical lines are never merged.
        """
        line = CartItem(
            id=uuid.uuid4().hex,
            item=item,
            quantity_tons=Decimal('0'),
            quantity_pieces=0,
            quantity_meters=Decimal('0'),
            price_per_ton_tenge=Decimal(str(price_per_ton_tenge)),
            price_per_ton_rub=Decimal(str(price_per_ton_rub)),
            total_price_tenge=Decimal('0'),
            total_price_rub=Decimal('0'),
            delivery_price=Decimal(str(delivery_price)),
            total_with_delivery=Decimal('0'),
            price_category=price_category,
            added_at=timezone.now(),
        )
        line.set_quantity(quantity_tons)
        self._items.append(line)
        self.save()
        return line

    def get(self, line_id: str) -> Optional[CartItem]:
        return next((i for i in self._items if i.id == line_id), None)

    def remove(self, line_id: str) -> None:
        line = self.get(line_id)
        if line is not None:
            self._items.remove(line)
            self.save()

    def update_quantity(self, line_id: str, quantity_tons) -> None:
        """
        Set the tonnage of a line. Dropping lines below the minimum is up to the caller.
        """
        line = self.get(line_id)
        if line is not None:
            line.set_quantity(quantity_tons)
            self.save()

    def clear(self) -> None:
        self._items = []
        self.save()

    def __iter__(self) -> Iterator[CartItem]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def get_total_items(self) -> int:
        return len(self._items)

    def get_total_price(self) -> Decimal:
        return sum((i.total_with_delivery for i in self._items), Decimal('0'))

    def get_item_count(self, catalog_id: int) -> int:
        return sum(1 for i in self._items if i.item.id == catalog_id)


def _log_change(cart: Cart) -> None:
    logger.debug("Cart saved: %d lines, total %s", len(cart), cart.get_total_price())


def get_cart(request) -> Cart:
    """The cart of this request's session, built once per request."""
    cart = getattr(request, '_cart', None)
    if cart is None:
        cart = Cart(SessionStorage(request.session))
        cart.subscribe(_log_change)
        request._cart = cart
    return cart
