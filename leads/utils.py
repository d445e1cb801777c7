from typing import Any, Dict, List

from django.utils import timezone

from catalog.pricing import format_amount

ORDER_FORM_TYPE = 'Заказ из корзины'
ORDER_SOURCE = 'Корзина АТЛАНТ МЕТАЛЛ'
CALLBACK_SOURCE = 'Сайт АТЛАНТ МЕТАЛЛ'


def cart_lines(cart) -> List[Dict[str, Any]]:
    """Structured cart records as the CRM expects them."""
    return [
        {
            'name': line.item.name,
            'size': line.item.size,
            'quantity': line.quantity_pieces,
            'weight': float(line.quantity_tons),
            'price': float(line.total_with_delivery),
            'branch': line.item.branch,
            'gost': line.item.gost,
        }
        for line in cart
    ]


def compose_order_comment(comment: str, lines: List[Dict[str, Any]], total) -> str:
    """
    User comment followed by a readable summary of the cart:

        Труба 89×4 - 98 шт. (1.00 т) - 510 000 ₸
    """
    summary = '\n'.join(
        f"{r['name']} {r['size']} - {r['quantity']} шт. ({r['weight']:.2f} т) - {format_amount(r['price'])} ₸"
        for r in lines
    )
    return (
        f"{comment}\n\n"
        f"Товары в корзине:\n{summary}\n\n"
        f"Общая стоимость: {format_amount(total)} ₸"
    )


def _timestamp() -> str:
    return timezone.now().isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def _client_meta(request) -> Dict[str, str]:
    return {
        'url': request.build_absolute_uri(),
        'userAgent': request.META.get('HTTP_USER_AGENT', ''),
        'timestamp': _timestamp(),
    }


def build_order_lead(cart, name: str, phone: str, comment: str, request) -> Dict[str, Any]:
    lines = cart_lines(cart)
    payload = {
        'name': name.strip(),
        'phone': phone.strip(),
        'formType': ORDER_FORM_TYPE,
        'comment': compose_order_comment(comment, lines, cart.get_total_price()),
        'productData': {'cartItems': lines},
        'source': ORDER_SOURCE,
    }
    payload.update(_client_meta(request))
    return payload


def build_callback_lead(name: str, phone: str, form_type: str, request) -> Dict[str, Any]:
    payload = {
        'name': name.strip(),
        'phone': phone.strip(),
        'formType': form_type,
        'comment': '',
        'productData': None,
        'source': CALLBACK_SOURCE,
    }
    payload.update(_client_meta(request))
    return payload
