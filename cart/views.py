from decimal import Decimal

from django.conf import settings
from django.contrib import messages
from django.shortcuts import redirect, render
from django.urls import reverse
from django.views.decorators.http import require_POST

from catalog.catalog import get_item_or_404
from catalog.pricing import quote
from .cart import get_cart
from .forms import CartAddProductForm, CartUpdateQuantityForm


@require_POST
def cart_add(request, item_id):
    cart = get_cart(request)
    item = get_item_or_404(item_id)
    form = CartAddProductForm(request.POST)
    price_list_url = reverse('catalog:price_list') + f'?tab={item.category}'
    if not form.is_valid():
        messages.error(request, 'Минимальный заказ — 0.1 тонны.')
        return redirect(price_list_url)

    if len(cart) >= settings.CART_MAX_LINES:
        messages.error(
            request,
            f'В корзине уже {len(cart)} позиций, это максимум. Оформите заказ или удалите лишние позиции.',
        )
        return redirect(price_list_url)

    tons = form.cleaned_data['tons']
    q = quote(item, tons)
    cart.add(
        item=item,
        quantity_tons=tons,
        price_per_ton_tenge=q.price_per_ton_tenge,
        price_per_ton_rub=q.price_per_ton_rub,
        delivery_price=q.delivery_price,
        price_category=q.price_category,
    )
    messages.success(request, f'{item.title} добавлен в корзину')
    return redirect(price_list_url)


@require_POST
def cart_update_quantity(request, line_id):
    """Stepper +/-: below the minimum tonnage the line is dropped."""
    cart = get_cart(request)
    line = cart.get(line_id)
    form = CartUpdateQuantityForm(request.POST)
    if line is None or not form.is_valid():
        return redirect('cart:cart_detail')

    tons = form.new_tons(line.quantity_tons)
    if tons < Decimal(str(settings.CART_MIN_TONS)):
        cart.remove(line_id)
    else:
        cart.update_quantity(line_id, tons)
    return redirect('cart:cart_detail')


@require_POST
def cart_remove(request, line_id):
    cart = get_cart(request)
    cart.remove(line_id)
    return redirect('cart:cart_detail')


@require_POST
def cart_clear(request):
    cart = get_cart(request)
    cart.clear()
    return redirect('cart:cart_detail')


def cart_detail(request):
    cart = get_cart(request)
    return render(request, 'cart/detail.html', {'cart': cart})
