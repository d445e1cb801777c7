from django.shortcuts import render

from cart.cart import get_cart
from cart.forms import CartAddProductForm
from .catalog import get_catalog


def _active_category(request):
    catalog = get_catalog()
    return catalog, catalog.get_category(request.GET.get('tab'))


def home(request):
    """Tabbed product section; each tab's call-to-action opens the call-back form."""
    catalog, category = _active_category(request)
    context = {
        'categories': catalog.categories,
        'category': category,
    }
    return render(request, 'catalog/home.html', context)


def price_list(request):
    catalog, category = _active_category(request)
    cart = get_cart(request)
    rows = [
        {'item': item, 'in_cart': cart.get_item_count(item.id)}
        for item in catalog.items_for(category.slug)
    ]
    context = {
        'categories': catalog.categories,
        'category': category,
        'rows': rows,
        'cart_product_form': CartAddProductForm(),
    }
    return render(request, 'catalog/price_list.html', context)
