import logging

from django.conf import settings
from django.contrib import messages
from django.shortcuts import redirect, render
from django.views.decorators.http import require_POST

from cart.cart import get_cart
from .backends import get_backend, LeadSubmissionError
from .forms import CallbackForm, OrderForm
from .submission import ERROR, IDLE, SUCCESS, OrderSubmission, claim_submit_token
from .utils import build_callback_lead, build_order_lead

logger = logging.getLogger(__name__)


def _render_order(request, form, submission, cart):
    return render(request, 'leads/order.html', {
        'form': form,
        'cart': cart,
        'state': submission.state,
        'error': submission.last_error,
    })


def order_create(request):
    cart = get_cart(request)
    submission = OrderSubmission(request.session)

    if submission.state == SUCCESS:
        return redirect('leads:order_done')

    if request.method != 'POST':
        if not len(cart) and submission.state == IDLE:
            messages.info(request, 'Корзина пуста. Добавьте товары из прайс-листа.')
            return redirect('cart:cart_detail')
        return _render_order(request, OrderForm(), submission, cart)

    if submission.state == ERROR:
        return _render_order(request, OrderForm(request.POST), submission, cart)

    if not len(cart):
        messages.info(request, 'Корзина пуста. Добавьте товары из прайс-листа.')
        return redirect('cart:cart_detail')

    form = OrderForm(request.POST)
    if not form.is_valid():
        messages.error(request, form.error_notice)
        return _render_order(request, form, submission, cart)

    cd = form.cleaned_data
    if not claim_submit_token(cd['submit_token']):
        logger.warning("Order form submitted twice, token %s", cd['submit_token'])
        messages.warning(request, 'Этот заказ уже отправлен. Дождитесь ответа или обновите страницу.')
        return _render_order(request, OrderForm(initial={k: cd[k] for k in ('name', 'phone', 'comment')}),
                             submission, cart)
    payload = build_order_lead(cart, cd['name'], cd['phone'], cd['comment'], request)
    result = submission.submit(cart, payload, get_backend())
    if result.success:
        return redirect('leads:order_done')
    return _render_order(request, form, submission, cart)


@require_POST
def order_retry(request):
    """Back from the error screen to the form, keeping what the user typed."""
    submission = OrderSubmission(request.session)
    if submission.state == ERROR:
        submission.retry()
    initial = {k: request.POST.get(k, '') for k in ('name', 'phone', 'comment')}
    return _render_order(request, OrderForm(initial=initial), submission, get_cart(request))


def order_done(request):
    submission = OrderSubmission(request.session)
    if submission.state != SUCCESS:
        return redirect('cart:cart_detail')
    # shown once, then the flow is idle again
    submission.close()
    return render(request, 'leads/order_done.html', {
        'close_delay': settings.ORDER_SUCCESS_CLOSE_DELAY,
    })


def callback_request(request):
    """Call-back form opened from the product tabs ("Заказать ...")."""
    if request.method == 'POST':
        form = CallbackForm(request.POST)
        if not form.is_valid():
            messages.error(request, form.error_notice)
            return render(request, 'leads/callback.html', {'form': form})

        cd = form.cleaned_data
        payload = build_callback_lead(cd['name'], cd['phone'], cd['form_type'], request)
        try:
            result = get_backend().send(payload)
        except LeadSubmissionError as e:
            logger.error("Callback lead failed: %s", e)
            result = None
        if result is None or not result.success:
            messages.error(request, 'Произошла ошибка при отправке. Попробуйте еще раз или позвоните нам напрямую.')
            return render(request, 'leads/callback.html', {'form': form})
        return render(request, 'leads/callback_done.html', {'form_type': cd['form_type']})

    form = CallbackForm(initial={'form_type': request.GET.get('form_type', '')})
    return render(request, 'leads/callback.html', {'form': form})
