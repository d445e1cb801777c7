from decimal import Decimal

from django import forms
from django.conf import settings


class CartAddProductForm(forms.Form):
    tons = forms.DecimalField(
        label='Тонн', min_value=Decimal('0.1'), max_digits=8, decimal_places=2, initial=Decimal('1'),
        widget=forms.NumberInput(attrs={'class': 'form-control', 'step': '0.1'}),
    )


class CartUpdateQuantityForm(forms.Form):
    """Stepper buttons send ``direction``; a typed value comes in ``tons``."""
    DIRECTION_CHOICES = (
        ('up', '+'),
        ('down', '-'),
    )
    direction = forms.ChoiceField(choices=DIRECTION_CHOICES, required=False)
    tons = forms.DecimalField(min_value=Decimal('0'), max_digits=8, decimal_places=2, required=False)

    def clean(self):
        cleaned_data = super().clean()
        if not cleaned_data.get('direction') and cleaned_data.get('tons') is None:
            raise forms.ValidationError('Укажите количество тонн.')
        return cleaned_data

    def new_tons(self, current: Decimal) -> Decimal:
        cd = self.cleaned_data
        if cd.get('tons') is not None and not cd.get('direction'):
            return cd['tons']
        step = Decimal(str(settings.CART_TONS_STEP))
        if cd['direction'] == 'up':
            return current + step
        return current - step
