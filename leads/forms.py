import uuid

from django import forms


class LeadContactForm(forms.Form):
    # CharField recorta espacios: un nombre de solo espacios no pasa la validación
    name = forms.CharField(
        label='Ваше имя', max_length=100,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Введите ваше имя'}),
    )
    phone = forms.CharField(
        label='Номер телефона', max_length=30,
        widget=forms.TextInput(attrs={'class': 'form-control', 'type': 'tel', 'placeholder': '+7 (747) 219-93-69'}),
    )

    error_notice = 'Пожалуйста, заполните имя и телефон'


class OrderForm(LeadContactForm):
    comment = forms.CharField(
        label='Комментарий', required=False, max_length=2000,
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 3, 'placeholder': 'Дополнительная информация...'}),
    )
    # nuevo token en cada formulario sin enviar; se consume al enviar el pedido
    submit_token = forms.CharField(max_length=64, initial=lambda: uuid.uuid4().hex, widget=forms.HiddenInput())


class CallbackForm(LeadContactForm):
    form_type = forms.CharField(required=False, max_length=200, widget=forms.HiddenInput())

    def clean_form_type(self):
        return self.cleaned_data.get('form_type') or 'Обратный звонок'
