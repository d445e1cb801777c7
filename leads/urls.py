from django.urls import path
from . import views

app_name = 'leads'

urlpatterns = [
    path('order/', views.order_create, name='order_create'),
    path('order/retry/', views.order_retry, name='order_retry'),
    path('order/done/', views.order_done, name='order_done'),
    path('callback/', views.callback_request, name='callback_request'),
]
