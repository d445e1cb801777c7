from django.urls import include, path

urlpatterns = [
    path('cart/', include('cart.urls', namespace='cart')),
    path('leads/', include('leads.urls', namespace='leads')),
    path('', include('catalog.urls', namespace='catalog')),
]
