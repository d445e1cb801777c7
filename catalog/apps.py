from django.apps import AppConfig


class CatalogConfig(AppConfig):
    name = 'catalog'

    def ready(self):
        # Cargar el catálogo al arrancar: un JSON roto debe fallar aquí y no en una vista
        from .catalog import get_catalog
        get_catalog()
