from .local import *  # noqa

DEBUG = False

ALLOWED_HOSTS = ['testserver', 'localhost']

# Los tests nunca hablan con el CRM real
LEAD_BACKEND = 'leads.backends.locmem.LocmemLeadBackend'
CRM_WEBHOOK_URL = ''
RUB_RATE = None
CATALOG_DATA_FILE = None
PRICING_DATA_FILE = None
