"""
CRM (Bitrix24) lead configuration.
Imported from local.py; can also be imported on its own.
"""
import os

CRM_WEBHOOK_URL = os.environ.get('CRM_WEBHOOK_URL', '')
CRM_TIMEOUT = float(os.environ.get('CRM_TIMEOUT', 15))
LEAD_BACKEND = os.environ.get('LEAD_BACKEND', 'leads.backends.bitrix.BitrixLeadBackend')

# Sin webhook, los leads se escriben en el log
if not CRM_WEBHOOK_URL and LEAD_BACKEND.endswith('BitrixLeadBackend'):
    LEAD_BACKEND = 'leads.backends.console.ConsoleLeadBackend'
