import json
import logging
from typing import Any, Dict, Optional

import requests
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from .base import BaseLeadBackend, LeadResult, LeadSubmissionError

logger = logging.getLogger(__name__)


class BitrixLeadBackend(BaseLeadBackend):
    """
    Creates a lead through a Bitrix24 inbound webhook (``crm.lead.add``).

    ``settings.CRM_WEBHOOK_URL`` is the webhook base, e.g.
    ``https://example.bitrix24.kz/rest/1/<token>``.
    """

    method = 'crm.lead.add.json'

    def __init__(self, webhook_url: Optional[str] = None, timeout: Optional[float] = None, session=None, **kwargs):
        super().__init__(**kwargs)
        self.webhook_url = (webhook_url or getattr(settings, 'CRM_WEBHOOK_URL', '') or '').rstrip('/')
        if not self.webhook_url:
            raise ImproperlyConfigured(
                "CRM_WEBHOOK_URL not found. Set it in the environment or use the console lead backend."
            )
        self.timeout = timeout if timeout is not None else getattr(settings, 'CRM_TIMEOUT', 15)
        self.session = session or requests.Session()

    def build_fields(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return {
            'TITLE': f"{payload.get('formType', 'Заявка')}: {payload.get('name', '')}",
            'NAME': payload.get('name', ''),
            'PHONE': [{'VALUE': payload.get('phone', ''), 'VALUE_TYPE': 'WORK'}],
            'COMMENTS': payload.get('comment', ''),
            'SOURCE_ID': 'WEB',
            'SOURCE_DESCRIPTION': f"{payload.get('source', '')} ({payload.get('url', '')})",
            'UF_CRM_PRODUCT_DATA': json.dumps(payload.get('productData') or {}, ensure_ascii=False),
            'UF_CRM_USER_AGENT': payload.get('userAgent', ''),
            'UF_CRM_SUBMITTED_AT': payload.get('timestamp', ''),
        }

    def send(self, payload):
        url = f"{self.webhook_url}/{self.method}"
        body = {'fields': self.build_fields(payload), 'params': {'REGISTER_SONET_EVENT': 'Y'}}
        try:
            response = self.session.post(url, json=body, timeout=self.timeout)
        except requests.RequestException as e:
            raise LeadSubmissionError(f"Bitrix request failed: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise LeadSubmissionError(
                f"Bitrix returned non-JSON (HTTP {response.status_code}): {response.text[:200]}"
            ) from e

        if not isinstance(data, dict):
            raise LeadSubmissionError(f"Bitrix returned unexpected body: {data!r}")

        if data.get('error'):
            message = data.get('error_description') or data['error']
            logger.error("Bitrix rejected lead: %s", message)
            return LeadResult(success=False, error=str(message))

        if response.status_code >= 400 or data.get('result') in (None, False):
            logger.error("Bitrix lead failed with HTTP %s", response.status_code)
            return LeadResult(success=False, error=f"HTTP {response.status_code}")

        logger.info("Bitrix lead created: %s", data['result'])
        return LeadResult(success=True, lead_id=str(data['result']))
