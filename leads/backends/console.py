import json
import logging

from .base import BaseLeadBackend, LeadResult

logger = logging.getLogger(__name__)


class ConsoleLeadBackend(BaseLeadBackend):
    """Writes leads to the log instead of the CRM (development without a webhook)."""

    def send(self, payload):
        logger.info("Lead (console backend):\n%s", json.dumps(payload, ensure_ascii=False, indent=2))
        return LeadResult(success=True)
