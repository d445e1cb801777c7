from dataclasses import dataclass
from typing import Any, Dict, Optional


class LeadSubmissionError(Exception):
    """The CRM could not be reached or answered with something unreadable."""


@dataclass
class LeadResult:
    success: bool
    lead_id: Optional[str] = None
    error: str = ''


class BaseLeadBackend:
    """
    Base class for lead backends. Subclasses implement ``send``.
    """

    def __init__(self, **kwargs):
        pass

    def send(self, payload: Dict[str, Any]) -> LeadResult:
        raise NotImplementedError('subclasses of BaseLeadBackend must override send()')
