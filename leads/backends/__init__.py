from typing import Optional

from django.conf import settings
from django.utils.module_loading import import_string

from .base import BaseLeadBackend, LeadResult, LeadSubmissionError

__all__ = ['BaseLeadBackend', 'LeadResult', 'LeadSubmissionError', 'get_backend']


def get_backend(backend: Optional[str] = None, **kwargs) -> BaseLeadBackend:
    """Instantiate the backend named by ``backend`` or ``settings.LEAD_BACKEND``."""
    klass = import_string(backend or settings.LEAD_BACKEND)
    return klass(**kwargs)
