from typing import Dict, Optional

from django.conf import settings


class SessionStorage:
    """
    Keeps the serialized cart under one key of the Django session.
    With the signed-cookie engine the data never leaves the browser.
    """

    def __init__(self, session, key: Optional[str] = None):
        self.session = session
        self.key = key or settings.CART_SESSION_ID

    def load(self) -> Optional[str]:
        return self.session.get(self.key)

    def save(self, raw: str) -> None:
        self.session[self.key] = raw
        # mark the session as "modified" to make sure it gets saved
        self.session.modified = True


class MemoryStorage:
    """In-process storage, used from tests and the shell."""

    def __init__(self, initial: Optional[Dict[str, str]] = None, key: str = 'cart'):
        self.data: Dict[str, str] = dict(initial or {})
        self.key = key

    def load(self) -> Optional[str]:
        return self.data.get(self.key)

    def save(self, raw: str) -> None:
        self.data[self.key] = raw
