import logging

from django.conf import settings
from django.core.cache import cache

from .backends import LeadResult, LeadSubmissionError

logger = logging.getLogger(__name__)

IDLE = 'idle'
SUBMITTING = 'submitting'
SUCCESS = 'success'
ERROR = 'error'

TRANSITIONS = {
    IDLE: {SUBMITTING},
    SUBMITTING: {SUCCESS, ERROR},
    ERROR: {IDLE},
    SUCCESS: {IDLE},
}


class InvalidTransition(ValueError):
    pass


class OrderSubmission:
    """
    State of the cart order form, kept in the session:
    idle -> submitting -> success | error; error -> idle (retry), success -> idle (close).
    """

    def __init__(self, session, key=None):
        self.session = session
        self.key = key or settings.ORDER_SUBMISSION_SESSION_ID
        data = self.session.get(self.key) or {}
        self._state = data.get('state', IDLE) if data.get('state') in TRANSITIONS else IDLE
        self.last_error = data.get('error', '')

    @property
    def state(self) -> str:
        return self._state

    def _move(self, new_state: str, error: str = '') -> None:
        if new_state not in TRANSITIONS[self._state]:
            raise InvalidTransition(f"{self._state} -> {new_state}")
        self._state = new_state
        self.last_error = error
        self.session[self.key] = {'state': new_state, 'error': error}
        self.session.modified = True

    def begin(self) -> None:
        self._move(SUBMITTING)

    def succeed(self) -> None:
        self._move(SUCCESS)

    def fail(self, error: str = '') -> None:
        self._move(ERROR, error)

    def retry(self) -> None:
        self._move(IDLE)

    def close(self) -> None:
        self._move(IDLE)

    def submit(self, cart, payload, backend) -> LeadResult:
        """
        Send ``payload`` through ``backend``. The cart is cleared only on success.
        """
        self.begin()
        try:
            result = backend.send(payload)
        except LeadSubmissionError as e:
            logger.error("Order lead failed: %s", e)
            self.fail(str(e))
            return LeadResult(success=False, error=str(e))
        except Exception:
            logger.exception("Order lead failed with an unexpected error")
            self.fail('unexpected error')
            return LeadResult(success=False, error='unexpected error')

        if result.success:
            cart.clear()
            self.succeed()
            logger.info("Order lead sent (%s lines)", len(payload.get('productData', {}).get('cartItems', [])))
        else:
            logger.error("Order lead rejected: %s", result.error)
            self.fail(result.error)
        return result


def claim_submit_token(token: str) -> bool:
    """
    Mark the order form's one-time token as used. Only the first claim wins,
    so a double click or a replayed request cannot send the same order twice.
    """
    if not token:
        return False
    return cache.add(f'order-submit:{token}', True, timeout=settings.ORDER_SUBMIT_TOKEN_TTL)
