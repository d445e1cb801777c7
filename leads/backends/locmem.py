from .base import BaseLeadBackend, LeadResult

# Leads "sent" during tests end up here, like django.core.mail.outbox
outbox = []


class LocmemLeadBackend(BaseLeadBackend):
    fail_next = False

    def send(self, payload):
        if LocmemLeadBackend.fail_next:
            LocmemLeadBackend.fail_next = False
            return LeadResult(success=False, error='CRM unavailable')
        outbox.append(payload)
        return LeadResult(success=True, lead_id=str(len(outbox)))


def reset():
    del outbox[:]
    LocmemLeadBackend.fail_next = False
