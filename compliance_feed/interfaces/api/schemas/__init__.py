from .document import DocumentStatusEntry, PollingStartRequest, PollingStatusRead
from .notification import (
    AcknowledgementResult,
    NotificationRead,
    NotificationTriggerRequest,
)

__all__ = [
    "AcknowledgementResult",
    "DocumentStatusEntry",
    "NotificationRead",
    "NotificationTriggerRequest",
    "PollingStartRequest",
    "PollingStatusRead",
]
