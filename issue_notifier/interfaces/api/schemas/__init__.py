from .notification import (
    NotificationMarkReadRequest,
    NotificationMarkReadResponse,
    NotificationRead,
)
from .notify import ErrorResponse, NotifyResponse

__all__ = [
    "ErrorResponse",
    "NotificationMarkReadRequest",
    "NotificationMarkReadResponse",
    "NotificationRead",
    "NotifyResponse",
]
