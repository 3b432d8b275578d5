"""Channel and directory adapters used by the transition dispatcher."""

from .channels import SqlNotificationSink
from .directory import SqlIssueDirectory, SqlUserDirectory

__all__ = ["SqlIssueDirectory", "SqlNotificationSink", "SqlUserDirectory"]
