"""
Run notifications.
"""

from .notifier import (
    COMPLETION_SUBJECT,
    FAILURE_SUBJECT,
    LoggingNotifier,
    Notifier,
    SmtpNotifier,
)

__all__ = [
    "COMPLETION_SUBJECT",
    "FAILURE_SUBJECT",
    "LoggingNotifier",
    "Notifier",
    "SmtpNotifier",
]
