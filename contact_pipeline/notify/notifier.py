"""
Notifications sent at the end of a run.

Completion reports go out when all records were handled; failure reports
go out when a run-level error stopped the run.
"""

import smtplib
from abc import ABC, abstractmethod
from email.message import EmailMessage
from typing import Sequence

from contact_pipeline.core.models import RunCounters
from contact_pipeline.observability.logger import get_logger

logger = get_logger(__name__)

COMPLETION_SUBJECT = "Data Processing Complete"
FAILURE_SUBJECT = "Data Processing Error"


def format_completion_body(counters: RunCounters, elapsed_seconds: float) -> str:
    return (
        "Data Processing Complete\n"
        f"Total Records Processed: {counters.processed_count}\n"
        f"Errors Encountered: {counters.error_count}\n"
        f"Execution Time: {elapsed_seconds:.3f} seconds\n"
        "Please check the output table for processed data and the error log."
    )


def format_failure_body(message: str, detail: str) -> str:
    return f"An error occurred during data processing:\n\n{message}\n\n{detail}"


class Notifier(ABC):
    """Sends a message to the configured recipients."""

    def __init__(self, recipients: Sequence[str] = ()):
        self.recipients = list(recipients)

    @abstractmethod
    def send(self, subject: str, body: str) -> None:
        """Deliver one message to every recipient."""
        pass

    def notify_completion(self, counters: RunCounters, elapsed_seconds: float) -> None:
        self.send(COMPLETION_SUBJECT, format_completion_body(counters, elapsed_seconds))

    def notify_failure(self, message: str, detail: str = "") -> None:
        self.send(FAILURE_SUBJECT, format_failure_body(message, detail))


class LoggingNotifier(Notifier):
    """Writes notifications to the log instead of sending them."""

    def send(self, subject: str, body: str) -> None:
        logger.info(
            subject,
            extra={"recipients": self.recipients, "body": body},
        )


class SmtpNotifier(Notifier):
    """
    Sends notifications as plain-text email over SMTP.

    One message is addressed to all recipients.
    """

    def __init__(
        self,
        recipients: Sequence[str],
        host: str,
        port: int = 587,
        sender: str = "contact-pipeline@localhost",
        username: str | None = None,
        password: str | None = None,
        use_tls: bool = True,
        timeout: float = 30.0,
    ):
        super().__init__(recipients)
        self.host = host
        self.port = port
        self.sender = sender
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.timeout = timeout

    def send(self, subject: str, body: str) -> None:
        if not self.recipients:
            logger.warning(f"No notification recipients configured, dropping {subject!r}")
            return

        message = EmailMessage()
        message["Subject"] = subject
        message["From"] = self.sender
        message["To"] = ", ".join(self.recipients)
        message.set_content(body)

        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
            if self.use_tls:
                smtp.starttls()
            if self.username:
                smtp.login(self.username, self.password or "")
            smtp.send_message(message)

        logger.info(f"Sent {subject!r} to {len(self.recipients)} recipients")
