"""
Console email client adapter - Implements EmailClient protocol.

This module provides a console-based implementation of the domain's
email client port, logging messages (including 2FA codes) for
development and demo purposes.
"""

import logging

from src.domain.model import Email

logger = logging.getLogger(__name__)


class ConsoleEmailClient:
    """
    Implements EmailClient protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    For demo/development purposes - never fails to deliver.
    """

    def send(self, recipient: Email, subject: str, body: str) -> None:
        """
        Log the message at INFO level (simulates email delivery).

        In production, this is replaced with PostmarkEmailClient.

        Args:
            recipient: Normalized recipient address
            subject: Message subject
            body: Plain-text body
        """
        logger.info("[EMAIL] To: %s Subject: %s\n%s", recipient, subject, body)
