"""
Postmark email client adapter - Implements EmailClient protocol.

Sends through Postmark's HTTP API (POST /email) with httpx. Any transport
error or non-2xx response is raised as EmailDeliveryError; delivery
failures are never swallowed.
"""

import logging

import httpx

from src.domain.exceptions import EmailDeliveryError
from src.domain.model import Email

logger = logging.getLogger(__name__)

POSTMARK_AUTH_HEADER = "X-Postmark-Server-Token"
MESSAGE_STREAM = "outbound"


class PostmarkEmailClient:
    """
    Implements EmailClient protocol via the Postmark REST API.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(
        self,
        server_token: str,
        sender: Email,
        base_url: str = "https://api.postmarkapp.com",
        timeout: float = 10.0,
        http_client: httpx.Client | None = None,
    ) -> None:
        """
        Args:
            server_token: Postmark server API token
            sender: Verified sender signature
            base_url: API root, overridable for tests
            timeout: Per-request timeout in seconds
            http_client: Preconfigured client (tests inject a MockTransport)
        """
        self._server_token = server_token
        self._sender = sender
        self._client = http_client or httpx.Client(base_url=base_url, timeout=timeout)

    def send(self, recipient: Email, subject: str, body: str) -> None:
        payload = {
            "From": self._sender.value,
            "To": recipient.value,
            "Subject": subject,
            "TextBody": body,
            "HtmlBody": body,
            "MessageStream": MESSAGE_STREAM,
        }
        try:
            response = self._client.post(
                "/email",
                json=payload,
                headers={POSTMARK_AUTH_HEADER: self._server_token, "Accept": "application/json"},
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.error("Postmark delivery to %s failed: %s", recipient, exc)
            raise EmailDeliveryError("Email delivery failed") from exc

        logger.info("Email sent to %s via Postmark", recipient)

    def close(self) -> None:
        self._client.close()
