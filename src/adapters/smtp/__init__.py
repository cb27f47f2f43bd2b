"""Email adapters - Console (development) and Postmark (production)."""

from .console import ConsoleEmailClient
from .postmark import PostmarkEmailClient

__all__ = ["ConsoleEmailClient", "PostmarkEmailClient"]
