from __future__ import annotations

import html
from dataclasses import dataclass
from typing import Any, Dict, Optional

import resend
from resend.exceptions import ResendError

from ..errors import Result, upstream_error, validation_error
from ..logging import get_logger

logger = get_logger("storefront.mailer")

NOT_PROVIDED = "Not provided"


@dataclass(frozen=True, slots=True)
class ContactMessage:
    name: str
    email: str
    message: str
    phone: Optional[str] = None


def build_contact_email(contact: ContactMessage, mailbox: str) -> Dict[str, Any]:
    """Build the Resend payload for a contact-form submission."""

    phone = contact.phone or NOT_PROVIDED
    text_body = (
        f"Name: {contact.name}\n"
        f"Email: {contact.email}\n"
        f"Phone: {phone}\n\n"
        f"Message:\n{contact.message}"
    )
    message_html = "<br>".join(html.escape(line) for line in contact.message.split("\n"))
    html_body = (
        "<h3>New Contact Form Submission</h3>\n"
        f"<p><strong>Name:</strong> {html.escape(contact.name)}</p>\n"
        f"<p><strong>Email:</strong> {html.escape(contact.email)}</p>\n"
        f"<p><strong>Phone:</strong> {html.escape(phone)}</p>\n"
        "<p><strong>Message:</strong></p>\n"
        f"<p>{message_html}</p>\n"
    )
    return {
        "from": mailbox,
        "to": [mailbox],
        "reply_to": contact.email,
        "subject": f"Contact Form Message from {contact.name}",
        "text": text_body,
        "html": html_body,
    }


class ContactMailer:
    """Relays contact-form messages to the store mailbox through Resend."""

    def __init__(self, api_key: str, mailbox: str) -> None:
        self._api_key = api_key
        self._mailbox = mailbox

    def send_contact(
        self,
        name: Optional[str],
        email: Optional[str],
        message: Optional[str],
        phone: Optional[str] = None,
    ) -> Result[str]:
        name = (name or "").strip()
        email = (email or "").strip()
        if not name or not email or not (message or "").strip():
            return Result.failure(validation_error("Name, email, and message are required"))

        contact = ContactMessage(name=name, email=email, message=message, phone=(phone or "").strip() or None)
        payload = build_contact_email(contact, self._mailbox)

        resend.api_key = self._api_key
        try:
            response = resend.Emails.send(payload)
        except ResendError as exc:
            logger.error("contact_email_rejected", error=str(exc))
            return Result.failure(upstream_error("Failed to send email", remote=True))
        except Exception as exc:
            logger.exception("contact_email_failed", error=str(exc))
            return Result.failure(upstream_error("Failed to send email", remote=False))

        delivery_id = response.get("id") if isinstance(response, dict) else None
        if not delivery_id:
            logger.error("contact_email_missing_id", response=str(response))
            return Result.failure(upstream_error("Failed to send email", remote=True))

        logger.info("contact_email_sent", delivery_id=delivery_id)
        return Result.success(str(delivery_id))


__all__ = ["ContactMailer", "ContactMessage", "build_contact_email"]
