from __future__ import annotations

import logging
from dataclasses import dataclass
from email.message import EmailMessage
from email.utils import make_msgid
from smtplib import SMTP, SMTPException
from typing import Mapping, Optional

from ..core.exceptions import NotificationError
from .sender import DeliveryResult, NotificationSender
from .templates import TemplateRenderer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SMTPConfig:
    host: str
    port: int
    username: Optional[str] = None
    password: Optional[str] = None
    use_tls: bool = True
    timeout: float = 10.0


class SmtpNotificationSender(NotificationSender):
    def __init__(self, config: SMTPConfig, *, mail_from: str, renderer: Optional[TemplateRenderer] = None):
        self._config = config
        self._mail_from = mail_from
        self._renderer = renderer or TemplateRenderer()

    def send(self, template_id: str, recipient: str, variables: Mapping[str, object]) -> DeliveryResult:
        rendered = self._renderer.render(template_id, variables)

        msg = EmailMessage()
        msg["From"] = self._mail_from
        msg["To"] = recipient
        msg["Subject"] = rendered.subject
        msg["Message-ID"] = make_msgid()
        msg.set_content("This message requires an HTML capable mail client.")
        msg.add_alternative(rendered.html, subtype="html")

        try:
            with SMTP(self._config.host, self._config.port, timeout=self._config.timeout) as smtp:
                if self._config.use_tls:
                    smtp.starttls()
                if self._config.username:
                    smtp.login(self._config.username, self._config.password or "")
                smtp.send_message(msg)
        except (SMTPException, OSError) as e:
            logger.error("Failed to send %s to %s: %s", template_id, recipient, e)
            raise NotificationError(f"Failed to send email to {recipient}") from e

        logger.info("sent %s to %s", template_id, recipient)
        return DeliveryResult(template_id=template_id, recipient=recipient, message_id=msg["Message-ID"])
