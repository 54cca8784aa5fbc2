from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Protocol


@dataclass(frozen=True)
class DeliveryResult:
    template_id: str
    recipient: str
    message_id: Optional[str] = None


class NotificationSender(Protocol):
    def send(self, template_id: str, recipient: str, variables: Mapping[str, object]) -> DeliveryResult:
        """Deliver a templated message. Raises NotificationError on failure."""

        raise NotImplementedError
