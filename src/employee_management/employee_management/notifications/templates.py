from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from jinja2 import DictLoader, Environment, StrictUndefined, TemplateNotFound, UndefinedError

from ..core.constants import PASSWORD_RESET_TEMPLATE_ID, WELCOME_TEMPLATE_ID
from ..core.exceptions import NotificationError

_SOURCES = {
    f"{WELCOME_TEMPLATE_ID}.subject": "Your employee account is ready",
    f"{WELCOME_TEMPLATE_ID}.html": (
        "<p>Welcome aboard!</p>"
        "<p>An account has been created for you.</p>"
        "<p>Login email: <b>{{ employee_email }}</b><br>"
        "Password: <b>{{ employee_password }}</b></p>"
        "{% if login_url %}<p>Sign in at <a href=\"{{ login_url }}\">{{ login_url }}</a> "
        "and change your password.</p>{% endif %}"
    ),
    f"{PASSWORD_RESET_TEMPLATE_ID}.subject": "Reset your password",
    f"{PASSWORD_RESET_TEMPLATE_ID}.html": (
        "<p>A password reset was requested for {{ email }}.</p>"
        "<p><a href=\"{{ reset_url }}\">Choose a new password</a></p>"
        "<p>The link expires in {{ expires_minutes }} minutes. "
        "If you did not ask for this, ignore this email.</p>"
    ),
}


@dataclass(frozen=True)
class RenderedMessage:
    subject: str
    html: str


class TemplateRenderer:
    """Render notification templates by id (`<id>.subject` + `<id>.html`)."""

    def __init__(self, sources: Mapping[str, str] | None = None):
        self._env = Environment(
            loader=DictLoader(dict(sources or _SOURCES)),
            autoescape=True,
            undefined=StrictUndefined,
        )

    def render(self, template_id: str, variables: Mapping[str, object]) -> RenderedMessage:
        try:
            subject = self._env.get_template(f"{template_id}.subject").render(**variables)
            html = self._env.get_template(f"{template_id}.html").render(**variables)
        except TemplateNotFound as e:
            raise NotificationError(f"Unknown notification template: {template_id}") from e
        except UndefinedError as e:
            raise NotificationError(f"Template {template_id} is missing a variable: {e}") from e
        return RenderedMessage(subject=subject.strip(), html=html)
