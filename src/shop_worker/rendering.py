"""Render outbox jobs into subject + plain-text bodies with Jinja2."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from jinja2 import Environment, PackageLoader, StrictUndefined, TemplateNotFound


class UnknownTemplateError(LookupError):
    def __init__(self, template: str) -> None:
        super().__init__(f"No mail template named '{template}'.")
        self.template = template


@dataclass(frozen=True, slots=True)
class RenderedMail:
    subject: str
    body: str


class MailRenderer:
    """Loads ``<name>.subject.j2`` and ``<name>.txt.j2`` from package templates."""

    def __init__(self, environment: Environment | None = None) -> None:
        self._env = environment or Environment(
            loader=PackageLoader("shop_worker", "templates"),
            undefined=StrictUndefined,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def render(self, template: str, payload: dict[str, Any]) -> RenderedMail:
        try:
            subject_tpl = self._env.get_template(f"{template}.subject.j2")
            body_tpl = self._env.get_template(f"{template}.txt.j2")
        except TemplateNotFound as exc:
            raise UnknownTemplateError(template) from exc
        subject = " ".join(subject_tpl.render(**payload).split())
        return RenderedMail(subject=subject, body=body_tpl.render(**payload))


__all__ = ["MailRenderer", "RenderedMail", "UnknownTemplateError"]
