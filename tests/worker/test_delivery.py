from __future__ import annotations

import pytest
from jinja2 import UndefinedError

from shop_worker.rendering import MailRenderer, RenderedMail, UnknownTemplateError
from shop_worker.settings import Settings
from shop_worker.transport import LogTransport, SmtpTransport, build_transport


def test_renders_status_update() -> None:
    mail = MailRenderer().render(
        "order_status_update",
        {
            "customer_name": "Ayse",
            "order_number": "9F1C2B3A",
            "total_amount_formatted": "₺1,530.00",
            "order_date_formatted": "May 01, 2024 at 02:30 PM",
            "old_status": "processing",
            "old_status_label": "Processing",
            "new_status": "shipped",
            "new_status_label": "Shipped",
            "items": [{"label": "Smart Phone", "value": "1x ₺1,500.00"}],
            "status_dates": [{"label": "Shipped Date", "value": "May 02, 2024 at 09:00 AM"}],
            "app_name": "Shop",
        },
    )

    assert mail.subject == "Order #9F1C2B3A is now Shipped - Shop"
    assert "Shipped Date" in mail.body


def test_unknown_template() -> None:
    with pytest.raises(UnknownTemplateError) as excinfo:
        MailRenderer().render("newsletter", {})

    assert excinfo.value.template == "newsletter"


def test_missing_payload_keys_raise() -> None:
    with pytest.raises(UndefinedError, match="app_name"):
        MailRenderer().render("welcome", {"name": "Ayse"})


@pytest.mark.parametrize(
    ("attempt", "expected"),
    [(1, 30), (2, 60), (3, 120), (10, 600)],
)
def test_backoff_doubles_until_capped(attempt: int, expected: int) -> None:
    settings = Settings(
        _env_file=None,
        worker_backoff_base_seconds=30,
        worker_backoff_max_seconds=600,
    )

    assert settings.backoff_seconds(attempt) == expected


def test_build_transport() -> None:
    assert isinstance(build_transport(Settings(_env_file=None)), LogTransport)
    smtp = build_transport(Settings(_env_file=None, mail_transport="smtp"))
    assert isinstance(smtp, SmtpTransport)


def test_log_transport_logs_without_retaining_mail(caplog: pytest.LogCaptureFixture) -> None:
    transport = LogTransport()
    mail = RenderedMail(subject="Hello", body="Body")

    with caplog.at_level("INFO", logger="shop_worker.transport"):
        for _ in range(3):
            transport.send(recipient="ayse@example.com", mail=mail)

    records = [r for r in caplog.records if r.getMessage() == "mail.transport.log"]
    assert len(records) == 3
    assert records[0].recipient == "ayse@example.com"
    assert not hasattr(transport, "sent")


def test_smtp_message_headers() -> None:
    transport = SmtpTransport(Settings(_env_file=None, mail_from="Shop <orders@shop.test>"))

    message = transport.build_message(
        recipient="ayse@example.com",
        mail=RenderedMail(subject="Hello", body="Body text\n"),
    )

    assert message["From"] == "Shop <orders@shop.test>"
    assert message["To"] == "ayse@example.com"
    assert message["Subject"] == "Hello"
    assert message.get_content() == "Body text\n"
