from __future__ import annotations

from collections.abc import Callable
from uuid import UUID

import pytest
from sqlalchemy.orm import Session, sessionmaker

from shop_db.models import MailJobStatus
from shop_worker.loop import WorkerLoop, build_loop
from shop_worker.queue import MailQueue
from shop_worker.rendering import MailRenderer, RenderedMail
from shop_worker.settings import Settings
from shop_worker.transport import LogTransport
from tests.worker.conftest import load_job


class RecordingTransport:
    def __init__(self) -> None:
        self.sent: list[tuple[str, RenderedMail]] = []

    def send(self, *, recipient: str, mail: RenderedMail) -> None:
        self.sent.append((recipient, mail))


class BrokenTransport:
    def __init__(self) -> None:
        self.attempts = 0

    def send(self, *, recipient: str, mail: RenderedMail) -> None:
        self.attempts += 1
        raise ConnectionRefusedError("smtp unavailable")


def _loop(worker_settings: Settings, queue: MailQueue, transport: object) -> WorkerLoop:
    return WorkerLoop(
        settings=worker_settings,
        queue=queue,
        renderer=MailRenderer(),
        transport=transport,  # type: ignore[arg-type]
        worker_id="worker-a",
    )


def test_run_once_delivers_queued_mail(
    worker_settings: Settings,
    queue: MailQueue,
    enqueue: Callable[..., UUID],
    session_factory: sessionmaker[Session],
) -> None:
    job_id = enqueue()
    transport = RecordingTransport()

    processed = _loop(worker_settings, queue, transport).run_once()

    assert processed == 1
    recipient, mail = transport.sent[0]
    assert recipient == "ayse@example.com"
    assert mail.subject == "Welcome to Shop, Ayse!"
    assert "https://shop.test" in mail.body
    assert load_job(session_factory, job_id).status == MailJobStatus.SENT
    assert _loop(worker_settings, queue, transport).run_once() == 0


def test_run_once_requeues_on_transport_error(
    worker_settings: Settings,
    queue: MailQueue,
    enqueue: Callable[..., UUID],
    session_factory: sessionmaker[Session],
) -> None:
    job_id = enqueue()
    transport = BrokenTransport()

    assert _loop(worker_settings, queue, transport).run_once() == 1

    job = load_job(session_factory, job_id)
    assert transport.attempts == 1
    assert job.status == MailJobStatus.QUEUED
    assert job.attempt_count == 1
    assert job.last_error == "ConnectionRefusedError: smtp unavailable"


def test_unknown_template_fails_the_job(
    worker_settings: Settings,
    queue: MailQueue,
    enqueue: Callable[..., UUID],
    session_factory: sessionmaker[Session],
) -> None:
    job_id = enqueue("password_reset", payload={}, max_attempts=1)

    _loop(worker_settings, queue, LogTransport()).run_once()

    job = load_job(session_factory, job_id)
    assert job.status == MailJobStatus.FAILED
    assert "password_reset" in (job.last_error or "")


def test_build_loop_uses_configured_worker(worker_settings: Settings) -> None:
    loop = build_loop(worker_settings)

    assert loop.worker_id == "worker-a"
    assert isinstance(loop.transport, LogTransport)


def test_build_loop_requires_migrated_database(tmp_path) -> None:
    settings = Settings(_env_file=None, database_url=f"sqlite:///{tmp_path / 'empty.sqlite'}")

    with pytest.raises(RuntimeError, match="mail_jobs"):
        build_loop(settings)
