from __future__ import annotations

from collections.abc import Callable
from uuid import UUID

import pytest
from sqlalchemy.orm import Session, sessionmaker

from shop_api.settings import Settings as ApiSettings
from shop_db.models import MailJob
from shop_worker.queue import MailQueue
from shop_worker.settings import Settings


@pytest.fixture()
def worker_settings(settings: ApiSettings) -> Settings:
    return Settings(
        _env_file=None,
        database_url=settings.database_url,
        worker_id="worker-a",
        worker_backoff_base_seconds=30,
        worker_backoff_max_seconds=600,
    )


@pytest.fixture()
def queue(session_factory: sessionmaker[Session], worker_settings: Settings) -> MailQueue:
    return MailQueue(session_factory, backoff=worker_settings.backoff_seconds)


@pytest.fixture()
def enqueue(session_factory: sessionmaker[Session]) -> Callable[..., UUID]:
    def _enqueue(
        template: str = "welcome",
        *,
        recipient: str = "ayse@example.com",
        payload: dict[str, object] | None = None,
        max_attempts: int = 5,
    ) -> UUID:
        with session_factory() as session:
            job = MailJob(
                template=template,
                recipient=recipient,
                payload=payload
                if payload is not None
                else {
                    "name": "Ayse",
                    "email": recipient,
                    "app_name": "Shop",
                    "app_url": "https://shop.test",
                },
                max_attempts=max_attempts,
            )
            session.add(job)
            session.commit()
            return job.id

    return _enqueue


def load_job(session_factory: sessionmaker[Session], job_id: UUID) -> MailJob:
    with session_factory() as session:
        job = session.get(MailJob, job_id)
        assert job is not None
        session.expunge(job)
        return job
