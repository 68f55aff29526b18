from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from uuid import UUID

from sqlalchemy.orm import Session, sessionmaker

from shop_db.models import MailJobStatus
from shop_worker.queue import LEASE_EXPIRED_MESSAGE, MailQueue
from tests.worker.conftest import load_job


def _now() -> datetime:
    return datetime.now(UTC)


def test_claim_marks_jobs_running(
    queue: MailQueue,
    enqueue: Callable[..., UUID],
    session_factory: sessionmaker[Session],
) -> None:
    first = enqueue()
    second = enqueue(recipient="mehmet@example.com")

    claims = queue.claim_batch(worker_id="worker-a", now=_now(), lease_seconds=60, limit=1)

    assert [claim.id for claim in claims] == [first]
    assert claims[0].attempt_count == 1
    assert claims[0].payload["name"] == "Ayse"
    job = load_job(session_factory, first)
    assert job.status == MailJobStatus.RUNNING
    assert job.claimed_by == "worker-a"
    assert load_job(session_factory, second).status == MailJobStatus.QUEUED


def test_claim_skips_jobs_not_yet_available(
    queue: MailQueue,
    enqueue: Callable[..., UUID],
) -> None:
    enqueue()

    claims = queue.claim_batch(
        worker_id="worker-a",
        now=_now() - timedelta(hours=1),
        lease_seconds=60,
        limit=10,
    )

    assert claims == []


def test_ack_success_requires_current_lease(
    queue: MailQueue,
    enqueue: Callable[..., UUID],
    session_factory: sessionmaker[Session],
) -> None:
    job_id = enqueue()
    queue.claim_batch(worker_id="worker-a", now=_now(), lease_seconds=60, limit=5)

    assert queue.ack_success(job_id=job_id, worker_id="worker-b", now=_now()) is False
    assert queue.ack_success(job_id=job_id, worker_id="worker-a", now=_now()) is True

    job = load_job(session_factory, job_id)
    assert job.status == MailJobStatus.SENT
    assert job.sent_at is not None
    assert job.claimed_by is None


def test_ack_failure_requeues_with_backoff(
    queue: MailQueue,
    enqueue: Callable[..., UUID],
    session_factory: sessionmaker[Session],
) -> None:
    job_id = enqueue()
    now = _now()
    (claim,) = queue.claim_batch(worker_id="worker-a", now=now, lease_seconds=60, limit=5)

    outcome = queue.ack_failure(
        claim=claim,
        worker_id="worker-a",
        now=now,
        error_message="ConnectionRefusedError: smtp down",
    )

    assert outcome is MailJobStatus.QUEUED
    job = load_job(session_factory, job_id)
    assert job.status == MailJobStatus.QUEUED
    assert job.last_error == "ConnectionRefusedError: smtp down"
    assert job.available_at == now + timedelta(seconds=30)


def test_ack_failure_fails_after_last_attempt(
    queue: MailQueue,
    enqueue: Callable[..., UUID],
    session_factory: sessionmaker[Session],
) -> None:
    job_id = enqueue(max_attempts=1)
    (claim,) = queue.claim_batch(worker_id="worker-a", now=_now(), lease_seconds=60, limit=5)

    outcome = queue.ack_failure(
        claim=claim,
        worker_id="worker-a",
        now=_now(),
        error_message="x" * 5000,
    )

    assert outcome is MailJobStatus.FAILED
    job = load_job(session_factory, job_id)
    assert job.status == MailJobStatus.FAILED
    assert len(job.last_error or "") == 2000


def test_expire_stuck_reclaims_lapsed_leases(
    queue: MailQueue,
    enqueue: Callable[..., UUID],
    session_factory: sessionmaker[Session],
) -> None:
    retry_id = enqueue()
    exhausted_id = enqueue(recipient="last@example.com", max_attempts=1)
    claimed_at = _now()
    queue.claim_batch(worker_id="worker-a", now=claimed_at, lease_seconds=5, limit=5)

    assert queue.expire_stuck(now=claimed_at) == 0
    assert queue.expire_stuck(now=claimed_at + timedelta(seconds=10)) == 2

    retry = load_job(session_factory, retry_id)
    assert retry.status == MailJobStatus.QUEUED
    assert retry.last_error == LEASE_EXPIRED_MESSAGE
    assert retry.claimed_by is None
    assert load_job(session_factory, exhausted_id).status == MailJobStatus.FAILED
