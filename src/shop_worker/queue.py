"""Lease-based claim/ack helpers for the ``mail_jobs`` outbox.

Claims use ``FOR UPDATE SKIP LOCKED`` on Postgres; SQLite serialises writers
so the same statements stay correct there. Every ack is guarded by
``status = 'running'`` and ``claimed_by`` so a worker whose lease expired
cannot overwrite a job another worker reclaimed.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.orm import Session, sessionmaker

from shop_db.models import MailJob, MailJobStatus

LEASE_EXPIRED_MESSAGE = "lease expired"
MAX_ERROR_LENGTH = 2000


@dataclass(frozen=True, slots=True)
class MailClaim:
    id: UUID
    template: str
    recipient: str
    payload: dict[str, Any]
    attempt_count: int
    max_attempts: int


class MailQueue:
    def __init__(
        self,
        SessionLocal: sessionmaker[Session],
        *,
        backoff: Callable[[int], int],
    ) -> None:
        self._SessionLocal = SessionLocal
        self._backoff = backoff

    def claim_batch(
        self,
        *,
        worker_id: str,
        now: datetime,
        lease_seconds: int,
        limit: int,
    ) -> list[MailClaim]:
        lease_expires_at = now + timedelta(seconds=int(lease_seconds))
        with self._SessionLocal() as session, session.begin():
            candidates = (
                select(MailJob.id)
                .where(
                    MailJob.status == MailJobStatus.QUEUED,
                    MailJob.available_at <= now,
                    MailJob.attempt_count < MailJob.max_attempts,
                )
                .order_by(MailJob.available_at.asc(), MailJob.created_at.asc())
                .limit(max(1, int(limit)))
                .with_for_update(skip_locked=True)
            )
            ids = list(session.execute(candidates).scalars())
            if not ids:
                return []
            session.execute(
                update(MailJob)
                .where(MailJob.id.in_(ids), MailJob.status == MailJobStatus.QUEUED)
                .values(
                    status=MailJobStatus.RUNNING,
                    claimed_by=worker_id,
                    claim_expires_at=lease_expires_at,
                    attempt_count=MailJob.attempt_count + 1,
                    last_error=None,
                    updated_at=now,
                )
                .execution_options(synchronize_session=False)
            )
            rows = session.execute(
                select(MailJob)
                .where(MailJob.id.in_(ids), MailJob.claimed_by == worker_id)
                .order_by(MailJob.available_at.asc(), MailJob.created_at.asc())
            ).scalars()
            return [
                MailClaim(
                    id=row.id,
                    template=row.template,
                    recipient=row.recipient,
                    payload=dict(row.payload or {}),
                    attempt_count=int(row.attempt_count),
                    max_attempts=int(row.max_attempts),
                )
                for row in rows
            ]

    def ack_success(self, *, job_id: UUID, worker_id: str, now: datetime) -> bool:
        return self._ack(
            job_id=job_id,
            worker_id=worker_id,
            values={
                "status": MailJobStatus.SENT,
                "sent_at": now,
                "claimed_by": None,
                "claim_expires_at": None,
                "last_error": None,
                "updated_at": now,
            },
        )

    def ack_failure(
        self,
        *,
        claim: MailClaim,
        worker_id: str,
        now: datetime,
        error_message: str,
    ) -> MailJobStatus:
        """Requeue with backoff, or mark failed once attempts are exhausted."""

        message = error_message[:MAX_ERROR_LENGTH]
        if claim.attempt_count >= claim.max_attempts:
            self._ack(
                job_id=claim.id,
                worker_id=worker_id,
                values={
                    "status": MailJobStatus.FAILED,
                    "claimed_by": None,
                    "claim_expires_at": None,
                    "last_error": message,
                    "updated_at": now,
                },
            )
            return MailJobStatus.FAILED

        retry_at = now + timedelta(seconds=self._backoff(claim.attempt_count))
        self._ack(
            job_id=claim.id,
            worker_id=worker_id,
            values={
                "status": MailJobStatus.QUEUED,
                "available_at": retry_at,
                "claimed_by": None,
                "claim_expires_at": None,
                "last_error": message,
                "updated_at": now,
            },
        )
        return MailJobStatus.QUEUED

    def expire_stuck(self, *, now: datetime) -> int:
        """Requeue or fail running jobs whose lease has lapsed."""

        expired = (
            MailJob.status == MailJobStatus.RUNNING,
            MailJob.claim_expires_at.is_not(None),
            MailJob.claim_expires_at < now,
        )
        count = 0
        with self._SessionLocal() as session, session.begin():
            stuck = session.execute(select(MailJob).where(*expired)).scalars().all()
            for job in stuck:
                job.claimed_by = None
                job.claim_expires_at = None
                job.last_error = LEASE_EXPIRED_MESSAGE
                if job.attempt_count >= job.max_attempts:
                    job.status = MailJobStatus.FAILED
                else:
                    job.status = MailJobStatus.QUEUED
                    job.available_at = now + timedelta(
                        seconds=self._backoff(job.attempt_count)
                    )
                count += 1
        return count

    def _ack(self, *, job_id: UUID, worker_id: str, values: dict[str, Any]) -> bool:
        with self._SessionLocal() as session, session.begin():
            result = session.execute(
                update(MailJob)
                .where(
                    MailJob.id == job_id,
                    MailJob.status == MailJobStatus.RUNNING,
                    MailJob.claimed_by == worker_id,
                )
                .values(**values)
                .execution_options(synchronize_session=False)
            )
            return bool(getattr(result, "rowcount", 0) == 1)


__all__ = ["LEASE_EXPIRED_MESSAGE", "MailClaim", "MailQueue"]
