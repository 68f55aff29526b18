"""Worker loop orchestration."""

from __future__ import annotations

import logging
import random
import socket
import threading
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

from sqlalchemy import inspect

from shop_db.engine import build_engine, build_sessionmaker

from .queue import MailClaim, MailQueue
from .rendering import MailRenderer
from .settings import Settings, get_settings
from .transport import MailTransport, build_transport

logger = logging.getLogger("shop_worker")

REQUIRED_TABLES = ("mail_jobs",)


def utcnow() -> datetime:
    return datetime.now(UTC)


def _default_worker_id() -> str:
    host = socket.gethostname() or "worker"
    return f"{host}-{uuid4().hex[:8]}"


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)-5s %(name)s %(message)s",
    )


@dataclass(slots=True)
class WorkerLoop:
    settings: Settings
    queue: MailQueue
    renderer: MailRenderer
    transport: MailTransport
    worker_id: str
    stop_event: threading.Event = field(default_factory=threading.Event)

    def run_once(self) -> int:
        """Reclaim lapsed leases, then claim and deliver one batch."""

        now = utcnow()
        expired = self.queue.expire_stuck(now=now)
        if expired:
            logger.info("mail.leases.expired", extra={"count": expired})

        claims = self.queue.claim_batch(
            worker_id=self.worker_id,
            now=now,
            lease_seconds=int(self.settings.worker_lease_seconds),
            limit=int(self.settings.worker_batch_size),
        )
        for claim in claims:
            self.process(claim)
        return len(claims)

    def process(self, claim: MailClaim) -> None:
        try:
            mail = self.renderer.render(claim.template, claim.payload)
            self.transport.send(recipient=claim.recipient, mail=mail)
        except Exception as exc:
            outcome = self.queue.ack_failure(
                claim=claim,
                worker_id=self.worker_id,
                now=utcnow(),
                error_message=f"{type(exc).__name__}: {exc}",
            )
            logger.warning(
                "mail.send.failed",
                extra={
                    "job_id": str(claim.id),
                    "template": claim.template,
                    "attempt": claim.attempt_count,
                    "outcome": outcome.value,
                },
                exc_info=True,
            )
            return

        self.queue.ack_success(job_id=claim.id, worker_id=self.worker_id, now=utcnow())
        logger.info(
            "mail.send.success",
            extra={
                "job_id": str(claim.id),
                "template": claim.template,
                "attempt": claim.attempt_count,
            },
        )

    def start(self) -> None:
        logger.info("shop-worker starting worker_id=%s", self.worker_id)
        poll = float(self.settings.worker_poll_interval)
        max_poll = float(self.settings.worker_poll_interval_max)

        while not self.stop_event.is_set():
            try:
                processed = self.run_once()
            except Exception:
                logger.exception("mail.loop.error", extra={"worker_id": self.worker_id})
                processed = 0

            if processed:
                poll = float(self.settings.worker_poll_interval)
                continue

            # Idle backoff.
            self.stop_event.wait(poll)
            poll = min(max_poll, poll * 1.25 + 0.01 + (random.random() * 0.05))

        logger.info("shop-worker stopped worker_id=%s", self.worker_id)

    def stop(self) -> None:
        self.stop_event.set()


def build_loop(settings: Settings) -> WorkerLoop:
    engine = build_engine(settings)
    missing = [name for name in REQUIRED_TABLES if not inspect(engine).has_table(name)]
    if missing:
        raise RuntimeError(
            f"Missing tables: {', '.join(missing)}. Run `shop db migrate` first."
        )
    SessionLocal = build_sessionmaker(engine)
    return WorkerLoop(
        settings=settings,
        queue=MailQueue(SessionLocal, backoff=settings.backoff_seconds),
        renderer=MailRenderer(),
        transport=build_transport(settings),
        worker_id=settings.worker_id or _default_worker_id(),
    )


def main(*, once: bool = False) -> int:
    settings = get_settings()
    _setup_logging(settings.effective_worker_log_level)

    loop = build_loop(settings)
    if once:
        processed = loop.run_once()
        logger.info("shop-worker run_once processed=%s", processed)
        return 0

    try:
        loop.start()
    except KeyboardInterrupt:
        loop.stop()
    return 0


__all__ = ["WorkerLoop", "build_loop", "main"]
