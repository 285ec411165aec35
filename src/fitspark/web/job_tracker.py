"""In-memory tracking of background program generation."""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from uuid import uuid4


class JobStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def finished(self) -> bool:
        return self in (JobStatus.COMPLETED, JobStatus.FAILED)


@dataclass
class ProgramJob:
    """Generation of one user's program."""

    id: str
    user_id: int
    status: JobStatus = JobStatus.PENDING
    days_generated: int = 0
    error: str | None = None
    created_at: datetime = field(default_factory=datetime.now)
    finished_at: datetime | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "status": self.status.value,
            "days_generated": self.days_generated,
            "error": self.error,
            "created_at": self.created_at.isoformat(),
            "finished_at": self.finished_at.isoformat() if self.finished_at else None,
        }


class JobTracker:
    """Keeps pending and recently finished program jobs.

    Jobs live only as long as the process; a restart loses them, the
    generated plans themselves are in the database.
    """

    def __init__(self, keep_finished: int = 50):
        self._jobs: dict[str, ProgramJob] = {}
        self._keep_finished = keep_finished
        self._lock = asyncio.Lock()

    async def create_job(self, user_id: int) -> ProgramJob:
        async with self._lock:
            job = ProgramJob(id=uuid4().hex[:12], user_id=user_id)
            self._jobs[job.id] = job
            self._prune()
        return job

    async def get_job(self, job_id: str) -> ProgramJob | None:
        return self._jobs.get(job_id)

    async def latest_for_user(self, user_id: int) -> ProgramJob | None:
        """The user's most recently created job."""
        jobs = [j for j in self._jobs.values() if j.user_id == user_id]
        return jobs[-1] if jobs else None

    async def start_job(self, job_id: str) -> None:
        job = self._jobs.get(job_id)
        if job:
            job.status = JobStatus.RUNNING

    async def complete_job(self, job_id: str, days: int) -> None:
        job = self._jobs.get(job_id)
        if job:
            job.status = JobStatus.COMPLETED
            job.days_generated = days
            job.finished_at = datetime.now()

    async def fail_job(self, job_id: str, error: str) -> None:
        job = self._jobs.get(job_id)
        if job:
            job.status = JobStatus.FAILED
            job.error = error
            job.finished_at = datetime.now()

    def _prune(self) -> None:
        """Drop the oldest finished jobs beyond ``keep_finished``."""
        finished = sorted(
            (j for j in self._jobs.values() if j.status.finished),
            key=lambda j: j.finished_at or j.created_at,
        )
        for job in finished[: max(len(finished) - self._keep_finished, 0)]:
            del self._jobs[job.id]
