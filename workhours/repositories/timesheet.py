"""Collections for users, jobs and daily entries."""
from __future__ import annotations

from workhours.models import DailyEntry, Job, User

from .base import BaseRepository


class UserRepository(BaseRepository[User]):
    model = User

    def find_by_email(self, email: str) -> User | None:
        return self.find_one(email=email)


class JobRepository(BaseRepository[Job]):
    model = Job

    def find_by_name(self, owner_id: int, job_name: str) -> Job | None:
        return self.find_one(owner_id=owner_id, job_name=job_name)


class DailyEntryRepository(BaseRepository[DailyEntry]):
    model = DailyEntry
