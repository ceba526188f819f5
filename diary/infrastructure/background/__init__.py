"""Long-running background tasks started from the application lifespan."""

from diary.infrastructure.background.email_scheduler import EmailScheduler

__all__ = ["EmailScheduler"]
