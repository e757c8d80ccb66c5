import logging
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

from aniex.core.sessions import SessionStore
from aniex.database import SessionLocal

logger = logging.getLogger(__name__)


class SchedulerService:
    _instance = None
    _scheduler = None

    # TASK REGISTRY
    # To add a new task, add an entry here and a static method below.
    _TASK_REGISTRY = {
        "prune_sessions": {
            "func": "run_session_prune_job",
            "hour": 3,  # 3 AM
            "description": "Expired Session Cleanup"
        },
    }

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(SchedulerService, cls).__new__(cls)
            cls._scheduler = BackgroundScheduler()
        return cls._instance

    def start(self):
        """Start the scheduler if not already running."""
        if not self._scheduler.running:
            self._scheduler.start()
            logger.info("Scheduler started.")
            self.reschedule_jobs()

    def stop(self):
        """Shutdown the scheduler."""
        if self._scheduler.running:
            self._scheduler.shutdown()
            logger.info("Scheduler stopped.")

    def reschedule_jobs(self):
        self._scheduler.remove_all_jobs()

        for job_id, config in self._TASK_REGISTRY.items():
            job_func = getattr(self, config["func"])
            self._scheduler.add_job(
                job_func,
                trigger=CronTrigger(hour=config["hour"], minute=0),
                id=job_id,
                replace_existing=True
            )
            logger.info(f"Scheduled {config['description']}: daily (at {config['hour']}:00)")

    # --- JOB WRAPPERS ---
    # These run on the scheduler thread and must open their own DB session

    @staticmethod
    def run_session_prune_job():
        logger.info("Running Scheduled Session Cleanup...")
        session = SessionLocal()
        try:
            SessionStore(session).prune_expired()
        except Exception as e:
            logger.error(f"Session Cleanup Failed: {e}", exc_info=True)
        finally:
            session.close()


# Singleton accessor
scheduler_service = SchedulerService()
