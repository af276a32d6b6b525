# library_app/tasks/scheduler.py
from __future__ import annotations

import atexit
import os

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger


def start_scheduler(app):
    """
    Runs the overdue check every OVERDUE_CHECK_MINUTES when ENABLE_SCHEDULER is set.
    - Skips the werkzeug reloader's secondary process.
    - Shuts the scheduler down at interpreter exit.
    """
    if not app.config.get("ENABLE_SCHEDULER"):
        app.logger.info("[scheduler] disabled (ENABLE_SCHEDULER=0).")
        return None

    if app.debug and os.environ.get("WERKZEUG_RUN_MAIN") != "true":
        app.logger.info("[scheduler] Debug reloader secondary process: scheduler skipped.")
        return None

    # late import keeps the services out of the app factory's import graph
    from library_app.tasks.overdue_check import run_overdue_check_job

    minutes = int(app.config.get("OVERDUE_CHECK_MINUTES", 60))
    scheduler = BackgroundScheduler(timezone="UTC")
    scheduler.add_job(
        func=run_overdue_check_job,
        args=[app],
        trigger=IntervalTrigger(minutes=minutes),
        id="overdue_check_job",
        replace_existing=True,
        max_instances=1,
        coalesce=True,
        misfire_grace_time=120,
    )
    scheduler.start()
    app.logger.info(f"[scheduler] Overdue check job started (every {minutes} minutes).")

    app.extensions["apscheduler"] = scheduler

    atexit.register(lambda: scheduler.shutdown(wait=False) if scheduler.running else None)
    return scheduler
