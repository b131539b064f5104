"""
Worker pool fanning one change kind out over a fixed number of threads.

Tasks go onto a FIFO queue sized to the batch, followed by one stop
sentinel per worker.  Each worker handles its tasks one at a time until
it pulls a sentinel, so joining every thread is the barrier that ends a
phase.  A task's failure is logged and counted here and never reaches
the caller or the sibling tasks.
"""

from __future__ import annotations

import queue
import threading
from typing import Callable

from zonesync.base.context import Context
from zonesync.base.exceptions import MatchError, ZonesyncError
from zonesync.base.logger import ZonesyncLogger
from zonesync.base.models import Action, ChangeTask, Endpoint, Zone
from zonesync.reconcile.report import BatchReport, Outcome

# handler(ctx, endpoint, zones) -> Outcome.APPLIED or Outcome.DRY_RUN
ChangeHandler = Callable[[Context, Endpoint, list[Zone]], Outcome]

_STOP = None


class ChangeDispatcher:
    """Runs change tasks on ``workers`` threads per batch.

    Attributes:
        workers: Number of threads started for every batch.
        logger: Logging port handed down from the provider.
    """

    def __init__(self, workers: int, logger: ZonesyncLogger) -> None:
        if workers < 1:
            raise ValueError("workers must be at least 1")
        self.workers = workers
        self.logger = logger

    def run(
        self,
        ctx: Context,
        endpoints: list[Endpoint],
        zones: list[Zone],
        action: Action,
        handler: ChangeHandler,
    ) -> BatchReport:
        """Handle every endpoint under *action* and block until all are done.

        Never raises for task failures; see the returned report.
        """
        report = BatchReport(action=action)
        tasks: queue.Queue[ChangeTask | None] = queue.Queue(
            maxsize=len(endpoints) + self.workers
        )

        threads = [
            threading.Thread(
                target=self._work,
                args=(ctx, tasks, zones, handler, report),
                name=f"zonesync-{action.value.lower()}-{i}",
                daemon=True,
            )
            for i in range(self.workers)
        ]
        for thread in threads:
            thread.start()

        for endpoint in endpoints:
            tasks.put(ChangeTask(action=action, endpoint=endpoint))
        # close: one sentinel per worker
        for _ in threads:
            tasks.put(_STOP)

        for thread in threads:
            thread.join()
        return report

    def _work(
        self,
        ctx: Context,
        tasks: queue.Queue[ChangeTask | None],
        zones: list[Zone],
        handler: ChangeHandler,
        report: BatchReport,
    ) -> None:
        while True:
            task = tasks.get()
            if task is _STOP:
                break
            if ctx.cancelled():
                report.record(Outcome.CANCELLED)
                continue
            report.record(self._handle(ctx, task, zones, handler))

        self.logger.debug("change worker finished")

    def _handle(
        self,
        ctx: Context,
        task: ChangeTask,
        zones: list[Zone],
        handler: ChangeHandler,
    ) -> Outcome:
        try:
            return handler(ctx, task.endpoint, zones)
        except MatchError as e:
            self._bind(task).warning("no matching zone or record set, skipping", err=str(e))
            return Outcome.LOCATE_FAILED
        except ZonesyncError as e:
            self._bind(task).error("change failed, retrying on next run", err=str(e))
            return Outcome.REMOTE_FAILED
        except Exception as e:
            self._bind(task).error("unexpected error handling change", err=str(e), exc_info=True)
            return Outcome.REMOTE_FAILED

    def _bind(self, task: ChangeTask) -> ZonesyncLogger:
        endpoint = task.endpoint
        return self.logger.bind(
            action=task.action.value,
            record=endpoint.dns_name,
            type=endpoint.record_type,
            content=",".join(endpoint.targets),
            ttl=endpoint.ttl,
        )
