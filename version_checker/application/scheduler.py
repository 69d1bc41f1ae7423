"""Interval scheduler triggering sweeps."""
import asyncio
import logging
from typing import Optional, Set
from version_checker.application.checker_service import VersionCheckerService
from version_checker.domain.models import SweepMetrics


logger = logging.getLogger(__name__)


class SweepScheduler:
    """Runs a sweep on a fixed interval until stopped.
    
    Every tick starts its own task so a slow sweep never delays the timer.
    Overlapping ticks are turned into no-ops by the checker service.
    """
    
    def __init__(
        self,
        checker: VersionCheckerService,
        interval_seconds: float,
        run_immediately: bool = True
    ):
        """Initialize scheduler.
        
        Args:
            checker: Service running the sweeps
            interval_seconds: Time between two ticks
            run_immediately: Fire the first tick at start instead of after one interval
        """
        self._checker = checker
        self._interval_seconds = interval_seconds
        self._run_immediately = run_immediately
        self._stopped = asyncio.Event()
        self._tasks: Set[asyncio.Task] = set()
        self.ticks = 0
    
    async def run_once(self) -> Optional[SweepMetrics]:
        """Run a single sweep, logging instead of raising unexpected errors."""
        self.ticks += 1
        try:
            return await self._checker.run_sweep()
        except Exception as e:
            logger.error(f"Sweep crashed: {e}", exc_info=True)
            return None
    
    async def run_forever(self) -> None:
        """Fire ticks every interval until stop() is called."""
        logger.info(f"Scheduler started, interval {self._interval_seconds:.0f} seconds")
        
        if not self._run_immediately:
            await self._wait_interval()
        
        while not self._stopped.is_set():
            task = asyncio.create_task(self.run_once())
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)
            await self._wait_interval()
        
        if self._tasks:
            await asyncio.gather(*self._tasks)
        logger.info("Scheduler stopped")
    
    def stop(self) -> None:
        """Stop after the sweeps in flight have finished."""
        self._stopped.set()
    
    async def _wait_interval(self) -> None:
        try:
            await asyncio.wait_for(self._stopped.wait(), timeout=self._interval_seconds)
        except asyncio.TimeoutError:
            pass
