"""
Run controller -- the idle/running state machine that streams records
from the seed set into the result store.

Each tick draws ``seeds[cursor % 8]``, rewrites its id (and, after the
first cycle, its name) so repeated draws stay unique, appends it to the
store and advances the cursor by one.
"""

import threading
from enum import Enum
from functools import partial
from typing import Callable, List, Optional, Sequence, Tuple

from loguru import logger

import src.config as cfg
from src.core.exceptions import ValidationError
from src.core.store import ResultStore
from src.core.synthesizer import synthesize
from src.core.ticker import RepeatingTimer
from src.models.business import BusinessRecord


class RunStatus(Enum):
    IDLE = "idle"
    RUNNING = "running"


RecordListener = Callable[[BusinessRecord], None]
StatusListener = Callable[[RunStatus], None]


# ── Pure helpers ─────────────────────────────────────────────────────────────

def validate_search_inputs(keyword: str, city: str) -> Tuple[str, str]:
    """Return the trimmed inputs, or raise ValidationError for a blank one."""
    keyword, city = keyword.strip(), city.strip()
    if not keyword:
        raise ValidationError("keyword")
    if not city:
        raise ValidationError("city")
    return keyword, city


def derive_record(seeds: Sequence[BusinessRecord], cursor: int) -> BusinessRecord:
    """The record presented at *cursor*, unique across cycles of *seeds*."""
    cycle, position = divmod(cursor, len(seeds))
    seed = seeds[position]
    name = seed.name
    if cursor >= len(seeds):
        name = f"{name} ({cycle + 1})"
    return seed.model_copy(
        update={"id": f"{seed.id}-{cycle}-{position}", "name": name}
    )


# ── Controller ───────────────────────────────────────────────────────────────

class RunController:
    """
    Owns the seed set, cursor, result store and the single emission timer.

    Parameters
    ----------
    store : ResultStore, optional
        Where emitted records go. A fresh store is created if omitted.
    interval : float, optional
        Seconds between ticks (default: ``config.EMIT_INTERVAL``).
    ticker_factory : callable, optional
        ``factory(interval, callback)`` returning an object with
        ``start()`` and ``cancel()``. Defaults to ``RepeatingTimer``.
    """

    def __init__(
        self,
        store: Optional[ResultStore] = None,
        interval: Optional[float] = None,
        ticker_factory: Optional[Callable] = None,
    ) -> None:
        self.store = store if store is not None else ResultStore()
        self.interval = interval if interval is not None else cfg.EMIT_INTERVAL
        self._ticker_factory = ticker_factory or RepeatingTimer

        self._lock = threading.RLock()
        self._status = RunStatus.IDLE
        self._seeds: Tuple[BusinessRecord, ...] = ()
        self._cursor = 0
        self._run_id = 0
        self._ticker = None
        self._keyword = ""
        self._city = ""

        self._record_listeners: List[RecordListener] = []
        self._status_listeners: List[StatusListener] = []

    # -- Observers ---------------------------------------------------------

    def on_record(self, listener: RecordListener) -> None:
        self._record_listeners.append(listener)

    def on_status(self, listener: StatusListener) -> None:
        self._status_listeners.append(listener)

    # -- State -------------------------------------------------------------

    @property
    def status(self) -> RunStatus:
        return self._status

    @property
    def is_running(self) -> bool:
        return self._status is RunStatus.RUNNING

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def found(self) -> int:
        """Records emitted so far in the current run."""
        return len(self.store)

    @property
    def seeds(self) -> Tuple[BusinessRecord, ...]:
        return self._seeds

    @property
    def keyword(self) -> str:
        return self._keyword

    @property
    def city(self) -> str:
        return self._city

    # -- Transitions -------------------------------------------------------

    def start_run(self, keyword: str, city: str) -> None:
        """
        Begin a new run, replacing any run in progress.

        Raises ValidationError (with no state change) if either input is
        blank after trimming.
        """
        keyword, city = validate_search_inputs(keyword, city)
        seeds = tuple(synthesize(keyword, city))

        with self._lock:
            previous, self._ticker = self._ticker, None
            self._run_id += 1
            run_id = self._run_id
            self._seeds = seeds
            self._cursor = 0
            self._keyword, self._city = keyword, city
            self.store.clear()
            self._status = RunStatus.RUNNING

        # Old timer is fully stopped before the new one exists.
        if previous is not None:
            previous.cancel()

        ticker = self._ticker_factory(self.interval, partial(self._on_timer, run_id))
        with self._lock:
            if run_id != self._run_id or self._status is not RunStatus.RUNNING:
                return
            self._ticker = ticker
            ticker.start()

        logger.info(
            "Run {} started: '{}' in '{}' (every {:.1f}s)",
            run_id,
            keyword,
            city,
            self.interval,
        )
        self._notify_status(RunStatus.RUNNING)

    def stop_run(self) -> None:
        """Cancel emission and go idle. A no-op when already idle."""
        with self._lock:
            if self._status is RunStatus.IDLE:
                return
            self._status = RunStatus.IDLE
            ticker, self._ticker = self._ticker, None

        # Ticks that acquire the lock from here on see IDLE and do nothing.
        if ticker is not None:
            ticker.cancel()

        logger.info(
            "Run {} stopped with {} records", self._run_id, len(self.store)
        )
        self._notify_status(RunStatus.IDLE)

    def close(self) -> None:
        """Release the timer; safe to call on any teardown path."""
        self.stop_run()

    def __enter__(self) -> "RunController":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # -- Emission ----------------------------------------------------------

    def tick(self) -> Optional[BusinessRecord]:
        """Emit one record. Returns None when idle."""
        return self._emit(None)

    def _on_timer(self, run_id: int) -> None:
        try:
            self._emit(run_id)
        except Exception as exc:
            logger.error("Emission failed, stopping run {}: {}", run_id, exc)
            if run_id == self._run_id:
                self.stop_run()

    def _emit(self, run_id: Optional[int]) -> Optional[BusinessRecord]:
        with self._lock:
            if self._status is not RunStatus.RUNNING:
                return None
            if run_id is not None and run_id != self._run_id:
                return None
            record = derive_record(self._seeds, self._cursor)
            self.store.append(record)
            self._cursor += 1
            count = self._cursor

        logger.debug("Emitted #{}: {} ({})", count, record.name, record.id)
        for listener in self._record_listeners:
            try:
                listener(record)
            except Exception as exc:
                logger.warning("Record listener failed on {}: {}", record.id, exc)
        return record

    def _notify_status(self, status: RunStatus) -> None:
        for listener in self._status_listeners:
            listener(status)
