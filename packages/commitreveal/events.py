import logging
import threading
from typing import Any, Iterator
from pydantic import BaseModel
from web3 import Web3

from . import config

logger = logging.getLogger(__name__)

WATCHED_EVENTS = ("NewVoteCommit", "NewVoteReveal")


class CapturedEvent(BaseModel):
    name: str
    data: dict[str, Any]


def _display_value(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        return Web3.to_hex(value)
    return value


def to_captured(name: str, entry) -> CapturedEvent:
    args = entry["args"]
    return CapturedEvent(name=name, data={k: _display_value(v) for k, v in args.items()})


class EventLog:
    """Append-only, arrival-ordered record of contract events.

    Shared between the listener thread and the command loop; readers get a
    snapshot so iteration never observes a concurrent append.
    """

    def __init__(self) -> None:
        self._events: list[CapturedEvent] = []
        self._lock = threading.Lock()

    def append(self, event: CapturedEvent) -> None:
        with self._lock:
            self._events.append(event)

    def snapshot(self) -> tuple[CapturedEvent, ...]:
        with self._lock:
            return tuple(self._events)

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)

    def __iter__(self) -> Iterator[CapturedEvent]:
        return iter(self.snapshot())


class EventListener:
    """Polls contract event filters on a background thread and feeds an EventLog.

    A filter whose poll fails is re-created from the latest block on the next
    tick, so a node restart or an expired filter does not end the feed.
    """

    def __init__(self, contract, log: EventLog, poll_interval: float = config.EVENT_POLL_INTERVAL_S,
                 names: tuple[str, ...] = WATCHED_EVENTS):
        self.contract = contract
        self.log = log
        self.poll_interval = poll_interval
        self.names = names
        self._filters: dict[str, Any] = {}
        self._stale: set[str] = set()
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def _create_filter(self, name: str) -> None:
        # only events from now on; history is not replayed
        event = getattr(self.contract.events, name)
        self._filters[name] = event.create_filter(from_block="latest")

    def subscribe(self) -> None:
        for name in self.names:
            self._create_filter(name)
        self._stale.clear()
        logger.info("subscribed to contract events", extra={"events": list(self.names)})

    def _drain(self, name: str) -> list:
        if name in self._stale:
            self._create_filter(name)
            self._stale.discard(name)
            logger.info("re-created event filter", extra={"event": name})
        return self._filters[name].get_new_entries()

    def poll_once(self) -> int:
        """Drain every filter and append new entries in chain order.

        A failing feed is logged and marked for re-creation; entries already
        drained from the other feeds are still appended.
        """
        batch = []
        for name in self.names:
            try:
                entries = self._drain(name)
            except Exception as e:
                self._stale.add(name)
                logger.warning(f"Error polling {name} events: {e}")
                continue
            for entry in entries:
                batch.append((entry["blockNumber"], entry["logIndex"], name, entry))
        batch.sort(key=lambda item: (item[0], item[1]))
        for _, _, name, entry in batch:
            self.log.append(to_captured(name, entry))
        return len(batch)

    def _run(self) -> None:
        while not self._stop.wait(self.poll_interval):
            self.poll_once()

    def start(self) -> None:
        self.subscribe()
        self._thread = threading.Thread(target=self._run, name="event-listener", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=self.poll_interval + 1)
            self._thread = None
