"""Non-blocking request dispatch and reconciliation into response state."""

from __future__ import annotations

import logging
import queue
import threading
from dataclasses import dataclass
from typing import Callable

from post_core.formatting import pretty_json
from post_core.history import HistoryStack
from post_core.models import ERROR_PREFIX, LOADING_TEXT, OutgoingRequest, ResponseState, TransportResponse
from post_core.request_state import RequestBuilderState
from post_core.transport import TransportError, build_outgoing, send

logger = logging.getLogger(__name__)

DEFAULT_INBOX_CAPACITY = 10

Transport = Callable[[OutgoingRequest], TransportResponse]


@dataclass(frozen=True)
class DispatchOutcome:
    generation: int
    response: TransportResponse | None = None
    error: str | None = None


class DispatchReconciler:
    """Runs each submission on a worker thread and merges results on poll().

    Workers share nothing with the loop thread except the bounded inbox.
    Results are applied in arrival order, so the last one to arrive wins even
    if it belongs to an older submission.
    """

    def __init__(self, transport: Transport = send, capacity: int = DEFAULT_INBOX_CAPACITY):
        self.transport = transport
        self.inbox: queue.Queue[DispatchOutcome] = queue.Queue(maxsize=capacity)
        self.generation = 0
        self.in_flight = 0

    def submit(
        self,
        request: RequestBuilderState,
        history: HistoryStack,
        response: ResponseState,
    ) -> threading.Thread:
        entry = request.to_history_entry()
        history.push(entry)

        response.text = LOADING_TEXT
        response.scroll_offset = 0

        outgoing = build_outgoing(entry)
        self.generation += 1
        self.in_flight += 1
        generation = self.generation
        logger.info("dispatch #%d %s %s", generation, outgoing.method, outgoing.url)

        worker = threading.Thread(
            target=self._run,
            args=(generation, outgoing),
            name=f"dispatch-{generation}",
            daemon=True,
        )
        worker.start()
        return worker

    def _run(self, generation: int, outgoing: OutgoingRequest) -> None:
        try:
            result = self.transport(outgoing)
        except TransportError as exc:
            outcome = DispatchOutcome(generation, error=str(exc))
        except Exception as exc:  # noqa: BLE001
            logger.exception("dispatch #%d crashed", generation)
            outcome = DispatchOutcome(generation, error=str(exc) or exc.__class__.__name__)
        else:
            outcome = DispatchOutcome(generation, response=result)
        self.inbox.put(outcome)

    def poll(self, response: ResponseState) -> DispatchOutcome | None:
        """Merge at most one finished dispatch into response state."""
        try:
            outcome = self.inbox.get_nowait()
        except queue.Empty:
            return None
        self.in_flight = max(0, self.in_flight - 1)
        apply_outcome(outcome, response)
        return outcome


def apply_outcome(outcome: DispatchOutcome, response: ResponseState) -> None:
    if outcome.response is not None:
        result = outcome.response
        response.status = result.status
        response.text = pretty_json(result.body)
        response.headers = result.headers
        response.elapsed_ms = result.elapsed_ms
        logger.info("dispatch #%d finished with status %d", outcome.generation, result.status)
    else:
        response.status = None
        response.text = f"{ERROR_PREFIX}{outcome.error}"
        response.headers = None
        response.elapsed_ms = None
        logger.info("dispatch #%d failed: %s", outcome.generation, outcome.error)
