"""Async request/response channel around the lookahead planner.

Planning is CPU-bound, so requests run in an executor thread and the event
loop stays free for the caller. Only one request may be in flight.
"""

# Court Shuffle
# Copyright (C) 2025  Court Shuffle developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import asyncio
import functools
import random
import threading
from concurrent.futures import Executor
from typing import Any, Dict, Optional

from courtshuffle.exceptions import GenerationCancelledException, WorkerBusyException
from courtshuffle.models.round import Round
from courtshuffle.models.shuffle_config import ShuffleConfig
from courtshuffle.pairing.lookahead import plan_next_round
from courtshuffle.utils import setup_logger

logger = setup_logger(__name__)


class ShuffleWorker:
    """Runs one planning request at a time off the event loop."""

    def __init__(
        self,
        config: Optional[ShuffleConfig] = None,
        seed: Optional[int] = None,
        executor: Optional[Executor] = None,
    ):
        self.config = config or ShuffleConfig()
        self._rng = random.Random(seed)
        self._executor = executor
        self._cancelled = threading.Event()
        self._in_flight = False

    @property
    def busy(self) -> bool:
        return self._in_flight

    def cancel(self) -> None:
        """Ask the in-flight request to stop at its next checkpoint."""
        if self._in_flight:
            logger.info("Cancelling in-flight request")
            self._cancelled.set()

    def _checkpoint(self) -> None:
        if self._cancelled.is_set():
            raise GenerationCancelledException("Round planning was cancelled")

    def _release(self, future: "asyncio.Future[Round]") -> None:
        if not future.cancelled() and future.exception() is not None:
            logger.debug(f"Planning request failed: {future.exception()}")
        self._in_flight = False
        self._cancelled.clear()

    async def request(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Plan the next round for a payload and return it as a dict.

        The worker stays busy until the executor thread has finished, even
        when the awaiting task is cancelled first.

        Args:
            payload: ``rounds`` (list of round dicts), ``roster``, ``courts``
                and optionally ``volunteers``

        Returns:
            The planned round in ``Round.to_dict`` form

        Raises:
            WorkerBusyException: If another request is still running
            GenerationCancelledException: If ``cancel`` was called meanwhile
        """
        if self._in_flight:
            raise WorkerBusyException("A planning request is already in flight")

        task = functools.partial(
            plan_next_round,
            [Round.from_dict(r) for r in payload.get("rounds", [])],
            list(payload["roster"]),
            int(payload["courts"]),
            payload.get("volunteers"),
            config=self.config,
            rng=self._rng,
            checkpoint=self._checkpoint,
        )
        self._in_flight = True
        self._cancelled.clear()
        loop = asyncio.get_running_loop()
        future = loop.run_in_executor(self._executor, task)
        future.add_done_callback(self._release)
        try:
            new_round = await asyncio.shield(future)
        except asyncio.CancelledError:
            # The thread keeps running; stop it at its next checkpoint.
            self._cancelled.set()
            raise
        return new_round.to_dict()
