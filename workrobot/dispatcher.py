"""Dispatch encoded messages to the webhook, in order or concurrently."""

import asyncio
import sys
from typing import List, Optional, Sequence

from workrobot.config import CONFIG
from workrobot.domain.models import DispatchOutcome, Message, encode
from workrobot.errors import DispatchErrors, RemoteRejected
from workrobot.ports.outbound import TransportPort


def _log(msg: str, verbose: Optional[bool] = None):
    if verbose is None:
        verbose = CONFIG.get("verbose")
    if verbose:
        print(f"[workrobot] {msg}", file=sys.stderr)


class Dispatcher:
    """Sends messages through a TransportPort to a single webhook.

    The dispatcher holds no message state: every message is encoded up
    front, so a foreign object raises TypeError before anything is sent.

    No rate limit is enforced here. The gateway documents 20 messages per
    minute; callers size their batches accordingly.
    """

    def __init__(self, transport: TransportPort, webhook: str, verbose: Optional[bool] = None):
        self.transport = transport
        self.webhook = webhook
        # None defers to CONFIG["verbose"]
        self.verbose = verbose

    def _log(self, msg: str):
        _log(msg, self.verbose)

    async def _deliver(self, payload: bytes) -> None:
        receipt = await self.transport.send(self.webhook, payload)
        if not receipt.ok:
            raise RemoteRejected(receipt.code, receipt.message)

    async def dispatch(self, message: Message) -> None:
        """Send a single message; raises on any failure."""
        await self._deliver(encode(message))

    async def send_sequential(self, *messages: Message) -> None:
        """Send messages in order, stopping at the first failure."""
        payloads = [encode(m) for m in messages]
        for index, payload in enumerate(payloads):
            try:
                await self._deliver(payload)
            except Exception as e:
                self._log(f"message {index} failed, skipping {len(payloads) - index - 1} more: {e}")
                raise

    async def send_concurrent(self, *messages: Message, fail_fast: bool = False) -> None:
        """Send every message in its own task and wait for all of them.

        fail_fast=True: the first failure cancels the remaining tasks and
        is the only error raised. fail_fast=False: all tasks run to the
        end and every failure is raised together as DispatchErrors.
        """
        payloads = [encode(m) for m in messages]
        if not payloads:
            return

        tasks: List[asyncio.Task] = []
        winner: Optional[DispatchOutcome] = None

        async def _worker(index: int, payload: bytes) -> DispatchOutcome:
            nonlocal winner
            try:
                await self._deliver(payload)
            except Exception as e:
                outcome = DispatchOutcome(index=index, success=False, error=e)
                # no await between the check and the claim
                if fail_fast and winner is None:
                    winner = outcome
                    self._log(f"message {index} failed, cancelling the batch: {e}")
                    for task in tasks:
                        if task is not asyncio.current_task():
                            task.cancel()
                return outcome
            return DispatchOutcome(index=index, success=True)

        for index, payload in enumerate(payloads):
            tasks.append(asyncio.create_task(_worker(index, payload)))

        results = await self._join(tasks)

        if fail_fast:
            if winner is not None:
                raise winner.error
            return

        failures = _failures(results)
        if failures:
            for outcome in failures:
                self._log(f"message {outcome.index} failed: {outcome.error}")
            raise DispatchErrors(outcome.error for outcome in failures)

    @staticmethod
    async def _join(tasks: Sequence[asyncio.Task]) -> list:
        try:
            return await asyncio.gather(*tasks, return_exceptions=True)
        except asyncio.CancelledError:
            # the caller gave up; still wait for every task to wind down
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise


def _failures(results: list) -> List[DispatchOutcome]:
    """Failed outcomes in message order; cancelled tasks carry no outcome."""
    return [r for r in results if isinstance(r, DispatchOutcome) and not r.success]
