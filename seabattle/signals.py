"""Link between the two players' processes, carried by SIGUSR1 and SIGUSR2.

A value travels as three bits, least significant first: SIGUSR1 for a 0,
SIGUSR2 for a 1. The receiver answers every burst with eight identical
signals: SIGUSR2 to accept it, SIGUSR1 to ask for it again. The same
answer doubles as the "hit" / "missed" report of a shot.
"""

from __future__ import annotations

import os
import signal
import time
from dataclasses import dataclass
from typing import Any, Callable

from .conversions import decimal_to_binary

BITS_PER_VALUE = 3
CONNECTION_PULSES = 4
VALIDATION_PULSES = 8

BIT_DELAY = 0.0005
LAUNCH_DELAY = 0.01
RESEND_DELAY = 0.01
POLL_DELAY = 0.0001
QUIET_DELAY = 0.002
CONNECT_DELAY = 0.000002

SIGNALS = (signal.SIGUSR1, signal.SIGUSR2)


def encode_bits(binary: int) -> tuple[int, ...]:
    """Split a base-2 number written in base-10 digits into three bits.

    The least significant bit comes first; any non-zero digit counts as 1.
    """
    bits = []
    for _ in range(BITS_PER_VALUE):
        binary, digit = divmod(binary, 10)
        bits.append(0 if digit == 0 else 1)
    return tuple(bits)


@dataclass
class BitAccumulator:
    """Collects received bits as the base-10 digits of a base-2 number."""

    value: int = 0
    count: int = 0

    def push(self, bit: int) -> None:
        if bit not in (0, 1):
            raise ValueError(f"not a bit: {bit!r}")
        self.value += bit * 10**self.count
        self.count += 1

    def take(self) -> int:
        """Return what was collected and start over."""
        value = self.value
        self.value = 0
        self.count = 0
        return value


class SignalChannel:
    """One end of the signal link; use it as a context manager.

    Leaving the context restores the signal handlers and the signal mask
    that were in place before.
    """

    def __init__(
        self,
        peer: int = 0,
        *,
        kill: Callable[[int, int], Any] = os.kill,
        sleep: Callable[[float], Any] = time.sleep,
    ) -> None:
        self.peer = peer
        self.accumulator = BitAccumulator()
        self._kill = kill
        self._sleep = sleep
        self._received = 0
        self._saved_handlers: dict[int, Any] = {}
        self._saved_mask: set[int] | None = None

    def __enter__(self) -> "SignalChannel":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self._discard_pending()
        if self._saved_mask is not None:
            signal.pthread_sigmask(signal.SIG_SETMASK, self._saved_mask)
            self._saved_mask = None
        for signum, handler in self._saved_handlers.items():
            signal.signal(signum, signal.SIG_DFL if handler is None else handler)
        self._saved_handlers.clear()

    def _remember_mask(self, previous: set[int]) -> None:
        if self._saved_mask is None:
            self._saved_mask = set(previous)

    def _on_signal(self, signum: int, frame: object) -> None:
        self.accumulator.push(1 if signum == signal.SIGUSR2 else 0)
        self._received += 1

    @staticmethod
    def _discard_pending() -> None:
        while signal.sigtimedwait(SIGNALS, 0) is not None:
            pass

    @staticmethod
    def _drain_connection() -> None:
        while signal.sigtimedwait({signal.SIGUSR1}, QUIET_DELAY) is not None:
            pass

    def install_connection_handler(self) -> None:
        """Hold SIGUSR1 back so that it can be waited for with its sender."""
        previous = signal.pthread_sigmask(signal.SIG_BLOCK, {signal.SIGUSR1})
        self._remember_mask(previous)

    def install_communication_handler(self) -> None:
        """Turn every incoming SIGUSR1 / SIGUSR2 into a received bit."""
        for signum in SIGNALS:
            previous = signal.signal(signum, self._on_signal)
            self._saved_handlers.setdefault(signum, previous)
        self._discard_pending()
        previous = signal.pthread_sigmask(signal.SIG_UNBLOCK, SIGNALS)
        self._remember_mask(previous)

    def wait_for_peer(self) -> int:
        """Wait for the second player to knock, answer, and return its pid."""
        info = signal.sigwaitinfo({signal.SIGUSR1})
        self.peer = info.si_pid
        self._drain_connection()
        for _ in range(CONNECTION_PULSES):
            self._kill(self.peer, signal.SIGUSR1)
        return self.peer

    def connect_to(self, pid: int) -> int:
        """Knock on the first player's process and wait for its answer."""
        self.peer = pid
        for _ in range(CONNECTION_PULSES):
            self._kill(pid, signal.SIGUSR1)
            self._sleep(CONNECT_DELAY)
        signal.sigwaitinfo({signal.SIGUSR1})
        self._drain_connection()
        return pid

    def _send_bits(self, bits: tuple[int, ...]) -> None:
        for bit in bits:
            self._kill(self.peer, signal.SIGUSR2 if bit else signal.SIGUSR1)
            self._sleep(BIT_DELAY)

    def _settle(self, interval: float) -> None:
        seen = self._received
        while True:
            self._sleep(interval)
            if self._received == seen:
                return
            seen = self._received

    def transmit(self, value: int) -> None:
        """Send a value of three bits until the peer accepts it."""
        bits = encode_bits(decimal_to_binary(value))
        while True:
            self._sleep(LAUNCH_DELAY)
            start = self._received
            while self._received == start:
                self._send_bits(bits)
                self._sleep(RESEND_DELAY)
            self._settle(RESEND_DELAY)
            if self.accumulator.take():
                return

    def send_validation(self, accepted: bool) -> None:
        """Answer the peer: SIGUSR2 when ``accepted``, SIGUSR1 otherwise."""
        signum = signal.SIGUSR2 if accepted else signal.SIGUSR1
        for _ in range(VALIDATION_PULSES):
            self._kill(self.peer, signum)
            self._sleep(BIT_DELAY)

    def wait_for_quiet(self) -> int:
        """Wait for a burst of signals to start and end; return its length."""
        start = self._received
        while self._received == start:
            self._sleep(POLL_DELAY)
        self._settle(QUIET_DELAY)
        return self._received - start