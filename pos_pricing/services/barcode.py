"""Keystroke-timing barcode decoder.

USB scanners act as keyboards: they type the code much faster than a person and
finish with Enter. The decoder keeps a buffer of printable keys and drops it
whenever the gap between two key events exceeds the inter-key threshold, so
only a fast burst followed by Enter emits a code.

The heuristic is probabilistic. A fast typist can trigger a false scan and a
scanner slower than the threshold never registers; both limits come from
settings.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Protocol

from pos_pricing.core.config import Settings

logger = logging.getLogger("pos_pricing.barcode")

DEFAULT_INTER_KEY_MS = 250.0
DEFAULT_MIN_LENGTH = 3
DEFAULT_TERMINATOR = "Enter"


@dataclass(frozen=True)
class KeyEvent:
    key: str
    timestamp_ms: float
    ctrl: bool = False
    alt: bool = False
    meta: bool = False

    @property
    def is_printable(self) -> bool:
        return len(self.key) == 1 and not (self.ctrl or self.alt or self.meta)


class BarcodeDecoder:
    def __init__(
        self,
        inter_key_threshold_ms: float = DEFAULT_INTER_KEY_MS,
        min_length: int = DEFAULT_MIN_LENGTH,
        terminator: str = DEFAULT_TERMINATOR,
    ):
        self.inter_key_threshold_ms = inter_key_threshold_ms
        self.min_length = min_length
        self.terminator = terminator
        self.buffer = ""
        self.last_event_time = 0.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "BarcodeDecoder":
        return cls(
            inter_key_threshold_ms=settings.barcode_inter_key_ms,
            min_length=settings.barcode_min_length,
            terminator=settings.barcode_terminator,
        )

    def feed(self, event: KeyEvent) -> Optional[str]:
        """Consume one key-down event; return the scanned code when one completes."""
        code: Optional[str] = None
        if event.timestamp_ms - self.last_event_time > self.inter_key_threshold_ms:
            self.buffer = ""
        if event.is_printable:
            self.buffer += event.key
        if event.key == self.terminator:
            if len(self.buffer) > self.min_length:
                # Whitespace-only bursts are not scans.
                code = self.buffer.strip() or None
            self.buffer = ""
        self.last_event_time = event.timestamp_ms
        return code


def decode_stream(
    events: Iterable[KeyEvent], decoder: Optional[BarcodeDecoder] = None
) -> List[str]:
    decoder = decoder or BarcodeDecoder()
    codes = []
    for event in events:
        code = decoder.feed(event)
        if code is not None:
            codes.append(code)
    return codes


# Keyboard source port ----------------------------------------------

KeyListener = Callable[[KeyEvent], None]


class KeyboardSource(Protocol):
    def add_listener(self, listener: KeyListener) -> None: ...

    def remove_listener(self, listener: KeyListener) -> None: ...


class KeyEventBus:
    """In-process keyboard source: dispatches each event to every listener."""

    def __init__(self) -> None:
        self._listeners: List[KeyListener] = []

    def add_listener(self, listener: KeyListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: KeyListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def dispatch(self, event: KeyEvent) -> None:
        for listener in list(self._listeners):
            listener(event)


class BarcodeScanner:
    """Binds a fresh decoder to a keyboard source for as long as it is started."""

    def __init__(
        self,
        source: KeyboardSource,
        on_scan: Callable[[str], None],
        settings: Optional[Settings] = None,
    ):
        self._source = source
        self._on_scan = on_scan
        self._settings = settings
        self._decoder: Optional[BarcodeDecoder] = None

    @property
    def active(self) -> bool:
        return self._decoder is not None

    def _handle(self, event: KeyEvent) -> None:
        if self._decoder is None:
            return
        code = self._decoder.feed(event)
        if code is not None:
            logger.debug("barcode scanned: %s", code)
            self._on_scan(code)

    def start(self) -> None:
        if self._decoder is not None:
            return
        if self._settings is not None:
            self._decoder = BarcodeDecoder.from_settings(self._settings)
        else:
            self._decoder = BarcodeDecoder()
        self._source.add_listener(self._handle)

    def stop(self) -> None:
        if self._decoder is None:
            return
        self._source.remove_listener(self._handle)
        self._decoder = None


def attach_barcode_scanner(
    source: KeyboardSource,
    on_scan: Callable[[str], None],
    settings: Optional[Settings] = None,
) -> Callable[[], None]:
    """Start a scanner on ``source`` and return its detach function."""
    scanner = BarcodeScanner(source, on_scan, settings)
    scanner.start()
    return scanner.stop
