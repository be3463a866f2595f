from typing import List

from pos_pricing.core.config import Settings
from pos_pricing.services.barcode import (
    BarcodeDecoder,
    BarcodeScanner,
    KeyEvent,
    KeyEventBus,
    attach_barcode_scanner,
    decode_stream,
)


def _burst(keys, start=1000.0, step=10.0) -> List[KeyEvent]:
    return [KeyEvent(k, start + i * step) for i, k in enumerate(keys)]


def test_fast_burst_emits_code():
    events = _burst(["1", "2", "3", "4", "5", "Enter"])
    assert decode_stream(events) == ["12345"]


def test_gap_resets_buffer_and_short_code_is_dropped():
    events = [
        KeyEvent("1", 1000),
        KeyEvent("2", 1010),
        KeyEvent("3", 1020),
        KeyEvent("4", 1320),  # 300 ms gap
        KeyEvent("5", 1330),
        KeyEvent("Enter", 1340),
    ]
    decoder = BarcodeDecoder()
    assert decode_stream(events, decoder) == []
    assert decoder.buffer == ""


def test_min_length_is_exclusive():
    assert decode_stream(_burst(["1", "2", "3", "Enter"])) == []
    assert decode_stream(_burst(["1", "2", "3", "4", "Enter"])) == ["1234"]


def test_named_keys_do_not_append():
    decoder = BarcodeDecoder()
    for ev in _burst(["9", "Shift", "9", "Tab", "9", "9"]):
        decoder.feed(ev)
    assert decoder.buffer == "9999"


def test_ctrl_keys_do_not_append():
    decoder = BarcodeDecoder()
    decoder.feed(KeyEvent("a", 1000))
    decoder.feed(KeyEvent("v", 1010, ctrl=True))
    decoder.feed(KeyEvent("b", 1020, meta=True))
    decoder.feed(KeyEvent("c", 1030, alt=True))
    assert decoder.buffer == "a"


def test_emitted_code_is_trimmed():
    events = _burst([" ", "A", "B", "C", "D", " ", "Enter"])
    assert decode_stream(events) == ["ABCD"]


def test_last_event_time_updates_on_every_key():
    decoder = BarcodeDecoder()
    decoder.feed(KeyEvent("Shift", 1000))
    assert decoder.last_event_time == 1000
    decoder.feed(KeyEvent("Enter", 1100))
    assert decoder.last_event_time == 1100


def test_consecutive_scans():
    events = _burst(list("4006381") + ["Enter"]) + _burst(
        list("9780201") + ["Enter"], start=1500
    )
    assert decode_stream(events) == ["4006381", "9780201"]


def test_thresholds_come_from_settings():
    settings = Settings(barcode_inter_key_ms=50, barcode_min_length=1, _env_file=None)
    decoder = BarcodeDecoder.from_settings(settings)
    slow = _burst(["1", "2", "Enter"], step=60)
    assert decode_stream(slow, decoder) == []
    fast = _burst(["1", "2", "Enter"], start=5000, step=20)
    assert decode_stream(fast, decoder) == ["12"]


def test_scanner_attach_and_detach():
    bus = KeyEventBus()
    scanned: List[str] = []
    detach = attach_barcode_scanner(bus, scanned.append)
    assert bus.listener_count == 1

    for ev in _burst(["1", "2", "3", "4", "5", "Enter"]):
        bus.dispatch(ev)
    assert scanned == ["12345"]

    detach()
    detach()
    assert bus.listener_count == 0
    for ev in _burst(["1", "2", "3", "4", "5", "Enter"], start=3000):
        bus.dispatch(ev)
    assert scanned == ["12345"]


def test_stop_without_start_is_safe():
    bus = KeyEventBus()
    scanner = BarcodeScanner(bus, lambda code: None)
    scanner.stop()
    assert not scanner.active


def test_start_twice_registers_once():
    bus = KeyEventBus()
    scanned: List[str] = []
    scanner = BarcodeScanner(bus, scanned.append)
    scanner.start()
    scanner.start()
    assert bus.listener_count == 1
    for ev in _burst(["5", "5", "5", "5", "Enter"]):
        bus.dispatch(ev)
    assert scanned == ["5555"]


def test_restart_gets_fresh_buffer():
    bus = KeyEventBus()
    scanned: List[str] = []
    scanner = BarcodeScanner(bus, scanned.append)
    scanner.start()
    for ev in _burst(["1", "2", "3"]):
        bus.dispatch(ev)
    scanner.stop()
    scanner.start()
    for ev in _burst(["4", "Enter"], start=1030):
        bus.dispatch(ev)
    assert scanned == []


def test_independent_decoders_do_not_share_state():
    bus = KeyEventBus()
    first: List[str] = []
    second: List[str] = []
    attach_barcode_scanner(bus, first.append)
    detach_second = attach_barcode_scanner(bus, second.append)
    for ev in _burst(["1", "2"]):
        bus.dispatch(ev)
    detach_second()
    for ev in _burst(["3", "4", "Enter"], start=1020):
        bus.dispatch(ev)
    assert first == ["1234"]
    assert second == []


def test_whitespace_only_burst_emits_nothing():
    assert decode_stream(_burst([" ", " ", " ", " ", "Enter"])) == []
