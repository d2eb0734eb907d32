from pathlib import Path
from typing import Iterable, List, Tuple, Union
import base64
import binascii
import json
import queue
import threading

from live_subtitles.logger import logger
from live_subtitles.models import StreamMessage, TranscriptFragment, UserEvent
from live_subtitles.stt.decoder import FragmentEncodeError, encode_fragment

USER_EVENTS = {"joined": True, "offline": False}

CaptureItem = Union[StreamMessage, UserEvent]


class ReplayFormatError(ValueError):
    pass


def _parse_record(record: dict) -> CaptureItem:
    uid = int(record["uid"])
    event = record.get("event", "message")
    if event == "message":
        return StreamMessage(uid=uid, data=base64.b64decode(record["data"], validate=True))
    if event in USER_EVENTS:
        return UserEvent(uid=uid, joined=USER_EVENTS[event])
    raise ValueError(f"unknown event {event!r}")


def load_capture(path) -> List[Tuple[CaptureItem, int]]:
    """
    Read a capture file: one JSON object per line, either a stream message
        {"uid": 101, "data": "<base64 Text payload>", "delay_ms": 250}
    or a roster change
        {"event": "joined", "uid": 7, "delay_ms": 0}   ("offline" to leave).
    Returns (item, delay_ms) pairs. Blank lines are skipped.
    """
    entries = []
    with Path(path).open("r", encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                record = json.loads(line)
                item = _parse_record(record)
                delay_ms = int(record.get("delay_ms", 0))
            except (ValueError, KeyError, TypeError, AttributeError, binascii.Error) as e:
                raise ReplayFormatError(f"{path}:{lineno}: {e}") from e
            if delay_ms < 0:
                raise ReplayFormatError(f"{path}:{lineno}: negative delay_ms")
            entries.append((item, delay_ms))
    return entries


def write_capture(
    path,
    fragments: Iterable[TranscriptFragment],
    uid: int,
    delay_ms: int = 300,
    joined: Iterable[int] = (),
):
    """Record fragments sent by `uid`, preceded by join events for `joined`."""
    records = [{"event": "joined", "uid": u, "delay_ms": 0} for u in joined]
    for fragment in fragments:
        try:
            data = encode_fragment(fragment)
        except FragmentEncodeError as e:
            raise ReplayFormatError(f"{path}: {e}") from e
        records.append({
            "uid": uid,
            "data": base64.b64encode(data).decode("ascii"),
            "delay_ms": delay_ms,
        })

    with Path(path).open("w", encoding="utf-8") as f:
        for record in records:
            f.write(json.dumps(record) + "\n")


class ReplaySource:
    """Pushes a recorded capture into the receiver queue at its original pace."""

    def __init__(self, entries: List[Tuple[CaptureItem, int]], message_queue: queue.Queue):
        self.entries = entries
        self.queue = message_queue
        self.stop_event = threading.Event()
        self.thread = None

    def _run(self):
        for item, delay_ms in self.entries:
            # wait() doubles as an interruptible sleep
            if self.stop_event.wait(delay_ms / 1000.0):
                return
            self.queue.put(item)
        logger.info(f"Replay finished ({len(self.entries)} records)")

    def start(self):
        self.stop_event.clear()
        self.thread = threading.Thread(target=self._run, daemon=True)
        self.thread.start()

    def stop(self):
        self.stop_event.set()
        if self.thread:
            self.thread.join()

    def is_alive(self) -> bool:
        return self.thread is not None and self.thread.is_alive()
