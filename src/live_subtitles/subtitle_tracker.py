from typing import Optional, Tuple
import threading

from live_subtitles.models import TranscriptFragment


class SubtitleTracker:
    """
    Single-slot "current subtitle" for one call session.

    Every fragment with words overwrites the slot with words[0].text, final or
    not. Readers (overlay, VTT writer, terminal) poll current_subtitle().
    """

    def __init__(self):
        self.lock = threading.Lock()
        self._subtitle: str = ""
        self.speaker_uid: Optional[int] = None

    def on_fragment(self, fragment: TranscriptFragment):
        if not fragment.words:
            return
        with self.lock:
            self._subtitle = fragment.words[0].text
            self.speaker_uid = fragment.uid

    def reset(self):
        with self.lock:
            self._subtitle = ""
            self.speaker_uid = None

    def current_subtitle(self) -> str:
        with self.lock:
            return self._subtitle

    def snapshot(self) -> Tuple[Optional[int], str]:
        """(speaker_uid, subtitle) read together, for display."""
        with self.lock:
            return self.speaker_uid, self._subtitle


def caption_line(speaker_uid: Optional[int], text: str) -> str:
    """Display form of a snapshot: "7: hello", or just the text without a speaker."""
    if not text:
        return ""
    if speaker_uid is None:
        return text
    return f"{speaker_uid}: {text}"
