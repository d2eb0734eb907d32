import time
import threading

from live_subtitles.config import cfg
from live_subtitles.logger import logger
from live_subtitles.subtitle_tracker import SubtitleTracker

# One cue that never expires; OBS/VLC re-read the file as it changes.
CUE_HEADER = "WEBVTT\n\n00:00:00.000 --> 99:59:59.999\n"


def cue_text(text: str) -> str:
    """One line of cue payload: no line breaks, no "-->", markup characters escaped."""
    text = " ".join(text.split())
    text = text.replace("-->", "->")
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


class VttWriter:
    def __init__(self, tracker: SubtitleTracker, path: str | None = None):
        self.tracker = tracker
        self.path = path or cfg.vtt_path
        self.running = False
        self.thread = None
        self.last_content = None

    def render(self) -> str:
        return CUE_HEADER + cue_text(self.tracker.current_subtitle())

    def write_once(self) -> bool:
        content = self.render()
        if content == self.last_content:
            return False
        with open(self.path, "w", encoding="utf-8") as f:
            f.write(content)
        self.last_content = content
        return True

    def _run(self):
        while self.running:
            try:
                self.write_once()
            except OSError as e:
                logger.error(f"VTT write error ({self.path}): {e}")

            time.sleep(cfg.vtt_update_interval_s)

    def start(self):
        self.running = True
        self.thread = threading.Thread(target=self._run, daemon=True)
        self.thread.start()

    def stop(self):
        self.running = False
        if self.thread:
            self.thread.join()
