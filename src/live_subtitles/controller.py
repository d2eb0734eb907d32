from typing import List, Optional
import threading

from live_subtitles.participants import CallRoster
from live_subtitles.session import CaptionSession, SessionState
from live_subtitles.subtitle_tracker import SubtitleTracker
from live_subtitles.transcription.client import TranscriptionClient


class SubtitleController:
    """
    One call. Owns the roster and the current CaptionSession; toggling
    subtitles replaces the session but keeps the roster.
    """

    def __init__(
        self,
        channel_name: str,
        client: TranscriptionClient,
        tracker: SubtitleTracker,
        bot_uid: Optional[int] = None,
    ):
        self.channel_name = channel_name
        self.client = client
        self.tracker = tracker
        self.roster = CallRoster(bot_uid)
        self.lock = threading.Lock()
        self.session = self._new_session()

    def _new_session(self) -> CaptionSession:
        return CaptionSession(self.channel_name, self.client, self.tracker, roster=self.roster)

    def start(self) -> bool:
        with self.lock:
            if self.session.state is SessionState.STOPPED:
                self.session = self._new_session()
            return self.session.start()

    def stop(self):
        with self.lock:
            if self.session.state is not SessionState.STOPPED:
                self.session.stop()

    def toggle(self):
        if self.session.state is SessionState.STARTED:
            self.stop()
        else:
            self.start()

    def handle_stream_message(self, uid: int, data: bytes):
        self.session.handle_stream_message(uid, data)

    def user_joined(self, uid: int):
        self.roster.user_joined(uid)

    def user_offline(self, uid: int):
        self.roster.user_offline(uid)

    def participants(self) -> List[int]:
        return self.roster.participants()
