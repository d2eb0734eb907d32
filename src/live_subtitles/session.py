from enum import Enum
from typing import List, Optional
import threading

from live_subtitles.logger import logger
from live_subtitles.models import TranscriptionTask
from live_subtitles.participants import CallRoster
from live_subtitles.stt.decoder import FragmentDecodeError, decode_fragment
from live_subtitles.subtitle_tracker import SubtitleTracker
from live_subtitles.transcription.client import TranscriptionClient, TranscriptionServiceError


class SessionState(Enum):
    NOT_STARTED = "not_started"
    STARTED = "started"
    STOPPED = "stopped"


class CaptionSession:
    """
    Subtitles for one call on one channel.

    Subtitle failures are logged and swallowed here: a session that cannot
    start or stop its transcription task never takes the call down with it.
    The roster belongs to the call and is shared with later sessions.
    """

    def __init__(
        self,
        channel_name: str,
        client: TranscriptionClient,
        tracker: SubtitleTracker,
        bot_uid: Optional[int] = None,
        roster: Optional[CallRoster] = None,
    ):
        self.channel_name = channel_name
        self.client = client
        self.tracker = tracker
        self.roster = roster if roster is not None else CallRoster(bot_uid)

        self.state = SessionState.NOT_STARTED
        self.task: Optional[TranscriptionTask] = None
        # guards state, task and every tracker write made on behalf of this session
        self.lock = threading.Lock()

    def start(self) -> bool:
        if self.state is not SessionState.NOT_STARTED:
            logger.warning(f"Session for '{self.channel_name}' is {self.state.value}, not starting again")
            return False

        try:
            task = self.client.start(self.channel_name)
        except TranscriptionServiceError as e:
            logger.error(f"Subtitles unavailable for '{self.channel_name}': {e}")
            return False

        with self.lock:
            self.task = task
            self.state = SessionState.STARTED
        return True

    def stop(self) -> bool:
        with self.lock:
            task, self.task = self.task, None
            self.state = SessionState.STOPPED
            self.tracker.reset()

        if task is None:
            return True

        try:
            self.client.stop(task)
        except TranscriptionServiceError as e:
            logger.error(f"Could not stop transcription task {task.task_id}, it may still be running: {e}")
            return False
        return True

    def handle_stream_message(self, uid: int, data: bytes):
        if self.state is SessionState.STOPPED:
            logger.debug(f"Dropping stream message from {uid} after session stop")
            return

        try:
            fragment = decode_fragment(data)
        except FragmentDecodeError as e:
            logger.warning(f"Dropped stream message from {uid}: {e}")
            return

        with self.lock:
            # stop() may have run while decoding
            if self.state is SessionState.STOPPED:
                logger.debug(f"Dropping stream message from {uid} after session stop")
                return
            self.tracker.on_fragment(fragment)

    def user_joined(self, uid: int):
        self.roster.user_joined(uid)

    def user_offline(self, uid: int):
        self.roster.user_offline(uid)

    def participants(self) -> List[int]:
        return self.roster.participants()
