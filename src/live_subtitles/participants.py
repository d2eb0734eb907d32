from typing import Iterable, List, Optional
import threading


def is_transcription_agent(uid: int, bot_uid: Optional[int]) -> bool:
    return bot_uid is not None and uid == bot_uid


def filter_participants(uids: Iterable[int], bot_uid: Optional[int]) -> List[int]:
    """Remote uids to show to the user, without the transcription bot."""
    return [uid for uid in uids if not is_transcription_agent(uid, bot_uid)]


class CallRoster:
    """Remote users in the call. Lives as long as the call, not the subtitles."""

    def __init__(self, bot_uid: Optional[int] = None):
        self.bot_uid = bot_uid
        self.lock = threading.Lock()
        self.uids: List[int] = []

    def user_joined(self, uid: int):
        with self.lock:
            if uid not in self.uids:
                self.uids.append(uid)

    def user_offline(self, uid: int):
        with self.lock:
            if uid in self.uids:
                self.uids.remove(uid)

    def participants(self) -> List[int]:
        with self.lock:
            return filter_participants(self.uids, self.bot_uid)
