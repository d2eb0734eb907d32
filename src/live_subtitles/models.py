from dataclasses import dataclass, field
from typing import List

@dataclass
class Word:
    text: str = ""
    start_ms: int = 0
    duration_ms: int = 0
    is_final: bool = False   # recognizer will not revise this word any more
    confidence: float = 0.0  # 0.0 - 1.0

@dataclass
class TranscriptFragment:
    vendor: int = 0
    version: int = 0
    seqnum: int = 0
    uid: int = 0             # speaking participant
    flag: int = 0
    time: int = 0            # 64-bit, unit defined by the vendor
    lang: int = 0
    starttime: int = 0
    offtime: int = 0
    words: List[Word] = field(default_factory=list)

@dataclass
class TranscriptionTask:
    task_id: str
    builder_token: str
    channel_name: str = ""

@dataclass
class StreamMessage:
    uid: int                 # sender of the stream message (the transcription bot)
    data: bytes              # undecoded Text payload

@dataclass
class UserEvent:
    uid: int
    joined: bool             # False = user went offline
