from google.protobuf.message import DecodeError

from live_subtitles.models import TranscriptFragment, Word
from live_subtitles.stt import proto


class FragmentDecodeError(ValueError):
    """Raised when a stream message is not a valid Text payload."""


class FragmentEncodeError(ValueError):
    """Raised when a fragment holds values the Text schema cannot carry."""


def decode_fragment(data: bytes) -> TranscriptFragment:
    """
    Decode one Text payload into a TranscriptFragment.

    Unknown fields are skipped and the version is not checked, so newer
    producers keep working. Truncated or corrupt input raises
    FragmentDecodeError; nothing is returned for a failed parse.
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise FragmentDecodeError(f"expected bytes, got {type(data).__name__}")

    msg = proto.Text()
    try:
        msg.ParseFromString(bytes(data))
    except DecodeError as e:
        raise FragmentDecodeError(f"malformed transcript fragment ({len(data)} bytes): {e}") from e

    return TranscriptFragment(
        vendor=msg.vendor,
        version=msg.version,
        seqnum=msg.seqnum,
        uid=msg.uid,
        flag=msg.flag,
        time=msg.time,
        lang=msg.lang,
        starttime=msg.starttime,
        offtime=msg.offtime,
        words=[
            Word(
                text=w.text,
                start_ms=w.start_ms,
                duration_ms=w.duration_ms,
                is_final=w.is_final,
                confidence=w.confidence,
            )
            for w in msg.words
        ],
    )


def encode_fragment(fragment: TranscriptFragment) -> bytes:
    """
    Encode a fragment as a Text payload. Integer fields must fit their wire
    types (int32, with int64 for uid and time); anything else raises
    FragmentEncodeError.
    """
    try:
        msg = proto.Text(
            vendor=fragment.vendor,
            version=fragment.version,
            seqnum=fragment.seqnum,
            uid=fragment.uid,
            flag=fragment.flag,
            time=fragment.time,
            lang=fragment.lang,
            starttime=fragment.starttime,
            offtime=fragment.offtime,
        )
        for w in fragment.words:
            msg.words.add(
                text=w.text,
                start_ms=w.start_ms,
                duration_ms=w.duration_ms,
                is_final=w.is_final,
                confidence=w.confidence,
            )
    except (ValueError, TypeError) as e:
        raise FragmentEncodeError(f"cannot encode fragment {fragment.seqnum!r}: {e}") from e
    return msg.SerializeToString()
