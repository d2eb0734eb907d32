import unittest

from live_subtitles.models import TranscriptFragment, Word
from live_subtitles.stt.decoder import FragmentDecodeError, FragmentEncodeError, decode_fragment, encode_fragment


def make_fragment(**overrides) -> TranscriptFragment:
    values = dict(
        vendor=1,
        version=2,
        seqnum=42,
        uid=12345,
        flag=3,
        time=1_700_000_000_123,  # does not fit in 32 bits
        lang=7,
        starttime=1500,
        offtime=2750,
        words=[
            Word(text="the quick brown", start_ms=0, duration_ms=1250, is_final=False, confidence=0.87),
            Word(text="fox", start_ms=1250, duration_ms=300, is_final=True, confidence=0.5),
        ],
    )
    values.update(overrides)
    return TranscriptFragment(**values)


class TestDecodeFragment(unittest.TestCase):
    def test_all_fields_survive_encoding(self):
        fragment = make_fragment()
        decoded = decode_fragment(encode_fragment(fragment))
        self.assertEqual(decoded, fragment)
        self.assertEqual(decoded.time, 1_700_000_000_123)
        self.assertEqual(decoded.words[0].confidence, 0.87)

    def test_decodes_hand_encoded_wire_bytes(self):
        # seqnum=5 (field 3), uid=101 (field 4), words=[{text: "hello"}] (field 10)
        data = b"\x18\x05" + b"\x20\x65" + b"\x52\x07" + b"\x0a\x05hello"
        fragment = decode_fragment(data)
        self.assertEqual(fragment.seqnum, 5)
        self.assertEqual(fragment.uid, 101)
        self.assertEqual(len(fragment.words), 1)
        self.assertEqual(fragment.words[0].text, "hello")
        self.assertFalse(fragment.words[0].is_final)

    def test_truncated_payload_is_rejected(self):
        data = encode_fragment(make_fragment())
        with self.assertRaises(FragmentDecodeError):
            decode_fragment(data[:-1])
        with self.assertRaises(FragmentDecodeError):
            decode_fragment(data[:3])

    def test_corrupted_payload_is_rejected(self):
        # tag for field 1 with no value after it
        with self.assertRaises(FragmentDecodeError):
            decode_fragment(b"\x08")
        # words field claims 5 bytes, only 2 follow
        with self.assertRaises(FragmentDecodeError):
            decode_fragment(b"\x52\x05ab")

    def test_unknown_fields_are_ignored(self):
        fragment = make_fragment()
        extra_varint = b"\xa0\x06\x01"      # field 100, varint 1
        extra_bytes = b"\x5a\x03abc"        # field 11, length-delimited
        decoded = decode_fragment(encode_fragment(fragment) + extra_varint + extra_bytes)
        self.assertEqual(decoded, fragment)

    def test_unexpected_version_is_not_rejected(self):
        decoded = decode_fragment(encode_fragment(make_fragment(version=99)))
        self.assertEqual(decoded.version, 99)
        self.assertEqual(decoded.words[0].text, "the quick brown")

    def test_empty_payload_has_no_words(self):
        fragment = decode_fragment(b"")
        self.assertEqual(fragment.words, [])
        self.assertEqual(fragment.seqnum, 0)

    def test_non_bytes_input_is_rejected(self):
        with self.assertRaises(FragmentDecodeError):
            decode_fragment("hello")

    def test_accepts_bytearray(self):
        data = bytearray(encode_fragment(make_fragment()))
        self.assertEqual(decode_fragment(data).seqnum, 42)

    def test_uid_above_int32_range(self):
        # uid 3_000_000_000 as a varint, then one word "hi"
        data = b"\x20\x80\xbc\xc1\x96\x0b" + b"\x52\x04\x0a\x02hi"
        fragment = decode_fragment(data)
        self.assertEqual(fragment.uid, 3_000_000_000)
        self.assertEqual(fragment.words[0].text, "hi")

        self.assertEqual(decode_fragment(encode_fragment(make_fragment(uid=2**32 - 1))).uid, 2**32 - 1)


class TestEncodeFragment(unittest.TestCase):
    def test_out_of_range_values_raise_encode_error(self):
        for overrides in (dict(seqnum=2**31), dict(lang=-2**31 - 1), dict(uid=2**63)):
            with self.assertRaises(FragmentEncodeError):
                encode_fragment(make_fragment(**overrides))

    def test_wrong_types_raise_encode_error(self):
        with self.assertRaises(FragmentEncodeError):
            encode_fragment(make_fragment(seqnum="1"))

if __name__ == '__main__':
    unittest.main()
