import unittest

from live_subtitles.models import TranscriptFragment, Word
from live_subtitles.subtitle_tracker import SubtitleTracker, caption_line


def fragment(*texts, uid=7, seqnum=1, is_final=False):
    return TranscriptFragment(
        uid=uid,
        seqnum=seqnum,
        words=[Word(text=t, is_final=is_final) for t in texts],
    )


class TestSubtitleTracker(unittest.TestCase):
    def test_starts_empty(self):
        self.assertEqual(SubtitleTracker().current_subtitle(), "")

    def test_last_fragment_wins(self):
        tracker = SubtitleTracker()
        tracker.on_fragment(fragment("hello"))
        self.assertEqual(tracker.current_subtitle(), "hello")

        tracker.on_fragment(fragment("hello world", seqnum=2))
        self.assertEqual(tracker.current_subtitle(), "hello world")

    def test_empty_words_leave_subtitle_unchanged(self):
        tracker = SubtitleTracker()
        tracker.on_fragment(fragment("hello"))
        tracker.on_fragment(fragment())
        self.assertEqual(tracker.current_subtitle(), "hello")

    def test_only_first_word_is_used(self):
        tracker = SubtitleTracker()
        tracker.on_fragment(fragment("how are you", "you"))
        self.assertEqual(tracker.current_subtitle(), "how are you")

    def test_partial_results_overwrite_final_ones(self):
        tracker = SubtitleTracker()
        tracker.on_fragment(fragment("done.", is_final=True))
        tracker.on_fragment(fragment("next", is_final=False))
        self.assertEqual(tracker.current_subtitle(), "next")

    def test_reset_clears_everything(self):
        tracker = SubtitleTracker()
        tracker.on_fragment(fragment("hello", uid=42))
        self.assertEqual(tracker.speaker_uid, 42)

        tracker.reset()
        self.assertEqual(tracker.current_subtitle(), "")
        self.assertIsNone(tracker.speaker_uid)

        # reset on an empty tracker is harmless
        tracker.reset()
        self.assertEqual(tracker.current_subtitle(), "")

    def test_sentence_grows_then_resets(self):
        tracker = SubtitleTracker()
        seen = [tracker.current_subtitle()]
        tracker.on_fragment(fragment("the"))
        seen.append(tracker.current_subtitle())
        tracker.on_fragment(fragment("the quick"))
        seen.append(tracker.current_subtitle())
        tracker.reset()
        seen.append(tracker.current_subtitle())
        self.assertEqual(seen, ["", "the", "the quick", ""])

    def test_snapshot_pairs_speaker_with_text(self):
        tracker = SubtitleTracker()
        self.assertEqual(tracker.snapshot(), (None, ""))
        tracker.on_fragment(fragment("hello", uid=3_000_000_000))
        self.assertEqual(tracker.snapshot(), (3_000_000_000, "hello"))


class TestCaptionLine(unittest.TestCase):
    def test_speaker_prefix(self):
        self.assertEqual(caption_line(7, "hello"), "7: hello")
        self.assertEqual(caption_line(None, "hello"), "hello")
        self.assertEqual(caption_line(7, ""), "")

if __name__ == '__main__':
    unittest.main()
