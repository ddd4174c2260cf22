import unittest
from pathlib import Path
import sys

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from fractions import Fraction

from pipeline.errors import EmptyStreamError, NoTimeBaseError
from pipeline.timeline import build_timeline
from sources.audio_packet import TimeBase


class TestTimeBase(unittest.TestCase):
    def test_from_fraction(self) -> None:
        tb = TimeBase.from_fraction(Fraction(1, 44100))
        self.assertEqual(tb.numerator, 1)
        self.assertEqual(tb.denominator, 44100)
        self.assertAlmostEqual(tb.to_seconds(1152), 1152 / 44100)

    def test_rejects_zero_denominator(self) -> None:
        with self.assertRaises(ValueError):
            TimeBase(1, 0)


class TestBuildTimeline(unittest.TestCase):
    def test_cumulative_end_times(self) -> None:
        timeline = build_timeline([1000, 1000, 500], TimeBase(1, 1000))

        self.assertEqual(timeline.packet_count, 3)
        self.assertEqual(list(timeline.ends), [1.0, 2.0, 2.5])
        self.assertEqual(timeline.total_duration, 2.5)
        self.assertEqual(timeline.end_of(1), 2.0)

    def test_numerator_is_applied(self) -> None:
        timeline = build_timeline([3, 3], TimeBase(2, 3))
        self.assertAlmostEqual(timeline.total_duration, 4.0)

    def test_zero_duration_packet_keeps_time_flat(self) -> None:
        timeline = build_timeline([10, 0, 10], TimeBase(1, 10))
        self.assertEqual(list(timeline.ends), [1.0, 1.0, 2.0])

    def test_missing_time_base(self) -> None:
        with self.assertRaises(NoTimeBaseError):
            build_timeline([1, 2, 3], None)

    def test_empty_stream(self) -> None:
        with self.assertRaises(EmptyStreamError):
            build_timeline([], TimeBase(1, 1000))

    def test_timeline_is_read_only(self) -> None:
        timeline = build_timeline([1, 1], TimeBase(1, 1))
        with self.assertRaises(ValueError):
            timeline.ends[0] = 5.0


if __name__ == "__main__":
    unittest.main()
