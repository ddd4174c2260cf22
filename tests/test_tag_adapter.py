import tempfile
import unittest
from pathlib import Path
import sys

from mutagen.id3 import ID3, TDRC, TIT2, TPE1, TRCK

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from pipeline.errors import TagWriteWarning
from tags.tag_adapter import ChunkTagger, derive_chunk_tag, read_source_tag, source_title

FAKE_AUDIO = b"\xff\xfb\x90\x00" + b"\x00" * 412


def _source_tag(title: str | None = "Lecture") -> ID3:
    tag = ID3()
    if title is not None:
        tag.add(TIT2(encoding=3, text=[title]))
    tag.add(TPE1(encoding=3, text=["Speaker"]))
    tag.add(TRCK(encoding=3, text=["7"]))
    return tag


class TestDeriveChunkTag(unittest.TestCase):
    def test_title_and_track_rewritten(self) -> None:
        tag = derive_chunk_tag(_source_tag(), 2, 5)

        self.assertEqual(tag["TIT2"].text, ["Lecture (Part 2/5)"])
        self.assertEqual(tag["TRCK"].text, ["2"])
        self.assertEqual(tag["TPE1"].text, ["Speaker"])

    def test_source_is_not_mutated(self) -> None:
        source = _source_tag()
        derive_chunk_tag(source, 1, 3)
        derive_chunk_tag(source, 2, 3)

        self.assertEqual(source["TIT2"].text, ["Lecture"])
        self.assertEqual(source["TRCK"].text, ["7"])

    def test_each_chunk_gets_its_own_tag(self) -> None:
        source = _source_tag()
        first = derive_chunk_tag(source, 1, 2)
        second = derive_chunk_tag(source, 2, 2)

        self.assertIsNot(first, second)
        self.assertIsNot(first["TPE1"], second["TPE1"])
        self.assertEqual(first["TIT2"].text, ["Lecture (Part 1/2)"])

    def test_no_title_only_sets_track(self) -> None:
        tag = derive_chunk_tag(_source_tag(title=None), 3, 4)

        self.assertNotIn("TIT2", tag)
        self.assertIsNone(source_title(tag))
        self.assertEqual(tag["TRCK"].text, ["3"])


class TestReadSourceTag(unittest.TestCase):
    def test_reads_existing_tag(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "in.mp3"
            path.write_bytes(FAKE_AUDIO)
            _source_tag().save(str(path))

            tag = read_source_tag(path)

            self.assertIsNotNone(tag)
            assert tag is not None
            self.assertEqual(source_title(tag), "Lecture")

    def test_missing_tag_is_none(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "bare.mp3"
            path.write_bytes(FAKE_AUDIO)

            self.assertIsNone(read_source_tag(path))

    def test_missing_tag_log_names_the_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "bare.mp3"
            path.write_bytes(FAKE_AUDIO)

            with self.assertLogs("tags.tag_adapter", level="INFO") as logs:
                read_source_tag(path)

        self.assertIn(str(path), logs.output[0])


class TestChunkTagger(unittest.TestCase):
    def test_writes_tag_in_front_of_audio(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "p_001.mp3"
            path.write_bytes(FAKE_AUDIO)

            tagger = ChunkTagger(_source_tag(), version=4)
            self.assertIsNone(tagger.apply(path, 1, 3))

            written = ID3(str(path))
            self.assertEqual(written.version[:2], (2, 4))
            self.assertEqual(written["TIT2"].text, ["Lecture (Part 1/3)"])
            self.assertEqual(written["TRCK"].text, ["1"])
            self.assertEqual(path.read_bytes()[written.size:], FAKE_AUDIO)
            self.assertEqual(tagger.warnings, [])

    def test_version_3_converts_v24_frames(self) -> None:
        source = _source_tag()
        source.add(TDRC(encoding=3, text=["2020"]))

        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "p_001.mp3"
            path.write_bytes(FAKE_AUDIO)

            ChunkTagger(source, version=3).apply(path, 1, 2)

            self.assertEqual(path.read_bytes()[:4], b"ID3\x03")
            raw = ID3(str(path), translate=False)
            self.assertIn("TYER", raw)
            self.assertNotIn("TDRC", raw)
            self.assertEqual(str(raw["TYER"]), "2020")
            self.assertEqual(raw["TIT2"].text, ["Lecture (Part 1/2)"])

        self.assertIn("TDRC", source)

    def test_write_failure_is_a_warning(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            missing = Path(tmp) / "no_such_dir" / "p_001.mp3"

            tagger = ChunkTagger(_source_tag())
            warning = tagger.apply(missing, 1, 1)

            self.assertIsInstance(warning, TagWriteWarning)
            self.assertEqual(tagger.warnings, [warning])
            assert warning is not None
            self.assertEqual(warning.path, missing)

    def test_write_failure_log_names_chunk_and_path(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            missing = Path(tmp) / "no_such_dir" / "p_004.mp3"

            with self.assertLogs("tags.tag_adapter", level="WARNING") as logs:
                ChunkTagger(_source_tag()).apply(missing, 4, 9)

        self.assertIn("chunk 4", logs.output[0])
        self.assertIn(str(missing), logs.output[0])

    def test_rejects_unknown_version(self) -> None:
        with self.assertRaises(ValueError):
            ChunkTagger(_source_tag(), version=2)


if __name__ == "__main__":
    unittest.main()
