import unittest

from path_setup import ensure_src_path

ensure_src_path()

from grounded_report.chunking import Chunk, chunk_text, split_into_structural_units


def _sample_text() -> str:
    sentences = [
        f"Sentence {index} describes step {index} of the Veltrix approval process."
        for index in range(40)
    ]
    return " ".join(sentences)


class SplitIntoStructuralUnitsTests(unittest.TestCase):
    def test_blank_lines_separate_units(self) -> None:
        text = "Para one\n\nPara two\n  \nPara three"
        self.assertEqual(split_into_structural_units(text), ["Para one", "Para two", "Para three"])

    def test_empty_text(self) -> None:
        self.assertEqual(split_into_structural_units("   \n\n "), [])


class ChunkTextTests(unittest.TestCase):
    def test_short_text_yields_single_chunk(self) -> None:
        text = "A short reference."
        chunks = chunk_text(text, max_size=500, overlap=100)
        self.assertEqual(chunks, [Chunk(text=text, start=0, end=len(text))])

    def test_text_of_exactly_max_size_is_one_chunk(self) -> None:
        text = "x" * 500
        self.assertEqual(len(chunk_text(text, max_size=500, overlap=100)), 1)

    def test_overlap_not_smaller_than_max_size_fails_fast(self) -> None:
        with self.assertRaises(ValueError):
            chunk_text("some text", max_size=100, overlap=100)
        with self.assertRaises(ValueError):
            chunk_text("some text", max_size=100, overlap=150)

    def test_invalid_sizes_rejected(self) -> None:
        with self.assertRaises(ValueError):
            chunk_text("some text", max_size=0, overlap=0)
        with self.assertRaises(ValueError):
            chunk_text("some text", max_size=10, overlap=-1)

    def test_cuts_after_late_sentence_terminator(self) -> None:
        text = "a" * 400 + "." + "b" * 300
        chunks = chunk_text(text, max_size=500, overlap=50)

        self.assertEqual(len(chunks), 2)
        self.assertEqual(chunks[0].end, 401)
        self.assertTrue(chunks[0].text.endswith("."))
        self.assertEqual(chunks[1].start, 351)
        self.assertEqual(chunks[1].end, len(text))

    def test_cuts_after_late_line_break(self) -> None:
        text = "a" * 420 + "\n" + "b" * 300
        chunks = chunk_text(text, max_size=500, overlap=50)
        self.assertEqual(chunks[0].end, 421)

    def test_early_terminator_falls_back_to_hard_boundary(self) -> None:
        text = "a" * 100 + "." + "b" * 600
        chunks = chunk_text(text, max_size=500, overlap=50)

        self.assertEqual(chunks[0].end, 500)
        self.assertEqual(chunks[1].start, 450)
        self.assertEqual(chunks[-1].end, len(text))

    def test_chunks_cover_whole_text_without_gaps(self) -> None:
        text = _sample_text()
        self.assertGreater(len(text), 2000)
        chunks = chunk_text(text, max_size=500, overlap=100)

        self.assertGreater(len(chunks), 3)
        self.assertEqual(chunks[0].start, 0)
        self.assertEqual(chunks[-1].end, len(text))
        for previous, current in zip(chunks, chunks[1:]):
            self.assertLessEqual(current.start, previous.end)
            self.assertGreater(current.start, previous.start)
        for chunk in chunks:
            self.assertEqual(chunk.text, text[chunk.start : chunk.end])
            self.assertLessEqual(len(chunk), 500)

    def test_chunking_is_deterministic(self) -> None:
        text = _sample_text()
        self.assertEqual(chunk_text(text, 300, 60), chunk_text(text, 300, 60))

    def test_custom_terminators(self) -> None:
        text = "가" * 400 + "。" + "나" * 300
        chunks = chunk_text(text, max_size=500, overlap=50, terminators=("。",))
        self.assertEqual(chunks[0].end, 401)

    def test_whitespace_only_text_yields_no_chunks(self) -> None:
        self.assertEqual(chunk_text("   \n  ", max_size=500, overlap=100), [])

    def test_empty_text_yields_no_chunks(self) -> None:
        self.assertEqual(chunk_text("", max_size=500, overlap=100), [])


if __name__ == "__main__":
    unittest.main()
