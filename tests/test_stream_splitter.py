import io
import unittest
from typing import List

from dumpflow.splitter import split_stream
from passdump.config import LLVM_GRAMMAR
from passdump.domain.markers import MarkerInfo, MarkerKind


class RecordingSink:
    def __init__(self, label: str) -> None:
        self.label = label
        self.chunks: List[bytes] = []
        self.closed = False

    def write(self, data: bytes) -> int:
        if self.closed:
            raise AssertionError(f"write to closed sink {self.label}")
        self.chunks.append(data)
        return len(data)

    def close(self) -> None:
        self.closed = True

    @property
    def data(self) -> bytes:
        return b"".join(self.chunks)


class Recorder:
    """Hands out one RecordingSink per marker and remembers the order."""

    def __init__(self) -> None:
        self.prelude = RecordingSink("prelude")
        self.sinks: List[RecordingSink] = []
        self.markers: List[MarkerInfo] = []
        self.open_at_advance: List[bool] = []

    def advance(self, info: MarkerInfo) -> RecordingSink:
        previous = self.sinks[-1] if self.sinks else self.prelude
        # the previous sink is still open when the next one is requested
        self.open_at_advance.append(not previous.closed)
        self.markers.append(info)
        sink = RecordingSink(f"{len(self.sinks) + 1}-{info.pass_name}")
        self.sinks.append(sink)
        return sink


LOG = (
    b"loading module\n"
    b"// -----// IR Dump Before Canonicalizer (canonicalize) //----- //\n"
    b"func.func @a() {\n"
    b"}\n"
    b"// -----// IR Dump After Canonicalizer (canonicalize) //----- //\n"
    b"func.func @a() {}\n"
    b"// -----// IR Dump After Broken //----- //\n"
    b"trailing\n"
)


class TestSplitStream(unittest.TestCase):
    def setUp(self) -> None:
        self.warnings: List[str] = []
        self.rec = Recorder()

    def split(self, data, **kwargs):
        return split_stream(
            data,
            self.rec.advance,
            self.rec.prelude,
            warn=self.warnings.append,
            **kwargs,
        )

    def test_routes_each_line_to_one_sink(self) -> None:
        stats = self.split(io.BytesIO(LOG))

        self.assertEqual(b"loading module\n", self.rec.prelude.data)
        self.assertEqual(2, len(self.rec.sinks))

        first, second = self.rec.sinks
        self.assertEqual(
            b"// -----// IR Dump Before Canonicalizer (canonicalize) //----- //\n"
            b"func.func @a() {\n"
            b"}\n",
            first.data,
        )
        # the malformed marker stays with the dump that was open
        self.assertEqual(
            b"// -----// IR Dump After Canonicalizer (canonicalize) //----- //\n"
            b"func.func @a() {}\n"
            b"// -----// IR Dump After Broken //----- //\n"
            b"trailing\n",
            second.data,
        )

        self.assertEqual(8, stats.lines)
        self.assertEqual(len(LOG), stats.bytes_read)
        self.assertEqual(2, stats.markers)
        self.assertEqual(1, stats.malformed)

    def test_concatenated_sinks_reproduce_the_input(self) -> None:
        self.split(io.BytesIO(LOG))

        joined = self.rec.prelude.data + b"".join(s.data for s in self.rec.sinks)
        self.assertEqual(LOG, joined)

    def test_markers_passed_to_advance(self) -> None:
        self.split(io.BytesIO(LOG))

        self.assertEqual(
            [
                MarkerInfo("Canonicalizer", "(canonicalize)", MarkerKind.BEFORE),
                MarkerInfo("Canonicalizer", "(canonicalize)", MarkerKind.AFTER),
            ],
            self.rec.markers,
        )
        self.assertEqual([True, True], self.rec.open_at_advance)

    def test_all_sinks_closed(self) -> None:
        self.split(io.BytesIO(LOG))

        self.assertTrue(self.rec.prelude.closed)
        self.assertTrue(all(s.closed for s in self.rec.sinks))

    def test_malformed_marker_warns(self) -> None:
        self.split(io.BytesIO(LOG))

        self.assertEqual(1, len(self.warnings))
        self.assertIn("unable to parse line", self.warnings[0])
        self.assertIn("After Broken", self.warnings[0])

    def test_unknown_kind_opens_a_sink(self) -> None:
        data = b"// -----// IR Dump During CSE (cse) //----- //\nbody\n"

        stats = self.split(io.BytesIO(data))

        self.assertEqual([MarkerKind.UNKNOWN], [m.kind for m in self.rec.markers])
        self.assertEqual(data, self.rec.sinks[0].data)
        self.assertEqual(1, stats.markers)
        self.assertEqual(["unknown kind `During`"], self.warnings)

    def test_empty_input_closes_the_prelude(self) -> None:
        stats = self.split(io.BytesIO(b""))

        self.assertTrue(self.rec.prelude.closed)
        self.assertEqual(b"", self.rec.prelude.data)
        self.assertEqual(0, stats.lines)
        self.assertEqual([], self.rec.sinks)

    def test_last_line_without_newline_is_content(self) -> None:
        data = b"x\n// -----// IR Dump Before CSE (cse) //----- //"

        self.split(io.BytesIO(data))

        self.assertEqual([], self.rec.sinks)
        self.assertEqual(data, self.rec.prelude.data)

    def test_non_utf8_bytes_written_verbatim(self) -> None:
        data = (
            b"// -----// IR Dump Before CSE (cse) //----- //\n"
            b"\"\xff\xfe raw bytes\"\n"
        )

        self.split(io.BytesIO(data))

        self.assertEqual(data, self.rec.sinks[0].data)

    def test_accepts_text_lines(self) -> None:
        lines = [
            "prelude\n",
            "// -----// IR Dump Before CSE (cse) //----- //\n",
            "body\n",
        ]

        self.split(iter(lines))

        self.assertEqual(b"prelude\n", self.rec.prelude.data)
        self.assertEqual(
            b"// -----// IR Dump Before CSE (cse) //----- //\nbody\n",
            self.rec.sinks[0].data,
        )

    def test_custom_grammar(self) -> None:
        data = (
            b"// -----// IR Dump Before CSE (cse) //----- //\n"
            b"*** IR Dump Before InstCombinePass on main ***\n"
            b"define i32 @main()\n"
        )

        self.split(io.BytesIO(data), grammar=LLVM_GRAMMAR)

        self.assertEqual(["InstCombinePass"], [m.pass_name for m in self.rec.markers])
        self.assertEqual(b"// -----// IR Dump Before CSE (cse) //----- //\n", self.rec.prelude.data)

    def test_sink_closed_when_write_fails(self) -> None:
        class FailingSink(RecordingSink):
            def write(self, data: bytes) -> int:
                raise OSError("disk full")

        failing = FailingSink("failing")

        with self.assertRaises(OSError):
            split_stream(
                io.BytesIO(b"// -----// IR Dump Before CSE (cse) //----- //\n"),
                lambda info: failing,
                self.rec.prelude,
                warn=self.warnings.append,
            )

        self.assertTrue(self.rec.prelude.closed)
        self.assertTrue(failing.closed)


if __name__ == "__main__":
    unittest.main()
