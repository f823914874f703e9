import tempfile
import unittest
from pathlib import Path

import zstandard

from passdump.domain.artifacts import ArtifactName, ArtifactRef
from passdump.domain.markers import MarkerKind
from passdump.io.sinks import SinkFactory, open_artifact_text, open_zstd_writer


class TestSinkFactory(unittest.TestCase):
    def test_plain_sink(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            factory = SinkFactory(Path(td), compress=False)

            sink = factory(3, "0b-CSE", "mlir")
            sink.write(b"// marker\nbody\n")
            sink.close()

            path = Path(td) / "0003-0b-CSE.mlir"
            self.assertEqual([path], factory.created)
            self.assertEqual(b"// marker\nbody\n", path.read_bytes())

    def test_compressed_sink_is_a_complete_frame(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            factory = SinkFactory(Path(td), compress=True, level=1, threads=2)

            sink = factory(0, "prelude", "txt")
            sink.write(b"line one\n" * 1000)
            sink.close()

            path = Path(td) / "0000-prelude.txt.zst"
            self.assertEqual(factory.path_for(0, "prelude", "txt"), path)
            with path.open("rb") as fh, zstandard.ZstdDecompressor().stream_reader(fh) as reader:
                self.assertEqual(b"line one\n" * 1000, reader.read())


class TestReadArtifacts(unittest.TestCase):
    def test_read_text_both_encodings(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            plain = root / "0001-0b-CSE.mlir"
            plain.write_bytes(b"a\r\nb\n")
            packed = root / "0001-1a-CSE.mlir.zst"
            with open_zstd_writer(packed) as sink:
                sink.write(b"c\r\nd\n")

            before = ArtifactRef(ArtifactName(1, MarkerKind.BEFORE, "CSE"), plain, compressed=False)
            after = ArtifactRef(ArtifactName(1, MarkerKind.AFTER, "CSE"), packed, compressed=True)

            # newlines are left as written
            self.assertEqual("a\r\nb\n", before.read_text())
            self.assertEqual("c\r\nd\n", after.read_text())

    def test_invalid_utf8_is_replaced(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "0001-0b-CSE.mlir"
            path.write_bytes(b"ok \xff\n")

            with open_artifact_text(path, compressed=False) as f:
                self.assertEqual("ok \ufffd\n", f.read())


if __name__ == "__main__":
    unittest.main()
