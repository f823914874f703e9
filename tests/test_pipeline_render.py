import unittest
from pathlib import Path
from typing import List, Tuple

from dumpflow.inference import infer_pipeline
from dumpflow.render import render_lines, render_pipeline
from passdump.domain.artifacts import ArtifactName, ArtifactRef
from passdump.domain.markers import MarkerKind
from passdump.domain.passes import Pipeline

B = MarkerKind.BEFORE
A = MarkerKind.AFTER


def build(entries: List[Tuple[int, MarkerKind, str]]) -> Pipeline:
    refs = [
        ArtifactRef(ArtifactName(seq, kind, name), Path(f"{seq:04d}-{kind.tag}-{name}.mlir.zst"), True)
        for seq, kind, name in entries
    ]
    return infer_pipeline(refs)


class TestRenderPipeline(unittest.TestCase):
    def test_tree_connectors(self) -> None:
        pipeline = build(
            [
                (1, B, "Canonicalizer"),
                (1, A, "Canonicalizer"),
                (2, B, "Inliner"),
                (3, B, "Canonicalizer"),
                (3, A, "Canonicalizer"),
                (4, B, "CSE"),
                (4, A, "CSE"),
                (5, A, "Inliner"),
                (6, B, "SymbolDCE"),
                (6, A, "SymbolDCE"),
            ]
        )

        self.assertEqual(
            "  ├─ Canonicalizer\n"
            "  ├─ Inliner\n"
            "  │  ├─ Canonicalizer\n"
            "  │  └─ CSE\n"
            "  └─ SymbolDCE\n",
            render_pipeline(pipeline),
        )

    def test_last_sibling_subtree_has_no_continuation(self) -> None:
        pipeline = build(
            [
                (1, B, "Outer"),
                (2, B, "Middle"),
                (3, B, "Inner"),
                (3, A, "Inner"),
                (4, A, "Middle"),
                (5, B, "Tail"),
                (5, A, "Tail"),
                (6, A, "Outer"),
            ]
        )

        self.assertEqual(
            [
                "  └─ Outer",
                "     ├─ Middle",
                "     │  └─ Inner",
                "     └─ Tail",
            ],
            render_lines(pipeline),
        )

    def test_show_files(self) -> None:
        pipeline = build([(1, B, "CSE"), (1, A, "CSE")])

        self.assertEqual(
            ["  └─ CSE (0001-0b-CSE.mlir.zst, 0001-1a-CSE.mlir.zst)"],
            render_lines(pipeline, show_files=True),
        )

    def test_empty_pipeline(self) -> None:
        self.assertEqual("", render_pipeline(Pipeline()))


if __name__ == "__main__":
    unittest.main()
