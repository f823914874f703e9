import unittest
from typing import List, Tuple

from dumpflow.namer import ArtifactNamer
from passdump.domain.markers import MarkerInfo, MarkerKind


def before(name: str, extras: str = "(x)") -> MarkerInfo:
    return MarkerInfo(pass_name=name, extras=extras, kind=MarkerKind.BEFORE)


def after(name: str, extras: str = "(x)") -> MarkerInfo:
    return MarkerInfo(pass_name=name, extras=extras, kind=MarkerKind.AFTER)


def allocate(markers: List[MarkerInfo]) -> List[Tuple[int, str, str]]:
    namer = ArtifactNamer()
    out = []
    for info in markers:
        d = namer.advance(info)
        out.append((d.sequence, d.name.kind.tag, d.name.pass_name))
    return out


class TestArtifactNamer(unittest.TestCase):
    def test_starts_after_the_prelude(self) -> None:
        namer = ArtifactNamer()
        self.assertEqual(0, namer.counter)
        self.assertIsNone(namer.last)

        d = namer.advance(before("Canonicalizer"))

        self.assertEqual(1, d.sequence)
        self.assertTrue(d.fresh)

    def test_adjacent_before_after_share_a_number(self) -> None:
        got = allocate(
            [
                before("Canonicalizer"),
                after("Canonicalizer"),
                before("CSE"),
                after("CSE"),
            ]
        )

        self.assertEqual(
            [
                (1, "0b", "Canonicalizer"),
                (1, "1a", "Canonicalizer"),
                (2, "0b", "CSE"),
                (2, "1a", "CSE"),
            ],
            got,
        )

    def test_nested_pass_after_gets_a_new_number(self) -> None:
        got = allocate(
            [
                before("Outer"),
                before("Inner"),
                after("Inner"),
                after("Outer"),
            ]
        )

        self.assertEqual(
            [
                (1, "0b", "Outer"),
                (2, "0b", "Inner"),
                (2, "1a", "Inner"),
                (3, "1a", "Outer"),
            ],
            got,
        )

    def test_extras_must_match_to_share(self) -> None:
        got = allocate([before("Canonicalizer", "(a)"), after("Canonicalizer", "(b)")])

        self.assertEqual([(1, "0b", "Canonicalizer"), (2, "1a", "Canonicalizer")], got)

    def test_after_after_does_not_share(self) -> None:
        got = allocate([after("CSE"), after("CSE")])

        self.assertEqual([(1, "1a", "CSE"), (2, "1a", "CSE")], got)

    def test_unknown_kind_allocates(self) -> None:
        unknown = MarkerInfo(pass_name="CSE", extras="(x)", kind=MarkerKind.UNKNOWN)

        got = allocate([before("CSE"), unknown])

        self.assertEqual([(1, "0b", "CSE"), (2, "2u", "CSE")], got)

    def test_allocations_counts_distinct_numbers(self) -> None:
        namer = ArtifactNamer()
        decisions = [
            namer.advance(m)
            for m in [before("A"), after("A"), before("B"), before("C"), after("C"), after("B")]
        ]

        self.assertEqual(4, namer.allocations)
        self.assertEqual([True, False, True, True, False, True], [d.fresh for d in decisions])
        self.assertEqual(after("B"), namer.last)

    def test_should_reuse_does_not_advance(self) -> None:
        namer = ArtifactNamer()
        namer.advance(before("A"))

        self.assertTrue(namer.should_reuse(after("A")))
        self.assertFalse(namer.should_reuse(after("B")))
        self.assertEqual(1, namer.counter)


if __name__ == "__main__":
    unittest.main()
