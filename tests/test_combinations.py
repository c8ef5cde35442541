from __future__ import annotations

import pytest

from fda_device_lookup.classification.combinations import CombinationGenerator, remove_filler_words


def _is_contiguous(combo: tuple[str, ...], terms: list[str]) -> bool:
    indices = [terms.index(term) for term in combo]
    return indices == list(range(indices[0], indices[0] + len(indices)))


def test_three_terms_follow_size_then_contiguity_order():
    combos = CombinationGenerator().generate(["A", "B", "C"])

    assert combos == [
        ("A", "B", "C"),
        ("A", "B"),
        ("B", "C"),
        ("A", "C"),
        ("A",),
        ("B",),
        ("C",),
    ]


@pytest.mark.parametrize("n", [2, 3, 4, 5, 6])
def test_generates_every_non_empty_subset_once(n):
    terms = [f"t{i}" for i in range(n)]
    combos = CombinationGenerator().generate(terms)

    assert len(combos) == 2**n - 1
    assert len(set(combos)) == len(combos)

    sizes = [len(combo) for combo in combos]
    assert sizes == sorted(sizes, reverse=True)
    assert sorted(set(sizes), reverse=True) == list(range(n, 0, -1))

    for size in range(1, n + 1):
        group = [combo for combo in combos if len(combo) == size]
        flags = [_is_contiguous(combo, terms) for combo in group]
        # once a scattered subset appears, no contiguous one may follow
        assert flags == sorted(flags, reverse=True)


def test_four_terms_prefer_windows_within_a_size():
    combos = CombinationGenerator().generate(["A", "B", "C", "D"])
    pairs = [combo for combo in combos if len(combo) == 2]

    assert pairs == [
        ("A", "B"),
        ("B", "C"),
        ("C", "D"),
        ("A", "C"),
        ("A", "D"),
        ("B", "D"),
    ]


def test_single_and_empty_sequences_yield_the_sequence_itself():
    generator = CombinationGenerator()

    assert generator.generate(["oximeter"]) == [("oximeter",)]
    assert generator.generate([]) == [()]


def test_phrase_priority_tries_short_combinations_before_long_ones():
    terms = ["a1", "b2", "c3", "d4", "e5"]
    combos = CombinationGenerator().generate_by_phrase(terms)

    assert len(combos) == 31
    assert [len(combo) for combo in combos] == [5] + [3] * 10 + [2] * 10 + [4] * 5 + [1] * 5


def test_phrase_priority_keeps_two_term_queries_intact():
    combos = CombinationGenerator().generate_by_phrase(["pulse", "oximeter"])

    assert combos == [("pulse", "oximeter"), ("pulse",), ("oximeter",)]


def test_filler_words_are_removed_when_two_terms_survive():
    filler = frozenset({"the", "for", "device"})

    assert remove_filler_words(["the", "Pulse", "oximeter", "for", "x"], filler) == ("Pulse", "oximeter")


def test_filler_words_are_kept_when_fewer_than_two_terms_would_remain():
    filler = frozenset({"the", "for", "device"})

    assert remove_filler_words(["the", "oximeter"], filler) == ("the", "oximeter")
    assert remove_filler_words(["Device", "for"], filler) == ("Device", "for")
