"""Tests for the pattern catalog and matcher.

Covers the catalog's shape, single-pattern matching (types, geometry,
rotations), first-match search order and the full candidate listing.
"""

from __future__ import annotations

import pytest

from chrono_engine.core.catalog import PATTERN_CATALOG, pattern_by_name
from chrono_engine.core.matcher import PatternMatcher
from chrono_engine.domain.enums import Arrangement, FragmentType
from chrono_engine.domain.pattern import PatternDefinition

from tests.test_fragment import _frag


@pytest.fixture
def matcher() -> PatternMatcher:
    return PatternMatcher()


CHRONO = pattern_by_name("Chronological Sequence")
PARADOX = pattern_by_name("Paradox Resolution")
BALANCE = pattern_by_name("Temporal Balance")
LOOP = pattern_by_name("Time Loop")


class TestCatalog:
    def test_catalog_order_and_points(self) -> None:
        assert [(p.name, p.points) for p in PATTERN_CATALOG] == [
            ("Chronological Sequence", 100),
            ("Paradox Resolution", 150),
            ("Temporal Balance", 50),
            ("Time Loop", 200),
        ]

    def test_rotations_align_with_types(self) -> None:
        for pattern in PATTERN_CATALOG:
            assert pattern.required_rotations is not None
            assert len(pattern.required_rotations) == len(pattern.required_types)

    def test_unknown_name(self) -> None:
        with pytest.raises(KeyError):
            pattern_by_name("Grandfather Paradox")

    def test_misaligned_rotations_rejected(self) -> None:
        with pytest.raises(Exception):
            PatternDefinition(
                name="Broken",
                required_types=(FragmentType.PAST, FragmentType.FUTURE),
                arrangement=Arrangement.ADJACENT,
                required_rotations=(0,),
                points=10,
            )

    def test_catalog_entries_are_frozen(self) -> None:
        with pytest.raises(Exception):
            CHRONO.points = 1000


class TestMatches:
    def test_chronological_sequence(self, matcher: PatternMatcher) -> None:
        combo = [_frag("past", 0, 0), _frag("present", 1, 0), _frag("future", 2, 0)]
        assert matcher.matches(combo, CHRONO)

    def test_order_of_candidates_is_irrelevant(self, matcher: PatternMatcher) -> None:
        combo = [_frag("future", 2, 0), _frag("past", 0, 0), _frag("present", 1, 0)]
        assert matcher.matches(combo, CHRONO)

    def test_wrong_rotation_fails(self, matcher: PatternMatcher) -> None:
        combo = [_frag("past", 0, 0), _frag("present", 1, 0), _frag("future", 2, 0, rotation=90)]
        assert not matcher.matches(combo, CHRONO)

    def test_wrong_size_fails(self, matcher: PatternMatcher) -> None:
        combo = [_frag("past", 0, 0, rotation=180), _frag("future", 1, 0, rotation=180)]
        assert not matcher.matches(combo, CHRONO)

    def test_type_multiset_must_be_exact(self, matcher: PatternMatcher) -> None:
        combo = [_frag("past", 0, 0), _frag("past", 1, 0), _frag("future", 2, 0)]
        assert not matcher.matches(combo, CHRONO)

    def test_paradox_resolution(self, matcher: PatternMatcher) -> None:
        combo = [
            _frag("void", 1, 1, rotation=270),
            _frag("paradox", 0, 0, rotation=90),
            _frag("constant", 1, 0, rotation=180),
        ]
        assert matcher.matches(combo, PARADOX)

    def test_paradox_resolution_in_a_row_fails(self, matcher: PatternMatcher) -> None:
        combo = [
            _frag("paradox", 0, 0, rotation=90),
            _frag("constant", 1, 0, rotation=180),
            _frag("void", 2, 0, rotation=270),
        ]
        assert not matcher.matches(combo, PARADOX)

    def test_time_loop_greedy_rotation_alignment(self, matcher: PatternMatcher) -> None:
        # The first 'past' in candidate order takes rotation 0, the second 270
        combo = [
            _frag("past", 0, 0, rotation=0, id=1),
            _frag("present", 1, 0, rotation=90, id=2),
            _frag("future", 0, 1, rotation=180, id=3),
            _frag("past", 1, 1, rotation=270, id=4),
        ]
        assert matcher.matches(combo, LOOP)

    def test_time_loop_swapped_pasts_fail(self, matcher: PatternMatcher) -> None:
        combo = [
            _frag("past", 0, 0, rotation=270, id=1),
            _frag("present", 1, 0, rotation=90, id=2),
            _frag("future", 0, 1, rotation=180, id=3),
            _frag("past", 1, 1, rotation=0, id=4),
        ]
        assert not matcher.matches(combo, LOOP)

    def test_arrangement_only_rule_ignores_rotation(self, matcher: PatternMatcher) -> None:
        pattern = PatternDefinition(
            name="Any Pair",
            required_types=(FragmentType.VOID, FragmentType.VOID),
            arrangement=Arrangement.ADJACENT,
            points=5,
        )
        combo = [_frag("void", 0, 0, rotation=90), _frag("void", 0, 1, rotation=270)]
        assert matcher.matches(combo, pattern)


class TestFindMatch:
    def test_scenario_chronological_sequence(self, matcher: PatternMatcher) -> None:
        pool = [_frag("past", 0, 0), _frag("present", 1, 0), _frag("future", 2, 0)]
        match = matcher.find_match(pool)
        assert match is not None
        assert match.pattern.name == "Chronological Sequence"
        assert match.pattern.points == 100
        assert sorted(match.fragment_ids) == sorted(f.id for f in pool)

    def test_scenario_rotated_future_no_match(self, matcher: PatternMatcher) -> None:
        pool = [_frag("past", 0, 0), _frag("present", 1, 0), _frag("future", 2, 0, rotation=90)]
        assert matcher.find_match(pool) is None

    def test_scenario_temporal_balance(self, matcher: PatternMatcher) -> None:
        pool = [_frag("past", 0, 0, rotation=180), _frag("future", 1, 0, rotation=180)]
        match = matcher.find_match(pool)
        assert match is not None
        assert match.pattern.name == "Temporal Balance"
        assert match.pattern.points == 50

    def test_scenario_temporal_balance_apart(self, matcher: PatternMatcher) -> None:
        pool = [_frag("past", 0, 0, rotation=180), _frag("future", 2, 0, rotation=180)]
        assert matcher.find_match(pool) is None

    def test_match_found_inside_larger_pool(self, matcher: PatternMatcher) -> None:
        pool = [
            _frag("void", 5, 5),
            _frag("past", 0, 3),
            _frag("constant", 4, 0),
            _frag("present", 0, 4),
            _frag("future", 0, 5),
        ]
        match = matcher.find_match(pool)
        assert match is not None
        assert match.pattern.name == "Chronological Sequence"
        assert [f.fragment_type for f in match.fragments] == [
            FragmentType.PAST,
            FragmentType.PRESENT,
            FragmentType.FUTURE,
        ]

    def test_catalog_order_wins(self, matcher: PatternMatcher) -> None:
        # A Temporal Balance pair is also on the board; the Sequence is
        # earlier in the catalog.
        pool = [
            _frag("past", 0, 0, id=1),
            _frag("present", 1, 0, id=2),
            _frag("future", 2, 0, id=3),
            _frag("past", 4, 4, rotation=180, id=4),
            _frag("future", 5, 4, rotation=180, id=5),
        ]
        match = matcher.find_match(pool)
        assert match is not None
        assert match.pattern.name == "Chronological Sequence"

    def test_first_subset_in_pool_order_wins(self, matcher: PatternMatcher) -> None:
        pool = [
            _frag("past", 0, 0, rotation=180, id=1),
            _frag("future", 1, 0, rotation=180, id=2),
            _frag("past", 3, 3, rotation=180, id=3),
            _frag("future", 3, 4, rotation=180, id=4),
        ]
        match = matcher.find_match(pool)
        assert match is not None
        assert match.fragment_ids == [1, 2]

    def test_deterministic(self, matcher: PatternMatcher) -> None:
        pool = [
            _frag("past", 0, 0, rotation=180, id=1),
            _frag("future", 1, 0, rotation=180, id=2),
            _frag("future", 0, 1, rotation=180, id=3),
        ]
        results = {tuple(matcher.find_match(pool).fragment_ids) for _ in range(20)}
        assert results == {(1, 2)}

    def test_no_false_positive_for_foreign_multiset(self, matcher: PatternMatcher) -> None:
        # Perfect geometry and rotations, but no catalog entry uses these types
        pool = [
            _frag("void", 0, 0, rotation=0, id=1),
            _frag("void", 1, 0, rotation=0, id=2),
            _frag("constant", 2, 0, rotation=0, id=3),
        ]
        assert matcher.find_match(pool) is None

    def test_solved_fragments_are_ignored(self, matcher: PatternMatcher) -> None:
        pool = [
            _frag("past", 0, 0, solved=True),
            _frag("present", 1, 0),
            _frag("future", 2, 0),
        ]
        assert matcher.find_match(pool) is None

    def test_small_pools_short_circuit(self, matcher: PatternMatcher) -> None:
        assert matcher.find_match([]) is None
        assert matcher.find_match([_frag("past", 0, 0)]) is None

    def test_custom_catalog(self) -> None:
        pattern = PatternDefinition(
            name="Void Pair",
            required_types=(FragmentType.VOID, FragmentType.VOID),
            arrangement=Arrangement.ADJACENT,
            required_rotations=(0, 0),
            points=10,
        )
        matcher = PatternMatcher(catalog=[pattern])
        match = matcher.find_match([_frag("void", 0, 0, id=1), _frag("void", 1, 0, id=2)])
        assert match is not None
        assert match.pattern.name == "Void Pair"


class TestFindAllMatches:
    def test_lists_every_candidate_in_search_order(self, matcher: PatternMatcher) -> None:
        pool = [
            _frag("past", 0, 0, rotation=180, id=1),
            _frag("future", 1, 0, rotation=180, id=2),
            _frag("future", 0, 1, rotation=180, id=3),
        ]
        matches = matcher.find_all_matches(pool)
        assert [m.fragment_ids for m in matches] == [[1, 2], [1, 3]]
        assert all(m.pattern.name == "Temporal Balance" for m in matches)

    def test_empty_when_nothing_matches(self, matcher: PatternMatcher) -> None:
        assert matcher.find_all_matches([_frag("past", 0, 0), _frag("void", 3, 3)]) == []
