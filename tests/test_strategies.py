"""Match strategy tests - literal, regex and Aho-Corasick."""

import pytest

from core.errors import InvalidPatternError
from core.lexer import classify
from core.models import SearchOptions
from core.strategies import (AhoCorasickAutomaton, LiteralStrategy,
                             MultiPatternStrategy, RegexStrategy,
                             create_strategy)


def _feed_all(strategy, text):
    candidates = []
    for position in classify(text):
        candidates.extend(strategy.feed(text, position))
    return candidates


class TestStrategySelection:

    def test_string_query_is_literal(self):
        assert isinstance(create_strategy("foo"), LiteralStrategy)

    def test_regex_option_selects_regex(self):
        assert isinstance(create_strategy("fo+", SearchOptions(regex=True)), RegexStrategy)

    def test_list_query_is_multi_pattern(self):
        assert isinstance(create_strategy(["a", "b"]), MultiPatternStrategy)
        assert isinstance(create_strategy(("a", "b"), SearchOptions(regex=True)), MultiPatternStrategy)


class TestLiteralStrategy:

    def test_case_insensitive_by_default(self):
        strategy = LiteralStrategy("Foo")
        assert strategy.match_at("xFOOx", 1) == 3
        assert strategy.match_at("xfoox", 1) == 3

    def test_case_sensitive(self):
        strategy = LiteralStrategy("Foo", case_sensitive=True)
        assert strategy.match_at("xFOOx", 1) == 0
        assert strategy.match_at("xFoox", 1) == 3

    def test_match_past_end(self):
        assert LiteralStrategy("foo").match_at("fo", 0) == 0

    def test_empty_needle_never_matches(self):
        assert _feed_all(LiteralStrategy(""), "abc") == []

    def test_skips_literal_positions(self):
        assert _feed_all(LiteralStrategy("foo"), '"foo" foo') == [(6, 3)]


class TestRegexStrategy:

    def test_anchored_at_position(self):
        strategy = RegexStrategy(r"b+")
        assert strategy.match_at("abbb", 0) == 0
        assert strategy.match_at("abbb", 1) == 3
        assert strategy.match_at("abbb", 2) == 2

    def test_ignore_case(self):
        assert RegexStrategy(r"foo").match_at("FOO", 0) == 3
        assert RegexStrategy(r"foo", case_sensitive=True).match_at("FOO", 0) == 0

    def test_zero_length_matches_discarded(self):
        assert _feed_all(RegexStrategy(r"x*"), "ab") == []

    def test_invalid_pattern_raises(self):
        with pytest.raises(InvalidPatternError):
            RegexStrategy(r"(unclosed")

    def test_every_searchable_position_tried(self):
        assert _feed_all(RegexStrategy(r"\d+"), "a12") == [(1, 2), (2, 1)]

    def test_caret_matches_at_scan_position(self):
        assert RegexStrategy(r"^foo").match_at("x = foo;", 4) == 3

    def test_word_boundary_ignores_preceding_text(self):
        assert RegexStrategy(r"\bfoo").match_at("afoo", 1) == 3

    def test_lookbehind_cannot_see_preceding_text(self):
        assert RegexStrategy(r"(?<=a)b").match_at("ab", 1) == 0


class TestAhoCorasick:

    def test_overlapping_patterns_reported(self):
        automaton = AhoCorasickAutomaton(["foo", "foobar"])
        ends = [(end + 1, length) for end, length in automaton.iter_matches("foobar")]
        assert ends == [(3, 3), (6, 6)]

    def test_fail_links(self):
        automaton = AhoCorasickAutomaton(["he", "she", "his", "hers"])
        found = sorted((end - length + 1, length) for end, length in automaton.iter_matches("ushers"))
        # she@1, he@2, hers@2
        assert found == [(1, 3), (2, 2), (2, 4)]

    def test_duplicates_and_empty_patterns_dropped(self):
        automaton = AhoCorasickAutomaton(["ab", "ab", ""])
        assert automaton.patterns == ["ab"]
        assert list(automaton.iter_matches("abab")) == [(1, 2), (3, 2)]

    def test_strategy_case_folding(self):
        strategy = MultiPatternStrategy(["Foo"], case_sensitive=False)
        assert _feed_all(strategy, "xFOO") == [(1, 3)]

    def test_strategy_reports_start_offsets(self):
        strategy = MultiPatternStrategy(["foo", "foobar"], case_sensitive=True)
        assert _feed_all(strategy, "foobar") == [(0, 3), (0, 6)]

    def test_lookback_is_longest_pattern(self):
        assert MultiPatternStrategy(["a", "abcd"]).lookback == 4

    def test_automaton_shared_state_separate(self):
        first = MultiPatternStrategy(["ab", "b"])
        second = MultiPatternStrategy(["ab", "b"])
        assert first.automaton is second.automaton
        assert _feed_all(first, "a") == []
        # second starts from the root, not from the "a" state left in first
        assert _feed_all(second, "b") == [(0, 1)]
