"""
test_dp_core.py — Tests for the local-alignment DP core

Tests the functions in fuzzalign.dp_core:
- AlignmentConfig: immutable scoring parameters and gap penalty lookup
- fill_score_matrix: table values, border, global maximum selection
- traceback_local: matched-symbol reconstruction and tie-break
- run_local_dp / get_local_alignment: top-level drivers
"""

import dataclasses

import numpy as np
import pytest

from fuzzalign.dp_core import (
    AlignmentConfig,
    fill_score_matrix,
    traceback_local,
    run_local_dp,
    get_local_alignment,
)
from fuzzalign import default


class TestAlignmentConfig:
    """AlignmentConfig is a read-only value with a penalty fallback."""

    def test_defaults_are_lcs_scoring(self):
        cfg = AlignmentConfig()
        assert (cfg.match_score, cfg.mismatch_penalty, cfg.default_gap_penalty) == (1, 0, 0)
        assert dict(cfg.penalty_map) == {}

    def test_gap_penalty_lookup(self, catalog_config):
        assert catalog_config.gap_penalty(" ") == 0
        assert catalog_config.gap_penalty("・") == 0
        assert catalog_config.gap_penalty("の") == 100
        assert catalog_config.gap_penalty("A") == 10

    def test_frozen(self, catalog_config):
        with pytest.raises(dataclasses.FrozenInstanceError):
            catalog_config.match_score = 5

    def test_penalty_map_read_only(self, catalog_config):
        with pytest.raises(TypeError):
            catalog_config.penalty_map["x"] = 1

    def test_penalty_map_is_copied(self):
        source = {"-": 0}
        cfg = AlignmentConfig(3, 10, 10, source)
        source["-"] = 50
        source["x"] = 1
        assert cfg.gap_penalty("-") == 0
        assert cfg.gap_penalty("x") == 10


class TestScoreMatrix:
    """Table fill: values, border and maximum selection."""

    def test_lcs_table_values(self, lcs_config):
        data = fill_score_matrix("abc", "bac", lcs_config)
        expected = np.array([
            [0, 0, 0, 0],
            [0, 0, 1, 1],
            [0, 1, 1, 1],
            [0, 1, 1, 2],
        ])
        assert np.array_equal(data.H, expected)
        assert (data.best_score, data.best_i, data.best_j) == (2, 3, 3)

    def test_shape_and_zero_border(self, catalog_config):
        s, t = "ボルトM8", "ボルト"
        data = fill_score_matrix(s, t, catalog_config)
        assert data.H.shape == (len(s) + 1, len(t) + 1)
        assert np.all(data.H[0, :] == 0)
        assert np.all(data.H[:, 0] == 0)

    def test_table_is_read_only(self, lcs_config):
        data = fill_score_matrix("ab", "ab", lcs_config)
        assert not data.H.flags.writeable
        with pytest.raises(ValueError):
            data.H[1, 1] = 7

    def test_first_maximum_wins(self, lcs_config):
        """The second occurrence of 'ab' scores the same and is ignored."""
        data = fill_score_matrix("abXab", "ab", lcs_config)
        assert data.best_score == 2
        assert (data.best_i, data.best_j) == (2, 2)

    def test_integer_table_for_integer_config(self, catalog_config):
        data = fill_score_matrix("abc", "abc", catalog_config)
        assert data.H.dtype == np.int64
        assert isinstance(data.best_score, int)

    def test_float_table_for_float_config(self):
        cfg = AlignmentConfig(1.5, 0.5, 0.25)
        data = fill_score_matrix("ab", "ab", cfg)
        assert data.H.dtype == float
        assert data.best_score == pytest.approx(3.0)

    def test_cells_non_negative(self, catalog_config, rng, random_text_factory):
        for _ in range(20):
            s = random_text_factory(12, rng)
            t = random_text_factory(7, rng)
            data = fill_score_matrix(s, t, catalog_config)
            assert np.all(data.H >= 0)

    @pytest.mark.parametrize("s,t", [("", ""), ("", "abc"), ("abc", "")])
    def test_zero_length_inputs(self, s, t, catalog_config):
        data = fill_score_matrix(s, t, catalog_config)
        assert data.H.shape == (len(s) + 1, len(t) + 1)
        assert not np.any(data.H)
        assert data.best_score == 0

    def test_gap_override_bridges_space(self, catalog_config):
        """A free space keeps 'AB' and 'CD' on one path."""
        data = fill_score_matrix("AB CD", "ABCD", catalog_config)
        assert data.H[3, 2] == 6
        assert (data.best_score, data.best_i, data.best_j) == (12, 5, 4)

    def test_without_override_space_breaks_path(self):
        cfg = AlignmentConfig(3, 10, 10)
        data = fill_score_matrix("AB CD", "ABCD", cfg)
        assert data.H[3, 2] == 0
        assert data.H[5, 4] == 6
        assert (data.best_score, data.best_i, data.best_j) == (6, 2, 2)


class TestTraceback:
    """Reconstruction of matched symbols from the table."""

    def test_tie_break_up_is_default(self, lcs_config):
        data = fill_score_matrix("abc", "bac", lcs_config)
        aligned, path = traceback_local("abc", "bac", data)
        assert aligned == "ac"
        assert path == [(1, 2), (2, 2), (3, 3)]

    def test_tie_break_left(self, lcs_config):
        data = fill_score_matrix("abc", "bac", lcs_config)
        aligned, path = traceback_local("abc", "bac", data, tie_break="left")
        assert aligned == "bc"
        assert path == [(2, 1), (2, 2), (3, 3)]

    def test_unknown_tie_break(self, lcs_config):
        data = fill_score_matrix("ab", "ab", lcs_config)
        with pytest.raises(ValueError):
            traceback_local("ab", "ab", data, tie_break="diag")

    def test_repeated_runs_identical(self, lcs_config):
        results = {get_local_alignment("abc", "bac", lcs_config) for _ in range(5)}
        assert results == {"ac"}

    def test_skipped_symbols_dropped(self, lcs_config):
        assert get_local_alignment("Product-A100", "ProductA100") == "ProductA100"

    def test_noncontiguous_result(self, lcs_config):
        """The result is a common subsequence, not a substring."""
        aligned = get_local_alignment("a-b-c", "abc", lcs_config)
        assert aligned == "abc"
        assert aligned not in "a-b-c"

    def test_long_input_is_iterative(self, lcs_config):
        s = "abcde" * 220
        result = run_local_dp(s, s, lcs_config)
        assert result.aligned == s
        assert len(result.path) == len(s)

    def test_multibyte_symbols(self, catalog_config):
        aligned = get_local_alignment("ステンレス六角ボルト", "六角ボルト", catalog_config)
        assert aligned == "六角ボルト"
        assert len(aligned) == 5


class TestRunLocalDP:
    """Top-level driver behaviour and algebraic properties."""

    def test_none_config_is_lcs(self, rng, random_text_factory):
        for _ in range(10):
            s = random_text_factory(10, rng)
            t = random_text_factory(8, rng)
            assert get_local_alignment(s, t) == get_local_alignment(s, t, default.DEFAULT_CONFIG)

    def test_return_data(self, catalog_config):
        res = run_local_dp("AB CD", "ABCD", catalog_config, return_data=True)
        assert res.aligned == "ABCD"
        assert res.score == 12
        assert res.data is not None
        assert res.data.H.max() == res.score

        res = run_local_dp("AB CD", "ABCD", catalog_config)
        assert res.data is None
        assert len(res) == 4

    def test_empty_against_anything(self, rng, random_text_factory, catalog_config):
        for _ in range(10):
            s = random_text_factory(6, rng)
            assert get_local_alignment(s, "", catalog_config) == ""
            assert get_local_alignment("", s, catalog_config) == ""
            assert get_local_alignment(s, "") == ""

    def test_self_alignment_is_identity(self, rng, random_text_factory, catalog_config, lcs_config):
        for length in [1, 5, 12]:
            s = random_text_factory(length, rng)
            assert get_local_alignment(s, s, lcs_config) == s
            assert get_local_alignment(s, s, catalog_config) == s

    def test_length_bounded_by_shorter(self, rng, random_text_factory, catalog_config):
        for nS, nT in [(4, 9), (9, 4), (7, 7)]:
            for _ in range(10):
                s = random_text_factory(nS, rng)
                t = random_text_factory(nT, rng)
                assert len(get_local_alignment(s, t, catalog_config)) <= min(nS, nT)
                assert len(get_local_alignment(s, t)) <= min(nS, nT)

    def test_degenerate_config(self, rng, random_text_factory):
        cfg = AlignmentConfig(0, 0, 0)
        for _ in range(5):
            s = random_text_factory(8, rng)
            res = run_local_dp(s, s, cfg, return_data=True)
            assert res.aligned == ""
            assert res.score == 0
            assert not np.any(res.data.H)
