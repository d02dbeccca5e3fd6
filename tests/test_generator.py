"""Tests for password building and the secure random primitive."""

import math
from collections import Counter
from unittest.mock import Mock, patch

import pytest

from seedpass import (
    CHARACTER_SETS,
    DEFAULT_SETTINGS,
    EmptyPoolError,
    GenerationSettings,
    ValidationError,
    build_password,
    build_pool,
    random_int,
    seed_material,
    shuffle,
    validate_settings,
)


ALL_CLASSES = frozenset(CHARACTER_SETS)


# ── random_int ─────────────────────────────────────────────────────────────


class TestRandomInt:
    def test_range_of_one_skips_sampling(self):
        with patch("seedpass.secrets.token_bytes") as mock_bytes:
            assert random_int(7, 8) == 7
        mock_bytes.assert_not_called()

    def test_empty_range_raises(self):
        with pytest.raises(ValueError, match="Empty range"):
            random_int(5, 5)
        with pytest.raises(ValueError):
            random_int(5, 2)

    def test_stays_in_range(self):
        for _ in range(2000):
            assert 3 <= random_int(3, 17) < 17

    def test_offset_by_lo(self):
        with patch("seedpass.secrets.token_bytes", return_value=b"\x04"):
            # 4 % 3 == 1
            assert random_int(100, 103) == 101

    def test_rejects_biased_draws(self):
        # span 3 in one byte: 255 is the first rejected value
        mock_bytes = Mock(side_effect=[b"\xff", b"\x05"])
        with patch("seedpass.secrets.token_bytes", mock_bytes):
            assert random_int(0, 3) == 2
        assert mock_bytes.call_count == 2

    def test_accepts_last_unbiased_draw(self):
        with patch("seedpass.secrets.token_bytes", return_value=b"\xfe"):
            assert random_int(0, 3) == 254 % 3

    @pytest.mark.parametrize("span, nbytes", [
        (2, 1), (255, 1), (256, 1), (257, 2), (65536, 2), (65537, 3),
    ])
    def test_minimal_byte_count(self, span, nbytes):
        with patch(
            "seedpass.secrets.token_bytes", return_value=b"\x00" * nbytes,
        ) as mock_bytes:
            assert random_int(0, span) == 0
        mock_bytes.assert_called_once_with(nbytes)

    def test_power_of_two_range_never_rejects(self):
        mock_bytes = Mock(return_value=b"\xff")
        with patch("seedpass.secrets.token_bytes", mock_bytes):
            assert random_int(0, 256) == 255
        assert mock_bytes.call_count == 1

    def test_uniform_distribution(self):
        trials, span = 20_000, 10
        counts = Counter(random_int(0, span) for _ in range(trials))
        assert set(counts) == set(range(span))

        expected = trials / span
        chi2 = sum((counts[v] - expected) ** 2 / expected for v in range(span))
        # 9 degrees of freedom; p < 1e-5 above ~40
        assert chi2 < 40


# ── shuffle ────────────────────────────────────────────────────────────────


class TestShuffle:
    def test_string_stays_string(self):
        out = shuffle("abcdef")
        assert isinstance(out, str)
        assert sorted(out) == list("abcdef")

    def test_list_is_copied(self):
        items = [1, 2, 3, 4, 5]
        out = shuffle(items)
        assert items == [1, 2, 3, 4, 5]
        assert sorted(out) == items

    def test_empty_and_single(self):
        assert shuffle("") == ""
        assert shuffle(["x"]) == ["x"]

    def test_fisher_yates_order(self):
        # j == 0 at every step: swap(2, 0) then swap(1, 0)
        with patch("seedpass.random_int", return_value=0):
            assert shuffle("abc") == "bca"

    def test_all_permutations_reachable(self):
        seen = {shuffle("abc") for _ in range(500)}
        assert len(seen) == 6


# ── build_pool / seed_material ─────────────────────────────────────────────


class TestBuildPool:
    def test_fixed_class_order(self):
        pool = build_pool({"symbols", "digits", "lowercase"})
        assert pool == (
            CHARACTER_SETS["lowercase"]
            + CHARACTER_SETS["digits"]
            + CHARACTER_SETS["symbols"]
        )

    def test_full_pool_size(self):
        assert len(build_pool(ALL_CLASSES)) == 26 + 26 + 10 + 26

    def test_custom_symbols_deduplicated(self):
        pool = build_pool({"digits"}, custom_symbols="~~1§~")
        assert pool == "0123456789~§"

    def test_custom_symbols_only(self):
        assert build_pool(set(), custom_symbols="xyx") == "xy"

    def test_empty(self):
        assert build_pool(set()) == ""

    def test_custom_alphabets(self):
        pool = build_pool({"vowels"}, alphabets={"vowels": "aeiou"})
        assert pool == "aeiou"

    @pytest.mark.parametrize("classes", [
        ["digits"], ("digits",), frozenset({"digits"}),
    ])
    def test_any_collection_of_class_names(self, classes):
        assert build_pool(classes) == "0123456789"


class TestSeedMaterial:
    def test_word_then_number(self):
        assert seed_material("cat", 42) == "cat42"

    def test_number_only(self):
        assert seed_material("", "2024") == "2024"

    def test_nothing(self):
        assert seed_material() == ""
        assert seed_material("", "") == ""


# ── validate_settings ──────────────────────────────────────────────────────


class TestValidateSettings:
    def test_defaults_valid(self):
        validate_settings(DEFAULT_SETTINGS)

    def test_no_classes(self):
        with pytest.raises(ValidationError, match="at least one character type"):
            validate_settings(GenerationSettings(classes=frozenset()))

    def test_no_classes_even_with_custom_symbols(self):
        settings = GenerationSettings(custom_symbols="!?", classes=frozenset())
        with pytest.raises(ValidationError):
            validate_settings(settings)

    @pytest.mark.parametrize("length", [0, 3, 65, 100])
    def test_length_out_of_range(self, length):
        with pytest.raises(ValidationError, match="between 4 and 64"):
            validate_settings(GenerationSettings(length=length))

    @pytest.mark.parametrize("length", [4, 64])
    def test_length_bounds_inclusive(self, length):
        validate_settings(GenerationSettings(length=length))

    def test_unknown_class(self):
        with pytest.raises(ValidationError, match="emoji"):
            validate_settings(GenerationSettings(classes=frozenset({"emoji"})))

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            validate_settings(GenerationSettings(length=2))


# ── build_password ─────────────────────────────────────────────────────────


class TestBuildPassword:
    @pytest.mark.parametrize("length", [4, 5, 16, 33, 64])
    def test_exact_length(self, length):
        assert len(build_password(GenerationSettings(length=length))) == length

    @pytest.mark.parametrize("length", [4, 10, 64])
    def test_exact_length_with_long_seed(self, length):
        settings = GenerationSettings(word="x" * 100, number_seed=123, length=length)
        assert len(build_password(settings)) == length

    def test_chars_from_pool(self):
        settings = GenerationSettings(
            custom_symbols="~", classes=frozenset({"digits", "uppercase"}),
        )
        pool = build_pool(settings.classes, settings.custom_symbols)
        for _ in range(50):
            assert set(build_password(settings)) <= set(pool)

    def test_single_class(self):
        settings = GenerationSettings(classes=frozenset({"lowercase"}))
        for _ in range(20):
            assert build_password(settings).islower()

    def test_empty_pool_raises(self):
        with pytest.raises(EmptyPoolError, match="No character pool"):
            build_password(GenerationSettings(classes=frozenset()))

    def test_custom_symbols_alone_are_a_pool(self):
        settings = GenerationSettings(custom_symbols="#", classes=frozenset())
        assert build_password(settings) == "#" * 16

    def test_seed_capped_at_sixty_percent(self):
        word = "abcdefghijklmnopqrstuvwxyz"
        settings = GenerationSettings(
            word=word, length=10, classes=frozenset({"digits"}),
        )
        for _ in range(20):
            pwd = build_password(settings)
            letters = [c for c in pwd if c.isalpha()]
            digits = [c for c in pwd if c.isdigit()]
            assert sorted(letters) == list("abcdef")  # floor(10 * 0.6)
            assert len(digits) == 4

    def test_short_seed_used_whole(self):
        settings = GenerationSettings(
            word="cat", number_seed="7", length=12,
            classes=frozenset({"uppercase"}),
        )
        pwd = build_password(settings)
        assert sorted(c for c in pwd if not c.isupper()) == ["7", "a", "c", "t"]
        assert sum(c.isupper() for c in pwd) == 8

    def test_integer_number_seed(self):
        settings = GenerationSettings(
            number_seed=2024, length=8, classes=frozenset({"lowercase"}),
        )
        pwd = build_password(settings)
        assert sorted(c for c in pwd if c.isdigit()) == ["0", "2", "2", "4"]

    def test_random_fill_ignores_seed_content(self):
        # Every random draw picks index 0 of the pool, seed or not.
        settings = GenerationSettings(
            word="zzzzzzzzzz", length=10, classes=frozenset({"uppercase"}),
        )
        with patch("seedpass.random_int", return_value=0):
            pwd = build_password(settings)
        assert sorted(pwd) == sorted("AAAA" + "zzzzzz")

    def test_unseeded_uses_random_draws(self):
        settings = GenerationSettings(length=6, classes=frozenset({"digits"}))
        with patch("seedpass.random_int", side_effect=[1, 2, 3, 4, 5, 6]):
            assert build_password(settings) == "123456"

    def test_uniqueness(self):
        passwords = {build_password(DEFAULT_SETTINGS) for _ in range(50)}
        assert len(passwords) == 50

    def test_seed_position_varies(self):
        settings = GenerationSettings(
            word="Q", length=8, classes=frozenset({"lowercase"}),
        )
        positions = {build_password(settings).index("Q") for _ in range(200)}
        assert len(positions) > 1

    def test_floor_rounding(self):
        # floor(7 * 0.6) == 4
        settings = GenerationSettings(
            word="ABCDEFG", length=7, classes=frozenset({"digits"}),
        )
        pwd = build_password(settings)
        assert sum(c.isupper() for c in pwd) == math.floor(7 * 0.6)
