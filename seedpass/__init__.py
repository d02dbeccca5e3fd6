"""SeedPass -- seeded password generation and strength estimation.

Core functions for building passwords from a memorable word, a number and
custom symbols blended with cryptographically secure randomness, and for
estimating the entropy and crack time of any password.
"""

import logging
import math
import re
import secrets
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Collection, Mapping, Sequence

log = logging.getLogger(__name__)


# ── Errors ─────────────────────────────────────────────────────────────────


class SeedPassError(Exception):
    """Base class for all SeedPass errors."""


class ValidationError(SeedPassError, ValueError):
    """Generation settings failed a precondition check."""


class EmptyPoolError(SeedPassError, ValueError):
    """The selected classes and custom symbols produced no characters."""


# ── Configuration ──────────────────────────────────────────────────────────

CHARACTER_SETS: Mapping[str, str] = MappingProxyType({
    "lowercase": "abcdefghijklmnopqrstuvwxyz",
    "uppercase": "ABCDEFGHIJKLMNOPQRSTUVWXYZ",
    "digits":    "0123456789",
    "symbols":   "!@#$%^&*()_+-=[]{}|;:,.<>?",
})

MIN_LENGTH = 4
MAX_LENGTH = 64
DEFAULT_LENGTH = 16

# At most this share of the password comes from seed material.
SEED_RATIO = 0.6

COMMON_WORDS = (
    "password", "admin", "user", "login", "welcome", "hello", "world",
    "secret", "test", "demo", "sample", "example", "default", "guest",
    "master", "super", "root", "system", "public", "private", "secure",
    "access", "account", "profile", "settings", "config", "database",
    "server", "client", "company", "business", "office", "home",
    "family", "personal", "email", "website", "internet", "computer",
)

BLANK = "-"


@dataclass(frozen=True)
class StrengthModel:
    """Constants driving :func:`analyze_strength`.

    ``DEFAULT_MODEL`` is shared by every call; build a new instance to
    analyse against a different word list or attacker speed.
    """

    common_words: tuple[str, ...] = COMMON_WORDS
    online_guesses_per_second: float = 1e4
    offline_guesses_per_second: float = 1e10
    penalty_cap: int = 25
    # Attackers are assumed to search at least this many symbols.
    min_symbol_pool: int = 10


DEFAULT_MODEL = StrengthModel()


# ── Secure randomness ──────────────────────────────────────────────────────


def random_int(lo: int, hi: int) -> int:
    """Return a uniformly distributed integer in ``[lo, hi)``.

    Draws the fewest bytes that cover the range from :func:`secrets.token_bytes`
    and rejects values at or above the largest multiple of the range, so the
    final modulo carries no bias.
    """
    span = hi - lo
    if span <= 0:
        raise ValueError(f"Empty range [{lo}, {hi})")
    if span == 1:
        return lo

    nbytes = ((span - 1).bit_length() + 7) // 8
    limit = (256 ** nbytes // span) * span

    while True:
        value = int.from_bytes(secrets.token_bytes(nbytes), "little")
        if value < limit:
            return lo + value % span


def shuffle(seq: Sequence) -> str | list:
    """Return a Fisher-Yates shuffled copy of *seq*.

    Strings come back as strings, anything else as a new list.
    """
    items = list(seq)
    for i in range(len(items) - 1, 0, -1):
        j = random_int(0, i + 1)
        items[i], items[j] = items[j], items[i]

    if isinstance(seq, str):
        return "".join(items)
    return items


# ── Password building ──────────────────────────────────────────────────────


@dataclass(frozen=True)
class GenerationSettings:
    """Everything the builder needs to produce one password."""

    word: str = ""
    number_seed: str | int | None = None
    custom_symbols: str = ""
    length: int = DEFAULT_LENGTH
    classes: frozenset[str] = field(
        default_factory=lambda: frozenset(CHARACTER_SETS)
    )


DEFAULT_SETTINGS = GenerationSettings()


def validate_settings(settings: GenerationSettings) -> None:
    """Raise :class:`ValidationError` if *settings* cannot be generated from."""
    if not settings.classes:
        raise ValidationError("Please select at least one character type.")

    unknown = set(settings.classes) - set(CHARACTER_SETS)
    if unknown:
        raise ValidationError(
            f"Unknown character type(s): {', '.join(sorted(unknown))}"
        )

    if not MIN_LENGTH <= settings.length <= MAX_LENGTH:
        raise ValidationError(
            f"Password length must be between {MIN_LENGTH} and "
            f"{MAX_LENGTH} characters."
        )


def build_pool(
    classes: Collection[str],
    custom_symbols: str = "",
    alphabets: Mapping[str, str] = CHARACTER_SETS,
) -> str:
    """Concatenate the enabled alphabets, then any new custom symbols."""
    pool = "".join(chars for name, chars in alphabets.items() if name in classes)
    extra = "".join(c for c in dict.fromkeys(custom_symbols) if c not in pool)
    return pool + extra


def seed_material(word: str = "", number_seed: str | int | None = None) -> str:
    """Return the literal seed text: the word followed by the number."""
    parts = []
    if word:
        parts.append(word)
    if number_seed is not None and str(number_seed):
        parts.append(str(number_seed))
    return "".join(parts)


def build_password(
    settings: GenerationSettings,
    alphabets: Mapping[str, str] = CHARACTER_SETS,
) -> str:
    """Build a password of exactly ``settings.length`` characters.

    Seed characters are embedded verbatim but never make up more than
    60% of the result; the rest are drawn from the pool with
    :func:`random_int` and the whole is shuffled.  Callers are expected to
    run :func:`validate_settings` first.
    """
    pool = build_pool(settings.classes, settings.custom_symbols, alphabets)
    if not pool:
        raise EmptyPoolError("No character pool available")

    length = settings.length
    seed = seed_material(settings.word, settings.number_seed)

    if seed:
        seed_count = min(len(seed), math.floor(length * SEED_RATIO))
        chars = list(seed[:seed_count])
        chars += [pool[random_int(0, len(pool))] for _ in range(length - seed_count)]
        chars = shuffle(chars)
    else:
        seed_count = 0
        chars = [pool[random_int(0, len(pool))] for _ in range(length)]

    log.debug(
        "Built password: pool=%d chars, seed=%d, random=%d",
        len(pool), seed_count, length - seed_count,
    )
    return "".join(chars)[:length]


# ── Strength analysis ──────────────────────────────────────────────────────

_YEAR = re.compile(r"19[0-9]{2}|20[0-9]{2}")
_KEYBOARD = re.compile(r"123|abc|qwe|asd|zxc", re.IGNORECASE)
_REPEAT = re.compile(r"(.)\1{2,}")
_SYMBOL = re.compile(r"[^a-zA-Z0-9]")


@dataclass(frozen=True)
class StrengthAnalysis:
    """Result of :func:`analyze_strength`."""

    entropy_bits: float
    pool_size: int
    online_crack_time: str
    offline_crack_time: str
    strength_level: str
    strength_percentage: int
    penalty_bits: int = 0
    detected_patterns: tuple[str, ...] = ()

    @property
    def cleared(self) -> bool:
        """True for the blank result of an empty password."""
        return self.strength_level == BLANK

    @property
    def label(self) -> str:
        """Display text, e.g. ``"VERY STRONG"``."""
        if self.cleared:
            return BLANK
        return self.strength_level.replace("-", " ").upper()


CLEARED = StrengthAnalysis(
    entropy_bits=0.0,
    pool_size=0,
    online_crack_time=BLANK,
    offline_crack_time=BLANK,
    strength_level=BLANK,
    strength_percentage=0,
)


def pool_size(password: str, min_symbol_pool: int = 10) -> int:
    """Estimate the alphabet an attacker must search from *password* itself."""
    size = 0
    if re.search(r"[a-z]", password):
        size += 26
    if re.search(r"[A-Z]", password):
        size += 26
    if re.search(r"[0-9]", password):
        size += 10
    symbols = set(_SYMBOL.findall(password))
    if symbols:
        size += max(len(symbols), min_symbol_pool)
    return size


def _dictionary_words(password: str, model: StrengthModel) -> list[tuple[str, int]]:
    lower = password.lower()
    return [
        (word, min(15, len(word) + 3))
        for word in model.common_words
        if word in lower
    ]


def _year_pattern(password: str, model: StrengthModel) -> list[tuple[str, int]]:
    return [("year pattern", 8)] if _YEAR.search(password) else []


def _keyboard_pattern(password: str, model: StrengthModel) -> list[tuple[str, int]]:
    return [("keyboard pattern", 10)] if _KEYBOARD.search(password) else []


def _repetition(password: str, model: StrengthModel) -> list[tuple[str, int]]:
    return [("repetitive characters", 12)] if _REPEAT.search(password) else []


_CHECKS = (_dictionary_words, _year_pattern, _keyboard_pattern, _repetition)


def pattern_penalty(
    password: str, model: StrengthModel = DEFAULT_MODEL,
) -> tuple[int, tuple[str, ...]]:
    """Return ``(penalty_bits, labels)`` for predictable patterns.

    Every check runs independently; the summed penalty is capped at
    ``model.penalty_cap``.
    """
    hits = [hit for check in _CHECKS for hit in check(password, model)]
    total = sum(bits for _, bits in hits)
    return min(total, model.penalty_cap), tuple(label for label, _ in hits)


def format_time(seconds: float) -> str:
    """Render *seconds* in the largest whole unit, rounding up."""
    if seconds < 1:
        return "Instant"
    if seconds < 60:
        return f"{math.ceil(seconds)} seconds"
    if seconds < 3600:
        return f"{math.ceil(seconds / 60)} minutes"
    if seconds < 86400:
        return f"{math.ceil(seconds / 3600)} hours"
    if seconds < 31536000:
        return f"{math.ceil(seconds / 86400)} days"
    if seconds < 3153600000:
        return f"{math.ceil(seconds / 31536000)} years"
    if seconds < 315360000000:
        return f"{math.ceil(seconds / 3153600000)} centuries"
    return "Eons"


def crack_time(entropy: float, guesses_per_second: float) -> str:
    """Average brute-force time: half the keyspace at the given guess rate."""
    if entropy <= 0:
        return "Instant"
    # 2 ** entropy overflows float range only far beyond the "Eons" cut-off.
    try:
        guesses = 2.0 ** entropy / 2
    except OverflowError:
        return "Eons"
    return format_time(guesses / guesses_per_second)


def strength_level(entropy: float) -> tuple[str, int]:
    """Map entropy bits to ``(level, display percentage)``."""
    if entropy < 30:
        return "weak", 20
    if entropy < 50:
        return "fair", 40
    if entropy < 70:
        return "good", 60
    if entropy < 90:
        return "strong", 80
    return "very-strong", 100


def analyze_strength(
    password: str, model: StrengthModel = DEFAULT_MODEL,
) -> StrengthAnalysis:
    """Estimate the strength of *password*.

    Never raises.  An empty password returns :data:`CLEARED`.
    """
    if not password:
        return CLEARED

    size = pool_size(password, model.min_symbol_pool)
    base = len(password) * math.log2(max(size, 1))
    penalty, patterns = pattern_penalty(password, model)
    entropy = max(0.0, base - penalty)

    level, percentage = strength_level(entropy)
    return StrengthAnalysis(
        entropy_bits=round(entropy, 1),
        pool_size=size,
        online_crack_time=crack_time(entropy, model.online_guesses_per_second),
        offline_crack_time=crack_time(entropy, model.offline_guesses_per_second),
        strength_level=level,
        strength_percentage=percentage,
        penalty_bits=penalty,
        detected_patterns=patterns,
    )


# ── Feedback ───────────────────────────────────────────────────────────────


def explain(analysis: StrengthAnalysis) -> str:
    """One-paragraph summary shown under a generated password."""
    if analysis.cleared:
        return BLANK

    text = f"This password has {analysis.entropy_bits} bits of entropy. "
    if analysis.penalty_bits > 0:
        text += (
            f"Security reduced by {analysis.penalty_bits} bits due to "
            "predictable patterns. "
        )
    text += (
        "At 10 billion guesses/sec, it would take "
        f"{analysis.offline_crack_time} to crack on average."
    )
    return text


def review_password(
    password: str,
    analysis: StrengthAnalysis | None = None,
    word: str = "",
) -> dict:
    """Return warnings and improvement suggestions for a tested password.

    Returns a dict with keys:
        warnings    -- list[str]
        suggestions -- list[str]

    *word* is the generator's memorable word; a password containing it is
    flagged as more predictable.
    """
    if not password:
        return {"warnings": [], "suggestions": []}
    if analysis is None:
        analysis = analyze_strength(password)

    warnings: list[str] = []
    suggestions: list[str] = []

    user_word = word.strip().lower()
    if user_word and user_word in password.lower():
        warnings.append(
            f'Your password contains "{user_word}" which you specified in '
            "the generator. This makes it more predictable."
        )

    if analysis.detected_patterns:
        warnings.append(
            f"Detected patterns: {', '.join(analysis.detected_patterns)}. "
            "This reduces security."
        )

    if len(password) < 12:
        suggestions.append("Increase length to 12+ characters for better security")
    if not re.search(r"[a-z]", password):
        suggestions.append("Add lowercase letters (a-z)")
    if not re.search(r"[A-Z]", password):
        suggestions.append("Add uppercase letters (A-Z)")
    if not re.search(r"[0-9]", password):
        suggestions.append("Add numbers (0-9)")
    if not _SYMBOL.search(password):
        suggestions.append("Add special characters (!@#$...)")
    if analysis.entropy_bits < 50:
        suggestions.append("Consider using a longer password or more character variety")
    if _REPEAT.search(password):
        suggestions.append('Avoid repeating characters (e.g., "aaa" or "111")')
    if re.fullmatch(r"[a-zA-Z]+", password):
        suggestions.append("Mix in numbers and symbols to increase complexity")

    return {"warnings": warnings, "suggestions": suggestions}
