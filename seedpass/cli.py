"""SeedPass command-line interface.

Usage examples:
    python -m seedpass generate
    python -m seedpass generate -n 20 -w sunflower --number 42 -c 5
    python -m seedpass analyze mypassword -w sunflower
    python -m seedpass analyze -f passwords.txt
"""

import argparse
import logging
import sys

from seedpass import (
    CHARACTER_SETS,
    DEFAULT_LENGTH,
    GenerationSettings,
    SeedPassError,
    analyze_strength,
    build_password,
    explain,
    review_password,
    validate_settings,
)

log = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="seedpass",
        description="Generate seeded passwords and estimate password strength.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show debug logging",
    )
    sub = parser.add_subparsers(dest="command")

    # ── generate ───────────────────────────────────────────────────────
    gen_p = sub.add_parser("generate", help="Generate passwords")
    gen_p.add_argument(
        "-n", "--length", type=int, default=DEFAULT_LENGTH,
        help=f"Password length (default: {DEFAULT_LENGTH})",
    )
    gen_p.add_argument(
        "-w", "--word", default="",
        help="Memorable word to embed in the password",
    )
    gen_p.add_argument(
        "--number", default="",
        help="Memorable number to embed after the word",
    )
    gen_p.add_argument(
        "--symbols", default="",
        help="Extra symbols to add to the character pool",
    )
    gen_p.add_argument("--no-lowercase", action="store_true")
    gen_p.add_argument("--no-uppercase", action="store_true")
    gen_p.add_argument("--no-digits", action="store_true")
    gen_p.add_argument("--no-symbols", action="store_true")
    gen_p.add_argument(
        "-c", "--count", type=int, default=1,
        help="Number of passwords to generate (default: 1)",
    )

    # ── analyze ────────────────────────────────────────────────────────
    an_p = sub.add_parser("analyze", help="Analyse password strength")
    an_p.add_argument("passwords", nargs="*", help="Passwords to analyse")
    an_p.add_argument(
        "-f", "--file",
        help="Read passwords from a file (one per line)",
    )
    an_p.add_argument(
        "-w", "--word", default="",
        help="Generator word to warn about if it appears in a password",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "generate":
        return _cmd_generate(args)
    if args.command == "analyze":
        return _cmd_analyze(args)

    parser.print_help()
    return 0


def _settings_from_args(args: argparse.Namespace) -> GenerationSettings:
    disabled = {
        "lowercase": args.no_lowercase,
        "uppercase": args.no_uppercase,
        "digits": args.no_digits,
        "symbols": args.no_symbols,
    }
    return GenerationSettings(
        word=args.word.strip(),
        number_seed=args.number.strip(),
        custom_symbols=args.symbols.strip(),
        length=args.length,
        classes=frozenset(name for name in CHARACTER_SETS if not disabled[name]),
    )


def _cmd_generate(args: argparse.Namespace) -> int:
    settings = _settings_from_args(args)
    try:
        validate_settings(settings)
        for _ in range(args.count):
            pwd = build_password(settings)
            report = analyze_strength(pwd)
            print(
                f"  {pwd}  ({report.label}, {report.entropy_bits} bits, "
                f"offline: {report.offline_crack_time})"
            )
            print(f"            {explain(report)}")
    except SeedPassError as exc:
        log.debug("Generation failed", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    return 0


def _cmd_analyze(args: argparse.Namespace) -> int:
    passwords = list(args.passwords)

    if args.file:
        with open(args.file) as f:
            passwords.extend(line.strip() for line in f if line.strip())

    if not passwords:
        print("Error: provide passwords as arguments or via --file", file=sys.stderr)
        return 1

    for pwd in passwords:
        report = analyze_strength(pwd)
        filled = report.strength_percentage // 20
        bar = "#" * filled + "-" * (5 - filled)
        print(f"  '{pwd}'")
        print(f"            Strength: [{bar}] {report.label} ({report.entropy_bits} bits)")
        print(f"            Online:   {report.online_crack_time}")
        print(f"            Offline:  {report.offline_crack_time}")

        review = review_password(pwd, report, word=args.word)
        for w in review["warnings"]:
            print(f"            ! {w}")
        for s in review["suggestions"]:
            print(f"            - {s}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
