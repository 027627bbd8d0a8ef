# src/detprime/cli.py

"""
detprime - deterministic primality and factorization for 64-bit integers

Description:
    Answers "is n prime?" and "what are the prime factors of n?" exactly for
    every 0 <= n < 2^64, and draws reproducible random primes.

usage: see detprime -h
"""

from __future__ import annotations

import argparse
import faulthandler
import sys
import textwrap
import traceback
from collections import Counter
from importlib.resources import files as pkg_files

from colorama import Fore
from colorama import init as colorama_init

from detprime import __version__ as _ver
from detprime import config as CONFIG
from detprime.expreval import parse_uint64
from detprime.factorize import factor, factor_bounded
from detprime.fmt import format_duration, format_factorization, format_tier, format_verdict, paint
from detprime.modarith import powmod
from detprime.primality import is_prime, next_prime, prev_prime, select_tier
from detprime.randprime import Lcg64Xorshift, random_prime, random_prime_digits
from detprime.runtime import APPLY, CFG, debug, ensure_runtime_deps
from detprime.runtime import current as _rt_current
from detprime.runtime import reset as _rt_reset
from detprime.timing import Stopwatch, timed
from detprime.utility import PrimeNotFoundError, UserInputError, flatten_dotted, get_terminal_width, typename
from detprime.workspace import ensure_workspace_seeded, seed_workspace, workspace_dir


def _install_loud_error_handlers(debug_on: bool) -> None:
    if not debug_on:
        return
    faulthandler.enable()

    def _excepthook(exc_type, exc, tb):
        sys.stderr.write("\n[UNCAUGHT EXCEPTION]\n")
        traceback.print_exception(exc_type, exc, tb, file=sys.stderr)
        sys.stderr.flush()
    sys.excepthook = _excepthook


def _print_user_error(msg: str) -> None:
    """Uniform, one-line friendly error."""
    if not (msg.startswith("Invalid input:") or msg.startswith("Error:")):
        msg = f"{paint('Error:', Fore.RED)} {msg}"
    print(msg, file=sys.stderr)


def _numbers(items: list[str]) -> list[int]:
    return [parse_uint64(s) for s in items]


def _with_time(line: str, seconds: float | None) -> str:
    if seconds is None:
        return line
    return f"{line}  {paint(f'[{format_duration(seconds)}]', Fore.CYAN)}"


# ---- commands ----

def _cmd_isprime(args) -> int:
    sw = Stopwatch.start()
    for n in _numbers(args.numbers):
        prime = is_prime(n)
        dt, sw = sw.lap()
        print(_with_time(format_verdict(n, prime, select_tier(n)), dt if args.time else None))
    if args.time and sw.laps > 1:
        print(f"average {format_duration(sw.average())} over {sw.laps} numbers")
    return 0


def _cmd_factor(args) -> int:
    timeout = args.timeout if args.timeout is not None else float(CFG("FACTORING.MAX_TIME_S", 0))
    rc = 0
    for n in _numbers(args.numbers):
        if n < 2:
            print(f"{n} = {n}")
            continue
        if timeout > 0:
            res, dt = timed(factor_bounded, n, timeout)
        else:
            res, dt = timed(factor, n)
        if res is None:
            print(paint(f"{n}: gave up after {format_duration(timeout)}", Fore.YELLOW), file=sys.stderr)
            rc = 1
            continue
        line = f"{n} = {format_factorization(Counter(res))}"
        if len(res) == 1:
            line += f"  {paint('(prime)', Fore.GREEN)}"
        print(_with_time(line, dt if args.time else None))
    return rc


def _cmd_powmod(args) -> int:
    base, exponent, m = _numbers([args.base, args.exponent, args.modulus])
    print(powmod(base, exponent, m))
    return 0


def _cmd_tier(args) -> int:
    for n in _numbers(args.numbers):
        print(f"{n}: {format_tier(select_tier(n))}")
    return 0


def _cmd_random(args) -> int:
    if args.count < 1:
        raise UserInputError(f"--count must be a positive integer, got {args.count}")
    digits = args.digits if args.digits is not None else CFG("SEARCH.DIGITS", None)
    seed = parse_uint64(args.seed) if args.seed is not None else int(CFG("SEARCH.SEED", 0xDEADBEEFDEADBEEF))
    rng = Lcg64Xorshift(seed)
    sw = Stopwatch.start()
    try:
        for _ in range(args.count):
            if digits:
                p = random_prime_digits(int(digits), rng=rng, max_attempts=args.attempts)
            else:
                p = random_prime(rng=rng, max_attempts=args.attempts)
            dt, sw = sw.lap()
            print(_with_time(str(p), dt if args.time else None))
    except PrimeNotFoundError as e:
        _print_user_error(str(e))
        return 1
    return 0


def _cmd_next(args) -> int:
    print(next_prime(parse_uint64(args.number)))
    return 0


def _cmd_prev(args) -> int:
    print(prev_prime(parse_uint64(args.number)))
    return 0


def _cmd_verify(args) -> int:
    if not ensure_runtime_deps(strict=True):
        return 1
    from detprime.verify import run_verify

    seed = parse_uint64(args.seed) if args.seed is not None else None
    report = run_verify(samples=args.samples, seed=seed)

    print(f"Checked {report.samples} values ({report.factored} also factored) in {format_duration(report.elapsed_s)}")
    for name, cnt in report.per_tier.items():
        print(f"  {name:<8} {cnt}")
    print("-" * min(get_terminal_width(), 60))
    if report.ok:
        print(paint("OK: no mismatches against sympy/gmpy2", Fore.GREEN, bright=True))
        return 0
    for miss in report.mismatches:
        print(paint(f"MISMATCH {miss.check}({miss.n}): got {miss.got!r}, expected {miss.expected!r}", Fore.RED))
    return 1


def _cmd_where(args) -> int:
    rt = _rt_current()
    print(f"Workspace: {workspace_dir()}")
    print(f"Profile:   {rt.profile_name}")
    print(f"Package:   {pkg_files('detprime')}")
    return 0


def _cmd_init(args) -> int:
    if args.overwrite:
        ws, copied = seed_workspace(overwrite=True)
        note = " (overwrote existing files)"
    else:
        ws, seeded, copied = ensure_workspace_seeded()  # copy-if-missing
        note = "" if seeded else " (already up to date)"
    print(f"Workspace ready at: {ws}{note}")
    print(f"Copied -> profiles: {copied.get('profiles', 0)}")
    return 0


def _cmd_profiles(args) -> int:
    items = CONFIG.list_profiles_with_descriptions()
    if not items:
        print("No profiles in workspace. Run: detprime init")
        return 0
    for name, desc in items:
        print(f"  {name:<16} {desc}")
    return 0


# ---- argparse ----
def _build_parser() -> argparse.ArgumentParser:

    epilog = textwrap.dedent("""\
    numbers:
      Decimal (1_000_000 or 1,000,000), 0x/0b/0o literals, or integer
      expressions such as 2^64-59 or (1<<61)-1. Values must be in [0, 2^64).

    profiles:
      TOML files in <workspace>/profiles. Set DETPRIME_HOME to move the
      workspace (default ~/.detprime).
    """)

    p = argparse.ArgumentParser(
        prog="detprime",
        description="Deterministic primality and factorization for 64-bit integers",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=epilog,
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {_ver}")
    p.add_argument("--profile", default=None, help="Profile name (default: 'default')")
    p.add_argument("--debug", action="store_true", help="Trace to stderr and show full tracebacks")
    p.add_argument("--time", action="store_true", help="Show per-call timings")
    p.add_argument("--no-color", action="store_true", help="Plain output without ANSI colors")

    sub = p.add_subparsers(dest="command", metavar="COMMAND", required=True)

    s = sub.add_parser("isprime", help="Test numbers for primality")
    s.add_argument("numbers", nargs="+", metavar="N")
    s.set_defaults(func=_cmd_isprime)

    s = sub.add_parser("factor", help="Prime factorization")
    s.add_argument("numbers", nargs="+", metavar="N")
    s.add_argument("--timeout", type=float, default=None,
                   help="Abandon a number after this many seconds (0 = no limit; default FACTORING.MAX_TIME_S)")
    s.set_defaults(func=_cmd_factor)

    s = sub.add_parser("powmod", help="BASE^EXP mod MOD")
    s.add_argument("base")
    s.add_argument("exponent")
    s.add_argument("modulus")
    s.set_defaults(func=_cmd_powmod)

    s = sub.add_parser("tier", help="Show the witness tier used for N")
    s.add_argument("numbers", nargs="+", metavar="N")
    s.set_defaults(func=_cmd_tier)

    s = sub.add_parser("random", help="Draw pseudo-random primes")
    s.add_argument("--digits", type=int, default=None, help="Exact number of decimal digits, 1..19 (0 = any 64-bit prime; default SEARCH.DIGITS)")
    s.add_argument("--seed", default=None, help="Generator seed (default SEARCH.SEED)")
    s.add_argument("--attempts", type=int, default=None, help="Maximum draws per prime (default SEARCH.MAX_ATTEMPTS)")
    s.add_argument("--count", type=int, default=1, help="How many primes to draw")
    s.set_defaults(func=_cmd_random)

    s = sub.add_parser("next", help="Smallest prime greater than N")
    s.add_argument("number", metavar="N")
    s.set_defaults(func=_cmd_next)

    s = sub.add_parser("prev", help="Largest prime smaller than N")
    s.add_argument("number", metavar="N")
    s.set_defaults(func=_cmd_prev)

    s = sub.add_parser("verify", help="Cross-check against sympy/gmpy2")
    s.add_argument("--samples", type=int, default=None, help="Random values to check (default VERIFY.SAMPLES)")
    s.add_argument("--seed", default=None, help="Sample seed (default SEARCH.SEED)")
    s.set_defaults(func=_cmd_verify)

    s = sub.add_parser("where", help="Show workspace and package paths")
    s.set_defaults(func=_cmd_where)

    s = sub.add_parser("init", help="Copy packaged profiles into the workspace")
    s.add_argument("--overwrite", action="store_true", help="Replace existing profile files")
    s.set_defaults(func=_cmd_init)

    s = sub.add_parser("profiles", help="List workspace profiles")
    s.set_defaults(func=_cmd_profiles)

    return p


def main(argv=None) -> int:
    """Thin wrapper: catch friendly errors, hide tracebacks unless debug."""
    try:
        return _main_impl(argv)
    except UserInputError as e:
        _print_user_error(str(e))
        return 2
    except KeyboardInterrupt:
        print("Aborted by user.", file=sys.stderr)
        return 130
    except Exception as e:
        if "--debug" in (sys.argv if argv is None else argv):
            raise
        print(f"Unexpected error: {e.__class__.__name__}: {e}", file=sys.stderr)
        print("Run with --debug for a full traceback.", file=sys.stderr)
        return 1


# ---- main ----
def _main_impl(argv=None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    # profile first, then CLI flags override it
    if args.profile and not CONFIG.has_profile(args.profile):
        raise UserInputError(f"Unknown profile: '{args.profile}'")
    selected = CONFIG.load_settings(args.profile)
    rt = _rt_reset()
    APPLY(selected)

    if args.debug:
        rt.debug = True
    if args.no_color:
        rt.color = False
    if rt.color:
        colorama_init(autoreset=True)
    _install_loud_error_handlers(rt.debug)

    if rt.debug:
        debug(f"version {_ver}, profile {selected.name} from {selected._source}")
        for k, v in sorted(flatten_dotted(rt.settings).items(), key=lambda kv: kv[0].lower()):
            debug(f"  {k:.<40} {v!r} ({typename(v)})")

    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
