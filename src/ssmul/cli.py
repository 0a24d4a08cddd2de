# src/ssmul/cli.py

"""
ssmul - Schönhage–Strassen integer multiplication

Description:
    Multiplies two integers (or safe integer expressions such as 2**4096-1)
    with the Schönhage–Strassen algorithm and prints the product.

usage: ssmul -h
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
import textwrap
import time

from colorama import Fore, Style
from colorama import init as colorama_init

from ssmul import __version__ as _ver
from ssmul.config import load_settings
from ssmul.expreval import parse_operand
from ssmul.fmt import abbr_int_fast, format_duration, format_ring, format_stats
from ssmul.registry import discover_with_report, get_base_case
from ssmul.ring import FermatRing
from ssmul.runtime import APPLY, CFG
from ssmul.runtime import current as _rt_current
from ssmul.schonhage import RecursionStats, multiply
from ssmul.utility import NoSuitableRing, UserInputError, ceil_lg2


def _print_user_error(msg: str) -> None:
    """Uniform, one-line friendly error."""
    prefix = f"{Fore.RED}Error:{Style.RESET_ALL}"
    if not (msg.startswith("Invalid input:") or msg.startswith("Error:")):
        msg = f"{prefix} {msg}"
    print(msg, file=sys.stderr)


def _debug(msg: str) -> None:
    print(f"{Fore.CYAN}[debug]{Style.RESET_ALL} {msg}", file=sys.stderr)


# ---- argparse ----
def _build_parser() -> argparse.ArgumentParser:

    epilog = textwrap.dedent("""\
    operands:
      Plain integers (1 000 000, -7, 0xff) or integer expressions using
      + - * // % ** << >> & ^ | ~ and parentheses, e.g. "2**4096 - 1".

    profiles:
      Settings are read from $SSMUL_HOME/profiles/<name>.toml, falling back
      to the packaged profiles (default, reference).
    """)

    p = argparse.ArgumentParser(
        prog="ssmul",
        description="Schönhage–Strassen integer multiplication",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=epilog,
    )
    p.add_argument("operands", nargs="*", metavar="integer", help="the two factors")
    p.add_argument("--profile", default=None, help="settings profile (default: 'default')")
    p.add_argument("--base", default=None, help="base-case multiplier (see --list)")
    p.add_argument("--verify", action="store_true", help="cross-check the product against Python's int multiplication")
    p.add_argument("--full", action="store_true", help="print every digit of the product")
    p.add_argument("--list", action="store_true", help="list the registered base-case multipliers")
    p.add_argument("--debug", action="store_true", help="show recursion statistics and internal trace info")
    p.add_argument("--version", action="version", version=f"%(prog)s {_ver}")
    return p


def _list_base_cases(debug: bool) -> None:
    index, rep = discover_with_report()
    width = max((len(name) for name in index.funcs), default=0)
    for name, fn in index.funcs.items():
        print(f"  {Fore.GREEN}{name:<{width}}{Style.RESET_ALL}  {index.descriptions.get(name, '')}")
    if debug:
        for modname, cnt in rep.loaded:
            _debug(f"{Fore.GREEN}OK{Style.RESET_ALL} {modname}: {cnt} multiplier(s)")
        for modname, err in rep.failed:
            _debug(f"{Fore.RED}FAIL{Style.RESET_ALL} {modname}: {err}")


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
    except NoSuitableRing as e:
        if "--debug" in (argv if argv is not None else sys.argv):
            raise
        _print_user_error(f"internal sizing failure: {e}")
        return 1
    except Exception as e:
        # Only show traceback in debug mode
        debug = "--debug" in (argv if argv is not None else sys.argv)
        if debug:
            raise
        print(f"Unexpected error: {e.__class__.__name__}: {e}", file=sys.stderr)
        print("Run with --debug for a full traceback.", file=sys.stderr)
        return 1


# ---- main ----
def _main_impl(argv=None) -> int:

    colorama_init(autoreset=True)

    parser = _build_parser()
    args = parser.parse_args(argv)

    APPLY(load_settings(args.profile))

    # A product of two MAX_DIGITS operands has up to twice as many digits
    limit = 2 * int(CFG("BEHAVIOUR.MAX_DIGITS", 1_000_000))
    if not os.environ.get("PYTHONINTMAXSTRDIGITS"):
        sys.set_int_max_str_digits(max(limit, 640))

    rt = _rt_current()
    rt.debug = rt.debug or bool(args.debug)

    logging.basicConfig(
        level=logging.DEBUG if rt.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.list:
        _list_base_cases(rt.debug)
        return 0

    if len(args.operands) != 2:
        parser.error("expected exactly two integers")

    a = parse_operand(args.operands[0])
    b = parse_operand(args.operands[1])
    base = get_base_case(args.base)

    stats = RecursionStats()
    t0 = time.perf_counter()
    product = multiply(a, b, base_case=base, stats=stats)
    elapsed = time.perf_counter() - t0

    text = str(product) if args.full else abbr_int_fast(product)
    print(text)
    print(f"{Style.DIM}elapsed {format_duration(elapsed)}{Style.RESET_ALL}", file=sys.stderr)

    if rt.debug:
        n = 2 * max(abs(a).bit_length(), abs(b).bit_length())
        _debug(f"profile {rt.profile_name}, base case {base.label}")
        _debug(f"top ring {format_ring(FermatRing(ceil_lg2(n), 1))}")
        for line in format_stats(stats):
            _debug(line)

    if args.verify:
        expected = a * b
        if product != expected:
            _print_user_error(f"verification FAILED: product differs from builtin by {product - expected}")
            return 1
        print(f"{Fore.GREEN}verified{Style.RESET_ALL}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
