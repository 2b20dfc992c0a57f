"""Command line interface for the handheld CPU.

Usage:
    python main.py --program programs/larger_example.txt
    python main.py --program programs/larger_example.txt --mode crt
    python main.py --inline "noop;addx 3;addx -5" --trace
"""

import argparse
import logging
import sys
from typing import List, Optional

from .cpu import CPU
from .decode import load_program_file, parse_program
from .registry import InstructionError
from .runner import run_checksum, run_crt

logger = logging.getLogger("crt_cpu")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="crt-cpu",
        description="Handheld CPU simulator: signal checksum and CRT renderer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Sum of signal strengths at cycles 20, 60, ..., 220
    python main.py --program programs/larger_example.txt

    # Draw the CRT image
    python main.py --program programs/larger_example.txt --mode crt

    # Run inline assembly with a cycle-by-cycle trace
    python main.py --inline "noop;addx 3;addx -5" --mode crt --max-cycles 5 --trace
        """
    )

    parser.add_argument(
        "--program", "-p",
        type=str,
        help="Path to program file (one instruction per line)"
    )
    parser.add_argument(
        "--inline", "-i",
        type=str,
        help="Inline program (separate instructions with ;)"
    )
    parser.add_argument(
        "--mode", "-m",
        choices=["checksum", "crt"],
        default="checksum",
        help="Run mode: checksum (signal strengths) or crt (draw display). Default: checksum"
    )
    parser.add_argument(
        "--max-cycles",
        type=int,
        default=None,
        help="Cycles to run. Default: up to the last checkpoint (checksum) or one screen (crt)"
    )
    parser.add_argument(
        "--trace", "-t",
        action="store_true",
        help="Print full execution trace"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Minimal output (final sum or CRT rows only)"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging verbosity. Default: WARNING"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(levelname)s: %(message)s")

    if not args.program and not args.inline:
        parser.error("Either --program or --inline is required")
    if args.program and args.inline:
        parser.error("--program and --inline are mutually exclusive")
    if args.max_cycles is not None and args.max_cycles < 0:
        parser.error("--max-cycles must be non-negative")

    # Load program
    try:
        if args.program:
            if not args.quiet:
                print(f"Loading program: {args.program}")
            program = load_program_file(args.program)
        else:
            if not args.quiet:
                print("Running inline program")
            program = parse_program(args.inline.replace(";", "\n"))
    except FileNotFoundError:
        logger.error("Program file not found: %s", args.program)
        return 1
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Cannot read program file %s: %s", args.program, e)
        return 1
    except InstructionError as e:
        logger.error("Invalid program: %s", e)
        return 1

    if not program:
        logger.error("Program is empty")
        return 1

    cpu = CPU(program, max_cycles=None, trace=args.trace)

    if not args.quiet:
        print("-" * 60)

    status = 0
    try:
        if args.mode == "checksum":
            total = 0
            for report in run_checksum(cpu, max_cycles=args.max_cycles):
                total = report.total
                if not args.quiet:
                    print(f"[Cycle {report.cycle}] {{ x: {report.registers['x']} }}")
                    print(total)
            if args.quiet:
                print(total)
        else:
            for row in run_crt(cpu, max_cycles=args.max_cycles):
                print(row)
    except RuntimeError as e:
        logger.error("Execution error: %s", e)
        status = 1

    if args.trace:
        cpu.print_trace()
    elif not args.quiet:
        summary = cpu.get_summary()
        print("-" * 60)
        print(f"Cycles: {summary['cycles']}")
        print(f"Passes: {summary['passes']}")
        print(f"Registers: {summary['registers']}")

    return status


if __name__ == "__main__":
    sys.exit(main())
