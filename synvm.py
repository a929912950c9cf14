#!/usr/bin/env python3
"""
synvm - Synacor VM runner

Usage:
    python synvm.py [program.bin] [--serial PORT] [--baud N]
                    [--max-steps N] [-v] [-q] [--log-file PATH]

Reads the whole program image, runs it to completion with console I/O
(or a serial line), then prints one line describing how the run ended.

Examples:
    python synvm.py                              # runs ./challenge.bin
    python synvm.py game.bin < moves.txt
    python synvm.py game.bin --serial /dev/ttyUSB0 --baud 115200
    python synvm.py game.bin --serial socket://localhost:7777
    python synvm.py game.bin -vv --log-file run.log
"""

import argparse
import logging
import sys
from pathlib import Path

from synacor_vm import SynacorVM, ConsolePort, SerialPort, StopReason, __version__
from synacor_vm.config import DEFAULT_PROGRAM, SERIAL_BAUD

log = logging.getLogger('synvm')


def parse_int_arg(value: str) -> int:
    """Parse an integer argument that may be hex (0x...) or decimal."""
    value = value.strip()
    if value.startswith("0x") or value.startswith("0X"):
        return int(value, 16)
    return int(value)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="synvm",
        description="Run a Synacor architecture program image",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("program", nargs="?", default=DEFAULT_PROGRAM,
                        help=f"Program image (default: {DEFAULT_PROGRAM})")
    parser.add_argument("--serial", metavar="PORT",
                        help="Use a serial device or pyserial URL for I/O "
                             "instead of stdin/stdout")
    parser.add_argument("--baud", type=int, default=SERIAL_BAUD,
                        help=f"Serial baud rate (default: {SERIAL_BAUD})")
    parser.add_argument("--max-steps", type=parse_int_arg, default=None,
                        help="Stop after this many instructions")
    parser.add_argument("--trace", action="store_true",
                        help="Log every executed instruction (shown with -vv or --log-file)")
    parser.add_argument("--verbose", "-v", action="count", default=0,
                        help="Increase log verbosity (-v, -vv)")
    parser.add_argument("--quiet", "-q", action="store_true",
                        help="Only log errors")
    parser.add_argument("--log-file", type=str,
                        help="Also write the log to this file")
    parser.add_argument("--version", action="version",
                        version=f"synvm {__version__}")
    return parser


def setup_logging(args):
    """Console log goes to stderr so it never mixes with program output."""
    if args.quiet:
        level = logging.ERROR
    elif args.verbose == 0:
        level = logging.WARNING
    elif args.verbose == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    handlers = []

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
    handlers.append(console)

    if args.log_file:
        log_path = Path(args.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        ))
        handlers.append(file_handler)

    logging.basicConfig(
        level=logging.DEBUG if args.log_file else level,
        handlers=handlers,
        force=True,
    )


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args)

    try:
        image = Path(args.program).read_bytes()
    except OSError as e:
        print(f"error: cannot read {args.program}: {e}", file=sys.stderr)
        return 1

    if args.serial:
        port = SerialPort(args.serial, baud=args.baud)
        if not port.open():
            print(f"error: cannot open serial port {args.serial}",
                  file=sys.stderr)
            return 1
    else:
        port = ConsolePort()

    with port:
        vm = SynacorVM(port=port, trace=args.trace)
        try:
            vm.load_binary(image)
        except ValueError as e:
            print(f"error: {e}", file=sys.stderr)
            return 1
        reason = vm.run(max_steps=args.max_steps)
        log.info(f"Run ended: {reason.value} after {vm.regs.steps} steps")

    if reason is StopReason.STEP_LIMIT:
        print(f"Stopped after {args.max_steps} steps.")
    else:
        print(vm.last_error)
    return 0


if __name__ == '__main__':
    sys.exit(main())
