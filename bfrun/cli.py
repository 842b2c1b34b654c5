#!/usr/bin/env python3
"""
Command-line front end for the Brainfuck interpreter.

    bf '++++++++[>++++++++<-]>+.'          run literal instructions
    bf -f hello.b -v                       run a file, print statistics
    bf -l 16 -i abc -f echo.b              limit cells, feed input

Words that are not options are instructions, wherever they appear; use
`--` to pass words such as `-v` as instructions.
"""

import argparse
import sys
from typing import List, Optional, TextIO, Tuple

from brainfuck import BrainfuckInterpreter
from brainfuck_debugger import BrainfuckDebugger
from bfrun.config import ConfigError, RunConfig, load_config, parse_cell_limit
from bfrun.loader import ProgramLoadError, load_instructions
from bfrun.report import RunReport, timed_run
from bfrun.runlog import RunLog
from bfrun.streams import StreamOutput, open_input_source

EXIT_OK = 0
EXIT_ENGINE_ERROR = 1
EXIT_USAGE = 2
EXIT_TRUNCATED = 3

ERROR_LABELS = {
    'syntax': "Syntax error",
    'resource_limit': "Stack size limit reached",
    'input': "Input error",
}

# (flags, takes a value, add_argument keywords)
OPTIONS = [
    (("-f", "--file"), True, dict(help="Read the instructions from FILE")),
    (("-l", "--cell-limit"), True, dict(help="Maximum pointer excursion in cells before aborting (default 256)")),
    (("-v", "--verbose"), False, dict(action="store_true", default=None, help="Print run statistics and log lines")),
    (("-i", "--input"), True, dict(dest="input_text", default=None, help="Program input; read from stdin if omitted")),
    (("--trace",), False, dict(action="store_true", default=None, help="Print the machine state after every step")),
    (("--trace-window",), True, dict(type=int, default=None, help="Number of tape cells shown while tracing")),
    (("--max-steps",), True, dict(type=int, default=None, help="Stop tracing after this many steps")),
    (("--config",), True, dict(help="YAML file with run settings")),
    (("--env-file",), True, dict(help=".env file to load BF_* settings from")),
]
HELP_FLAGS = ("-h", "--help")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="bf", description="Run a Brainfuck program", allow_abbrev=False)
    ap.add_argument("instructions", nargs="*", help="Brainfuck instructions given directly on the command line")
    for flags, _, kwargs in OPTIONS:
        ap.add_argument(*flags, **kwargs)
    return ap


def split_arguments(argv: List[str]) -> Tuple[List[str], List[str]]:
    """Separate option words from instruction words, keeping their order.

    Any word that is not one of the options above is an instruction, so
    `bf ---. -v +.` runs `---.+.` verbosely. Everything after `--` is an
    instruction too.
    """
    # Value flags map to their long spelling so values such as "-x" or "" survive argparse
    value_flags = {flag: flags[-1] for flags, takes_value, _ in OPTIONS if takes_value for flag in flags}
    plain_flags = {flag for flags, takes_value, _ in OPTIONS if not takes_value for flag in flags}
    plain_flags.update(HELP_FLAGS)

    options: List[str] = []
    literals: List[str] = []
    index = 0
    while index < len(argv):
        word = argv[index]
        if word == "--":
            literals.extend(argv[index + 1:])
            break
        if word in plain_flags:
            options.append(word)
        elif word in value_flags:
            if index + 1 < len(argv):
                options.append(f"{value_flags[word]}={argv[index + 1]}")
            else:
                options.append(word)
            index += 1
        elif word.startswith("--") and word.split("=", 1)[0] in value_flags:
            options.append(word)
        else:
            literals.append(word)
        index += 1
    return options, literals


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    argv = sys.argv[1:] if argv is None else list(argv)
    options, literals = split_arguments(argv)
    args = build_parser().parse_args(options)
    args.instructions = literals
    return args


def resolve_config(args: argparse.Namespace) -> RunConfig:
    cell_limit = None
    if args.cell_limit is not None:
        cell_limit = parse_cell_limit(args.cell_limit)
    return load_config(
        config_path=args.config,
        dotenv_path=args.env_file,
        cell_limit=cell_limit,
        verbose=args.verbose,
        input_text=args.input_text,
        trace=args.trace,
        trace_window=args.trace_window,
    )


def main(argv: Optional[List[str]] = None, stdin: Optional[TextIO] = None,
         stdout: Optional[TextIO] = None, stderr: Optional[TextIO] = None) -> int:
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    args = parse_arguments(argv)

    try:
        config = resolve_config(args)
        code = load_instructions(args.instructions, args.file)
    except (ConfigError, ProgramLoadError) as e:
        print(str(e), file=stderr)
        return EXIT_USAGE

    run_log = RunLog(echo=config.verbose, stream=stderr)
    source_name = args.file if args.file else "command line"
    run_log.log(f"Loaded {len(code)} characters from {source_name}")
    run_log.log(f"Cell limit: {config.cell_limit}")

    input_source = open_input_source(config.input_text, stdin, stdout, config.prompt)

    if config.trace:
        debugger = BrainfuckDebugger(config.cell_limit, show_memory_range=config.trace_window, out=stdout)
        result, elapsed = timed_run(debugger.debug_run, code, input_source, max_steps=args.max_steps)
        emitted = 0
    else:
        interpreter = BrainfuckInterpreter(config.cell_limit)
        output_sink = StreamOutput(stdout)
        result, elapsed = timed_run(interpreter.run, code, input_source, output_sink)
        emitted = output_sink.written

    if emitted:
        stdout.write("\n")
        stdout.flush()

    run_log.log(f"Finished after {result.counters.operations} operations in {elapsed:.3f}s")

    if result.error is not None:
        label = ERROR_LABELS.get(result.error.kind, "Error")
        print(f"{label}: {result.error}", file=stderr)
        return EXIT_ENGINE_ERROR

    if result.truncated:
        print(f"Stopped after {result.counters.operations} operations before the program finished", file=stderr)
        return EXIT_TRUNCATED

    if config.verbose:
        report = RunReport.build(code, result.counters, elapsed)
        print(report.format(), file=stdout)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
