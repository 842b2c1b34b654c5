#!/usr/bin/env python3
"""
Brainfuck Interpreter

Brainfuck is an esoteric programming language with only 8 commands:
    >   Move the pointer to the right
    <   Move the pointer to the left
    +   Increment the memory cell at the pointer
    -   Decrement the memory cell at the pointer
    .   Output the character signified by the cell at the pointer
    ,   Input a character and store it in the cell at the pointer
    [   Jump past the matching ] if the cell at the pointer is 0
    ]   Jump back to the matching [ if the cell at the pointer is nonzero

All other characters are treated as comments and ignored.

The tape is sparse and unbounded in both directions. Cells are 8 bits wide
and wrap modulo 256. Input characters are stored as the first byte of
their UTF-8 encoding, so anything outside ASCII keeps only its lead byte
(U+20AC is stored as 0xE2). Instead of a fixed tape size, the interpreter
enforces a cell limit on how far the pointer has wandered from the origin,
which stops programs that walk off into an endless run of fresh cells.
"""

from dataclasses import dataclass, asdict
from typing import Dict, List, Optional, Any

OPERATORS = '+-<>.,[]'
CELL_MODULUS = 256
DEFAULT_CELL_LIMIT = 256

# Output outside this range is replaced with PLACEHOLDER_CHAR
PRINTABLE_LOW = 0x20
PRINTABLE_HIGH = 0x7E
PLACEHOLDER_CHAR = '?'


class EngineError(Exception):
    """Base class for errors that halt a running program."""

    kind = 'engine'

    def __init__(self, message: str, position: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.position = position


class BrainfuckSyntaxError(EngineError):
    """Unbalanced loop brackets, found while executing."""

    kind = 'syntax'


class ResourceLimitExceeded(EngineError):
    """The pointer excursion grew past the configured cell limit."""

    kind = 'resource_limit'


class InputError(EngineError):
    """A ',' needed a character but the input source had none."""

    kind = 'input'


@dataclass
class ExecutionCounters:
    """Runtime counters collected while a program executes."""
    operations: int = 0
    left_shifts: int = 0
    right_shifts: int = 0
    lowest_cell: int = 0
    greatest_cell: int = 0

    @property
    def shifts(self) -> int:
        return self.left_shifts + self.right_shifts

    @property
    def extent(self) -> int:
        return abs(self.lowest_cell) + abs(self.greatest_cell)

    @property
    def cells_used(self) -> int:
        return self.extent + 1

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, derived values included."""
        data = asdict(self)
        data['shifts'] = self.shifts
        data['cells_used'] = self.cells_used
        return data


@dataclass
class ExecutionResult:
    """Outcome of a run: the counters plus the first error hit, if any.

    `truncated` marks a run that was stopped by a step cap before the
    program finished.
    """
    counters: ExecutionCounters
    error: Optional[EngineError] = None
    truncated: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None and not self.truncated

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error


def count_operators(code: str) -> int:
    """Count the operator characters in the source, ignoring comments."""
    return sum(1 for c in code if c in OPERATORS)


class BrainfuckInterpreter:
    def __init__(self, cell_limit: int = DEFAULT_CELL_LIMIT):
        if isinstance(cell_limit, bool) or not isinstance(cell_limit, int) or cell_limit <= 0:
            raise ValueError(f"cell_limit must be a positive integer, got {cell_limit!r}")
        self.cell_limit = cell_limit
        self.load("")

    def load(self, code: str, input_source=None, output_sink=None) -> None:
        """Reset all machine state and prepare to execute `code`."""
        self.code = code
        self.tape: Dict[int, int] = {}
        self.pointer = 0
        self.instruction_pointer = 0
        self.loop_stack: List[int] = []
        self.counters = ExecutionCounters()
        self.output: List[str] = []
        self.input_source = input_source
        self.output_sink = output_sink

    @property
    def finished(self) -> bool:
        return self.instruction_pointer >= len(self.code)

    @property
    def current_cell(self) -> int:
        return self.tape.get(self.pointer, 0)

    def run(self, code: str, input_source=None, output_sink=None) -> ExecutionResult:
        """Execute Brainfuck code until it finishes or fails.

        `input_source` must provide read_char() returning one character, or
        None once exhausted. `output_sink` must provide write_char(ch). Either
        may be omitted; emitted characters are always kept in self.output.
        """
        self.load(code, input_source, output_sink)
        while not self.finished:
            error = self.step()
            if error is not None:
                return ExecutionResult(self.counters, error)
        return self.close()

    def close(self) -> ExecutionResult:
        """Build the result for a program whose scan cursor reached the end."""
        if self.loop_stack:
            start = self.loop_stack[-1]
            error = BrainfuckSyntaxError(f"unterminated loop opened at position {start}", start)
            return ExecutionResult(self.counters, error)
        return ExecutionResult(self.counters)

    def step(self) -> Optional[EngineError]:
        """Execute the instruction under the scan cursor.

        Returns the error that halts the program, or None to keep going.
        """
        position = self.instruction_pointer
        cmd = self.code[position]
        counters = self.counters
        counters.operations += 1

        if counters.extent > self.cell_limit:
            return ResourceLimitExceeded(
                f"cells {counters.lowest_cell}..{counters.greatest_cell} exceed the limit of {self.cell_limit}",
                position,
            )

        if cmd == '+':
            self.tape[self.pointer] = (self.current_cell + 1) % CELL_MODULUS

        elif cmd == '-':
            self.tape[self.pointer] = (self.current_cell - 1) % CELL_MODULUS

        elif cmd == '>':
            self.pointer += 1
            counters.right_shifts += 1
            counters.greatest_cell = max(self.pointer, counters.greatest_cell)

        elif cmd == '<':
            self.pointer -= 1
            counters.left_shifts += 1
            counters.lowest_cell = min(self.pointer, counters.lowest_cell)

        elif cmd == '.':
            self._emit(self.current_cell)

        elif cmd == ',':
            error = self._read(position)
            if error is not None:
                return error

        elif cmd == '[':
            if self.current_cell == 0:
                error = self._skip_loop(position)
                if error is not None:
                    return error
            elif not self.loop_stack or self.loop_stack[-1] != position:
                self.loop_stack.append(position)

        elif cmd == ']':
            if self.current_cell != 0:
                if not self.loop_stack:
                    return BrainfuckSyntaxError(f"unmatched ']' at position {position}", position)
                # Land on the opening bracket; it is dispatched again next step
                self.instruction_pointer = self.loop_stack[-1]
                return None
            if self.loop_stack:
                self.loop_stack.pop()

        self.instruction_pointer += 1
        return None

    def _emit(self, value: int) -> None:
        if PRINTABLE_LOW <= value <= PRINTABLE_HIGH:
            char = chr(value)
        else:
            char = PLACEHOLDER_CHAR
        self.output.append(char)
        if self.output_sink is not None:
            self.output_sink.write_char(char)

    def _read(self, position: int) -> Optional[EngineError]:
        if self.input_source is None:
            return InputError(f"no input source for ',' at position {position}", position)
        try:
            char = self.input_source.read_char()
        except OSError as e:
            return InputError(f"input unreadable at position {position}: {e}", position)
        if not char:
            return InputError(f"input exhausted at position {position}", position)
        try:
            data = char[0].encode('utf-8', 'surrogateescape')
        except UnicodeEncodeError:
            return InputError(f"input at position {position} is not encodable: {char[0]!r}", position)
        # Only the first byte of a multi-byte character is kept
        self.tape[self.pointer] = data[0]
        return None

    def _skip_loop(self, position: int) -> Optional[EngineError]:
        """Move the scan cursor onto the ']' matching the '[' at `position`."""
        depth = 1
        index = position
        while depth:
            index += 1
            if index >= len(self.code):
                return BrainfuckSyntaxError(f"unterminated loop opened at position {position}", position)
            if self.code[index] == '[':
                depth += 1
            elif self.code[index] == ']':
                depth -= 1
        self.instruction_pointer = index
        return None
