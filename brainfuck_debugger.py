#!/usr/bin/env python3
"""
Brainfuck Step-by-Step Debugger

Shows the step-by-step execution of a Brainfuck program, displaying the
state of the tape, loop stack and output at each step.
"""

import sys
from typing import Optional, TextIO

from brainfuck import BrainfuckInterpreter, DEFAULT_CELL_LIMIT, ExecutionResult

DESCRIPTIONS = {
    '>': "Move pointer right",
    '<': "Move pointer left",
    '+': "Increment cell",
    '-': "Decrement cell",
    '.': "Output cell",
    ',': "Read input into cell",
    '[': "Loop start",
    ']': "Loop end",
}


class BrainfuckDebugger(BrainfuckInterpreter):
    """Extended Brainfuck interpreter with step-by-step debugging."""

    def __init__(self, cell_limit: int = DEFAULT_CELL_LIMIT, show_memory_range: int = 8,
                 out: Optional[TextIO] = None):
        super().__init__(cell_limit)
        self.show_memory_range = show_memory_range
        self.out = out

    def _print(self, text: str = "") -> None:
        print(text, file=self.out or sys.stdout)

    def debug_run(self, code: str, input_source=None, output_sink=None,
                  max_steps: Optional[int] = None) -> ExecutionResult:
        """Execute Brainfuck code, printing machine state after every step."""
        self.load(code, input_source, output_sink)
        self._print(f"Program: {code}")
        self._print("=" * 60)
        self._show_state("INITIAL")

        steps = 0
        while not self.finished:
            if max_steps is not None and steps >= max_steps:
                self._print(f"\nExecution stopped after {max_steps} steps")
                return ExecutionResult(self.counters, truncated=True)

            position = self.instruction_pointer
            cmd = self.code[position]
            steps += 1
            description = DESCRIPTIONS.get(cmd, "No-op")
            self._print(f"\nStep {steps}: Execute {cmd!r} at position {position} ({description})")

            error = self.step()
            if error is not None:
                self._print(f"  Error ({error.kind}): {error}")
                return ExecutionResult(self.counters, error)
            self._show_state(f"AFTER STEP {steps}")

        result = self.close()
        if result.error is not None:
            self._print(f"  Error ({result.error.kind}): {result.error}")
        self._print("\nFINAL RESULT:")
        self._print(f"Output: {''.join(self.output)!r}")
        return result

    def _show_state(self, label: str) -> None:
        """Show current state of the tape, pointer, and program."""
        self._print(f"\n{label}:")

        program_display = ""
        for i, cmd in enumerate(self.code):
            if i == self.instruction_pointer:
                program_display += f"[{cmd}]"
            else:
                program_display += cmd
        if self.finished:
            program_display += "[END]"
        self._print(f"Program:  {program_display}")

        # Tape window centred on the pointer; the tape has no left edge
        start = self.pointer - self.show_memory_range // 2
        end = start + self.show_memory_range

        memory_vals = []
        memory_ptrs = []
        memory_addrs = []
        for i in range(start, end):
            memory_vals.append(f"{self.tape.get(i, 0):3d}")
            memory_ptrs.append(" ^ " if i == self.pointer else "   ")
            memory_addrs.append(f"{i:3d}")

        self._print("Memory:   [" + "|".join(memory_vals) + "]")
        self._print("Pointer:   " + " ".join(memory_ptrs))
        self._print("Address:   " + " ".join(memory_addrs))
        self._print(f"Loops:    {self.loop_stack}")

        if self.output:
            self._print(f"Output:   {''.join(self.output)!r}")
        else:
            self._print("Output:   (empty)")


if __name__ == "__main__":
    from bfrun.streams import StringInput

    debugger = BrainfuckDebugger(show_memory_range=6)
    debugger.debug_run(",+.", StringInput("A"))
    debugger.debug_run("++[>+++<-]>.", max_steps=100)
