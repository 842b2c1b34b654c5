import io

from brainfuck import BrainfuckSyntaxError
from brainfuck_debugger import BrainfuckDebugger
from bfrun.streams import StringInput


def test_trace_matches_plain_run():
    out = io.StringIO()
    debugger = BrainfuckDebugger(show_memory_range=4, out=out)
    result = debugger.debug_run(",+.", StringInput("A"))
    assert result.ok
    assert debugger.output == ["B"]
    text = out.getvalue()
    assert "Step 1: Execute ',' at position 0" in text
    assert "Program:  [,]+." in text
    assert "Output:   'B'" in text
    assert "FINAL RESULT" in text


def test_trace_shows_negative_addresses():
    out = io.StringIO()
    debugger = BrainfuckDebugger(show_memory_range=4, out=out)
    debugger.debug_run("<+")
    assert " -3  -2  -1   0" in out.getvalue()


def test_trace_step_cap():
    out = io.StringIO()
    debugger = BrainfuckDebugger(out=out)
    result = debugger.debug_run("+[]", max_steps=10)
    assert result.truncated
    assert not result.ok
    assert result.error is None
    assert result.counters.operations == 10
    assert "stopped after 10 steps" in out.getvalue()


def test_trace_reports_errors():
    out = io.StringIO()
    debugger = BrainfuckDebugger(out=out)
    result = debugger.debug_run("+]")
    assert isinstance(result.error, BrainfuckSyntaxError)
    assert "Error (syntax)" in out.getvalue()
