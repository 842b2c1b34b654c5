from brainfuck import BrainfuckInterpreter, ExecutionCounters
from bfrun.report import RunReport, timed_run


def test_report_lines():
    counters = ExecutionCounters(operations=100, left_shifts=3, right_shifts=5,
                                 lowest_cell=-1, greatest_cell=4)
    report = RunReport.build("+[->.<]x", counters, 0.5)
    assert report.operator_count == 7
    assert report.operations_per_second == 200.0
    assert report.lines() == [
        "Operator count:        7",
        "Operations performed:  100",
        "Cells used:            6 (-1 : 4)",
        "Shift operations:      8 (3 left, 5 right)",
        "Time taken:            0.5s",
        "Operations per second: 200",
    ]


def test_zero_elapsed_rate():
    report = RunReport.build("", ExecutionCounters(operations=5), 0.0)
    assert report.operations_per_second == 0.0


def test_timed_run():
    itp = BrainfuckInterpreter()
    result, elapsed = timed_run(itp.run, "+++")
    assert result.ok
    assert result.counters.operations == 3
    assert elapsed >= 0.0
