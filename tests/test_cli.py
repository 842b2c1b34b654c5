import io

import pytest

from bfrun.cli import EXIT_ENGINE_ERROR, EXIT_OK, EXIT_TRUNCATED, EXIT_USAGE, main, split_arguments


def run_cli(argv, stdin_text=""):
    stdin, stdout, stderr = io.StringIO(stdin_text), io.StringIO(), io.StringIO()
    code = main(argv, stdin=stdin, stdout=stdout, stderr=stderr)
    return code, stdout.getvalue(), stderr.getvalue()


def test_literal_program():
    code, out, err = run_cli(["+++++ +++++ [ > +++++ +++++ < - ] > ."])
    assert code == EXIT_OK
    assert out == "d\n"
    assert err == ""


def test_literal_words_are_joined():
    code, out, _ = run_cli(["+" * 32, "+", "."])
    assert code == EXIT_OK
    assert out == "!\n"


def test_file_program(tmp_path):
    path = tmp_path / "echo.b"
    path.write_text(",.,.")
    code, out, _ = run_cli(["-f", str(path), "-i", "ok"])
    assert code == EXIT_OK
    assert out == "ok\n"


def test_piped_stdin_is_used_for_input():
    code, out, _ = run_cli([",+."], stdin_text="a")
    assert code == EXIT_OK
    assert out == "b\n"


def test_no_program():
    code, _, err = run_cli([])
    assert code == EXIT_USAGE
    assert "No arguments provided" in err


def test_bad_cell_limit():
    code, _, err = run_cli(["-l", "many", "+"])
    assert code == EXIT_USAGE
    assert "non-parse-able" in err


def test_cell_limit_exceeded():
    code, out, err = run_cli(["-l", "1", ">>."])
    assert code == EXIT_ENGINE_ERROR
    assert out == ""
    assert err.startswith("Stack size limit reached")


def test_syntax_error():
    code, _, err = run_cli(["+]"])
    assert code == EXIT_ENGINE_ERROR
    assert err.startswith("Syntax error")


def test_input_error():
    code, _, err = run_cli([","], stdin_text="")
    assert code == EXIT_ENGINE_ERROR
    assert err.startswith("Input error")


def test_verbose_statistics():
    code, out, err = run_cli(["-v", "-i", "", "++>+<."])
    assert code == EXIT_OK
    lines = out.splitlines()
    assert lines[0] == "?"
    assert "Operator count:        6" in lines
    assert "Operations performed:  6" in lines
    assert "Cells used:            2 (0 : 1)" in lines
    assert "Shift operations:      2 (1 left, 1 right)" in lines
    assert any(line.startswith("Time taken:") for line in lines)
    assert "Loaded 6 characters from command line" in err


def test_env_and_config_file(tmp_path, monkeypatch):
    monkeypatch.setenv("BF_CELL_LIMIT", "1")
    code, _, _ = run_cli([">>."])
    assert code == EXIT_ENGINE_ERROR

    config = tmp_path / "bf.yaml"
    config.write_text("cell_limit: 10\n")
    code, _, _ = run_cli(["--config", str(config), ">>."])
    assert code == EXIT_OK


def test_trace_mode():
    code, out, _ = run_cli(["--trace", "--max-steps", "5", "+."])
    assert code == EXIT_OK
    assert "Step 1: Execute '+' at position 0" in out
    assert "Output:   '?'" in out


def test_help_exits():
    with pytest.raises(SystemExit):
        run_cli(["--help"])


def test_flags_between_instruction_words():
    code, out, err = run_cli(["+" * 33, "-v", "."])
    assert code == EXIT_OK
    assert out.splitlines()[0] == "!"
    assert "Operations performed:  34" in out
    assert "Loaded 34 characters" in err


def test_program_starting_with_dash():
    code, out, _ = run_cli(["---."])
    assert code == EXIT_OK
    assert out == "?\n"

    code, out, _ = run_cli(["-[--->+<]>."])
    assert code == EXIT_OK
    assert out == "U\n"


def test_option_words_after_separator_are_instructions():
    assert split_arguments(["+", "--", "-v", "."]) == ([], ["+", "-v", "."])


def test_option_values_are_not_instructions():
    options, literals = split_arguments(["-i", "-x", "+", "--cell-limit=4", "-l", "9", "."])
    assert options == ["--input=-x", "--cell-limit=4", "--cell-limit=9"]
    assert literals == ["+", "."]


def test_trace_step_cap_is_not_success():
    code, out, err = run_cli(["--trace", "--max-steps", "5", "-v", "+[]"])
    assert code == EXIT_TRUNCATED
    assert "Operations performed" not in out
    assert "Stopped after 5 operations" in err
