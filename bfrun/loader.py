"""Resolve the program text from command-line words or a source file."""

from typing import Optional, Sequence


class ProgramLoadError(RuntimeError):
    """No usable program was supplied."""


def read_program_file(path: str) -> str:
    """Read a whole source file as text."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ProgramLoadError(f"Couldn't open file: {path}") from e


def load_instructions(literals: Sequence[str] = (), file_path: Optional[str] = None) -> str:
    """Return the instructions to run.

    A file and literal instructions are mutually exclusive. Literal words are
    joined without separators, so `bf ++ ++ .` runs `++++.`.
    """
    literals = [word for word in literals if word]
    if file_path is not None:
        if literals:
            raise ProgramLoadError("Both file and literal instructions provided")
        return read_program_file(file_path)
    if not literals:
        raise ProgramLoadError("No arguments provided")
    return ''.join(literals)
