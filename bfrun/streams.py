"""
Input sources and output sinks for the interpreter.

A source provides read_char() returning a single character, or None when no
more input is available. A sink provides write_char(ch).
"""

import sys
from typing import List, Optional, TextIO


class StringInput:
    """Deterministic input read from a fixed string."""

    def __init__(self, text: str = ""):
        self.text = text
        self.index = 0

    def read_char(self) -> Optional[str]:
        if self.index >= len(self.text):
            return None
        char = self.text[self.index]
        self.index += 1
        return char

    @property
    def remaining(self) -> str:
        return self.text[self.index:]


class StreamInput:
    """Reads one character at a time from a text stream such as piped stdin."""

    def __init__(self, stream: TextIO):
        self.stream = stream

    def read_char(self) -> Optional[str]:
        char = self.stream.read(1)
        return char or None


class PromptInput:
    """Interactive input: prompt, read a line, keep its first character.

    An empty line counts as no input, the same as end of stream.
    """

    def __init__(self, stream: TextIO, out: TextIO, prompt: str = "> "):
        self.stream = stream
        self.out = out
        self.prompt = prompt

    def read_char(self) -> Optional[str]:
        self.out.write("\n" + self.prompt)
        self.out.flush()
        line = self.stream.readline()
        line = line.rstrip("\r\n")
        if not line:
            return None
        return line[0]


class StreamOutput:
    """Writes each character straight through, flushing as it goes."""

    def __init__(self, stream: TextIO):
        self.stream = stream
        self.written = 0

    def write_char(self, char: str) -> None:
        self.stream.write(char)
        self.stream.flush()
        self.written += 1


class BufferOutput:
    """Collects output in memory."""

    def __init__(self):
        self.chars: List[str] = []

    def write_char(self, char: str) -> None:
        self.chars.append(char)

    @property
    def written(self) -> int:
        return len(self.chars)

    def getvalue(self) -> str:
        return ''.join(self.chars)


def open_input_source(input_text: Optional[str] = None, stream: Optional[TextIO] = None,
                      out: Optional[TextIO] = None, prompt: str = "> "):
    """Pick the input source for a run.

    Explicit input text wins; otherwise a terminal gets the interactive
    prompt and anything else is read character by character.
    """
    if input_text is not None:
        return StringInput(input_text)
    stream = stream if stream is not None else sys.stdin
    out = out if out is not None else sys.stdout
    isatty = getattr(stream, "isatty", None)
    if isatty is not None and isatty():
        return PromptInput(stream, out, prompt)
    return StreamInput(stream)
