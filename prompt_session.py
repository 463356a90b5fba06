"""Line-based prompt channel owned by one interactive run."""

from __future__ import annotations

import sys
from typing import Optional, TextIO


class PromptSession:
    """Prompts on one input/output pair; closed once the run is over."""

    def __init__(
        self,
        input: Optional[TextIO] = None,
        output: Optional[TextIO] = None,
        errors: Optional[TextIO] = None,
    ):
        self.input = input or sys.stdin
        self.output = output or sys.stdout
        self.errors = errors or sys.stderr
        self.closed = False

    def __enter__(self) -> "PromptSession":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def ask(self, question: str) -> str:
        if self.closed:
            raise ValueError("prompt session is closed")
        self.output.write(question)
        self.output.flush()
        line = self.input.readline()
        if not line:
            raise EOFError("no more input")
        return line.rstrip("\r\n")

    def say(self, text: str = "") -> None:
        print(text, file=self.output)

    def warn(self, text: str) -> None:
        print(text, file=self.errors)

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self.output.flush()
