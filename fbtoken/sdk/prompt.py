"""Interactive prompting with a non-interactive fallback.

Both readers expose the same single capability, reading one line in answer
to a prompt. ``default_reader`` picks one by checking whether stdin is a
terminal.
"""

import logging
import sys

import click

logger = logging.getLogger(__name__)

PROMPT_COLOR = "cyan"


class LineReader:
    """Reads one line of operator input."""

    def read_line(self, prompt_text: str) -> str:
        raise NotImplementedError


class TerminalLineReader(LineReader):
    """Line reader for an interactive terminal, backed by click.prompt."""

    def read_line(self, prompt_text: str) -> str:
        try:
            return click.prompt(
                prompt_text,
                default="",
                show_default=False,
                prompt_suffix="",
            )
        except click.Abort:
            # Ctrl-D at the prompt
            return ""


class StreamLineReader(LineReader):
    """Line reader for piped or redirected input."""

    def __init__(self, stream=None):
        self._stream = stream

    def read_line(self, prompt_text: str) -> str:
        stream = self._stream or sys.stdin
        click.echo(prompt_text, nl=False)
        line = stream.readline()
        if not line:
            # EOF on a non-interactive stdin
            click.echo()
        return line


def default_reader() -> LineReader:
    """Pick the terminal reader when stdin is a TTY, the stream reader otherwise."""
    try:
        interactive = sys.stdin.isatty()
    except (AttributeError, ValueError):
        interactive = False
    logger.debug(f"Using {'terminal' if interactive else 'stream'} line reader")
    return TerminalLineReader() if interactive else StreamLineReader()


class Prompter:
    """Asks the operator for values not supplied by flags or environment."""

    def __init__(self, reader: LineReader = None):
        self.reader = reader or default_reader()

    def ask(self, prompt_text: str) -> str:
        answer = self.reader.read_line(click.style(prompt_text, fg=PROMPT_COLOR))
        return (answer or "").strip()

    def confirm(self, prompt_text: str) -> bool:
        """Yes/no question where anything but y/yes means no."""
        return self.ask(prompt_text).lower() in ("y", "yes")
