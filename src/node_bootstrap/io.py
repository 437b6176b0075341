"""Console I/O helpers for user-facing messages and prompts."""

from __future__ import annotations

import sys
from typing import Callable, NoReturn, Sequence

import questionary

from . import log

DEFAULT_PROMPT_ATTEMPTS = 3


def _use_questionary() -> bool:
    return sys.stdin.isatty() and sys.stdout.isatty()


def is_interactive() -> bool:
    """Return ``True`` when both stdin and stdout are attached to a terminal."""
    return sys.stdin.isatty() and sys.stdout.isatty()


def say(message: str) -> None:
    """Print a normal message to stdout.

    Args:
        message: Text to print.

    Returns:
        None.

    Example:
        >>> say("Hello")
        Hello
    """
    print(message)


def warn(message: str) -> None:
    """Print a yellow warning message to stderr.

    Args:
        message: Warning text.

    Returns:
        None.
    """
    log.warning(f"Warning: {message}")


def die(message: str, code: int = 1) -> NoReturn:
    """Print a red error message to stderr and exit.

    Args:
        message: Error message to display.
        code: Exit code to use.

    Returns:
        None. Exits the process via ``sys.exit``.
    """
    log.error(f"error: {message}")
    sys.exit(code)


def prompt(
    text: str,
    default: str | None = None,
    required: bool = False,
    allow_empty: bool = False,
) -> str:
    """Prompt the user for input, optionally enforcing a default or requirement.

    Args:
        text: Prompt label shown to the user.
        default: Default value used when the user enters an empty string.
        required: When true, keep prompting until a non-empty value is provided.

    Returns:
        The user-provided or default string.

    Example:
        Which npm packages do you want to install? []:
    """
    while True:
        if _use_questionary():
            question = questionary.text(text, default=default or "")
            value = question.ask()
            if value is None:
                die("aborted")
            value = str(value).strip()
        else:
            if default is not None and default != "":
                value = input(f"{text} [{default}]: ").strip()
                if value == "" and not allow_empty:
                    value = default
            else:
                value = input(f"{text}: ").strip()
        if required and value == "":
            continue
        return value


def select(text: str, choices: Sequence[str], default: str | None = None) -> str:
    """Ask the user to pick one of ``choices``.

    The answer is returned as typed; callers validate it.
    """
    if _use_questionary():
        answer = questionary.select(text, choices=list(choices), default=default).ask()
        if answer is None:
            die("aborted")
        return str(answer)
    label = f"{text} ({' or '.join(choices)})"
    return prompt(label, default=default)


def prompt_until_valid(
    ask: Callable[[], str],
    validate: Callable[[str], str | None],
    *,
    attempts: int = DEFAULT_PROMPT_ATTEMPTS,
) -> str | None:
    """Ask repeatedly until ``validate`` accepts an answer.

    ``validate`` returns an error message for a rejected answer or ``None``
    when it is accepted. Each rejection is reported in red before asking
    again.

    Returns:
        The accepted answer, or ``None`` once ``attempts`` answers have been
        rejected.
    """
    for _ in range(max(attempts, 1)):
        answer = ask()
        problem = validate(answer)
        if problem is None:
            return answer
        log.error(f"Error: {problem}")
    return None
