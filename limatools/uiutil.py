"""Interactive yes/no and choice prompts on the terminal."""

from __future__ import annotations

_YES = ("y", "yes")
_NO = ("n", "no")


def confirm(message: str, default: bool) -> bool:
    """Ask a yes/no question; an empty answer picks ``default``.

    The question is repeated until the answer is understood. EOFError and
    KeyboardInterrupt propagate to the caller.
    """
    hint = "(Y/n)" if default else "(y/N)"
    while True:
        answer = input(f"? {message} {hint} ").strip().lower()
        if answer == "":
            return default
        if answer in _YES:
            return True
        if answer in _NO:
            return False
        print('Sorry, your reply was invalid: "%s" is not a valid answer, please try again.' % answer)


def select(message: str, options: list[str]) -> int:
    """Let the user pick one of ``options``; return its zero-based index.

    The user may answer with the option's number or its exact text.
    """
    if not options:
        raise ValueError("please provide options to select from")
    print(f"? {message}")
    for number, option in enumerate(options, start=1):
        print(f"  {number}) {option}")
    while True:
        answer = input(f"  Answer (1-{len(options)}): ").strip()
        if answer in options:
            return options.index(answer)
        if answer.isdigit() and 1 <= int(answer) <= len(options):
            return int(answer) - 1
        print(f"Sorry, {answer!r} is not one of the options, please try again.")