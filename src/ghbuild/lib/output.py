"""Pretty output and prompting utilities for the ghbuild CLI."""

import getpass
import sys
from collections.abc import Sequence


# Global color state
_color_enabled = None  # None = auto-detect, True = force on, False = force off

# Quiet mode hides everything except errors and prompts
_quiet = False


def set_color_enabled(enabled: bool) -> None:
    """
    Set global color output preference.

    Parameters
    ----------
    enabled : bool
        True to enable colors, False to disable.
    """
    global _color_enabled
    _color_enabled = enabled


def set_quiet(quiet: bool) -> None:
    """
    Set global quiet mode.

    Parameters
    ----------
    quiet : bool
        True to suppress success, warning and informational messages.
    """
    global _quiet
    _quiet = quiet


class Colors:
    """ANSI color codes for terminal output."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    CYAN = "\033[36m"


def supports_color() -> bool:
    """
    Check if the terminal supports color output.

    Returns
    -------
    bool
        True if stdout is a TTY and platform is not Windows.
    """
    if _color_enabled is not None:
        return _color_enabled

    return sys.stdout.isatty() and not sys.platform.startswith("win")


def colorize(text: str, color: str) -> str:
    """
    Colorize text if terminal supports it.

    Parameters
    ----------
    text : str
        Text to colorize.
    color : str
        ANSI color code from the Colors class.

    Returns
    -------
    str
        Colorized text if supported, plain text otherwise.
    """
    if supports_color():
        return f"{color}{text}{Colors.RESET}"
    return text


def success(message: str) -> None:
    """Print success message with green checkmark."""
    if _quiet:
        return
    symbol = colorize("✓", Colors.GREEN)
    print(f"{symbol} {message}")


def error(message: str) -> None:
    """Print error message with red X symbol to stderr."""
    symbol = colorize("✗", Colors.RED)
    print(f"{symbol} {message}", file=sys.stderr)


def warning(message: str) -> None:
    """Print warning message with yellow warning symbol."""
    if _quiet:
        return
    symbol = colorize("⚠", Colors.YELLOW)
    print(f"{symbol} {message}")


def info(message: str) -> None:
    """Print informational message with indentation."""
    if _quiet:
        return
    print(f"  {message}")


def header(message: str) -> None:
    """Print header message in bold."""
    if _quiet:
        return
    text = colorize(message, Colors.BOLD)
    print(f"\n{text}")


def dim(message: str) -> None:
    """Print dimmed message with indentation."""
    if _quiet:
        return
    text = colorize(message, Colors.DIM)
    print(f"  {text}")


def ask_choice(message: str, options: Sequence[str]) -> int | None:
    """
    Show a numbered menu and return the index of the chosen option.

    The menu is shown again until the answer is one of the listed numbers.

    Parameters
    ----------
    message : str
        Question shown above the menu.
    options : sequence of str
        Option labels, displayed as ``1) label``, ``2) label``...

    Returns
    -------
    int or None
        Zero-based index of the chosen option, or None if input ended
        before a valid answer was given. Ctrl-C propagates as
        KeyboardInterrupt.

    Examples
    --------
    >>> index = ask_choice("Pick one", ["cache", "store", "none"])
    """
    print(message)
    for number, label in enumerate(options, start=1):
        print(f"  {number}) {label}")

    while True:
        try:
            response = input(f"Choice [1-{len(options)}]: ").strip()
        except EOFError:
            print()
            return None

        if response.isdigit() and 1 <= int(response) <= len(options):
            return int(response) - 1
        warning(f"Please enter a number between 1 and {len(options)}")


def ask_text(message: str) -> str:
    """
    Ask the user for a line of text.

    Parameters
    ----------
    message : str
        Prompt to display.

    Returns
    -------
    str
        The entered text, stripped of surrounding whitespace.
    """
    return input(f"{message}: ").strip()


def ask_secret(message: str) -> str:
    """
    Ask the user for a secret without echoing it to the terminal.

    Parameters
    ----------
    message : str
        Prompt to display.

    Returns
    -------
    str
        The entered secret, unmodified.
    """
    return getpass.getpass(f"{message}: ")


def print_key_value(key: str, value: str, indent: int = 0) -> None:
    """
    Print key-value pair with formatting and indentation.

    Parameters
    ----------
    key : str
        Key to print (displayed in cyan).
    value : str
        Value to print.
    indent : int, optional
        Indentation level (number of 2-space indents), by default 0.
    """
    indent_str = "  " * indent
    key_colored = colorize(key, Colors.CYAN)
    print(f"{indent_str}{key_colored}: {value}")


def print_dict(data: dict, indent: int = 0) -> None:
    """
    Print dictionary with hierarchical formatting.

    Recursively prints nested dictionaries with proper indentation
    and color coding. At the top level (indent=0), adds blank lines
    between sections for better readability.

    Parameters
    ----------
    data : dict
        Dictionary to print.
    indent : int, optional
        Indentation level (number of 2-space indents), by default 0.
    """
    items = list(data.items())
    for i, (key, value) in enumerate(items):
        if isinstance(value, dict):
            key_colored = colorize(key, Colors.CYAN)
            print(f"{'  ' * indent}{key_colored}:")
            print_dict(value, indent + 1)
            if indent == 0 and i < len(items) - 1:
                print()
        else:
            print_key_value(key, str(value), indent)
