"""Coloured print helpers for verbose battlefield and loader output.

Each helper prints one line in a fixed colour; the TAG_* markers repeat the
category in plain text so output stays readable without colour.
"""

import os
from enum import Enum


class Color(Enum):
    BLUE = "\033[94m"      # range queries
    YELLOW = "\033[93m"    # moves and overlay writes
    RED = "\033[91m"       # rejected actions
    GREEN = "\033[92m"     # completed moves
    CYAN = "\033[96m"      # loader summaries
    RESET = "\033[0m"


def colored(text: str, color: Color) -> str:
    """Wrap ``text`` in ``color``; plain text when FIELDRANGE_NO_COLOR is set."""
    if os.getenv("FIELDRANGE_NO_COLOR"):
        return text
    return f"{color.value}{text}{Color.RESET.value}"


def log_query(message: str) -> None:
    print(colored(message, Color.BLUE))


def log_state(message: str) -> None:
    print(colored(message, Color.YELLOW))


def log_error(message: str) -> None:
    print(colored(message, Color.RED))


def log_success(message: str) -> None:
    print(colored(message, Color.GREEN))


def log_info(message: str) -> None:
    print(colored(message, Color.CYAN))


TAG_QUERY = "[•]"
TAG_STATE = "[~]"
TAG_ERROR = "[!]"
TAG_SUCCESS = "[✓]"
TAG_INFO = "[i]"
