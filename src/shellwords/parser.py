import logging
import re
from typing import Iterable, List, Mapping

logger = logging.getLogger(__name__)


class MismatchedQuotes(ValueError):
    """Exception raised when a quoted span is missing its closing quote."""

    def __init__(self) -> None:
        super().__init__("Mismatched quotes")

    def __eq__(self, other: object) -> bool:
        return isinstance(other, MismatchedQuotes)

    def __hash__(self) -> int:
        return hash(MismatchedQuotes)

    def __reduce__(self):
        return (MismatchedQuotes, ())


def _compile_re(fsm: Mapping):
    return {
        k: [
            (re.compile(expr, re.DOTALL).match, action, next_state)
            for (expr, action, next_state) in rules
        ]
        for k, rules in fsm.items()
    }


# States
AT_WORD_BOUNDARY = "AT_WORD_BOUNDARY"
IN_BARE_RUN = "IN_BARE_RUN"
IN_SINGLE_QUOTE = "IN_SINGLE_QUOTE"
IN_DOUBLE_QUOTE = "IN_DOUBLE_QUOTE"
AFTER_BACKSLASH = "AFTER_BACKSLASH"

# Characters that keep their special meaning after a backslash inside double quotes
DOUBLE_QUOTE_METACHARS = "$`\"\\\n"


def _append_field(s: str, words: List[str], field: List[str]):
    field.append(s)


def _finalize_word(s: str, words: List[str], field: List[str]):
    words.append("".join(field))
    field.clear()


_BARE_RUN = r"[^\s\\'\"]+"

_split_fsm = _compile_re(
    {
        AT_WORD_BOUNDARY: [
            (r"\s+", None, AT_WORD_BOUNDARY),
            (_BARE_RUN, _append_field, IN_BARE_RUN),
            (r"'", None, IN_SINGLE_QUOTE),
            (r'"', None, IN_DOUBLE_QUOTE),
            (r"\\", None, AFTER_BACKSLASH),
            (r"\Z", None, None),
        ],
        IN_BARE_RUN: [
            (r"\s+", _finalize_word, AT_WORD_BOUNDARY),
            (_BARE_RUN, _append_field, IN_BARE_RUN),
            (r"'", None, IN_SINGLE_QUOTE),
            (r'"', None, IN_DOUBLE_QUOTE),
            (r"\\", None, AFTER_BACKSLASH),
            (r"\Z", _finalize_word, None),
        ],
        IN_SINGLE_QUOTE: [
            (r"[^']+", _append_field, IN_SINGLE_QUOTE),
            (r"'", None, IN_BARE_RUN),
        ],
        IN_DOUBLE_QUOTE: [
            (r'[^"\\]+', _append_field, IN_DOUBLE_QUOTE),
            (
                r"\\([" + re.escape(DOUBLE_QUOTE_METACHARS) + "])",
                _append_field,
                IN_DOUBLE_QUOTE,
            ),
            (r"\\.", _append_field, IN_DOUBLE_QUOTE),
            (r'"', None, IN_BARE_RUN),
        ],
        AFTER_BACKSLASH: [
            (r".", _append_field, IN_BARE_RUN),
            (r"\Z", None, IN_BARE_RUN),
        ],
    }
)


def split(s: str) -> List[str]:
    """
    Split a string into words the way the UNIX Bourne shell does.

    Only single quotes, double quotes and backslashes are metacharacters.
    Everything else, including ``|``, ``$`` or ``*``, is ordinary word content.
    Within double quotes, a backslash only escapes ``$``, backtick, ``"``, ``\\``
    and newline and is kept literally before any other character.

    Args:
        s: The string to split.

    Returns:
        The list of words, with all quoting and escaping removed.

    Raises:
        MismatchedQuotes: If a quoted span is missing its closing quote.
    """
    words: List[str] = []
    field: List[str] = []

    state = AT_WORD_BOUNDARY
    pos = 0
    while True:
        # Find matching rule
        match: re.Match | None
        match, action, next_state = next(
            (
                (match, action, next_state)
                for match_expr, action, next_state in _split_fsm[state]
                if (match := match_expr(s, pos)) is not None
            ),
            (None, None, None),
        )

        # Only the quote states can run out of rules
        if match is None:
            logger.debug("Unterminated quote at pos %d (state=%s): %r", pos, state, s)
            raise MismatchedQuotes()

        if action is not None:
            action(match.group(match.lastindex or 0), words, field)

        if next_state is None:
            break

        state = next_state
        pos = match.end()

    return words


_find_unsafe = re.compile(r"[^A-Za-z0-9_\-.,:/@\n]")


def escape(s: str) -> str:
    """
    Escape a string so that :func:`split` reads it back as exactly one word.

    Every character except ASCII letters, digits, ``_-.,:/@`` and newline is
    prefixed with a backslash. Newlines are wrapped in single quotes.
    The empty string becomes ``''``.

    >>> escape("special's.txt")
    "special\\\\'s.txt"
    """
    if s == "":
        return "''"

    escaped = _find_unsafe.sub(r"\\\g<0>", s)

    return escaped.replace("\n", "'\n'")


def join(seq_of_str: Iterable[str]) -> str:
    """Escape every string and join them into a single command line."""
    return " ".join(escape(arg) for arg in seq_of_str)
