"""Path and anchor helpers used to build permalinks and page identifiers."""

import hashlib
import re

# Characters that matter in C++ names keep a readable hex code.
_ENCODED_CHARACTERS = {
    "*": "2a",
    "&": "26",
    "<": "3c",
    ">": "3e",
    "(": "28",
    ")": "29",
}

_HEX_ANCHOR_RE = re.compile(r"_1[0-9a-fg]*$")
_TEXT_ANCHOR_RE = re.compile(r"_1_[0-9a-z]*$")
_ANCHOR_PREFIX_RE = re.compile(r"^.*_1")


def sanitize_hierarchical_path(path: str) -> str:
    """Make a `/` separated path safe for URLs and file names."""
    out: list[str] = []
    for ch in path.lower().replace(" ", ""):
        if ch in _ENCODED_CHARACTERS:
            out.append(_ENCODED_CHARACTERS[ch])
        elif ch.isascii() and (ch.isalnum() or ch in "/-"):
            out.append(ch)
        else:
            out.append("-")
    return "".join(out)


def flatten_path(path: str) -> str:
    """Turn a hierarchical path into a single level identifier."""
    return path.replace("/", "-")


def sanitize_anonymous_namespace(name: str) -> str:
    """Shorten Doxygen's `anonymous_namespace{file}` scope names."""
    return name.replace("anonymous_namespace{", "anonymous{")


def strip_permalink_hex_anchor(refid: str) -> str:
    """Return the compound id that owns a member id.

    Doxygen builds member ids as `<compound id>_1<hex digest>`; the pattern
    is observed behaviour, not a documented contract.
    """
    return _HEX_ANCHOR_RE.sub("", refid)


def strip_permalink_text_anchor(refid: str) -> str:
    """Return the page id of a text anchor id (`<page>_1_<label>`)."""
    return _TEXT_ANCHOR_RE.sub("", refid)


def get_permalink_anchor(refid: str) -> str:
    """Return the anchor part of a member id."""
    return _ANCHOR_PREFIX_RE.sub("", refid)


def short_hash(text: str) -> str:
    """Return a short, stable, path safe digest of a string."""
    return hashlib.md5(text.encode("utf-8")).hexdigest()[:8]


def join_with_last(items: list[str], delimiter: str, last_delimiter: str) -> str:
    """Join `a, b and c` style."""
    if len(items) <= 1:
        return "".join(items)
    return delimiter.join(items[:-1]) + last_delimiter + items[-1]
