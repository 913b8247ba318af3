"""
Relaxed descriptor parsing

Mod descriptor files are JSON as the game reads it: ``#`` starts a
comment, keys may be unquoted and trailing commas are allowed. Comments
are stripped first, then the rest is parsed with hjson.
"""

import re
from collections.abc import Mapping
from typing import Optional

import hjson

from starmeta.exceptions import MalformedDescriptor

# Quoted strings are matched first so a "#" inside one is kept. Outside
# strings, "#* ... *#" is a block comment and "#" runs to end of line.
COMMENT_PATTERN = re.compile(
    r"""(?P<string>"(?:\\.|[^"\\\n])*"|'(?:\\.|[^'\\\n])*')"""
    r"""|\#\*[\s\S]*?\*\#"""
    r"""|\#[^\n]*"""
)


def strip_comments(text: str) -> str:
    """Remove ``#`` comments outside of quoted strings."""
    return COMMENT_PATTERN.sub(lambda m: m.group("string") or "", text)


def parse_descriptor(raw: str, path: Optional[str] = None) -> Mapping:
    """
    Parse descriptor text into a mapping

    Args:
        raw: file contents
        path: file the text came from, for error reporting

    Raises:
        MalformedDescriptor: the text is not a relaxed JSON object
    """
    label = path or "descriptor"
    try:
        data = hjson.loads(strip_comments(raw))
    except (ValueError, RecursionError) as e:
        raise MalformedDescriptor(f"{label} invalid: {e}", path=path) from e

    if not isinstance(data, Mapping):
        raise MalformedDescriptor(
            f"{label} invalid: expected an object, got {type(data).__name__}",
            path=path,
        )
    return data
