"""
Mod version comparison

Follows the ordering used by the game's community Version Checker rather
than semver, so that existing published version strings keep comparing
the way mod authors expect:

- ``"0.65.2a-RC1"`` splits into release ``"0.65.2a"`` and candidate ``1``.
- Release segments are compared as strings right-padded with zeros to
  three characters, so ``0.65`` is newer than ``0.6``.
- A release that extends another (``1.2.3`` vs ``1.2``) is newer.
- Equal releases fall back to the candidate number.

Known limitation: padding does not truncate, so segments of four or more
digits misorder (``"1000"`` sorts below ``"999"``), and the ordering is
not transitive for malformed strings. Both are kept for compatibility.
"""

import re
from typing import Optional, Tuple

SEGMENT_WIDTH = 3


def split_release(version: str) -> Tuple[str, int]:
    """Split ``"0.65.2a-RC1"`` into ``("0.65.2a", 1)``."""
    release, _, candidate = version.partition("-")
    digits = re.sub(r"\D", "", candidate)
    return release, int(digits) if digits else 0


def is_newer(local: Optional[str], remote: Optional[str]) -> bool:
    """
    Whether ``remote`` is a newer version than ``local``

    Missing information is never an update: either side empty or
    ``None`` returns False.
    """
    if not local or not remote:
        return False

    local_release, local_rc = split_release(local)
    remote_release, remote_rc = split_release(remote)

    if local_release != remote_release:
        local_parts = local_release.split(".")
        remote_parts = remote_release.split(".")

        i = 0
        while (
            i < len(local_parts)
            and i < len(remote_parts)
            and local_parts[i] == remote_parts[i]
        ):
            i += 1

        if i < len(local_parts) and i < len(remote_parts):
            local_padded = local_parts[i].ljust(SEGMENT_WIDTH, "0")
            remote_padded = remote_parts[i].ljust(SEGMENT_WIDTH, "0")
            return remote_padded > local_padded

        # equal up to the shorter length: the longer one is a patch of it
        return len(remote_parts) > len(local_parts)

    return remote_rc > local_rc
