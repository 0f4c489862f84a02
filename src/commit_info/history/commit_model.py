"""
Data models for commit summaries.

The :class:`CommitId` names a single commit object by its raw object id.
The :class:`CommitSummary` is the bounded, display-friendly projection of
a commit that is handed to user interfaces such as a commit log view.
"""

from __future__ import annotations

import binascii
from dataclasses import dataclass


# Placeholder used when a commit has no author name or no message.
UNKNOWN = "<unknown>"

# Raw object id sizes for SHA-1 and SHA-256 repositories.
_OID_SIZES = (20, 32)


@dataclass(frozen=True)
class CommitId:
    """Identifies a single commit.

    Instances compare and hash by their raw object id. There is no
    ordering between ids.
    """

    _oid: bytes

    @classmethod
    def from_hex(cls, text: str) -> "CommitId":
        """Parse a full hexadecimal object id.

        Raises
        ------
        ValueError
            If ``text`` is not 40 or 64 hexadecimal digits.
        """
        value = text.strip()
        if len(value) not in tuple(size * 2 for size in _OID_SIZES):
            raise ValueError(f"Not a full commit id: {text!r}")
        try:
            return cls(binascii.unhexlify(value))
        except binascii.Error as exc:
            raise ValueError(f"Not a hexadecimal commit id: {text!r}") from exc

    def get_oid(self) -> bytes:
        """Return the raw object id for use by repository accessors."""
        return self._oid

    def hex(self) -> str:
        """Return the id as lowercase hexadecimal."""
        return self._oid.hex()

    def short(self, length: int = 7) -> str:
        """Return the first ``length`` hex digits."""
        return self.hex()[:length]

    def __str__(self) -> str:
        return self.hex()

    def __repr__(self) -> str:
        return f"CommitId({self.hex()!r})"


@dataclass(frozen=True)
class CommitSummary:
    """Display summary of a single commit.

    Attributes
    ----------
    message : str
        First line of the commit message, limited to a number of
        characters, or ``"<unknown>"`` if the commit has no message.
    time : int
        Commit time in seconds since the epoch. May be negative.
    author : str
        Author display name, or ``"<unknown>"`` if none is recorded.
    id : CommitId
        The id the summary was requested for.
    """

    message: str
    time: int
    author: str
    id: CommitId
