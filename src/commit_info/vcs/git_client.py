"""
Git repository accessor for commit_info.

This module provides the narrow read-only capability the commit summary
lookup needs from a repository: open a repository by location, resolve a
commit id to a commit object, and read the message, author name and time
of that object. Objects are read through a single ``git cat-file --batch``
process that lives for as long as the repository is open, so resolving a
batch of ids costs one subprocess rather than one per id.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import IO, List, Optional, Protocol

from commit_info.history.commit_model import CommitId


logger = logging.getLogger(__name__)
# Attach a null handler to avoid logging errors when the root logger is not
# configured. Logs will propagate to the root when configured by the CLI.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


class GitError(Exception):
    """Raised when a Git command fails."""

    pass


class RepositoryInaccessibleError(GitError):
    """Raised when a repository location cannot be opened."""

    def __init__(self, location: str, reason: str = "") -> None:
        self.location = location
        self.reason = reason
        message = f"Repository not accessible: {location}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class CommitNotFoundError(GitError):
    """Raised when a commit id does not name a commit in the repository."""

    def __init__(self, commit_id: CommitId) -> None:
        self.commit_id = commit_id
        super().__init__(f"Commit not found: {commit_id}")


@dataclass(frozen=True)
class CommitObject:
    """Fields read from a resolved commit object.

    ``message`` and ``author_name`` are ``None`` when the object does not
    record them in a decodable form.
    """

    message: Optional[str]
    author_name: Optional[str]
    time: int


class RepositoryAccessor(Protocol):
    """Capability to resolve commit ids within an open repository."""

    def find_commit(self, commit_id: CommitId) -> CommitObject:
        ...


# ----------------------------------------------------------------------
# Commit object parsing
# ----------------------------------------------------------------------
def _decode(raw: bytes, encoding: str) -> Optional[str]:
    try:
        return raw.decode(encoding)
    except UnicodeDecodeError:
        return None


def _signature_name(value: bytes) -> bytes:
    """Return the name part of ``Name <email> seconds tz``."""
    name, sep, _ = value.partition(b"<")
    return name.strip() if sep else b""


def _signature_time(value: bytes) -> Optional[int]:
    """Return the seconds part of ``Name <email> seconds tz``."""
    _, sep, rest = value.rpartition(b">")
    if not sep:
        return None
    fields = rest.split()
    if not fields:
        return None
    try:
        return int(fields[0])
    except ValueError:
        return None


def parse_commit_object(raw: bytes) -> CommitObject:
    """Parse the raw contents of a commit object.

    The header is a sequence of ``key value`` lines (continuation lines of
    multi-line values such as ``gpgsig`` start with a space) terminated by
    a blank line, after which the message follows. A commit without that
    blank line has no message at all, which is distinct from an empty
    message.

    The time is the committer time, falling back to the author time. The
    author name and message are decoded with the commit's ``encoding``
    header (UTF-8 when absent) and reported as ``None`` when they are not
    valid in that encoding.
    """
    header, sep, body = raw.partition(b"\n\n")
    headers: dict = {}
    for line in header.split(b"\n"):
        if not line or line.startswith(b" "):
            continue
        key, _, value = line.partition(b" ")
        headers.setdefault(key, value)

    encoding = "utf-8"
    declared = headers.get(b"encoding")
    if declared:
        candidate = declared.decode("ascii", errors="replace").strip()
        try:
            "".encode(candidate)
            encoding = candidate
        except LookupError:
            logger.debug("Unknown commit encoding %r, using UTF-8", candidate)

    author = headers.get(b"author")
    author_name: Optional[str] = None
    if author is not None:
        name = _signature_name(author)
        if name:
            author_name = _decode(name, encoding)

    time = None
    for key in (b"committer", b"author"):
        if key in headers:
            time = _signature_time(headers[key])
            if time is not None:
                break

    message = _decode(body, encoding) if sep else None
    return CommitObject(message=message, author_name=author_name, time=time or 0)


# ----------------------------------------------------------------------
# Repository access
# ----------------------------------------------------------------------
class GitRepository:
    """Read-only access to the objects of a Git repository.

    Use as a context manager: entering validates the location and starts
    the object reader, leaving stops it again whether or not an error
    occurred.
    """

    def __init__(self, location: str, git_executable: str = "git") -> None:
        self.location = location
        self.git_executable = git_executable
        self._proc: Optional[subprocess.Popen] = None

    # ------------------------------------------------------------------
    # Static helpers
    # ------------------------------------------------------------------
    @staticmethod
    def find_repo_root(start: Path) -> Optional[Path]:
        """Find the root of the Git repository starting from ``start``.

        Walk upwards until a ``.git`` entry is found or the filesystem
        root is reached.
        """
        current = start.resolve()
        while True:
            if (current / ".git").exists():
                return current
            if current.parent == current:
                # reached filesystem root
                return None
            current = current.parent

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def _run(self, args: List[str]) -> subprocess.CompletedProcess:
        full_cmd = [self.git_executable] + args
        logger.debug("Executing Git command: %s", " ".join(full_cmd))
        try:
            return subprocess.run(
                full_cmd,
                cwd=self.location,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except FileNotFoundError as exc:
            if not Path(self.location).is_dir():
                raise RepositoryInaccessibleError(self.location, "no such directory") from exc
            raise GitError(f"Git executable not found: {self.git_executable}") from exc
        except OSError as exc:
            raise RepositoryInaccessibleError(self.location, str(exc)) from exc

    def open(self) -> "GitRepository":
        """Validate the location and start the ``cat-file`` reader.

        Raises
        ------
        RepositoryInaccessibleError
            If the location is not a readable Git repository.
        """
        if self._proc is not None:
            return self
        if not Path(self.location).is_dir():
            logger.error("Repository location '%s' is not a directory", self.location)
            raise RepositoryInaccessibleError(self.location, "no such directory")

        result = self._run(["rev-parse", "--git-dir"])
        if result.returncode != 0:
            reason = result.stderr.strip() or result.stdout.strip()
            logger.error("Not a Git repository: %s\nSTDERR: %s", self.location, reason)
            raise RepositoryInaccessibleError(self.location, reason)

        full_cmd = [self.git_executable, "cat-file", "--batch"]
        logger.debug("Starting Git object reader: %s", " ".join(full_cmd))
        try:
            self._proc = subprocess.Popen(
                full_cmd,
                cwd=self.location,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
            )
        except OSError as exc:
            raise RepositoryInaccessibleError(self.location, str(exc)) from exc
        return self

    def close(self) -> None:
        """Stop the object reader. Safe to call more than once."""
        proc, self._proc = self._proc, None
        if proc is None:
            return
        try:
            if proc.stdin is not None:
                proc.stdin.close()
            proc.wait(timeout=5)
        except (OSError, subprocess.TimeoutExpired):
            logger.debug("Git object reader did not exit, killing it")
            proc.kill()
            proc.wait()
        finally:
            if proc.stdout is not None:
                proc.stdout.close()

    def __enter__(self) -> "GitRepository":
        return self.open()

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.close()
        return False

    # ------------------------------------------------------------------
    # Object lookup
    # ------------------------------------------------------------------
    def _read_object(self, commit_id: CommitId) -> Optional[tuple]:
        """Return ``(type, contents)`` for ``commit_id`` or ``None`` if missing."""
        if self._proc is None:
            raise GitError(f"Repository is not open: {self.location}")
        stdin: IO[bytes] = self._proc.stdin  # type: ignore[assignment]
        stdout: IO[bytes] = self._proc.stdout  # type: ignore[assignment]
        try:
            stdin.write(commit_id.hex().encode("ascii") + b"\n")
            stdin.flush()
        except OSError as exc:
            raise GitError(f"Git object reader failed: {exc}") from exc

        header = stdout.readline()
        if not header:
            raise GitError("Git object reader terminated unexpectedly")
        fields = header.rstrip(b"\n").split(b" ")
        if len(fields) != 3:
            # "<oid> missing" or "<oid> ambiguous"
            logger.debug("Object lookup for %s returned: %s", commit_id, header.strip())
            return None
        _, obj_type, size = fields
        contents = stdout.read(int(size))
        stdout.read(1)  # trailing newline
        return obj_type.decode("ascii"), contents

    def find_commit(self, commit_id: CommitId) -> CommitObject:
        """Resolve ``commit_id`` to a commit object.

        Raises
        ------
        CommitNotFoundError
            If the id does not name a commit in this repository.
        GitError
            If the object reader fails.
        """
        found = self._read_object(commit_id)
        if found is None or found[0] != "commit":
            raise CommitNotFoundError(commit_id)
        return parse_commit_object(found[1])


def open_repository(location: str, git_executable: str = "git") -> GitRepository:
    """Return an unopened :class:`GitRepository` for ``location``.

    The result is meant to be used in a ``with`` block.
    """
    return GitRepository(str(location), git_executable=git_executable)
