"""
Persisting the RailData token to a file.

The first line of the file is the token. TokenFileUpdater is a token-update
listener that rewrites the file after a refresh, but only if the file still
holds the token that was replaced, so a slower writer can never overwrite a
newer token with an older one.
"""

from __future__ import annotations

import fcntl
import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


def read_token_file(path: str | os.PathLike[str]) -> str:
    """The token stored in the file, or "" if the file is empty or missing."""
    try:
        with open(path, encoding="utf-8") as f:
            return f.readline().strip()
    except FileNotFoundError:
        return ""


class TokenFileUpdater:
    """Token-update listener writing new tokens to a file."""

    def __init__(self, path: str | os.PathLike[str]):
        self.path = Path(path)
        self.lock_path = self.path.with_name(self.path.name + ".lock")

    def __call__(self, new_token: str, previous_token: str) -> None:
        self.update(new_token, previous_token)

    def __repr__(self) -> str:
        return f"TokenFileUpdater({str(self.path)!r})"

    def update(self, new_token: str, previous_token: str) -> bool:
        """
        Replace `previous_token` with `new_token` in the file.

        Returns False, leaving the file untouched, if it holds some other token.
        """
        with open(self.lock_path, "w", encoding="utf-8") as lock_file:
            fcntl.flock(lock_file.fileno(), fcntl.LOCK_EX)
            current = read_token_file(self.path)
            if current != previous_token:
                logger.info(
                    "Token file %s holds a different token; not overwriting", self.path
                )
                return False
            self._atomic_write(new_token + "\n")

        logger.info("Saved new token to %s", self.path)
        return True

    def _atomic_write(self, content: str) -> None:
        temp_path: str | None = None
        try:
            with tempfile.NamedTemporaryFile(
                mode="w",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
                encoding="utf-8",
            ) as tmp:
                temp_path = tmp.name
                tmp.write(content)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.chmod(temp_path, 0o600)
            os.rename(temp_path, self.path)
        except OSError:
            if temp_path and os.path.exists(temp_path):
                os.unlink(temp_path)
            logger.error("Could not write token file %s", self.path)
            raise
