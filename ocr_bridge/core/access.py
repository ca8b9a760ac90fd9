"""Scoped file access grants for sandboxed desktop hosts."""

import logging
import os
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator, Optional

logger = logging.getLogger(__name__)


class FileAccessGrant(ABC):
    """Access grant that must be begun and ended around a file read."""

    def __init__(self, path: str):
        self.path = path

    @abstractmethod
    def begin_access(self) -> bool:
        """Acquire access to the file.

        Returns:
            True if access was acquired and must later be ended
        """
        pass

    @abstractmethod
    def end_access(self) -> None:
        """Release access acquired by :meth:`begin_access`."""
        pass


class NullGrant(FileAccessGrant):
    """Grant for hosts without a sandbox; nothing to acquire."""

    def begin_access(self) -> bool:
        return False

    def end_access(self) -> None:
        pass


class DescriptorGrant(FileAccessGrant):
    """Stands in for a security-scoped grant on hosts without a sandbox API.

    Access succeeds only if the file can be opened read-only; the descriptor
    is held until access ends but engines still read the image by path.
    """

    def __init__(self, path: str):
        super().__init__(path)
        self._fd: Optional[int] = None

    @property
    def active(self) -> bool:
        return self._fd is not None

    def begin_access(self) -> bool:
        if self._fd is not None:
            return True
        try:
            self._fd = os.open(self.path, os.O_RDONLY)
        except OSError as e:
            logger.warning(f"Could not acquire access to {self.path}: {e}")
            return False
        return True

    def end_access(self) -> None:
        if self._fd is None:
            return
        fd, self._fd = self._fd, None
        os.close(fd)


@contextmanager
def scoped_access(grant: FileAccessGrant) -> Iterator[bool]:
    """Hold ``grant`` for the duration of the ``with`` block.

    Access is ended on every exit path, but only if it was acquired.

    Args:
        grant: Grant to acquire

    Yields:
        Whether access was acquired
    """
    did_access = grant.begin_access()
    try:
        yield did_access
    finally:
        if did_access:
            grant.end_access()
