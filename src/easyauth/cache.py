import threading
from typing import Set, Tuple


class UsedCodes(object):
    """
    In-memory registry of (user identifier, time step) pairs whose code was
    already accepted. Entries live in the process only.
    """

    def __init__(self) -> None:
        self._entries: Set[Tuple[str, int]] = set()
        self._lock = threading.Lock()

    def add(self, user_identifier: str, step: int) -> bool:
        """
        Records a used code.

        :returns: False if the pair was already recorded
        """
        entry = (user_identifier, step)
        with self._lock:
            if entry in self._entries:
                return False
            self._entries.add(entry)
            return True

    def prune(self, oldest_step: int) -> None:
        """Forgets every entry for a step older than ``oldest_step``."""
        with self._lock:
            self._entries = {entry for entry in self._entries if entry[1] >= oldest_step}

    def __contains__(self, entry: object) -> bool:
        with self._lock:
            return entry in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
