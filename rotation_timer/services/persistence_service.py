"""
Persistence service for the Rotation Timer application.

This module handles saving and loading the roster names and the set of
excluded player ids. Stores never raise to their callers: unreadable data
falls back to the default roster and failed writes are logged.
"""
import json
import logging
import os
from typing import Dict, Iterable, List, Optional, Protocol, Set

from ..utils import DEFAULT_PLAYER_NAMES

logger = logging.getLogger(__name__)


class RosterStoreError(Exception):
    """Raised when persisted roster data cannot be read or written."""
    pass


class RosterStore(Protocol):
    """Key-value persistence the session calls after roster mutations."""

    def load_names(self) -> List[str]:
        """Load the ordered list of player names."""
        ...

    def save_names(self, names: List[str]) -> None:
        """Persist the ordered list of player names."""
        ...

    def load_excluded_ids(self) -> Optional[Set[int]]:
        """Load excluded player ids, or None when nothing was persisted."""
        ...

    def save_excluded_ids(self, ids: Iterable[int]) -> None:
        """Persist the excluded player ids."""
        ...


def default_names() -> List[str]:
    """Return a fresh copy of the default roster names."""
    return list(DEFAULT_PLAYER_NAMES)


def _clean_names(raw) -> List[str]:
    if not isinstance(raw, list) or not raw:
        raise RosterStoreError("names must be a non-empty list")
    if not all(isinstance(name, str) for name in raw):
        raise RosterStoreError("names must be strings")
    return list(raw)


def _clean_ids(raw) -> Set[int]:
    if not isinstance(raw, list):
        raise RosterStoreError("excluded ids must be a list")
    ids = set()
    for value in raw:
        if isinstance(value, bool) or not isinstance(value, int):
            raise RosterStoreError(f"invalid player id: {value!r}")
        ids.add(value)
    return ids


class MemoryRosterStore:
    """
    In-memory roster store.

    Used by tests and as the default when no data file is configured.
    """

    def __init__(
        self,
        names: Optional[List[str]] = None,
        excluded_ids: Optional[Iterable[int]] = None,
    ):
        self._names = list(names) if names is not None else None
        self._excluded_ids = set(excluded_ids) if excluded_ids is not None else None

    def load_names(self) -> List[str]:
        if not self._names:
            return default_names()
        return list(self._names)

    def save_names(self, names: List[str]) -> None:
        self._names = list(names)

    def load_excluded_ids(self) -> Optional[Set[int]]:
        if self._excluded_ids is None:
            return None
        return set(self._excluded_ids)

    def save_excluded_ids(self, ids: Iterable[int]) -> None:
        self._excluded_ids = set(ids)


class JsonRosterStore:
    """
    Roster store backed by a single JSON file.

    File layout::

        {"names": ["Alfie", ...], "excluded_ids": [10]}
    """

    def __init__(self, file_path: str):
        """
        Initialize the store.

        Args:
            file_path: Path of the JSON file (created on first save)
        """
        self.file_path = file_path

    def load_names(self) -> List[str]:
        """
        Load roster names, falling back to the default roster.

        Returns:
            Ordered list of player names
        """
        try:
            return _clean_names(self._read().get("names"))
        except RosterStoreError as e:
            logger.debug("Using default roster names: %s", e)
            return default_names()

    def save_names(self, names: List[str]) -> None:
        self._update({"names": list(names)})

    def load_excluded_ids(self) -> Optional[Set[int]]:
        """
        Load excluded player ids.

        Returns:
            Set of ids, or None when the file holds no (valid) exclusions
        """
        try:
            data = self._read()
            if "excluded_ids" not in data:
                return None
            return _clean_ids(data["excluded_ids"])
        except RosterStoreError as e:
            logger.debug("Ignoring persisted exclusions: %s", e)
            return None

    def save_excluded_ids(self, ids: Iterable[int]) -> None:
        self._update({"excluded_ids": sorted(ids)})

    # ---------- Internal helpers ---------- #

    def _read(self) -> Dict:
        if not os.path.exists(self.file_path):
            raise RosterStoreError(f"Roster file not found: {self.file_path}")
        try:
            with open(self.file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise RosterStoreError(f"Unreadable roster file {self.file_path}: {e}") from e
        if not isinstance(data, dict):
            raise RosterStoreError("Roster file must contain a JSON object")
        return data

    def _update(self, changes: Dict) -> None:
        """Merge changes into the file; failures are logged, never raised."""
        try:
            try:
                data = self._read()
            except RosterStoreError:
                data = {}
            data.update(changes)

            directory = os.path.dirname(self.file_path)
            if directory and not os.path.exists(directory):
                os.makedirs(directory)

            with open(self.file_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
        except (OSError, TypeError, ValueError) as e:
            logger.warning("Could not save roster data to %s: %s", self.file_path, e)
