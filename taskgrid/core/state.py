"""Page position store shared by table instances across remounts."""

import os
import threading
from typing import Any, Dict, MutableMapping, Optional

import numpy as np

DEFAULT_SESSION_KEY = "taskgrid_pages"

_locks: Dict[str, threading.RLock] = {}
_locks_guard = threading.Lock()


def _lock_for(session_key: str) -> threading.RLock:
    """Process-wide lock shared by every store using the same session key."""
    with _locks_guard:
        if session_key not in _locks:
            _locks[session_key] = threading.RLock()
        return _locks[session_key]


class PageIndexStore:
    """
    Keeps the current page index of each logical list.

    Features:
        - Page positions keyed by list identity ("projects", "tasks-7", ...)
        - Positions survive table re-creation, so closing and reopening a
          view keeps the user's place
        - Independent counters for different list identities
        - Streamlit session_state integration (one store per browser session)

    Create a store per script run and pass it to every table that should
    remember its page. A table never owns its page index. Stores built
    with the same session key share one lock, so re-creating the store on
    each rerun is safe.
    """

    def __init__(
        self,
        session_key: Optional[str] = None,
        backend: Optional[MutableMapping[str, Any]] = None,
    ):
        """
        Initialize the PageIndexStore.

        Args:
            session_key: Key under which the store keeps its state. Defaults to
                the TASKGRID_SESSION_KEY environment variable, or
                "taskgrid_pages". Use different keys for independent stores.
            backend: Mapping holding the state. If None, Streamlit's
                session_state is used.
        """
        if session_key is None:
            session_key = os.environ.get("TASKGRID_SESSION_KEY", DEFAULT_SESSION_KEY)
        self._session_key = session_key
        self._backend = backend
        self._lock = _lock_for(session_key)
        self._ensure_state()

    def _get_backend(self) -> MutableMapping[str, Any]:
        if self._backend is not None:
            return self._backend

        import streamlit as st

        return st.session_state

    def _ensure_state(self) -> None:
        """Ensure the state dict exists in the backend."""
        with self._lock:
            backend = self._get_backend()
            if self._session_key not in backend:
                backend[self._session_key] = {
                    "counter": 0,
                    "id": float(np.random.random()),
                    "pages": {},
                }

    @property
    def _state(self) -> Dict[str, Any]:
        """Get the internal state dict from the backend."""
        self._ensure_state()
        return self._get_backend()[self._session_key]

    @property
    def session_key(self) -> str:
        return self._session_key

    @property
    def session_id(self) -> float:
        """Get the unique session ID."""
        return self._state["id"]

    @property
    def counter(self) -> int:
        """Get the number of page changes recorded so far."""
        return self._state["counter"]

    def get_page_index(self, list_id: str) -> int:
        """
        Get the stored page index for a list.

        Args:
            list_id: Logical list identity

        Returns:
            The stored page index, or 0 for lists never paged
        """
        with self._lock:
            return self._state["pages"].get(list_id, 0)

    def set_page_index(self, list_id: str, index: int) -> bool:
        """
        Store the page index for a list.

        Args:
            list_id: Logical list identity
            index: Zero-based page index

        Returns:
            True if the value changed, False otherwise

        Raises:
            ValueError: If index is negative
        """
        if index < 0:
            raise ValueError(f"Page index must be >= 0, got {index}")

        with self._lock:
            pages = self._state["pages"]
            if list_id in pages and pages[list_id] == index:
                return False

            pages[list_id] = int(index)
            self._state["counter"] += 1
            return True

    def reset(self, list_id: str) -> bool:
        """
        Forget the page position of one list.

        Args:
            list_id: Logical list identity

        Returns:
            True if a position was removed, False if none was stored
        """
        with self._lock:
            if list_id in self._state["pages"]:
                del self._state["pages"][list_id]
                self._state["counter"] += 1
                return True
            return False

    def get_all(self) -> Dict[str, int]:
        """Return a copy of all stored page positions."""
        with self._lock:
            return self._state["pages"].copy()

    def clear(self) -> None:
        """Drop all page positions and reset the counter (session end)."""
        with self._lock:
            self._state["pages"] = {}
            self._state["counter"] = 0

    def __repr__(self) -> str:
        return (
            f"PageIndexStore(session_key='{self._session_key}', "
            f"counter={self.counter}, "
            f"pages={self.get_all()})"
        )
