# happydata/services/view_state.py — transient per-view state with stale-response guarding
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional
import itertools
import logging

from happydata.services.dashboard_service import DashboardError

logger = logging.getLogger("happydata.view")


class RequestSequencer:
    """
    Hands out monotonically increasing tokens per view. Only the most recently
    issued token of a view is current; responses for older ones are stale.
    """

    def __init__(self) -> None:
        self._counter = itertools.count(1)
        self._latest: Dict[str, int] = {}

    def issue(self, view: str) -> int:
        token = next(self._counter)
        self._latest[view] = token
        return token

    def is_current(self, view: str, token: int) -> bool:
        return self._latest.get(view) == token


@dataclass
class ViewState:
    payload: Dict[str, Any] = field(default_factory=dict)
    loading: bool = False
    error: Optional[str] = None
    token: int = 0

    @property
    def rows(self) -> List[Dict[str, Any]]:
        return list(self.payload.get("rows") or [])


class ViewController:
    """Holds one ViewState per view name and applies only current responses."""

    def __init__(self, sequencer: Optional[RequestSequencer] = None) -> None:
        self.sequencer = sequencer or RequestSequencer()
        self.states: Dict[str, ViewState] = {}

    def state(self, view: str) -> ViewState:
        return self.states.setdefault(view, ViewState())

    async def load(self, view: str, fetch: Callable[[], Awaitable[Dict[str, Any]]]) -> bool:
        """
        Run `fetch` for `view` and store its payload or error message.
        Returns False when a newer load for the same view was issued meanwhile
        and the result was dropped.
        """
        token = self.sequencer.issue(view)
        st = self.state(view)
        st.loading = True
        st.error = None
        st.token = token

        try:
            payload = await fetch()
        except DashboardError as e:
            if not self.sequencer.is_current(view, token):
                logger.debug("dropping stale error for %s (token %d)", view, token)
                return False
            st.payload = {}
            st.error = e.message
            st.loading = False
            return True

        if not self.sequencer.is_current(view, token):
            logger.debug("dropping stale response for %s (token %d)", view, token)
            return False
        st.payload = payload
        st.loading = False
        return True
