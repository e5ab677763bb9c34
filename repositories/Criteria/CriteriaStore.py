from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, List, Tuple

from repositories.Contracts.CriteriaInterface import CriteriaInterface, criteria_key_for, is_criteria


class CriteriaStore:
    """
    Criteria lifecycle and application state for a single repository.

    Holds two ordered collections:

    - persistent criteria, applied to every query until removed
    - transient criteria, applied to the next query only

    together with the flags deciding whether they apply:

    - ``disabled``: persistent toggle set by ``disable()``
    - ``skip``: one-shot, bypasses every criterion on the next query
    - ``force_use``: one-shot, applies persistent criteria on the next query
      even while disabled

    Invalid criteria and non-matching removals are silently ignored.
    """

    def __init__(self) -> None:
        self.logger = logging.getLogger(self.__class__.__name__)
        self._persistent: List[CriteriaInterface] = []
        self._transient: List[CriteriaInterface] = []
        self._disabled = False
        self._skip = False
        self._force_use = False

    @property
    def persistent_criteria(self) -> Tuple[CriteriaInterface, ...]:
        return tuple(self._persistent)

    @property
    def transient_criteria(self) -> Tuple[CriteriaInterface, ...]:
        return tuple(self._transient)

    @property
    def is_disabled(self) -> bool:
        return self._disabled

    @property
    def is_skipped(self) -> bool:
        return self._skip

    @property
    def is_forced(self) -> bool:
        return self._force_use

    def with_criteria(self, criteria: Any) -> 'CriteriaStore':
        """Replace the transient criteria and force criteria on for the next query."""
        self._transient = self._sanitize(criteria)
        self.use()
        self.logger.debug(f"Set {len(self._transient)} transient criteria")
        return self

    def push(self, criteria: Any) -> 'CriteriaStore':
        """Append criteria to the persistent collection."""
        sanitized = self._sanitize(criteria)
        self._persistent.extend(sanitized)
        self.logger.debug(f"Pushed {len(sanitized)} persistent criteria")
        return self

    def remove(self, criteria: Any) -> 'CriteriaStore':
        """Remove matching criteria from both the persistent and transient collections."""
        requests = self._normalize(criteria)

        self._persistent = [c for c in self._persistent if not self._matches_removal_request(c, requests)]
        self._transient = [c for c in self._transient if not self._matches_removal_request(c, requests)]

        return self

    def all(self) -> Tuple[CriteriaInterface, ...]:
        """Get the persistent criteria followed by the transient criteria."""
        return tuple(self._persistent) + tuple(self._transient)

    def enable(self) -> 'CriteriaStore':
        self._disabled = False
        return self

    def disable(self) -> 'CriteriaStore':
        self._disabled = True
        return self

    def use(self) -> 'CriteriaStore':
        """Apply criteria on the next query even when disabled."""
        self._skip = False
        self._force_use = True
        return self

    def skip(self) -> 'CriteriaStore':
        """Bypass all criteria on the next query."""
        self._skip = True
        return self

    def reset(self) -> 'CriteriaStore':
        """Clear both collections, leaving the flags untouched."""
        self._persistent = []
        self._transient = []
        return self

    def reset_transient(self) -> 'CriteriaStore':
        self._transient = []
        return self

    def apply(self, apply_criterion: Callable[[CriteriaInterface], None]) -> None:
        """
        Run one application cycle, passing each active criterion to the callback.

        Skip wins over everything: the transient criteria are discarded
        unapplied. Otherwise transient criteria run first and are cleared, then
        persistent criteria run unless disabled without a forced use. The
        forced use only ever lasts one cycle.
        """
        if self._skip:
            self.logger.debug("Skipping criteria for this query")
            self._skip = False
            self._force_use = False
            self.reset_transient()
            return

        if self._transient:
            for criterion in self._transient:
                apply_criterion(criterion)
            self.reset_transient()

        if (self._force_use or not self._disabled) and self._persistent:
            for criterion in self._persistent:
                apply_criterion(criterion)

        self._force_use = False

    def _sanitize(self, criteria: Any) -> List[CriteriaInterface]:
        return [criterion for criterion in self._normalize(criteria) if is_criteria(criterion)]

    def _normalize(self, criteria: Any) -> List[Any]:
        if isinstance(criteria, (list, tuple, set, frozenset)):
            return list(criteria)
        if isinstance(criteria, Iterable) and not isinstance(criteria, (str, bytes)) and not is_criteria(criteria):
            return list(criteria)
        return [criteria]

    def _matches_removal_request(self, stored: Any, requests: List[Any]) -> bool:
        """Determine whether a stored criterion matches any of the removal requests."""
        if not is_criteria(stored):
            return False

        for request in requests:
            if isinstance(request, str):
                if criteria_key_for(stored) == request:
                    return True
            elif isinstance(request, type):
                if type(stored) is request:
                    return True
            elif is_criteria(request) and isinstance(stored, type(request)):
                return True

        return False
