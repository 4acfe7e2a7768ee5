"""
Filter usage counter.

Counts filter changes in a PreferenceStore so the count survives restarts,
and reports when it reaches the review-prompt threshold.
"""

import logging

from IF_Libs.constants import FILTER_COUNT_KEY, REVIEW_PROMPT_THRESHOLD
from IF_Libs.PrefStoreLib.preference_store import PreferenceStore

logger = logging.getLogger(__name__)


class UsageCounter:
    """
    Persisted counter with a reset-on-threshold rule.

    Example:
        >>> counter = UsageCounter(store)
        >>> if counter.increment():
        ...     ask_for_review()
    """

    def __init__(
        self,
        store: PreferenceStore,
        key: str = FILTER_COUNT_KEY,
        threshold: int = REVIEW_PROMPT_THRESHOLD,
    ):
        if threshold < 1:
            raise ValueError(f"threshold must be >= 1, got {threshold}")

        self.store = store
        self.key = key
        self.threshold = threshold
        self._value = max(0, store.get_int(key, 0))

    @property
    def value(self) -> int:
        return self._value

    def increment(self) -> bool:
        """
        Add one use.

        Returns:
            True when the count reached the threshold; the count is then
            reset to 0 before returning
        """
        self._value += 1
        self.store.set(self.key, self._value)

        if self._value >= self.threshold:
            logger.info(f"Usage counter '{self.key}' reached {self._value}, resetting")
            self.reset()
            return True

        return False

    def reset(self) -> None:
        self._value = 0
        self.store.set(self.key, 0)
