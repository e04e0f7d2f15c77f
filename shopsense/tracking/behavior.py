"""Per-user behavior logs for recommendation signals."""

import threading
from collections import deque
from typing import Any, Callable, Iterator, Optional

import pandas as pd
from loguru import logger

from shopsense.config import RecommenderConfig, current_time_ms
from shopsense.data.schemas import ACTION_WEIGHTS, Action, BehaviorEvent, get_action_weight


class BehaviorLog:
    """
    In-memory store of behavior events keyed by user.

    Each user's log is a bounded deque holding the most recent events
    (oldest evicted first). Appends are serialized and reads return
    copies, so callers always see a consistent snapshot.
    """

    def __init__(self, max_size: int = 1000) -> None:
        """
        Args:
            max_size: Maximum number of events kept per user
        """
        self.max_size = max_size
        self._events: dict[str, deque] = {}
        self._lock = threading.RLock()

    def append(self, user_id: str, event: BehaviorEvent) -> None:
        with self._lock:
            if user_id not in self._events:
                self._events[user_id] = deque(maxlen=self.max_size)
            self._events[user_id].append(event)

    def get_events(self, user_id: str) -> list[BehaviorEvent]:
        """Snapshot of a user's events in arrival order. Unknown users get []."""
        with self._lock:
            return list(self._events.get(user_id, ()))

    def snapshot(self) -> dict[str, list[BehaviorEvent]]:
        """Snapshot of every user's events, users in first-seen order."""
        with self._lock:
            return {user_id: list(events) for user_id, events in self._events.items()}

    def users(self) -> list[str]:
        with self._lock:
            return list(self._events)

    def reset(self, user_id: Optional[str] = None) -> None:
        """Drop one user's events, or everything when user_id is None."""
        with self._lock:
            if user_id is None:
                self._events.clear()
            else:
                self._events.pop(user_id, None)

    def __len__(self) -> int:
        with self._lock:
            return sum(len(events) for events in self._events.values())

    def __iter__(self) -> Iterator[tuple[str, list[BehaviorEvent]]]:
        return iter(self.snapshot().items())


# Behaviors used to demo the engines on an empty log
SAMPLE_BEHAVIORS = [
    ("user1", "purchase", "1"),
    ("user1", "view", "2"),
    ("user1", "cart", "3"),
    ("user2", "purchase", "1"),
    ("user2", "purchase", "4"),
    ("user3", "view", "2"),
    ("user3", "cart", "5"),
]


class BehaviorTracker:
    """
    Records user actions as weighted behavior events.

    Example:
        tracker = BehaviorTracker()
        tracker.track("u1", "purchase", "1")
        tracker.track("u1", "view", "2", {"source": "homepage"})
    """

    def __init__(
        self,
        config: Optional[RecommenderConfig] = None,
        behavior_log: Optional[BehaviorLog] = None,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        """
        Args:
            config: Recommender configuration (log cap)
            behavior_log: Shared log (default: a new one sized from config)
            clock: Returns current time in epoch ms
        """
        self.config = config or RecommenderConfig()
        self.behavior_log = (
            behavior_log
            if behavior_log is not None
            else BehaviorLog(max_size=self.config.max_behaviors_per_user)
        )
        self.clock = clock or current_time_ms

    def track(
        self,
        user_id: str,
        action: str | Action,
        product_id: str | int,
        metadata: Optional[dict[str, Any]] = None,
        timestamp: Optional[int] = None,
    ) -> BehaviorEvent:
        """
        Record a user action.

        Unknown actions are kept with the default weight rather than rejected.

        Args:
            user_id: User identifier (or the anonymous sentinel)
            action: view, search, wishlist, cart, purchase, review, share
            product_id: Product identifier as sent by the client
            metadata: Opaque context stored with the event
            timestamp: Event time in epoch ms (default: now)

        Returns:
            The recorded event
        """
        if isinstance(action, Action):
            action = action.value

        if action not in ACTION_WEIGHTS:
            logger.warning(f"Unknown action '{action}' for user {user_id}, using default weight")

        event = BehaviorEvent(
            action=action,
            product_id=str(product_id),
            timestamp=timestamp if timestamp is not None else self.clock(),
            metadata=metadata or {},
            weight=get_action_weight(action),
        )
        self.behavior_log.append(user_id, event)
        return event

    def replay(self, behaviors_df: pd.DataFrame) -> int:
        """
        Replay a recorded behavior export, in timestamp order.

        Args:
            behaviors_df: DataFrame with user_id, action, product_id, timestamp

        Returns:
            Number of events recorded
        """
        n_events = 0
        for row in behaviors_df.itertuples(index=False):
            self.track(
                str(row.user_id),
                str(row.action),
                str(row.product_id),
                timestamp=int(row.timestamp),
            )
            n_events += 1

        logger.info(f"Replayed {n_events} behaviors")
        return n_events

    def seed_sample_data(self) -> None:
        """Record the demo behaviors."""
        for user_id, action, product_id in SAMPLE_BEHAVIORS:
            self.track(user_id, action, product_id)
        logger.info(f"Seeded {len(SAMPLE_BEHAVIORS)} sample behaviors")
