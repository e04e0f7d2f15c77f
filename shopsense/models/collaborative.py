"""Collaborative filtering recommendation model."""

from typing import Optional, Sequence

import numpy as np
from loguru import logger
from scipy.sparse import csr_matrix

from shopsense.data.schemas import BehaviorEvent, Product
from shopsense.models.base import BaseRecommender


class CollaborativeRecommender(BaseRecommender):
    """
    User-based collaborative filtering over behavior logs.

    Users are compared by Jaccard similarity of the sets of product ids
    they interacted with. Products the target user has not touched are
    scored by the similar users' event weights times their similarity.
    """

    reason = "Users with similar interests also liked this"

    def __init__(self, behavior_log, config=None, name: str = "collaborative", clock=None) -> None:
        super().__init__(behavior_log, config=config, name=name, clock=clock)

    def find_similar_users(
        self,
        user_id: str,
        snapshot: Optional[dict[str, list[BehaviorEvent]]] = None,
    ) -> list[tuple[str, float]]:
        """
        Users most similar to ``user_id``.

        Args:
            user_id: Target user
            snapshot: Behavior log snapshot (default: take one now)

        Returns:
            List of (user_id, similarity) tuples above the similarity
            threshold, most similar first, at most max_similar_users
        """
        if snapshot is None:
            snapshot = self.behavior_log.snapshot()

        if user_id not in snapshot:
            return []

        user_ids = list(snapshot)
        matrix = self._build_user_item_matrix(user_ids, snapshot)
        target_row = user_ids.index(user_id)

        # Jaccard from a binary matrix: |A & B| = A.B, |A | B| = |A| + |B| - |A & B|
        intersections = np.asarray((matrix @ matrix[target_row].T).todense()).ravel()
        sizes = np.asarray(matrix.sum(axis=1)).ravel()
        unions = sizes + sizes[target_row] - intersections
        similarities = np.divide(
            intersections,
            unions,
            out=np.zeros_like(intersections),
            where=unions > 0,
        )

        similar_users = [
            (other_id, float(similarities[row]))
            for row, other_id in enumerate(user_ids)
            if other_id != user_id and similarities[row] > self.config.min_user_similarity
        ]
        similar_users.sort(key=lambda x: x[1], reverse=True)
        return similar_users[: self.config.max_similar_users]

    def score_products(
        self,
        user_id: Optional[str],
        catalog: Sequence[Product],
        n: int = 10,
    ) -> dict[str, float]:
        snapshot = self.behavior_log.snapshot()
        user_items = {event.product_id for event in snapshot.get(user_id, [])}
        similar_users = self.find_similar_users(user_id, snapshot)

        logger.debug(f"Found {len(similar_users)} similar users for {user_id}")

        scores: dict[str, float] = {}
        for other_id, similarity in similar_users:
            for event in snapshot[other_id]:
                if event.product_id not in user_items:
                    scores[event.product_id] = (
                        scores.get(event.product_id, 0) + event.weight * similarity
                    )

        return scores

    def _build_user_item_matrix(
        self,
        user_ids: list[str],
        snapshot: dict[str, list[BehaviorEvent]],
    ) -> csr_matrix:
        """Binary user x product-id interaction matrix."""
        item_ids: dict[str, int] = {}
        rows, cols = [], []

        for row, uid in enumerate(user_ids):
            for product_id in {event.product_id for event in snapshot[uid]}:
                rows.append(row)
                cols.append(item_ids.setdefault(product_id, len(item_ids)))

        return csr_matrix(
            (np.ones(len(rows)), (rows, cols)),
            shape=(len(user_ids), max(len(item_ids), 1)),
        )
