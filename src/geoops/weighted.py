from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .errors import DegenerateWeightsError, InvalidParameterError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WeightedTable:
    """
    Walker alias table over indices 0..n-1.

    prob: (n,) probability of keeping the drawn column
    alias: (n,) index returned when the column is not kept
    weights: (n,) normalised input weights, kept for inspection
    """
    prob: np.ndarray
    alias: np.ndarray
    weights: np.ndarray

    def __len__(self) -> int:
        return len(self.prob)

    def sample(self, rng: np.random.Generator) -> int:
        i = int(rng.integers(len(self.prob)))
        if rng.random() < self.prob[i]:
            return i
        return int(self.alias[i])

    def sample_many(self, n: int, rng: np.random.Generator) -> np.ndarray:
        n = int(n)
        if n < 0:
            raise InvalidParameterError("n must be >= 0")
        cols = rng.integers(len(self.prob), size=n)
        keep = rng.random(n) < self.prob[cols]
        return np.where(keep, cols, self.alias[cols]).astype(np.int64)


def build_weighted_table(weights: Sequence[float]) -> WeightedTable:
    """
    Build an alias table in O(n). Weights need not sum to 1.
    Zero weights are allowed and are never drawn; a zero total is not.
    """
    w = np.asarray(weights, dtype=np.float64)
    if w.ndim != 1:
        raise InvalidParameterError("weights must be a 1-D sequence")
    if len(w) == 0:
        raise DegenerateWeightsError("weights are empty")
    if not np.all(np.isfinite(w)) or np.any(w < 0.0):
        raise InvalidParameterError("weights must be finite and non-negative")

    total = float(w.sum())
    if total <= 0.0:
        raise DegenerateWeightsError("weights sum to zero")

    n = len(w)
    p = w / total
    scaled = p * n

    prob = np.zeros(n, dtype=np.float64)
    alias = np.arange(n, dtype=np.int64)

    small = [i for i in range(n) if scaled[i] < 1.0]
    large = [i for i in range(n) if scaled[i] >= 1.0]

    while small and large:
        s = small.pop()
        g = large.pop()
        prob[s] = scaled[s]
        alias[s] = g
        scaled[g] = (scaled[g] + scaled[s]) - 1.0
        if scaled[g] < 1.0:
            small.append(g)
        else:
            large.append(g)

    # leftovers are 1.0 up to rounding
    for i in large + small:
        if p[i] > 0.0:
            prob[i] = 1.0
        else:
            alias[i] = int(np.argmax(p))

    logger.debug("built alias table over %d weights (%d zero)", n, int(np.sum(w == 0.0)))
    return WeightedTable(prob=prob, alias=alias, weights=p)
