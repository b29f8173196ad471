"""Summary statistics of samples and a running covariance accumulator."""

from __future__ import annotations

import math
from collections.abc import Sequence
from numbers import Real

__all__ = ["mean", "variance", "correlation", "Accumulator"]


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean."""
    if not values:
        raise ValueError("mean of an empty sequence")
    return sum(values) / len(values)


def variance(values: Sequence[float]) -> float:
    """Unbiased sample variance."""
    if len(values) < 2:
        raise ValueError("variance needs at least two values")
    m = mean(values)
    return sum((a - m) ** 2 for a in values) / (len(values) - 1)


def correlation(v1: Sequence[float], v2: Sequence[float]) -> float:
    """Pearson's correlation coefficient of two equally long samples."""
    n = len(v1)
    if len(v2) != n:
        raise ValueError("vectors are not the same size")
    m1, m2 = mean(v1), mean(v2)
    total = sum((a - m1) * (b - m2) for a, b in zip(v1, v2))
    return total / ((n - 1) * math.sqrt(variance(v1) * variance(v2)))


class Accumulator:
    """Running sums for the means and covariances of fixed-length samples."""

    def __init__(self, size: int) -> None:
        if size < 1:
            raise ValueError("size must be positive")
        self.size = size
        self.count = 0
        self._sums = [0.0] * size
        self._products = [[0.0] * size for _ in range(size)]

    def add(self, sample: Sequence[float] | float) -> None:
        """Add one sample: a sequence of ``size`` values, or a number when ``size`` is 1."""
        values = [sample] if isinstance(sample, Real) else list(sample)
        if len(values) != self.size:
            raise ValueError("wrong size vector")
        for i, vi in enumerate(values):
            self._sums[i] += vi
            row = self._products[i]
            for j, vj in enumerate(values):
                row[j] += vi * vj
        self.count += 1

    def mean(self) -> float:
        """Mean over all elements of all samples."""
        return sum(self._sums) / self.count / self.size

    def element_mean(self, i: int) -> float:
        """Mean of element ``i``."""
        return self._sums[i] / self.count

    def means(self) -> list[float]:
        """Means of every element."""
        return [s / self.count for s in self._sums]

    def covariance(self, i: int, j: int) -> float:
        """Sample covariance between elements ``i`` and ``j``."""
        return (self._products[i][j] - self._sums[i] * self._sums[j] / self.count) / (
            self.count - 1
        )

    def variances(self) -> list[float]:
        """Sample variance of every element."""
        return [self.covariance(i, i) for i in range(self.size)]

    def average_variance(self) -> float:
        """Mean of the element variances."""
        return sum(self.variances()) / self.size

    def cov_matrix(self) -> list[list[float]]:
        """Full covariance matrix as nested lists."""
        n = self.size
        matrix = [[0.0] * n for _ in range(n)]
        for i in range(n):
            avi = self._sums[i] / self.count
            for j in range(i, n):
                value = (self._products[i][j] - avi * self._sums[j]) / (self.count - 1)
                matrix[i][j] = matrix[j][i] = value
        return matrix

    def cov_matrix_normalized(self) -> list[list[float]]:
        """Covariance matrix scaled by the element standard deviations."""
        var = self.variances()
        matrix = self.cov_matrix()
        return [
            [matrix[i][j] / math.sqrt(var[i] * var[j]) for j in range(self.size)]
            for i in range(self.size)
        ]