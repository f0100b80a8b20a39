"""Numerical quadrature rules on reference segment, square and triangle."""

from __future__ import annotations

import numbers
from collections.abc import Callable, Iterable, Sequence
from functools import lru_cache
from itertools import product

Point = tuple[float, float, float]


def _as_point(coords: Iterable[float]) -> Point:
    values = [float(c) for c in coords]
    if not 1 <= len(values) <= 3:
        raise ValueError(f"a point has 1 to 3 coordinates, got {len(values)}")
    values.extend([0.0] * (3 - len(values)))
    return (values[0], values[1], values[2])


def _is_scalar(value: object) -> bool:
    return isinstance(value, numbers.Real)


class Quadrature:
    """Set of integration points with their weights."""

    def __init__(self, points: Iterable[Iterable[float]], weights: Iterable[float]):
        self._points: tuple[Point, ...] = tuple(_as_point(p) for p in points)
        self._weights: tuple[float, ...] = tuple(float(w) for w in weights)
        if len(self._points) != len(self._weights):
            raise ValueError(
                f"{len(self._points)} points do not match {len(self._weights)} weights"
            )

    def size(self) -> int:
        """Number of integration points."""
        return len(self._points)

    def points(self) -> list[Point]:
        """Integration points as (x, y, z) tuples."""
        return list(self._points)

    def weights(self) -> list[float]:
        """Integration weights."""
        return list(self._weights)

    def integrate(
        self, func: Callable[[Point], float | Sequence[float]]
    ) -> float | list[float]:
        """Integrate a scalar or vector valued function of a point."""
        return self.integrate_values([func(p) for p in self._points])

    def integrate_values(
        self, values: Sequence[float] | Sequence[Sequence[float]]
    ) -> float | list[float]:
        """Integrate values given at the integration points.

        Scalar values give a float; per-point sequences give a list with
        one integral for each component.
        """
        if len(values) != len(self._weights):
            raise ValueError(
                f"{len(values)} values do not match {len(self._weights)} integration points"
            )
        if not values or _is_scalar(values[0]):
            return sum(w * float(v) for w, v in zip(self._weights, values))
        n_out = len(values[0])
        ret = [0.0] * n_out
        for w, row in zip(self._weights, values):
            if len(row) != n_out:
                raise ValueError("all vector values should have the same length")
            for j, v in enumerate(row):
                ret[j] += w * float(v)
        return ret


_SEGMENT_RULES: dict[int, tuple[tuple[float, ...], tuple[float, ...]]] = {
    1: ((0.0,), (2.0,)),
    2: (
        (-0.5773502691896257, 0.5773502691896257),
        (1.0, 1.0),
    ),
    3: (
        (-0.7745966692414834, 0.0, 0.7745966692414834),
        (0.5555555555555556, 0.8888888888888888, 0.5555555555555556),
    ),
    4: (
        (-0.8611363115940526, -0.3399810435848563, 0.3399810435848563, 0.8611363115940526),
        (0.3478548451374538, 0.6521451548625461, 0.6521451548625461, 0.3478548451374538),
    ),
    5: (
        (0.0, -0.5384693101056831, 0.5384693101056831, -0.9061798459386640, 0.9061798459386640),
        (0.5688888888888889, 0.4786286704993665, 0.4786286704993665,
         0.2369268850561891, 0.2369268850561891),
    ),
    6: (
        (0.6612093864662645, -0.6612093864662645, -0.2386191860831969,
         0.2386191860831969, -0.9324695142031521, 0.9324695142031521),
        (0.3607615730481386, 0.3607615730481386, 0.4679139345726910,
         0.4679139345726910, 0.1713244923791704, 0.1713244923791704),
    ),
}

_SQUARE_ORDERS = (1, 2, 3, 4)

_TRIANGLE_RULES: dict[int, tuple[tuple[tuple[float, float], ...], tuple[float, ...]]] = {
    1: (((1.0 / 3.0, 1.0 / 3.0),), (0.5,)),
    2: (
        ((1.0 / 6.0, 1.0 / 6.0), (2.0 / 3.0, 1.0 / 6.0), (1.0 / 6.0, 2.0 / 3.0)),
        (1.0 / 6.0, 1.0 / 6.0, 1.0 / 6.0),
    ),
    3: (
        ((1.0 / 3.0, 1.0 / 3.0), (1.0 / 5.0, 1.0 / 5.0),
         (1.0 / 5.0, 3.0 / 5.0), (3.0 / 5.0, 1.0 / 5.0)),
        (-27.0 / 96.0, 25.0 / 96.0, 25.0 / 96.0, 25.0 / 96.0),
    ),
    4: (
        ((0.44594849091597, 0.44594849091597),
         (0.44594849091597, 0.10810301816807),
         (0.10810301816807, 0.44594849091597),
         (0.09157621350977, 0.09157621350977),
         (0.09157621350977, 0.81684757298046),
         (0.81684757298046, 0.09157621350977)),
        (0.22338158967801 / 2.0,) * 3 + (0.10995174365532 / 2.0,) * 3,
    ),
    5: (
        ((0.33333333333333, 0.33333333333333),
         (0.47014206410511, 0.47014206410511),
         (0.47014206410511, 0.05971587178977),
         (0.05971587178977, 0.47014206410511),
         (0.10128650732346, 0.10128650732346),
         (0.10128650732346, 0.79742698535309),
         (0.79742698535309, 0.10128650732346)),
        (0.22500000000000 / 2,)
        + (0.13239415278851 / 2,) * 3
        + (0.12593918054483 / 2,) * 3,
    ),
    6: (
        ((0.24928674517091, 0.24928674517091),
         (0.24928674517091, 0.50142650965818),
         (0.50142650965818, 0.24928674517091),
         (0.06308901449150, 0.06308901449150),
         (0.06308901449150, 0.87382197101700),
         (0.87382197101700, 0.06308901449150),
         (0.31035245103378, 0.63650249912140),
         (0.63650249912140, 0.05314504984482),
         (0.05314504984482, 0.31035245103378),
         (0.63650249912140, 0.31035245103378),
         (0.31035245103378, 0.05314504984482),
         (0.05314504984482, 0.63650249912140)),
        (0.11678627572638 / 2,) * 3
        + (0.05084490637021 / 2,) * 3
        + (0.08285107561837 / 2,) * 6,
    ),
}


def _check_order(kind: str, order: int, available: Iterable[int]) -> None:
    available = tuple(available)
    if order not in available:
        raise ValueError(
            f"no {kind} Gauss quadrature of order {order}; "
            f"available orders are {min(available)}..{max(available)}"
        )


@lru_cache(maxsize=None)
def quadrature_segment_gauss(order: int) -> Quadrature:
    """Gauss rule on the segment [-1, 1] with `order` points (1..6)."""
    _check_order("segment", order, _SEGMENT_RULES)
    xs, ws = _SEGMENT_RULES[order]
    return Quadrature(((x,) for x in xs), ws)


@lru_cache(maxsize=None)
def quadrature_square_gauss(order: int) -> Quadrature:
    """Tensor Gauss rule on the square [-1, 1]^2 (orders 1..4)."""
    _check_order("square", order, _SQUARE_ORDERS)
    segment = quadrature_segment_gauss(order)
    xs = [p[0] for p in segment.points()]
    ws = segment.weights()
    indices = list(product(range(segment.size()), repeat=2))
    return Quadrature(
        [(xs[i], xs[j]) for i, j in indices],
        [ws[i] * ws[j] for i, j in indices],
    )


@lru_cache(maxsize=None)
def quadrature_triangle_gauss(order: int) -> Quadrature:
    """Gauss rule on the unit triangle (0,0), (1,0), (0,1) (orders 1..6)."""
    _check_order("triangle", order, _TRIANGLE_RULES)
    pts, ws = _TRIANGLE_RULES[order]
    return Quadrature(pts, ws)