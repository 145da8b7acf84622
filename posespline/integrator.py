"""Fixed step numeric integration with Simpson's and the trapezoidal rule."""

from __future__ import annotations

import abc
import enum
from collections.abc import Callable, Iterator
from typing import Any


class IntegrationRule(enum.Enum):
    """Available quadrature rules."""

    SIMPSON = "simpson"
    TRAPEZOIDAL = "trapezoidal"


class FixedStepIntegrator(abc.ABC):
    """Evenly spaced integration points over ``[a, b]`` with per-point weights."""

    def __init__(self, a: float, b: float, n_integration_points: int) -> None:
        if n_integration_points < 2:
            raise ValueError(f"too few integration points given: {n_integration_points}")
        self.a = a
        self.b = b
        self.max_index = n_integration_points - 1
        self.step_size = (b - a) / self.max_index

    @property
    def n_integration_points(self) -> int:
        return self.max_index + 1

    def points(self) -> Iterator[tuple[int, float]]:
        """Yield ``(index, abscissa)`` pairs; the last abscissa is exactly ``b``."""
        for index in range(self.max_index + 1):
            if index == self.max_index:
                yield index, self.b
            else:
                yield index, self.a + self.step_size * index

    def at_bounds(self, index: int) -> bool:
        return index == 0 or index == self.max_index

    @abc.abstractmethod
    def value_factor(self, index: int) -> float:
        """Weight of the integrand value at ``index``."""

    @abc.abstractmethod
    def common_factor(self) -> float:
        """Factor applied to the weighted sum."""


class SimpsonRuleIntegrator(FixedStepIntegrator):
    """Simpson's rule; an even point count is raised to the next odd one."""

    def __init__(self, a: float, b: float, n_integration_points: int) -> None:
        super().__init__(a, b, n_integration_points + 1 - n_integration_points % 2)

    def value_factor(self, index: int) -> float:
        if self.at_bounds(index):
            return 0.5
        return 2.0 if index % 2 == 1 else 1.0

    def common_factor(self) -> float:
        return self.step_size * 2.0 / 3.0


class TrapezoidalRuleIntegrator(FixedStepIntegrator):
    """Composite trapezoidal rule."""

    def value_factor(self, index: int) -> float:
        return 0.5 if self.at_bounds(index) else 1.0

    def common_factor(self) -> float:
        return self.step_size


_INTEGRATORS: dict[IntegrationRule, type[FixedStepIntegrator]] = {
    IntegrationRule.SIMPSON: SimpsonRuleIntegrator,
    IntegrationRule.TRAPEZOIDAL: TrapezoidalRuleIntegrator,
}


def integrate(
    a: float,
    b: float,
    f: Callable[[float], Any],
    number_of_points: int,
    rule: IntegrationRule = IntegrationRule.SIMPSON,
    zero: Any = 0.0,
) -> Any:
    """Integrate ``f`` from ``a`` to ``b``; returns ``zero`` for an empty interval."""
    if a == b:
        return zero
    if number_of_points <= 2:
        raise ValueError(f"too few integration points given: {number_of_points}")
    integrator = _INTEGRATORS[IntegrationRule(rule)](a, b, number_of_points)
    total = None
    for index, x in integrator.points():
        factor = integrator.value_factor(index)
        term = f(x) if factor == 1 else f(x) * factor
        total = term if total is None else total + term
    return total * integrator.common_factor()