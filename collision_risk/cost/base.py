"""Cost strategy interface and registry.

Every cost term exposes a name, a weight and ``evaluate(trajectory)``, which
appends exactly one cost entry to the trajectory.
"""

from abc import ABC, abstractmethod
from typing import Callable, Dict, Iterable, List, Type
from loguru import logger

from ..core.data_structures import TrajectorySample


class CostStrategy(ABC):
    """Named, weighted cost term evaluated on candidate trajectories.

    Args:
        name: Name under which the cost is recorded on the trajectory
        weight: Factor applied to the raw cost
    """

    def __init__(self, name: str, weight: float):
        self._name = name
        self._weight = float(weight)

    @property
    def name(self) -> str:
        return self._name

    @property
    def weight(self) -> float:
        return self._weight

    @abstractmethod
    def evaluate(self, trajectory: TrajectorySample) -> None:
        """Append this strategy's cost entry to ``trajectory``."""

    def __repr__(self):
        return "<'{}' (weight={}): {}.{} object at {}>".format(
            self._name,
            self._weight,
            self.__class__.__module__,
            self.__class__.__name__,
            hex(id(self))
        )


_REGISTRY: Dict[str, Type[CostStrategy]] = {}


def register_cost_strategy(key: str) -> Callable[[Type[CostStrategy]], Type[CostStrategy]]:
    """Class decorator registering a cost strategy under ``key``."""
    def decorator(cls: Type[CostStrategy]) -> Type[CostStrategy]:
        if key in _REGISTRY and _REGISTRY[key] is not cls:
            raise ValueError(f"Cost strategy '{key}' is already registered")
        _REGISTRY[key] = cls
        return cls
    return decorator


def available_cost_strategies() -> List[str]:
    """Keys of all registered cost strategies."""
    return sorted(_REGISTRY)


def create_cost_strategy(key: str, **kwargs) -> CostStrategy:
    """Instantiate a registered cost strategy.

    Raises:
        KeyError: If no strategy is registered under ``key``
    """
    if key not in _REGISTRY:
        raise KeyError(
            f"Unknown cost strategy '{key}', available: {available_cost_strategies()}"
        )
    return _REGISTRY[key](**kwargs)


def evaluate_trajectories(
    trajectories: Iterable[TrajectorySample],
    strategies: Iterable[CostStrategy]
) -> List[TrajectorySample]:
    """Run every strategy on every trajectory.

    Args:
        trajectories: Candidate trajectories, mutated in place
        strategies: Cost terms to apply

    Returns:
        The evaluated trajectories in input order
    """
    strategies = list(strategies)
    evaluated = []
    for trajectory in trajectories:
        for strategy in strategies:
            strategy.evaluate(trajectory)
        evaluated.append(trajectory)

    logger.debug(
        f"Evaluated {len(evaluated)} trajectories with {len(strategies)} cost strategies"
    )
    return evaluated
