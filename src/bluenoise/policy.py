from dataclasses import dataclass
from numbers import Real
from typing import Callable, Protocol, TypeAlias

from bluenoise.common import Vec2

SeparationFn: TypeAlias = Callable[[Vec2], float]
MaskFn: TypeAlias = Callable[[Vec2], bool]


class SeparationPolicy(Protocol):
    def local_separation(self, p: Vec2) -> float:
        ...

    def is_admissible(self, p: Vec2) -> bool:
        ...


@dataclass(frozen=True)
class ConstantSeparation:
    separation: float

    def local_separation(self, p: Vec2) -> float:
        return self.separation

    def is_admissible(self, p: Vec2) -> bool:
        return True


@dataclass(frozen=True)
class FunctionSeparation:
    """Separation evaluated at each active point, shared by all its children."""
    fn: SeparationFn

    def local_separation(self, p: Vec2) -> float:
        return float(self.fn(p))

    def is_admissible(self, p: Vec2) -> bool:
        return True


@dataclass(frozen=True)
class MaskedSeparation:
    """
    Like FunctionSeparation, with an extra predicate that carves the
    rectangular domain. The mask only sees candidates already inside the
    rectangle.
    """
    fn: SeparationFn
    mask: MaskFn

    def local_separation(self, p: Vec2) -> float:
        return float(self.fn(p))

    def is_admissible(self, p: Vec2) -> bool:
        return bool(self.mask(p))


def as_policy(separation, mask: MaskFn | None = None) -> SeparationPolicy:
    if hasattr(separation, "local_separation") and hasattr(separation, "is_admissible"):
        return separation

    if isinstance(separation, Real):
        if mask is None:
            return ConstantSeparation(float(separation))
        s = float(separation)
        return MaskedSeparation(lambda _: s, mask)

    if callable(separation):
        if mask is None:
            return FunctionSeparation(separation)
        return MaskedSeparation(separation, mask)

    raise TypeError(f"expected a number, a callable or a policy, got {type(separation).__name__}")
