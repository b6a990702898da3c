"""Tabulated maps between finite groups, and isomorphism pairs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from cayleyiso.core.errors import UndefinedInverseError
from cayleyiso.core.permutations import inverse_permutation
from cayleyiso.core.structure import FiniteGroup

MapLike = Any  # a FiniteMap or a plain callable on elements


@dataclass(frozen=True, eq=False)
class FiniteMap:
    """A map source -> target stored by index: images[i] is the target
    index of source.elements[i]. Calling it maps elements to elements.
    """

    source: FiniteGroup
    target: FiniteGroup
    images: tuple[int, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "images", tuple(int(i) for i in self.images))
        if len(self.images) != len(self.source):
            raise UndefinedInverseError(
                f"map defines {len(self.images)} images for a carrier of size {len(self.source)}"
            )
        m = len(self.target)
        for i, j in enumerate(self.images):
            if not 0 <= j < m:
                raise UndefinedInverseError(
                    f"image of {self.source.elements[i]!r} is index {j}, outside {self.target.label}"
                )

    @classmethod
    def tabulate(cls, source: FiniteGroup, target: FiniteGroup, f: MapLike) -> FiniteMap:
        """Evaluate `f` once on every source element.

        Raises UndefinedInverseError if some image is not in the target carrier.
        """
        if isinstance(f, FiniteMap):
            if f.source is source and f.target is target:
                return f
            f = f.__call__
        images = []
        for x in source.elements:
            y = f(x)
            j = target.find_index(y)
            if j is None:
                raise UndefinedInverseError(
                    f"map sends {x!r} to {y!r}, which is not an element of {target.label}"
                )
            images.append(j)
        return cls(source, target, tuple(images))

    @classmethod
    def identity(cls, group: FiniteGroup) -> FiniteMap:
        return cls(group, group, tuple(range(len(group))))

    @classmethod
    def from_permutation(cls, source: FiniteGroup, target: FiniteGroup, perm: Sequence[int]) -> FiniteMap:
        return cls(source, target, tuple(perm))

    def __call__(self, x: Any) -> Any:
        return self.target.elements[self.images[self.source.index_of(x)]]

    def compose(self, other: FiniteMap) -> FiniteMap:
        """self∘other: x -> self(other(x))."""
        if other.target is not self.source and other.target.elements != self.source.elements:
            raise UndefinedInverseError("cannot compose maps whose carriers do not line up")
        return FiniteMap(other.source, self.target, tuple(self.images[j] for j in other.images))

    def is_bijective(self) -> bool:
        return len(self.source) == len(self.target) and len(set(self.images)) == len(self.images)

    def same_as(self, other: FiniteMap) -> bool:
        """Pointwise equality."""
        return self.images == other.images

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FiniteMap):
            return NotImplemented
        return self.same_as(other)

    def __hash__(self) -> int:
        return hash(self.images)

    def __repr__(self) -> str:
        return f"FiniteMap({self.source.label} -> {self.target.label}, {list(self.images)})"


@dataclass(frozen=True, eq=False)
class Isomorphism:
    """A verified pair of mutually inverse homomorphisms.

    Two Isomorphism values are equal when their forward maps agree pointwise.
    """

    forward: FiniteMap
    backward: FiniteMap

    @property
    def source(self) -> FiniteGroup:
        return self.forward.source

    @property
    def target(self) -> FiniteGroup:
        return self.forward.target

    @classmethod
    def identity(cls, group: FiniteGroup) -> Isomorphism:
        ident = FiniteMap.identity(group)
        return cls(ident, ident)

    @classmethod
    def from_permutation(cls, source: FiniteGroup, target: FiniteGroup, perm: Sequence[int]) -> Isomorphism:
        return cls(
            FiniteMap(source, target, tuple(perm)),
            FiniteMap(target, source, inverse_permutation(perm)),
        )

    def __call__(self, x: Any) -> Any:
        return self.forward(x)

    def compose(self, other: Isomorphism) -> Isomorphism:
        """self∘other: x -> self(other(x))."""
        return Isomorphism(self.forward.compose(other.forward), other.backward.compose(self.backward))

    def inverse(self) -> Isomorphism:
        return Isomorphism(self.backward, self.forward)

    @property
    def permutation(self) -> tuple[int, ...]:
        return self.forward.images

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Isomorphism):
            return NotImplemented
        return self.forward.same_as(other.forward)

    def __hash__(self) -> int:
        return hash(self.forward.images)

    def __repr__(self) -> str:
        return f"Isomorphism({self.source.label} -> {self.target.label}, {list(self.forward.images)})"

