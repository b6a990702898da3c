"""Library of small named groups.

These are the standard representatives used to seed a name registry and
as ready-made inputs for the search and witness operations.
"""

from __future__ import annotations

from itertools import permutations as _perms
from typing import Callable

from cayleyiso.core.errors import InvalidStructureError
from cayleyiso.core.structure import FiniteGroup
from cayleyiso.library.iso_class import IsoClassRegistry, iso_class


def cyclic(n: int) -> FiniteGroup[int]:
    """Z/nZ under addition mod n."""
    if n <= 0:
        raise InvalidStructureError(f"cyclic: order must be a positive integer, got {n}")
    return FiniteGroup(
        elements=range(n),
        op=lambda a, b: (a + b) % n,
        identity=0,
        inverse=lambda a: (-a) % n,
        name=f"C{n}",
    )


def klein_four() -> FiniteGroup[str]:
    """V4 = {e, a, b, c}: every element is its own inverse, the product of
    two distinct non-identity elements is the third."""
    others = {"a", "b", "c"}

    def op(x: str, y: str) -> str:
        if x == "e":
            return y
        if y == "e":
            return x
        if x == y:
            return "e"
        return (others - {x, y}).pop()

    return FiniteGroup(
        elements=["e", "a", "b", "c"],
        op=op,
        identity="e",
        inverse=lambda x: x,
        name="V4",
    )


def dihedral(n: int) -> FiniteGroup[tuple[int, int]]:
    """D_n, symmetries of the regular n-gon, order 2n.

    (k, s) stands for r^k s^s; s r = r^-1 s.
    """
    if n <= 0:
        raise InvalidStructureError(f"dihedral: n must be a positive integer, got {n}")

    def op(x: tuple[int, int], y: tuple[int, int]) -> tuple[int, int]:
        k1, s1 = x
        k2, s2 = y
        k = (k1 - k2) % n if s1 else (k1 + k2) % n
        return (k, s1 ^ s2)

    def inverse(x: tuple[int, int]) -> tuple[int, int]:
        k, s = x
        return (k, 1) if s else ((-k) % n, 0)

    return FiniteGroup(
        elements=[(k, s) for s in (0, 1) for k in range(n)],
        op=op,
        identity=(0, 0),
        inverse=inverse,
        name=f"D{n}",
    )


def symmetric(n: int) -> FiniteGroup[tuple[int, ...]]:
    """S_n, permutations of range(n) under composition (p∘q)(i) = p[q[i]]."""
    if n <= 0:
        raise InvalidStructureError(f"symmetric: n must be a positive integer, got {n}")

    def inverse(p: tuple[int, ...]) -> tuple[int, ...]:
        inv = [0] * n
        for i, pi in enumerate(p):
            inv[pi] = i
        return tuple(inv)

    return FiniteGroup(
        elements=list(_perms(range(n))),
        op=lambda p, q: tuple(p[i] for i in q),
        identity=tuple(range(n)),
        inverse=inverse,
        name=f"S{n}",
    )


def quaternion() -> FiniteGroup[str]:
    """Q8 = {±1, ±i, ±j, ±k}."""
    units = {
        ("1", "1"): (1, "1"), ("1", "i"): (1, "i"), ("1", "j"): (1, "j"), ("1", "k"): (1, "k"),
        ("i", "1"): (1, "i"), ("i", "i"): (-1, "1"), ("i", "j"): (1, "k"), ("i", "k"): (-1, "j"),
        ("j", "1"): (1, "j"), ("j", "i"): (-1, "k"), ("j", "j"): (-1, "1"), ("j", "k"): (1, "i"),
        ("k", "1"): (1, "k"), ("k", "i"): (1, "j"), ("k", "j"): (-1, "i"), ("k", "k"): (-1, "1"),
    }

    def split(x: str) -> tuple[int, str]:
        return (-1, x[1:]) if x.startswith("-") else (1, x)

    def op(x: str, y: str) -> str:
        sx, ux = split(x)
        sy, uy = split(y)
        s, u = units[(ux, uy)]
        return u if sx * sy * s == 1 else f"-{u}"

    def inverse(x: str) -> str:
        s, u = split(x)
        if u == "1":
            return x
        return u if s == -1 else f"-{u}"

    return FiniteGroup(
        elements=["1", "-1", "i", "-i", "j", "-j", "k", "-k"],
        op=op,
        identity="1",
        inverse=inverse,
        name="Q8",
    )


def direct_product(g: FiniteGroup, h: FiniteGroup) -> FiniteGroup[tuple]:
    """G × H with the componentwise operation, pairs in row-major order."""
    return FiniteGroup(
        elements=[(a, b) for a in g.elements for b in h.elements],
        op=lambda x, y: (g.op(x[0], y[0]), h.op(x[1], y[1])),
        identity=(g.identity, h.identity),
        inverse=lambda x: (g.inverse(x[0]), h.inverse(x[1])),
        eq=lambda x, y: g.eq(x[0], y[0]) and h.eq(x[1], y[1]),
        name=f"{g.label}x{h.label}",
    )


KNOWN_STRUCTURES: dict[str, Callable[[], FiniteGroup]] = {
    "C1": lambda: cyclic(1),
    "C2": lambda: cyclic(2),
    "C3": lambda: cyclic(3),
    "C4": lambda: cyclic(4),
    "V4": klein_four,
    "C5": lambda: cyclic(5),
    "C6": lambda: cyclic(6),
    "S3": lambda: symmetric(3),
    "D3": lambda: dihedral(3),
    "C7": lambda: cyclic(7),
    "C8": lambda: cyclic(8),
    "C4xC2": lambda: direct_product(cyclic(4), cyclic(2)),
    "C2xC2xC2": lambda: direct_product(direct_product(cyclic(2), cyclic(2)), cyclic(2)),
    "D4": lambda: dihedral(4),
    "Q8": quaternion,
}

DESCRIPTIONS: dict[str, str] = {
    "C1": "trivial group",
    "V4": "Klein four-group, the non-cyclic group of order 4",
    "S3": "symmetric group on 3 letters, smallest non-abelian group",
    "D3": "dihedral group of the triangle",
    "C4xC2": "abelian group of order 8 with an element of order 4",
    "C2xC2xC2": "elementary abelian group of order 8",
    "D4": "dihedral group of the square",
    "Q8": "quaternion group",
}


def load_all_known() -> list[FiniteGroup]:
    return [factory() for factory in KNOWN_STRUCTURES.values()]


def load_by_name(name: str) -> FiniteGroup | None:
    """Known group by name; also accepts Cn / Dn / Sn patterns not in the table."""
    factory = KNOWN_STRUCTURES.get(name)
    if factory is not None:
        return factory()
    builders = {"C": cyclic, "D": dihedral, "S": symmetric}
    prefix, rest = name[:1].upper(), name[1:]
    if prefix in builders and rest.isdigit() and int(rest) > 0:
        return builders[prefix](int(rest))
    return None


def seed_registry(registry: IsoClassRegistry) -> IsoClassRegistry:
    """Register every known group's canonical key under its name.

    A key already present under another name (S3 and D3 share one) keeps
    its first name.
    """
    for name, factory in KNOWN_STRUCTURES.items():
        cls = iso_class(factory(), name=name)
        if not registry.is_registered(cls.key):
            registry.register(cls.key, name, DESCRIPTIONS.get(name, f"{name}, order {cls.size}"))
    return registry
