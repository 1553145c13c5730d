"""
Vector3 class for 3D math operations.

This is the fundamental building block of the path tracer, used for:
- Points in 3D space
- Direction vectors
- RGB colour values

Random sampling helpers take an explicit ``numpy.random.Generator`` so that
each render worker can own an independently seeded stream.
"""

from __future__ import annotations
import math
from typing import Union
import numpy as np


class Vector3:
    """An immutable 3D vector.

    Components are stored as plain floats; use ``from_array`` / ``to_array``
    to move between vectors and numpy arrays.
    """

    __slots__ = ('x', 'y', 'z')

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0):
        object.__setattr__(self, 'x', float(x))
        object.__setattr__(self, 'y', float(y))
        object.__setattr__(self, 'z', float(z))

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self):
        return (Vector3, (self.x, self.y, self.z))

    @classmethod
    def from_array(cls, arr: np.ndarray) -> Vector3:
        """Create a Vector3 from a length-3 numpy array."""
        return cls(float(arr[0]), float(arr[1]), float(arr[2]))

    # Aliases for colour operations
    @property
    def r(self) -> float:
        return self.x

    @property
    def g(self) -> float:
        return self.y

    @property
    def b(self) -> float:
        return self.z

    def __repr__(self) -> str:
        return f"Vector3({self.x:.4f}, {self.y:.4f}, {self.z:.4f})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector3):
            return NotImplemented
        return (
            math.isclose(self.x, other.x, rel_tol=1e-9, abs_tol=1e-12)
            and math.isclose(self.y, other.y, rel_tol=1e-9, abs_tol=1e-12)
            and math.isclose(self.z, other.z, rel_tol=1e-9, abs_tol=1e-12)
        )

    __hash__ = None

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def __getitem__(self, index: int) -> float:
        return (self.x, self.y, self.z)[index]

    def __neg__(self) -> Vector3:
        return Vector3(-self.x, -self.y, -self.z)

    def __add__(self, other: Union[Vector3, float]) -> Vector3:
        if isinstance(other, Vector3):
            return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)
        return Vector3(self.x + other, self.y + other, self.z + other)

    __radd__ = __add__

    def __sub__(self, other: Union[Vector3, float]) -> Vector3:
        if isinstance(other, Vector3):
            return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)
        return Vector3(self.x - other, self.y - other, self.z - other)

    def __rsub__(self, other: float) -> Vector3:
        return Vector3(other - self.x, other - self.y, other - self.z)

    def __mul__(self, other: Union[Vector3, float]) -> Vector3:
        if isinstance(other, Vector3):
            return Vector3(self.x * other.x, self.y * other.y, self.z * other.z)
        return Vector3(self.x * other, self.y * other, self.z * other)

    __rmul__ = __mul__

    def __truediv__(self, other: float) -> Vector3:
        inv = 1.0 / other
        return Vector3(self.x * inv, self.y * inv, self.z * inv)

    def length(self) -> float:
        """Return the magnitude (length) of the vector."""
        return math.sqrt(self.length_squared())

    def length_squared(self) -> float:
        """Return the squared magnitude (avoids sqrt for comparisons)."""
        return self.x * self.x + self.y * self.y + self.z * self.z

    def unit(self) -> Vector3:
        """Return a unit vector in the same direction.

        Raises:
            ZeroDivisionError: if the vector has zero length
        """
        length = self.length()
        if length == 0.0:
            raise ZeroDivisionError("cannot normalize a zero-length vector")
        return self / length

    def near_zero(self, epsilon: float = 1e-8) -> bool:
        """Check if vector is close to zero in all dimensions."""
        return abs(self.x) < epsilon and abs(self.y) < epsilon and abs(self.z) < epsilon

    def to_array(self) -> np.ndarray:
        """Return the components as a new numpy array."""
        return np.array([self.x, self.y, self.z], dtype=np.float64)


# Convenience type aliases
Point3 = Vector3
Colour = Vector3


def dot_product(a: Vector3, b: Vector3) -> float:
    return a.x * b.x + a.y * b.y + a.z * b.z


def cross_product(a: Vector3, b: Vector3) -> Vector3:
    return Vector3(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )


def reflect(v: Vector3, n: Vector3) -> Vector3:
    """Reflect ``v`` about the unit normal ``n``."""
    return v - n * (2.0 * dot_product(v, n))


def refract(uv: Vector3, n: Vector3, etai_over_etat: float) -> Vector3:
    """Refract the unit vector ``uv`` through a surface with unit normal ``n``.

    Args:
        uv: Incoming unit direction
        n: Surface normal facing the incoming ray
        etai_over_etat: Ratio of refractive indices (n1/n2)

    Returns:
        The refracted direction (Snell's law, split into the components
        perpendicular and parallel to the normal)
    """
    cos_theta = min(dot_product(-uv, n), 1.0)
    r_out_perp = (uv + n * cos_theta) * etai_over_etat
    r_out_parallel = n * -math.sqrt(abs(1.0 - r_out_perp.length_squared()))
    return r_out_perp + r_out_parallel


def random_vector(rng: np.random.Generator, min_val: float = 0.0, max_val: float = 1.0) -> Vector3:
    """Generate a random vector with components in [min_val, max_val)."""
    x, y, z = rng.uniform(min_val, max_val, 3)
    return Vector3(x, y, z)


def random_in_unit_sphere(rng: np.random.Generator) -> Vector3:
    """Generate a random point inside the unit sphere."""
    while True:
        p = random_vector(rng, -1.0, 1.0)
        if p.length_squared() < 1.0:
            return p


def random_unit_vector(rng: np.random.Generator) -> Vector3:
    """Generate a random unit vector (uniform on sphere surface)."""
    while True:
        p = random_in_unit_sphere(rng)
        # Points too close to the origin cannot be normalized reliably
        if p.length_squared() > 1e-160:
            return p.unit()


def random_in_unit_disk(rng: np.random.Generator) -> Vector3:
    """Generate a random point inside the unit disk (z=0)."""
    while True:
        x, y = rng.uniform(-1.0, 1.0, 2)
        p = Vector3(x, y, 0.0)
        if p.length_squared() < 1.0:
            return p


def random_on_hemisphere(rng: np.random.Generator, normal: Vector3) -> Vector3:
    """Generate a random unit vector in the hemisphere around ``normal``."""
    on_unit_sphere = random_unit_vector(rng)
    if dot_product(on_unit_sphere, normal) > 0.0:
        return on_unit_sphere
    return -on_unit_sphere
