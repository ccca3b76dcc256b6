"""
Ray class for representing rays in 3D space.

A ray is defined by an origin point and a direction vector.
Ray(t) = origin + t * direction
"""

from __future__ import annotations
from .vec3 import Vec3, Point3


class Ray:
    """An immutable ray with origin, direction and a parametric domain.

    The parametric form is: P(t) = origin + t * direction, and only
    t in the open interval (t_min, t_max) is considered part of the ray.
    """

    __slots__ = ('origin', 'direction', 't_min', 't_max')

    def __init__(
        self,
        origin: Point3,
        direction: Vec3,
        t_min: float = 0.0,
        t_max: float = float('inf')
    ):
        """Create a ray with given origin and direction.

        Args:
            origin: The starting point of the ray
            direction: The direction vector (need not be unit length)
            t_min: Lower bound of the valid parameter range
            t_max: Upper bound of the valid parameter range
        """
        object.__setattr__(self, 'origin', origin)
        object.__setattr__(self, 'direction', direction)
        object.__setattr__(self, 't_min', t_min)
        object.__setattr__(self, 't_max', t_max)

    def __setattr__(self, name, value):
        raise AttributeError("Ray is immutable")

    def at(self, t: float) -> Point3:
        """Get the point along the ray at parameter t.

        Args:
            t: The parameter value (distance if direction is normalized)

        Returns:
            The point at origin + t * direction
        """
        return self.origin + self.direction * t

    def with_bounds(self, t_min: float, t_max: float) -> Ray:
        """Return a copy of this ray restricted to (t_min, t_max)."""
        return Ray(self.origin, self.direction, t_min, t_max)

    def __repr__(self) -> str:
        return f"Ray(origin={self.origin}, direction={self.direction})"
