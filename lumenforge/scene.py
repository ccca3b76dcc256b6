"""
Scene aggregate and stock scenes.

A scene is an immutable collection of hittables queried as a single
unit. It is built once before rendering and only read afterwards, so any
number of render workers may share it without locking.
"""

from __future__ import annotations
from typing import Iterable, Iterator, Optional

import numpy as np

from .vec3 import Vec3, Point3, Color
from .ray import Ray
from .shapes import Hittable, HitRecord, Sphere
from .materials import Lambertian, Metal, Dielectric


class HittableList(Hittable):
    """An immutable collection of hittable objects."""

    def __init__(self, objects: Optional[Iterable[Hittable]] = None):
        self._objects: tuple[Hittable, ...] = tuple(objects) if objects is not None else ()

    @property
    def objects(self) -> tuple[Hittable, ...]:
        return self._objects

    def add(self, *objs: Hittable) -> HittableList:
        """Return a new list with the given objects appended."""
        return HittableList(self._objects + objs)

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        """Find the closest intersection among all objects.

        Each accepted hit shrinks the search range, so later objects only
        win when they are strictly closer.
        """
        closest_hit: Optional[HitRecord] = None
        closest_t = t_max

        for obj in self._objects:
            hit_record = obj.hit(ray, t_min, closest_t)
            if hit_record is not None:
                closest_hit = hit_record
                closest_t = hit_record.t

        return closest_hit

    def __len__(self) -> int:
        return len(self._objects)

    def __iter__(self) -> Iterator[Hittable]:
        return iter(self._objects)

    def __repr__(self) -> str:
        return f"HittableList({len(self._objects)} objects)"


Scene = HittableList


def single_sphere_scene() -> Scene:
    """One diffuse sphere in front of a camera at the origin looking down -z."""
    return Scene([Sphere(Point3(0, 0, -1), 0.5, Lambertian(Color(0.5, 0.5, 0.5)))])


def demo_scene() -> Scene:
    """Ground plus a diffuse, a hollow glass and a fuzzy metal sphere."""
    ground = Lambertian(Color(0.8, 0.8, 0.0))
    center = Lambertian(Color(0.1, 0.2, 0.5))
    glass = Dielectric(1.5)
    metal = Metal(Color(0.8, 0.6, 0.2), 0.0)

    return Scene([
        Sphere(Point3(0, -100.5, -1), 100, ground),
        Sphere(Point3(0, 0, -1), 0.5, center),
        Sphere(Point3(-1, 0, -1), 0.5, glass),
        # Air bubble inside the glass sphere
        Sphere(Point3(-1, 0, -1), 0.4, Dielectric(1.0 / 1.5)),
        Sphere(Point3(1, 0, -1), 0.5, metal),
    ])


def random_scene(rng: np.random.Generator) -> Scene:
    """The classic field of small random spheres around three large ones.

    Args:
        rng: Generator used for placement and material choice, so a
            seeded generator always yields the same scene
    """
    objects: list[Hittable] = [
        Sphere(Point3(0, -1000, 0), 1000, Lambertian(Color(0.5, 0.5, 0.5)))
    ]

    glass = Dielectric(1.5)
    clearing = Point3(4, 0.2, 0)

    for a in range(-11, 11):
        for b in range(-11, 11):
            choose_mat = rng.random()
            center = Point3(a + 0.9 * rng.random(), 0.2, b + 0.9 * rng.random())

            if (center - clearing).length() <= 0.9:
                continue

            if choose_mat < 0.8:
                albedo = Vec3.random(rng) * Vec3.random(rng)
                material = Lambertian(albedo)
            elif choose_mat < 0.95:
                albedo = Vec3.random(rng, 0.5, 1)
                material = Metal(albedo, rng.uniform(0, 0.5))
            else:
                material = glass
            objects.append(Sphere(center, 0.2, material))

    objects.append(Sphere(Point3(0, 1, 0), 1.0, glass))
    objects.append(Sphere(Point3(-4, 1, 0), 1.0, Lambertian(Color(0.4, 0.2, 0.1))))
    objects.append(Sphere(Point3(4, 1, 0), 1.0, Metal(Color(0.7, 0.6, 0.5), 0.0)))

    return Scene(objects)
