"""Scene aggregation with closest-hit resolution.

A Scene is an ordered collection of Hittable objects and is itself Hittable,
so a whole scene can be tested like a single shape. Objects are tested
linearly; there is no acceleration structure.

Example:
    >>> from weekend_tracer.core.vector import Vector3
    >>> from weekend_tracer.geometry.sphere import Sphere
    >>> from weekend_tracer.scene.scene import Scene
    >>> scene = Scene()
    >>> scene.add(Sphere(Vector3(0.0, 0.0, -1.0), 0.5))
    >>> scene.add(Sphere(Vector3(0.0, -100.5, -1.0), 100.0))
    >>> len(scene)
    2
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from weekend_tracer.core.ray import Ray
from weekend_tracer.geometry.hittable import HitRecord, Hittable


class Scene(Hittable):
    """An ordered collection of hittable objects.

    The scene owns its members. It grows only through add(); there is no
    removal. Build the scene completely before rendering starts; during a
    render it is only read.
    """

    def __init__(self, objects: Iterable[Hittable] | None = None) -> None:
        """Create a scene, empty by default.

        Args:
            objects: Optional initial members, added in order.

        Raises:
            TypeError: If any member is not a Hittable.
        """
        self._objects: list[Hittable] = []
        if objects is not None:
            for obj in objects:
                self.add(obj)

    @property
    def objects(self) -> tuple[Hittable, ...]:
        """The scene members in insertion order."""
        return tuple(self._objects)

    def add(self, obj: Hittable) -> None:
        """Append one object to the scene.

        Args:
            obj: The object to add.

        Raises:
            TypeError: If obj does not implement Hittable.
            ValueError: If obj is this scene or contains it at any depth.
        """
        if not isinstance(obj, Hittable):
            raise TypeError(f"Scene members must be Hittable, got {type(obj).__name__}")
        if obj is self or (isinstance(obj, Scene) and obj.contains(self)):
            raise ValueError("A scene cannot contain itself")
        self._objects.append(obj)

    def contains(self, obj: Hittable) -> bool:
        """Check whether obj is a member of this scene or of a nested scene."""
        pending: list[Scene] = [self]
        seen: set[int] = set()
        while pending:
            scene = pending.pop()
            if id(scene) in seen:
                continue
            seen.add(id(scene))
            for member in scene._objects:
                if member is obj:
                    return True
                if isinstance(member, Scene):
                    pending.append(member)
        return False

    def is_empty(self) -> bool:
        """Check whether the scene has no members."""
        return not self._objects

    def __len__(self) -> int:
        return len(self._objects)

    def __iter__(self) -> Iterator[Hittable]:
        return iter(self._objects)

    def hit(self, ray: Ray, t_min: float, t_max: float, record: HitRecord) -> bool:
        """Find the closest intersection across all members.

        Each member is tested against a window whose upper bound shrinks to
        the closest t accepted so far, so a later member only wins if it is
        strictly closer than every earlier hit.

        Args:
            ray: The ray to test.
            t_min: Exclusive lower bound on accepted t values.
            t_max: Exclusive upper bound on accepted t values.
            record: Output record, overwritten with the closest hit.

        Returns:
            True if at least one member was hit.
        """
        candidate = HitRecord()
        hit_anything = False
        closest_so_far = t_max

        for obj in self._objects:
            if obj.hit(ray, t_min, closest_so_far, candidate):
                hit_anything = True
                closest_so_far = candidate.t
                record.copy_from(candidate)

        return hit_anything

    def __repr__(self) -> str:
        return f"Scene(objects={len(self._objects)})"
