"""Tests for the Scene container."""

import pytest
from spherecast.vec3 import Vec3, Point3, Color
from spherecast.ray import Ray
from spherecast.shapes import Sphere
from spherecast.lights import PointLight
from spherecast.scene import Scene


class TestSceneBuilding:
    """Test adding spheres and lights."""

    def test_empty(self):
        scene = Scene()
        assert scene.spheres == []
        assert scene.lights == []
        assert len(scene) == 0

    def test_add_dispatches_on_type(self):
        scene = Scene()
        sphere = Sphere(Point3(0, 0, -5), 1.0)
        light = PointLight(Point3(0, 5, 0), 1.0)
        scene.add(sphere)
        scene.add(light)
        assert scene.spheres == [sphere]
        assert scene.lights == [light]

    def test_add_rejects_other_types(self):
        with pytest.raises(TypeError):
            Scene().add("sphere")

    def test_len_and_iter_cover_spheres_only(self):
        sphere = Sphere(Point3(0, 0, -5), 1.0)
        scene = Scene([sphere], [PointLight(Point3(0, 5, 0)), PointLight(Point3(5, 0, 0))])
        assert len(scene) == 1
        assert list(scene) == [sphere]
        assert len(scene.lights) == 2

    def test_keeps_insertion_order(self):
        spheres = [Sphere(Point3(i, 0, -5), 0.5) for i in range(4)]
        scene = Scene()
        for s in spheres:
            scene.add_sphere(s)
        assert list(scene) == spheres

    def test_constructor_copies_lists(self):
        spheres = [Sphere(Point3(0, 0, -5), 1.0)]
        scene = Scene(spheres=spheres)
        spheres.append(Sphere(Point3(0, 0, -9), 1.0))
        assert len(scene) == 1


class TestNearestHit:
    """Test Scene.nearest_hit()."""

    def test_miss(self):
        scene = Scene([Sphere(Point3(0, 0, -5), 1.0)])
        sphere, t = scene.nearest_hit(Ray(Point3(0, 0, 0), Vec3(0, 0, 1)))
        assert sphere is None
        assert t == float('inf')

    def test_picks_closest(self):
        far = Sphere(Point3(0, 0, -10), 1.0)
        near = Sphere(Point3(0, 0, -5), 1.0)
        scene = Scene([far, near])
        sphere, t = scene.nearest_hit(Ray(Point3(0, 0, 0), Vec3(0, 0, -1)))
        assert sphere is near
        assert abs(t - 4.0) < 1e-9

    def test_tie_goes_to_first(self):
        first = Sphere(Point3(0, 0, -5), 1.0, Color(1, 0, 0))
        second = Sphere(Point3(0, 0, -5), 1.0, Color(0, 1, 0))
        scene = Scene([first, second])
        sphere, _ = scene.nearest_hit(Ray(Point3(0, 0, 0), Vec3(0, 0, -1)))
        assert sphere is first

    def test_returns_scene_object(self):
        scene = Scene([Sphere(Point3(0, 0, -5), 1.0)])
        sphere, _ = scene.nearest_hit(Ray(Point3(0, 0, 0), Vec3(0, 0, -1)))
        assert sphere is scene.spheres[0]


class TestIsOccluded:
    """Test Scene.is_occluded()."""

    def test_clear_path(self):
        scene = Scene([Sphere(Point3(0, 0, -5), 1.0)])
        assert not scene.is_occluded(Ray(Point3(0, 0, 0), Vec3(0, 1, 0)))

    def test_blocked(self):
        scene = Scene([Sphere(Point3(0, 0, -5), 1.0)])
        assert scene.is_occluded(Ray(Point3(0, 0, 0), Vec3(0, 0, -1)))

    def test_any_distance_blocks(self):
        scene = Scene([Sphere(Point3(0, 0, -1000), 1.0)])
        assert scene.is_occluded(Ray(Point3(0, 0, 0), Vec3(0, 0, -1)))
