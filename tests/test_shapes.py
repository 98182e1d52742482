"""Unit tests for planes, cubes, cylinders, cones and groups.

Tests cover:
- Local intersection and normals for each primitive
- Truncated and capped cylinders and cones
- Group intersection, nested transforms and parent links
- Construction errors and pickling
"""

import math
import pickle

import numpy as np
import pytest


def _ray(origin, direction, normalize_direction=False):
    from src.whitted.core.ray import Ray
    from src.whitted.core.tuples import normalize, point, vector

    d = vector(*direction)
    if normalize_direction:
        d = normalize(d)
    return Ray(point(*origin), d)


class TestPlane:
    """Tests for the xz-plane."""

    def test_normal_is_constant(self):
        """Test the plane normal is +y everywhere."""
        from src.whitted.core.tuples import approx_equal, point, vector
        from src.whitted.geometry.shape import local_normal_at, plane

        p = plane()
        for pt in [(0, 0, 0), (10, 0, -10), (-5, 0, 150)]:
            assert approx_equal(local_normal_at(p, point(*pt)), vector(0, 1, 0))

    def test_parallel_ray_misses(self):
        """Test a ray parallel to the plane."""
        from src.whitted.geometry.shape import local_intersect, plane

        assert local_intersect(plane(), _ray((0, 10, 0), (0, 0, 1))) == []

    def test_coplanar_ray_misses(self):
        """Test a ray lying in the plane."""
        from src.whitted.geometry.shape import local_intersect, plane

        assert local_intersect(plane(), _ray((0, 0, 0), (0, 0, 1))) == []

    @pytest.mark.parametrize("origin, direction", [((0, 1, 0), (0, -1, 0)), ((0, -1, 0), (0, 1, 0))])
    def test_ray_from_either_side(self, origin, direction):
        """Test rays from above and below hit at t=1."""
        from src.whitted.geometry.shape import intersect, plane

        p = plane()
        xs = intersect(p, _ray(origin, direction))
        assert len(xs) == 1
        assert xs[0].t == pytest.approx(1.0)
        assert xs[0].shape is p


class TestCube:
    """Tests for the axis-aligned cube."""

    @pytest.mark.parametrize(
        "origin, direction, t1, t2",
        [
            ((5, 0.5, 0), (-1, 0, 0), 4, 6),
            ((-5, 0.5, 0), (1, 0, 0), 4, 6),
            ((0.5, 5, 0), (0, -1, 0), 4, 6),
            ((0.5, -5, 0), (0, 1, 0), 4, 6),
            ((0.5, 0, 5), (0, 0, -1), 4, 6),
            ((0.5, 0, -5), (0, 0, 1), 4, 6),
            ((0, 0.5, 0), (0, 0, 1), -1, 1),
        ],
    )
    def test_ray_hits_cube(self, origin, direction, t1, t2):
        """Test rays hitting each face and from inside."""
        from src.whitted.geometry.shape import cube, local_intersect

        xs = local_intersect(cube(), _ray(origin, direction))
        assert xs == pytest.approx([t1, t2])

    @pytest.mark.parametrize(
        "origin, direction",
        [
            ((-2, 0, 0), (0.2673, 0.5345, 0.8018)),
            ((0, -2, 0), (0.8018, 0.2673, 0.5345)),
            ((0, 0, -2), (0.5345, 0.8018, 0.2673)),
            ((2, 0, 2), (0, 0, -1)),
            ((0, 2, 2), (0, -1, 0)),
            ((2, 2, 0), (-1, 0, 0)),
        ],
    )
    def test_ray_misses_cube(self, origin, direction):
        """Test rays missing the cube."""
        from src.whitted.geometry.shape import cube, local_intersect

        assert local_intersect(cube(), _ray(origin, direction)) == []

    @pytest.mark.parametrize(
        "p, n",
        [
            ((1, 0.5, -0.8), (1, 0, 0)),
            ((-1, -0.2, 0.9), (-1, 0, 0)),
            ((-0.4, 1, -0.1), (0, 1, 0)),
            ((0.3, -1, -0.7), (0, -1, 0)),
            ((-0.6, 0.3, 1), (0, 0, 1)),
            ((0.4, 0.4, -1), (0, 0, -1)),
            ((1, 1, 1), (1, 0, 0)),
            ((-1, -1, -1), (-1, 0, 0)),
        ],
    )
    def test_normal_on_faces(self, p, n):
        """Test normals on each face and at corners."""
        from src.whitted.core.tuples import approx_equal, point, vector
        from src.whitted.geometry.shape import cube, local_normal_at

        assert approx_equal(local_normal_at(cube(), point(*p)), vector(*n))


class TestCylinder:
    """Tests for cylinders."""

    @pytest.mark.parametrize(
        "origin, direction",
        [((1, 0, 0), (0, 1, 0)), ((0, 0, 0), (0, 1, 0)), ((0, 0, -5), (1, 1, 1))],
    )
    def test_ray_misses(self, origin, direction):
        """Test rays missing an infinite cylinder."""
        from src.whitted.geometry.shape import cylinder, local_intersect

        assert local_intersect(cylinder(), _ray(origin, direction, True)) == []

    @pytest.mark.parametrize(
        "origin, direction, t0, t1",
        [
            ((1, 0, -5), (0, 0, 1), 5, 5),
            ((0, 0, -5), (0, 0, 1), 4, 6),
            ((0.5, 0, -5), (0.1, 1, 1), 6.80798, 7.08872),
        ],
    )
    def test_ray_hits(self, origin, direction, t0, t1):
        """Test rays hitting an infinite cylinder."""
        from src.whitted.geometry.shape import cylinder, local_intersect

        xs = local_intersect(cylinder(), _ray(origin, direction, True))
        assert xs == pytest.approx([t0, t1], abs=1e-5)

    @pytest.mark.parametrize(
        "origin, direction, count",
        [
            ((0, 1.5, 0), (0.1, 1, 0), 0),
            ((0, 3, -5), (0, 0, 1), 0),
            ((0, 0, -5), (0, 0, 1), 0),
            ((0, 2, -5), (0, 0, 1), 0),
            ((0, 1, -5), (0, 0, 1), 0),
            ((0, 1.5, -2), (0, 0, 1), 2),
        ],
    )
    def test_truncated_cylinder(self, origin, direction, count):
        """Test bounds are exclusive on an open truncated cylinder."""
        from src.whitted.geometry.shape import cylinder, local_intersect

        cyl = cylinder(minimum=1, maximum=2)
        assert len(local_intersect(cyl, _ray(origin, direction, True))) == count

    @pytest.mark.parametrize(
        "origin, direction",
        [
            ((0, 3, 0), (0, -1, 0)),
            ((0, 3, -2), (0, -1, 2)),
            ((0, 4, -2), (0, -1, 1)),
            ((0, 0, -2), (0, 1, 2)),
            ((0, -1, -2), (0, 1, 1)),
        ],
    )
    def test_capped_cylinder(self, origin, direction):
        """Test rays through the caps of a closed cylinder."""
        from src.whitted.geometry.shape import cylinder, local_intersect

        cyl = cylinder(minimum=1, maximum=2, closed=True)
        assert len(local_intersect(cyl, _ray(origin, direction, True))) == 2

    @pytest.mark.parametrize(
        "p, n",
        [
            ((1, 0, 0), (1, 0, 0)),
            ((0, 5, -1), (0, 0, -1)),
            ((0, -2, 1), (0, 0, 1)),
            ((-1, 1, 0), (-1, 0, 0)),
        ],
    )
    def test_side_normal(self, p, n):
        """Test normals on the lateral surface."""
        from src.whitted.core.tuples import approx_equal, point, vector
        from src.whitted.geometry.shape import cylinder, local_normal_at

        assert approx_equal(local_normal_at(cylinder(), point(*p)), vector(*n))

    @pytest.mark.parametrize(
        "p, n",
        [
            ((0, 1, 0), (0, -1, 0)),
            ((0.5, 1, 0), (0, -1, 0)),
            ((0, 1, 0.5), (0, -1, 0)),
            ((0, 2, 0), (0, 1, 0)),
            ((0.5, 2, 0), (0, 1, 0)),
            ((0, 2, 0.5), (0, 1, 0)),
        ],
    )
    def test_cap_normal(self, p, n):
        """Test normals on the end caps."""
        from src.whitted.core.tuples import approx_equal, point, vector
        from src.whitted.geometry.shape import cylinder, local_normal_at

        cyl = cylinder(minimum=1, maximum=2, closed=True)
        assert approx_equal(local_normal_at(cyl, point(*p)), vector(*n))

    def test_defaults_are_unbounded_and_open(self):
        """Test default cylinder bounds."""
        from src.whitted.geometry.shape import cylinder

        cyl = cylinder()
        assert cyl.minimum == -math.inf
        assert cyl.maximum == math.inf
        assert cyl.closed is False

    def test_inverted_bounds_rejected(self):
        """Test minimum greater than maximum raises ValueError."""
        from src.whitted.geometry.shape import cylinder

        with pytest.raises(ValueError):
            cylinder(minimum=2, maximum=1)

    @pytest.mark.parametrize("k", [0, 31, 77, 120, 198])
    def test_tangent_ray_from_off_grid_origin(self, k):
        """Test a ray grazing the side keeps both coincident roots."""
        from src.whitted.geometry.cylinder import intersect_cylinder

        z = -5 + k * 0.0173
        r = _ray((1, 0, z), (0, 0.3, 1), normalize_direction=True)
        xs = intersect_cylinder(r)
        t = -z / r.direction[2]
        assert len(xs) == 2
        assert xs == pytest.approx([t, t], abs=1e-6)


class TestCone:
    """Tests for double-napped cones."""

    @pytest.mark.parametrize(
        "origin, direction, t0, t1",
        [
            ((0, 0, -5), (0, 0, 1), 5, 5),
            ((0, 0, -5), (1, 1, 1), 8.66025, 8.66025),
            ((1, 1, -5), (-0.5, -1, 1), 4.55006, 49.44994),
        ],
    )
    def test_ray_hits(self, origin, direction, t0, t1):
        """Test rays hitting an infinite cone."""
        from src.whitted.geometry.shape import cone, local_intersect

        xs = local_intersect(cone(), _ray(origin, direction, True))
        assert xs == pytest.approx([t0, t1], abs=1e-4)

    def test_ray_parallel_to_one_half(self):
        """Test a ray parallel to one nappe crosses the other once."""
        from src.whitted.geometry.shape import cone, local_intersect

        xs = local_intersect(cone(), _ray((0, 0, -1), (0, 1, 1), True))
        assert xs == pytest.approx([0.35355], abs=1e-5)

    @pytest.mark.parametrize(
        "origin, direction, count",
        [
            ((0, 0, -5), (0, 1, 0), 0),
            ((0, 0, -0.25), (0, 1, 1), 2),
            ((0, 0, -0.25), (0, 1, 0), 4),
        ],
    )
    def test_capped_cone(self, origin, direction, count):
        """Test rays through the caps of a closed cone."""
        from src.whitted.geometry.shape import cone, local_intersect

        c = cone(minimum=-0.5, maximum=0.5, closed=True)
        assert len(local_intersect(c, _ray(origin, direction, True))) == count

    @pytest.mark.parametrize(
        "p, n",
        [
            ((0, 0, 0), (0, 0, 0)),
            ((1, 1, 1), (1, -math.sqrt(2), 1)),
            ((-1, -1, 0), (-1, 1, 0)),
        ],
    )
    def test_local_normal(self, p, n):
        """Test unnormalized local normals on the cone surface."""
        from src.whitted.core.tuples import approx_equal, point, vector
        from src.whitted.geometry.shape import cone, local_normal_at

        assert approx_equal(local_normal_at(cone(), point(*p)), vector(*n))


class TestGroup:
    """Tests for groups of shapes."""

    def test_empty_group(self):
        """Test a new group has no children and misses every ray."""
        from src.whitted.geometry.shape import group, intersect

        g = group()
        assert g.children == []
        assert intersect(g, _ray((0, 0, 0), (0, 0, 1))) == []

    def test_add_child_sets_parent(self):
        """Test adding a child links it to the group."""
        from src.whitted.geometry.shape import group, sphere

        s = sphere()
        g = group(s)
        assert g.children == [s]
        assert s.parent is g
        assert g.includes(s)

    def test_intersect_nonempty_group(self):
        """Test hits from several children come back sorted."""
        from src.whitted.core.matrix import translation
        from src.whitted.geometry.shape import group, intersect, sphere

        s1 = sphere()
        s2 = sphere(transform=translation(0, 0, -3))
        s3 = sphere(transform=translation(5, 0, 0))
        g = group(s1, s2, s3)

        xs = intersect(g, _ray((0, 0, -5), (0, 0, 1)))
        assert [i.shape for i in xs] == [s2, s2, s1, s1]
        assert [i.t for i in xs] == pytest.approx([1, 3, 4, 6])

    def test_intersect_transformed_group(self):
        """Test the group transform applies to its children."""
        from src.whitted.core.matrix import scaling, translation
        from src.whitted.geometry.shape import group, intersect, sphere

        s = sphere(transform=translation(5, 0, 0))
        g = group(s, transform=scaling(2, 2, 2))
        xs = intersect(g, _ray((10, 0, -10), (0, 0, 1)))
        assert len(xs) == 2

    def _nested(self):
        from src.whitted.core.matrix import rotation_y, scaling, translation
        from src.whitted.geometry.shape import group, sphere

        s = sphere(transform=translation(5, 0, 0))
        g2 = group(s, transform=scaling(1, 2, 3))
        g1 = group(g2, transform=rotation_y(math.pi / 2))
        return g1, g2, s

    def test_world_to_object_through_groups(self):
        """Test converting a point through two enclosing groups."""
        from src.whitted.core.matrix import rotation_y, scaling, translation
        from src.whitted.core.tuples import point
        from src.whitted.geometry.shape import group, sphere

        s = sphere(transform=translation(5, 0, 0))
        g1 = group(group(s, transform=scaling(2, 2, 2)), transform=rotation_y(math.pi / 2))
        assert s.parent.parent is g1

        np.testing.assert_allclose(s.world_to_object(point(-2, 0, -10)), point(0, 0, -1), atol=1e-9)

    def test_normal_to_world_through_groups(self):
        """Test converting a normal out through nested groups."""
        from src.whitted.core.tuples import vector

        g1, _, s = self._nested()
        k = math.sqrt(3) / 3
        n = s.normal_to_world(vector(k, k, k))
        np.testing.assert_allclose(n, vector(0.2857, 0.4286, -0.8571), atol=1e-4)

    def test_normal_at_on_child(self):
        """Test the world normal of a shape inside nested groups."""
        from src.whitted.core.tuples import point, vector
        from src.whitted.geometry.shape import normal_at

        g1, _, s = self._nested()
        n = normal_at(s, point(1.7321, 1.1547, -5.5774))
        np.testing.assert_allclose(n, vector(0.2857, 0.4286, -0.8571), atol=1e-4)

    def test_group_has_no_normal(self):
        """Test asking a group for a normal raises TypeError."""
        from src.whitted.core.tuples import point
        from src.whitted.geometry.shape import group, normal_at

        with pytest.raises(TypeError):
            normal_at(group(), point(0, 0, 0))

    def test_group_has_no_local_intersection(self):
        """Test local intersection is undefined for groups."""
        from src.whitted.geometry.shape import group, local_intersect

        with pytest.raises(TypeError):
            local_intersect(group(), _ray((0, 0, 0), (0, 0, 1)))

    def test_add_child_to_primitive_rejected(self):
        """Test only groups accept children."""
        from src.whitted.geometry.shape import sphere

        with pytest.raises(TypeError):
            sphere().add_child(sphere())

    def test_child_cannot_join_two_groups(self):
        """Test a shape belongs to at most one group."""
        from src.whitted.geometry.shape import group, sphere

        s = sphere()
        group(s)
        with pytest.raises(ValueError):
            group(s)

    def test_group_cannot_contain_itself(self):
        """Test adding a group to itself raises ValueError."""
        from src.whitted.geometry.shape import group

        g = group()
        with pytest.raises(ValueError):
            g.add_child(g)

    def test_group_cannot_contain_its_ancestor(self):
        """Test adding a group beneath one of its own descendants raises ValueError."""
        from src.whitted.geometry.shape import group

        outer = group()
        inner = group()
        outer.add_child(inner)
        with pytest.raises(ValueError, match="cycle"):
            inner.add_child(outer)
        assert inner.children == []
        assert outer.parent is None

    def test_pickle_round_trip_restores_parents(self):
        """Test a pickled group keeps its child links."""
        from src.whitted.core.tuples import point
        from src.whitted.geometry.shape import normal_at

        g1, _, s = self._nested()
        expected = normal_at(s, point(1.7321, 1.1547, -5.5774))

        restored = pickle.loads(pickle.dumps(g1))
        child = restored.children[0].children[0]
        assert child.parent is restored.children[0]
        assert restored.children[0].parent is restored
        np.testing.assert_allclose(normal_at(child, point(1.7321, 1.1547, -5.5774)), expected)

    def test_shapes_compare_by_identity(self):
        """Test two identical spheres are distinct."""
        from src.whitted.geometry.shape import sphere

        a, b = sphere(), sphere()
        assert a != b
        assert a == a
