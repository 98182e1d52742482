"""Scene descriptions in YAML.

A scene file is a YAML list of actions. Each action either adds something to
the scene or defines a reusable value:

    - add: camera
      width: 100
      height: 50
      field-of-view: 0.785
      from: [-6, 6, -10]
      to: [6, 0, 6]
      up: [-0.45, 1, 0]

    - add: light
      at: [50, 100, -50]
      intensity: [1, 1, 1]

    - define: white-material
      value:
        color: [1, 1, 1]
        diffuse: 0.7
        reflective: 0.1

    - define: blue-material
      extend: white-material
      value:
        color: [0.537, 0.831, 0.914]

    - define: standard-transform
      value:
        - [translate, 1, -1, 1]
        - [scale, 0.5, 0.5, 0.5]

    - add: cube
      material: blue-material
      transform:
        - standard-transform
        - [translate, 4, 0, 0]

Shapes are ``sphere``, ``plane``, ``cube``, ``cylinder``, ``cone`` and
``group``. Cylinders and cones accept ``min``, ``max`` and ``closed``; groups
take a ``children`` list of shape actions. Transforms apply in list order.
A material may contain a ``pattern`` mapping with ``type`` (stripes,
gradient, rings, checkers, blended, solid), ``colors`` (two colors or nested
pattern mappings) and an optional ``transform``.

Any malformed action raises ``SceneError`` naming the offending entry.

Example:
    >>> from src.whitted.scene.loader import load_scene_file
    >>> world, camera = load_scene_file("examples/scenes/cover.yaml")
"""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Any

import yaml

from src.whitted.camera.camera import Camera
from src.whitted.core.matrix import (
    Matrix4,
    chain,
    identity,
    is_invertible,
    rotation_x,
    rotation_y,
    rotation_z,
    scaling,
    shearing,
    translation,
    view_transform,
)
from src.whitted.core.tuples import color, point, vector
from src.whitted.geometry.shape import Shape, cone, cube, cylinder, group, plane, sphere
from src.whitted.materials.material import Material
from src.whitted.materials.patterns import (
    Pattern,
    blended_pattern,
    checkers_pattern,
    gradient_pattern,
    ring_pattern,
    solid_pattern,
    stripe_pattern,
)
from src.whitted.scene.light import PointLight
from src.whitted.scene.world import World

logger = logging.getLogger(__name__)


class SceneError(ValueError):
    """Raised when a scene description cannot be turned into a scene."""


# Scene-file material keys mapped to Material fields
MATERIAL_KEYS = {
    "color": "color",
    "ambient": "ambient",
    "diffuse": "diffuse",
    "specular": "specular",
    "shininess": "shininess",
    "reflective": "reflective",
    "transparency": "transparency",
    "refractive-index": "refractive_index",
    "pattern": "pattern",
}

PATTERN_TYPES = {
    "stripes": stripe_pattern,
    "gradient": gradient_pattern,
    "rings": ring_pattern,
    "checkers": checkers_pattern,
}

SHAPE_KEYS = {"add", "material", "transform", "min", "max", "closed", "children"}
CAMERA_KEYS = {"add", "width", "height", "field-of-view", "from", "to", "up"}
LIGHT_KEYS = {"add", "at", "intensity"}


def _triple(value: Any, what: str) -> tuple[float, float, float]:
    if not isinstance(value, (list, tuple)) or len(value) != 3:
        raise SceneError(f"{what} must be a list of 3 numbers, got {value!r}")
    try:
        return float(value[0]), float(value[1]), float(value[2])
    except (TypeError, ValueError) as e:
        raise SceneError(f"{what} must be a list of 3 numbers, got {value!r}") from e


def _check_keys(entry: dict, allowed: set[str], what: str) -> None:
    unknown = set(entry) - allowed
    if unknown:
        raise SceneError(f"Unknown key(s) for {what}: {', '.join(sorted(unknown))}")


class SceneBuilder:
    """Accumulates definitions while walking a list of scene actions.

    Attributes:
        world: The world being built.
        camera: The camera, once an ``add: camera`` action has been seen.
        definitions: Named materials (dicts) and transforms (lists).
    """

    def __init__(self) -> None:
        self.world = World()
        self.camera: Camera | None = None
        self.definitions: dict[str, Any] = {}

    # =========================================================================
    # Actions
    # =========================================================================

    def apply(self, entry: Any) -> None:
        """Apply one action from the scene list."""
        if not isinstance(entry, dict):
            raise SceneError(f"Scene entries must be mappings, got {entry!r}")

        if "define" in entry:
            self._define(entry)
        elif "add" in entry:
            kind = entry["add"]
            if kind == "camera":
                self._add_camera(entry)
            elif kind == "light":
                self._add_light(entry)
            else:
                self.world.add(self.build_shape(entry))
        else:
            raise SceneError(f"Entry has neither 'add' nor 'define': {entry!r}")

    def _define(self, entry: dict) -> None:
        _check_keys(entry, {"define", "extend", "value"}, "define")
        name = entry["define"]
        if "value" not in entry:
            raise SceneError(f"Definition {name!r} has no value")
        value = entry["value"]

        if "extend" in entry:
            base = self.definitions.get(entry["extend"])
            if not isinstance(base, dict) or not isinstance(value, dict):
                raise SceneError(
                    f"Definition {name!r} can only extend a material, "
                    f"got {entry['extend']!r}"
                )
            value = {**base, **value}

        self.definitions[name] = value

    def _add_camera(self, entry: dict) -> None:
        _check_keys(entry, CAMERA_KEYS, "camera")
        for key in ("width", "height", "field-of-view", "from", "to"):
            if key not in entry:
                raise SceneError(f"Camera is missing {key!r}")

        from_point = point(*_triple(entry["from"], "camera 'from'"))
        to_point = point(*_triple(entry["to"], "camera 'to'"))
        up = vector(*_triple(entry.get("up", [0, 1, 0]), "camera 'up'"))
        try:
            transform = view_transform(from_point, to_point, up)
            self.camera = Camera(
                int(entry["width"]),
                int(entry["height"]),
                float(entry["field-of-view"]),
                transform,
            )
        except (TypeError, ValueError) as e:
            raise SceneError(f"Invalid camera: {e}") from e

    def _add_light(self, entry: dict) -> None:
        _check_keys(entry, LIGHT_KEYS, "light")
        if "at" not in entry:
            raise SceneError("Light is missing 'at'")
        at = _triple(entry["at"], "light 'at'")
        intensity = _triple(entry.get("intensity", [1, 1, 1]), "light 'intensity'")
        try:
            self.world.add_light(PointLight(point(*at), color(*intensity)))
        except ValueError as e:
            raise SceneError(f"Invalid light: {e}") from e

    # =========================================================================
    # Shapes
    # =========================================================================

    def build_shape(self, entry: dict) -> Shape:
        """Build a shape (recursively, for groups) from an ``add`` action."""
        if not isinstance(entry, dict) or "add" not in entry:
            raise SceneError(f"Shape entries must be 'add' mappings, got {entry!r}")
        _check_keys(entry, SHAPE_KEYS, f"shape {entry['add']!r}")

        kind = entry["add"]
        transform = self.build_transform(entry.get("transform", []))

        if kind == "group":
            shape = group(transform=transform)
            for child in entry.get("children", []):
                shape.add_child(self.build_shape(child))
            return shape

        if "children" in entry:
            raise SceneError(f"Only groups can have children, not {kind!r}")
        material = self.build_material(entry.get("material", {}))

        if kind == "sphere":
            return sphere(transform, material)
        elif kind == "plane":
            return plane(transform, material)
        elif kind == "cube":
            return cube(transform, material)
        elif kind in ("cylinder", "cone"):
            factory = cylinder if kind == "cylinder" else cone
            closed = entry.get("closed", False)
            if not isinstance(closed, bool):
                raise SceneError(
                    f"{kind.capitalize()} 'closed' must be true or false, got {closed!r}"
                )
            try:
                return factory(
                    minimum=float(entry.get("min", -math.inf)),
                    maximum=float(entry.get("max", math.inf)),
                    closed=closed,
                    transform=transform,
                    material=material,
                )
            except (TypeError, ValueError) as e:
                raise SceneError(f"Invalid {kind}: {e}") from e

        raise SceneError(f"Unknown shape kind: {kind!r}")

    # =========================================================================
    # Transforms
    # =========================================================================

    def build_transform(self, steps: Any) -> Matrix4:
        """Compose a transform list; steps apply in list order."""
        if isinstance(steps, str):
            steps = [steps]
        if not isinstance(steps, list):
            raise SceneError(f"Transform must be a list, got {steps!r}")

        matrices = []
        for step in steps:
            if isinstance(step, str):
                defined = self.definitions.get(step)
                if not isinstance(defined, list):
                    raise SceneError(f"Unknown transform definition: {step!r}")
                matrices.append(self.build_transform(defined))
            else:
                matrices.append(self._transform_step(step))
        transform = chain(*matrices) if matrices else identity()
        if not is_invertible(transform):
            raise SceneError(f"Transform is not invertible: {steps!r}")
        return transform

    @staticmethod
    def _transform_step(step: Any) -> Matrix4:
        if not isinstance(step, list) or not step:
            raise SceneError(f"Transform step must be a non-empty list, got {step!r}")
        op, *args = step
        try:
            values = [float(a) for a in args]
        except (TypeError, ValueError) as e:
            raise SceneError(f"Transform {op!r} needs numeric arguments") from e

        expected = {
            "translate": 3,
            "scale": 3,
            "rotate-x": 1,
            "rotate-y": 1,
            "rotate-z": 1,
            "shear": 6,
        }
        if op not in expected:
            raise SceneError(f"Unknown transform: {op!r}")
        if len(values) != expected[op]:
            raise SceneError(
                f"Transform {op!r} takes {expected[op]} argument(s), got {len(values)}"
            )

        if op == "translate":
            return translation(*values)
        elif op == "scale":
            return scaling(*values)
        elif op == "rotate-x":
            return rotation_x(values[0])
        elif op == "rotate-y":
            return rotation_y(values[0])
        elif op == "rotate-z":
            return rotation_z(values[0])
        return shearing(*values)

    # =========================================================================
    # Materials and Patterns
    # =========================================================================

    def build_material(self, spec: Any) -> Material:
        """Build a material from a mapping or the name of a definition."""
        if isinstance(spec, str):
            defined = self.definitions.get(spec)
            if not isinstance(defined, dict):
                raise SceneError(f"Unknown material definition: {spec!r}")
            spec = defined
        if not isinstance(spec, dict):
            raise SceneError(f"Material must be a mapping or a name, got {spec!r}")

        _check_keys(spec, set(MATERIAL_KEYS), "material")
        kwargs: dict[str, Any] = {}
        for key, value in spec.items():
            name = MATERIAL_KEYS[key]
            if name == "color":
                kwargs[name] = color(*_triple(value, "material color"))
            elif name == "pattern":
                kwargs[name] = self.build_pattern(value)
            else:
                try:
                    kwargs[name] = float(value)
                except (TypeError, ValueError) as e:
                    raise SceneError(f"Material {key} must be a number, got {value!r}") from e

        try:
            return Material(**kwargs)
        except ValueError as e:
            raise SceneError(f"Invalid material: {e}") from e

    def build_pattern(self, spec: Any) -> Pattern:
        """Build a pattern from a ``type`` / ``colors`` / ``transform`` mapping."""
        if not isinstance(spec, dict):
            raise SceneError(f"Pattern must be a mapping, got {spec!r}")
        _check_keys(spec, {"type", "colors", "transform"}, "pattern")

        kind = spec.get("type")
        paints = spec.get("colors", [])
        transform = self.build_transform(spec.get("transform", []))

        if kind == "solid":
            if len(paints) != 1:
                raise SceneError("Solid pattern takes exactly one color")
            return solid_pattern(color(*_triple(paints[0], "pattern color")), transform)

        if len(paints) != 2:
            raise SceneError(f"Pattern {kind!r} takes exactly two colors")
        a, b = (self._paint(p) for p in paints)

        if kind == "blended":
            a = a if isinstance(a, Pattern) else solid_pattern(a)
            b = b if isinstance(b, Pattern) else solid_pattern(b)
            return blended_pattern(a, b, transform)
        if kind not in PATTERN_TYPES:
            raise SceneError(f"Unknown pattern type: {kind!r}")
        return PATTERN_TYPES[kind](a, b, transform)

    def _paint(self, value: Any):
        if isinstance(value, dict):
            return self.build_pattern(value)
        return color(*_triple(value, "pattern color"))


# =============================================================================
# Entry Points
# =============================================================================


def parse_scene(actions: Any) -> tuple[World, Camera | None]:
    """Build a world (and camera, if described) from already-parsed actions.

    Args:
        actions: A list of action mappings, as produced by ``yaml.safe_load``.

    Returns:
        (world, camera). The camera is None when the description has none.

    Raises:
        SceneError: If the description is malformed.
    """
    if actions is None:
        actions = []
    if not isinstance(actions, list):
        raise SceneError(f"A scene must be a list of actions, got {type(actions).__name__}")

    builder = SceneBuilder()
    for index, entry in enumerate(actions):
        try:
            builder.apply(entry)
        except SceneError as e:
            raise SceneError(f"Entry {index}: {e}") from e

    logger.debug(
        "Loaded scene: %d object(s), %d light(s), %d definition(s), camera=%s",
        len(builder.world.objects),
        len(builder.world.lights),
        len(builder.definitions),
        builder.camera is not None,
    )
    return builder.world, builder.camera


def load_scene(text: str) -> tuple[World, Camera | None]:
    """Parse a YAML scene description.

    Raises:
        SceneError: If the YAML is invalid or the description malformed.
    """
    try:
        actions = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise SceneError(f"Invalid YAML: {e}") from e
    return parse_scene(actions)


def load_scene_file(path: str | Path) -> tuple[World, Camera | None]:
    """Read and parse a YAML scene file."""
    path = Path(path)
    logger.debug("Reading scene file %s", path)
    return load_scene(path.read_text(encoding="utf-8"))
