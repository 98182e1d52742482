"""Whitted-style recursive ray tracer.

This package renders a scene graph of transformed primitives into a pixel
buffer by casting one ray per pixel, with support for:
- Phong shading with shadows from any number of point lights
- Recursive reflection and refraction bounded by a depth budget
- Procedural patterns (stripe, gradient, ring, checker, blended)
- Spheres, planes, cubes, cylinders, cones and nested groups
- Parallel rendering across row bands

Subpackages:
    core: Tuples, matrices, rays, shading, the recursive integrator and renderer
    geometry: Shape variants and their local-space intersection algorithms
    materials: Material value type and procedural patterns
    scene: Lights, intersection records, the world and scene loading
    camera: Camera model with per-pixel ray generation
    preview: Tone mapping, matplotlib preview and image export
"""

__version__ = "0.1.0"
