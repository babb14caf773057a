"""STL export for revolution solids."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass
from typing import Iterable, List, Optional

from solidviz.geometry import Vec3, is_finite3
from solidviz.revolve import RevolutionSolid

_HEADER_SIZE = 80
_STRUCT_TRIANGLE = struct.Struct('<12fH')
_AREA_TOL = 1e-12
_FLOAT32_MAX = 3.4028234e38


@dataclass(frozen=True)
class Triangle:
    """Immutable triangle representation in XYZ space."""

    normal: Vec3
    v0: Vec3
    v1: Vec3
    v2: Vec3


def triangle_normal(v0: Vec3, v1: Vec3, v2: Vec3) -> Optional[Vec3]:
    """Return the unit normal of a triangle or ``None`` if degenerate."""

    ax, ay, az = v1[0] - v0[0], v1[1] - v0[1], v1[2] - v0[2]
    bx, by, bz = v2[0] - v0[0], v2[1] - v0[1], v2[2] - v0[2]
    nx = ay * bz - az * by
    ny = az * bx - ax * bz
    nz = ax * by - ay * bx
    length = math.sqrt(nx * nx + ny * ny + nz * nz)
    if not length > _AREA_TOL or not math.isfinite(length):
        return None
    return (nx / length, ny / length, nz / length)


def _exportable(v: Vec3) -> bool:
    """STL stores float32; anything outside that range cannot be written."""
    return is_finite3(v) and max(abs(c) for c in v) < _FLOAT32_MAX


def solid_triangles(solid: RevolutionSolid) -> List[Triangle]:
    """Triangulate the solid's quads, dropping degenerate or non-finite triangles.

    Degenerate triangles occur wherever a curve crosses the rotation axis
    or the two curves meet at a cap.
    """
    triangles = []
    for v0, v1, v2 in solid.triangles():
        if not (_exportable(v0) and _exportable(v1) and _exportable(v2)):
            continue
        normal = triangle_normal(v0, v1, v2)
        if normal is None:
            continue
        triangles.append(Triangle(normal, v0, v1, v2))
    return triangles


def write_stl(solid: RevolutionSolid, path_or_file, *, binary: bool = True,
              name: str = 'solidviz') -> int:
    """Write ``solid`` to STL and return the number of triangles written.

    ``path_or_file`` can be a filesystem path or an open binary/text stream.
    """

    triangles = solid_triangles(solid)

    if binary:
        _write_binary(triangles, path_or_file, name)
    else:
        _write_ascii(triangles, path_or_file, name)
    return len(triangles)


def _write_binary(triangles: List[Triangle], path_or_file, name: str) -> None:
    close_when_done = False
    if hasattr(path_or_file, 'write'):
        stream = path_or_file
    else:
        stream = open(path_or_file, 'wb')
        close_when_done = True

    try:
        header = (name[:_HEADER_SIZE]).encode('ascii', errors='replace')
        header = header.ljust(_HEADER_SIZE, b' ')
        stream.write(header)
        stream.write(struct.pack('<I', len(triangles)))

        for tri in triangles:
            data = _STRUCT_TRIANGLE.pack(
                *tri.normal,
                *tri.v0,
                *tri.v1,
                *tri.v2,
                0,
            )
            stream.write(data)
    finally:
        if close_when_done:
            stream.close()


def _write_ascii(triangles: Iterable[Triangle], path_or_file, name: str) -> None:
    close_when_done = False
    if hasattr(path_or_file, 'write'):
        stream = path_or_file
    else:
        stream = open(path_or_file, 'w', encoding='ascii')
        close_when_done = True

    try:
        print(f"solid {name}", file=stream)
        for tri in triangles:
            print(f"  facet normal {tri.normal[0]:.6e} {tri.normal[1]:.6e} {tri.normal[2]:.6e}", file=stream)
            print("    outer loop", file=stream)
            print(f"      vertex {tri.v0[0]:.6e} {tri.v0[1]:.6e} {tri.v0[2]:.6e}", file=stream)
            print(f"      vertex {tri.v1[0]:.6e} {tri.v1[1]:.6e} {tri.v1[2]:.6e}", file=stream)
            print(f"      vertex {tri.v2[0]:.6e} {tri.v2[1]:.6e} {tri.v2[2]:.6e}", file=stream)
            print("    endloop", file=stream)
            print("  endfacet", file=stream)
        print(f"endsolid {name}", file=stream)
    finally:
        if close_when_done:
            stream.close()
