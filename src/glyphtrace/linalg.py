"""Fixed-size vector and affine matrix primitives."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence, Tuple

from .config import NORMAL_EPSILON


@dataclass(frozen=True, slots=True)
class Vec3:
    """Lightweight immutable 3D vector."""

    x: float
    y: float
    z: float

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> "Vec3":
        if len(values) < 3:
            raise ValueError(f"Vec3 needs 3 components, got {len(values)}")
        return cls(float(values[0]), float(values[1]), float(values[2]))

    def __iter__(self) -> Iterator[float]:
        return iter((self.x, self.y, self.z))

    def __getitem__(self, index: int) -> float:
        return (self.x, self.y, self.z)[index]

    def __add__(self, other: "Vec3") -> "Vec3":
        if not isinstance(other, Vec3):
            return NotImplemented
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vec3") -> "Vec3":
        if not isinstance(other, Vec3):
            return NotImplemented
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> "Vec3":
        if not isinstance(scalar, (int, float)):
            raise TypeError("Vec3 can only be multiplied by a scalar")
        return Vec3(self.x * scalar, self.y * scalar, self.z * scalar)

    def __rmul__(self, scalar: float) -> "Vec3":
        return self.__mul__(scalar)

    def __neg__(self) -> "Vec3":
        return Vec3(-self.x, -self.y, -self.z)

    def dot(self, other: "Vec3") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vec3") -> "Vec3":
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length(self) -> float:
        return math.sqrt(self.dot(self))

    def length_squared(self) -> float:
        return self.dot(self)

    def normalized(self) -> "Vec3":
        length = self.length()
        if length <= NORMAL_EPSILON:
            return Vec3(0.0, 0.0, 0.0)
        inv_length = 1.0 / length
        return Vec3(self.x * inv_length, self.y * inv_length, self.z * inv_length)

    def to_point(self) -> "Vec4":
        """Homogeneous point (w = 1), affected by translation."""
        return Vec4(self.x, self.y, self.z, 1.0)

    def to_direction(self) -> "Vec4":
        """Homogeneous direction (w = 0), unaffected by translation."""
        return Vec4(self.x, self.y, self.z, 0.0)


@dataclass(frozen=True, slots=True)
class Vec4:
    """Homogeneous 4-component vector used with affine transforms."""

    x: float
    y: float
    z: float
    w: float

    def __iter__(self) -> Iterator[float]:
        return iter((self.x, self.y, self.z, self.w))

    def __getitem__(self, index: int) -> float:
        return (self.x, self.y, self.z, self.w)[index]

    def __add__(self, other: "Vec4") -> "Vec4":
        if not isinstance(other, Vec4):
            return NotImplemented
        return Vec4(self.x + other.x, self.y + other.y, self.z + other.z, self.w + other.w)

    def __sub__(self, other: "Vec4") -> "Vec4":
        if not isinstance(other, Vec4):
            return NotImplemented
        return Vec4(self.x - other.x, self.y - other.y, self.z - other.z, self.w - other.w)

    def __mul__(self, scalar: float) -> "Vec4":
        if not isinstance(scalar, (int, float)):
            raise TypeError("Vec4 can only be multiplied by a scalar")
        return Vec4(self.x * scalar, self.y * scalar, self.z * scalar, self.w * scalar)

    def __rmul__(self, scalar: float) -> "Vec4":
        return self.__mul__(scalar)

    def dot(self, other: "Vec4", dims: Optional[int] = None) -> float:
        """Dot product over the first ``dims`` components (all four by default).

        ``dims=3`` treats both operands as 3D and ignores the homogeneous
        coordinate.
        """
        if dims is None:
            dims = 4
        if not 1 <= dims <= 4:
            raise ValueError(f"dims must be between 1 and 4, got {dims}")
        return sum(a * b for a, b in zip(tuple(self)[:dims], tuple(other)[:dims]))

    def length(self) -> float:
        return math.sqrt(self.dot(self))

    def normalized(self) -> "Vec4":
        length = self.length()
        if length <= NORMAL_EPSILON:
            return Vec4(0.0, 0.0, 0.0, 0.0)
        return self * (1.0 / length)

    def xyz(self) -> Vec3:
        return Vec3(self.x, self.y, self.z)


@dataclass(frozen=True, slots=True)
class Mat4:
    """4x4 affine transform stored as four column vectors.

    ``m @ v`` contracts column-major: column ``j`` is scaled by ``v[j]`` and the
    columns are summed. ``a @ b`` maps every column of ``b`` through ``a``, so
    ``b`` is applied to geometry first.
    """

    columns: Tuple[Vec4, Vec4, Vec4, Vec4]

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[float]]) -> "Mat4":
        if len(rows) != 4 or any(len(row) != 4 for row in rows):
            raise ValueError("Mat4.from_rows expects a 4x4 nested sequence")
        return cls(
            tuple(
                Vec4(
                    float(rows[0][col]),
                    float(rows[1][col]),
                    float(rows[2][col]),
                    float(rows[3][col]),
                )
                for col in range(4)
            )  # type: ignore[arg-type]
        )

    @classmethod
    def identity(cls) -> "Mat4":
        return cls(
            (
                Vec4(1.0, 0.0, 0.0, 0.0),
                Vec4(0.0, 1.0, 0.0, 0.0),
                Vec4(0.0, 0.0, 1.0, 0.0),
                Vec4(0.0, 0.0, 0.0, 1.0),
            )
        )

    @classmethod
    def translation(cls, x: float, y: float, z: float) -> "Mat4":
        return cls(
            (
                Vec4(1.0, 0.0, 0.0, 0.0),
                Vec4(0.0, 1.0, 0.0, 0.0),
                Vec4(0.0, 0.0, 1.0, 0.0),
                Vec4(x, y, z, 1.0),
            )
        )

    @classmethod
    def scaling(cls, sx: float, sy: float, sz: float) -> "Mat4":
        return cls(
            (
                Vec4(sx, 0.0, 0.0, 0.0),
                Vec4(0.0, sy, 0.0, 0.0),
                Vec4(0.0, 0.0, sz, 0.0),
                Vec4(0.0, 0.0, 0.0, 1.0),
            )
        )

    @classmethod
    def rotation_x(cls, angle: float) -> "Mat4":
        c, s = math.cos(angle), math.sin(angle)
        return cls(
            (
                Vec4(1.0, 0.0, 0.0, 0.0),
                Vec4(0.0, c, s, 0.0),
                Vec4(0.0, -s, c, 0.0),
                Vec4(0.0, 0.0, 0.0, 1.0),
            )
        )

    @classmethod
    def rotation_y(cls, angle: float) -> "Mat4":
        c, s = math.cos(angle), math.sin(angle)
        return cls(
            (
                Vec4(c, 0.0, -s, 0.0),
                Vec4(0.0, 1.0, 0.0, 0.0),
                Vec4(s, 0.0, c, 0.0),
                Vec4(0.0, 0.0, 0.0, 1.0),
            )
        )

    @classmethod
    def rotation_z(cls, angle: float) -> "Mat4":
        c, s = math.cos(angle), math.sin(angle)
        return cls(
            (
                Vec4(c, s, 0.0, 0.0),
                Vec4(-s, c, 0.0, 0.0),
                Vec4(0.0, 0.0, 1.0, 0.0),
                Vec4(0.0, 0.0, 0.0, 1.0),
            )
        )

    def __matmul__(self, other):
        if isinstance(other, Vec4):
            return self.transform(other)
        if isinstance(other, Mat4):
            return self.compose(other)
        return NotImplemented

    def transform(self, vector: Vec4) -> Vec4:
        c0, c1, c2, c3 = self.columns
        return c0 * vector.x + c1 * vector.y + c2 * vector.z + c3 * vector.w

    def compose(self, other: "Mat4") -> "Mat4":
        return Mat4(tuple(self.transform(column) for column in other.columns))  # type: ignore[arg-type]

    def transform_point(self, point: Vec3) -> Vec3:
        return self.transform(point.to_point()).xyz()

    def transform_direction(self, direction: Vec3) -> Vec3:
        return self.transform(direction.to_direction()).xyz()

    def row(self, index: int) -> Tuple[float, float, float, float]:
        return tuple(column[index] for column in self.columns)  # type: ignore[return-value]

