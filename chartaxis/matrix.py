from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from chartaxis.errors import AxisConfigError
from chartaxis.geometry import Point


@dataclass(frozen=True)
class AffineMatrix:
    """2-D affine map `(x, y) -> (a*x + c*y + tx, b*x + d*y + ty)`."""

    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    tx: float = 0.0
    ty: float = 0.0

    @classmethod
    def identity(cls) -> "AffineMatrix":
        return cls()

    @classmethod
    def scale(cls, sx: float, sy: float) -> "AffineMatrix":
        return cls(a=sx, d=sy)

    @classmethod
    def translation(cls, tx: float, ty: float) -> "AffineMatrix":
        return cls(tx=tx, ty=ty)

    def determinant(self) -> float:
        return (self.a * self.d) - (self.b * self.c)

    def apply(self, x: float, y: float) -> Point:
        return Point(
            x=self.a * x + self.c * y + self.tx,
            y=self.b * x + self.d * y + self.ty,
        )

    def apply_many(self, x: np.ndarray, y: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        px = x * self.a + y * self.c + self.tx
        py = x * self.b + y * self.d + self.ty
        return px, py

    def concat(self, other: "AffineMatrix") -> "AffineMatrix":
        """Matrix applying `self` first, then `other`."""
        return AffineMatrix(
            a=self.a * other.a + self.b * other.c,
            b=self.a * other.b + self.b * other.d,
            c=self.c * other.a + self.d * other.c,
            d=self.c * other.b + self.d * other.d,
            tx=self.tx * other.a + self.ty * other.c + other.tx,
            ty=self.tx * other.b + self.ty * other.d + other.ty,
        )

    def inverted(self) -> "AffineMatrix":
        det = self.determinant()
        if abs(det) < 1e-12:
            raise AxisConfigError("matrix is singular")
        a = self.d / det
        b = -self.b / det
        c = -self.c / det
        d = self.a / det
        return AffineMatrix(
            a=a,
            b=b,
            c=c,
            d=d,
            tx=-(self.tx * a + self.ty * c),
            ty=-(self.tx * b + self.ty * d),
        )
