"""Complex scalar arithmetic.

``Complex`` is the element type of every qvector matrix. It is a plain value
object holding two 64-bit floats; all operations return new values.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Union

Number = Union[int, float, complex]


@dataclass(frozen=True)
class Complex:
    """
    A complex number ``real + imag * i``.

    Equality is exact floating comparison. Use :meth:`isclose` when values
    come out of a chain of floating-point operations.

    Attributes
    ----------
    real:
        Real part.
    imag:
        Imaginary part.
    """

    real: float = 0.0
    imag: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "real", float(self.real))
        object.__setattr__(self, "imag", float(self.imag))

    @classmethod
    def coerce(cls, value: "Complex | Number") -> "Complex":
        """Convert a Python number (or a Complex) to a Complex."""
        if isinstance(value, Complex):
            return value
        if isinstance(value, complex):
            return cls(value.real, value.imag)
        if isinstance(value, (int, float)):
            return cls(float(value), 0.0)
        # numpy / torch scalars expose __complex__
        if hasattr(value, "__complex__"):
            c = complex(value)
            return cls(c.real, c.imag)
        raise TypeError(f"Cannot convert {type(value).__name__} to Complex")

    @classmethod
    def zero(cls) -> "Complex":
        """Additive identity ``0 + 0i``."""
        return cls(0.0, 0.0)

    @classmethod
    def one(cls) -> "Complex":
        """Multiplicative identity ``1 + 0i``."""
        return cls(1.0, 0.0)

    @classmethod
    def i(cls) -> "Complex":
        """The imaginary unit."""
        return cls(0.0, 1.0)

    @classmethod
    def from_polar(cls, r: float, phi: float) -> "Complex":
        """Build ``r * (cos(phi) + i sin(phi))``."""
        return cls(r * math.cos(phi), r * math.sin(phi))

    @staticmethod
    def sum(values: Iterable["Complex | Number"]) -> "Complex":
        """Fold ``values`` by repeated addition, starting from zero."""
        total = Complex.zero()
        for value in values:
            total = total + value
        return total

    def conjugate(self) -> "Complex":
        return Complex(self.real, -self.imag)

    def norm(self) -> float:
        """Euclidean length ``sqrt(real**2 + imag**2)``."""
        return math.sqrt(self.real * self.real + self.imag * self.imag)

    def is_zero(self) -> bool:
        return self.real == 0.0 and self.imag == 0.0

    def isclose(self, other: "Complex | Number", abs_tol: float = 1e-9) -> bool:
        """Compare component-wise within an absolute tolerance."""
        o = Complex.coerce(other)
        return math.isclose(self.real, o.real, rel_tol=0.0, abs_tol=abs_tol) and (
            math.isclose(self.imag, o.imag, rel_tol=0.0, abs_tol=abs_tol)
        )

    def __add__(self, other: "Complex | Number") -> "Complex":
        try:
            o = Complex.coerce(other)
        except TypeError:
            return NotImplemented
        return Complex(self.real + o.real, self.imag + o.imag)

    __radd__ = __add__

    def __sub__(self, other: "Complex | Number") -> "Complex":
        try:
            o = Complex.coerce(other)
        except TypeError:
            return NotImplemented
        return self + (-o)

    def __rsub__(self, other: "Complex | Number") -> "Complex":
        try:
            o = Complex.coerce(other)
        except TypeError:
            return NotImplemented
        return o - self

    def __mul__(self, other: "Complex | Number") -> "Complex":
        try:
            o = Complex.coerce(other)
        except TypeError:
            return NotImplemented
        # (a+bi)(c+di) = (ac-bd) + (ad+bc)i
        return Complex(
            self.real * o.real - self.imag * o.imag,
            self.real * o.imag + self.imag * o.real,
        )

    __rmul__ = __mul__

    def __truediv__(self, other: "Complex | Number") -> "Complex":
        try:
            o = Complex.coerce(other)
        except TypeError:
            return NotImplemented
        denom = o.real * o.real + o.imag * o.imag
        if denom == 0.0:
            raise ZeroDivisionError("complex division by zero")
        num = self * o.conjugate()
        return Complex(num.real / denom, num.imag / denom)

    def __rtruediv__(self, other: "Complex | Number") -> "Complex":
        try:
            o = Complex.coerce(other)
        except TypeError:
            return NotImplemented
        return o / self

    def __neg__(self) -> "Complex":
        return Complex(-self.real, -self.imag)

    def __abs__(self) -> float:
        return self.norm()

    def __complex__(self) -> complex:
        return complex(self.real, self.imag)

    def __str__(self) -> str:
        if self.imag < 0 or (self.imag == 0.0 and math.copysign(1.0, self.imag) < 0):
            return f"{self.real} - {-self.imag}i"
        return f"{self.real} + {self.imag}i"


__all__ = ["Complex", "Number"]
