"""
Minimal complex number type used by the reference recursive FFT.
"""

import math
from typing import Union


class Complex:
    """Real + imaginary pair with the handful of operations the FFT needs."""

    __slots__ = ('re', 'im')

    def __init__(self, re: float = 0.0, im: float = 0.0):
        self.re = float(re)
        self.im = float(im)

    @classmethod
    def from_value(cls, value: Union['Complex', complex, float, int]) -> 'Complex':
        if isinstance(value, Complex):
            return value
        value = complex(value)
        return cls(value.real, value.imag)

    def __add__(self, other: 'Complex') -> 'Complex':
        return Complex(self.re + other.re, self.im + other.im)

    def __sub__(self, other: 'Complex') -> 'Complex':
        return Complex(self.re - other.re, self.im - other.im)

    def __mul__(self, other: 'Complex') -> 'Complex':
        return Complex(
            self.re * other.re - self.im * other.im,
            self.re * other.im + self.im * other.re,
        )

    def cexp(self) -> 'Complex':
        """exp(re) * (cos(im) + i*sin(im))"""
        er = math.exp(self.re)
        return Complex(er * math.cos(self.im), er * math.sin(self.im))

    def conjugate(self) -> 'Complex':
        return Complex(self.re, -self.im)

    def __complex__(self) -> complex:
        return complex(self.re, self.im)

    def __eq__(self, other) -> bool:
        if isinstance(other, Complex):
            return self.re == other.re and self.im == other.im
        return NotImplemented

    def __repr__(self) -> str:
        return f"Complex({self.re!r}, {self.im!r})"
