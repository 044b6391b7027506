"""Dense complex matrix kernel.

:class:`Matrix` is a row-major ``rows x cols`` array of :class:`Complex`
values, stored as a 2-D ``torch`` tensor. Shapes never change after
construction. Every operation returns a fresh matrix except :meth:`Matrix.set`
and :meth:`Matrix.embed`, which mutate in place.

Scalars cross the API boundary as :class:`Complex`; the tensor is an
implementation detail reachable through :meth:`Matrix.to_tensor` and
:meth:`Matrix.from_tensor` for callers that want to stay in torch.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Sequence, Tuple

import numpy as np
import torch

from qvector.core.complex import Complex
from qvector.core.device import Device, resolve_device
from qvector.errors import (
    DimensionMismatchError,
    IndexOutOfBoundsError,
    ShapeMismatchError,
)


def _to_builtin_complex(value: Any) -> complex:
    return complex(Complex.coerce(value))


class Matrix:
    """
    Dense ``rows x cols`` matrix of complex numbers.

    Parameters
    ----------
    rows, cols:
        Matrix dimensions.
    data:
        Flat, row-major sequence of ``rows * cols`` elements. Elements may be
        :class:`Complex` or Python numbers.
    device:
        Where the backing tensor lives. Defaults to the CPU device.

    Raises
    ------
    ShapeMismatchError
        If ``len(data) != rows * cols`` or a dimension is negative.
    """

    __slots__ = ("_data",)

    def __init__(
        self,
        rows: int,
        cols: int,
        data: Sequence[Any],
        device: Device | str | None = None,
    ) -> None:
        rows, cols = int(rows), int(cols)
        if rows < 0 or cols < 0:
            raise ShapeMismatchError(
                f"Matrix dimensions must be non-negative, got {rows}x{cols}"
            )
        values = [_to_builtin_complex(v) for v in data]
        if len(values) != rows * cols:
            raise ShapeMismatchError(
                f"Matrix of shape {rows}x{cols} needs {rows * cols} elements, "
                f"got {len(values)}"
            )

        dev = resolve_device(device)
        tensor = torch.tensor(
            values, dtype=dev.complex_dtype, device=dev.as_torch_device()
        )
        self._data = tensor.reshape(rows, cols)

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def _wrap(cls, tensor: torch.Tensor) -> "Matrix":
        """Adopt an already-owned 2-D tensor without copying it."""
        obj = cls.__new__(cls)
        obj._data = tensor
        return obj

    @classmethod
    def zeros(
        cls, rows: int, cols: int, device: Device | str | None = None
    ) -> "Matrix":
        """Return a ``rows x cols`` matrix filled with ``0 + 0i``."""
        if rows < 0 or cols < 0:
            raise ShapeMismatchError(
                f"Matrix dimensions must be non-negative, got {rows}x{cols}"
            )
        dev = resolve_device(device)
        return cls._wrap(
            torch.zeros(
                (rows, cols),
                dtype=dev.complex_dtype,
                device=dev.as_torch_device(),
            )
        )

    @classmethod
    def identity(cls, size: int, device: Device | str | None = None) -> "Matrix":
        """Return the ``size x size`` identity matrix."""
        if size < 0:
            raise ShapeMismatchError(f"Identity size must be non-negative, got {size}")
        dev = resolve_device(device)
        return cls._wrap(
            torch.eye(size, dtype=dev.complex_dtype, device=dev.as_torch_device())
        )

    @classmethod
    def from_rows(
        cls,
        rows: Iterable[Iterable[Any]] | np.ndarray,
        device: Device | str | None = None,
    ) -> "Matrix":
        """
        Build a matrix from a sequence of equal-length rows.

        >>> Matrix.from_rows([[0, 1], [1, 0]]).shape
        (2, 2)

        Raises
        ------
        ShapeMismatchError
            If the rows are ragged, or a numpy array is not 2-D.
        """
        if isinstance(rows, np.ndarray):
            if rows.ndim != 2:
                raise ShapeMismatchError(
                    f"Expected a 2-D array, got shape {rows.shape}"
                )
            return cls.from_tensor(torch.from_numpy(rows.astype(np.complex128)), device)

        materialized = [list(row) for row in rows]
        if not materialized:
            return cls.zeros(0, 0, device)
        n_cols = len(materialized[0])
        for index, row in enumerate(materialized):
            if len(row) != n_cols:
                raise ShapeMismatchError(
                    f"Row {index} has {len(row)} elements, expected {n_cols}"
                )
        flat = [value for row in materialized for value in row]
        return cls(len(materialized), n_cols, flat, device)

    @classmethod
    def column_vector(
        cls, values: Sequence[Any], device: Device | str | None = None
    ) -> "Matrix":
        """Build a ``len(values) x 1`` column matrix."""
        return cls(len(values), 1, values, device)

    @classmethod
    def from_tensor(
        cls, tensor: torch.Tensor, device: Device | str | None = None
    ) -> "Matrix":
        """Copy a 2-D tensor into a new matrix."""
        if tensor.dim() != 2:
            raise ShapeMismatchError(
                f"Expected a 2-D tensor, got shape {tuple(tensor.shape)}"
            )
        dev = resolve_device(device)
        copied = tensor.detach().to(
            dtype=dev.complex_dtype, device=dev.as_torch_device(), copy=True
        )
        return cls._wrap(copied.contiguous())

    # ------------------------------------------------------------------
    # Shape and element access
    # ------------------------------------------------------------------

    @property
    def rows(self) -> int:
        return int(self._data.shape[0])

    @property
    def cols(self) -> int:
        return int(self._data.shape[1])

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.rows, self.cols)

    @property
    def is_square(self) -> bool:
        return self.rows == self.cols

    @property
    def device(self) -> torch.device:
        return self._data.device

    def _check_index(self, row: int, col: int) -> None:
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexOutOfBoundsError(
                f"Index ({row}, {col}) is out of bounds for a "
                f"{self.rows}x{self.cols} matrix"
            )

    def get(self, row: int, col: int) -> Complex:
        """Return the element at ``(row, col)``."""
        self._check_index(row, col)
        return Complex.coerce(self._data[row, col].item())

    def set(self, row: int, col: int, value: Any) -> None:
        """Overwrite the element at ``(row, col)`` in place."""
        self._check_index(row, col)
        self._data[row, col] = _to_builtin_complex(value)

    def __getitem__(self, index: Tuple[int, int]) -> Complex:
        row, col = index
        return self.get(row, col)

    def __setitem__(self, index: Tuple[int, int], value: Any) -> None:
        row, col = index
        self.set(row, col, value)

    # ------------------------------------------------------------------
    # Algebra
    # ------------------------------------------------------------------

    def transpose(self) -> "Matrix":
        return Matrix._wrap(self._data.t().clone(memory_format=torch.contiguous_format))

    def hermitian_transpose(self) -> "Matrix":
        """Transpose combined with element-wise complex conjugation."""
        return Matrix._wrap(
            torch.conj_physical(self._data).t().clone(
                memory_format=torch.contiguous_format
            )
        )

    def dot_product(self, rhs: "Matrix") -> "Matrix":
        """
        Standard matrix product ``self @ rhs``.

        Raises
        ------
        DimensionMismatchError
            If ``self.cols != rhs.rows``.
        """
        if self.cols != rhs.rows:
            raise DimensionMismatchError(
                f"Cannot multiply {self.rows}x{self.cols} by "
                f"{rhs.rows}x{rhs.cols}: inner dimensions differ"
            )
        return Matrix._wrap(torch.matmul(self._data, rhs._data))

    def tensor_product(self, rhs: "Matrix") -> "Matrix":
        """
        Kronecker product ``self ⊗ rhs``.

        Entry ``(i * rhs.rows + k, j * rhs.cols + l)`` of the result equals
        ``self[i, j] * rhs[k, l]``, so ``self`` supplies the more significant
        part of both row and column indices.
        """
        return Matrix._wrap(torch.kron(self._data, rhs._data).contiguous())

    def embed(self, inner: "Matrix", row_offset: int, col_offset: int) -> None:
        """
        Copy ``inner`` into this matrix with its top-left corner at
        ``(row_offset, col_offset)``. Mutates in place.

        Raises
        ------
        DimensionMismatchError
            If ``inner`` does not fit inside the remaining extent.
        """
        if (
            row_offset < 0
            or col_offset < 0
            or row_offset + inner.rows > self.rows
            or col_offset + inner.cols > self.cols
        ):
            raise DimensionMismatchError(
                f"Cannot embed a {inner.rows}x{inner.cols} matrix at "
                f"({row_offset}, {col_offset}) into a {self.rows}x{self.cols} matrix"
            )
        self._data[
            row_offset : row_offset + inner.rows,
            col_offset : col_offset + inner.cols,
        ] = inner._data.to(self._data.device)

    def scale(self, scalar: Any) -> "Matrix":
        """Multiply every element by ``scalar``."""
        return Matrix._wrap(self._data * _to_builtin_complex(scalar))

    def _check_same_shape(self, other: "Matrix", op: str) -> None:
        if self.shape != other.shape:
            raise DimensionMismatchError(
                f"Cannot {op} a {self.rows}x{self.cols} matrix and a "
                f"{other.rows}x{other.cols} matrix"
            )

    def __add__(self, other: "Matrix") -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        self._check_same_shape(other, "add")
        return Matrix._wrap(self._data + other._data)

    def __sub__(self, other: "Matrix") -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        self._check_same_shape(other, "subtract")
        return Matrix._wrap(self._data - other._data)

    def __neg__(self) -> "Matrix":
        return Matrix._wrap(-self._data)

    def __matmul__(self, other: "Matrix") -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.dot_product(other)

    def __mul__(self, scalar: Any) -> "Matrix":
        if isinstance(scalar, Matrix):
            return NotImplemented
        try:
            return self.scale(scalar)
        except TypeError:
            return NotImplemented

    __rmul__ = __mul__

    # ------------------------------------------------------------------
    # Comparison and conversion
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and bool(
            torch.equal(self._data, other._data.to(self._data.device))
        )

    __hash__ = None  # type: ignore[assignment]

    def allclose(self, other: "Matrix", atol: float = 1e-9) -> bool:
        """Element-wise comparison within an absolute tolerance."""
        if self.shape != other.shape:
            return False
        return bool(
            torch.allclose(
                self._data, other._data.to(self._data.device), rtol=0.0, atol=atol
            )
        )

    def to_tensor(self) -> torch.Tensor:
        """Return a copy of the backing ``(rows, cols)`` tensor."""
        return self._data.clone()

    def to_numpy(self) -> np.ndarray:
        """Return a ``complex128`` numpy copy of the matrix."""
        return np.array(self._data.detach().cpu().numpy(), dtype=np.complex128, copy=True)

    def to(self, device: Device | str) -> "Matrix":
        """Return a copy placed on ``device``."""
        return Matrix.from_tensor(self._data, device)

    def tolist(self) -> List[List[Complex]]:
        """Return the elements as nested lists of :class:`Complex`."""
        return [
            [Complex.coerce(value) for value in row] for row in self._data.tolist()
        ]

    def __str__(self) -> str:
        lines = [
            "[" + " ".join(str(value) for value in row) + "]"
            for row in self.tolist()
        ]
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"Matrix(rows={self.rows}, cols={self.cols})\n{self}"


__all__ = ["Matrix"]
