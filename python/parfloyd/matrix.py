import math
import numpy as np
from . import types
from .types import I32, ElemType

def _resolve_dtype(dtype):
    """
    Resolves the provided dtype - provided to allow users to construct
    matrices using either the types of the 'parfloyd.types' module or numpy
    dtypes.
    """
    if dtype is None:
        return None
    elif isinstance(dtype, ElemType):
        return dtype
    else:
        return types.from_numpy(dtype)

def _check_array_interface(intf):
    shape = intf["shape"]
    dtype = types.from_numpy(intf["typestr"])

    # We require the data pointer to be provided as part of the interface.
    if "data" in intf:
        _, ro = intf["data"]
        if ro == True:
            raise ValueError(f"Cannot construct distance matrix from read-only memory")
    else:
        raise ValueError(f"Buffer protocol not supported")

    # The engines address the matrix as one flat row-major buffer.
    if "strides" in intf and intf["strides"] is not None:
        raise ValueError(f"Distance matrices must be contiguous in memory")

    if len(shape) != 2 or shape[0] != shape[1]:
        raise ValueError(f"Distance matrix must be square, found shape {shape}")

    return shape, dtype

def _extract_array(a):
    if hasattr(a, "__cuda_array_interface__"):
        raise ValueError(f"Cannot construct distance matrix from device memory")
    elif isinstance(a, np.ndarray):
        return a
    elif hasattr(a, "__array_interface__") or hasattr(a, "__array__"):
        # A CPU torch tensor shares its memory with the array returned here.
        return np.asarray(a)
    else:
        raise ValueError(f"Cannot convert argument of type {type(a)} to a distance matrix")

def from_array(a, dtype=None):
    """
    Wraps a square, contiguous two-dimensional integer array as a distance
    matrix without copying it, so the engines mutate the caller's data.
    """
    arr = _extract_array(a)
    shape, elem_ty = _check_array_interface(arr.__array_interface__)
    dtype = _resolve_dtype(dtype)
    if dtype is not None and dtype != elem_ty:
        raise ValueError(f"Expected matrix of type {dtype}, found {elem_ty}")
    buf = arr.reshape(-1)
    check_range(buf, elem_ty)
    return DistanceMatrix(buf, shape[0], elem_ty, src=a)

def from_rows(rows, dtype=I32):
    """
    Constructs a distance matrix from nested lists, where a missing edge is
    written as None or math.inf.
    """
    dtype = _resolve_dtype(dtype)
    n = len(rows)
    m = zeros(n, dtype)
    for i, row in enumerate(rows):
        if len(row) != n:
            raise ValueError(f"Row {i} has {len(row)} entries, expected {n}")
        for j, v in enumerate(row):
            if v is None or v == math.inf:
                v = dtype.inf
            m[i, j] = v
    return m

def check_range(buf, dtype):
    if buf.size > 0 and (buf.min() < 0 or buf.max() > dtype.inf):
        raise ValueError(f"Distances must be in the range [0, {dtype.inf}]")

def zeros(n, dtype=I32):
    dtype = _resolve_dtype(dtype)
    if n < 0:
        raise ValueError(f"Cannot construct distance matrix of negative size {n}")
    return DistanceMatrix(np.zeros(n * n, dtype=dtype.to_numpy()), n, dtype)

def full(n, value, dtype=I32):
    m = zeros(n, dtype)
    if value < 0 or value > m.dtype.inf:
        raise ValueError(f"Distances must be in the range [0, {m.dtype.inf}]")
    m.buf.fill(value)
    return m

def random(n, bound=100, seed=None, dtype=I32):
    """
    Generates a dense distance matrix with weights drawn uniformly from
    [0, bound). The diagonal is not treated specially.
    """
    dtype = _resolve_dtype(dtype)
    if bound < 1 or bound > dtype.inf:
        raise ValueError(f"The weight bound must be in the range [1, {dtype.inf}]")
    rng = np.random.default_rng(seed)
    buf = rng.integers(0, bound, size=n * n, dtype=dtype.to_numpy())
    return DistanceMatrix(buf, n, dtype)

class DistanceMatrix:
    """
    An n x n matrix of distances stored as a single flat row-major buffer.
    The element at (i, j) is found at offset i*n + j.
    """
    def __init__(self, buf, n, dtype, src=None):
        self.buf = buf
        self.n = n
        self.dtype = _resolve_dtype(dtype)
        self.src = src

    @property
    def shape(self):
        return (self.n, self.n)

    @property
    def inf(self):
        return self.dtype.inf

    def __getitem__(self, idx):
        i, j = idx
        return int(self.buf[i * self.n + j])

    def __setitem__(self, idx, value):
        i, j = idx
        if value < 0 or value > self.dtype.inf:
            raise ValueError(f"Distances must be in the range [0, {self.dtype.inf}]")
        self.buf[i * self.n + j] = value

    def __eq__(self, other):
        if not isinstance(other, DistanceMatrix):
            return NotImplemented
        return self.n == other.n and np.array_equal(self.buf, other.buf)

    def __repr__(self):
        return f"DistanceMatrix(n={self.n}, dtype={self.dtype})"

    def size(self):
        return self.n * self.n * self.dtype.size()

    def numpy(self):
        return self.buf.reshape(self.n, self.n)

    def torch(self):
        import torch
        return torch.from_numpy(self.numpy())

    def copy(self):
        return DistanceMatrix(self.buf.copy(), self.n, self.dtype)

    def tolist(self):
        return self.numpy().tolist()
