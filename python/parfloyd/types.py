import numpy as np

class ElemType:
    """
    Integer element type of a distance matrix. The 'inf' sentinel is half the
    maximum value of the type, so adding two sentinels can never overflow.
    """
    def __init__(self, name, np_dtype, ctype):
        self.name = name
        self.np_dtype = np.dtype(np_dtype)
        self.ctype = ctype
        self.inf = int(np.iinfo(self.np_dtype).max) // 2

    def __repr__(self):
        return self.name

    def __eq__(self, other):
        return isinstance(other, ElemType) and self.name == other.name

    def __hash__(self):
        return hash(self.name)

    def size(self):
        return self.np_dtype.itemsize

    def to_numpy(self):
        return self.np_dtype

    def to_torch(self):
        import torch
        if self.np_dtype == np.int32:
            return torch.int32
        return torch.int64

I32 = ElemType("I32", np.int32, "int32_t")
I64 = ElemType("I64", np.int64, "int64_t")

elem_types = [I32, I64]

def from_numpy(dtype):
    dtype = np.dtype(dtype)
    for ty in elem_types:
        if ty.np_dtype == dtype:
            return ty
    raise ValueError(f"Unsupported element type {dtype} (expected int32 or int64)")
