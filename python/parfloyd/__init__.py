from . import backend
from . import matrix
from . import state
from . import types
from . import verify

from .engines import capacity, direct, max_staged_size, staged
from .matrix import DistanceMatrix
from .options import Backend, Options, par, seq
from .sequential import sequential
from .workgroup import CapacityError

__version__ = "0.1.0"

def clear_cache():
    """
    Removes the compiled CUDA runtime libraries from the cache directory.
    """
    from .compile import clear_cache
    clear_cache()
