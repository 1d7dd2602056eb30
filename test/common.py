import parfloyd
import pytest
import shutil
import tempfile
import torch
import warnings

# Compile the CUDA runtime library into a fresh cache directory, as the
# caching assumes the library source is fixed.
parfloyd.state.set_cache_path(tempfile.mkdtemp(prefix="parfloyd-test-"))

# Use all backends declared in the library
backends = parfloyd.backend.backends

if torch.cuda.is_available() and not shutil.which("nvcc"):
    msg = "CUDA is available on this machine, but the Nvidia CUDA compiler " +\
          "(nvcc) could not be found. Please ensure 'nvcc' is included in " +\
          "the path to enable the CUDA backend."
    warnings.warn(msg, category=RuntimeWarning)

def run_if_backend_is_enabled(backend, fn):
    if parfloyd.backend.is_enabled(backend):
        return fn()
    else:
        pytest.skip(f"{backend} is not enabled")

# Short-hand for the options passed to the parallel engines. The fast memory
# budget is left at the backend default.
def par_opts(backend, workers):
    opts = parfloyd.par(workers)
    opts.backend = backend
    opts.verbose_backend_resolution = True
    return opts

INF = parfloyd.types.I32.inf

# Shortest paths of the 3-vertex example graph.
SCENARIO_INPUT = [[0, 3, 8], [INF, 0, 1], [4, INF, 0]]
SCENARIO_OUTPUT = [[0, 3, 4], [5, 0, 1], [4, 7, 0]]
