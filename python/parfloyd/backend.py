from .options import Backend
import shutil
import torch

backends = [
    Backend.Threads,
    Backend.Cuda,
]

def assert_cuda_is_enabled():
    if not torch.cuda.is_available():
        raise RuntimeError(f"Torch was not built with CUDA support")
    if not shutil.which("nvcc"):
        raise RuntimeError(f"Could not find 'nvcc' in path - it is required to build the CUDA runtime library")

def is_enabled(backend, verbose=False):
    try:
        if backend == Backend.Threads:
            pass
        elif backend == Backend.Cuda:
            assert_cuda_is_enabled()
        else:
            raise RuntimeError(f"Unsupported backend {backend}")
        return True
    except RuntimeError as e:
        if verbose:
            print(f"Backend {backend} is not enabled: {e}")
        return False

# Determine the list of available backends once, so we do not have to do this
# every time we want to resolve the backend.
available = [b for b in backends if is_enabled(b, False)]

# Resolves the backend of the provided options. The 'Auto' backend prefers the
# GPU when one can be used and falls back to the CPU work-group otherwise. An
# explicitly requested backend must be available.
def resolve(opts):
    if opts.verbose_backend_resolution:
        [b for b in backends if is_enabled(b, True)]
    if opts.backend == Backend.Auto:
        if Backend.Cuda in available:
            opts.backend = Backend.Cuda
        else:
            opts.backend = Backend.Threads
        return opts
    elif opts.backend not in available:
        raise RuntimeError(f"Specified backend {opts.backend} is not available. For " +
                            "more information, enable the 'verbose_backend_resolution' " +
                            "flag in the options.")
    else:
        return opts
