import ctypes
import pathlib

PARFLOYD_NATIVE_PATH = pathlib.Path(__file__).parent / "native"
PARFLOYD_CUDA_SRC_PATH = PARFLOYD_NATIVE_PATH / "parfloyd_cuda.cu"

ENTRY_POINTS = [
    f"parfloyd_{kind}_{ctype}"
    for kind in ["direct", "staged"]
    for ctype in ["int32_t", "int64_t"]
]

lib = None

def _check_errors(lib, rescode):
    if rescode != 0:
        msg = lib.parfloyd_get_error_message().decode('ascii')
        raise RuntimeError(f"Runtime library error: {msg} (code={rescode})")

def _check_query(lib, value):
    if value < 0:
        msg = lib.parfloyd_get_error_message().decode('ascii')
        raise RuntimeError(f"Runtime library error: {msg}")
    return value

def init_library(libpath):
    lib = ctypes.cdll.LoadLibrary(libpath)
    for name in ENTRY_POINTS:
        fn = getattr(lib, name)
        fn.argtypes = [ctypes.c_void_p, ctypes.c_int64, ctypes.c_int64, ctypes.c_int64]
        fn.restype = ctypes.c_int32
    lib.parfloyd_sync.argtypes = []
    lib.parfloyd_sync.restype = ctypes.c_int32
    lib.parfloyd_max_shared_mem_per_block.argtypes = []
    lib.parfloyd_max_shared_mem_per_block.restype = ctypes.c_int64
    lib.parfloyd_max_threads_per_block.argtypes = []
    lib.parfloyd_max_threads_per_block.restype = ctypes.c_int64
    lib.parfloyd_get_error_message.argtypes = []
    lib.parfloyd_get_error_message.restype = ctypes.c_char_p
    return lib

def _compile_cuda_runtime_lib(cache=True):
    import os
    from .compile import build_cuda_shared_library, cuda_arch, cuda_flags, get_library_path, is_cached
    from .key import _generate_library_key
    with open(PARFLOYD_CUDA_SRC_PATH) as f:
        source = f.read()
    flags = cuda_flags(cuda_arch())
    key = _generate_library_key(source, flags)
    if not is_cached(key):
        build_cuda_shared_library(key, PARFLOYD_CUDA_SRC_PATH, flags)
    libpath = get_library_path(key)
    lib = init_library(libpath)
    # Remove the shared library if caching is not enabled
    if not cache:
        os.remove(libpath)
    return lib

def get_runtime_lib(cache=True):
    """
    Compiles the CUDA runtime library unless it has already been loaded.
    """
    global lib
    if lib is None:
        from .backend import is_enabled
        from .options import Backend
        if not is_enabled(Backend.Cuda):
            raise RuntimeError(f"Cannot build runtime library for {Backend.Cuda} as it is disabled")
        lib = _compile_cuda_runtime_lib(cache)
    return lib

def sync():
    """
    Waits until all running kernels on the device complete.
    """
    lib = get_runtime_lib()
    _check_errors(lib, lib.parfloyd_sync())

def max_shared_mem_per_block():
    lib = get_runtime_lib()
    return _check_query(lib, lib.parfloyd_max_shared_mem_per_block())

def max_threads_per_block():
    lib = get_runtime_lib()
    return _check_query(lib, lib.parfloyd_max_threads_per_block())

def launch(kind, m, workers, repeat, cache=True):
    """
    Runs the direct or staged kernel on the device with a single block of
    'workers' threads. The matrix is copied to device memory before the
    launch and back into the host buffer afterwards.
    """
    import torch
    lib = get_runtime_lib(cache)
    fn = getattr(lib, f"parfloyd_{kind}_{m.dtype.ctype}")
    t = torch.empty(m.buf.shape, dtype=m.dtype.to_torch(), device='cuda')
    t.copy_(torch.from_numpy(m.buf))
    _check_errors(lib, fn(t.data_ptr(), m.n, workers, repeat))
    m.buf[:] = t.cpu().numpy()
