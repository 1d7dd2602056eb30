import os
import shutil
import subprocess
import torch
from pathlib import Path
from .state import get_cache_path

def _cache_path():
    path = Path(get_cache_path())
    path.mkdir(parents=True, exist_ok=True)
    return path

def clear_cache():
    path = _cache_path()
    shutil.rmtree(f"{path}")
    path.mkdir(parents=True, exist_ok=True)

def get_library_path(key):
    return _cache_path() / f"{key}-lib.so"

def is_cached(key):
    return os.path.isfile(get_library_path(key))

def cuda_arch():
    # Generate code specialized for the version of the current GPU.
    major, minor = torch.cuda.get_device_capability()
    return f"sm_{major}{minor}"

def cuda_flags(arch):
    return ["-O3", "--shared", "-Xcompiler", "-fPIC", f"-arch={arch}", "-std=c++17"]

def build_cuda_shared_library(key, src_path, flags):
    libpath = get_library_path(key)
    if not torch.cuda.is_available():
        raise RuntimeError(f"Torch was not built with CUDA support")
    if not shutil.which("nvcc"):
        raise RuntimeError(f"Could not find 'nvcc' in path, which is required to compile the CUDA runtime library")

    cmd = ["nvcc"] + flags + ["-x", "cu", str(src_path), "-o", str(libpath)]
    r = subprocess.run(cmd, capture_output=True)
    if r.returncode != 0:
        stdout = r.stdout.decode('ascii')
        stderr = r.stderr.decode('ascii')
        raise RuntimeError(f"Compilation of the CUDA runtime library failed with exit code {r.returncode}:\nstdout:\n{stdout}\nstderr:\n{stderr}")
    return libpath
