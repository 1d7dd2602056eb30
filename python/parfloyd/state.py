import os

# Fast memory of a single CPU work-group. Matches the 48 KiB of static shared
# memory a CUDA thread block gets by default.
DEFAULT_SHARED_MEM_BYTES = 48 * 1024

backend_name = os.getenv("PARFLOYD_BACKEND", "auto").lower()
shared_mem_bytes = int(os.getenv("PARFLOYD_SHARED_MEM_BYTES", DEFAULT_SHARED_MEM_BYTES))
cache_path = os.getenv("PARFLOYD_CACHE_PATH", f"{os.path.expanduser('~')}/.cache/parfloyd")

def get_backend_name():
    return backend_name

def set_backend_name(name):
    global backend_name
    backend_name = name.lower()

def get_shared_mem_bytes():
    return shared_mem_bytes

def set_shared_mem_bytes(nbytes):
    global shared_mem_bytes
    if nbytes < 0:
        raise ValueError(f"The fast memory budget must be non-negative (got {nbytes})")
    shared_mem_bytes = nbytes

def get_cache_path():
    return cache_path

def set_cache_path(path):
    global cache_path
    cache_path = str(path)
