import threading
import numpy as np

class CapacityError(RuntimeError):
    """
    Raised when a working buffer does not fit in the fast memory available to
    a single work-group.
    """
    pass

def check_capacity(nbytes, budget):
    if nbytes > budget:
        raise CapacityError(f"Working buffer of {nbytes} bytes exceeds the "
                            f"{budget} bytes of fast memory available to a work-group")

class WorkGroup:
    """
    A single group of worker threads executing one kernel. The workers of a
    group can only synchronize through the group-wide barrier, and they share
    the fast memory allocated through 'shared'. Launching a kernel blocks
    until all workers have finished.
    """
    def __init__(self, size, shared_mem_bytes):
        if size < 1:
            raise ValueError(f"A work-group must contain at least one worker (got {size})")
        self.size = size
        self.shared_mem_bytes = shared_mem_bytes
        self._barrier = threading.Barrier(size)
        self._lock = threading.Lock()
        self._shared = {}

    def barrier(self):
        self._barrier.wait()

    def shared(self, name, shape, dtype):
        """
        Returns the group-private buffer with the given name. It is allocated
        by the first worker asking for it and lives until the launch ends.
        """
        with self._lock:
            if name not in self._shared:
                dtype = np.dtype(dtype)
                nbytes = int(np.prod(shape)) * dtype.itemsize
                used = sum(b.nbytes for b in self._shared.values())
                check_capacity(used + nbytes, self.shared_mem_bytes)
                self._shared[name] = np.empty(shape, dtype=dtype)
            return self._shared[name]

    def _join(self, threads):
        for t in threads:
            t.join()
        self._barrier.reset()
        self._shared = {}

    def launch(self, kernel, *args):
        errors = []
        def worker(tid):
            try:
                kernel(tid, self, *args)
            except threading.BrokenBarrierError:
                pass
            except Exception as e:
                errors.append((tid, e))
                # Release the workers waiting on the barrier, as the failed
                # worker will never reach it.
                self._barrier.abort()

        threads = [threading.Thread(target=worker, args=(tid,)) for tid in range(self.size)]
        started = []
        try:
            for t in threads:
                t.start()
                started.append(t)
        except Exception as e:
            # The workers already running would otherwise wait forever for
            # the ones that never started.
            self._barrier.abort()
            self._join(started)
            raise RuntimeError(f"Failed to launch a work-group of {self.size} workers: {e}") from e
        self._join(started)
        if len(errors) > 0:
            tid, e = errors[0]
            raise RuntimeError(f"Worker {tid} of the work-group failed: {e}") from e

def launch(kernel, size, shared_mem_bytes, *args):
    WorkGroup(size, shared_mem_bytes).launch(kernel, *args)
