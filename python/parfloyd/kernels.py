import numpy as np

# Kernels executed by each worker of a CPU work-group. Worker 'tid' of a group
# of W workers owns columns tid, tid+W, tid+2W, ... of every row. With the
# matrix stored as a flat row-major buffer, this share of row 'i' is the
# strided slice buf[i*n+tid : (i+1)*n : W].

def _relax(tid, group, a, n, repeat):
    W = group.size
    for _ in range(repeat):
        for k in range(n):
            krow = a[k*n+tid:(k+1)*n:W]
            for i in range(n):
                row = a[i*n+tid:(i+1)*n:W]
                np.minimum(row, a[i*n+k] + krow, out=row)
            # Every relaxation using 'k' as the intermediate vertex must be
            # visible to all workers before any of them proceeds to 'k+1'.
            group.barrier()

def direct_kernel(tid, group, buf, n, repeat):
    _relax(tid, group, buf, n, repeat)

def staged_kernel(tid, group, buf, n, repeat):
    W = group.size
    work = group.shared("work", (n*n,), buf.dtype)

    # Stage in our share of every row from the shared matrix.
    for i in range(n):
        work[i*n+tid:(i+1)*n:W] = buf[i*n+tid:(i+1)*n:W]
    group.barrier()

    _relax(tid, group, work, n, repeat)

    # Stage out. The launch ends when all workers have written their share,
    # so no barrier is needed here.
    for i in range(n):
        buf[i*n+tid:(i+1)*n:W] = work[i*n+tid:(i+1)*n:W]
