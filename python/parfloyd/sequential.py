import numpy as np

def sequential(m, repeat=1):
    """
    Reference implementation of Floyd-Warshall. Mutates the distance matrix in
    place. The loop over the intermediate vertex 'k' is the outermost loop and
    runs in increasing order; for a fixed 'k', all pairs (i, j) are relaxed at
    once.
    """
    from .validate import check_matrix
    m = check_matrix(m)
    n = m.n
    a = m.numpy()
    for _ in range(repeat):
        for k in range(n):
            # The sum is computed into a temporary before any element of 'a' is
            # overwritten, and row 'k' and column 'k' are fixed points of this
            # pass since the diagonal is non-negative.
            np.minimum(a, a[:, k, None] + a[None, k, :], out=a)
