# We import NumPy and parfloyd. In this example, the distance matrix is stored
# in a NumPy array which the engines update in place.
import numpy as np
import parfloyd

# A missing edge is represented by the 'inf' sentinel of the element type. It
# is half the largest 32-bit integer, so adding two of them cannot overflow.
INF = parfloyd.types.I32.inf
d = np.array([
    [0, 3, 8],
    [INF, 0, 1],
    [4, INF, 0],
], dtype=np.int32)

# The sequential engine is the reference implementation.
ref = d.copy()
parfloyd.sequential(ref)
print(f"Shortest distances:\n{ref}")

# The parallel engines take their configuration via the 'opts' keyword
# argument. We use 'parfloyd.par' to run them with a single work-group of four
# workers. Each worker handles every fourth column of each row.
for engine in [parfloyd.direct, parfloyd.staged]:
    x = d.copy()
    engine(x, opts=parfloyd.par(4))
    assert np.array_equal(x, ref)

assert ref.tolist() == [[0, 3, 4], [5, 0, 1], [4, 7, 0]]
print("Test OK")
