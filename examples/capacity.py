# The staged engine copies the whole matrix into the fast memory of its
# work-group, so it only accepts matrices that fit. We can query the largest
# size up front instead of handling the error.
import parfloyd

opts = parfloyd.par(32)
nbytes = parfloyd.capacity(opts)
print(f"Fast memory of a work-group on {opts.backend}: {nbytes} bytes")

n = parfloyd.max_staged_size(parfloyd.types.I32, opts)
print(f"Largest 32-bit matrix that can be staged: {n} x {n}")

m = parfloyd.matrix.random(n, seed=1234)
parfloyd.staged(m, opts=opts)

# One more row and column no longer fits, and the engine refuses to run.
try:
    parfloyd.staged(parfloyd.matrix.random(n + 1), opts=opts)
except parfloyd.CapacityError as e:
    print(f"Rejected: {e}")
