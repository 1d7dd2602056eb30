import collections
import itertools
import numpy as np
from .validate import check_matrix

Mismatch = collections.namedtuple("Mismatch", ["i", "j", "expected", "actual"])

def compare(expected, actual):
    """
    Returns the first position, in row-major order, at which the two distance
    matrices differ, or None if they are equal.
    """
    expected = check_matrix(expected, False)
    actual = check_matrix(actual, False)
    if expected.shape != actual.shape:
        raise ValueError(f"Cannot compare matrices of shapes {expected.shape} and {actual.shape}")
    diff = np.flatnonzero(expected.buf != actual.buf)
    if len(diff) == 0:
        return None
    i, j = divmod(int(diff[0]), expected.n)
    return Mismatch(i, j, expected[i, j], actual[i, j])

def check_results(reference, results):
    """
    Checks every named result against the reference and against each other.
    Returns a list of (name, mismatch) pairs, which is empty when all results
    agree.
    """
    failures = []
    for name, m in results.items():
        mismatch = compare(reference, m)
        if mismatch is not None:
            failures.append((name, mismatch))
    for (lname, l), (rname, r) in itertools.combinations(results.items(), 2):
        mismatch = compare(l, r)
        if mismatch is not None:
            failures.append((f"{lname} vs {rname}", mismatch))
    return failures

def format_mismatch(name, mismatch):
    return (f"Mismatch in {name} at ({mismatch.i}, {mismatch.j}): "
            f"expected {mismatch.expected}, found {mismatch.actual}")
