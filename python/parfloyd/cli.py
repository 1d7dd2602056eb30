import sys

USAGE = "usage: python -m parfloyd <matrix size> <workers per group>"

def _parse_positive(name, s):
    try:
        v = int(s)
    except ValueError:
        raise ValueError(f"The {name} must be a positive integer (got '{s}')")
    if v < 1:
        raise ValueError(f"The {name} must be a positive integer (got {v})")
    return v

def main(argv=None):
    from .bench import run
    from .verify import format_mismatch
    from .workgroup import CapacityError

    if argv is None:
        argv = sys.argv[1:]
    if len(argv) != 2:
        print(USAGE, file=sys.stderr)
        return 1
    try:
        n = _parse_positive("matrix size", argv[0])
        workers = _parse_positive("number of workers", argv[1])
        timings, mismatches = run(n, workers)
    except CapacityError as e:
        print(f"Matrix of size {argv[0]} cannot be staged: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"{e}\n{USAGE}", file=sys.stderr)
        return 1

    for r in timings:
        print(f"{r.name}: {r.ms:.3f} ms")
    for name, mismatch in mismatches:
        print(format_mismatch(name, mismatch), file=sys.stderr)
    return 2 if len(mismatches) > 0 else 0
