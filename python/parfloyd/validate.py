from .matrix import DistanceMatrix, check_range, from_array
from .options import Options

def check_matrix(arg, check_values=True):
    if isinstance(arg, DistanceMatrix):
        # The buffer may have been written directly, bypassing the checks of
        # the constructors.
        if check_values:
            check_range(arg.buf, arg.dtype)
        return arg
    elif hasattr(arg, "__array_interface__") or hasattr(arg, "__array__"):
        # The resulting matrix shares memory with the argument, so the
        # in-place updates of the engines are visible to the caller.
        return from_array(arg)
    else:
        raise ValueError(f"Argument has unsupported type {type(arg)}")

def check_options(opts):
    if opts is None:
        return Options()
    elif not isinstance(opts, Options):
        raise ValueError(f"The 'opts' argument should be of type Options, found {type(opts)}")
    if not isinstance(opts.workers, int) or opts.workers < 1:
        raise ValueError(f"The number of workers must be a positive integer (got {opts.workers})")
    if not isinstance(opts.repeat, int) or opts.repeat < 1:
        raise ValueError(f"The repetition factor must be a positive integer (got {opts.repeat})")
    return opts
