import numpy as np
import parfloyd
import pytest

from common import *
from parfloyd import matrix, types

engines = [parfloyd.direct, parfloyd.staged]

def reference(m):
    ref = m.copy()
    parfloyd.sequential(ref)
    return ref

@pytest.mark.parametrize('backend', backends)
@pytest.mark.parametrize('engine', engines)
@pytest.mark.parametrize('workers', [1, 2, 4])
def test_scenario(backend, engine, workers):
    def helper():
        m = matrix.from_rows(SCENARIO_INPUT)
        engine(m, opts=par_opts(backend, workers))
        assert m.tolist() == SCENARIO_OUTPUT
    run_if_backend_is_enabled(backend, helper)

@pytest.mark.parametrize('backend', backends)
@pytest.mark.parametrize('engine', engines)
@pytest.mark.parametrize('workers', [1, 3, 4, 7, 16, 32])
def test_equivalent_to_sequential(backend, engine, workers):
    def helper():
        # The size is divisible by some of the worker counts but not others,
        # and smaller than the largest ones.
        m = matrix.random(24, bound=100, seed=workers)
        ref = reference(m)
        engine(m, opts=par_opts(backend, workers))
        assert m == ref
    run_if_backend_is_enabled(backend, helper)

@pytest.mark.parametrize('backend', backends)
@pytest.mark.parametrize('engine', engines)
@pytest.mark.parametrize('workers', [1, 2, 4])
def test_single_vertex_unchanged(backend, engine, workers):
    def helper():
        m = matrix.from_rows([[9]])
        engine(m, opts=par_opts(backend, workers))
        assert m.tolist() == [[9]]
    run_if_backend_is_enabled(backend, helper)

@pytest.mark.parametrize('backend', backends)
@pytest.mark.parametrize('engine', engines)
def test_int64_matrix(backend, engine):
    def helper():
        m = matrix.random(10, bound=1000, seed=5, dtype=types.I64)
        m[0, 3] = m.inf
        ref = reference(m)
        engine(m, opts=par_opts(backend, 4))
        assert m == ref
    run_if_backend_is_enabled(backend, helper)

@pytest.mark.parametrize('backend', backends)
@pytest.mark.parametrize('engine', engines)
def test_idempotent(backend, engine):
    def helper():
        m = matrix.random(16, seed=11)
        engine(m, opts=par_opts(backend, 4))
        converged = m.copy()
        engine(m, opts=par_opts(backend, 4))
        assert m == converged
    run_if_backend_is_enabled(backend, helper)

@pytest.mark.parametrize('backend', backends)
@pytest.mark.parametrize('engine', engines)
def test_repeat(backend, engine):
    def helper():
        m = matrix.random(8, seed=2)
        ref = reference(m)
        opts = par_opts(backend, 3)
        opts.repeat = 3
        engine(m, opts=opts)
        assert m == ref
    run_if_backend_is_enabled(backend, helper)

@pytest.mark.parametrize('backend', backends)
@pytest.mark.parametrize('engine', engines)
def test_numpy_argument(backend, engine):
    def helper():
        a = np.array(SCENARIO_INPUT, dtype=np.int32)
        engine(a, opts=par_opts(backend, 2))
        assert a.tolist() == SCENARIO_OUTPUT
    run_if_backend_is_enabled(backend, helper)

@pytest.mark.parametrize('engine', engines)
@pytest.mark.parametrize('workers', [0, -1])
def test_invalid_worker_count(engine, workers):
    m = matrix.random(4, seed=0)
    with pytest.raises(ValueError) as e_info:
        engine(m, opts=parfloyd.par(workers, backend=parfloyd.Backend.Threads))
    assert e_info.match("number of workers must be a positive integer")

@pytest.mark.parametrize('engine', engines)
def test_invalid_repeat(engine):
    m = matrix.random(4, seed=0)
    opts = parfloyd.par(2, backend=parfloyd.Backend.Threads, repeat=0)
    with pytest.raises(ValueError) as e_info:
        engine(m, opts=opts)
    assert e_info.match("repetition factor")

@pytest.mark.parametrize('engine', engines)
def test_buffer_written_out_of_range(engine):
    m = matrix.full(4, 1)
    m.buf[2] = -5
    with pytest.raises(ValueError) as e_info:
        engine(m, opts=parfloyd.par(2, backend=parfloyd.Backend.Threads))
    assert e_info.match("Distances must be in the range")

def test_invalid_options_type():
    m = matrix.random(4, seed=0)
    with pytest.raises(ValueError):
        parfloyd.direct(m, opts={'workers': 2})

@pytest.mark.parametrize('backend', backends)
def test_staged_capacity_rejected_before_running(backend):
    def helper():
        m = matrix.random(6, seed=0)
        before = m.copy()
        opts = par_opts(backend, 2)
        opts.shared_mem_bytes = 6 * 6 * 4 - 1
        with pytest.raises(parfloyd.CapacityError) as e_info:
            parfloyd.staged(m, opts=opts)
        assert e_info.match("exceeds the .* bytes of fast memory")
        assert m == before
    run_if_backend_is_enabled(backend, helper)

@pytest.mark.parametrize('backend', backends)
def test_staged_exact_capacity(backend):
    def helper():
        m = matrix.random(6, seed=0)
        ref = reference(m)
        opts = par_opts(backend, 2)
        opts.shared_mem_bytes = 6 * 6 * 4
        parfloyd.staged(m, opts=opts)
        assert m == ref
    run_if_backend_is_enabled(backend, helper)

def test_direct_ignores_capacity():
    m = matrix.random(6, seed=0)
    ref = reference(m)
    opts = parfloyd.par(2, backend=parfloyd.Backend.Threads, shared_mem_bytes=0)
    parfloyd.direct(m, opts=opts)
    assert m == ref

def test_max_staged_size_threads():
    opts = parfloyd.par(4, backend=parfloyd.Backend.Threads)
    n = parfloyd.max_staged_size(types.I32, opts)
    budget = parfloyd.state.get_shared_mem_bytes()
    assert parfloyd.capacity(opts) == budget
    assert n * n * 4 <= budget
    assert (n + 1) * (n + 1) * 4 > budget
    with pytest.raises(parfloyd.CapacityError):
        parfloyd.staged(matrix.random(n + 1, seed=0), opts=opts)

def test_capacity_error_is_runtime_error():
    assert issubclass(parfloyd.CapacityError, RuntimeError)

def test_auto_backend_resolution():
    opts = parfloyd.par(2, backend=parfloyd.Backend.Auto)
    m = matrix.from_rows(SCENARIO_INPUT)
    parfloyd.direct(m, opts=opts)
    assert opts.backend in parfloyd.backend.available
    assert m.tolist() == SCENARIO_OUTPUT

def test_unavailable_backend():
    if parfloyd.backend.is_enabled(parfloyd.Backend.Cuda):
        pytest.skip("The CUDA backend is enabled")
    m = matrix.random(4, seed=0)
    with pytest.raises(RuntimeError) as e_info:
        parfloyd.direct(m, opts=parfloyd.par(2, backend=parfloyd.Backend.Cuda))
    assert e_info.match("is not available")

def test_debug_print(capsys):
    m = matrix.random(4, seed=0)
    opts = parfloyd.par(2, backend=parfloyd.Backend.Threads, debug_print=True)
    parfloyd.staged(m, opts=opts)
    captured = capsys.readouterr()
    assert "Running staged engine on Backend.Threads: n=4, workers=2, repeat=1" in captured.out
