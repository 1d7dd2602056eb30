import matplotlib as mpl
mpl.use('Agg')

import matplotlib.pyplot as plt
import os
import pandas as pd
import sys
from tqdm import tqdm

import common
import parfloyd
from parfloyd import bench
from parfloyd.verify import format_mismatch

ENGINES = ["sequential", "direct", "staged"]

def run_floyd_benchmark(sizes, workers, nruns, repeat):
    csv_file = f"{common.FLOYD_NAME}.csv"

    # Only run the benchmarks if the CSV data file does not exist.
    if not os.path.isfile(csv_file):
        with tqdm(total=len(sizes) * len(workers) * nruns) as pbar:
            for n in sizes:
                for w in workers:
                    results = []
                    for run in range(nruns):
                        opts = parfloyd.Options(repeat=repeat)
                        try:
                            timings, mismatches = bench.run(n, w, opts, seed=run)
                        except parfloyd.CapacityError as e:
                            sys.stderr.write(f"n={n}, workers={w}: {e}\n")
                            pbar.update(nruns - run)
                            break
                        for name, mismatch in mismatches:
                            sys.stderr.write(f"n={n}, workers={w}: {format_mismatch(name, mismatch)}\n")
                        for r in timings:
                            results.append({
                                "engine": r.name, "backend": str(r.backend), "n": n,
                                "workers": w, "time": r.ms, "correct": len(mismatches) == 0
                            })
                        pbar.update(1)
                    common.append_csv(csv_file, results)
    else:
        print("CSV results found - skipping benchmarks and plotting results")

    produce_floyd_output(csv_file, workers)

def produce_floyd_output(csv_file, workers):
    results_df = pd.read_csv(csv_file)
    fig, axs = plt.subplots(layout="constrained")
    markers = ['x', '|', '_']
    w = max(workers)
    for i, engine in enumerate(ENGINES):
        res = results_df[(results_df["engine"] == engine) & (results_df["workers"] == w)]
        runtimes = res.groupby("n")["time"].median()
        axs.plot(runtimes.index, runtimes, marker=markers[i], label=engine)
        for n in runtimes.index:
            times = list(res[res["n"] == n]["time"])
            print(f"{engine} (n={n}, workers={w}): {common.print_mean_pm_stddev(times)} ms")
    axs.set_yscale("log")
    axs.set_xlabel("Number of vertices", fontsize=16)
    axs.set_ylabel("Execution time (ms)", fontsize=16)
    axs.legend(loc="upper left", fontsize=16)
    fig.savefig(f"{common.FLOYD_NAME}.pdf", bbox_inches="tight", pad_inches=0.05)

sizes = [16, 32, 64, 96]
workers = [1, 8, 32]
nruns = int(sys.argv[1]) if len(sys.argv) > 1 else 5
repeat = int(sys.argv[2]) if len(sys.argv) > 2 else 1
run_floyd_benchmark(sizes, workers, nruns, repeat)
