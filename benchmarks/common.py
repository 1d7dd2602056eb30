import os
import pandas as pd
import statistics

FLOYD_NAME = "floyd-results"

def append_csv(csv_file, results):
    df = pd.DataFrame(results)
    header = not os.path.exists(csv_file)
    df.to_csv(csv_file, mode='a', index=False, header=header)

def print_mean_pm_stddev(times):
    if len(times) == 0:
        return "-"
    elif len(times) == 1:
        return f"{times[0]:.1f}"
    else:
        t = statistics.mean(times)
        s = statistics.stdev(times)
        return f"{t:.1f} \\pm {s:.1f}"
