"""Pure calculations: load, workload ratio, cycle phase, baselines and red flags."""
