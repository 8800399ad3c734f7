"""Safety rules: sick override and hard workload-ratio bounds."""
