# Reference scenario: at-the-money one-year option.
DEFAULT_SPOT = 100.0
DEFAULT_VOLATILITY = 0.20
DEFAULT_RATE = 0.05
DEFAULT_MATURITY = 1.0
DEFAULT_STRIKE = 100.0
DEFAULT_OPTION_TYPES = ["call", "put"]

# Engine settings
DEFAULT_MC_SAMPLES = 1_000_000
DEFAULT_MC_WORKERS = 1
DEFAULT_TREE_STEPS = 200

# Convergence studies
DEFAULT_STEPS_GRID = [10, 50, 100, 200, 500, 1000]
DEFAULT_SAMPLE_GRID = [1_000, 10_000, 100_000, 1_000_000]
