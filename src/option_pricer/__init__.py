"""European option pricing: closed form, Monte Carlo and CRR binomial tree."""

__version__ = "0.1.0"
