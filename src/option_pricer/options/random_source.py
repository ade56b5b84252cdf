"""Standard-normal random streams for simulation engines.

Each `NormalRandomSource` owns its generator state. There is no module-level
generator: callers construct one source per run (optionally seeded) and pass
it explicitly into the Monte Carlo engine.
"""

from __future__ import annotations

import threading

import numpy as np

from option_pricer.options.errors import PricingDomainError


class NormalRandomSource:
    """Thread-safe stream of independent N(0, 1) draws.

    Draws are serialized with a lock so that a source shared between
    threads never hands out overlapping generator state. For parallel
    simulation prefer `spawn`, which gives each worker a private stream.
    """

    def __init__(
        self,
        seed: int | np.random.SeedSequence | None = None,
    ) -> None:
        if isinstance(seed, np.random.SeedSequence):
            self._seed_seq = seed
        else:
            self._seed_seq = np.random.SeedSequence(seed)
        self._lock = threading.Lock()
        self._rng = np.random.Generator(np.random.PCG64(self._seed_seq))

    @property
    def entropy(self) -> int | tuple[int, ...]:
        """Root entropy, useful to log and replay an unseeded run."""
        return self._seed_seq.entropy

    def sample(self) -> float:
        """Return one standard-normal draw."""
        with self._lock:
            return float(self._rng.standard_normal())

    def samples(self, n: int) -> np.ndarray:
        """Return `n` standard-normal draws as a float array."""
        if n < 0:
            raise PricingDomainError("n must be >= 0")
        with self._lock:
            return self._rng.standard_normal(int(n))

    def reset(self) -> None:
        """Rewind the stream and its spawn counter to the initial seeded state."""
        with self._lock:
            # A fresh SeedSequence also restarts `n_children_spawned`, so
            # `spawn` hands out the same child streams again.
            self._seed_seq = np.random.SeedSequence(
                self._seed_seq.entropy,
                spawn_key=self._seed_seq.spawn_key,
                pool_size=self._seed_seq.pool_size,
            )
            self._rng = np.random.Generator(np.random.PCG64(self._seed_seq))

    def spawn(self, n: int) -> list[NormalRandomSource]:
        """Return `n` statistically independent child streams."""
        if n < 1:
            raise PricingDomainError("n must be >= 1")
        with self._lock:
            children = self._seed_seq.spawn(int(n))
        return [NormalRandomSource(child) for child in children]
