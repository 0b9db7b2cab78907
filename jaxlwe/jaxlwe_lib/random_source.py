"""Sources of randomness for key generation and encryption.

Every randomized operation takes a `RandomSource` argument explicitly. Each
instance owns its own generator, so independent callers (e.g., parallel
workers) must each hold their own instance rather than share one.
"""

import abc
import math
import random
from typing import Callable, Optional, Sequence

import jax.numpy as jnp
import numpy as np

# Default bounds for `uniform`: every residue of the ring Z/2^32Z.
FULL_RING_BOUNDS = (0, 2**32)


def _shape_generator(
    fn: Callable[[], float], shape: Sequence[int], dtype=np.uint32
) -> np.ndarray:
  """Fills an array of the given shape by repeatedly calling `fn`."""
  if any(dim < 1 for dim in shape):
    raise ValueError(f'All dimensions of {shape} must be positive.')
  size = math.prod(shape)
  return np.array([fn() for _ in range(size)], dtype=dtype).reshape(shape)


class RandomSource(abc.ABC):
  """The interface for random sources consumed by the LWE scheme."""

  @abc.abstractmethod
  def sk_uniform(self, shape: Sequence[int]) -> jnp.ndarray:
    """Uniform bits in {0, 1}, as used for secret key coefficients."""

  @abc.abstractmethod
  def uniform(self, shape: Sequence[int]) -> jnp.ndarray:
    """Uniform integers in `uniform_bounds`, as uint32."""

  @abc.abstractmethod
  def normal(self, shape: Sequence[int]) -> np.ndarray:
    """Standard Normal reals, as float64."""


class _GeneratorSource(RandomSource):
  """A RandomSource backed by a `random.Random`-compatible generator."""

  def __init__(
      self,
      rng: random.Random,
      uniform_bounds: tuple[int, int] = FULL_RING_BOUNDS,
  ) -> None:
    low, high = uniform_bounds
    if not 0 <= low < high <= 2**32:
      raise ValueError(f'Invalid uniform bounds {uniform_bounds}.')
    self._rng = rng
    self.uniform_bounds = uniform_bounds

  def sk_uniform(self, shape: Sequence[int]) -> jnp.ndarray:
    return jnp.asarray(
        _shape_generator(lambda: self._rng.getrandbits(1), shape),
        dtype=jnp.uint32,
    )

  def uniform(self, shape: Sequence[int]) -> jnp.ndarray:
    low, high = self.uniform_bounds
    return jnp.asarray(
        _shape_generator(lambda: self._rng.randrange(low, high), shape),
        dtype=jnp.uint32,
    )

  def normal(self, shape: Sequence[int]) -> np.ndarray:
    return _shape_generator(
        lambda: self._rng.gauss(0.0, 1.0), shape, dtype=np.float64
    )


class SystemRandomSource(_GeneratorSource):
  """Randomness drawn from the operating system's entropy pool.

  Seeding has no effect on this source; use it outside of tests.
  """

  def __init__(
      self, uniform_bounds: tuple[int, int] = FULL_RING_BOUNDS
  ) -> None:
    super().__init__(random.SystemRandom(), uniform_bounds)


class PseudorandomSource(_GeneratorSource):
  """A seeded, reproducible source. Not cryptographically secure."""

  def __init__(
      self,
      uniform_bounds: tuple[int, int] = FULL_RING_BOUNDS,
      seed: Optional[int] = None,
  ) -> None:
    super().__init__(random.Random(seed), uniform_bounds)
    self.seed = seed


class CycleRng(RandomSource):
  """A deterministic source that cycles through a fixed bit pattern.

  Both `sk_uniform` and `uniform` draw from the same cycle, continuing where
  the previous call left off. `normal` always returns `const_normal`.
  """

  random_data = (1, 1, 0, 0, 0, 1, 1, 1, 1, 0, 0, 1, 0, 1, 1, 0)

  def __init__(self, const_normal: float = 0.0) -> None:
    self.const_normal = const_normal
    self._index = 0

  def _next(self) -> int:
    value = self.random_data[self._index % len(self.random_data)]
    self._index += 1
    return value

  def sk_uniform(self, shape: Sequence[int]) -> jnp.ndarray:
    return jnp.asarray(_shape_generator(self._next, shape), dtype=jnp.uint32)

  def uniform(self, shape: Sequence[int]) -> jnp.ndarray:
    return jnp.asarray(_shape_generator(self._next, shape), dtype=jnp.uint32)

  def normal(self, shape: Sequence[int]) -> np.ndarray:
    return _shape_generator(lambda: self.const_normal, shape, dtype=np.float64)


class ConstantUniformRng(RandomSource):
  """Returns `const_uniform` from `uniform` and no noise."""

  def __init__(self, const_uniform: int = 1) -> None:
    self.const_uniform = const_uniform

  def sk_uniform(self, shape: Sequence[int]) -> jnp.ndarray:
    return jnp.ones(shape, dtype=jnp.uint32)

  def uniform(self, shape: Sequence[int]) -> jnp.ndarray:
    return jnp.full(shape, self.const_uniform, dtype=jnp.uint32)

  def normal(self, shape: Sequence[int]) -> np.ndarray:
    return np.zeros(shape, dtype=np.float64)


class ZeroRng(RandomSource):
  """Every draw is zero."""

  def sk_uniform(self, shape: Sequence[int]) -> jnp.ndarray:
    return jnp.zeros(shape, dtype=jnp.uint32)

  def uniform(self, shape: Sequence[int]) -> jnp.ndarray:
    return jnp.zeros(shape, dtype=jnp.uint32)

  def normal(self, shape: Sequence[int]) -> np.ndarray:
    return np.zeros(shape, dtype=np.float64)


ALL_RNGS = [
    SystemRandomSource,
    PseudorandomSource,
    CycleRng,
    ConstantUniformRng,
    ZeroRng,
]
