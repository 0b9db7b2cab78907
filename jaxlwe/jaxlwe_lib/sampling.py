"""Samplers for ring elements of Z/2^32Z."""

import jax.numpy as jnp
import numpy as np
from jaxlwe.jaxlwe_lib import parameters
from jaxlwe.jaxlwe_lib import random_source


def uniform_sample(n: int, prg: random_source.RandomSource) -> jnp.ndarray:
  """Returns `n` ring elements drawn uniformly from all 2^32 residues."""
  return prg.uniform(shape=(n,))


def binary_sample(n: int, prg: random_source.RandomSource) -> jnp.ndarray:
  """Returns `n` uniform bits."""
  return prg.sk_uniform(shape=(n,))


def gaussian_sample(
    sigma: float, n: int, prg: random_source.RandomSource
) -> jnp.ndarray:
  """Returns `n` ring elements with a truncated, scaled Normal distribution.

  Each sample is a draw from Normal(0, sigma) scaled by the largest signed
  32-bit magnitude and truncated toward zero, then reduced into the ring. For
  example, sigma = 2^-24 gives noise with standard deviation near 2^7.

  Args:
    sigma: the standard deviation, as a fraction of the ring size.
    n: the number of samples to draw.
    prg: the source of standard Normal draws.

  Returns:
    A uint32 array of length `n`.
  """
  scaled = prg.normal(shape=(n,)) * sigma * parameters.RING_MAX_MAGNITUDE
  signed = np.trunc(scaled).astype(np.int64)
  return jnp.asarray(np.mod(signed, 2**32).astype(np.uint32), dtype=jnp.uint32)
