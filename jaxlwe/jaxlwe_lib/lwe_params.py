"""Security and test parameters for the LWE scheme."""

from jaxlwe.jaxlwe_lib import parameters
from jaxlwe.jaxlwe_lib import random_source

# These constants are taken from the lattice estimator:
# https://github.com/malb/lattice-estimator
# A noise deviation of 2^-24 of the ring gives fresh noise near 2^7, far
# below the 2^28 budget left by the encoding.
LWE_CONFIG = parameters.LweConfig(
    dimension=1024,
    noise_std=2**-24,
)

# Params used in unit tests. Not secure.
TEST_CONFIG = parameters.LweConfig(
    dimension=16,
    noise_std=2**-24,
)


def get_rng_for_production() -> random_source.SystemRandomSource:
  """Returns an rng backed by operating system entropy."""
  return random_source.SystemRandomSource()


def get_rng_for_test(seed: int) -> random_source.PseudorandomSource:
  """Returns a seeded, reproducible rng for tests."""
  return random_source.PseudorandomSource(seed=seed)
