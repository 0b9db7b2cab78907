"""A module containing basic types for LWE."""

import dataclasses

import jax.numpy as jnp
from jaxlwe.jaxlwe_lib import parameters


LweCleartext = int
LwePlaintext = jnp.uint32


# eq=False: JAX arrays do not support truthy elementwise comparison.
@dataclasses.dataclass(frozen=True, eq=False)
class LweSecretKey:
  """A secret key for the LWE encryption scheme."""

  config: parameters.LweConfig

  # the binary values (s_1, ..., s_{dimension})
  # used as a dot product multiplicand when encrypting.
  key_data: jnp.ndarray

  def __post_init__(self) -> None:
    if self.key_data.shape != (self.config.dimension,):
      raise ValueError(
          f'Key data has shape {self.key_data.shape}, '
          f'expected ({self.config.dimension},).'
      )
    if self.key_data.dtype != jnp.uint32:
      raise ValueError(
          f'Key data has dtype {self.key_data.dtype}, expected uint32.'
      )

  @property
  def dimension(self) -> int:
    return self.config.dimension


@dataclasses.dataclass(frozen=True, eq=False)
class LweCiphertext:
  """An LWE ciphertext (a, b) with b = <a, s> + m + e (mod 2^32)."""

  config: parameters.LweConfig

  # the mask (a_1, ..., a_{dimension})
  a: jnp.ndarray

  # the body
  b: jnp.ndarray

  def __post_init__(self) -> None:
    if self.a.shape != (self.config.dimension,):
      raise ValueError(
          f'Ciphertext mask has shape {self.a.shape}, '
          f'expected ({self.config.dimension},).'
      )
    if self.a.dtype != jnp.uint32:
      raise ValueError(
          f'Ciphertext mask has dtype {self.a.dtype}, expected uint32.'
      )
    if jnp.shape(self.b) != () or jnp.result_type(self.b) != jnp.uint32:
      raise ValueError(
          f'Ciphertext body must be a single uint32, got {self.b!r}.'
      )

  @property
  def dimension(self) -> int:
    return self.config.dimension
