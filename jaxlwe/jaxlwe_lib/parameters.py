"""Class encapsulating params for LWE."""

import dataclasses
import logging

# The largest magnitude of a signed 32-bit ring element. Noise draws are
# expressed as a fraction of this value.
RING_MAX_MAGNITUDE = 2**31 - 1


class ConfigMismatchError(ValueError):
  """Raised when values created under different configs are combined."""


@dataclasses.dataclass(frozen=True)
class LweConfig:
  """Scheme parameters for LWE."""

  # The dimension of the LWE secret key vector.
  # Note an encryption is (a_1, a_2, ..., a_n, b),
  # so a ciphertext mask has length dimension.
  dimension: int

  # standard deviation of the encryption noise, as a fraction of the ring
  noise_std: float

  # the expected standard deviation of a fresh noise term, in ring units
  noise_magnitude: float = dataclasses.field(init=False)

  def __post_init__(self) -> None:
    if self.dimension < 1:
      raise ValueError(f'LWE dimension must be >= 1, got {self.dimension}.')
    if not 0 < self.noise_std < 1:
      raise ValueError(
          f'Noise standard deviation must lie in (0, 1), got {self.noise_std}.'
      )
    object.__setattr__(
        self, 'noise_magnitude', self.noise_std * RING_MAX_MAGNITUDE
    )


def check_matching_configs(
    lhs: LweConfig, rhs: LweConfig, operation: str
) -> None:
  """Raises ConfigMismatchError unless `lhs` and `rhs` are equal."""
  if lhs != rhs:
    logging.debug(f'{operation}: config mismatch {lhs} vs {rhs}')
    raise ConfigMismatchError(
        f'Cannot {operation} values from different configs: {lhs} vs {rhs}'
    )
