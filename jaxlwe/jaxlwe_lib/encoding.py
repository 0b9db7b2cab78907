"""Logic for encoding and decoding a cleartext for use in LWE."""

import jax
import jax.numpy as jnp
import numpy as np
from jaxlwe.jaxlwe_lib import types

# The number of low-order bits reserved for noise. A cleartext occupies the
# three bits above them.
SCALE_BIT_LENGTH = 29

# minimum and maximum allowed cleartext values
MESSAGE_MIN = -4
MESSAGE_MAX = 3

MESSAGE_SPACE_SIZE = MESSAGE_MAX - MESSAGE_MIN + 1

# Noise of smaller magnitude than this never corrupts the decoded cleartext.
NOISE_BUDGET = 2 ** (SCALE_BIT_LENGTH - 1)


class DomainError(ValueError):
  """Raised when a cleartext lies outside of the encodable range."""


def encode(message: types.LweCleartext) -> types.LwePlaintext:
  """Encode a cleartext for use in an LWE ciphertext.

  The cleartext is stored in two's complement in the top three bits, and the
  remaining bits are left for noise. E.g., -3 is encoded as

           101 00000000000000000000000000000
       message noise

  Args:
    message: the cleartext message, an integer in [-4, 4).

  Returns:
    The encoded message.

  Raises:
    DomainError: In the event that `message` is not an integer in
    [MESSAGE_MIN, MESSAGE_MAX].
  """
  if isinstance(message, bool) or not isinstance(message, (int, np.integer)):
    raise DomainError(f'{message!r} is not an integer cleartext.')
  if not MESSAGE_MIN <= message <= MESSAGE_MAX:
    raise DomainError(
        f'{message} is outside of allowable bounds '
        f'[{MESSAGE_MIN}, {MESSAGE_MAX}].'
    )
  encoded = (int(message) << SCALE_BIT_LENGTH) % 2**32
  return types.LwePlaintext(np.uint32(encoded))


def decode(plaintext: types.LwePlaintext) -> types.LweCleartext:
  """Decode a plaintext.

  Rounds off the noise and recenters the message into [-4, 4). The result is
  correct as long as the noise magnitude stays below 2^28; beyond that the
  returned cleartext is silently wrong. Noise of exactly half the scale
  always rounds up, so +2^28 drifts to the next message while -2^28 decodes
  correctly, whatever the sign of the message.

  Args:
    plaintext: the encoded plaintext message, as a uint32 or as a python int
      that is reduced modulo 2^32.

  Returns:
    The cleartext message.
  """
  shifted = int(remove_noise(plaintext) >> SCALE_BIT_LENGTH)
  return (shifted - MESSAGE_MIN) % MESSAGE_SPACE_SIZE + MESSAGE_MIN


def _as_ring_element(value) -> jnp.ndarray:
  """Converts a uint32 or a python int (reduced modulo 2^32) to a uint32."""
  if isinstance(value, int) and not isinstance(value, bool):
    value = np.uint32(value % 2**32)
  return jnp.uint32(value)


def remove_noise(plaintext: jnp.ndarray) -> jnp.ndarray:
  """Rounds `plaintext` to the nearest encoded cleartext."""
  return round_to_power_of_2(_as_ring_element(plaintext), SCALE_BIT_LENGTH)


def round_to_power_of_2(arr: jnp.ndarray, log_pow_of_2: int) -> jnp.ndarray:
  """Rounds to the nearest multiple of a given power of 2, modulo 2^32."""
  # This bit determines whether to round up or down
  round_up_or_down_bit = log_pow_of_2 - 1
  lowest_unrounded_bit = log_pow_of_2

  # Shift down to clear all the bits that are rounded off, optionally add 1 to
  # round up, then shift back up. Overflow past the top bit wraps around.
  round_up = jnp.bitwise_and(jnp.right_shift(arr, round_up_or_down_bit), 1)
  return jnp.left_shift(
      jnp.right_shift(arr, lowest_unrounded_bit) + round_up,
      lowest_unrounded_bit,
  )


def extract_noise(plaintext: types.LwePlaintext) -> int:
  """Extracts the noise bits of a plaintext as a (signed) int."""
  plaintext = _as_ring_element(plaintext)
  difference = plaintext - remove_noise(plaintext)
  return int(jax.lax.bitcast_convert_type(difference, jnp.int32))
