"""Tests for encoding and decoding logic."""

import hypothesis
from hypothesis import strategies
import jax.numpy as jnp
import numpy as np
from jaxlwe.jaxlwe_lib import encoding
from jaxlwe.jaxlwe_lib import types
from absl.testing import absltest
from absl.testing import parameterized

_CLEARTEXTS = strategies.integers(
    min_value=encoding.MESSAGE_MIN, max_value=encoding.MESSAGE_MAX
)
# the largest noise magnitude that is guaranteed to decode correctly
_MAX_SAFE_NOISE = encoding.NOISE_BUDGET - 1
_SAFE_NOISE = strategies.integers(
    min_value=-_MAX_SAFE_NOISE, max_value=_MAX_SAFE_NOISE
)


def _add_noise(plaintext: types.LwePlaintext, noise: int) -> np.uint32:
  return np.uint32((int(plaintext) + noise) % 2**32)


class EncodingDecodingTest(parameterized.TestCase):
  """Exercises encoding and decoding logic."""

  @parameterized.parameters(range(-4, 4))
  def test_encode_decode_succeeds(self, cleartext: types.LweCleartext):
    encoded: types.LwePlaintext = encoding.encode(cleartext)
    decoded: types.LweCleartext = encoding.decode(encoded)
    self.assertEqual(decoded, cleartext)

  @parameterized.named_parameters(
      dict(testcase_name='_zero', cleartext=0, expected=0),
      dict(testcase_name='_one', cleartext=1, expected=2**29),
      dict(testcase_name='_max', cleartext=3, expected=3 * 2**29),
      dict(testcase_name='_min', cleartext=-4, expected=2**31),
      dict(testcase_name='_minus_one', cleartext=-1, expected=7 * 2**29),
  )
  def test_encode_places_message_in_top_bits(self, cleartext, expected):
    encoded = encoding.encode(cleartext)
    self.assertEqual(encoded.dtype, jnp.uint32)
    self.assertEqual(int(encoded), expected)

  def test_encode_accepts_numpy_integers(self):
    self.assertEqual(int(encoding.encode(np.int32(2))), 2 * 2**29)

  @parameterized.named_parameters(
      dict(testcase_name='_with_greater_than_max', cleartext=4),
      dict(testcase_name='_with_less_than_min', cleartext=-5),
      dict(testcase_name='_with_far_out_of_range', cleartext=2**40),
      dict(testcase_name='_with_float', cleartext=1.5),
      dict(testcase_name='_with_bool', cleartext=True),
      dict(testcase_name='_with_string', cleartext='1'),
  )
  def test_encode_invalid_message_raises(self, cleartext):
    with self.assertRaises(encoding.DomainError):
      _ = encoding.encode(cleartext)

  def test_domain_error_is_value_error(self):
    with self.assertRaises(ValueError):
      _ = encoding.encode(4)

  @hypothesis.given(_CLEARTEXTS, _SAFE_NOISE)
  @hypothesis.settings(deadline=None)
  def test_encode_add_noise_decode_succeeds(
      self, cleartext: types.LweCleartext, noise: int
  ):
    noisy_encoded = _add_noise(encoding.encode(cleartext), noise)
    self.assertEqual(cleartext, encoding.decode(noisy_encoded))

  @hypothesis.given(_CLEARTEXTS, _SAFE_NOISE)
  @hypothesis.settings(deadline=None)
  def test_encode_add_noise_extract_noise(
      self, cleartext: types.LweCleartext, noise: int
  ):
    noisy_encoded = _add_noise(encoding.encode(cleartext), noise)
    self.assertEqual(noise, encoding.extract_noise(noisy_encoded))

  @hypothesis.given(_CLEARTEXTS)
  @hypothesis.settings(deadline=None)
  def test_too_much_noise_drifts_to_next_message(
      self, cleartext: types.LweCleartext
  ):
    # Half of the scale rounds up, so this is the smallest positive noise that
    # corrupts the message. Decoding still returns a value, just the wrong one.
    noisy_encoded = _add_noise(
        encoding.encode(cleartext), encoding.NOISE_BUDGET
    )
    expected = (cleartext + 1 + 4) % 8 - 4
    self.assertEqual(expected, encoding.decode(noisy_encoded))

  @parameterized.named_parameters(
      dict(testcase_name='_negative_message', ring_value=-(2**29), expected=-1),
      dict(testcase_name='_negative_noise', ring_value=2**29 - 5, expected=1),
      dict(testcase_name='_above_ring', ring_value=2**32 + 2**30, expected=2),
  )
  def test_decode_reduces_python_ints(self, ring_value, expected):
    self.assertEqual(expected, encoding.decode(ring_value))

  def test_extract_noise_reduces_python_ints(self):
    self.assertEqual(-5, encoding.extract_noise(-(2**29) - 5))

  def test_negative_message_ties_round_up(self):
    # -1 plus half the scale sits exactly between -1 and 0.
    noisy_encoded = _add_noise(encoding.encode(-1), encoding.NOISE_BUDGET)
    self.assertEqual(0, encoding.decode(noisy_encoded))

  def test_remove_noise_wraps_at_top_of_ring(self):
    # Just below 2^32 rounds up to 2^32 = 0 in the ring.
    self.assertEqual(int(encoding.remove_noise(np.uint32(2**32 - 1))), 0)
    self.assertEqual(encoding.decode(np.uint32(2**32 - 1)), 0)


if __name__ == '__main__':
  absltest.main()
