"""LWE encryption scheme."""

import logging

import jax
import jax.numpy as jnp
import numpy as np
from jaxlwe.jaxlwe_lib import encoding
from jaxlwe.jaxlwe_lib import parameters
from jaxlwe.jaxlwe_lib import random_source
from jaxlwe.jaxlwe_lib import sampling
from jaxlwe.jaxlwe_lib import types

# Scalar multiplications whose scaled noise deviation exceeds the noise budget
# divided by this many standard deviations are logged as at risk of drift.
_DRIFT_WARNING_SIGMAS = 6


def gen_key(
    config: parameters.LweConfig, prg: random_source.RandomSource
) -> types.LweSecretKey:
  """Generate an LWE secret key."""
  logging.debug(f'Generating LWE key of dimension {config.dimension}')
  return types.LweSecretKey(
      config=config,
      key_data=sampling.binary_sample(config.dimension, prg),
  )


def encrypt(
    plaintext: types.LwePlaintext,
    sk: types.LweSecretKey,
    prg: random_source.RandomSource,
) -> types.LweCiphertext:
  """Encrypt an LWE plaintext."""
  ai_samples = sampling.uniform_sample(sk.dimension, prg)
  error_sample = sampling.gaussian_sample(sk.config.noise_std, 1, prg)[0]
  return encrypt_with_randomness(plaintext, sk, ai_samples, error_sample)


def encrypt_with_randomness(
    plaintext: types.LwePlaintext,
    sk: types.LweSecretKey,
    ai_samples: jnp.ndarray,
    error_sample: jnp.uint32,
) -> types.LweCiphertext:
  """Encrypt an LWE plaintext with pre-computed randomness."""
  ai_samples = jnp.asarray(ai_samples, dtype=jnp.uint32)
  if ai_samples.shape != (sk.dimension,):
    raise ValueError(
        f'Expected {sk.dimension} mask samples, got shape {ai_samples.shape}.'
    )
  body = jit_encrypt(
      jnp.uint32(plaintext), sk.key_data, ai_samples, jnp.uint32(error_sample)
  )
  return types.LweCiphertext(config=sk.config, a=ai_samples, b=body)


@jax.jit
def jit_encrypt(
    plaintext: jnp.uint32,
    key_data: jnp.ndarray,
    ai_samples: jnp.ndarray,
    error_sample: jnp.uint32,
) -> jnp.uint32:
  """Computes the body b = <a, s> + m + e, wrapping modulo 2^32."""
  clean_product = jnp.dot(ai_samples, key_data) + plaintext
  return clean_product + error_sample


def decrypt(
    ciphertext: types.LweCiphertext,
    sk: types.LweSecretKey,
) -> types.LwePlaintext:
  """Decrypt an LWE ciphertext without removing noise.

  The result is an encoded plaintext m + e; pass it to `encoding.decode` to
  recover the cleartext.
  """
  parameters.check_matching_configs(ciphertext.config, sk.config, 'decrypt')
  return jit_decrypt(ciphertext.a, ciphertext.b, sk.key_data)


@jax.jit
def jit_decrypt(
    ai_samples: jnp.ndarray, body: jnp.uint32, key_data: jnp.ndarray
) -> jnp.uint32:
  return body - jnp.dot(ai_samples, key_data)


def decrypt_cleartext(
    ciphertext: types.LweCiphertext,
    sk: types.LweSecretKey,
) -> types.LweCleartext:
  """Decrypt and decode an LWE ciphertext."""
  return encoding.decode(decrypt(ciphertext, sk))


def add(
    lhs: types.LweCiphertext, rhs: types.LweCiphertext
) -> types.LweCiphertext:
  """Homomorphically add two ciphertexts encrypted under the same key.

  The noise of the result is the sum of the input noises.
  """
  parameters.check_matching_configs(lhs.config, rhs.config, 'add')
  return types.LweCiphertext(
      config=lhs.config, a=jnp.add(lhs.a, rhs.a), b=jnp.add(lhs.b, rhs.b)
  )


def sub(
    lhs: types.LweCiphertext, rhs: types.LweCiphertext
) -> types.LweCiphertext:
  """Homomorphically subtract `rhs` from `lhs`.

  The noise terms subtract, but their variances still add.
  """
  parameters.check_matching_configs(lhs.config, rhs.config, 'subtract')
  return types.LweCiphertext(
      config=lhs.config,
      a=jnp.subtract(lhs.a, rhs.a),
      b=jnp.subtract(lhs.b, rhs.b),
  )


def scalar_multiply(
    scalar: int, ciphertext: types.LweCiphertext
) -> types.LweCiphertext:
  """Multiply a ciphertext by a public integer constant.

  Both the message and the noise are scaled by `scalar`, so the noise budget
  is consumed in proportion to |scalar|. Negative scalars are reduced modulo
  2^32 first.

  Args:
    scalar: the public multiplier.
    ciphertext: the ciphertext to scale.

  Returns:
    An encryption of scalar * m.

  Raises:
    ValueError: If `scalar` is not an integer.
  """
  if isinstance(scalar, bool) or not isinstance(scalar, (int, np.integer)):
    raise ValueError(f'{scalar!r} is not an integer scalar.')
  scaled_deviation = abs(scalar) * ciphertext.config.noise_magnitude
  if scaled_deviation * _DRIFT_WARNING_SIGMAS > encoding.NOISE_BUDGET:
    logging.debug(
        f'Scalar {scalar} scales noise deviation to {scaled_deviation:.1f}, '
        f'near the noise budget of {encoding.NOISE_BUDGET}'
    )
  factor = jnp.uint32(np.uint32(int(scalar) % 2**32))
  a, b = jit_scalar_multiply(factor, ciphertext.a, ciphertext.b)
  return types.LweCiphertext(config=ciphertext.config, a=a, b=b)


@jax.jit
def jit_scalar_multiply(
    factor: jnp.uint32, ai_samples: jnp.ndarray, body: jnp.uint32
) -> tuple[jnp.ndarray, jnp.uint32]:
  return ai_samples * factor, body * factor


def negate(ciphertext: types.LweCiphertext) -> types.LweCiphertext:
  """Returns an encryption of -m."""
  return scalar_multiply(-1, ciphertext)


def noiseless_embedding(
    plaintext: types.LwePlaintext, config: parameters.LweConfig
) -> types.LweCiphertext:
  """Returns a noiseless LweCiphertext embedding of `plaintext`.

  The mask is all zeros, so the result decrypts to `plaintext` under any key
  sharing `config`.
  """
  samples = jnp.zeros((config.dimension,), dtype=jnp.uint32)
  return types.LweCiphertext(
      config=config, a=samples, b=jnp.uint32(plaintext)
  )
