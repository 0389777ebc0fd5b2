"""Exceptions raised by SS Utils.

Each error derives from the built-in exception the rest of the package would otherwise raise, so callers catching
`IOError`, `RuntimeError` or `ValueError` keep working.
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0


class SSError(Exception):
    """Base class of every SS Utils specific error."""


class KeyFormatError(SSError, IOError):
    """A key file is malformed. Raised before any cryptographic work is done."""


class CiphertextFormatError(SSError, IOError):
    """A ciphertext stream line is not a hexadecimal integer."""


class GenerationFailed(SSError, RuntimeError):
    """A rejection-sampling loop hit its retry cap without producing a result."""


class KeyGenerationError(SSError, RuntimeError):
    """The private exponent does not exist for the supplied primes."""


class ArithmeticDomainError(SSError, ValueError):
    """A block value lies outside the range accepted by the modulus."""


class DecryptionError(SSError, RuntimeError):
    """A decrypted block is not a well-formed sentinel-prefixed block."""
