"""Schmidt-Samoa Cryptosystem Utilities in an Academic Sense.

Provides key generation, block and file encryption/decryption under the Schmidt-Samoa cryptosystem, with keys
exported as hex text or PEM. Furthermore, provides the number theory engine (Miller-Rabin, modular inverse, modular
exponentiation, prime generation) under-the-hood.

Typical usage example:

    with RandState(42) as rs:
        p = make_prime(256, 50, rs)
    pk = SSPrivKey.generate(1024, seed=42, username="alice")
    c = pk.pub.encrypt(0xFF1234)
    r = pk.decrypt(c)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from ssutils.errors import ArithmeticDomainError
from ssutils.errors import CiphertextFormatError
from ssutils.errors import DecryptionError
from ssutils.errors import GenerationFailed
from ssutils.errors import KeyFormatError
from ssutils.errors import KeyGenerationError
from ssutils.errors import SSError
from ssutils.keygen import generate_key_pair
from ssutils.keygen import make_priv
from ssutils.keygen import make_pub
from ssutils.numtheory import gcd
from ssutils.numtheory import is_prime
from ssutils.numtheory import make_prime
from ssutils.numtheory import mod_inverse
from ssutils.numtheory import pow_mod
from ssutils.randstate import RandState
from ssutils.ss import block_size
from ssutils.ss import decrypt_file
from ssutils.ss import encrypt_file
from ssutils.ss import SSPrivKey
from ssutils.ss import SSPubKey

__version__ = "0.1.0"
__all__ = [
    "SSPrivKey",
    "SSPubKey",
    "RandState",
    "gcd",
    "mod_inverse",
    "pow_mod",
    "is_prime",
    "make_prime",
    "make_pub",
    "make_priv",
    "generate_key_pair",
    "block_size",
    "encrypt_file",
    "decrypt_file",
    "SSError",
    "KeyFormatError",
    "CiphertextFormatError",
    "GenerationFailed",
    "KeyGenerationError",
    "ArithmeticDomainError",
    "DecryptionError",
]
