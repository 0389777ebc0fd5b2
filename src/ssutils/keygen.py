"""Core Key Generation Utility for the Schmidt-Samoa cryptosystem.

Derives the public modulus n = p**2 * q and the private pair (d, pq) from two random primes. The primes are chosen so
that q does not divide p - 1 and p does not divide q - 1, which is exactly the condition for n to be invertible
modulo lambda(pq) = lcm(p - 1, q - 1).

Typical usage example:

    with RandState(1234) as rs:
        p, q, n = make_pub(256, 50, rs)
    d, pq = make_priv(p, q)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
from typing import Literal, overload

from ssutils import numtheory
from ssutils.errors import GenerationFailed
from ssutils.errors import KeyGenerationError
from ssutils.randstate import RandState

log = logging.getLogger(__name__)

MIN_MODULUS_BITS: int = 10
DEFAULT_ITERATIONS: int = 50
DEFAULT_PAIR_TRIES: int = 1000


def _compatible(p: int, q: int) -> bool:
    """Whether (p, q) admits a private exponent: p != q, q does not divide p - 1, p does not divide q - 1."""
    return p != q and (p - 1) % q != 0 and (q - 1) % p != 0


def make_pub(total_bits: int,
             iterations: int,
             rstate: RandState,
             max_tries: int = DEFAULT_PAIR_TRIES) -> tuple[int, int, int]:
    """Generates the primes and the public modulus.

    The bit length of p is drawn uniformly from [total_bits // 5, 2 * total_bits // 5]; q gets whatever is left once
    p**2 is accounted for. Due to the truncated split the modulus may be a bit or so off `total_bits`.

    Args:
        total_bits: Approximate bit length of n. Must be at least `MIN_MODULUS_BITS`.
        iterations: Miller-Rabin rounds per prime candidate. Must be >= 1.
        rstate: Random context.
        max_tries: Cap on rejected (p, q) pairs.

    Returns:
        Tuple of (p, q, n) with n = p**2 * q.

    Raises:
        ValueError: If the parameters cannot yield a valid key.
        GenerationFailed: If `max_tries` pairs in a row were incompatible.
    """
    if total_bits < MIN_MODULUS_BITS:
        raise ValueError(f"Modulus must be at least {MIN_MODULUS_BITS} bits.")
    if iterations < 1:
        raise ValueError("At least one Miller-Rabin iteration is required.")
    min_p_bits = total_bits // 5
    max_p_bits = (2 * total_bits) // 5
    for attempt in range(1, max_tries + 1):
        p_bits = rstate.randint(min_p_bits, max_p_bits)
        p = numtheory.make_prime(p_bits, iterations, rstate)
        q_bits = total_bits - (p * p).bit_length()
        if q_bits < 2:
            raise ValueError(f"Modulus of {total_bits} bits leaves no room for q next to a {p_bits}-bit p.")
        q = numtheory.make_prime(q_bits, iterations, rstate)
        if _compatible(p, q):
            n = p * p * q
            log.debug("Accepted primes of %d and %d bits on attempt %d", p.bit_length(), q.bit_length(), attempt)
            return p, q, n
        log.debug("Rejected incompatible primes p=%d q=%d", p, q)
    raise GenerationFailed(f"No compatible prime pair for a {total_bits}-bit modulus in {max_tries} attempts.")


def make_priv(p: int, q: int) -> tuple[int, int]:
    """Derives the private exponent and private modulus.

    Args:
        p: The prime appearing squared in n.
        q: The other prime.

    Returns:
        Tuple of (d, pq) where d is the inverse of n = p**2 * q modulo lcm(p - 1, q - 1).

    Raises:
        KeyGenerationError: If n has no inverse modulo lcm(p - 1, q - 1).
    """
    pq = p * q
    n = pq * p
    p_minus, q_minus = p - 1, q - 1
    lam = (p_minus * q_minus) // numtheory.gcd(p_minus, q_minus)
    exists, d = numtheory.mod_inverse_checked(n, lam)
    if not exists:
        raise KeyGenerationError("Modulus is not invertible modulo lambda, primes are unsuitable.")
    return d, pq


@overload
def generate_key_pair(total_bits: int,
                      iterations: int,
                      rstate: RandState,
                      expose_primes: Literal[False] = False) -> tuple[int, tuple[int, int]]:
    ...


@overload
def generate_key_pair(total_bits: int,
                      iterations: int,
                      rstate: RandState,
                      expose_primes: Literal[True] = False) -> tuple[int, tuple[int, int], tuple[int, int]]:
    ...


def generate_key_pair(
    total_bits: int,
    iterations: int,
    rstate: RandState,
    expose_primes: bool = False
) -> tuple[int, tuple[int, int]] | tuple[int, tuple[int, int], tuple[int, int]]:
    """Generates a Schmidt-Samoa key pair.

    Args:
        total_bits: Approximate bit length of the public modulus.
        iterations: Miller-Rabin rounds per prime candidate.
        rstate: Random context.
        expose_primes: Whether to return the primes as well. Defaults to False.

    Returns:
        Tuple of (n, (d, pq)), or (n, (d, pq), (p, q)) if the primes are exposed.
    """
    p, q, n = make_pub(total_bits, iterations, rstate)
    d, pq = make_priv(p, q)
    log.info("Generated %d-bit modulus n from %d-bit p and %d-bit q", n.bit_length(), p.bit_length(), q.bit_length())
    if not expose_primes:
        del p, q
        return n, (d, pq)
    return n, (d, pq), (p, q)
