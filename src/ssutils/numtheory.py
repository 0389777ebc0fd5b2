"""Number theory engine, the arithmetic backbone of the Schmidt-Samoa cryptosystem.

Provides Euclid's algorithm (plain and extended), modular inverses, square-and-multiply modular exponentiation, the
Miller-Rabin probable prime test and random prime generation. Every function that needs randomness takes an explicit
`RandState` rather than reaching for a global generator.

Typical usage example:

    rs = RandState(2025)
    p = make_prime(128, 50, rs)
    assert is_prime(p, 50, rs)
    inv = mod_inverse(3, 7)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging

from ssutils.errors import GenerationFailed
from ssutils.randstate import RandState

log = logging.getLogger(__name__)

PRIME_TRIES_PER_BIT: int = 100


def gcd(a: int, b: int) -> int:
    """Greatest common divisor by the iterative Euclidean algorithm.

    Args:
        a: The first non-negative integer.
        b: The second non-negative integer.

    Returns:
        gcd(a, b), with gcd(a, 0) == a.
    """
    while b != 0:
        a, b = b, a % b
    return a


def eea(a: int, b: int) -> tuple[int, int, int]:
    """Implements the Extended Euclidean Algorithm.

    Such that a*s + b*t = g = gcd(a, b).

    Args:
        a: The first natural number.
        b: The second natural number.

    Returns:
        Greatest common divisor of two integers.
        As well as the Bezout coefficients.
    """
    r0, r1 = a, b
    s0, s1, t0, t1 = 1, 0, 0, 1
    while r1 != 0:
        q = r0 // r1
        r0, r1 = r1, r0 - q * r1
        s0, s1 = s1, s0 - q * s1
        t0, t1 = t1, t0 - q * t1
    return r0, s0, t0


def mod_inverse_checked(a: int, n: int) -> tuple[bool, int]:
    """Modular inverse with an explicit existence flag.

    Args:
        a: The value to invert.
        n: The modulus. Must be positive.

    Returns:
        Tuple of (exists, inverse). The inverse lies in [0, n) and is 0 when it does not exist.
    """
    if n < 1:
        raise ValueError("Modulus must be positive.")
    g, s, _ = eea(a % n, n)
    if g != 1:
        return False, 0
    return True, s % n


def mod_inverse(a: int, n: int) -> int:
    """Modular inverse of `a` modulo `n`, or 0 if none exists.

    Never raises for a missing inverse; use `mod_inverse_checked` where the distinction matters.
    """
    return mod_inverse_checked(a, n)[1]


def pow_mod(base: int, exponent: int, modulus: int) -> int:
    """Computes base**exponent % modulus by right-to-left binary exponentiation.

    Args:
        base: The base.
        exponent: The exponent. Must be >= 0.
        modulus: The modulus. Must be >= 1.

    Returns:
        The result in [0, modulus).

    Raises:
        ValueError: On a negative exponent or non-positive modulus.
    """
    if exponent < 0:
        raise ValueError("Exponent must be non-negative.")
    if modulus < 1:
        raise ValueError("Modulus must be positive.")
    result = 1 % modulus
    base %= modulus
    while exponent > 0:
        if exponent & 1:
            result = (result * base) % modulus
        base = (base * base) % modulus
        exponent >>= 1
    return result


def is_prime(n: int, iterations: int, rstate: RandState) -> bool:
    """Perform the Miller-Rabin primality test.

    Writes n - 1 = 2**s * r with r odd, then tries `iterations` random bases from [2, n - 2]. A composite survives a
    single round with probability at most 1/4.

    Args:
        n: The candidate.
        iterations: Number of Miller-Rabin rounds.
        rstate: Random context supplying the bases.

    Returns:
        True if `n` is probably prime, False if it is certainly composite.
    """
    if n < 2:
        return False
    if n == 2:
        return True
    if n % 2 == 0:
        return False
    if n == 3:
        return True
    tw = n - 1
    s = (tw & -tw).bit_length() - 1
    r = tw >> s
    for _ in range(iterations):
        base = rstate.randint(2, n - 2)
        witness = pow_mod(base, r, n)
        if witness == 1 or witness == tw:
            continue
        for _ in range(1, s):
            witness = pow_mod(witness, 2, n)
            if witness == tw:
                break
            if witness == 1:
                return False
        else:
            return False
    return True


def make_prime(bits: int, iterations: int, rstate: RandState, max_tries: int | None = None) -> int:
    """Generate a random probable prime of exactly `bits` bits.

    Candidates are uniform in [2**(bits - 1), 2**bits): `bits - 1` random bits are drawn and the lower bound is
    added, so the top bit is the only one forced.

    Args:
        bits: Bit length of the prime. Must be >= 2.
        iterations: Miller-Rabin rounds per candidate.
        rstate: Random context.
        max_tries: Candidate cap. Defaults to `PRIME_TRIES_PER_BIT * bits`.

    Returns:
        A probable prime p with 2**(bits - 1) <= p < 2**bits.

    Raises:
        ValueError: If `bits` < 2.
        GenerationFailed: If no prime turned up within `max_tries` candidates.
    """
    if bits < 2:
        raise ValueError("Primes need at least 2 bits.")
    if max_tries is None:
        max_tries = PRIME_TRIES_PER_BIT * bits
    lower = 1 << (bits - 1)
    for tries in range(1, max_tries + 1):
        candidate = rstate.randbits(bits - 1) + lower
        if is_prime(candidate, iterations, rstate):
            log.debug("Found %d-bit prime after %d candidates", bits, tries)
            return candidate
    raise GenerationFailed(f"No {bits}-bit prime found in {max_tries} candidates.")
