#!/usr/bin/env python3
"""
Tests for the prime factor utilities.

Verifies:
1. GPF values, the n <= 1 sentinel and agreement with is_prime
2. Factorization strings and their round trip back to n
3. Superscript exponent rendering
4. FactorCache transparency (cold, warm, disabled, threaded)
"""

from concurrent.futures import ThreadPoolExecutor

from factor_pushing.primes import (
    DEFAULT_CACHE, SEPARATOR, SUPERSCRIPTS, FactorCache, factor_pairs,
    factorize, format_factors, get_gpf, is_prime, to_superscript,
)


_FROM_SUPERSCRIPT = {v: k for k, v in SUPERSCRIPTS.items()}


def _naive_is_prime(n):
    if n < 2:
        return False
    return all(n % d for d in range(2, int(n ** 0.5) + 1))


def _parse_factorization(text):
    """Multiply a rendered factorization back out."""
    product = 1
    for part in text.split(SEPARATOR):
        base = "".join(c for c in part if c.isascii())
        exp = "".join(_FROM_SUPERSCRIPT[c] for c in part if not c.isascii()) or "1"
        product *= int(base) ** int(exp)
    return product


def test_gpf_known_values():
    """Greatest prime factors of hand-checked numbers."""
    cache = FactorCache()
    expected = {
        2: 2, 3: 3, 4: 2, 6: 3, 8: 2, 9: 3, 10: 5, 12: 3, 13: 13,
        15: 5, 49: 7, 97: 97, 194: 97, 1024: 2, 2 * 1000003: 1000003,
        600851475143: 6857,
    }
    for n, gpf in expected.items():
        assert get_gpf(n, cache) == gpf, f"gpf({n}) should be {gpf}, got {get_gpf(n, cache)}"
    print("  ✓ GPF known values")


def test_gpf_sentinel_for_small_inputs():
    """n <= 1 returns 1 and is never cached."""
    cache = FactorCache()
    for n in (1, 0, -1, -12):
        assert get_gpf(n, cache) == 1
    assert cache.stats()["gpf_entries"] == 0
    print("  ✓ GPF sentinel")


def test_gpf_matches_is_prime():
    """gpf(n) == n exactly when n is prime."""
    cache = FactorCache()
    for n in range(2, 3000):
        assert (get_gpf(n, cache) == n) == is_prime(n, cache), n
        assert is_prime(n, cache) == _naive_is_prime(n), n
    for n in (1, 0, -3, -7):
        assert not is_prime(n, cache)
    print("  ✓ is_prime consistent with GPF")


def test_gpf_divides_and_is_largest():
    cache = FactorCache()
    for n in range(2, 1500):
        g = get_gpf(n, cache)
        assert n % g == 0
        assert _naive_is_prime(g)
        assert g == max(p for p, _ in factor_pairs(n))


def test_factorize_strings():
    """Canonical formatting, including passthrough cases."""
    cache = FactorCache()
    assert factorize(1, cache) == "1"
    assert factorize(0, cache) == "0"
    assert factorize(-5, cache) == "-5"
    assert factorize(2, cache) == "2"
    assert factorize(12, cache) == "2²·3"
    assert factorize(360, cache) == "2³·3²·5"
    assert factorize(97, cache) == "97"
    assert factorize(2 ** 12, cache) == "2¹²"
    assert factorize(3 * 1000003, cache) == "3·1000003"
    print("  ✓ factorize strings")


def test_factorize_round_trip():
    """Pairs and rendered strings both reconstruct n."""
    cache = FactorCache()
    for n in range(1, 2500):
        product = 1
        primes = []
        for p, e in factor_pairs(n):
            assert e >= 1
            primes.append(p)
            product *= p ** e
        assert product == n, f"pairs of {n} multiply to {product}"
        assert primes == sorted(set(primes)), "primes must strictly increase"
        assert all(_naive_is_prime(p) for p in primes)
        assert _parse_factorization(factorize(n, cache)) == n
    print("  ✓ factorization round trip")


def test_superscript_is_digit_wise():
    assert to_superscript(12) == "¹²"
    assert len(to_superscript(12)) == 2
    assert to_superscript(1234567890) == "¹²³⁴⁵⁶⁷⁸⁹⁰"
    assert format_factors([(2, 12), (3, 1)]) == "2¹²·3"
    assert format_factors([]) == ""
    print("  ✓ superscript rendering")


def test_cache_is_transparent():
    """Cold, warm and disabled caches return identical results."""
    warm = FactorCache()
    disabled = FactorCache(enabled=False)
    numbers = list(range(-3, 800))

    cold_gpf = [get_gpf(n, warm) for n in numbers]
    cold_fact = [factorize(n, warm) for n in numbers]
    assert warm.stats()["gpf_entries"] > 0
    assert warm.stats()["factorization_entries"] > 0

    assert [get_gpf(n, warm) for n in numbers] == cold_gpf
    assert [factorize(n, warm) for n in numbers] == cold_fact
    assert [get_gpf(n, disabled) for n in numbers] == cold_gpf
    assert [factorize(n, disabled) for n in numbers] == cold_fact
    assert len(disabled) == 0, "disabled cache must not store anything"

    warm.clear()
    assert len(warm) == 0
    print("  ✓ cache transparency")


def test_default_cache_used_when_none_given():
    DEFAULT_CACHE.clear()
    assert get_gpf(221) == 17
    assert DEFAULT_CACHE.get_gpf(221) == 17
    assert factorize(221) == "13·17"
    assert DEFAULT_CACHE.get_factorization(221) == "13·17"


def test_cache_concurrent_writers():
    """Threads hammering the same keys all agree."""
    cache = FactorCache()
    numbers = list(range(2, 600)) * 4

    with ThreadPoolExecutor(max_workers=8) as pool:
        gpfs = list(pool.map(lambda n: get_gpf(n, cache), numbers))
        texts = list(pool.map(lambda n: factorize(n, cache), numbers))

    reference = FactorCache(enabled=False)
    assert gpfs == [get_gpf(n, reference) for n in numbers]
    assert texts == [factorize(n, reference) for n in numbers]
    assert cache.stats()["gpf_entries"] == 598
    print("  ✓ concurrent cache writes")


if __name__ == "__main__":
    print("\n=== Testing Prime Factor Utilities ===\n")

    test_gpf_known_values()
    test_gpf_sentinel_for_small_inputs()
    test_gpf_matches_is_prime()
    test_gpf_divides_and_is_largest()
    test_factorize_strings()
    test_factorize_round_trip()
    test_superscript_is_digit_wise()
    test_cache_is_transparent()
    test_default_cache_used_when_none_given()
    test_cache_concurrent_writers()

    print("\n✓ All tests passed!\n")
