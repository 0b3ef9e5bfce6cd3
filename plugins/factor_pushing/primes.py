"""
Prime Factor Utilities for the Factor Pushing Automaton

Greatest prime factor (GPF), primality and factorization strings, all by
plain trial division. Results are memoized in a FactorCache so repeated
queries from the simulation and the renderer stay cheap.

By convention gpf(n) = 1 for n <= 1, so a cell holding 1 pushes and
receives nothing under the transition rule.
"""

import threading


SUPERSCRIPTS = {
    "0": "⁰", "1": "¹", "2": "²", "3": "³", "4": "⁴",
    "5": "⁵", "6": "⁶", "7": "⁷", "8": "⁸", "9": "⁹",
}

SEPARATOR = "·"  # middle dot


class FactorCache:
    """Memo tables for GPF values and factorization strings.

    Entries are write-once: every writer computes the same value for a key,
    so last-write-wins under the lock is safe. With enabled=False nothing is
    stored and every call recomputes.
    """

    def __init__(self, enabled=True):
        self.enabled = enabled
        self._gpf = {}
        self._factorization = {}
        self._lock = threading.Lock()

    def get_gpf(self, n):
        return self._gpf.get(n)

    def put_gpf(self, n, value):
        if not self.enabled:
            return
        with self._lock:
            self._gpf[n] = value

    def get_factorization(self, n):
        return self._factorization.get(n)

    def put_factorization(self, n, text):
        if not self.enabled:
            return
        with self._lock:
            self._factorization[n] = text

    def clear(self):
        with self._lock:
            self._gpf.clear()
            self._factorization.clear()

    def stats(self):
        return {
            "gpf_entries": len(self._gpf),
            "factorization_entries": len(self._factorization),
        }

    def __len__(self):
        return len(self._gpf) + len(self._factorization)


# Shared cache for callers that don't bring their own
DEFAULT_CACHE = FactorCache()


def _compute_gpf(n):
    number = n
    max_prime = 1

    # Strip all factors of 2
    while number % 2 == 0:
        max_prime = 2
        number //= 2

    # Odd trial divisors up to sqrt of what's left
    i = 3
    while i * i <= number:
        while number % i == 0:
            max_prime = i
            number //= i
        i += 2

    # Leftover cofactor is prime and larger than anything divided out
    if number > 1:
        max_prime = max(max_prime, number)
    return max_prime


def get_gpf(n, cache=None):
    """Greatest prime factor of n (1 for n <= 1)."""
    if n <= 1:
        return 1
    if cache is None:
        cache = DEFAULT_CACHE
    cached = cache.get_gpf(n)
    if cached is not None:
        return cached
    value = _compute_gpf(n)
    cache.put_gpf(n, value)
    return value


def is_prime(n, cache=None):
    """True iff n > 1 and n is its own greatest prime factor."""
    if n <= 1:
        return False
    return get_gpf(n, cache) == n


def factor_pairs(n):
    """Return [(prime, exponent), ...] in increasing prime order.

    Empty for n < 2.
    """
    pairs = []
    if n < 2:
        return pairs
    remaining = n

    if remaining % 2 == 0:
        count = 0
        while remaining % 2 == 0:
            count += 1
            remaining //= 2
        pairs.append((2, count))

    i = 3
    while i * i <= remaining:
        if remaining % i == 0:
            count = 0
            while remaining % i == 0:
                count += 1
                remaining //= i
            pairs.append((i, count))
        i += 2

    if remaining > 1:
        pairs.append((remaining, 1))
    return pairs


def to_superscript(k):
    """Render an integer with superscript digit glyphs, one per digit."""
    return "".join(SUPERSCRIPTS.get(c, c) for c in str(k))


def format_factors(pairs):
    """Join (prime, exponent) pairs as e.g. '2³·3'."""
    parts = []
    for p, e in pairs:
        if e == 1:
            parts.append(str(p))
        else:
            parts.append(f"{p}{to_superscript(e)}")
    return SEPARATOR.join(parts)


def factorize(n, cache=None):
    """Canonical factorization string of n.

    Values below 1 pass through as their decimal string; 1 is "1".
    """
    if n < 1:
        return str(n)
    if n == 1:
        return "1"
    if cache is None:
        cache = DEFAULT_CACHE
    cached = cache.get_factorization(n)
    if cached is not None:
        return cached
    text = format_factors(factor_pairs(n))
    cache.put_factorization(n, text)
    return text
