"""Tests for the seedable Alea PRNG."""

from py_galaxy.core.alea_prng import AleaPRNG
from py_galaxy.utils.random import create_prng, new_seed


class TestAleaPRNG:
    """Test PRNG determinism and helper ranges."""

    def test_same_seed_same_sequence(self):
        """Two generators with the same seed agree."""
        a = AleaPRNG("galaxy")
        b = AleaPRNG("galaxy")
        assert [a.random() for _ in range(20)] == [b.random() for _ in range(20)]

    def test_different_seeds_differ(self):
        """Different seeds give different sequences."""
        a = AleaPRNG("seed1")
        b = AleaPRNG("seed2")
        assert [a.random() for _ in range(5)] != [b.random() for _ in range(5)]

    def test_int_and_string_seeds_agree(self):
        """Integer seeds hash through their decimal form."""
        a = AleaPRNG(42)
        b = AleaPRNG("42")
        assert a.random() == b.random()

    def test_random_range(self):
        """random() stays in [0, 1)."""
        prng = AleaPRNG("range")
        values = [prng.random() for _ in range(1000)]
        assert min(values) >= 0.0
        assert max(values) < 1.0

    def test_randint_inclusive(self):
        """randint covers both ends and nothing else."""
        prng = AleaPRNG("dice")
        values = {prng.randint(1, 10) for _ in range(2000)}
        assert values == set(range(1, 11))

    def test_uniform_bounds(self):
        """uniform() respects its bounds."""
        prng = AleaPRNG("uniform")
        values = [prng.uniform(-20, 20) for _ in range(500)]
        assert all(-20 <= v < 20 for v in values)

    def test_call_count(self):
        """Every draw is counted."""
        prng = AleaPRNG("count")
        prng.random()
        prng.angle()
        prng.uniform(0, 1)
        assert prng.call_count == 3


class TestCreatePRNG:
    """Test per-run PRNG creation."""

    def test_explicit_seed_kept(self):
        """An explicit seed is returned unchanged."""
        prng, seed = create_prng("abc")
        assert seed == "abc"
        assert prng.random() == AleaPRNG("abc").random()

    def test_fresh_seed_is_recorded(self):
        """A missing seed is replaced by a reproducible one that fits a JSON number."""
        prng, seed = create_prng(None)
        assert isinstance(seed, int)
        assert 0 <= seed < 2 ** 53
        assert prng.random() == AleaPRNG(seed).random()

    def test_fresh_seeds_fit_json_numbers(self):
        """Fresh seeds stay exact when read back as IEEE doubles."""
        for _ in range(50):
            seed = new_seed()
            assert float(seed) == seed
            assert seed <= 2 ** 53 - 1

    def test_instances_are_independent(self):
        """Drawing from one run's PRNG does not affect another's."""
        first, _ = create_prng("shared")
        second, _ = create_prng("shared")
        for _ in range(10):
            first.random()
        assert second.random() == AleaPRNG("shared").random()
