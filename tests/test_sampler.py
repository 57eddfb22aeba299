import numpy as np
import pytest

from diffevo.optimization import DonorSampler, InsufficientDonorsError


def test_sample_returns_distinct_indices() -> None:
    sampler = DonorSampler(10, np.random.default_rng(0))
    for current in range(10):
        donors = sampler.sample(5, current)
        assert len(donors) == 5
        assert len(set(donors)) == 5
        assert all(0 <= d < 10 for d in donors)


def test_buffer_stays_a_permutation() -> None:
    sampler = DonorSampler(7, np.random.default_rng(1))
    for _ in range(20):
        sampler.sample(3, 0)
        np.testing.assert_array_equal(np.sort(sampler.buffer), np.arange(7))


def test_buffer_is_reshuffled_every_draw() -> None:
    sampler = DonorSampler(50, np.random.default_rng(2))
    first = sampler.sample(5, 0)
    second = sampler.sample(5, 0)
    assert first != second


def test_self_donation_allowed_by_default() -> None:
    sampler = DonorSampler(3, np.random.default_rng(3))
    # k == N: every index, the current one included, must be drawn
    assert sorted(sampler.sample(3, 1)) == [0, 1, 2]


def test_exclude_self_never_returns_current() -> None:
    sampler = DonorSampler(4, np.random.default_rng(4), exclude_self=True)
    for _ in range(200):
        donors = sampler.sample(3, 2)
        assert 2 not in donors
        assert sorted(donors) == [0, 1, 3]


@pytest.mark.parametrize(
    "size,k,exclude_self",
    [
        (1, 2, False),
        (1, 3, False),
        (4, 5, False),
        (3, 3, True),
        (1, 2, True),
    ],
)
def test_insufficient_donors(size: int, k: int, exclude_self: bool) -> None:
    sampler = DonorSampler(size, np.random.default_rng(5), exclude_self=exclude_self)
    with pytest.raises(InsufficientDonorsError):
        sampler.sample(k, 0)
    with pytest.raises(InsufficientDonorsError):
        sampler.check(k)


def test_same_seed_same_draws() -> None:
    a = DonorSampler(12, np.random.default_rng(6))
    b = DonorSampler(12, np.random.default_rng(6))
    assert [a.sample(4, i) for i in range(12)] == [b.sample(4, i) for i in range(12)]


def test_independent_samplers_do_not_share_buffers() -> None:
    a = DonorSampler(5, np.random.default_rng(7))
    b = DonorSampler(5, np.random.default_rng(8))
    a.sample(3, 0)
    assert a.buffer is not b.buffer
    np.testing.assert_array_equal(b.buffer, np.arange(5))
