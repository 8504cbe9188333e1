"""Tests for temporal profiles — circular smoothing and normalization."""

import random
import pytest

torch = pytest.importorskip('torch')

from kiu.core.temporal import MINUTES, smooth, build_profiles
from kiu.corpus.extract import AuthorRegistry


def _random_histogram(seed):
    rng = random.Random(seed)
    hist = [0] * MINUTES
    for _ in range(200):
        hist[rng.randrange(MINUTES)] += 1
    return hist


def _rotate(values, k):
    k %= len(values)
    return values[-k:] + values[:-k] if k else list(values)


class TestSmooth:
    def test_sums_to_one(self):
        density = smooth(_random_histogram(1), 15)
        assert density.shape == (MINUTES,)
        assert abs(density.sum().item() - 1.0) < 1e-9
        assert (density >= 0).all()

    def test_zero_window_is_normalized_histogram(self):
        hist = [0] * MINUTES
        hist[10] = 3
        hist[20] = 1
        density = smooth(hist, 0)
        assert density[10].item() == pytest.approx(0.75)
        assert density[20].item() == pytest.approx(0.25)
        assert density.sum().item() == pytest.approx(1.0)

    def test_window_wraps_midnight(self):
        hist = [0] * MINUTES
        hist[0] = 1
        density = smooth(hist, 2)
        nonzero = sorted(torch.nonzero(density).flatten().tolist())
        assert nonzero == [0, 1, 2, 1438, 1439]
        for m in nonzero:
            assert density[m].item() == pytest.approx(0.2)

    def test_window_sums_neighbours(self):
        hist = [0] * MINUTES
        hist[100] = 1
        hist[103] = 1
        density = smooth(hist, 2)
        # minutes 101 and 102 see both counts, 98..99 and 104..105 see one
        assert density[101].item() == pytest.approx(2 * density[99].item())
        assert density[102].item() == pytest.approx(2 * density[105].item())
        assert density[97].item() == 0.0

    @pytest.mark.parametrize('k', [1, 37, 720, 1439])
    def test_rotation_commutes(self, k):
        hist = _random_histogram(2)
        rotated_then_smoothed = smooth(_rotate(hist, k), 20)
        smoothed_then_rotated = torch.roll(smooth(hist, 20), k)
        assert torch.allclose(rotated_then_smoothed, smoothed_then_rotated)

    def test_empty_histogram_gives_zeros(self):
        density = smooth([0] * MINUTES, 5)
        assert density.sum().item() == 0.0

    def test_rejects_bad_window(self):
        with pytest.raises(ValueError):
            smooth([1] * MINUTES, 720)
        with pytest.raises(ValueError):
            smooth([1] * MINUTES, -1)

    def test_rejects_bad_length(self):
        with pytest.raises(ValueError):
            smooth([1] * 24, 0)


class TestBuildProfiles:
    def test_rows_follow_author_ids(self):
        registry = AuthorRegistry()
        registry.admit('bob')
        registry.admit('alice')
        night = [0] * MINUTES
        night[60] = 4
        noon = [0] * MINUTES
        noon[720] = 4
        histograms = {'alice': noon, 'bob': night, 'probation-only': noon}
        profiles = build_profiles(histograms, registry, 0)
        assert profiles.shape == (3, MINUTES)
        assert profiles[0].sum().item() == 0.0
        assert profiles[1][60].item() == pytest.approx(1.0)
        assert profiles[2][720].item() == pytest.approx(1.0)
