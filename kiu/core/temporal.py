"""Temporal profiles — circularly smoothed minute-of-day posting densities."""

import torch
import torch.nn.functional as F

from ..config import MINUTES_PER_DAY as MINUTES


def smooth(histogram, half_window):
    """Smooth a 1440-slot histogram over a wrap-around window and normalize.

    Each minute becomes the sum of the 2 * half_window + 1 minutes centred on
    it, minute 1439 being adjacent to minute 0. The result sums to 1, or is
    all zeros if the histogram is.
    """
    if not 0 <= half_window < MINUTES // 2:
        raise ValueError(f'half_window must be in [0, {MINUTES // 2}), got {half_window}')
    counts = torch.as_tensor(histogram, dtype=torch.float64)
    if counts.shape != (MINUTES,):
        raise ValueError(f'histogram must have {MINUTES} slots, got {tuple(counts.shape)}')

    width = 2 * half_window + 1
    tiled = counts.repeat(3)
    # Window over the middle copy: indices MINUTES - hw .. 2 * MINUTES + hw.
    middle = tiled[MINUTES - half_window:2 * MINUTES + half_window]
    kernel = torch.ones(1, 1, width, dtype=torch.float64)
    smoothed = F.conv1d(middle.view(1, 1, -1), kernel).view(MINUTES)

    total = smoothed.sum()
    if total <= 0:
        return torch.zeros(MINUTES, dtype=torch.float64)
    return smoothed / total


def build_profiles(histograms, registry, half_window):
    """Stack smoothed profiles of all admitted authors, row = author ID.

    Row 0 and authors without a histogram are all zeros.
    """
    profiles = torch.zeros(len(registry) + 1, MINUTES, dtype=torch.float64)
    for author_id in registry.ids():
        histogram = histograms.get(registry.name_of(author_id))
        if histogram is not None:
            profiles[author_id] = smooth(histogram, half_window)
    return profiles
