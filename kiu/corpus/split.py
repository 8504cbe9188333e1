"""Random train/test partition of the corpus."""

import random


def split(documents, test_fraction, rng=None):
    """Shuffle documents and move about test_fraction of them into a test set.

    Returns (train, test). Elements are popped from the tail of the shuffled
    list until moved / test_fraction reaches the corpus size.
    """
    if not 0 <= test_fraction <= 1:
        raise ValueError(f'test_fraction must be in [0, 1], got {test_fraction}')
    rng = rng or random.Random()

    train = list(documents)
    rng.shuffle(train)
    test = []
    n = len(train)
    if test_fraction == 0:
        return train, test

    moved = 0
    while moved / test_fraction < n:
        test.append(train.pop())
        moved += 1
    return train, test
