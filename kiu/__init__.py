"""kiu — who wrote it? Chat message authorship by Markov chains and posting times."""

__version__ = '0.1.0'
