"""Scorer — ranks authors by combined content and time-of-day likelihood."""

import math

import torch

from .chain import BOUNDARY, tokenize


class Scorer:
    """Scores a token sequence against every admitted author's chain and profile.

    chains[i] and profiles[i] belong to author ID i; index 0 is unused.
    Without profiles, or without a minute, only content is scored.
    """

    def __init__(self, chains, profiles=None, fallback_probability=0.001,
                 per_token_scale=1.0, length_divisor=50.0):
        self.chains = chains
        self.profiles = profiles
        self.fallback_probability = fallback_probability
        self.per_token_scale = per_token_scale
        self.length_divisor = length_divisor
        self._log_fallback = math.log(fallback_probability)
        self._log_scale = math.log(per_token_scale)

    @classmethod
    def from_settings(cls, chains, profiles, settings):
        return cls(
            chains, profiles,
            fallback_probability=settings.fallback_probability,
            per_token_scale=settings.per_token_scale,
            length_divisor=settings.length_divisor,
        )

    @property
    def n_authors(self):
        return max(len(self.chains) - 1, 0)

    def content_log_likelihood(self, chain, tokens):
        """Log of the product of per-token transition probabilities.

        Starts from the boundary token. The final transition into the
        boundary is not scored, although training counts it.
        """
        total = 0.0
        prev = BOUNDARY
        for token in tokens:
            p = chain.prob(prev, token)
            total += (self._log_fallback if p is None else math.log(p)) + self._log_scale
            prev = token
        return total

    def log_likelihoods(self, tokens, minute=None):
        """Unnormalized log likelihood per author, position i = author ID i + 1."""
        scores = torch.tensor(
            [self.content_log_likelihood(chain, tokens) for chain in self.chains[1:]],
            dtype=torch.float64,
        )
        if minute is not None and self.profiles is not None:
            # Longer messages trust their timing more.
            exponent = 1 + len(tokens) / self.length_divisor
            scores = scores + exponent * torch.log(self.profiles[1:, minute])
        return scores

    def log_ranking(self, tokens, minute=None):
        """Ranked [(log probability, author_id)], most likely first."""
        n = self.n_authors
        if n == 0:
            return []
        scores = self.log_likelihoods(tokens, minute)
        if torch.isneginf(scores).all():
            # Every author has zero likelihood: no evidence either way.
            log_probs = torch.full((n,), -math.log(n), dtype=torch.float64)
        else:
            log_probs = torch.log_softmax(scores, dim=0)
        ordered, order = torch.sort(log_probs, descending=True, stable=True)
        return [(lp, i + 1) for lp, i in zip(ordered.tolist(), order.tolist())]

    def score(self, tokens, minute=None):
        """Ranked [(probability, author_id)], most likely first, summing to 1."""
        return [(math.exp(lp), author_id) for lp, author_id in self.log_ranking(tokens, minute)]

    def predict(self, text, word_mode=False, minute=None):
        """Log ranking for already normalized text."""
        return self.log_ranking(tokenize(text, word_mode), minute)


def evaluate(scorer, documents, word_mode=False):
    """Top-1 accuracy over documents, scored with their true minute. 0.0 if empty."""
    if not documents:
        return 0.0
    hits = 0
    for doc in documents:
        ranking = scorer.score(tokenize(doc.text, word_mode), doc.minute)
        if ranking and ranking[0][1] == doc.author:
            hits += 1
    return hits / len(documents)
