"""MarkovChain — first-order token transition model, one per author."""

# Start and end of a document share the empty token.
BOUNDARY = ''


def tokenize(text, word_mode=False):
    """Split normalized text into words or characters."""
    if word_mode:
        return text.split()
    return list(text)


class MarkovChain:
    """Transition probabilities previous-token -> {next-token: p}."""

    def __init__(self):
        self.transitions = {}
        self.n_documents = 0

    def fit(self, token_lists):
        """Count transitions over all documents, then normalize each row.

        Each document contributes BOUNDARY -> first token, every consecutive
        pair, and last token -> BOUNDARY. Rows are shared across documents.
        """
        counts = {}
        for tokens in token_lists:
            prev = BOUNDARY
            for token in tokens:
                row = counts.setdefault(prev, {})
                row[token] = row.get(token, 0) + 1
                prev = token
            row = counts.setdefault(prev, {})
            row[BOUNDARY] = row.get(BOUNDARY, 0) + 1
            self.n_documents += 1

        for prev, row in counts.items():
            total = sum(row.values())
            self.transitions[prev] = {t: c / total for t, c in row.items()}
        return self

    def prob(self, prev, token):
        """Trained probability of prev -> token, or None if never observed."""
        row = self.transitions.get(prev)
        if row is None:
            return None
        return row.get(token)

    @property
    def n_contexts(self):
        return len(self.transitions)


def train_chains(documents, n_authors, word_mode=False):
    """Fit one chain per author ID 1..n_authors. Index 0 is an empty placeholder.

    Authors without training documents get an empty chain.
    """
    by_author = [[] for _ in range(n_authors + 1)]
    for doc in documents:
        by_author[doc.author].append(tokenize(doc.text, word_mode))
    return [MarkovChain().fit(token_lists) for token_lists in by_author]
