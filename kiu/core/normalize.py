"""Normalizer — cleans raw chat text and filters out bot/system authors."""

import re

BLACKLIST = frozenset([
    '',
    'Deleted Account',
    'Anonymous Telegram Bot',
    'Anonymous telegram bot',
    'Anonima Roboto',
    'Robotino',
])

_FORWARDED = re.compile(r'.+ via @.+')
_DATETIME = re.compile(r'\d\d.\d\d.\d\d\d\d \d\d:\d\d:\d\d')

_URL = re.compile(r'\shttps?://\S+', re.IGNORECASE)
_SPACE = re.compile(r'\s+')

# Esperanto endings, longest first. No replacement ends in a rewritable
# suffix, so stemming twice is the same as stemming once.
STEM_RULES = [
    (r'ojn', 'o'),
    (r'ajn', 'a'),
    (r'oj', 'o'),
    (r'aj', 'a'),
    (r'on', 'o'),
    (r'an', 'a'),
    (r'[aiou]s', 'i'),
    (r'u', 'i'),
]

_STEMS = [
    (re.compile(rf'(?<=\w\w){suffix}(?=\s|$)', re.IGNORECASE), repl)
    for suffix, repl in STEM_RULES
]


def is_blacklisted(author):
    """True for bot/system senders, forwarded posts and leaked timestamps."""
    if author in BLACKLIST:
        return True
    if _FORWARDED.search(author):
        return True
    return _DATETIME.search(author) is not None


def space_count(text):
    return text.count(' ')


def stem(text):
    """Rewrite common noun, adjective and verb endings to a short canonical form."""
    for pattern, repl in _STEMS:
        text = pattern.sub(repl, text)
    return text


class Normalizer:
    """Turns a raw message into the form the chains are trained on."""

    def __init__(self, case_fold=True, word_mode=False):
        self.case_fold = case_fold
        self.word_mode = word_mode

    def normalize(self, text):
        text = _URL.sub(' ', ' ' + text)
        if self.word_mode:
            text = stem(text)
        text = _SPACE.sub(' ', text)
        if self.case_fold:
            text = text.lower()
        return text.strip()

    def qualifies(self, text, min_tokens):
        """Whether normalized text holds at least min_tokens words."""
        return space_count(text) >= min_tokens - 1

    @classmethod
    def from_settings(cls, settings):
        return cls(case_fold=settings.case_fold, word_mode=settings.word_mode)
