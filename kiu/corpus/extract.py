"""Extractor — turns exported chat markup into documents, author IDs and activity counts."""

import re
from dataclasses import dataclass
from html.parser import HTMLParser

from ..core.normalize import Normalizer, is_blacklisted
from ..config import MINUTES_PER_DAY
from .config import TEXT_LABEL, AUTHOR_LABEL, DATE_CLASS, CONTAINER_TAG

_CLOCK = re.compile(r'(\d{1,2}):(\d\d)')


@dataclass(frozen=True)
class Document:
    """One qualifying message of an admitted author."""
    author: int
    text: str
    minute: int


class AuthorRegistry:
    """Dense author IDs in order of admission. ID 0 is reserved."""

    def __init__(self):
        self.by_name = {}
        self.names = ['']

    def admit(self, name):
        """Assign the next free ID to name and return it."""
        if name in self.by_name:
            return self.by_name[name]
        author_id = len(self.names)
        self.by_name[name] = author_id
        self.names.append(name)
        return author_id

    def id_of(self, name):
        return self.by_name.get(name)

    def name_of(self, author_id):
        return self.names[author_id]

    def ids(self):
        return range(1, len(self.names))

    def __contains__(self, name):
        return name in self.by_name

    def __len__(self):
        return len(self.names) - 1


def parse_minute(text):
    """Minute of day from an HH:MM string, or None."""
    m = _CLOCK.search(text)
    if m is None:
        return None
    hour, minute = int(m.group(1)), int(m.group(2))
    if hour >= 24 or minute >= 60:
        return None
    return hour * 60 + minute


class Extractor(HTMLParser):
    """Single forward scan over the export, feedable page by page.

    Tracks the open div labels to know whose message is being read and when
    it was sent. New authors serve a probation: their first qualifying message
    is dropped, the next probation_size are held back, and only then do they
    get an ID and their held messages enter the corpus.
    """

    def __init__(self, min_qualifying_tokens, probation_size, normalizer=None):
        super().__init__(convert_charrefs=True)
        self.min_qualifying_tokens = min_qualifying_tokens
        self.probation_size = probation_size
        self.normalizer = normalizer or Normalizer()

        self.documents = []
        self.registry = AuthorRegistry()
        self.histograms = {}
        self.probation = {}  # name -> [(text, minute)] while on probation

        self.labels = []
        self.author = ''
        self.minute = 0

    def handle_starttag(self, tag, attrs):
        if tag != CONTAINER_TAG:
            return
        label = ''
        for key, value in attrs:
            if key == 'class' and value is not None:
                label = value
        self.labels.append(label)

    def handle_endtag(self, tag):
        if tag == CONTAINER_TAG and self.labels:
            self.labels.pop()

    def handle_data(self, data):
        if not self.labels or not data.strip():
            return
        label = self.labels[-1]
        if label == TEXT_LABEL:
            if not is_blacklisted(self.author):
                self.add_message(self.author, data, self.minute)
        elif label == AUTHOR_LABEL:
            self.author = data.strip()
        elif DATE_CLASS in label.split():
            minute = parse_minute(data)
            if minute is not None:
                self.minute = minute

    def add_message(self, author, raw_text, minute):
        """Record one message body sent by author at minute."""
        self.histograms.setdefault(author, [0] * MINUTES_PER_DAY)[minute] += 1

        text = self.normalizer.normalize(raw_text)
        if not self.normalizer.qualifies(text, self.min_qualifying_tokens):
            return

        if author in self.registry:
            self.documents.append(Document(self.registry.id_of(author), text, minute))
        elif author not in self.probation:
            self.probation[author] = []
        else:
            held = self.probation[author]
            held.append((text, minute))
            if len(held) == self.probation_size:
                author_id = self.registry.admit(author)
                for held_text, held_minute in self.probation.pop(author):
                    self.documents.append(Document(author_id, held_text, held_minute))

    def result(self):
        return self.documents, self.registry, self.histograms


def extract(markup, settings):
    """Parse markup into (documents, registry, histograms)."""
    extractor = Extractor(
        settings.min_qualifying_tokens,
        settings.probation_size,
        Normalizer.from_settings(settings),
    )
    extractor.feed(markup)
    extractor.close()
    return extractor.result()
