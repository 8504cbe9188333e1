from .extract import Document, AuthorRegistry, Extractor, extract
from .split import split
from .archive import read_archive
