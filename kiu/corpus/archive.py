"""Archive reader — loads the paginated chat export from its zip file."""

import zipfile

from ..errors import CorpusSourceError
from .config import page_name


def iter_pages(path, start_page, last_page):
    """Yield the markup of pages start_page..last_page in order."""
    try:
        archive = zipfile.ZipFile(path)
    except FileNotFoundError:
        raise CorpusSourceError(f'archive {path} does not exist')
    except (zipfile.BadZipFile, OSError) as e:
        raise CorpusSourceError(f'archive {path} is broken: {e}')

    with archive:
        for page in range(start_page, last_page + 1):
            name = page_name(page)
            try:
                data = archive.read(name)
            except KeyError:
                raise CorpusSourceError(f'archive {path} has no page {name}')
            except (zipfile.BadZipFile, OSError) as e:
                raise CorpusSourceError(f'page {name} in {path} is unreadable: {e}')
            try:
                markup = data.decode('utf-8')
            except UnicodeDecodeError as e:
                raise CorpusSourceError(f'page {name} in {path} is not UTF-8: {e}')
            yield markup


def read_archive(path, start_page, last_page):
    """Concatenated markup of the requested pages. Raises CorpusSourceError."""
    return ''.join(iter_pages(path, start_page, last_page))
