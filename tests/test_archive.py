"""Tests for reading the paginated export archive."""

import zipfile
import pytest
from kiu.corpus.archive import read_archive, iter_pages
from kiu.corpus.config import page_name
from kiu.errors import CorpusSourceError


def _make_archive(path, pages):
    with zipfile.ZipFile(path, 'w') as zf:
        for page, content in pages.items():
            zf.writestr(page_name(page), content)
    return path


class TestPageName:
    def test_first_page_has_no_number(self):
        assert page_name(1) == 'messages.html'
        assert page_name(2) == 'messages2.html'
        assert page_name(176) == 'messages176.html'


class TestReadArchive:
    def test_concatenates_pages_in_order(self, tmp_path):
        path = _make_archive(tmp_path / 'chat.zip', {1: '<p>one</p>', 2: '<p>two</p>', 3: '<p>ĉu</p>'})
        assert read_archive(path, 1, 3) == '<p>one</p><p>two</p><p>ĉu</p>'

    def test_start_page_skips_earlier(self, tmp_path):
        path = _make_archive(tmp_path / 'chat.zip', {1: 'a', 2: 'b', 3: 'c'})
        assert read_archive(path, 2, 3) == 'bc'
        assert list(iter_pages(path, 3, 3)) == ['c']

    def test_missing_archive(self, tmp_path):
        with pytest.raises(CorpusSourceError, match='does not exist'):
            read_archive(tmp_path / 'none.zip', 1, 1)

    def test_not_a_zip(self, tmp_path):
        path = tmp_path / 'chat.zip'
        path.write_text('plain text')
        with pytest.raises(CorpusSourceError, match='broken'):
            read_archive(path, 1, 1)

    def test_missing_page(self, tmp_path):
        path = _make_archive(tmp_path / 'chat.zip', {1: 'a', 3: 'c'})
        with pytest.raises(CorpusSourceError, match='messages2.html'):
            read_archive(path, 1, 3)

    def test_undecodable_page(self, tmp_path):
        path = tmp_path / 'chat.zip'
        with zipfile.ZipFile(path, 'w') as zf:
            zf.writestr('messages.html', b'\xff\xfe\xfa')
        with pytest.raises(CorpusSourceError, match='UTF-8'):
            read_archive(path, 1, 1)
