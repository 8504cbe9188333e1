"""Shared test fixtures for kiu tests."""

import sys
from html import escape
from pathlib import Path

# Ensure kiu package is importable
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest
from kiu.config import Settings


def render_export(messages):
    """Chat export markup for [(author, 'HH:MM', text)], one message div each."""
    parts = ['<html><body><div class="history">']
    for i, (author, clock, text) in enumerate(messages, 1):
        parts.append(
            f'<div class="message default clearfix" id="message{i}">'
            f'<div class="body">'
            f'<div class="pull_right date details" title="01.02.2019 {clock}:00">{clock}</div>'
            f'<div class="from_name">\n  {escape(author)}\n</div>'
            f'<div class="text">\n  {escape(text)}\n</div>'
            f'</div></div>'
        )
    parts.append('</div></body></html>')
    return '\n'.join(parts)


@pytest.fixture
def export():
    """Builder for synthetic chat export markup."""
    return render_export


@pytest.fixture
def settings():
    """Char-mode settings that admit authors quickly."""
    return Settings(
        min_qualifying_tokens=1,
        probation_size=2,
        start_page=1,
        last_page=2,
        case_fold=True,
        word_mode=False,
        time_half_window=10,
        per_token_scale=1.0,
        length_divisor=10.0,
        fallback_probability=0.001,
        test_fraction=0.0,
    )
