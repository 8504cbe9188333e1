"""Global kiu configuration. Override paths via environment variables."""

import json
import os
from pathlib import Path

from .errors import ConfigError

# Paths
CONFIG_PATH = Path(os.environ.get('KIU_CONFIG', 'conf.json'))
ARCHIVE_PATH = Path(os.environ.get('KIU_ARCHIVE', 'babilejo.zip'))
MESSAGE_PATH = Path(os.environ.get('KIU_MESSAGE', 'msg.txt'))

# Last page of the chat export
LAST_PAGE = 176

# Share of the corpus held out for evaluation
TEST_FRACTION = 0.2

MINUTES_PER_DAY = 1440


def _is_int(value):
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value):
    return isinstance(value, (int, float)) and not isinstance(value, bool)


# key -> (type check, range check, description)
_FIELDS = {
    'min_qualifying_tokens': (_is_int, lambda v: v >= 1, 'a positive integer'),
    'probation_size': (_is_int, lambda v: v >= 1, 'a positive integer'),
    'start_page': (_is_int, lambda v: v >= 1, 'a positive integer'),
    'case_fold': (lambda v: isinstance(v, bool), lambda v: True, 'a boolean'),
    'word_mode': (lambda v: isinstance(v, bool), lambda v: True, 'a boolean'),
    'time_half_window': (_is_int, lambda v: 0 <= v < MINUTES_PER_DAY // 2,
                         'an integer in [0, 720)'),
    'per_token_scale': (_is_number, lambda v: v > 0, 'a positive number'),
    'length_divisor': (_is_number, lambda v: v > 0, 'a positive number'),
    'fallback_probability': (_is_number, lambda v: 0 < v <= 1, 'a number in (0, 1]'),
    'last_page': (_is_int, lambda v: v >= 1, 'a positive integer'),
    'test_fraction': (_is_number, lambda v: 0 <= v <= 1, 'a number in [0, 1]'),
}

_OPTIONAL = ('last_page', 'test_fraction')


class Settings:
    """Typed run settings, passed explicitly to every component that needs them."""

    def __init__(self, min_qualifying_tokens=3, probation_size=20, start_page=1,
                 case_fold=True, word_mode=False, time_half_window=30,
                 per_token_scale=10.0, length_divisor=50.0,
                 fallback_probability=0.001, last_page=LAST_PAGE,
                 test_fraction=TEST_FRACTION):
        self.min_qualifying_tokens = min_qualifying_tokens
        self.probation_size = probation_size
        self.start_page = start_page
        self.case_fold = case_fold
        self.word_mode = word_mode
        self.time_half_window = time_half_window
        self.per_token_scale = per_token_scale
        self.length_divisor = length_divisor
        self.fallback_probability = fallback_probability
        self.last_page = last_page
        self.test_fraction = test_fraction
        self.validate()

    def validate(self):
        """Raise ConfigError if any field has the wrong type or range."""
        for key, (type_ok, range_ok, what) in _FIELDS.items():
            value = getattr(self, key)
            if not type_ok(value) or not range_ok(value):
                raise ConfigError(f"'{key}' must be {what}, got {value!r}")
        if self.start_page > self.last_page:
            raise ConfigError(
                f"'start_page' ({self.start_page}) is after 'last_page' ({self.last_page})"
            )

    def to_dict(self):
        return {key: getattr(self, key) for key in _FIELDS}

    def save(self, path):
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def from_dict(cls, d):
        if not isinstance(d, dict):
            raise ConfigError('configuration must be a JSON object')
        missing = [k for k in _FIELDS if k not in _OPTIONAL and k not in d]
        if missing:
            raise ConfigError(f"missing configuration keys: {', '.join(missing)}")
        unknown = sorted(set(d) - set(_FIELDS))
        if unknown:
            raise ConfigError(f"unknown configuration keys: {', '.join(unknown)}")
        return cls(**d)

    @classmethod
    def load(cls, path):
        """Read settings from a JSON file. Raises ConfigError."""
        try:
            with open(path, encoding='utf-8') as f:
                d = json.load(f)
        except FileNotFoundError:
            raise ConfigError(f'configuration file {path} does not exist')
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ConfigError(f'configuration file {path} is broken: {e}')
        return cls.from_dict(d)
