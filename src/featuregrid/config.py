# Copyright (c) 2020 featuregrid Developers.
# Distributed under the terms of the Apache License, Version 2.0.
# SPDX-License-Identifier: Apache-2.0
"""String-keyed settings object with lenient typed accessors and YAML persistence."""

import os
from pathlib import Path

import yaml


_true_literals = {'true', 'yes', 'on', '1'}
_false_literals = {'false', 'no', 'off', '0'}


class ConfigError(ValueError):
    """Raised by strict parsing when a setting holds an unusable value."""


def parse_bool(text):
    """Parse a boolean literal, returning None when ``text`` is not recognized."""
    if isinstance(text, bool):
        return text
    lowered = str(text).strip().lower()
    if lowered in _true_literals:
        return True
    if lowered in _false_literals:
        return False
    return None


def parse_float(text):
    """Parse a real number, returning None when ``text`` is not numeric."""
    if isinstance(text, bool):
        return None
    try:
        return float(text)
    except (TypeError, ValueError):
        return None


def _to_text(value):
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


class Config:
    """Ordered collection of named settings.

    Values are stored as strings, as they would be read from a settings file, and converted
    on access. Typed accessors never raise on malformed values; they fall back to the
    supplied default instead.

    Parameters
    ----------
    values : mapping, optional
        Initial settings. Non-string values are stored in their text form.

    """

    def __init__(self, values=None):
        self._values = {}
        for key, value in (values or {}).items():
            self.add(key, value)

    def add(self, key, value):
        """Set ``key`` to the text form of ``value``."""
        self._values[str(key)] = _to_text(value)

    def add_optional(self, key, value):
        """Set ``key`` only when ``value`` is not None."""
        if value is not None:
            self.add(key, value)

    def has_value(self, key):
        return key in self._values

    def value(self, key, default=''):
        """Raw text value of ``key``, or ``default`` when absent."""
        return self._values.get(key, default)

    def get_float(self, key, default=None):
        if key not in self._values:
            return default
        parsed = parse_float(self._values[key])
        return default if parsed is None else parsed

    def get_bool(self, key, default=None):
        if key not in self._values:
            return default
        parsed = parse_bool(self._values[key])
        return default if parsed is None else parsed

    def to_dict(self):
        return dict(self._values)

    def __contains__(self, key):
        return key in self._values

    def __getitem__(self, key):
        return self._values[key]

    def __len__(self):
        return len(self._values)

    def __eq__(self, other):
        if not isinstance(other, Config):
            return NotImplemented
        return self._values == other._values

    def __repr__(self):
        return f"Config({self._values!r})"

    @classmethod
    def from_yaml(cls, source):
        """Load settings from a YAML mapping.

        Parameters
        ----------
        source : str or pathlib.Path
            Path to a YAML file, or YAML text.

        """
        if isinstance(source, Path) or (isinstance(source, str) and os.path.isfile(source)):
            with open(source) as f:
                data = yaml.safe_load(f)
        else:
            data = yaml.safe_load(source)
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(f"Expected a YAML mapping of settings, got {type(data).__name__}.")
        return cls(data)

    def to_yaml(self, path=None):
        """Dump settings as YAML text, also writing to ``path`` when given."""
        text = yaml.safe_dump(self.to_dict(), default_flow_style=False, sort_keys=False)
        if path is not None:
            Path(path).write_text(text)
        return text
