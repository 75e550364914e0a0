#!/usr/bin/env python
# vim:fileencoding=utf8

"""
Snowball stemmers running on a shared table-driven stemming machine.
"""

__version__ = '0.1.0'


import importlib
import threading


# Language names and aliases mapped to their ``Program`` subclasses
LANGUAGES = {
    'norwegian': 'sblstem.norwegian.NorwegianStemmer',
    'norsk': 'sblstem.norwegian.NorwegianStemmer',
    'no': 'sblstem.norwegian.NorwegianStemmer',
    'nb': 'sblstem.norwegian.NorwegianStemmer',
}

_stemmers = {}
_lock = threading.Lock()


def get_stemmer(language='norwegian'):
    """
    Return the stemmer for a language.

    Stemmers hold no per-word state, so the same instance is returned
    for every call and may be shared between threads. Raises
    ``KeyError`` for unknown languages.
    """
    try:
        path = LANGUAGES[language.lower()]
    except KeyError:
        raise KeyError('Unknown language %r (known: %s).' % (
            language, ', '.join(sorted(LANGUAGES))))
    with _lock:
        if path not in _stemmers:
            module_name, class_name = path.rsplit('.', 1)
            module = importlib.import_module(module_name)
            _stemmers[path] = getattr(module, class_name)()
        return _stemmers[path]


def stem(word, language='norwegian'):
    """
    Stem a single word.
    """
    return get_stemmer(language).stem(word)
