import random
from dataclasses import dataclass
from typing import Optional, Sequence

import requests

from revdict.models import MAX_WORD_CHARS


class LookupFailed(Exception):
    """The word source or dictionary could not be reached or returned junk."""


@dataclass(frozen=True)
class DefinedWord:
    word: str
    definition: str


def first_definition(payload) -> Optional[DefinedWord]:
    """Pull the headword and first non-empty definition out of a dictionary response.

    The dictionary answers with a list of entries, each holding
    ``meanings[].definitions[].definition``. Anything else means "not found".
    """
    if not isinstance(payload, list) or not payload:
        return None
    entry = payload[0]
    if not isinstance(entry, dict):
        return None
    headword = (entry.get('word') or '').strip().lower()
    # longer headwords do not fit the word columns
    if not headword or len(headword) > MAX_WORD_CHARS:
        return None
    for meaning in entry.get('meanings') or []:
        if not isinstance(meaning, dict):
            continue
        for d in meaning.get('definitions') or []:
            text = (d.get('definition') or '').strip() if isinstance(d, dict) else ''
            if text:
                return DefinedWord(word=headword, definition=text)
    return None


class WordLookup:
    """Resolves candidate words to (canonical word, definition) pairs.

    Candidates come from the random word API, or from ``pool`` when one is
    given (the fixed-set mode).
    """

    def __init__(self, random_word_url: str, dictionary_url: str,
                 timeout: float = 5.0, pool: Optional[Sequence[str]] = None, http=None):
        self.random_word_url = random_word_url
        self.dictionary_url = dictionary_url.rstrip('/')
        self.timeout = timeout
        self.pool = list(pool) if pool else None
        self.http = http or requests

    @classmethod
    def from_config(cls, config, mode: str) -> 'WordLookup':
        pool = config.get('FIXED_WORD_POOL') if mode == 'fixed-set' else None
        return cls(
            random_word_url=config['RANDOM_WORD_API_URL'],
            dictionary_url=config['DICTIONARY_API_URL'],
            timeout=float(config.get('LOOKUP_TIMEOUT_SEC', 5)),
            pool=pool,
        )

    def _get_json(self, url, params=None):
        try:
            res = self.http.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            raise LookupFailed(f'request to {url} failed: {exc}') from exc
        # 404 is how the dictionary says "no such word"
        if res.status_code == 404:
            return None
        if res.status_code >= 400:
            raise LookupFailed(f'{url} answered {res.status_code}')
        try:
            return res.json()
        except ValueError as exc:
            raise LookupFailed(f'{url} returned malformed JSON') from exc

    def candidate(self, length: Optional[int] = None) -> str:
        if self.pool is not None:
            choices = [w for w in self.pool if length is None or len(w) == length]
            if not choices:
                raise LookupFailed(f'no pool word has length {length}')
            return random.choice(choices)

        params = {'words': 1}
        if length:
            params['length'] = length
        data = self._get_json(self.random_word_url, params=params)
        if not isinstance(data, list) or not data or not isinstance(data[0], str) or not data[0].strip():
            raise LookupFailed('random word source returned no word')
        return data[0].strip().lower()

    def define(self, word: str) -> Optional[DefinedWord]:
        data = self._get_json(f'{self.dictionary_url}/{word}')
        if data is None:
            return None
        return first_definition(data)
