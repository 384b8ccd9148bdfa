import pytest
import requests

from revdict.services.lookup import DefinedWord, LookupFailed, WordLookup, first_definition


class FakeResponse:
    def __init__(self, status_code=200, payload=None, bad_json=False):
        self.status_code = status_code
        self.payload = payload
        self.bad_json = bad_json

    def json(self):
        if self.bad_json:
            raise ValueError('not json')
        return self.payload


class FakeHttp:
    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, params, timeout))
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


ENTRY = [{
    'word': 'Serendipity',
    'meanings': [
        {'partOfSpeech': 'noun', 'definitions': [{'definition': ''}]},
        {'partOfSpeech': 'noun', 'definitions': [{'definition': 'A happy accident.'}, {'definition': 'Luck.'}]},
    ],
}]


def lookup(http, pool=None):
    return WordLookup('http://words.test/api', 'http://dict.test/en/', timeout=2.5, pool=pool, http=http)


def test_first_definition_takes_first_non_empty():
    assert first_definition(ENTRY) == DefinedWord(word='serendipity', definition='A happy accident.')


@pytest.mark.parametrize('payload', [
    None,
    [],
    {'title': 'No Definitions Found'},
    [{'word': 'cat', 'meanings': []}],
    [{'word': '', 'meanings': [{'definitions': [{'definition': 'x'}]}]}],
    ['cat'],
])
def test_first_definition_not_found(payload):
    assert first_definition(payload) is None


def test_candidate_from_random_word_source():
    http = FakeHttp(FakeResponse(payload=['Ember']))
    assert lookup(http).candidate(5) == 'ember'
    assert http.calls == [('http://words.test/api', {'words': 1, 'length': 5}, 2.5)]


def test_candidate_without_length():
    http = FakeHttp(FakeResponse(payload=['ember']))
    lookup(http).candidate()
    assert http.calls[0][1] == {'words': 1}


@pytest.mark.parametrize('response', [
    FakeResponse(payload=[]),
    FakeResponse(payload={'error': 'x'}),
    FakeResponse(bad_json=True),
    FakeResponse(status_code=500),
    requests.ConnectionError('down'),
    requests.Timeout('slow'),
])
def test_candidate_failures_raise_lookup_failed(response):
    with pytest.raises(LookupFailed):
        lookup(FakeHttp(response)).candidate()


def test_define_hits_dictionary():
    http = FakeHttp(FakeResponse(payload=ENTRY))
    assert lookup(http).define('serendipity') == DefinedWord('serendipity', 'A happy accident.')
    assert http.calls[0][0] == 'http://dict.test/en/serendipity'


def test_define_404_is_not_found():
    http = FakeHttp(FakeResponse(status_code=404, payload={'title': 'No Definitions Found'}))
    assert lookup(http).define('zzxq') is None


def test_define_network_error_raises():
    with pytest.raises(LookupFailed):
        lookup(FakeHttp(requests.ConnectionError('down'))).define('cat')


def test_pool_candidates_respect_length():
    http = FakeHttp()
    pooled = lookup(http, pool=['apple', 'bridge', 'candle'])
    assert pooled.candidate(5) == 'apple'
    assert pooled.candidate(6) in ('bridge', 'candle')
    assert http.calls == []
    with pytest.raises(LookupFailed):
        pooled.candidate(9)


def test_from_config_uses_pool_only_for_fixed_set(flask_app):
    assert WordLookup.from_config(flask_app.config, 'free-play').pool is None
    assert WordLookup.from_config(flask_app.config, 'fixed-set').pool == ['apple', 'bridge', 'candle']


def test_overlong_headword_is_not_found():
    payload = [{'word': 'x' * 65, 'meanings': [{'definitions': [{'definition': 'Too long to store.'}]}]}]
    assert first_definition(payload) is None
    http = FakeHttp(FakeResponse(payload=payload))
    assert lookup(http).define('x' * 65) is None
    assert first_definition([{'word': 'y' * 64, 'meanings': [{'definitions': [{'definition': 'Fits.'}]}]}]) is not None
