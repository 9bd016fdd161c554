from __future__ import annotations

from issuetriage.errors import ConfigError, CorpusError, classify_error, redact


def test_classify_config_and_corpus():
    assert classify_error(ConfigError('bad repo')).category == 'config'
    assert classify_error(CorpusError('snapshot missing')).category == 'corpus'


def test_classify_parse():
    info = classify_error(ValueError('Expecting value: line 1 column 1'))
    assert info.category == 'parse'


def test_classify_io():
    info = classify_error(FileNotFoundError('no such file'))
    assert info.category == 'io'
    assert info.original_type == 'FileNotFoundError'


def test_classify_generic():
    assert classify_error(KeyError('x')).category == 'generic'


def test_redact_tokens():
    sample = (
        "Token ghp_ABCDEFGHIJKLMNOPQRSTUVWX and cookie "
        "git-gopher.example.com=1//0abcdefghijklmnopqrstuvwxyz"
    )
    out = redact(sample)
    assert 'ghp_' not in out
    assert 'abcdefghijklmnopqrstuvwxyz' not in out
    assert out.count('<redacted>') == 2
