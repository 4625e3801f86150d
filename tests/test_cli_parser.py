"""Tests for command-line argument parsing."""

import pytest

from cli.parser import ParseError, parse_args


def test_parse_file_path():
    cmd = parse_args(['File.zip'])

    assert cmd.file_path == 'File.zip'
    assert cmd.debug is False
    assert cmd.pause is False
    assert cmd.config_path is None


def test_parse_options():
    cmd = parse_args(['--debug', '--pause', '--config', 'settings.json', 'File.zip'])

    assert cmd.debug is True
    assert cmd.pause is True
    assert cmd.config_path == 'settings.json'
    assert cmd.file_path == 'File.zip'


def test_parse_config_equals_form():
    assert parse_args(['--config=a.json', 'f']).config_path == 'a.json'


def test_double_dash_allows_dash_prefixed_names():
    assert parse_args(['--', '--weird-name.bin']).file_path == '--weird-name.bin'


@pytest.mark.parametrize('argv', [
    [],
    ['   '],
    ['--debug'],
    ['a.bin', 'b.bin'],
    ['--config'],
    ['--unknown', 'a.bin'],
])
def test_parse_errors(argv):
    with pytest.raises(ParseError):
        parse_args(argv)
