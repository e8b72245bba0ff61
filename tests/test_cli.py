"""Tests for the polysecret command line."""

import json

import pytest
from click.testing import CliRunner

from polysecret.base import encode
from polysecret.cli import main


@pytest.fixture
def runner():
    return CliRunner()


def _invoke(runner, args, doc=None):
    text = json.dumps(doc) if isinstance(doc, dict) else doc
    return runner.invoke(main, args, input=text)


class TestSolveCommand:

    def test_stdin(self, runner, sample_document):
        result = _invoke(runner, ['solve', '-'], sample_document)
        assert result.exit_code == 0
        assert result.output.strip() == '5'

    def test_file(self, runner, sample_document, tmp_path):
        path = tmp_path / 'shares.json'
        path.write_text(json.dumps(sample_document))
        result = runner.invoke(main, ['solve', str(path), '--verify'])
        assert result.exit_code == 0
        assert result.output.strip() == '5'

    def test_json_output(self, runner, sample_document):
        result = _invoke(runner, ['solve', '--json'], sample_document)
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data == {"secret": "5", "n": 5, "k": 3,
                        "used": [1, 2, 3], "verified": False}

    def test_malformed_input_exit_1(self, runner):
        result = _invoke(runner, ['solve'], '{"keys": {"n": 1}}')
        assert result.exit_code == 1
        assert 'MissingField' in result.output
        assert 'field=k' in result.output

    def test_bad_json_exit_1(self, runner):
        result = _invoke(runner, ['solve'], 'not json')
        assert result.exit_code == 1
        assert 'MalformedDocument' in result.output

    def test_numeric_error_exit_2(self, runner):
        doc = {"keys": {"n": 2, "k": 2},
               "1": {"base": 10, "value": "1"},
               "3": {"base": 10, "value": "2"}}
        result = _invoke(runner, ['solve'], doc)
        assert result.exit_code == 2
        assert 'NonIntegralResult' in result.output

    def test_inconsistent_exit_2(self, runner, sample_document):
        sample_document["4"]["value"] = "101"
        result = _invoke(runner, ['solve', '--verify'], sample_document)
        assert result.exit_code == 2
        assert 'InconsistentShares' in result.output

    def test_invalid_digit_names_key(self, runner, sample_document):
        sample_document["2"]["value"] = "1g"
        result = _invoke(runner, ['solve'], sample_document)
        assert result.exit_code == 1
        assert 'key=2' in result.output
        assert 'position=1' in result.output


class TestDecodeCommand:

    def test_decode(self, runner):
        result = runner.invoke(main, ['decode', '10', '--base', '2'])
        assert result.exit_code == 0
        assert result.output.strip() == '2'

    def test_decode_to_base(self, runner):
        result = runner.invoke(main, ['decode', 'ff', '--base', '16', '--to', '2'])
        assert result.exit_code == 0
        assert result.output.strip() == '11111111'

    def test_decode_error(self, runner):
        result = runner.invoke(main, ['decode', '12', '--base', '2'])
        assert result.exit_code == 1
        assert 'InvalidDigit' in result.output

    def test_bad_base(self, runner):
        result = runner.invoke(main, ['decode', '1', '--base', '40'])
        assert result.exit_code == 1
        assert 'InvalidBase' in result.output


class TestLogLevel:

    def test_env_var(self, runner, sample_document):
        result = runner.invoke(main, ['solve'], input=json.dumps(sample_document),
                               env={'POLYSECRET_LOG_LEVEL': 'debug'})
        assert result.exit_code == 0
        assert result.output.strip().splitlines()[-1] == '5'


class TestReadFailures:
    """Unreadable documents are input errors, never numeric ones."""

    def test_missing_file_exit_1(self, runner, tmp_path):
        result = runner.invoke(main, ['solve', str(tmp_path / 'absent.json')])
        assert result.exit_code == 1
        assert 'MalformedDocument' in result.output
        assert 'cannot read' in result.output

    def test_directory_exit_1(self, runner, tmp_path):
        result = runner.invoke(main, ['solve', str(tmp_path)])
        assert result.exit_code == 1
        assert 'MalformedDocument' in result.output

    def test_invalid_utf8_file_exit_1(self, runner, tmp_path):
        path = tmp_path / 'shares.json'
        path.write_bytes(b'{"keys": {"n": 1, "k": 1}, "1": \xff}')
        result = runner.invoke(main, ['solve', str(path)])
        assert result.exit_code == 1
        assert 'MalformedDocument' in result.output

    def test_invalid_utf8_stdin_exit_1(self, runner):
        result = runner.invoke(main, ['solve', '-'], input=b'\xff\xfe')
        assert result.exit_code == 1
        assert 'MalformedDocument' in result.output


class TestLongIntegers:

    def test_long_key(self, runner):
        doc = {"keys": {"n": 1, "k": 1}, '1' * 5000: {"base": 10, "value": "7"}}
        result = _invoke(runner, ['solve', '--json'], doc)
        assert result.exit_code == 0
        assert '"secret": "7"' in result.output
        assert '"used": [' + '1' * 5000 + ']' in result.output

    def test_long_threshold(self, runner):
        doc = '{"keys": {"n": 1, "k": "' + '1' * 5000 + '"}}'
        result = _invoke(runner, ['solve'], doc)
        assert result.exit_code == 1
        assert 'InvalidThreshold' in result.output

    def test_long_secret(self, runner):
        doc = {"keys": {"n": 1, "k": 1}, "1": {"base": 16, "value": 'f' * 4000}}
        result = _invoke(runner, ['solve'], doc)
        assert result.exit_code == 0
        digits = result.output.strip()
        assert digits.isdigit()
        assert len(digits) > 4300

    def test_decode_long_value(self, runner):
        result = runner.invoke(main, ['decode', '1' * 5000, '--base', '10',
                                      '--to', '16'])
        assert result.exit_code == 0
        assert result.output.strip() == encode((10**5000 - 1) // 9, 16)
