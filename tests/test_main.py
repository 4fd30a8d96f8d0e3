import string

import pytest

from passgen import presets, report
from passgen.main import main as passgen_main, parse_args, ConfigError


@pytest.fixture()
def token_file(tmp_path):
    filename = tmp_path / 'tokens.txt'
    filename.write_text("red\ngreen\nblue\n\nyellow\nblack\n", encoding='utf-8')
    return filename


@pytest.fixture(autouse=True)
def fixed_width(monkeypatch):
    monkeypatch.setattr(report, 'tput_columns', lambda: 40)


def run_failing(capsys, *args):
    with pytest.raises(SystemExit) as e:
        passgen_main(list(args))
    assert e.value.code == 1
    captured = capsys.readouterr()
    assert captured.out == ''
    assert captured.err.startswith('pass-gen: ')
    assert captured.err.endswith('\n')
    return captured.err


def test_defaults():
    config = parse_args([])
    word = presets.get_preset('word')
    assert config.report is False
    assert config.token_count == word.token_count
    assert config.token_separator == word.token_separator
    assert list(config.token_pool) == list(presets.load_wordlist())


def test_preset_resets_previous_options():
    config = parse_args(['-c', '3', '-s', ':', '-p', 'number'])
    assert config.token_count == 12
    assert config.token_separator == ''
    assert len(config.token_pool) == 10

    config = parse_args(['-p', 'number', '-c', '3', '-s', ':'])
    assert config.token_count == 3
    assert config.token_separator == ':'


def test_preset_keeps_report():
    assert parse_args(['-r', '-p', 'ascii']).report is True
    assert parse_args(['-p', 'ascii', '--report']).report is True


def test_file_and_preset_order(token_file):
    config = parse_args(['-p', 'number', '-f', str(token_file)])
    assert list(config.token_pool) == ['red', 'green', 'blue', 'yellow', 'black']
    assert config.token_count == 12, "count of the preset is kept"

    config = parse_args(['--file', str(token_file), '--preset', 'ascii'])
    assert len(config.token_pool) == 94


def test_config_errors(token_file):
    for argv in (['--bogus'], ['-c'], ['-c', '0'], ['-c', '-5'], ['-c', 'ten'],
                 ['-p', 'bogus'], ['--rep'], ['extra'],
                 ['-f', str(token_file.with_name('missing.txt'))]):
        with pytest.raises(ConfigError):
            parse_args(argv)


def test_word_passphrase(capsys):
    passgen_main(['--preset', 'word', '--count', '4', '--sep', '-'])
    captured = capsys.readouterr()
    assert captured.err == ''
    words = captured.out.split('-')
    assert len(words) == 4
    assert all(w in presets.load_wordlist() for w in words)
    assert not captured.out.endswith('\n')


def test_number_passphrase(capsys):
    passgen_main(['-p', 'number', '-c', '30'])
    out = capsys.readouterr().out
    assert len(out) == 30
    assert all(c in string.digits for c in out)


def test_file_passphrase(capsys, token_file):
    passgen_main(['-f', str(token_file), '-c', '3', '-s', ' '])
    out = capsys.readouterr().out
    tokens = out.split(' ')
    assert len(tokens) == 3
    assert set(tokens) <= {'red', 'green', 'blue', 'yellow', 'black'}


def test_report(capsys):
    passgen_main(['-r', '-p', 'number', '-c', '8'])
    captured = capsys.readouterr()
    assert len(captured.out) == 8
    assert captured.out.isdigit()
    lines = captured.err.splitlines()
    assert lines[0] == "entropy per token:          3.3 bits"
    assert lines[1] == "total entropy:              27 bits"
    assert lines[2] == "guess times:"
    assert lines[-1] == '-' * 40
    assert len(lines) == 7


def test_invalid_count(capsys):
    err = run_failing(capsys, '--count', '0')
    assert "positive number" in err
    assert "'0'" in err


def test_invalid_preset(capsys):
    err = run_failing(capsys, '--preset', 'bogus')
    assert "invalid preset 'bogus'" in err


def test_invalid_option(capsys):
    err = run_failing(capsys, '-r', '--bogus')
    assert '--bogus' in err


def test_missing_argument(capsys):
    err = run_failing(capsys, '-r', '--sep')
    assert '--sep' in err


def test_unreadable_file(capsys, tmp_path):
    err = run_failing(capsys, '-r', '-f', str(tmp_path / 'missing.txt'))
    assert "error while reading token file" in err
    empty_file = tmp_path / 'empty.txt'
    empty_file.write_text("\n\n", encoding='utf-8')
    err = run_failing(capsys, '-f', str(empty_file))
    assert "no tokens" in err


@pytest.mark.parametrize('sep', ['-_-', '--', '-x', '---', '-r', ''])
def test_separator_taken_verbatim(capsys, sep):
    passgen_main(['-p', 'number', '-c', '3', '-s', sep])
    captured = capsys.readouterr()
    assert captured.err == ''
    out = captured.out
    assert len(out) == 3 + 2 * len(sep)
    assert out[1:1 + len(sep)] == sep
    assert out[0].isdigit() and out[-1].isdigit()


def test_dash_file_name(capsys, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / '-tokens.txt').write_text("alpha\nbeta\n", encoding='utf-8')
    config = parse_args(['-f', '-tokens.txt', '--count', '2'])
    assert list(config.token_pool) == ['alpha', 'beta']
    assert config.token_count == 2


def test_option_value_is_not_an_option():
    config = parse_args(['-s', '-c', '-r'])
    assert config.token_separator == '-c'
    assert config.report is True
    assert parse_args(['--sep=', '-r']).token_separator == ''


@pytest.mark.parametrize('count', [' 5', '5 ', '+5', '1_0', '0x10', '٣', '4294967296', ''])
def test_strict_count(count):
    with pytest.raises(ConfigError, match='positive number'):
        parse_args(['-c', count])


def test_largest_count():
    assert parse_args(['-c', '4294967295']).token_count == 2 ** 32 - 1
    assert parse_args(['-c', '007']).token_count == 7
