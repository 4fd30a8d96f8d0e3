import sys
import argparse
from dataclasses import dataclass

from . import presets
from .pool import TokenPool, EmptyPoolError, generate_passphrase
from .report import EntropyReporter

PROG = 'pass-gen'


class ConfigError(Exception):
    """Invalid command line. Reported as ``pass-gen: <message>``."""


@dataclass(frozen=True)
class Config:
    report: bool
    token_count: int
    token_separator: str
    token_pool: TokenPool


class ArgumentParser(argparse.ArgumentParser):

    def error(self, message):
        raise ConfigError(message)


MAX_COUNT = 2 ** 32 - 1

# options taking a value, the value may start with '-'
VALUE_OPTIONS = {
    '-c': '--count', '--count': '--count',
    '-s': '--sep', '--sep': '--sep',
    '-f': '--file', '--file': '--file',
    '-p': '--preset', '--preset': '--preset',
}


def positive_int(value: str) -> int:
    """Plain ASCII digits, 1 to MAX_COUNT. No sign, spaces or underscores."""
    if value.isascii() and value.isdigit() and 0 < int(value) <= MAX_COUNT:
        return int(value)
    raise argparse.ArgumentTypeError(
        f"expected positive number, got {value!r}")


def join_values(argv: list) -> list:
    """Attach the value following each value option: ``-s X`` -> ``--sep=X``.

    The value is taken as is, even if it looks like an option.
    An option at the end is left alone, argparse reports the missing value.

    """
    joined = []
    args = iter(argv)
    for arg in args:
        option = VALUE_OPTIONS.get(arg)
        if option is None:
            joined.append(arg)
            continue
        value = next(args, None)
        joined.append(arg if value is None else f"{option}={value}")
    return joined


def preset_defaults(preset: presets.Preset) -> dict:
    """Values reset by selecting `preset`. The report flag is not among them."""
    return {
        'token_count': preset.token_count,
        'token_separator': preset.token_separator,
        'token_pool': preset.pool(),
    }


class PresetAction(argparse.Action):

    def __call__(self, parser, namespace, values, option_string=None):
        try:
            preset = presets.get_preset(values)
        except presets.UnknownPresetError as e:
            raise argparse.ArgumentError(self, str(e))
        for key, value in preset_defaults(preset).items():
            setattr(namespace, key, value)


class TokenFileAction(argparse.Action):

    def __call__(self, parser, namespace, values, option_string=None):
        try:
            pool = TokenPool.from_file(values)
        except (OSError, UnicodeDecodeError, EmptyPoolError) as e:
            raise argparse.ArgumentError(
                self, f"error while reading token file: {e}")
        setattr(namespace, self.dest, pool)


def parse_args(argv=None) -> Config:
    """Process command line args.

    Options are applied in the order given, a later one overrides
    an earlier one. Raises ConfigError on invalid args.

    """
    ap = ArgumentParser(prog=PROG,
                        description="Generate a random passphrase",
                        allow_abbrev=False)
    ap.add_argument('-r', '--report', action='store_true',
                    help="print entropy and guess times to stderr")
    ap.add_argument('-c', '--count', dest='token_count', type=positive_int,
                    help="number of tokens (default: depends on preset)")
    ap.add_argument('-s', '--sep', dest='token_separator', metavar='SEP',
                    help="token separator (default: depends on preset)")
    ap.add_argument('-f', '--file', dest='token_pool', metavar='FILE',
                    action=TokenFileAction,
                    help="load tokens from a file, one per line")
    ap.add_argument('-p', '--preset', metavar='PRESET',
                    action=PresetAction, default=argparse.SUPPRESS,
                    help=f"built-in token pool: {', '.join(sorted(presets.PRESETS))} "
                         f"(default: {presets.DEFAULT_PRESET})")
    ap.set_defaults(**preset_defaults(presets.get_preset(presets.DEFAULT_PRESET)))

    if argv is None:
        argv = sys.argv[1:]
    args = ap.parse_args(args=join_values(argv))

    return Config(report=args.report,
                  token_count=args.token_count,
                  token_separator=args.token_separator,
                  token_pool=args.token_pool)


def main(argv=None):
    """Main program

    :param argv: Used in tests. Default is sys.argv
    :return: None
    """
    try:
        config = parse_args(argv)
    except ConfigError as e:
        print(f"{PROG}: {e}", file=sys.stderr)
        sys.exit(1)

    if config.report:
        reporter = EntropyReporter()
        reporter.print_report(len(config.token_pool), config.token_count)

    sys.stdout.write(generate_passphrase(config.token_pool,
                                         config.token_count,
                                         config.token_separator))
    sys.stdout.flush()
