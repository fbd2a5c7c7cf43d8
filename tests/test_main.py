"""Test the command line entry point."""

import main
from src.core.app_config import get_version


def test_version_flag(capsys):
    assert main.main(["--version"]) == 0
    assert get_version() in capsys.readouterr().out


def test_parser_options():
    args = main.build_parser().parse_args(["--lang", "vi", "--theme", "light", "--log-level", "DEBUG"])
    assert (args.lang, args.theme, args.log_level) == ("vi", "light", "DEBUG")
    assert args.version is False
