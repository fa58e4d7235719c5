import sys


def validate_python_version() -> None:
    if sys.version_info[:2] < (3, 6):
        version_str = f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}"
        sys.stderr.write(f"Python {version_str} is no longer supported.\nPlease switch to Python 3.6 or higher.\n")
        sys.exit(1)


def main_ff() -> None:
    validate_python_version()

    from . import cli

    cli.main_ff()


def main_recent() -> None:
    validate_python_version()

    from . import cli

    cli.main_recent()
