#!/usr/bin/env python3

import argparse
import os
import sys
import textwrap
from typing import Any, Callable, List, Optional, Sequence, Union

import git_ff.options
from git_ff import __version__, git_config_keys, utils
from git_ff.client.ff import FastForwardClient
from git_ff.client.recent import RecentClient

from .docs import common_options_docs, long_docs
from .exceptions import ExitCode, FfException, UnderlyingGitException
from .git_operations import GitContext
from .utils import fmt, warn

usage_by_tool = {
    "ff": "git ff [-l|--list [-o|--only|-n|--not]] [-a|--all] [--fail-on-branch-error] [<branch>...] <target>",
    "recent": "git recent [-a|--all] [-r|--remote=<remote>] [-d|--describe]",
}


def get_help_description(tool: str) -> str:
    return fmt(textwrap.dedent(long_docs[tool])) + fmt(textwrap.dedent(common_options_docs))


def get_short_usage(tool: str) -> str:
    return fmt(f"<b>Usage: {usage_by_tool[tool]}</b>")


class FfHelpAction(argparse.Action):
    def __init__(
            self,
            option_strings: str,
            dest: str = argparse.SUPPRESS,
            default: Any = argparse.SUPPRESS,
            help: Optional[str] = None
    ) -> None:
        super(FfHelpAction, self).__init__(
            option_strings=option_strings,
            dest=dest,
            default=default,
            nargs=0,
            help=help)

    def __call__(
            self,
            parser: argparse.ArgumentParser,
            namespace: argparse.Namespace,  # noqa: F841, U100
            values: Union[str, Sequence[Any], None],  # noqa: U100
            option_string: Optional[str] = None  # noqa: F841, U100
    ) -> None:
        # parser name (prog) is expected to be `git ff` or `git recent`
        tool = parser.prog.replace('git', '', 1).strip()
        print(get_help_description(tool))
        parser.exit(status=ExitCode.SUCCESS)


def create_common_args_parser(tool: str) -> argparse.ArgumentParser:
    common_args_parser = argparse.ArgumentParser(
        prog=f'git {tool}',
        argument_default=argparse.SUPPRESS,
        add_help=False)
    common_args_parser.add_argument('--debug', action='store_true')
    common_args_parser.add_argument('-h', '--help', action=FfHelpAction)
    common_args_parser.add_argument('--version', action='version', version=f'git-{tool} version {__version__}')
    common_args_parser.add_argument('-v', '--verbose', action='store_true')
    return common_args_parser


def create_ff_parser() -> argparse.ArgumentParser:
    ff_parser = argparse.ArgumentParser(
        prog='git ff',
        argument_default=argparse.SUPPRESS,
        add_help=False,
        parents=[create_common_args_parser('ff')])
    ff_parser.add_argument('-l', '--list', action='store_true')
    # Both write into the same destination, so the last one given on the command line wins.
    ff_parser.add_argument('-o', '--only', dest='list_filter', action='store_const', const='only')
    ff_parser.add_argument('-n', '--not', dest='list_filter', action='store_const', const='not')
    ff_parser.add_argument('-a', '--all', action='store_true')
    ff_parser.add_argument('--fail-on-branch-error', action='store_true')
    ff_parser.add_argument('revisions', nargs='*')
    return ff_parser


def create_recent_parser() -> argparse.ArgumentParser:
    recent_parser = argparse.ArgumentParser(
        prog='git recent',
        argument_default=argparse.SUPPRESS,
        add_help=False,
        parents=[create_common_args_parser('recent')])
    recent_parser.add_argument('-a', '--all', action='store_true')
    recent_parser.add_argument('-r', '--remote', metavar='REMOTE')
    recent_parser.add_argument('-d', '--describe', action='store_true')
    return recent_parser


def update_cli_options_using_parsed_args(
        cli_opts: git_ff.options.CommandLineOptions,
        parsed_args: argparse.Namespace) -> None:
    for opt, arg in vars(parsed_args).items():
        # --debug and --verbose are handled outside this method
        if opt == "all":
            cli_opts.opt_all = True
        elif opt == "describe":
            cli_opts.opt_describe = True
        elif opt == "fail_on_branch_error":
            cli_opts.opt_fail_on_branch_error = True
        elif opt == "list":
            cli_opts.opt_list = True
        elif opt == "list_filter":
            cli_opts.opt_only = arg == "only"
            cli_opts.opt_not = arg == "not"
        elif opt == "remote":
            cli_opts.opt_remote = arg
        elif opt == "revisions":
            # The last positional argument is the target, all the preceding ones are branches.
            if arg:
                cli_opts.opt_branches = list(arg[:-1])
                cli_opts.opt_target = arg[-1]


def update_cli_options_using_config_keys(
        cli_opts: git_ff.options.CommandLineOptions,
        git: GitContext,
        tool: str
) -> None:
    # Command line flags can only turn these on, so config keys just provide the defaults.
    if tool == "ff":
        cli_opts.opt_fail_on_branch_error = git.get_boolean_config_attr(
            key=git_config_keys.FF_FAIL_ON_BRANCH_ERROR, default_value=False)
        return
    cli_opts.opt_all = git.get_boolean_config_attr(key=git_config_keys.RECENT_ALL, default_value=False)
    cli_opts.opt_describe = git.get_boolean_config_attr(key=git_config_keys.RECENT_DESCRIBE, default_value=False)


def set_utils_global_variables(parsed_args: argparse.Namespace) -> None:
    args = vars(parsed_args)
    utils.ascii_only = not sys.stdout.isatty()
    utils.debug_mode = "debug" in args
    utils.verbose_mode = "verbose" in args


def warn_if_current_directory_is_gone(initial_current_directory: Optional[str]) -> None:
    # Note that this problem (current directory no longer existing due to e.g. underlying git checkouts)
    # has been fixed in git itself as of 2.35.0
    if initial_current_directory and not utils.does_directory_exist(initial_current_directory):
        nearest_existing_parent_directory = initial_current_directory
        while not utils.does_directory_exist(nearest_existing_parent_directory):
            nearest_existing_parent_directory = os.path.join(
                nearest_existing_parent_directory, os.path.pardir)
        warn(f"current directory {initial_current_directory} no longer exists, "
             f"the nearest existing parent directory is {os.path.abspath(nearest_existing_parent_directory)}")


def launch_ff(orig_args: List[str]) -> None:
    initial_current_directory: Optional[str] = utils.get_current_directory_or_none()

    try:
        cli_opts = git_ff.options.CommandLineOptions()
        git = GitContext()

        parsed_cli: argparse.Namespace = create_ff_parser().parse_args(orig_args)
        # Let's set up options like debug/verbose before we first start reading `git config`.
        set_utils_global_variables(parsed_cli)
        update_cli_options_using_config_keys(cli_opts, git, "ff")
        update_cli_options_using_parsed_args(cli_opts, parsed_cli)
        utils.debug(f"parsed options: {cli_opts}")

        if cli_opts.opt_target is None:
            print("Need a fast-forward target", file=sys.stderr)
            print(get_short_usage("ff"), file=sys.stderr)
            sys.exit(ExitCode.ARGUMENT_ERROR)
        if (cli_opts.opt_only or cli_opts.opt_not) and not cli_opts.opt_list:
            print(fmt("Error: `--only` and `--not` require `--list`"), file=sys.stderr)
            sys.exit(ExitCode.ARGUMENT_ERROR)

        FastForwardClient(git).fast_forward(
            target_spec=cli_opts.opt_target,
            branch_names=frozenset(cli_opts.opt_branches),
            opt_all=cli_opts.opt_all,
            opt_list=cli_opts.opt_list,
            opt_only=cli_opts.opt_only,
            opt_not=cli_opts.opt_not,
            opt_fail_on_branch_error=cli_opts.opt_fail_on_branch_error)
    finally:
        warn_if_current_directory_is_gone(initial_current_directory)


def launch_recent(orig_args: List[str]) -> None:
    initial_current_directory: Optional[str] = utils.get_current_directory_or_none()

    try:
        cli_opts = git_ff.options.CommandLineOptions()
        git = GitContext()

        parsed_cli: argparse.Namespace = create_recent_parser().parse_args(orig_args)
        set_utils_global_variables(parsed_cli)
        update_cli_options_using_config_keys(cli_opts, git, "recent")
        update_cli_options_using_parsed_args(cli_opts, parsed_cli)
        utils.debug(f"parsed options: {cli_opts}")

        RecentClient(git).display_recent(
            opt_all=cli_opts.opt_all,
            opt_remote=cli_opts.opt_remote,
            opt_describe=cli_opts.opt_describe)
    finally:
        warn_if_current_directory_is_gone(initial_current_directory)


def run(launch: Callable[[List[str]], None]) -> None:
    try:
        launch(sys.argv[1:])
    except EOFError:  # pragma: no cover
        sys.exit(ExitCode.END_OF_FILE_SIGNAL)
    except KeyboardInterrupt:  # pragma: no cover
        sys.exit(ExitCode.KEYBOARD_INTERRUPT)
    except (FfException, UnderlyingGitException) as e:
        print(e, file=sys.stderr)
        sys.exit(ExitCode.FF_EXCEPTION)


def main_ff() -> None:
    run(launch_ff)


def main_recent() -> None:
    run(launch_recent)


if __name__ == "__main__":
    main_ff()
