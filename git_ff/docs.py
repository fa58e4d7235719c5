from typing import Dict

long_docs: Dict[str, str] = {
    "ff": """
        <b>Usage:</b><b>
           git ff [-l|--list [-o|--only|-n|--not]] [-a|--all] [--fail-on-branch-error] [<branch>...] <target></b>

        Fast-forwards the given local branches to `<target>`, which is a full commit hash,
        a local branch, a remote branch or a tag (tried in this order, the first match wins).
        Without any `<branch>`, only the currently checked out branch is fast-forwarded.

        A branch is fast-forwarded only if its tip is an ancestor of `<target>`, so that no commit is ever lost.
        For the checked out branch, the working tree is updated first; if local changes are in the way,
        that branch is left untouched and the remaining branches are still processed.
        A branch checked out in another worktree is reported and left untouched;
        run `git ff` from within that worktree to fast-forward it.

        <b>Options:</b>
           <b>-l, --list</b>                Only report whether each branch can be fast-forwarded, don't change anything.
                                     Without any `<branch>`, all local branches are reported.

           <b>-o, --only</b>                With `--list`, only print the names of branches that can be fast-forwarded
                                     (including the ones already on `<target>`).

           <b>-n, --not</b>                 With `--list`, only print the names of branches that cannot be fast-forwarded.

           <b>-a, --all</b>                 Without any `<branch>`, fast-forward all local branches and not just the current one.

           <b>--fail-on-branch-error</b>    Exit with a non-zero code when any branch could not be fast-forwarded.
                                     Defaults to the `ff.failOnBranchError` git config key.
   """,
    "recent": """
        <b>Usage:</b><b>
           git recent [-a|--all] [-r|--remote=<remote>] [-d|--describe]</b>

        Lists local branches along with the date of their latest commit, newest first.
        The currently checked out branch is marked with `*`.

        <b>Options:</b>
           <b>-a, --all</b>                 Also list remote branches. Defaults to the `recent.all` git config key.

           <b>-r, --remote=<remote></b>     Only list the branches of the given remote.

           <b>-d, --describe</b>            Annotate each branch with the output of `git describe --tags`.
                                     Defaults to the `recent.describe` git config key.
   """,
}

common_options_docs = """
        <b>General options:</b>
           <b>--debug</b>                   Log detailed diagnostic info, including outputs of the executed git commands.
           <b>-h, --help</b>                Print help and exit.
           <b>-v, --verbose</b>             Log the executed git commands.
           <b>--version</b>                 Print version and exit.
"""
