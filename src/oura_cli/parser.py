"""Command-line parsing.

Global options (--json/-j, --help/-h/help) may appear anywhere after the
command; everything else is kept as positional arguments in input order.
Resource subcommands parse their own long flags with parse_long_flags().
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from oura_cli.utils.errors import ParseError

HELP_TOKENS = frozenset({"--help", "-h", "help"})
JSON_TOKENS = frozenset({"--json", "-j"})


class Options(BaseModel):
    json_output: bool = False
    help: bool = False


class ParsedInvocation(BaseModel):
    command: str
    positional: list[str] = Field(default_factory=list)
    options: Options = Field(default_factory=Options)


def parse_args(argv: list[str]) -> ParsedInvocation:
    """Parse a full argument vector (argv[0] is the program name).

    Raises:
        ParseError: No command was given.
    """
    if len(argv) < 2:
        raise ParseError("no command given")

    command = argv[1]
    if command in ("--help", "-h"):
        return ParsedInvocation(command="help", options=Options(help=True))

    options = Options()
    # Back-compat: `oura json [date]`
    if command == "json":
        command = "all"
        options.json_output = True

    positional: list[str] = []
    for arg in argv[2:]:
        if arg in HELP_TOKENS:
            options.help = True
        elif arg in JSON_TOKENS:
            options.json_output = True
        else:
            positional.append(arg)

    return ParsedInvocation(command=command, positional=positional, options=options)


def parse_long_flags(args: list[str]) -> tuple[dict[str, str], list[str]]:
    """Split `--name value` / `--name=value` flags from positional arguments.

    Returns:
        (flags keyed by name without dashes, remaining positionals)

    Raises:
        ParseError: A bare `--`, or a flag with no value after it.
    """
    flags: dict[str, str] = {}
    positional: list[str] = []
    i = 0
    while i < len(args):
        arg = args[i]
        i += 1
        if not arg.startswith("--"):
            positional.append(arg)
            continue

        name_value = arg[2:]
        if not name_value or name_value.startswith("="):
            raise ParseError(f'invalid flag: "{arg}"')

        name, sep, value = name_value.partition("=")
        if not sep:
            if i >= len(args):
                raise ParseError(f'flag "{arg}" requires a value')
            value = args[i]
            i += 1
        flags[name] = value
    return flags, positional


def first_flag(flags: dict[str, str], *names: str) -> str:
    """Return the value of the first flag present among `names` (dash/underscore aliases)."""
    for name in names:
        if name in flags:
            return flags[name]
    return ""


def reject_extra(args: list[str]) -> None:
    if args:
        raise ParseError(f"unexpected args: {' '.join(args)}")


def reject_unknown_flags(flags: dict[str, str], *known: str) -> None:
    """Fail on any flag whose name is not in `known`."""
    unknown = sorted(set(flags) - set(known))
    if unknown:
        raise ParseError(f"unexpected args: {' '.join('--' + name for name in unknown)}")
