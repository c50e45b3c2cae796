"""
compactopt session facade.

A Session describes the options of a program, parses the argument vector right
away and then answers three questions: what was given (opts), did it parse
(status) and how is the program used (usage).

    from compactopt import Session

    joobies = []
    opt = Session(
        name="foobar program",
        version="1.0",
        modes=["verbose", "test", "debug"],
        struct=[
            (["w", "wibble"], "specify a wibble parameter", ":s"),
            (["f", "foobar"], "apply foobar algorithm"),
            (["j", "joobies"], "jooby integer list", "=i", joobies),
        ],
    ).opts()

    if opt["foobar"]:
        print("applying foobar algorithm")

opts() is also where --help, --man and parse errors are handled: usage or the
manual page is printed and the process exits (status 0 after a clean parse,
1 otherwise), unless usage handling was disabled with usage=False.
"""
import os.path
import sys

from . import manual as _manual
from . import parsing, table, usage as _usage
from .manual import console
from .utils import *


class Session:
    """
    One parse of one argument vector against a static option table.

    Keyword arguments
    - struct: option declarations (see compactopt.specs).
    - usage: print usage and exit on --help or parse errors (default True); also
      injects the -h/--help option.
    - name: program name shown in the usage header and the manual.
    - version: program version; "$Revision: N $" markers are reduced to N, empty means 1.0.
    - author: shown in the manual.
    - cmd: command shown in the synopsis; defaults to the basename of sys.argv[0].
    - args: description of the trailing arguments shown in the synopsis.
    - modes: names of boolean mode options (-v/--verbose for "verbose", -n/--test for "test").
    - configure: engine toggles merged over {"no_auto_abbrev": True, "bundling": True}.
    - argv: argument vector; defaults to sys.argv[1:]. The list is never modified.
    """
    operands = mirror("operands")

    def __init__(
            self,
            *,
            struct=(),
            usage=True,
            name=None,
            version=None,
            author=None,
            cmd=None,
            args="",
            modes=(),
            configure=None,
            argv=None,
    ):
        for label, value in (("name", name), ("author", author), ("cmd", cmd), ("args", args)):
            if not isinstance(value, str | None):
                raise TypeError(f"session {label!r} must be a string")

        self._usage = bool(usage)
        self._name = name or None
        self._version = _usage.normalize_version(version)
        self._author = author or None
        self._cmd = cmd or os.path.basename(sys.argv[0] if sys.argv else "")
        self._args = args or ""
        self._program = Unset

        self._table = table.build(struct, usage=self._usage, modes=modes)
        self._opts = {}

        outcome = parsing.parse(
            self._table,
            sys.argv[1:] if argv is None else argv,
            self._opts,
            configure,
            prog=self._cmd or self._name,
        )
        self._status = outcome.success
        self._operands = outcome.operands

    @property
    def name(self):
        return self._name

    @property
    def version(self):
        return self._version

    @property
    def author(self):
        return self._author

    @property
    def cmd(self):
        return self._cmd

    @property
    def args(self):
        return self._args

    @property
    def table(self):
        return self._table

    def status(self):
        """True when the argument vector parsed cleanly (never re-parses)."""
        return self._status

    def usage(self):
        return _usage.render(
            self._table,
            name=self._name,
            version=self._version,
            cmd=self._cmd,
            args=self._args,
        )

    def opts(self):
        """
        Return the results map, or handle --man / --help / parse errors.

        - --man given (and the man option is ours): print the manual page, exit.
        - usage enabled and (--help given or the parse failed): print usage, exit.
        - otherwise: return {key: value} for every option (None when never given).

        The exit status is 0 after a clean parse and 1 otherwise.
        """
        if self._table.allow_man and self._opts.get("man"):
            self.manual()
            sys.exit(0 if self._status else 1)
        elif self._usage and (self._opts.get("help") or not self._status):
            console.out(self.usage(), end="", highlight=False)
            sys.exit(0 if self._status else 1)
        return self._opts

    def program(self):
        """Full path of the running program, or None when it cannot be found."""
        if self._program is Unset:
            self._program = _manual.locate(sys.argv[0] if sys.argv else None)
        return self._program

    def manual(self):
        """Print the program's manual page, completed with usage and version details."""
        page = _manual.Manual.from_program(self.program())
        page.insert("NAME", self._name or self._cmd)
        page.insert("USAGE", self.usage(), keep=True)
        page.insert("VERSION", self._version)
        page.insert("AUTHOR", self._author)
        page.print()
        return page

    def __repr__(self):
        return "session(cmd=%r, status=%r, opts=%r)" % (self._cmd, self._status, self._opts)


def compact(**options):
    """
    One-statement form: Session(**options).opts().
    """
    return Session(**options).opts()


__all__ = (
    "Session",
    "compact",
)
