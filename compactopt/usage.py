"""
compactopt usage rendering.

    foobar program v1.0
    usage: foobar.py [options] FILE
    options
    -h, --help      This help message
    -v, --verbose   Verbose mode
    -w, --wibble    Specify a wibble parameter
        --man       Display documentation

Rows follow the table order; options without a description are left out. The two
columns are laid out by a rich Table (no box, three spaces between columns) and
captured as plain text, so the result is identical on every terminal.
"""
import io
import re

from rich.console import Console
from rich.table import Column, Table
from rich.text import Text

from .utils import ucfirst

SEPARATOR = "   "
DEFAULT_VERSION = "1.0"

# wide enough that no realistic row is ever wrapped
_WIDTH = 1024


def normalize_version(version, /):
    """
    Normalize a program version for display.

    - revision-control markers ("$Revision: 1.42 $") are reduced to their number;
    - any other non-empty string is kept as given;
    - empty/None falls back to DEFAULT_VERSION.
    """
    if version is None or version == "":
        return DEFAULT_VERSION
    if not isinstance(version, str):
        version = str(version)
    if match := re.search(r"\$?Revision:?\s*([\d.]+)", version):
        return match[1]
    return version


def names(option, /):
    """'-h, --help' style label; long-only options are indented to line up."""
    label = ", ".join(("--" if len(name) > 1 else "-") + name for name in option.names)
    if len(option.names[0]) != 1:
        label = "    " + label
    return label


def _layout(rows):
    if not rows:
        return "options"
    table = Table(
        Column("options", no_wrap=True),
        Column("", no_wrap=True),
        box=None,
        padding=(0, len(SEPARATOR), 0, 0),
        pad_edge=False,
        show_edge=False,
        highlight=False,
    )
    for label, descr in rows:
        table.add_row(Text(label), Text(descr))

    console = Console(
        file=io.StringIO(),
        width=_WIDTH,
        color_system=None,
        force_terminal=False,
        force_jupyter=False,
        legacy_windows=False,
        emoji=False,
        markup=False,
        highlight=False,
    )
    console.print(table)
    return "\n".join(line.rstrip() for line in console.file.getvalue().splitlines())


def render(table, /, *, name=None, version=None, cmd="", args=""):
    """
    Render the usage text of an option table.

    Parameters
    - table: OptionTable (or any iterable of CanonicalOption)
    - name: program name; the header line is omitted when empty
    - version: already normalized version; omitted from the header when empty
    - cmd: command shown in the synopsis
    - args: trailing arguments description shown in the synopsis
    """
    usage = ""
    if name:
        usage += name
        if version:
            usage += f" v{version}"
        usage += "\n"
    usage += f"usage: {cmd or ''} [options] {args or ''}".rstrip() + "\n"

    rows = [(names(option), ucfirst(option.descr)) for option in table if not option.hidden]
    return usage + _layout(rows) + "\n"


__all__ = (
    "SEPARATOR",
    "DEFAULT_VERSION",
    "normalize_version",
    "names",
    "render",
)
