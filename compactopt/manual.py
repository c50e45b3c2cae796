"""
compactopt manual pages.

The manual of a program is its module docstring, written in man-page style: an
unindented line in capitals starts a section, everything up to the next such line
is the section body.

    \"\"\"
    NAME
        foobar - apply the foobar algorithm

    DESCRIPTION
        ...
    \"\"\"

The session inserts NAME, USAGE, VERSION and AUTHOR sections before printing
(USAGE only when the docstring has none), which is what --man shows.
"""
import ast
import inspect
import os.path
import re
import shutil
import textwrap

from rich.console import Console, Group
from rich.padding import Padding
from rich.text import Text

console = Console()

_HEADING = re.compile(r"[A-Z][A-Z0-9 _-]*")


def locate(program, /):
    """
    Full path of a program: the path itself when it exists, otherwise the first
    match on PATH, otherwise None.
    """
    if not program:
        return None
    if os.path.exists(program):
        return os.path.abspath(program)
    return shutil.which(program)


def docstring(path, /):
    """Module docstring of a Python source file (parsed, never executed), or None."""
    try:
        with open(path, encoding="utf-8") as file:
            tree = ast.parse(file.read(), filename=path)
    except (OSError, SyntaxError, UnicodeDecodeError, ValueError):
        return None
    return ast.get_docstring(tree)


class Manual:
    """
    Ordered manual sections.

    - sections: {heading: body} in display order (NAME always first).
    - insert(heading, content, keep=False): replace or add a section; with keep=True an
      existing section is left untouched.
    """

    def __init__(self, text="", /):
        self._sections = {}
        heading, body = None, []
        for line in inspect.cleandoc(text or "").splitlines():
            if _HEADING.fullmatch(line.rstrip()):
                if heading is not None or any(body):
                    self._sections[heading or ""] = textwrap.dedent("\n".join(body)).strip("\n")
                heading, body = line.strip(), []
            else:
                body.append(line)
        if heading is not None or any(body):
            self._sections[heading or ""] = textwrap.dedent("\n".join(body)).strip("\n")

    @classmethod
    def from_program(cls, path=None, /):
        """
        Manual of a program file; falls back to the docstring of __main__.
        """
        text = docstring(path) if path else None
        if text is None:
            text = getattr(__import__("__main__"), "__doc__", None)
        return cls(text or "")

    @property
    def sections(self):
        return dict(self._sections)

    def insert(self, heading, content, /, keep=False):
        if not content:
            return self
        heading = heading.upper()
        if keep and heading in self._sections:
            return self
        self._sections[heading] = str(content).strip("\n")
        if heading == "NAME":
            self._sections = {"NAME": self._sections.pop("NAME")} | self._sections
        return self

    def __rich__(self):
        main = __import__("__main__")
        styles = {"heading": "bold", "body": ""} | getattr(main, "__styles__", {})
        renders = []
        for heading, body in self._sections.items():
            if heading:
                renders.append(Text(heading, styles["heading"]))
            renders.append(Padding(Text(body, styles["body"]), (0, 0, 1, 4 if heading else 0)))
        return Group(*renders)

    def __str__(self):
        chunks = []
        for heading, body in self._sections.items():
            if heading:
                chunks.append(heading)
            chunks.append(textwrap.indent(body, "    " if heading else "") + "\n")
        return "\n".join(chunks)

    def print(self):
        console.print(self)


__all__ = (
    "Manual",
    "locate",
    "docstring",
)
