"""
NAME
    foobar - a demonstration of compactopt

DESCRIPTION
    Parses its command line with a single statement and pretty-prints the
    resulting options. Try --help, --man, -vn or --joobies 1 --joobies 2.
"""
from rich.pretty import pprint

from compactopt import *

joobies = []

struct = [
    (["w", "wibble"], "specify a wibble parameter", ":s"),
    (["f", "foobar"], "apply foobar algorithm"),
    (["j", "joobies"], "jooby integer list", "=i", joobies),
]


if __name__ == '__main__':
    opts = compact(
        name="foobar program",
        version="$Revision: 1.4 $",
        author="compactopt developers",
        args="[FILE...]",
        modes=["verbose", "test", "debug"],
        struct=struct,
    )
    pprint(opts)
    pprint(joobies)
