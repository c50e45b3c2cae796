r"""
compactopt getopt engine.

A table-driven, getopt-style tokenizer. The rest of the package only relies on
its contract: it accepts a mapping of option specification strings to storage
targets plus a configuration, walks an argument vector once, writes values into
the targets and reports success, leftover operands and the faults it met.

Specification strings
    name(|alias)*[arity]

    arity   meaning
    -----   ----------------------------------------------------------------
    (none)  flag, stores True
    !       negatable flag: --name stores True, --no-name / --noname False
    +       incrementing counter
    =T      required value of type T
    :T      optional value of type T ("" or 0 when absent)
    :N      optional integer, N when absent
    :+      optional integer, increments when absent

    T is s (string), i (integer), o (extended integer: 0x.., 0b.., 0..) or
    f (float), optionally followed by @ (list of values) or % (key=value
    mapping).

Targets
- Slot: a scalar box (its .value is written; lists/mappings/counters are
  created on first write).
- mutable sequence: every value is appended.
- mutable mapping: key=value pairs are stored.
- callable: invoked as callback(name, value) or callback(name, key, value).

Configuration toggles
    auto_abbrev, bundling, ignore_case, ignore_case_always, permute
    (require_order is its negation), pass_through; each accepts a "no_" prefix.
"""
import difflib
import re
from collections import deque
from collections.abc import MutableMapping, MutableSequence
from typing import NamedTuple

from .faults import *
from .utils import Unset

_GRAMMAR = re.compile(r"(?P<names>[^|!+=:]+(?:\|[^|!+=:]+)*)(?P<arity>!|\+|:\+|:-?\d+|[=:][siof][@%]?)?")

_NUMBERS = {
    "i": (re.compile(r"[-+]?\d+"), "number"),
    "o": (re.compile(r"[-+]?(0[xX][0-9a-fA-F]+|0[bB][01]+|0[0-7]*|[1-9]\d*)"), "extended number"),
    "f": (re.compile(r"[-+]?(\d+\.?\d*|\.\d+)([eE][-+]?\d+)?"), "real number"),
}


class Slot:
    """
    A scalar storage target.

    Slot() starts empty (value None); the engine overwrites the value for plain
    options, and grows a list, a dict or a counter in place for list, mapping and
    incrementing options.
    """
    __slots__ = ("value",)

    def __init__(self, value=None, /):
        self.value = value

    def __repr__(self):
        return f"Slot({self.value!r})"


class Option(NamedTuple):
    names: tuple
    kind: str  # "flag", "negatable", "increment" or "value"
    mandatory: bool = False
    type: str | None = None
    store: str = "scalar"  # "scalar", "list" or "hash"
    default: object = Unset
    spec: str = ""

    @property
    def name(self):
        return self.names[0]


class Configuration(NamedTuple):
    """
    Immutable engine configuration.

    The field defaults are the engine's base behavior; configure() returns a copy
    with Getopt-style toggles applied.
    """
    auto_abbrev: bool = True
    bundling: bool = False
    ignore_case: bool = True
    ignore_case_always: bool = False
    permute: bool = True
    pass_through: bool = False

    def configure(self, *toggles):
        configuration = self
        for toggle in toggles:
            if not isinstance(toggle, str):
                raise TypeError("configuration toggles must be strings")
            match = re.fullmatch(r"(?P<negated>no_?)?(?P<name>[a-z_]+)", toggle.strip().lower())
            if not match:
                raise UnknownToggleError(f"unknown configuration toggle {toggle!r}")
            name, value = match["name"], not match["negated"]
            if name == "require_order":
                name, value = "permute", not value
            if name not in self._fields:
                raise UnknownToggleError(f"unknown configuration toggle {toggle!r}")
            changes = {name: value}
            if name == "ignore_case_always" and value:
                changes["ignore_case"] = True
            elif name == "ignore_case" and not value:
                changes["ignore_case_always"] = False
            configuration = configuration._replace(**changes)
        return configuration


class Outcome(NamedTuple):
    success: bool
    operands: list
    faults: list


def compile(spec, /):
    """
    Compile one specification string into an Option.

    Raises MalformedOptionError when the string does not follow the grammar.
    """
    if not isinstance(spec, str):
        raise TypeError("option specification must be a string")
    if not (match := _GRAMMAR.fullmatch(spec)):
        raise MalformedOptionError(f"malformed option specification {spec!r}")

    names = tuple(match["names"].split("|"))
    if not all(names):
        raise MalformedOptionError(f"empty option name in specification {spec!r}")

    match match["arity"]:
        case None:
            return Option(names, "flag", spec=spec)
        case "!":
            return Option(names, "negatable", spec=spec)
        case "+":
            return Option(names, "increment", spec=spec)
        case ":+":
            return Option(names, "value", type="i", default="+", spec=spec)
        case arity if arity[1:].lstrip("-").isdigit():
            return Option(names, "value", type="i", default=int(arity[1:]), spec=spec)
        case arity:
            store = {"@": "list", "%": "hash"}.get(arity[2:], "scalar")
            return Option(names, "value", mandatory=arity[0] == "=", type=arity[1], store=store, spec=spec)


def _convert(option, name, raw):
    if option.type == "s":
        return raw
    pattern, expected = _NUMBERS[option.type]
    if not pattern.fullmatch(raw):
        raise InvalidValueError(
            "value %r invalid for option %s (%s expected)" % (raw, name, expected),
            title="invalid value",
            code=FaultCode.INVALID_VALUE,
            input=name,
            value=raw,
            hint="pass a %s, for example: --%s=%s" % (expected, name, "1.5" if option.type == "f" else "1"),
        )
    match option.type:
        case "i":
            return int(raw)
        case "f":
            return float(raw)
        case "o":
            sign, digits = (-1, raw[1:]) if raw[0] == "-" else (1, raw.lstrip("+"))
            if digits[:2].lower() in ("0x", "0b"):
                return sign * int(digits, 0)
            return sign * int(digits, 8 if digits.startswith("0") and len(digits) > 1 else 10)


class _Parser:
    """one pass over one argument vector."""

    def __init__(self, configuration, bindings):
        self.configuration = configuration
        self.longs = {}
        self.shorts = {}
        self.operands = []
        self.faults = []

        for spec, target in bindings.items():
            option = compile(spec)
            if not (
                isinstance(target, Slot | MutableSequence | MutableMapping) or
                callable(target)
            ):
                raise TypeError(f"unsupported storage target for option specification {spec!r}")
            # container targets decide the storage shape of value options
            if option.kind == "value" and option.store == "scalar":
                if isinstance(target, MutableMapping):
                    option = option._replace(store="hash")
                elif isinstance(target, MutableSequence):
                    option = option._replace(store="list")
            for name in option.names:
                aliases = [(name, False)]
                if option.kind == "negatable":
                    aliases += [("no" + name, True), ("no-" + name, True)]
                for alias, negated in aliases:
                    self._register(self.longs, self._fold(alias, short=len(alias) == 1), (option, target, negated))
                    if configuration.bundling and len(alias) == 1:
                        self._register(self.shorts, self._fold(alias, short=True), (option, target, negated))

    def _register(self, table, alias, entry):
        if (previous := table.get(alias)) and previous[0] != entry[0]:
            trigger(DuplicateAliasWarning(
                "duplicate specification %r for option %r" % (entry[0].spec, alias),
                code=FaultCode.DUPLICATE_ALIAS,
                input=alias,
            ))
        table[alias] = entry

    def _fold(self, name, *, short):
        if short and self.configuration.bundling:
            return name.lower() if self.configuration.ignore_case_always else name
        return name.lower() if self.configuration.ignore_case else name

    def run(self, argv):
        tokens = deque(argv)
        while tokens:
            token = tokens.popleft()
            if token == "--":
                self.operands.extend(tokens)
                break
            if not token.startswith("-") or token == "-":
                self.operands.append(token)
                if not self.configuration.permute:
                    self.operands.extend(tokens)
                    break
                continue
            try:
                if token.startswith("--"):
                    self._long(token, token[2:], tokens)
                elif self.configuration.bundling:
                    self._bundle(token, tokens)
                else:
                    self._long(token, token[1:], tokens)
            except UnknownOptionError as fault:
                if self.configuration.pass_through:
                    self.operands.append(fault.options["token"])
                else:
                    self.faults.append(fault)
            except ParseFault as fault:
                self.faults.append(fault)
        return Outcome(not self.faults, self.operands, self.faults)

    def _unknown(self, name, token):
        suggestions = difflib.get_close_matches(self._fold(name, short=False), self.longs.keys(), 3)
        return UnknownOptionError(
            "unknown option: %s" % name,
            title="unknown option",
            code=FaultCode.UNKNOWN_OPTION,
            input=name,
            token=token,
            suggestions=suggestions,
            hint="did you mean %r?" % suggestions[0] if suggestions else "",
        )

    def _lookup(self, name, token):
        folded = self._fold(name, short=len(name) == 1)
        if entry := self.longs.get(folded):
            return entry
        if self.configuration.auto_abbrev and folded:
            candidates = {alias: entry for alias, entry in self.longs.items() if alias.startswith(folded)}
            if len(distinct := {(entry[0], entry[2]) for entry in candidates.values()}) == 1:
                return next(iter(candidates.values()))
            if len(distinct) > 1:
                raise AmbiguousOptionError(
                    "option %s is ambiguous (%s)" % (name, ", ".join(sorted(candidates))),
                    title="ambiguous option",
                    code=FaultCode.AMBIGUOUS_OPTION,
                    input=name,
                    token=token,
                    candidates=sorted(candidates),
                    hint="spell out more of the option name",
                )
        raise self._unknown(name, token)

    def _long(self, token, body, tokens):
        name, separator, value = body.partition("=")
        option, target, negated = self._lookup(name, token)
        inline = value if separator else None

        if option.kind != "value":
            if inline is not None:
                raise UnexpectedValueError(
                    "option %s does not take an argument" % name,
                    title="unexpected value",
                    code=FaultCode.UNEXPECTED_VALUE,
                    input=name,
                    token=token,
                    hint="remove everything from '=' (for example: --%s)" % name,
                )
            return self._store(option, target, self._presence(option, negated))

        self._store(option, target, self._value(option, name, inline, tokens))

    def _bundle(self, token, tokens):
        body = token[1:]
        index = 0
        while index < len(body):
            char = body[index]
            index += 1
            try:
                option, target, negated = self.shorts[self._fold(char, short=True)]
            except KeyError:
                if self.configuration.pass_through:
                    raise UnknownOptionError(token=token if index == 1 else "-" + body[index - 1:]) from None
                self.faults.append(self._unknown(char, token))
                continue

            if option.kind != "value":
                self._store(option, target, self._presence(option, negated))
                continue

            rest = body[index:].removeprefix("=")
            self._store(option, target, self._value(option, char, rest or None, tokens))
            break

    def _presence(self, option, negated):
        match option.kind:
            case "increment":
                return Unset
            case "negatable":
                return not negated
            case _:
                return True

    def _acceptable(self, option, token):
        if option.type in _NUMBERS:
            return bool(_NUMBERS[option.type][0].fullmatch(token))
        return token == "-" or not token.startswith("-")

    def _value(self, option, name, inline, tokens):
        if inline is not None:
            raw = inline
        elif option.mandatory:
            if not tokens or tokens[0] == "--":
                raise MissingValueError(
                    "option %s requires an argument" % name,
                    title="missing value",
                    code=FaultCode.MISSING_VALUE,
                    input=name,
                    hint="pass a value after the option (for example: --%s <value>)" % name,
                )
            raw = tokens.popleft()
        elif tokens and self._acceptable(option, tokens[0]):
            raw = tokens.popleft()
        elif option.default == "+":
            return Unset
        elif option.default is not Unset:
            return option.default
        else:
            raw = "" if option.type == "s" else "0"

        if option.store != "hash":
            return _convert(option, name, raw)

        key, separator, raw = raw.partition("=")
        if not separator:
            raw = "" if option.type == "s" else "1"
        return key, _convert(option, name, raw)

    def _store(self, option, target, value):
        """write one occurrence; Unset means "increment"."""
        if value is Unset:
            match target:
                case Slot():
                    target.value = (target.value or 0) + 1
                case MutableMapping():
                    target[option.name] = target.get(option.name, 0) + 1
                case MutableSequence():
                    target.append(1)
                case _:
                    target(option.name, 1)
            return

        match target:
            case Slot() if option.store == "hash":
                if target.value is None:
                    target.value = {}
                target.value[value[0]] = value[1]
            case Slot() if option.store == "list":
                if target.value is None:
                    target.value = []
                target.value.append(value)
            case Slot():
                target.value = value
            case MutableMapping() if option.store == "hash":
                target[value[0]] = value[1]
            case MutableMapping():
                target[option.name] = value
            case MutableSequence():
                target.append(value)
            case _ if option.store == "hash":
                target(option.name, *value)
            case _:
                target(option.name, value)


class Engine:
    """
    Getopt-style engine over specification strings.

    Example
        >>> verbose, files = Slot(), []
        >>> outcome = Engine(Configuration().configure("bundling")).parse(
        ...     ["-v", "--file", "a", "--file=b", "rest"],
        ...     {"v|verbose": verbose, "f|file=s": files},
        ... )
        >>> outcome.success, verbose.value, files, outcome.operands
        (True, True, ['a', 'b'], ['rest'])
    """

    def __init__(self, configuration=Configuration(), /):
        if not isinstance(configuration, Configuration):
            raise TypeError("engine configuration must be a Configuration")
        self.configuration = configuration

    def parse(self, argv, bindings, /):
        return _Parser(self.configuration, bindings).run(argv)


__all__ = (
    "Slot",
    "Option",
    "Configuration",
    "Outcome",
    "Engine",
    "compile",
)
