"""
Arglet argument parser: declare, bind, retrieve.

What this module provides
- ArgumentParser: the registry of declared arguments and their value slots.
  • add_argument(*names, nargs=0, optional=True): declare a flag-matched argument.
  • add_final_argument(name, nargs=1, optional=False): declare the trailing positional.
  • parse(prompt): bind a token stream to the declared arguments.
  • retrieve(name, shape=str): typed read-back of a bound value.
  • usage()/print_usage(): usage string (see arglet.usage).
  • exists/count/empty/clear/namespace: accessors.

Quick start
    from arglet import ArgumentParser

    parser = ArgumentParser("tool", program=False)
    parser.add_argument("-n", "--name", nargs=1)
    parser.add_argument("--inputs", nargs="+", optional=False)
    parser.add_final_argument("output")

    parser.parse("--inputs a.txt b.txt -n demo out.txt")

    parser.retrieve("name")                # 'demo'
    parser.retrieve("inputs", list)        # ['a.txt', 'b.txt']
    parser.retrieve("output")              # 'out.txt'

Binding rules
- The first token is the program path when `program` is true; it names the parser
  (unless a name was given) and is never bound.
- A token is a flag when it starts with one or two dashes and the stripped form is a
  declared name (the final argument's name excluded). A bare "--" stops flag
  recognition for the rest of the stream.
- Flags consume the following tokens that do not start with a dash according to their
  arity: Fixed(n) exactly n (zero stores the flag spelling itself), Unbounded consumes
  the whole run up to the next dash-prefixed token or the end. A lone "-" is a value.
- Every other token is a leftover. Leftovers are bound, in order, to the final argument
  after the scan; without a final argument the first leftover is an error.
- Finally, every required argument must be bound.

Faults
- Declaration and retrieval faults are raised directly (programming errors).
- Binding faults go through ArgumentParser.trigger(): raised by default, rendered on
  stderr with the usage line (and exit status 1) when the parser runs in shell mode.
- A failed parse leaves the slots bound before the failure in place; parse again to
  start over.
"""
import copy
import difflib
import os.path
import re
import shlex
import sys
from collections import deque
from collections.abc import Iterable

from rich.console import Console
from rich.text import Text

from .arguments import Argument, Fixed, Unbounded, arity, sanitize
from .faults import *
from .usage import format_usage
from .utils import *
from .values import Value


class ArgumentParser:
    """
    Registry of declared arguments, each paired with a Value slot at the same index.

    Parameters
    - name: Unset | str (positional-only)
      Program name shown in usage and faults. When Unset, the program token of the
      parsed stream is used, then `__prog__` from __main__, then sys.argv[0].
    - program: bool
      Treat the first token of an explicit prompt as the program path.
    - shell: bool
      Render binding faults on stderr and exit instead of raising them.
    - fancy: bool
      Render faults inside a panel (shell mode only).
    - colorful: bool
      Colorize rendered faults.
    """

    shell = mirror("shell")
    fancy = mirror("fancy")
    colorful = mirror("colorful")
    program = mirror("program")
    arguments = mirror("arguments")

    def __init__(self, name=Unset, /, *, program=True, shell=False, fancy=False, colorful=True):
        if not isinstance(name, str | Unset):
            raise TypeError("ArgumentParser() 'name' must be a string")
        for option, value in (("program", program), ("shell", shell), ("fancy", fancy), ("colorful", colorful)):
            if not isinstance(value, bool):
                raise TypeError(f"ArgumentParser() {option!r} must be a boolean")

        self._name = name
        self._program = program
        self._shell = shell
        self._fancy = fancy
        self._colorful = colorful

        self._arguments = []
        self._values = []
        self._index = {}
        self._final = Unset

    @property
    def name(self):
        """
        Resolved program name (explicit name, recorded program token, __prog__, sys.argv[0]).
        """
        main = __import__("__main__")
        return coalesce(self._name, getattr(main, "__prog__", os.path.basename(sys.argv[0]) if sys.argv else ""))

    # ------------------------------------------------------------------------
    # Declaration
    # ------------------------------------------------------------------------

    def _insert(self, argument):
        """
        Append `argument` with an empty slot and index its names.

        All checks happen before the first mutation, so a failing declaration leaves
        the registry untouched.
        """
        names = argument.names
        for name in names:
            if name in self._index or names.count(name) > 1:
                raise DuplicateArgumentError(
                    "argument name %r is already in use" % name,
                    title="duplicate argument",
                    code=FaultCode.DUPLICATE_ARGUMENT,
                    hint="pick a different name or remove the earlier declaration",
                    name=name,
                    docs=getdoc(FaultCode.DUPLICATE_ARGUMENT)
                )

        slot = len(self._arguments)
        self._arguments.append(argument)
        self._values.append(Value())
        self._index.update(dict.fromkeys(names, slot))
        return argument

    def add_argument(self, *names, nargs=0, optional=True):
        """
        Declare an argument matched by its short and/or long flag.

        Parameters
        - names: one or two of "-x" (short) and "--name" (long).
        - nargs: int >= 0 | "+" | "*" | Fixed | Unbounded. Zero declares a switch.
        - optional: whether the argument may be left unbound.

        Returns
        - Argument: the created descriptor.

        Raises
        - TypeError: zero or more than two names, or a malformed nargs type.
        - InvalidNameFormatError: a malformed name, or two names of the same form.
        - DuplicateArgumentError: a name is already declared.
        """
        if not 1 <= len(names) <= 2:
            raise TypeError("add_argument() takes 1 to 2 names but %d were given" % len(names))
        if not isinstance(optional, bool):
            raise TypeError("add_argument() 'optional' must be a boolean")

        found = {"short": "", "long": ""}
        for name in names:
            kind, bare = sanitize(name)
            if found[kind]:
                raise InvalidNameFormatError(
                    "argument declares two %s names (%r and %r)" % (kind, names[0], names[1]),
                    title="invalid argument name",
                    code=FaultCode.INVALID_NAME_FORMAT,
                    hint="pass at most one '-x' name and one '--name' name",
                    name=name,
                    docs=getdoc(FaultCode.INVALID_NAME_FORMAT)
                )
            found[kind] = bare

        return self._insert(Argument(found["short"], found["long"], arity(nargs), optional))

    def add_final_argument(self, name, nargs=1, optional=False):
        """
        Declare the final argument, bound by position to the leftover tokens.

        Parameters
        - name: a bare word ("files"); used for retrieval and usage. The final argument is
          matched by position only, so dashed names are rejected.
        - nargs: int >= 1 | "+" | "*" | Fixed | Unbounded.
        - optional: whether the argument may be left unbound (required by default).

        Raises
        - MultipleFinalArgumentsError: a final argument is already declared.
        - InvalidNameFormatError: a dashed or malformed name.
        - DuplicateArgumentError: as for add_argument().
        - ValueError: nargs of zero (a positional must consume a token).
        """
        if self._final is not Unset:
            raise MultipleFinalArgumentsError(
                "final argument %r is already declared" % self._arguments[self._final].metavar.lower(),
                title="multiple final arguments",
                code=FaultCode.MULTIPLE_FINAL_ARGUMENTS,
                hint="declare the other positional values as flags instead",
                name=name,
                docs=getdoc(FaultCode.MULTIPLE_FINAL_ARGUMENTS)
            )
        if not isinstance(optional, bool):
            raise TypeError("add_final_argument() 'optional' must be a boolean")

        if not isinstance(name, str):
            raise TypeError("argument names must be strings")
        elif not re.fullmatch(r"[^\W_][\w-]*", name):
            raise InvalidNameFormatError(
                "invalid final argument name %r" % name,
                title="invalid argument name",
                code=FaultCode.INVALID_NAME_FORMAT,
                hint=(
                    "final arguments are matched by position; declare it as %r" % name.lstrip("-")
                    if name.startswith("-") else "use a plain word such as 'files'"
                ),
                name=name,
                docs=getdoc(FaultCode.INVALID_NAME_FORMAT)
            )

        resolved = arity(nargs)
        if resolved == Fixed(0):
            raise ValueError("final argument must consume at least one token")

        argument = self._insert(Argument("", name, resolved, optional, final=True))
        self._final = len(self._arguments) - 1
        return argument

    # ------------------------------------------------------------------------
    # Binding
    # ------------------------------------------------------------------------

    def trigger(self, fault, /, **options):
        """
        Surface a binding fault with this parser's runtime options.

        In shell mode, errors are preceded by the usage line on stderr.
        """
        fault = copy.replace(
            fault,
            **options,
            prog=self.name,
            shell=self._shell,
            fancy=self._fancy,
            colorful=self._colorful
        )
        if self._shell and isinstance(fault, ArgumentException):
            self.print_usage(stderr=True)
        trigger(fault)

    def _lookup(self, token):
        """
        Return the slot of a flag token, or None when the token is not a declared flag.
        """
        if not (match := re.fullmatch(r"--?([^-].*)", token, re.DOTALL)):
            return None
        slot = self._index.get(match[1])
        if slot is None or slot == self._final:
            return None
        return slot

    def _stops(self, token):
        """
        Whether `token` ends a value run: any dash-prefixed token except a lone "-".
        """
        return token.startswith("-") and len(token) > 1

    def _consume(self, argument, token, index, tokens):
        """
        Pull the value tokens of the flag `token` (at 1-based `index`) from `tokens`.

        Returns the slot content: the flag spelling for Fixed(0), a string for Fixed(1),
        a list otherwise.
        """
        values = []
        match argument.arity:
            case Fixed(count):
                while len(values) < count and tokens and not self._stops(tokens[0]):
                    values.append(tokens.popleft())
                if len(values) < count:
                    self.trigger(MissingValueError(
                        "argument %r at %s position requires %d %s but got %d" % (
                            token, ordinal(index), count, "value" if count == 1 else "values", len(values)
                        ),
                        title="missing value",
                        code=FaultCode.MISSING_VALUE,
                        hint="pass %d %s after %s" % (count, "value" if count == 1 else "values", token),
                        input=token,
                        index=index,
                        argument=argument,
                        docs=getdoc(FaultCode.MISSING_VALUE)
                    ))
                if count == 0:
                    return token
                return values[0] if count == 1 else values
            case Unbounded(minimum):
                while tokens and not self._stops(tokens[0]):
                    values.append(tokens.popleft())
                if len(values) < minimum:
                    self.trigger(MissingValueError(
                        "argument %r at %s position requires at least one value" % (token, ordinal(index)),
                        title="missing value",
                        code=FaultCode.MISSING_VALUE,
                        hint="pass one or more values after %s" % token,
                        input=token,
                        index=index,
                        argument=argument,
                        docs=getdoc(FaultCode.MISSING_VALUE)
                    ))
                return values

    def _unexpected(self, token, index):
        """
        Fault for a leftover token that nothing can take.
        """
        if token.startswith("-") and token != "-":
            flags = [
                spelling
                for argument in self._arguments if not argument.final
                for spelling in (("-" + argument.short) if argument.short else "", ("--" + argument.long) if argument.long else "")
                if spelling
            ]
            suggestions = difflib.get_close_matches(token, flags, 5)
            try:
                hint = "did you mean %r? check the usage line for every declared argument" % suggestions[0]
            except IndexError:
                hint = "check the usage line for every declared argument"
            return self.trigger(UnknownArgumentError(
                "unknown argument %r at %s position" % (token, ordinal(index)),
                title="unknown argument",
                code=FaultCode.UNKNOWN_ARGUMENT,
                hint=hint,
                input=token,
                index=index,
                suggestions=suggestions,
                docs=getdoc(FaultCode.UNKNOWN_ARGUMENT)
            ))
        return self.trigger(UnknownArgumentError(
            "unexpected value %r at %s position" % (token, ordinal(index)),
            title="unexpected value",
            code=FaultCode.UNEXPECTED_VALUE,
            hint="remove it, or attach it to an argument that takes values",
            input=token,
            index=index,
            docs=getdoc(FaultCode.UNEXPECTED_VALUE)
        ))

    def _bind_final(self, leftovers):
        """
        Bind the collected (index, token) leftovers to the final argument.
        """
        if self._final is Unset:
            if leftovers:
                index, token = leftovers[0]
                self._unexpected(token, index)
            return

        argument = self._arguments[self._final]
        tokens = [token for _, token in leftovers]

        match argument.arity:
            case Fixed(count):
                if len(tokens) > count:
                    index, token = leftovers[count]
                    return self._unexpected(token, index)
                if not tokens:
                    return
                if len(tokens) < count:
                    self.trigger(MissingValueError(
                        "argument %s requires %d values but got %d" % (argument.metavar, count, len(tokens)),
                        title="missing value",
                        code=FaultCode.MISSING_VALUE,
                        hint="pass %d %s values" % (count, argument.metavar),
                        input=argument.metavar,
                        index=leftovers[-1][0],
                        argument=argument,
                        docs=getdoc(FaultCode.MISSING_VALUE)
                    ))
                self._values[self._final].store(tokens[0] if count == 1 else tokens)
            case Unbounded(minimum):
                if len(tokens) >= minimum:
                    self._values[self._final].store(tokens)

    def _tokenize(self, prompt):
        """
        Normalize a prompt into (program, tokens); program is Unset when absent.

        - Unset: sys.argv, whose first element is always the program path.
        - str: split with shlex.split.
        - Iterable[str]: used as-is (each element must be a string).
        """
        if prompt is Unset:
            program, *tokens = sys.argv or [""]
            return program, tokens
        if isinstance(prompt, str):
            tokens = shlex.split(prompt)
        elif isinstance(prompt, Iterable):
            tokens = list(prompt)
            if not all(isinstance(token, str) for token in tokens):
                raise TypeError("parse() argument must be a string or an iterable of strings")
        else:
            raise TypeError("parse() argument must be a string or an iterable of strings")

        if self._program and tokens:
            return tokens[0], tokens[1:]
        return Unset, tokens

    def parse(self, prompt=Unset, /):
        """
        Bind a token stream to the declared arguments.

        Parameters
        - prompt: Unset (sys.argv) | str (shell-like) | Iterable[str]

        Behavior
        - clears every slot, records the program name, scans flags, binds leftovers to
          the final argument and checks required arguments (see module docstring).

        Returns
        - self, so calls can be chained into retrieve().
        """
        program, tokens = self._tokenize(prompt)
        if program is not Unset and self._name is Unset:
            self._name = os.path.basename(program)

        for value in self._values:
            value.clear()

        tokens = deque(tokens)
        leftovers = []
        seen = set()
        index = 0

        while tokens:
            token = tokens.popleft()
            index += 1

            if token == "--":
                # Everything after the separator belongs to the final argument.
                leftovers.extend(enumerate(tokens, index + 1))
                break

            if (slot := self._lookup(token)) is None:
                leftovers.append((index, token))
                continue

            argument = self._arguments[slot]
            if slot in seen:
                self.trigger(RepeatedArgumentWarning(
                    "argument %r at %s position was already given; its earlier value is replaced" % (
                        token, ordinal(index)
                    ),
                    title="repeated argument",
                    code=FaultCode.REPEATED_ARGUMENT,
                    hint="pass %s only once" % argument.flag,
                    input=token,
                    index=index,
                    argument=argument,
                    docs=getdoc(FaultCode.REPEATED_ARGUMENT)
                ))
            seen.add(slot)

            remaining = len(tokens)
            content = self._consume(argument, token, index, tokens)
            index += remaining - len(tokens)
            self._values[slot].store(content)

        self._bind_final(leftovers)

        for argument, value in zip(self._arguments, self._values):
            if not argument.optional and value.empty:
                spelling = argument.metavar if argument.final else argument.flag
                self.trigger(MissingRequiredArgumentError(
                    "missing required argument %s" % spelling,
                    title="missing required argument",
                    code=FaultCode.MISSING_REQUIRED_ARGUMENT,
                    hint="add %s to the command line" % spelling,
                    input=spelling,
                    argument=argument,
                    docs=getdoc(FaultCode.MISSING_REQUIRED_ARGUMENT)
                ))
                break

        return self

    # ------------------------------------------------------------------------
    # Retrieval
    # ------------------------------------------------------------------------

    def retrieve(self, name, shape=str, /):
        """
        Return the value bound to `name` as `shape` (str, list or list[str]).

        The caller picks the shape from the declared arity: str for Fixed(0)/Fixed(1),
        list for larger fixed counts and for '+'/'*'.

        Raises
        - UnknownArgumentError: `name` is not declared (names are given without dashes).
        - TypeMismatchError: the slot holds the other shape.
        - EmptyValueError: the argument was not bound.
        """
        try:
            slot = self._index[name]
        except (KeyError, TypeError):
            if isinstance(name, str) and name.lstrip("-") in self._index:
                hint = "drop the leading dashes: retrieve(%r)" % name.lstrip("-")
            else:
                hint = "declared names are: %s" % ", ".join(map(repr, self._index)) if self._index else "no argument is declared"
            raise UnknownArgumentError(
                "unknown argument name %r" % (name,),
                title="unknown argument",
                code=FaultCode.UNKNOWN_NAME,
                hint=hint,
                input=name,
                docs=getdoc(FaultCode.UNKNOWN_NAME)
            ) from None
        return self._values[slot].extract(shape)

    def namespace(self):
        """
        Return every bound value keyed by each of its argument's names.
        """
        namespace = {}
        for argument, value in zip(self._arguments, self._values):
            if not value.empty:
                for name in argument.names:
                    namespace[name] = value.extract(value.shape)
        return namespace

    def exists(self, name, /):
        return name in self._index

    def count(self, name, /):
        """
        Number of tokens bound to `name`.

        0 for undeclared or unbound arguments. A single-value argument counts 1 unless it
        is bound to an empty string; a list-shaped argument counts its length (so an
        empty '*' argument counts 0).
        """
        if name not in self._index:
            return 0
        value = self._values[self._index[name]]
        if value.shape is str:
            return int(bool(value.extract(str)))
        return len(value)

    def empty(self):
        return not self._index

    def clear(self):
        """
        Forget every declaration and bound value.
        """
        self._index.clear()
        self._arguments.clear()
        self._values.clear()
        self._final = Unset

    def __contains__(self, name):
        return self.exists(name)

    # ------------------------------------------------------------------------
    # Usage
    # ------------------------------------------------------------------------

    def usage(self):
        return format_usage(self)

    def print_usage(self, *, stderr=False):
        Console(stderr=stderr, highlight=False).print(Text(self.usage()), soft_wrap=True)

    def __rich__(self):
        return Text(self.usage())

    def __repr__(self):
        return "argument-parser(name=%r, arguments=%r)" % (self.name, self._arguments)


__all__ = (
    "ArgumentParser",
)
