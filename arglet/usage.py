"""
Arglet usage formatter.

Builds the one-paragraph usage string shown to users:

    Usage: prog --input INPUT [INPUT...] [-v] [--jobs JOBS] FILES [FILES...]

Layout
- Prefix "Usage: <name> "; continuation lines are indented by the prefix length.
- Order: required arguments, then optional arguments (both in declaration order),
  then the final positional argument.
- Wrapping: before a piece is appended, if the running line length plus the piece
  exceeds `width` (80 by default) a new line is started and the running length is
  reset to 0; otherwise the piece is added to the running length. The running length
  counts rendered pieces only, not the prefix nor the separating spaces.
- The final argument only goes to a new line when it alone exceeds `width`.

Rendering of one argument (see render())
- name part: "--long" or "-s"; omitted for the final argument, which is matched by
  position rather than by flag.
- placeholders: the upper-cased long name (else short name)
  • Fixed(n): repeated min(n, 3) times, followed by " ..." when n > 3
  • Unbounded(1): "META [META...]"
  • Unbounded(0): "[META [META...]]"
- optional arguments are wrapped in brackets.
"""
from .arguments import Fixed, Unbounded

WIDTH = 80


def render(argument, /):
    """
    Render a single argument as it appears in the usage line.

    Examples
    - Fixed(1), optional, --name      → "[--name NAME]"
    - Fixed(5), required, -n          → "-n N N N ..."
    - Unbounded(0), required, --in    → "--in [IN [IN...]]"
    - Unbounded(1), final, files      → "FILES [FILES...]"
    """
    metavar = argument.metavar
    parts = [] if argument.final else [argument.flag]

    match argument.arity:
        case Fixed(count):
            parts.extend([metavar] * min(3, count))
            if count > 3:
                parts.append("...")
        case Unbounded(minimum) if minimum:
            parts.append("%s [%s...]" % (metavar, metavar))
        case Unbounded():
            parts.append("[%s [%s...]]" % (metavar, metavar))

    text = " ".join(parts)
    return "[%s]" % text if argument.optional else text


def format_usage(parser, /, width=WIDTH):
    """
    Format the usage string of `parser` (any object exposing `name` and `arguments`).

    The final argument (if any) is always placed last, whatever its declaration order,
    and stays on the current line unless it alone is wider than `width`.
    """
    prefix = "Usage: %s " % parser.name
    indent = len(prefix)

    arguments = parser.arguments
    pieces = [render(argument) for argument in arguments if not argument.optional and not argument.final]
    pieces += [render(argument) for argument in arguments if argument.optional and not argument.final]

    lines = [[]]
    length = 0
    for piece in pieces:
        if lines[-1] and length + len(piece) > width:
            lines.append([])
            length = 0
        else:
            length += len(piece)
        lines[-1].append(piece)

    for argument in arguments:
        if argument.final:
            piece = render(argument)
            if lines[-1] and len(piece) > width:
                lines.append([])
            lines[-1].append(piece)

    return prefix + ("\n" + " " * indent).join(" ".join(line) for line in lines)


__all__ = (
    "WIDTH",
    "render",
    "format_usage",
)
