"""
Arglet value slots.

A Value is the storage paired with every declared argument. It holds exactly one
of two shapes and remembers which one:

- str:  a single token (fixed arity of zero or one);
- list: an ordered sequence of tokens (fixed arity above one, or '+'/'*').

Extraction names the shape it expects. A matching shape returns a copy of the
content; a different shape raises TypeMismatchError (never a silent coercion),
and extracting from a slot that was never stored raises EmptyValueError.

    >>> value = Value(["a", "b"])
    >>> value.extract(list)
    ['a', 'b']
    >>> value.extract(str)
    Traceback (most recent call last):
    ...
    arglet.faults.TypeMismatchError: value holds a list, not a str

Copies (copy.copy, copy.deepcopy, Value(other)) never share content.
"""
import typing

from .faults import FaultCode, TypeMismatchError, EmptyValueError
from .null import null


def _resolve_shape(shape, /):
    """
    Normalize a requested shape to str or list.

    Accepted spellings are str, list and list[str] (typing.List[str] included);
    anything else is a programming error.
    """
    if typing.get_origin(shape) is list and typing.get_args(shape) in ((str,), ()):
        return list
    if shape is str or shape is list:
        return shape
    raise TypeError("shape must be str, list or list[str], not %r" % (shape,))


class Value:
    """
    Tagged container for a single string or an ordered list of strings.

    Attributes
    - shape: str | list | None (None while empty)
    - empty: bool
    """

    __slots__ = ("_content", "_shape")

    def __init__(self, content=null, /):
        self._content = null
        self._shape = None
        if isinstance(content, Value):
            self._content = content._clone()
            self._shape = content._shape
        elif content is not null:
            self.store(content)

    @property
    def shape(self):
        return self._shape

    @property
    def empty(self):
        return self._content is null

    def store(self, content, /):
        """
        Capture a copy of `content` and its shape, replacing what was held before.

        Parameters
        - content: str | Iterable[str]

        Raises
        - TypeError: when content is neither a string nor an iterable of strings.
        """
        if isinstance(content, str):
            self._content, self._shape = content, str
            return self
        try:
            items = list(content)
        except TypeError:
            raise TypeError("value content must be a string or an iterable of strings") from None
        if not all(isinstance(item, str) for item in items):
            raise TypeError("value content must be a string or an iterable of strings")
        self._content, self._shape = items, list
        return self

    def extract(self, shape=str, /):
        """
        Return a copy of the content reinterpreted as `shape`.

        Raises
        - EmptyValueError: nothing was stored.
        - TypeMismatchError: the stored shape differs from the requested one.
        """
        shape = _resolve_shape(shape)
        if self._content is null:
            raise EmptyValueError(
                "value holds nothing",
                title="empty value",
                code=FaultCode.EMPTY_VALUE,
                hint="check count() before retrieving optional arguments",
            )
        if shape is not self._shape:
            raise TypeMismatchError(
                "value holds a %s, not a %s" % (self._shape.__name__, shape.__name__),
                title="type mismatch",
                code=FaultCode.TYPE_MISMATCH,
                hint="request %s for this argument" % self._shape.__name__,
                expected=shape,
                actual=self._shape,
            )
        return self._clone()

    def clear(self):
        self._content = null
        self._shape = None

    def _clone(self):
        return list(self._content) if self._shape is list else self._content

    def __len__(self):
        """
        Number of held tokens: 0 when empty, 1 for a string, the length for a list.
        """
        if self._content is null:
            return 0
        return len(self._content) if self._shape is list else 1

    def __copy__(self):
        return Value(self)

    def __deepcopy__(self, memo, /):
        return Value(self)

    def __eq__(self, other):
        if not isinstance(other, Value):
            return NotImplemented
        return self._shape is other._shape and self._content == other._content

    __hash__ = None

    def __repr__(self):
        return "value(%r)" % (self._content,)

    def __rich_repr__(self):
        yield self._content


__all__ = (
    "Value",
)
