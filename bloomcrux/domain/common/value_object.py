"""
Value object base class.

A value object has no identity of its own: two instances holding the same
attributes are interchangeable. Subclasses are frozen dataclasses that check
their own invariants in ``__post_init__``.

Example:
    @dataclass(frozen=True)
    class DeckTitle(ValueObject):
        value: str

        def __post_init__(self) -> None:
            if not self.value.strip():
                raise ValidationError("Deck title cannot be empty")
"""


class ValueObject:
    """Immutable, attribute-compared domain value."""

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return False
        return vars(self) == vars(other)

    def __hash__(self) -> int:
        return hash((type(self).__name__, *sorted(vars(self).items())))

    def __repr__(self) -> str:
        fields = ", ".join(f"{name}={value!r}" for name, value in vars(self).items())
        return f"{type(self).__name__}({fields})"

    def to_primitive(self) -> object:
        """Single-field values collapse to that field; others become a dict."""
        data = vars(self)
        if len(data) == 1:
            return next(iter(data.values()))
        return dict(data)
