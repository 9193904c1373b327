from __future__ import annotations

import re

import pydantic

__all__ = ("Filter",)

_WHERE_PREFIX = re.compile(r"^\s*where\b\s*(?P<predicate>.+?)\s*$", re.IGNORECASE | re.DOTALL)
_WHERE_KEYWORD = re.compile(r"\bwhere\b", re.IGNORECASE)

_DISALLOWED_TOKENS = (";", "--", "/*", "*/")


@pydantic.dataclasses.dataclass(frozen=True, kw_only=True)
class Filter:
    """Restricts which origin rows are copied.

    A filter is either a single WHERE predicate (without the ``where`` keyword)
    or a single JOIN clause. Combining the two is not supported.

    Statements are sent without parameters, and connections refuse any
    statement containing ``;``, ``--``, ``/*`` or ``*/``. A filter holding one
    of those, even inside a string literal, is rejected when it is created.
    """

    where: str | None = None
    join: str | None = None

    def __post_init__(self) -> None:
        if self.where is not None and self.join is not None:
            raise ValueError(
                "A filter can hold a WHERE predicate or a JOIN clause, but not both."
            )

        for name, fragment in (("where", self.where), ("join", self.join)):
            if fragment is None:
                continue

            if not fragment.strip():
                raise ValueError(f"{name} must not be blank.")

            if found := [token for token in _DISALLOWED_TOKENS if token in fragment]:
                raise ValueError(
                    f"{name} must not contain {', '.join(found)}, since statements containing "
                    f"them are refused: {fragment!r}."
                )

    @staticmethod
    def parse(text: str | None, /) -> Filter:
        if text is None or not text.strip():
            return Filter()

        if match := _WHERE_PREFIX.match(text):
            return Filter(where=match.group("predicate"))

        if _WHERE_KEYWORD.search(text):
            raise ValueError(
                f"Filters combining a JOIN and a WHERE clause are not supported: {text!r}."
            )

        return Filter(join=text.strip())

    def render(self, id_condition: str, /) -> str:
        if self.where is not None:
            return f"where ({self.where}) and {id_condition}"

        if self.join is not None:
            return f"{self.join} where {id_condition}"

        return f"where {id_condition}"
