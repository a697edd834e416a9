from __future__ import annotations

from dataclasses import dataclass, field

ATTR_UNDERLINE = "underline"


@dataclass(frozen=True)
class TextAttribute:
    kind: str
    start: int
    end: int


@dataclass(frozen=True)
class Preedit:
    """Text under composition as shown by the host."""

    text: str
    cursor: int
    attributes: tuple[TextAttribute, ...] = field(default_factory=tuple)

    @property
    def visible(self) -> bool:
        return self.text != ""

    @classmethod
    def underlined(cls, text: str, cursor: int) -> Preedit:
        """Preedit with one underline spanning the whole text."""
        return cls(text, cursor, (TextAttribute(ATTR_UNDERLINE, 0, len(text)),))


class Surface:
    """Host side of a session: receives renders, committed text and finish.

    Hosts subclass this; the base class just remembers what it was sent.
    """

    def __init__(self):
        self.preedit = Preedit.underlined("", 0)
        self.committed: list[str] = []
        self.finished = False

    def update_preedit(self, preedit: Preedit):
        self.preedit = preedit

    def commit_text(self, text: str):
        self.committed.append(text)

    def finish(self):
        self.finished = True
