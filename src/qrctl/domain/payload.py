"""Aggregation of decoded symbol payloads into one output value.

INVARIANT: The result is text only when *every* payload is valid UTF-8.
Text joins payloads with a single newline; binary concatenates them with
no delimiter. Both preserve finder order.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from qrctl.domain.types import OutputKind


@dataclass
class AggregatedResult:
    """Ordered payloads recovered during one decode call."""

    payloads: list[bytes] = field(default_factory=list)

    def append(self, payload: bytes) -> None:
        self.payloads.append(payload)

    def __len__(self) -> int:
        return len(self.payloads)

    def texts(self) -> list[str] | None:
        """Decode each payload independently; None if any is not UTF-8."""
        decoded: list[str] = []
        for payload in self.payloads:
            try:
                decoded.append(payload.decode("utf-8"))
            except UnicodeDecodeError:
                return None
        return decoded

    @property
    def is_text(self) -> bool:
        return self.texts() is not None

    def render(self) -> tuple[OutputKind, str | bytes]:
        """Return the output kind and value for this aggregate.

        An empty aggregate renders as empty text.
        """
        texts = self.texts()
        if texts is not None:
            return OutputKind.TEXT, "\n".join(texts)
        return OutputKind.BINARY, b"".join(self.payloads)
