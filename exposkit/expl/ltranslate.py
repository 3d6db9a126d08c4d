"""Label-to-address table used when resolving assembly labels."""


class LabelTable:
    """Ordered mapping of label names to addresses; the first entry wins."""

    def __init__(self):
        self._entries: list[tuple[str, int]] = []

    def append(self, label, addr):
        self._entries.append((label, addr))

    def find(self, name) -> int:
        """Address of ``name``, or -1 when the label is unknown."""
        return next((addr for label, addr in self._entries if label == name), -1)

    def format(self) -> str:
        return "".join(f"{label} : {addr}\n" for label, addr in self._entries)

    def __len__(self):
        return len(self._entries)