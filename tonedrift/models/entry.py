"""JournalEntry data model and the editable entry list."""

import uuid

from pydantic import BaseModel, Field


# Entry fields the editor may change
EDITABLE_FIELDS = ("date", "text")


def _new_id() -> str:
    return uuid.uuid4().hex


class JournalEntry(BaseModel):
    """A single user-written journal entry."""

    id: str = Field(default_factory=_new_id, description="Opaque unique token")
    date: str = Field(default="", description="Optional calendar date")
    text: str = Field(default="", description="Entry body")

    model_config = {"validate_assignment": True}

    @property
    def has_content(self) -> bool:
        """Whether the text is non-blank after trimming."""
        return bool(self.text.strip())


class EntryBook:
    """Ordered, editable collection of journal entries.

    Always holds at least one entry. A new book starts with two blank
    entries, since drift detection needs at least two.
    """

    def __init__(self, entries: list[JournalEntry] | None = None):
        if entries:
            self._entries = list(entries)
        else:
            self._entries = [JournalEntry(), JournalEntry()]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def __getitem__(self, index: int) -> JournalEntry:
        return self._entries[index]

    @property
    def entries(self) -> list[JournalEntry]:
        """Snapshot of the entries in display order."""
        return list(self._entries)

    def get(self, entry_id: str) -> JournalEntry | None:
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def add(self, text: str = "", date: str = "") -> JournalEntry:
        """Append a new entry and return it."""
        entry = JournalEntry(text=text, date=date)
        self._entries.append(entry)
        return entry

    def update(self, entry_id: str, field: str, value: str) -> JournalEntry:
        """Edit one field of an entry in place.

        Args:
            entry_id: Id of the entry to edit.
            field: Either "date" or "text".
            value: New field value.

        Returns:
            The edited entry.

        Raises:
            KeyError: If no entry has the given id.
            ValueError: If the field is not editable.
        """
        if field not in EDITABLE_FIELDS:
            raise ValueError(f"Invalid field: {field}. Must be one of {list(EDITABLE_FIELDS)}")

        entry = self.get(entry_id)
        if entry is None:
            raise KeyError(entry_id)

        setattr(entry, field, value)
        return entry

    def remove(self, entry_id: str) -> bool:
        """Remove an entry.

        Removing the last remaining entry is a no-op.

        Returns:
            True if an entry was removed.
        """
        if len(self._entries) <= 1:
            return False

        before = len(self._entries)
        self._entries = [e for e in self._entries if e.id != entry_id]
        return len(self._entries) < before
