# journal_ui/my_journal.py
from __future__ import annotations

from journal_api.journal import JournalApi
from journal_api.schemas import PatientRecord
from journal_ui.scope import FetchState, View


class MyJournalView(View):
    """A patient's own journal, fetched once on mount."""

    name = "my_journal"

    def __init__(self, journal: JournalApi):
        super().__init__()
        self.journal = journal
        self.record: FetchState[PatientRecord] = FetchState()

    async def mount(self) -> None:
        if self.mounted:
            return
        await super().mount()
        await self._load(self.record, self.journal.get_my_record, "Could not load journal")
