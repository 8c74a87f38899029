# journal_ui/record_viewer.py
from __future__ import annotations

from journal_api.journal import JournalApi
from journal_api.schemas import PatientRecord
from journal_ui.scope import FetchState, Status, View

ENTER_NAME = "Enter a patient name."


class PatientRecordViewer(View):
    """Doctor/staff lookup of any patient's journal by name."""

    name = "record_viewer"

    def __init__(self, journal: JournalApi):
        super().__init__()
        self.journal = journal
        self.name_query = ""
        self.record: FetchState[PatientRecord] = FetchState()

    async def search(self) -> None:
        query = self.name_query.strip()
        if not query:
            self.record.start()
            self.record.fail(ENTER_NAME)
            return
        await self._load(
            self.record,
            lambda: self.journal.get_record_by_name(query),
            "Could not load journal",
        )

    @property
    def prompt_visible(self) -> bool:
        return self.record.status == Status.IDLE
