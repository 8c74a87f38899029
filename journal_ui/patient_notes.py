# journal_ui/patient_notes.py
from __future__ import annotations

from journal_api.errors import ApiError
from journal_api.journal import JournalApi
from journal_ui.scope import View, error_text

NOTE_SAVED = "Note saved!"
DIAGNOSIS_SAVED = "Diagnosis saved!"


class PatientNotesView(View):
    """Doctor/staff entry of notes and diagnoses for a patient named in the form."""

    name = "patient_notes"

    def __init__(self, journal: JournalApi):
        super().__init__()
        self.journal = journal
        self.patient_name = ""
        self.note_text = ""
        self.diag_code = ""
        self.diag_display = ""
        self.onset_date = ""
        self.message = ""
        self.error = ""

    def _reset_feedback(self) -> None:
        self.error = ""
        self.message = ""

    async def create_note(self) -> None:
        self._reset_feedback()
        try:
            await self.journal.add_note(self.patient_name, self.note_text)
        except ApiError as e:
            if self.alive:
                self.error = error_text(e, "Failed to save note")
            return
        if self.alive:
            self.message = NOTE_SAVED
            self.note_text = ""

    async def create_diagnosis(self) -> None:
        self._reset_feedback()
        try:
            await self.journal.add_condition(
                self.patient_name,
                self.diag_code,
                self.diag_display,
                onset_date=self.onset_date or None,
            )
        except ApiError as e:
            if self.alive:
                self.error = error_text(e, "Failed to save diagnosis")
            return
        if self.alive:
            self.message = DIAGNOSIS_SAVED
            self.diag_code = ""
            self.diag_display = ""
            self.onset_date = ""
