# journal_api/journal.py
"""Journal endpoints: a patient's own record, lookup by name, new notes and diagnoses."""

from __future__ import annotations

from typing import Optional
from urllib.parse import quote

from journal_api.client import ApiClient, expect
from journal_api.schemas import Condition, NewCondition, NewNote, Note, PatientRecord


class JournalApi:
    def __init__(self, client: ApiClient):
        self.client = client

    # Patient reads their own journal
    async def get_my_record(self) -> PatientRecord:
        return expect(await self.client.fetch("/api/patients/me"), PatientRecord)

    # Doctor/staff reads any journal by patient name
    async def get_record_by_name(self, name: str) -> PatientRecord:
        encoded = quote(name, safe="")
        return expect(await self.client.fetch(f"/api/patients/{encoded}/full"), PatientRecord)

    async def add_note(self, patient_name: str, note_text: str) -> Note:
        payload = NewNote(patient_name=patient_name, note_text=note_text)
        body = await self.client.fetch(
            "/api/patients/notes/by-name",
            "POST",
            json=payload.model_dump(by_alias=True),
        )
        return expect(body, Note)

    async def add_condition(
        self,
        patient_name: str,
        code: str,
        display: str,
        onset_date: Optional[str] = None,
    ) -> Condition:
        payload = NewCondition(
            patient_name=patient_name,
            code=code,
            display=display,
            onset_date=onset_date or None,
        )
        body = await self.client.fetch(
            "/api/patients/conditions/by-name",
            "POST",
            json=payload.model_dump(by_alias=True),
        )
        return expect(body, Condition)
