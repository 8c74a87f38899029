# journal_ui/tables.py
"""Journal and contact lists as DataFrames for st.dataframe."""

from __future__ import annotations

from typing import List

import pandas as pd

from journal_api.schemas import Condition, Contact, Note


def notes_frame(notes: List[Note]) -> pd.DataFrame:
    rows = [{"Time": n.created_at or "", "Note": n.content or ""} for n in notes]
    return pd.DataFrame(rows, columns=["Time", "Note"])


def conditions_frame(conditions: List[Condition]) -> pd.DataFrame:
    rows = []
    for c in conditions:
        rows.append({
            "Code": c.code or "",
            "Diagnosis": c.display or "",
            "Onset": c.onset_date or "",
        })
    return pd.DataFrame(rows, columns=["Code", "Diagnosis", "Onset"])


def contact_label(contact: Contact) -> str:
    return f"{contact.username} ({contact.role.value})"
