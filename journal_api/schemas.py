# journal_api/schemas.py
"""
Wire shapes of the journal backend.

Python names are snake_case; aliases carry the backend's camelCase JSON names.
Unknown fields are ignored so backend additions never break the client.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Role(str, Enum):
    PATIENT = "PATIENT"
    DOCTOR = "DOCTOR"
    STAFF = "STAFF"


CLINICAL_ROLES = frozenset({Role.DOCTOR, Role.STAFF})
ROLES = [r.value for r in Role]


class WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


# -------------------------
# Auth
# -------------------------
class User(WireModel):
    id: int
    username: str
    role: Role
    patient_id: Optional[int] = Field(None, alias="patientId")
    practitioner_id: Optional[int] = Field(None, alias="practitionerId")

    @property
    def is_clinical(self) -> bool:
        return self.role in CLINICAL_ROLES


class LoginResult(WireModel):
    token: str = Field(..., min_length=1)
    user: User


class RegisterRequest(WireModel):
    username: str
    password: str
    role: Role = Role.PATIENT


class RegisteredUser(WireModel):
    id: int
    username: str
    role: Role
    patient_id: Optional[int] = Field(None, alias="patientId")


# -------------------------
# Journal
# -------------------------
class Patient(WireModel):
    id: Optional[int] = None
    name: Optional[str] = None
    personnummer: Optional[str] = None
    birth_date: Optional[str] = Field(None, alias="birthDate")
    gender: Optional[str] = None
    contact_info: Optional[str] = Field(None, alias="contactInfo")


class Note(WireModel):
    """A free-text journal entry. The backend stores it as an encounter."""

    id: int
    patient_id: Optional[int] = Field(None, alias="patientId")
    created_at: Optional[str] = Field(None, alias="startTime")
    content: Optional[str] = Field(None, alias="notes")


class Condition(WireModel):
    id: int
    code: Optional[str] = None
    display: Optional[str] = None
    onset_date: Optional[str] = Field(None, alias="onsetDate")


class PatientRecord(WireModel):
    patient: Patient
    notes: List[Note] = Field(default_factory=list)
    conditions: List[Condition] = Field(default_factory=list)

    @field_validator("notes", "conditions", mode="before")
    @classmethod
    def _null_is_empty(cls, v):
        return [] if v is None else v


class NewNote(WireModel):
    patient_name: str = Field(..., alias="patientName")
    note_text: str = Field(..., alias="noteText")


class NewCondition(WireModel):
    patient_name: str = Field(..., alias="patientName")
    code: str
    display: str
    onset_date: Optional[str] = Field(None, alias="onsetDate")


# -------------------------
# Messaging
# -------------------------
class Contact(WireModel):
    id: int
    username: str
    role: Role


class Message(WireModel):
    id: int
    sender_id: int = Field(..., alias="senderId")
    receiver_id: Optional[int] = Field(None, alias="receiverId")
    sender_name: Optional[str] = Field(None, alias="senderName")
    receiver_name: Optional[str] = Field(None, alias="receiverName")
    content: str
    sent_at: Optional[str] = Field(None, alias="sentAt")
    read: bool = False


class SendMessage(WireModel):
    receiver_id: int = Field(..., alias="receiverId")
    content: str
