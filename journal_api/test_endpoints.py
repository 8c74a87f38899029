import pytest

from journal_api.client import AUTH_HEADER
from journal_api.errors import RequestError, ResponseFormatError
from journal_api.schemas import RegisterRequest, Role, SendMessage

DOCTOR = {"id": 7, "username": "dr1364", "role": "DOCTOR", "practitionerId": 3}
PATIENT = {"id": 11, "username": "anna", "role": "PATIENT", "patientId": 4}

RECORD = {
    "patient": {"id": 4, "name": "Anna Svensson", "personnummer": "19850101-1234", "birthDate": "1985-01-01"},
    "notes": [{"id": 1, "patientId": 4, "startTime": "2024-03-01T09:30:00", "notes": "Feels better."}],
    "conditions": [{"id": 2, "code": "J45", "display": "Asthma", "onsetDate": None}],
}


# ============================================================
# Auth
# ============================================================

@pytest.mark.asyncio
async def test_login_returns_token_and_user(ctx, backend, login_as):
    login_as(PATIENT, token="old")
    backend.on("POST", "/api/auth/login", payload={"token": "t-1", "user": DOCTOR})

    result = await ctx.auth.login("dr1364", "x")

    assert result.token == "t-1"
    assert result.user.role == Role.DOCTOR
    assert backend.last_json() == {"username": "dr1364", "password": "x"}
    assert AUTH_HEADER not in backend.calls[-1].headers


@pytest.mark.asyncio
async def test_login_rejected_with_server_text(ctx, backend):
    backend.on("POST", "/api/auth/login", status=401, text="Invalid credentials")

    with pytest.raises(RequestError, match="^Invalid credentials$"):
        await ctx.auth.login("dr1364", "wrong")


@pytest.mark.asyncio
async def test_login_without_token_is_a_format_error(ctx, backend):
    backend.on("POST", "/api/auth/login", payload={"token": "", "user": DOCTOR})

    with pytest.raises(ResponseFormatError):
        await ctx.auth.login("dr1364", "x")


@pytest.mark.asyncio
async def test_register_posts_role_without_auth(ctx, backend):
    backend.on(
        "POST",
        "/api/auth/register",
        payload={"id": 12, "username": "bo", "role": "PATIENT", "patientId": 5},
    )

    created = await ctx.auth.register(RegisterRequest(username="bo", password="pw", role=Role.PATIENT))

    assert created.patient_id == 5
    assert backend.last_json() == {"username": "bo", "password": "pw", "role": "PATIENT"}
    assert AUTH_HEADER not in backend.calls[-1].headers


@pytest.mark.asyncio
async def test_register_accepts_plain_dict(ctx, backend):
    backend.on("POST", "/api/auth/register", payload={"id": 13, "username": "eva", "role": "STAFF"})

    created = await ctx.auth.register({"username": "eva", "password": "pw", "role": "STAFF"})

    assert created.role == Role.STAFF
    assert created.patient_id is None


@pytest.mark.asyncio
async def test_register_failure_carries_server_text(ctx, backend):
    backend.on("POST", "/api/auth/register", status=400, text="Username already exists")

    with pytest.raises(RequestError, match="Username already exists"):
        await ctx.auth.register({"username": "bo", "password": "pw", "role": "PATIENT"})


@pytest.mark.asyncio
async def test_me_without_token_makes_no_call(ctx, backend):
    assert await ctx.auth.me() is None
    assert backend.calls == []


@pytest.mark.asyncio
async def test_me_swallows_rejection(ctx, backend, login_as):
    login_as(PATIENT)
    backend.on("GET", "/api/auth/me", status=401, text="Invalid session")

    assert await ctx.auth.me() is None


@pytest.mark.asyncio
async def test_me_returns_user(ctx, backend, login_as):
    login_as(PATIENT)
    backend.on("GET", "/api/auth/me", payload=PATIENT)

    user = await ctx.auth.me()

    assert user.id == 11
    assert backend.calls[-1].headers[AUTH_HEADER] == "tok-123"


@pytest.mark.asyncio
async def test_logout_revokes_token_and_ignores_rejection(ctx, backend, login_as):
    login_as(PATIENT)
    backend.on("POST", "/api/auth/logout", status=500, text="boom")

    await ctx.auth.logout()

    assert backend.calls[-1].url.path == "/api/auth/logout"


@pytest.mark.asyncio
async def test_logout_without_token_is_local_only(ctx, backend):
    await ctx.auth.logout()
    assert backend.calls == []


# ============================================================
# Journal
# ============================================================

@pytest.mark.asyncio
async def test_my_record_maps_encounters_to_notes(ctx, backend, login_as):
    login_as(PATIENT)
    backend.on("GET", "/api/patients/me", payload=RECORD)

    record = await ctx.journal.get_my_record()

    assert record.patient.birth_date == "1985-01-01"
    assert record.notes[0].content == "Feels better."
    assert record.notes[0].created_at == "2024-03-01T09:30:00"
    assert record.conditions[0].onset_date is None


@pytest.mark.asyncio
async def test_null_lists_become_empty(ctx, backend, login_as):
    login_as(PATIENT)
    backend.on("GET", "/api/patients/me", payload={"patient": {"id": 4}, "notes": None, "conditions": None})

    record = await ctx.journal.get_my_record()

    assert record.notes == []
    assert record.conditions == []


@pytest.mark.asyncio
async def test_record_by_name_is_url_encoded(ctx, backend, login_as):
    login_as(DOCTOR)
    backend.on("GET", "/api/patients/Anna Svensson/full", payload=RECORD)

    record = await ctx.journal.get_record_by_name("Anna Svensson")

    assert record.patient.name == "Anna Svensson"
    assert backend.calls[-1].url.raw_path == b"/api/patients/Anna%20Svensson/full"


@pytest.mark.asyncio
async def test_record_by_name_encodes_slashes(ctx, backend, login_as):
    login_as(DOCTOR)

    with pytest.raises(RequestError):
        await ctx.journal.get_record_by_name("a/b")

    assert backend.calls[-1].url.raw_path == b"/api/patients/a%2Fb/full"


@pytest.mark.asyncio
async def test_record_by_name_not_found(ctx, backend, login_as):
    login_as(DOCTOR)
    backend.on("GET", "/api/patients/Anna Svensson/full", status=404, text="Patient not found")

    with pytest.raises(RequestError, match="Patient not found"):
        await ctx.journal.get_record_by_name("Anna Svensson")


@pytest.mark.asyncio
async def test_add_note_body(ctx, backend, login_as):
    login_as(DOCTOR)
    backend.on(
        "POST",
        "/api/patients/notes/by-name",
        payload={"id": 9, "patientId": 4, "notes": "Follow up in 2 weeks", "startTime": "2024-03-02T10:00:00"},
    )

    note = await ctx.journal.add_note("Anna Svensson", "Follow up in 2 weeks")

    assert note.id == 9
    assert backend.last_json() == {"patientName": "Anna Svensson", "noteText": "Follow up in 2 weeks"}


@pytest.mark.asyncio
async def test_add_condition_blank_onset_is_null(ctx, backend, login_as):
    login_as(DOCTOR)
    backend.on(
        "POST",
        "/api/patients/conditions/by-name",
        payload={"id": 3, "patientId": 4, "code": "I10", "display": "Hypertension", "onsetDate": None},
    )

    condition = await ctx.journal.add_condition("Anna Svensson", "I10", "Hypertension", onset_date="")

    assert condition.code == "I10"
    assert backend.last_json() == {
        "patientName": "Anna Svensson",
        "code": "I10",
        "display": "Hypertension",
        "onsetDate": None,
    }


# ============================================================
# Messages
# ============================================================

@pytest.mark.asyncio
async def test_contacts_and_thread(ctx, backend, login_as):
    login_as(PATIENT)
    backend.on("GET", "/api/messages/contacts", payload=[{"id": 7, "username": "dr1364", "role": "DOCTOR"}])
    backend.on(
        "GET",
        "/api/messages/thread/7",
        payload=[
            {"id": 1, "senderId": 11, "receiverId": 7, "senderName": "anna", "content": "Hi", "sentAt": "2024-03-01T08:00:00"},
            {"id": 2, "senderId": 7, "receiverId": 11, "senderName": "dr1364", "content": "Hello", "sentAt": "2024-03-01T08:05:00", "read": True},
        ],
    )

    contacts = await ctx.messages.get_contacts()
    thread = await ctx.messages.get_thread(contacts[0].id)

    assert contacts[0].role == Role.DOCTOR
    assert [m.content for m in thread] == ["Hi", "Hello"]
    assert thread[1].read is True


@pytest.mark.asyncio
async def test_send_returns_server_message(ctx, backend, login_as):
    login_as(PATIENT)
    backend.on(
        "POST",
        "/api/messages",
        payload={"id": 44, "senderId": 11, "receiverId": 7, "senderName": "anna", "content": "Thanks", "sentAt": "2024-03-01T09:00:00"},
    )

    sent = await ctx.messages.send(SendMessage(receiver_id=7, content="Thanks"))

    assert sent.id == 44
    assert backend.last_json() == {"receiverId": 7, "content": "Thanks"}


@pytest.mark.asyncio
async def test_send_accepts_wire_dict(ctx, backend, login_as):
    login_as(PATIENT)
    backend.on(
        "POST",
        "/api/messages",
        payload={"id": 45, "senderId": 11, "content": "Hej", "sentAt": "2024-03-01T09:01:00"},
    )

    sent = await ctx.messages.send({"receiverId": 7, "content": "Hej"})

    assert sent.receiver_id is None
    assert backend.last_json() == {"receiverId": 7, "content": "Hej"}
