import os

from sqlalchemy import func, select

from app.core.config import settings
from app.core.security import verify_password
from app.models import User
from tests.helpers import auth_header

USER = {"name": "A", "email": "a@x.com", "password": "p1"}


async def test_register_returns_user_without_secrets(client):
    res = await client.post("/register", data=USER)
    assert res.status_code == 201
    body = res.json()
    assert body["user"]["email"] == "a@x.com"
    assert body["user"]["role"] == "STUDENT"
    assert body["user"]["is_verified"] is False
    assert "password" not in body["user"]
    assert "verification_code" not in body["user"]


async def test_register_stores_hashed_password(client, db):
    await client.post("/register", data=USER)
    user = (await db.execute(select(User).where(User.email == "a@x.com"))).scalar_one()
    assert user.password != "p1"
    assert verify_password("p1", user.password)


async def test_register_emails_numeric_code(client, mailer):
    res = await client.post("/register", data=USER)
    code = res.json()["verification_code"]
    assert code.isdigit() and len(code) == settings.OTP_LENGTH
    assert len(mailer.sent) == 1
    assert mailer.sent[0]["recipient"] == "a@x.com"
    assert code in mailer.sent[0]["body"]


async def test_register_hides_code_when_not_exposed(client, mailer, monkeypatch):
    monkeypatch.setattr(settings, "EXPOSE_VERIFICATION_CODE", False)
    res = await client.post("/register", data=USER)
    assert res.status_code == 201
    assert res.json()["verification_code"] is None
    assert len(mailer.sent) == 1


async def test_duplicate_email_is_conflict_and_creates_no_row(client, db):
    assert (await client.post("/register", data=USER)).status_code == 201
    res = await client.post("/register", data={**USER, "name": "B"})
    assert res.status_code == 400
    assert res.json()["error"] == "ConflictError"
    count = await db.scalar(select(func.count()).select_from(User).where(User.email == "a@x.com"))
    assert count == 1


async def test_register_rejects_blank_fields(client):
    res = await client.post("/register", data={"name": "   ", "email": "b@x.com", "password": "pw"})
    assert res.status_code == 400
    assert res.json()["error"] == "ValidationError"

    res = await client.post("/register", data={"name": "B", "email": "b@x.com"})
    assert res.status_code == 400
    assert "password" in res.json()["detail"]


async def test_register_rejects_invalid_email(client):
    res = await client.post("/register", data={**USER, "email": "not-an-email"})
    assert res.status_code == 400
    assert res.json()["error"] == "ValidationError"


async def test_register_accepts_profile_image(client, storage):
    files = {"profile_image": ("me.png", b"\x89PNG fake image", "image/png")}
    res = await client.post("/register", data=USER, files=files)
    assert res.status_code == 201
    url = res.json()["user"]["profile_image_url"]
    assert url.startswith("/uploads/") and url.endswith(".jpg")


async def test_register_reports_mail_failure(client, mailer, db):
    mailer.fail = True
    res = await client.post("/register", data=USER)
    assert res.status_code == 500
    assert res.json()["error"] == "InternalError"
    assert "SMTP server unavailable" in res.json()["detail"]

    count = (await db.execute(select(func.count()).select_from(User))).scalar_one()
    assert count == 0

    mailer.fail = False
    res = await client.post("/register", data=USER)
    assert res.status_code == 201
    assert len(mailer.sent) == 1


async def test_register_mail_failure_removes_stored_image(client, mailer, storage):
    mailer.fail = True
    files = {"profile_image": ("me.png", b"\x89PNG fake image", "image/png")}
    res = await client.post("/register", data=USER, files=files)
    assert res.status_code == 500
    assert not os.path.isdir(storage.upload_dir) or os.listdir(storage.upload_dir) == []


async def test_login_before_verification_is_forbidden(client):
    await client.post("/register", data=USER)
    res = await client.post("/login", json={"email": "a@x.com", "password": "p1"})
    assert res.status_code == 403
    assert res.json()["detail"] == "Account not verified"


async def test_unverified_check_precedes_password_check(client):
    await client.post("/register", data=USER)
    res = await client.post("/login", json={"email": "a@x.com", "password": "wrong"})
    assert res.status_code == 403


async def test_verify_then_login_returns_token(client):
    code = (await client.post("/register", data=USER)).json()["verification_code"]

    res = await client.post("/verify-otp", json={"email": "a@x.com", "otp": code})
    assert res.status_code == 200

    res = await client.post("/login", json={"email": "a@x.com", "password": "p1"})
    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    assert body["token_type"] == "bearer"
    assert body["access_token"]
    assert body["user"]["is_verified"] is True
    assert "password" not in body["user"]


async def test_verify_with_wrong_code_is_rejected(client):
    code = (await client.post("/register", data=USER)).json()["verification_code"]
    wrong = "0" * len(code) if code != "0" * len(code) else "1" * len(code)
    res = await client.post("/verify-otp", json={"email": "a@x.com", "otp": wrong})
    assert res.status_code == 400
    assert res.json()["error"] == "ValidationError"


async def test_verify_unknown_email_is_not_found(client):
    res = await client.post("/verify-otp", json={"email": "ghost@x.com", "otp": "123456"})
    assert res.status_code == 404


async def test_second_verify_fails_once_code_is_cleared(client, db):
    code = (await client.post("/register", data=USER)).json()["verification_code"]
    assert (await client.post("/verify-otp", json={"email": "a@x.com", "otp": code})).status_code == 200

    res = await client.post("/verify-otp", json={"email": "a@x.com", "otp": code})
    assert res.status_code == 400
    user = (await db.execute(select(User).where(User.email == "a@x.com"))).scalar_one()
    assert user.is_verified is True
    assert user.verification_code is None


async def test_login_unknown_email_is_not_found(client):
    res = await client.post("/login", json={"email": "ghost@x.com", "password": "p1"})
    assert res.status_code == 404


async def test_login_wrong_password_is_unauthorized(client, make_user):
    await make_user("A", "a@x.com", "p1")
    res = await client.post("/login", json={"email": "a@x.com", "password": "nope"})
    assert res.status_code == 401
    assert res.json()["detail"] == "Invalid password"


async def test_resend_otp_replaces_code(client, mailer):
    first = (await client.post("/register", data=USER)).json()["verification_code"]
    res = await client.post("/resend-otp", json={"email": "a@x.com"})
    assert res.status_code == 200
    second = res.json()["verification_code"]
    assert len(mailer.sent) == 2

    if first != second:
        res = await client.post("/verify-otp", json={"email": "a@x.com", "otp": first})
        assert res.status_code == 400
    res = await client.post("/verify-otp", json={"email": "a@x.com", "otp": second})
    assert res.status_code == 200


async def test_resend_otp_for_verified_account_is_rejected(client, make_user):
    await make_user("A", "a@x.com")
    res = await client.post("/resend-otp", json={"email": "a@x.com"})
    assert res.status_code == 400


async def test_without_verification_accounts_are_active_immediately(client, mailer, monkeypatch):
    monkeypatch.setattr(settings, "EMAIL_VERIFICATION_ENABLED", False)
    res = await client.post("/register", data=USER)
    assert res.status_code == 201
    assert res.json()["verification_code"] is None
    assert res.json()["user"]["is_verified"] is True
    assert mailer.sent == []

    res = await client.post("/login", json={"email": "a@x.com", "password": "p1"})
    assert res.status_code == 200


async def test_me_returns_current_user(client, make_user):
    user, token = await make_user("A", "a@x.com")
    res = await client.get("/me", headers=auth_header(token))
    assert res.status_code == 200
    assert res.json()["id"] == user["id"]
    assert "password" not in res.json()


async def test_me_for_deleted_user_is_not_found(client, make_user):
    user, token = await make_user("A", "a@x.com")
    assert (await client.delete(f"/users/{user['id']}", headers=auth_header(token))).status_code == 200
    res = await client.get("/me", headers=auth_header(token))
    assert res.status_code == 404


async def test_missing_login_fields_are_validation_errors(client):
    res = await client.post("/login", json={"email": "a@x.com"})
    assert res.status_code == 400
    assert res.json()["error"] == "ValidationError"
