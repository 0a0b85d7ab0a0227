from __future__ import annotations

import pytest
from pydantic import ValidationError

from clinic_admin.models.enums import DEFAULT_ROLE, NotificationVariant, UserRole
from clinic_admin.models.service_models import Notification
from clinic_admin.models.user import PROFILE_FIELDS, NewUserInput, UserRecord
from clinic_admin.utils.errors import first_validation_message, service_message
from factories import FakeServiceError, make_row, utc


def _form(**overrides: str) -> dict[str, str]:
    form = {
        "email": "new@clinic.com",
        "password": "secret1",
        "first_name": "Nia",
        "last_name": "Ortiz",
        "role": "PT",
        "office_name": "Downtown",
        "phone_number": "555-0100",
        "office_phone_number": "555-0199",
    }
    form.update(overrides)
    return form


def test_user_record_parses_a_triggered_row_with_empty_profile() -> None:
    record = UserRecord.model_validate(make_row("u1", "2024-05-01T08:30:00+00:00"))
    assert record.first_name is None
    assert record.role is None
    assert record.full_name == ""
    assert record.created_at == utc(2024, 5, 1).replace(hour=8, minute=30)


def test_user_record_blank_role_is_unset() -> None:
    record = UserRecord.model_validate(make_row("u1", "2024-05-01T00:00:00Z", role=""))
    assert record.role is None


def test_user_record_full_name_joins_present_parts() -> None:
    record = UserRecord.model_validate(
        make_row("u1", "2024-05-01T00:00:00Z", first_name="Ana", last_name=None),
    )
    assert record.full_name == "Ana"


def test_clinical_specialist_value_contains_a_space() -> None:
    assert UserRole.CLINICAL_SPECIALIST.value == "CLINICAL SPECIALIST"
    assert UserRole("CLINICAL SPECIALIST") is UserRole.CLINICAL_SPECIALIST


def test_new_user_role_defaults_to_doctor() -> None:
    form = _form()
    del form["role"]
    assert NewUserInput.model_validate(form).role is DEFAULT_ROLE
    assert NewUserInput.model_validate(_form(role="")).role is UserRole.DOCTOR


def test_new_user_profile_holds_only_profile_columns() -> None:
    profile = NewUserInput.model_validate(_form(first_name="  Nia  ")).profile()
    assert set(profile) == set(PROFILE_FIELDS)
    assert profile["first_name"] == "Nia"
    assert profile["role"] == "PT"
    assert "password" not in profile
    assert "email" not in profile


@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"password": "12345"}, "Password must be at least 6 characters."),
        ({"password": ""}, "Password is required."),
        ({"email": "not-an-email"}, "Please enter a valid email address."),
        ({"email": "   "}, "Email is required."),
        ({"first_name": "   "}, "First name is required."),
        ({"office_phone_number": ""}, "Office phone number is required."),
        ({"role": "NURSE"}, "Role must be one of: DOCTOR, PT, TRAINER, ADMIN, COACH, "
                            "ATHLETE, PATIENT, CLINICAL SPECIALIST."),
    ],
)
def test_new_user_validation_messages(overrides: dict[str, str], message: str) -> None:
    with pytest.raises(ValidationError) as info:
        NewUserInput.model_validate(_form(**overrides))
    assert first_validation_message(info.value) == message


def test_missing_field_reads_as_required() -> None:
    form = _form()
    del form["last_name"]
    with pytest.raises(ValidationError) as info:
        NewUserInput.model_validate(form)
    assert first_validation_message(info.value) == "Last name is required."


def test_service_message_prefers_message_attribute() -> None:
    assert service_message(FakeServiceError("User already registered"), "fb") == "User already registered"
    assert service_message(ValueError("plain text"), "fb") == "plain text"
    assert service_message(ValueError(""), "fb") == "fb"


def test_service_message_never_surfaces_a_parse_error() -> None:
    with pytest.raises(ValidationError) as info:
        UserRecord.model_validate(make_row("u1", "2024-06-01T00:00:00Z", role="NURSE"))

    assert service_message(info.value, "Failed to fetch users") == "Failed to fetch users"


def test_notification_factories() -> None:
    ok = Notification.success("done")
    bad = Notification.error("boom")
    assert (ok.title, ok.variant) == ("Success", NotificationVariant.DEFAULT)
    assert (bad.title, bad.description, bad.variant) == (
        "Error", "boom", NotificationVariant.DESTRUCTIVE,
    )
