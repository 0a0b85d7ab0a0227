from __future__ import annotations

import pytest

from clinic_admin.models.user import UserRecord
from clinic_admin.services.search import filter_users, matches
from factories import make_row


def _users() -> list[UserRecord]:
    rows = [
        make_row("u1", "2024-03-01T10:00:00+00:00", email="ana@clinic.com",
                 first_name="Ana", last_name="Lopez", role="DOCTOR", office_name="North"),
        make_row("u2", "2024-02-01T10:00:00+00:00", email="bob@clinic.com",
                 first_name="Bob", last_name="Smith", role="PT", office_name="South"),
        make_row("u3", "2024-01-01T10:00:00+00:00", email="cy@clinic.com",
                 first_name=None, last_name=None, role=None, office_name=None),
        make_row("u4", "2023-12-01T10:00:00+00:00", email="dee@clinic.com",
                 first_name="Dee", last_name="Park", role="CLINICAL SPECIALIST", office_name="North"),
    ]
    return [UserRecord.model_validate(row) for row in rows]


def test_empty_query_returns_every_user_in_order() -> None:
    users = _users()
    assert filter_users(users, "") == users


def test_query_is_case_insensitive_substring() -> None:
    result = filter_users(_users(), "NORTH")
    assert [u.id for u in result] == ["u1", "u4"]


@pytest.mark.parametrize(
    ("query", "expected"),
    [
        ("ana@", ["u1"]),
        ("smi", ["u2"]),
        ("pt", ["u2"]),
        ("specialist", ["u4"]),
        ("clinic.com", ["u1", "u2", "u3", "u4"]),
        ("zzz", []),
    ],
)
def test_query_matches_any_searchable_field(query: str, expected: list[str]) -> None:
    assert [u.id for u in filter_users(_users(), query)] == expected


def test_missing_fields_count_as_empty_text() -> None:
    blank = _users()[2]
    assert matches(blank, "cy@")
    assert not matches(blank, "none")


def test_result_is_order_preserving_subsequence() -> None:
    users = _users()
    result = filter_users(users, "o")
    positions = [users.index(u) for u in result]
    assert positions == sorted(positions)
    assert len(set(u.id for u in result)) == len(result)


def test_narrowing_query_never_grows_result() -> None:
    users = _users()
    wide = filter_users(users, "n")
    narrow = filter_users(users, "no")
    assert set(u.id for u in narrow) <= set(u.id for u in wide)


def test_filter_does_not_mutate_input() -> None:
    users = _users()
    before = list(users)
    filter_users(users, "bob")
    assert users == before
