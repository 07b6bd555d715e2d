# tests/test_ids.py
import re

import pytest

from cloudhire.utils.ids import generate_application_id, generate_job_id, normalize_id


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("id123", "id123"),
        (" id123 ", "id123"),
        ('"id123"', "id123"),
        ("'\"id123\"'", "id123"),
        ('" id123 "', "id123"),
        (42, "42"),
        ("", None),
        ('""', None),
        (None, None),
    ],
)
def test_normalize_id(raw, expected):
    assert normalize_id(raw) == expected


def test_generated_ids_have_expected_shape():
    assert re.fullmatch(r"\d{13}_[0-9a-z]{7}", generate_job_id())
    assert re.fullmatch(r"app_\d{13}_[0-9a-z]{7}", generate_application_id())
    assert generate_job_id() != generate_job_id()
