"""Tests for the table definitions.

Text columns fed by clients or the identity provider carry no length
limit, so long values are stored rather than rejected by the database.
"""

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.schema import CreateTable

from fieldops.application.services.submission_service import validate_payload
from fieldops.infrastructure.database.models import SubmissionModel, UserModel

UNBOUNDED_COLUMNS = [
    (UserModel, "id"),
    (UserModel, "email"),
    (UserModel, "first_name"),
    (UserModel, "last_name"),
    (UserModel, "profile_image_url"),
    (SubmissionModel, "client_name"),
    (SubmissionModel, "government"),
    (SubmissionModel, "atm_code"),
    (SubmissionModel, "agent_id"),
]


@pytest.mark.parametrize("model,column", UNBOUNDED_COLUMNS)
def test_free_text_columns_have_no_length(model, column):
    assert getattr(model.__table__.c[column].type, "length", None) is None


@pytest.mark.parametrize("model", [UserModel, SubmissionModel])
def test_ddl_has_no_bounded_varchar_for_free_text(model):
    ddl = str(CreateTable(model.__table__).compile(dialect=postgresql.dialect()))

    assert "VARCHAR(100)" not in ddl
    assert "VARCHAR(255)" not in ddl


def test_long_values_pass_validation():
    """Values well past any former column width are accepted as-is."""
    long_code = "ATM-" + "9" * 300
    long_government = "g" * 500

    new = validate_payload(
        "u1",
        {
            "clientName": "Acme",
            "government": long_government,
            "atmCode": long_code,
            "serviceType": "maintenance",
        },
    )

    assert new.atm_code == long_code
    assert new.government == long_government
