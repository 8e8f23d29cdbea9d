"""Ready-made schemas for the donor-facing forms."""

from formstate.validation.rules import (
    blood_group,
    email,
    max_length,
    min_length,
    password,
    required,
)
from formstate.validation.schema import Schema


def registration_schema() -> Schema:
    """Donor sign-up: identity, credentials, blood group, and location."""
    return Schema({
        "name": [required("Name"), min_length(2, "Name"), max_length(50, "Name")],
        "email": [required("Email"), email()],
        "password": [required("Password"), password(min_length=6)],
        "bloodGroup": [required("Blood group"), blood_group()],
        "district": [required("District")],
        "upazila": [required("Upazila")],
    })
