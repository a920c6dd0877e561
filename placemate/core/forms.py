"""Shared form fields and helpers for JSON request bodies."""

from __future__ import annotations

import base64
import binascii
from typing import Any

from flask_wtf import FlaskForm
from wtforms import Field

from placemate.errors import ValidationError


class ListField(Field):
    """A field holding every value submitted under its name.

    A JSON array arrives as repeated values, a scalar as a single value.
    """

    def process_formdata(self, valuelist: list[Any]) -> None:
        self.data = [value for value in valuelist if value not in (None, "")]


class MapField(Field):
    """A field holding a JSON object submitted under its name."""

    def process_formdata(self, valuelist: list[Any]) -> None:
        self.data = None
        if not valuelist or valuelist[0] in (None, ""):
            return
        if not isinstance(valuelist[0], dict):
            raise ValueError("Expected an object.")
        self.data = dict(valuelist[0])


class Base64Field(Field):
    """A field decoding a base64 (or data-URL) string into raw bytes."""

    def process_formdata(self, valuelist: list[Any]) -> None:
        self.data = None
        if not valuelist or not valuelist[0]:
            return
        raw = str(valuelist[0])
        if raw.startswith("data:"):
            raw = raw.partition(",")[2]
        try:
            self.data = base64.b64decode(raw, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValueError("Invalid base64 data.") from e


def validate_form(form: FlaskForm) -> FlaskForm:
    """Validate a submitted form, raising ValidationError with the first problem."""
    if form.validate_on_submit():
        return form
    for field_name, errors in form.errors.items():
        if errors:
            raise ValidationError(f"{field_name}: {errors[0]}", code="MISSING_FIELDS")
    raise ValidationError("Request body is missing or malformed.", code="MISSING_FIELDS")
