"""Tests for request validation."""
import json

import pytest

from timer_registry.errors import (
    DuplicateIdentifierError,
    InvalidParametersError,
    MalformedInputError,
    StorageFailureError,
)
from timer_registry.models import Timer
from timer_registry.validation import validate_required, validate_shape, validate_unique


class TestValidateShape:

    def test_full_body(self, timer_body):
        timer = validate_shape(json.dumps(timer_body).encode())

        assert timer.timer_id == "t1"
        assert timer.expires == "2023-06-26T13:40:17Z"
        assert timer.meta_tags == {"a": "b"}
        assert timer.callback_reference == "cb"
        assert timer.delete_after == 0

    def test_missing_fields_default_to_zero_values(self):
        timer = validate_shape(b'{"timerid": "x"}')

        assert timer.expires == ""
        assert timer.meta_tags == {}
        assert timer.delete_after == 0

    def test_unknown_fields_ignored(self):
        timer = validate_shape(b'{"timerid": "x", "color": "red"}')
        assert timer.timer_id == "x"

    def test_null_fields_keep_zero_values(self):
        timer = validate_shape(
            b'{"timerid": "n1", "expires": null, "metaTags": null,'
            b' "callbackReference": null, "deleteAfter": null}'
        )

        assert timer.timer_id == "n1"
        assert timer.expires == ""
        assert timer.meta_tags == {}
        assert timer.callback_reference == ""
        assert timer.delete_after == 0

    def test_null_identifier_is_empty(self):
        with pytest.raises(InvalidParametersError):
            validate_required(validate_shape(b'{"timerid": null}'))

    @pytest.mark.parametrize("raw", [
        b"not json",
        b"",
        b"[1, 2]",
        b'{"timerid": "x", "deleteAfter": "5"}',
        b'{"timerid": "x", "deleteAfter": 1.5}',
        b'{"timerid": 42}',
        b'{"timerid": "x", "metaTags": {"a": 1}}',
    ])
    def test_malformed(self, raw):
        with pytest.raises(MalformedInputError):
            validate_shape(raw)


class TestValidateRequired:

    def test_present(self):
        validate_required(Timer(timerid="t1"))

    def test_empty_identifier(self):
        with pytest.raises(InvalidParametersError):
            validate_required(Timer(timerid=""))

    def test_whitespace_identifier_accepted(self):
        validate_required(Timer(timerid="   "))

    def test_attribute_names_are_not_wire_keys(self):
        timer = validate_shape(b'{"timer_id": "py1", "delete_after": 7}')

        assert timer.delete_after == 0
        with pytest.raises(InvalidParametersError):
            validate_required(timer)


class TestValidateUnique:

    @pytest.mark.asyncio
    async def test_unused_id(self, gateway):
        await validate_unique(gateway, "t1")

    @pytest.mark.asyncio
    async def test_existing_id(self, gateway, timer_body):
        gateway.insert_one(timer_body)

        with pytest.raises(DuplicateIdentifierError):
            await validate_unique(gateway, "t1")

    @pytest.mark.asyncio
    async def test_store_error(self, gateway):
        gateway.close()

        with pytest.raises(StorageFailureError):
            await validate_unique(gateway, "t1")
