"""Unit tests for argument schemas and validation messages."""

import pytest
from pydantic import ValidationError, field_validator

from openclaw_desktop.api.schemas import (
    AddApprovalArgs,
    CommandArgs,
    CreateAgentArgs,
    GetLogsArgs,
    NoArgs,
)
from openclaw_desktop.api.validation import pydantic_to_error_message


class TestCommandArgSchemas:
    """Tests for the command argument schemas."""

    def test_camel_case_aliases(self) -> None:
        """camelCase names should populate snake_case fields."""
        args = AddApprovalArgs.model_validate(
            {"agentId": "a1", "actionType": "publish", "contentPreview": "Hi"}
        )

        assert args.agent_id == "a1"
        assert args.action_type == "publish"
        assert args.content_preview == "Hi"

    def test_snake_case_names(self) -> None:
        """snake_case names should be accepted as well."""
        args = AddApprovalArgs.model_validate({"agent_id": "a1", "action_type": "publish"})

        assert args.agent_id == "a1"
        assert args.content_preview == ""

    def test_no_args_ignores_extras(self) -> None:
        """Commands without arguments should tolerate stray keys."""
        NoArgs.model_validate({"unexpected": 1})

    def test_create_agent_tools_not_validated(self) -> None:
        """tools is free text and not parsed as JSON."""
        args = CreateAgentArgs.model_validate({"name": "Bot1", "tools": "not json"})

        assert args.tools == "not json"

    def test_get_logs_limit_optional(self) -> None:
        """A missing limit should be None."""
        assert GetLogsArgs.model_validate({}).limit is None


class TestPydanticToErrorMessage:
    """Tests for pydantic_to_error_message()."""

    def test_missing_field(self) -> None:
        """Missing required fields should name the field."""
        with pytest.raises(ValidationError) as exc_info:
            CreateAgentArgs.model_validate({})

        assert pydantic_to_error_message(exc_info.value) == "name: Field required"

    def test_constraint_violation(self) -> None:
        """Constraint messages should be prefixed with the field name."""
        with pytest.raises(ValidationError) as exc_info:
            GetLogsArgs.model_validate({"limit": 2**64})

        message = pydantic_to_error_message(exc_info.value)
        assert message.startswith("limit: ")
        assert "less than or equal to 9223372036854775807" in message

    def test_value_error_prefix_stripped(self) -> None:
        """Custom validator messages should not carry pydantic's prefix."""

        class KeyArgs(CommandArgs):
            key: str

            @field_validator("key")
            @classmethod
            def not_blank(cls, v: str) -> str:
                if not v.strip():
                    raise ValueError("must not be blank")
                return v

        with pytest.raises(ValidationError) as exc_info:
            KeyArgs.model_validate({"key": "   "})

        assert pydantic_to_error_message(exc_info.value) == "key: must not be blank"

    def test_only_first_error_reported(self) -> None:
        """With several errors, only the first is reported."""
        with pytest.raises(ValidationError) as exc_info:
            AddApprovalArgs.model_validate({})

        assert exc_info.value.error_count() == 2
        message = pydantic_to_error_message(exc_info.value)
        assert message.endswith(": Field required")
        assert message.count("Field required") == 1
