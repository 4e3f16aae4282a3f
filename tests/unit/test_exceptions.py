"""Unit tests for custom exception hierarchy"""
import logging
from datetime import datetime

from soulspace.exceptions import (
    SoulSpaceError,
    ValidationError,
    InvalidArgument,
    StoreError,
    RecordNotFoundError,
    ChallengeAlreadyCompletedError,
)


class TestSoulSpaceError:
    """Test base exception class"""

    def test_basic_exception(self):
        """Test basic exception creation"""
        error = SoulSpaceError("Test error")
        assert error.message == "Test error"
        assert error.user_message == "An error occurred. Please try again."
        assert error.request_id is not None
        assert isinstance(error.timestamp, datetime)

    def test_exception_with_context(self):
        """Test exception with full context"""
        error = SoulSpaceError(
            message="Progress save failed",
            user_id="user-1",
            operation="add_xp",
            context={"source": "goal_completion"},
            user_message="Could not save your progress"
        )
        assert error.user_id == "user-1"
        assert error.operation == "add_xp"
        assert error.context["source"] == "goal_completion"
        assert error.user_message == "Could not save your progress"

    def test_exception_with_cause(self):
        """Test exception wrapping another exception"""
        original_error = KeyError("user-1")
        error = SoulSpaceError(message="Lookup failed", cause=original_error)
        assert error.cause == original_error

    def test_to_dict(self):
        """Test exception serialization"""
        error_dict = SoulSpaceError(message="Test error", user_id="user-1").to_dict()
        assert error_dict["error"] == "SoulSpaceError"
        assert error_dict["message"] == "Test error"
        assert "request_id" in error_dict
        assert "timestamp" in error_dict

    def test_logged_on_creation(self, caplog):
        """Test errors log themselves"""
        with caplog.at_level(logging.ERROR, logger="soulspace.exceptions"):
            SoulSpaceError("Something broke")
        assert "SoulSpaceError: Something broke" in caplog.text


class TestValidationErrors:
    """Test validation errors"""

    def test_validation_error(self):
        """Test validation error with field"""
        error = ValidationError(message="Must be positive", field="amount", value=-5)
        assert error.field == "amount"
        assert error.value == -5
        assert "Invalid amount" in error.user_message

    def test_invalid_argument_is_validation_error(self):
        """Test InvalidArgument sits under ValidationError"""
        error = InvalidArgument(message="total_xp must be non-negative", field="total_xp", value=-1)
        assert isinstance(error, ValidationError)
        assert isinstance(error, SoulSpaceError)
        assert error.context == {"field": "total_xp", "value": -1}

    def test_logged_at_warning(self, caplog):
        """Test caller mistakes log at WARNING, not ERROR"""
        with caplog.at_level(logging.DEBUG, logger="soulspace.exceptions"):
            InvalidArgument(message="amount must be positive", field="amount", value=0)

        levels = [record.levelno for record in caplog.records]
        assert levels == [logging.WARNING]


class TestStoreErrors:
    """Test store errors"""

    def test_record_not_found(self):
        """Test record not found"""
        error = RecordNotFoundError(message="Reward not found", record_type="Reward", record_id="r-1")
        assert isinstance(error, StoreError)
        assert error.record_type == "Reward"
        assert error.record_id == "r-1"
        assert "Reward not found" in error.user_message

    def test_challenge_already_completed(self):
        """Test repeated challenge completion error"""
        error = ChallengeAlreadyCompletedError("challenge-1", user_id="user-1")
        assert error.challenge_id == "challenge-1"
        assert error.user_id == "user-1"
        assert "challenge-1" in error.message
