"""Tests for chaining classifiers over fields."""

import structlog
from structlog.testing import LogCapture, capture_logs

from fingerprint_typing.classification.fingerprint import infer_special_type
from fingerprint_typing.classification.models import FieldMetadata, Fingerprint, TextFingerprint
from fingerprint_typing.classification.runner import classify_field, classify_fields
from fingerprint_typing.core.logging import _add_run_context
from fingerprint_typing.core.models.base import BaseType, SpecialType

EMAIL_FINGERPRINT = Fingerprint(by_type={"type/Text": TextFingerprint(percent_email=0.99)})


def field(**kwargs) -> FieldMetadata:
    return FieldMetadata(name="contact", table_name="users", base_type=BaseType.TEXT, **kwargs)


def mark_category(field: FieldMetadata, fingerprint: Fingerprint | None) -> FieldMetadata | None:
    """Stand-in for a name-based classifier that runs before fingerprints."""
    if field.special_type is None:
        return field.with_special_type("type/Category")
    return None


def explode(field: FieldMetadata, fingerprint: Fingerprint | None) -> FieldMetadata | None:
    raise RuntimeError("boom")


class TestClassifyField:
    """Tests for classify_field."""

    def test_default_classifiers(self):
        result = classify_field(field(), EMAIL_FINGERPRINT)

        assert result is not None
        assert result.special_type == SpecialType.EMAIL
        assert result.previous_snapshot is None

    def test_fingerprint_refines_earlier_classifier(self):
        """A type set earlier in the pass can be replaced."""
        result = classify_field(field(), EMAIL_FINGERPRINT, [mark_category, infer_special_type])

        assert result.special_type == SpecialType.EMAIL

    def test_earlier_result_kept_without_inference(self):
        result = classify_field(field(), None, [mark_category, infer_special_type])

        assert result.special_type == "type/Category"

    def test_user_set_type_survives_chain(self):
        user_field = field(special_type=SpecialType.URL)
        assert classify_field(user_field, EMAIL_FINGERPRINT) is None

    def test_no_change(self):
        assert classify_field(field(), Fingerprint()) is None

    def test_caller_snapshot_is_preserved(self):
        snapshot = field()
        incoming = field(previous_snapshot=snapshot)

        result = classify_field(incoming, EMAIL_FINGERPRINT)

        assert result.previous_snapshot == snapshot

    def test_failing_classifier_is_skipped(self):
        with capture_logs() as logs:
            result = classify_field(field(), EMAIL_FINGERPRINT, [explode, infer_special_type])

        assert result.special_type == SpecialType.EMAIL
        failures = [entry for entry in logs if entry["event"] == "classifier_failed"]
        assert failures == [
            {
                "event": "classifier_failed",
                "log_level": "warning",
                "field": "Field 'users.contact'",
                "classifier": "explode",
                "error": "boom",
            }
        ]


class TestClassifyFields:
    """Tests for classify_fields."""

    def test_returns_only_changed_fields(self):
        pairs = [
            (field(), EMAIL_FINGERPRINT),
            (field(special_type=SpecialType.STATE), EMAIL_FINGERPRINT),
            (field(), None),
        ]

        with capture_logs() as logs:
            classified = classify_fields(pairs)

        assert [f.special_type for f in classified] == [SpecialType.EMAIL]
        summary = {"event": "fields_classified", "log_level": "debug", "total": 3, "changed": 1}
        assert summary in logs

    def test_context_attached_to_run_events(self):
        """Keyword context reaches every event logged while classifying."""
        capture = LogCapture()
        structlog.configure(processors=[_add_run_context, capture])

        classify_fields([(field(), EMAIL_FINGERPRINT)], [explode], run_id="run-9", table="users")

        events = {entry["event"]: entry for entry in capture.entries}
        assert events["classifier_failed"]["run_id"] == "run-9"
        assert events["fields_classified"]["table"] == "users"
        assert _add_run_context(None, "info", {}) == {}
