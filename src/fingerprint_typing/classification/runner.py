"""Run a chain of classifiers over a field.

Each classifier sees the output of the one before it. The field as it stood
when the chain started is attached as ``previous_snapshot``, so a later
classifier may refine a type an earlier one set in the same pass while a type
set before the pass (by a user) stays protected.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any, Protocol

from fingerprint_typing.classification.fingerprint import infer_special_type
from fingerprint_typing.classification.models import FieldMetadata, Fingerprint
from fingerprint_typing.core.logging import get_logger, log_context

logger = get_logger(__name__)


class Classifier(Protocol):
    """Returns an updated copy of the field, or None for no change."""

    def __call__(
        self, field: FieldMetadata, fingerprint: Fingerprint | None
    ) -> FieldMetadata | None: ...


DEFAULT_CLASSIFIERS: tuple[Classifier, ...] = (infer_special_type,)


def classify_field(
    field: FieldMetadata,
    fingerprint: Fingerprint | None,
    classifiers: Sequence[Classifier] | None = None,
) -> FieldMetadata | None:
    """Run classifiers in order, feeding each the latest version of the field.

    A classifier that raises is logged and skipped.

    Args:
        field: Field as it stands before this analysis pass
        fingerprint: Fingerprint computed for the field, if any
        classifiers: Classifiers to run (defaults to DEFAULT_CLASSIFIERS)

    Returns:
        The classified field, carrying the caller's previous_snapshot, or None
        if no classifier changed it
    """
    if classifiers is None:
        classifiers = DEFAULT_CLASSIFIERS

    original_snapshot = field.previous_snapshot
    working = field.with_snapshot(field.with_snapshot(None))

    for classifier in classifiers:
        try:
            updated = classifier(working, fingerprint)
        except Exception as e:
            logger.warning(
                "classifier_failed",
                field=field.name_for_logging(),
                classifier=getattr(classifier, "__name__", repr(classifier)),
                error=str(e),
            )
            continue
        if updated is not None:
            working = updated

    result = working.with_snapshot(original_snapshot)
    if result.model_dump() == field.model_dump():
        return None
    return result


def classify_fields(
    fields: Iterable[tuple[FieldMetadata, Fingerprint | None]],
    classifiers: Sequence[Classifier] | None = None,
    **context: Any,
) -> list[FieldMetadata]:
    """Classify (field, fingerprint) pairs and return only the fields that changed.

    Args:
        fields: Pairs of field and its fingerprint
        classifiers: Classifiers to run (defaults to DEFAULT_CLASSIFIERS)
        **context: Values attached to every event logged during the run
            (e.g. run_id, table)

    Returns:
        The fields that changed, in input order
    """
    classified: list[FieldMetadata] = []
    total = 0
    with log_context(**context):
        for field, fingerprint in fields:
            total += 1
            updated = classify_field(field, fingerprint, classifiers)
            if updated is not None:
                classified.append(updated)

        logger.debug("fields_classified", total=total, changed=len(classified))
    return classified
