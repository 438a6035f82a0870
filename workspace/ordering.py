# workspace/ordering.py
"""
Position bookkeeping shared by boards, columns and tasks.

Positions are unique per parent at the database level, so a reorder first
parks every listed row on a negative temporary position and only then writes
the final indexes. Both phases run inside one transaction with the sibling
rows locked.
"""
import logging

from django.db import transaction
from django.db.models import Max
from django.utils import timezone
from rest_framework.exceptions import ValidationError

logger = logging.getLogger(__name__)


def next_position(siblings):
    """Max position among `siblings` plus one, or 0 for an empty parent."""
    top = siblings.aggregate(top=Max('position'))['top']
    return 0 if top is None else top + 1


def apply_order(siblings, ordered_ids, field='ids'):
    """
    Set position = index in `ordered_ids` for every listed row of `siblings`.

    Ids that are duplicated or do not belong to `siblings` are rejected with a
    ValidationError before anything is written. Unlisted rows keep their
    positions.
    """
    ordered_ids = list(ordered_ids)
    if len(set(ordered_ids)) != len(ordered_ids):
        raise ValidationError({field: ['Duplicate ids are not allowed.']})

    model = siblings.model
    with transaction.atomic():
        known = set(siblings.select_for_update().values_list('id', flat=True))
        unknown = [str(pk) for pk in ordered_ids if pk not in known]
        if unknown:
            logger.warning(f"Reorder of {model.__name__} rejected, foreign ids {unknown} at {timezone.now()}")
            raise ValidationError({field: [f"Ids do not belong to this parent: {', '.join(unknown)}"]})

        for index, pk in enumerate(ordered_ids):
            model.objects.filter(pk=pk).update(position=-(index + 1))
        for index, pk in enumerate(ordered_ids):
            model.objects.filter(pk=pk).update(position=index)

    logger.info(f"Reordered {len(ordered_ids)} {model.__name__} rows at {timezone.now()}")


def place(instance, siblings, position):
    """
    Move `instance` to `position` among `siblings` (which include it) and
    renumber the parent contiguously. Out-of-range positions are clamped.
    """
    ordered = [pk for pk in siblings.order_by('position').values_list('id', flat=True) if pk != instance.pk]
    position = max(0, min(position, len(ordered)))
    ordered.insert(position, instance.pk)
    apply_order(siblings, ordered)
    instance.position = position
