"""
core.domain.transactions — Helpers for safe read-modify-write blocks.

Provides utilities that wrap ``transaction.atomic`` and
``select_for_update`` into reusable patterns so that every app's
service layer follows the same concurrency-safe approach.

Usage::

    from django.db import transaction
    from core.domain.transactions import lock_for_update

    with transaction.atomic():
        project = lock_for_update(Project, project_id)
        ...

    # Flip a boolean flag exactly once:
    from core.domain.transactions import atomic_set_flag

    project = atomic_set_flag(
        model_class=Project,
        pk=project_id,
        field="reward_distributed",
        conflict_message="Reward already distributed.",
    )
"""

from __future__ import annotations

from typing import Any, TypeVar

from django.db import models, transaction

from core.domain.exceptions import Conflict, NotFound

M = TypeVar("M", bound=models.Model)


def lock_for_update(model_class: type[M], pk: Any) -> M:
    """
    Acquire a row-level lock on the given model instance.

    Convenience wrapper around ``select_for_update().get(pk=pk)``
    that must be called inside an ``atomic()`` block.

    Args:
        model_class: The Django model class.
        pk:          Primary key value.

    Returns:
        The locked model instance.

    Raises:
        NotFound: If no row with that PK exists.
    """
    try:
        return model_class.objects.select_for_update().get(pk=pk)
    except model_class.DoesNotExist:
        raise NotFound(f"{model_class.__name__} with pk={pk} does not exist.")


def atomic_set_flag(
    *,
    model_class: type[M],
    pk: Any,
    field: str,
    conflict_message: str | None = None,
) -> M:
    """
    Atomically flip a boolean field from ``False`` to ``True``.

    Steps performed inside ``transaction.atomic()``:
        1. Lock the row with ``select_for_update()``.
        2. Raise ``Conflict`` if the flag is already set.
        3. Set the flag and save (``updated_at`` included).

    Raises:
        NotFound: If the row does not exist.
        Conflict: If the flag was already ``True``.
    """
    with transaction.atomic():
        locked = lock_for_update(model_class, pk)
        if getattr(locked, field):
            raise Conflict(
                conflict_message
                or f"{model_class.__name__} pk={pk} already has {field} set."
            )
        setattr(locked, field, True)
        locked.save(update_fields=[field, "updated_at"])
    return locked
