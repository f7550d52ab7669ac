"""
Shift change notifications.

Every save or delete of a ``Shift`` sends ``shift_changed`` with the
calendar dates the change touches (old and new placement). Receivers
must be idempotent: redundant deliveries are expected.
"""

import logging

from django.db.models.signals import post_delete, post_save, pre_save
from django.dispatch import Signal, receiver

from .models import Shift
from .services import persist_shift_patch
from .sync import apply_patch, sync_derived_fields

logger = logging.getLogger(__name__)

# kwargs: shift, employee_id, affected_dates, created, deleted, origin
# (origin is the object whose delete cascaded here, deletes only)
shift_changed = Signal()


def _placement(shift):
    dates = {shift.date}
    if shift.end_date:
        dates.add(shift.end_date)
    return dates


@receiver(pre_save, sender=Shift)
def remember_previous_placement(sender, instance, **kwargs):
    """Keep the pre-edit dates so a moved shift also refreshes its old week"""
    if not instance.pk:
        return
    previous = (
        Shift.objects.filter(pk=instance.pk).values("date", "end_date").first()
    )
    if previous is None:
        return
    instance._previous_dates = {
        value for value in (previous["date"], previous["end_date"]) if value
    }


@receiver(post_save, sender=Shift)
def announce_saved_shift(sender, instance, created, **kwargs):
    affected = _placement(instance) | getattr(instance, "_previous_dates", set())
    shift_changed.send(
        sender=Shift,
        shift=instance,
        employee_id=instance.employee_id,
        affected_dates=sorted(affected),
        created=created,
        deleted=False,
    )


@receiver(post_delete, sender=Shift)
def announce_deleted_shift(sender, instance, origin=None, **kwargs):
    shift_changed.send(
        sender=Shift,
        shift=instance,
        employee_id=instance.employee_id,
        affected_dates=sorted(_placement(instance)),
        created=False,
        deleted=True,
        origin=origin,
    )


@receiver(shift_changed)
def sync_shift_derived_fields(sender, shift, deleted=False, **kwargs):
    """Bring worked hours and status in line with the check events"""
    if deleted:
        return
    patch = sync_derived_fields(shift)
    if patch is None:
        return
    persist_shift_patch(shift.pk, patch)
    apply_patch(shift, patch)
