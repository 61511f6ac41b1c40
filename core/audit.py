"""Audit trail helpers.

Every lifecycle change, conversion, upload and payment ends up as one
`AuditEvent` row. Writing the row is best effort: a failure is logged and
the caller carries on.
"""
from __future__ import annotations

import logging
from typing import Any

from django.db import transaction

from core.models import AuditEvent


logger = logging.getLogger(__name__)


def _entity_ref(entity) -> tuple[str, int | None]:
	if entity is None:
		return "", None
	return entity._meta.model_name, entity.pk


def log_event(*, action: str, actor, entity=None, summary: str = "", meta: dict[str, Any] | None = None) -> None:
	entity_type, entity_id = _entity_ref(entity)
	try:
		with transaction.atomic():
			AuditEvent.objects.create(
				action=action,
				actor=actor if getattr(actor, "is_authenticated", False) else None,
				entity_type=entity_type,
				entity_id=entity_id,
				summary=summary[:255],
				meta=meta or {},
			)
	except Exception:
		logger.exception("Could not record %s audit event for %s #%s", action, entity_type or "-", entity_id)


def log_status_change(*, entity, actor, old_status: str, new_status: str, reason: str = "") -> None:
	meta: dict[str, Any] = {"from": old_status, "to": new_status, "version": getattr(entity, "version", None)}
	if reason:
		meta["reason"] = reason
	log_event(
		action=AuditEvent.Action.STATUS_CHANGED,
		actor=actor,
		entity=entity,
		summary=f"{entity}: {old_status} -> {new_status}",
		meta=meta,
	)


def log_conversion(*, source, target, actor) -> None:
	log_event(
		action=AuditEvent.Action.DOCUMENT_CONVERTED,
		actor=actor,
		entity=source,
		summary=f"{source} -> {target}",
		meta={"target_type": target._meta.model_name, "target_id": target.pk},
	)
