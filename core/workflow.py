"""Lifecycle helpers shared by every trade document.

Each document model carries its own allow-lists (`TRANSITIONS`,
`REVISABLE_FROM`); the functions here validate an action against those
lists, stamp the approval/rejection/cancellation metadata, save, and record
an audit event.
"""
from __future__ import annotations

import logging

from django.db import transaction
from django.utils import timezone

from core.audit import log_conversion, log_event, log_status_change
from core.models import AuditEvent


logger = logging.getLogger(__name__)

REASON_REQUIRED = frozenset({"reject", "cancel"})


class WorkflowError(ValueError):
	"""Raised when a lifecycle action is not allowed for a document's current state."""


def _label(doc) -> str:
	return f"{doc.DOCUMENT_TITLE} {doc.number}".strip()


def _actor_or_none(actor):
	return actor if getattr(actor, "is_authenticated", False) else None


def ensure_status(doc, allowed, *, action: str) -> None:
	if doc.status not in allowed:
		raise WorkflowError(
			f"Cannot {action.replace('_', ' ')} {_label(doc)} while it is {doc.get_status_display()}."
		)


def _passes_checks(doc, action: str) -> bool:
	try:
		doc.check_transition(action)
	except WorkflowError:
		return False
	return True


def ensure_items_editable(doc) -> None:
	if doc.status in doc.LOCKED_STATUSES:
		raise WorkflowError(
			f"{_label(doc)} is {doc.get_status_display().lower()}; its line items can no longer be changed."
		)


def allowed_actions(doc) -> list[str]:
	"""Actions the document currently permits (used by the API for UI hints)."""
	candidates = [action for action, (sources, _) in doc.TRANSITIONS.items() if doc.status in sources]
	if doc.status in doc.REVISABLE_FROM:
		candidates.append("revise")
	if doc.status in doc.CONVERTIBLE_FROM:
		candidates.append("convert")
	if doc.status in doc.SHIPPABLE_FROM:
		candidates.append("create-shipping-bill")
	candidates += doc.EXTRA_ACTIONS
	return [action for action in candidates if _passes_checks(doc, action)]


def action_for_status(doc, status: str) -> str:
	"""Return the action that moves `doc` from its current status to `status`."""
	for action, (sources, target) in doc.TRANSITIONS.items():
		if target == status and doc.status in sources:
			return action
	raise WorkflowError(f"Cannot move {_label(doc)} from {doc.status} to {status}.")


def transition(doc, action: str, *, actor=None, reason: str = ""):
	rule = doc.TRANSITIONS.get(action)
	if rule is None:
		raise WorkflowError(f"'{action}' is not a valid action for a {doc.DOCUMENT_TITLE.lower()}.")
	sources, target = rule
	ensure_status(doc, sources, action=action)
	doc.check_transition(action)

	reason = (reason or "").strip()
	if action in REASON_REQUIRED and not reason:
		raise WorkflowError(f"Please provide a reason to {action} {_label(doc)}.")

	actor_obj = _actor_or_none(actor)
	now = timezone.now()
	old_status = doc.status
	doc.status = target
	fields = ["status", "updated_at"]

	if action == "approve":
		doc.approved_at = now
		doc.approved_by = actor_obj
		fields += ["approved_at", "approved_by"]
	elif action == "reject":
		doc.rejected_at = now
		doc.rejected_by = actor_obj
		doc.rejection_reason = reason
		fields += ["rejected_at", "rejected_by", "rejection_reason"]
	elif action == "cancel":
		doc.cancelled_at = now
		doc.cancelled_by = actor_obj
		doc.cancel_reason = reason
		fields += ["cancelled_at", "cancelled_by", "cancel_reason"]
	elif action == "submit":
		# A resubmission starts a fresh approval round.
		doc.approved_at = None
		doc.approved_by = None
		doc.rejected_at = None
		doc.rejected_by = None
		doc.rejection_reason = ""
		fields += ["approved_at", "approved_by", "rejected_at", "rejected_by", "rejection_reason"]

	fields += doc.after_transition(action, actor=actor_obj)
	doc.save(update_fields=list(dict.fromkeys(fields)))

	log_status_change(entity=doc, actor=actor, old_status=old_status, new_status=doc.status, reason=reason)
	logger.info("%s: %s -> %s (%s)", _label(doc), old_status, doc.status, action)
	return doc


def transition_to(doc, status: str, *, actor=None, reason: str = ""):
	return transition(doc, action_for_status(doc, status), actor=actor, reason=reason)


def clear_approval_metadata(doc) -> None:
	"""Reset approval/rejection/cancellation stamps on an unsaved copy of `doc`."""
	doc.approved_at = None
	doc.approved_by = None
	doc.rejected_at = None
	doc.rejected_by = None
	doc.rejection_reason = ""
	doc.cancelled_at = None
	doc.cancelled_by = None
	doc.cancel_reason = ""
	doc.reset_for_revision()


def revise(doc, *, actor=None):
	"""Create the next version of `doc` and mark the current one as revised.

	The new version keeps the document number, points back at its predecessor
	through `revised_from`, starts in `REVISION_STATUS` with cleared approval
	metadata, and carries a copy of every line item.
	"""
	if doc.status not in doc.REVISABLE_FROM:
		raise WorkflowError(f"Cannot revise {_label(doc)} while it is {doc.get_status_display()}.")
	doc.check_transition("revise")

	actor_obj = _actor_or_none(actor)
	model = doc.__class__
	with transaction.atomic():
		new = model.objects.get(pk=doc.pk)
		new.pk = None
		new.id = None
		new._state.adding = True
		new.version = (doc.version or 1) + 1
		new.status = doc.REVISION_STATUS
		new.revised_from = doc
		new.created_by = actor_obj or doc.created_by
		clear_approval_metadata(new)
		new.save()
		doc.copy_items_to(new)

		old_status = doc.status
		doc.status = doc.REVISED_STATUS
		doc.save(update_fields=["status", "updated_at"])

	log_event(
		action=AuditEvent.Action.DOCUMENT_REVISED,
		actor=actor,
		entity=new,
		summary=f"{doc.number}: V{doc.version} -> V{new.version}",
		meta={"from_id": doc.pk, "from_status": old_status, "version": new.version},
	)
	logger.info("%s revised to version %s", _label(doc), new.version)
	return new


def mark_converted(source, *, target, actor=None) -> None:
	"""Close `source` after `target` was created from it."""
	old_status = source.status
	source.status = source.CONVERTED_STATUS
	source.save(update_fields=["status", "updated_at"])
	log_conversion(source=source, target=target, actor=actor)
	logger.info("%s converted (%s -> %s) into %s", _label(source), old_status, source.status, _label(target))
