"""
Access policy table.

Rules are evaluated top to bottom and the first matching rule wins. A
request that matches no rule is denied.

Ownerless public notes are deliberately editable by anonymous callers: a
note created without authentication has no owner to restrict edits to, so
it behaves as a shared public bulletin on the anonymous-note endpoints.
Authenticated users reach those notes through the private endpoints, where
they may read but not modify them.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from modules.notes.models import Note, Visibility

from .models import DenyReason, Operation, TrustTier


class Effect(str, Enum):
    ALLOW = "allow"
    DENY = "deny"


class NoteState(str, Enum):
    """Target-note conditions a rule can match on."""

    ANY = "any"
    OWNERLESS = "ownerless"
    OWNERLESS_PUBLIC = "ownerless_public"
    OWNED = "owned"
    OWNED_BY_CALLER = "owned_by_caller"
    OWNED_BY_OTHER = "owned_by_other"

    def matches(self, note: Note, caller_id: Optional[int]) -> bool:
        if self is NoteState.ANY:
            return True
        if self is NoteState.OWNERLESS:
            return note.owner_id is None
        if self is NoteState.OWNERLESS_PUBLIC:
            return note.owner_id is None and note.visibility is Visibility.PUBLIC
        if self is NoteState.OWNED:
            return note.owner_id is not None
        if self is NoteState.OWNED_BY_CALLER:
            return caller_id is not None and note.owner_id == caller_id
        # OWNED_BY_OTHER
        return note.owner_id is not None and note.owner_id != caller_id


ALL_OPERATIONS = frozenset({Operation.READ, Operation.UPDATE, Operation.DELETE})
MUTATIONS = frozenset({Operation.UPDATE, Operation.DELETE})
READ_ONLY = frozenset({Operation.READ})


@dataclass(frozen=True)
class PolicyRule:
    """One row of the policy table."""

    tier: TrustTier
    target: NoteState
    operations: frozenset[Operation]
    effect: Effect
    reason: Optional[DenyReason] = None

    def applies(
        self,
        tier: TrustTier,
        note: Note,
        operation: Operation,
        caller_id: Optional[int],
    ) -> bool:
        return (
            self.tier is tier
            and operation in self.operations
            and self.target.matches(note, caller_id)
        )


@dataclass(frozen=True)
class CreateRule:
    """One row of the create policy."""

    tier: TrustTier
    visibilities: frozenset[Visibility]
    effect: Effect
    reason: Optional[DenyReason] = None


@dataclass(frozen=True)
class PolicyOutcome:
    allowed: bool
    reason: Optional[DenyReason] = None


ACCESS_POLICY: tuple[PolicyRule, ...] = (
    PolicyRule(TrustTier.ADMIN, NoteState.ANY, ALL_OPERATIONS, Effect.ALLOW),
    PolicyRule(TrustTier.ANONYMOUS, NoteState.OWNERLESS_PUBLIC, READ_ONLY, Effect.ALLOW),
    PolicyRule(TrustTier.ANONYMOUS, NoteState.OWNERLESS_PUBLIC, MUTATIONS, Effect.ALLOW),
    PolicyRule(
        TrustTier.ANONYMOUS, NoteState.OWNED, ALL_OPERATIONS, Effect.DENY, DenyReason.NOT_FOUND
    ),
    PolicyRule(TrustTier.USER, NoteState.OWNED_BY_CALLER, ALL_OPERATIONS, Effect.ALLOW),
    PolicyRule(
        TrustTier.USER, NoteState.OWNED_BY_OTHER, ALL_OPERATIONS, Effect.DENY, DenyReason.FORBIDDEN
    ),
    PolicyRule(TrustTier.USER, NoteState.OWNERLESS, MUTATIONS, Effect.DENY, DenyReason.FORBIDDEN),
    PolicyRule(TrustTier.USER, NoteState.OWNERLESS_PUBLIC, READ_ONLY, Effect.ALLOW),
)

CREATE_POLICY: tuple[CreateRule, ...] = (
    CreateRule(TrustTier.ANONYMOUS, frozenset({Visibility.PUBLIC}), Effect.ALLOW),
    CreateRule(
        TrustTier.ANONYMOUS,
        frozenset({Visibility.PRIVATE}),
        Effect.DENY,
        DenyReason.UNAUTHENTICATED,
    ),
    CreateRule(TrustTier.USER, frozenset(Visibility), Effect.ALLOW),
    CreateRule(TrustTier.ADMIN, frozenset({Visibility.PUBLIC}), Effect.ALLOW),
    CreateRule(
        TrustTier.ADMIN, frozenset({Visibility.PRIVATE}), Effect.DENY, DenyReason.FORBIDDEN
    ),
)

DEFAULT_DENY = DenyReason.FORBIDDEN


def evaluate(
    tier: TrustTier,
    note: Note,
    operation: Operation,
    caller_id: Optional[int] = None,
    rules: tuple[PolicyRule, ...] = ACCESS_POLICY,
) -> PolicyOutcome:
    """
    Evaluate the policy table for an existing note.

    Args:
        tier: The caller's trust tier.
        note: Snapshot of the target note.
        operation: READ, UPDATE or DELETE.
        caller_id: Local user ID for authenticated callers.

    Returns:
        PolicyOutcome of the first matching rule, or a default deny.
    """
    for rule in rules:
        if rule.applies(tier, note, operation, caller_id):
            if rule.effect is Effect.ALLOW:
                return PolicyOutcome(allowed=True)
            return PolicyOutcome(allowed=False, reason=rule.reason or DEFAULT_DENY)
    return PolicyOutcome(allowed=False, reason=DEFAULT_DENY)


def evaluate_create(
    tier: TrustTier,
    visibility: Visibility,
    rules: tuple[CreateRule, ...] = CREATE_POLICY,
) -> PolicyOutcome:
    """Evaluate the create policy for a new note with the given visibility."""
    for rule in rules:
        if rule.tier is tier and visibility in rule.visibilities:
            if rule.effect is Effect.ALLOW:
                return PolicyOutcome(allowed=True)
            return PolicyOutcome(allowed=False, reason=rule.reason or DEFAULT_DENY)
    return PolicyOutcome(allowed=False, reason=DEFAULT_DENY)
