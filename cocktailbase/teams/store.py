from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone

from .config import DEFAULT_TEAM_CONFIG, TeamConfig
from .models import TeamMember, TeamRole, normalize_email

logger = logging.getLogger(__name__)

_members: dict[str, TeamMember] = {}


class TeamMemberNotFoundError(KeyError):
    """No team member with the requested id."""


def _find_by_email(email: str) -> TeamMember | None:
    for member in _members.values():
        if member.email == email:
            return member
    return None


def _insert(email: str, role: TeamRole) -> TeamMember:
    member = TeamMember(
        id=uuid.uuid4().hex,
        email=email,
        role=role,
        created_at=datetime.now(timezone.utc),
    )
    _members[member.id] = member
    return member


def ensure_owner(config: TeamConfig = DEFAULT_TEAM_CONFIG) -> TeamMember | None:
    """Add the configured owner as admin if the roster does not contain them yet."""
    if not config.owner_email or not config.owner_email.strip():
        return None
    email = normalize_email(config.owner_email)
    existing = _find_by_email(email)
    if existing is not None:
        return existing
    logger.info("Adding team owner %s as admin", email)
    return _insert(email, TeamRole.admin)


def get_members(config: TeamConfig = DEFAULT_TEAM_CONFIG) -> list[TeamMember]:
    """All members, oldest first."""
    ensure_owner(config)
    return sorted(_members.values(), key=lambda m: m.created_at)


def get_member(member_id: str) -> TeamMember:
    try:
        return _members[member_id]
    except KeyError:
        raise TeamMemberNotFoundError(member_id) from None


def add_member(email: str, role: TeamRole = TeamRole.user) -> TeamMember:
    """Insert a member, or change the role of the member with the same e-mail."""
    cleaned = normalize_email(email)
    existing = _find_by_email(cleaned)
    if existing is None:
        return _insert(cleaned, role)
    updated = existing.model_copy(update={"role": role})
    _members[updated.id] = updated
    return updated


def update_member_role(member_id: str, role: TeamRole) -> TeamMember:
    updated = get_member(member_id).model_copy(update={"role": role})
    _members[member_id] = updated
    return updated


def remove_member(member_id: str) -> None:
    get_member(member_id)
    del _members[member_id]


def current_role(email: str | None, config: TeamConfig = DEFAULT_TEAM_CONFIG) -> TeamRole:
    """Role of ``email`` in the roster; unknown addresses are plain users."""
    if not email or not email.strip():
        return TeamRole.user
    ensure_owner(config)
    member = _find_by_email(normalize_email(email))
    return member.role if member is not None else TeamRole.user


def clear_members() -> None:
    _members.clear()
