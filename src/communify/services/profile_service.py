"""Helpers for reading and editing user profiles."""
from __future__ import annotations

from sqlalchemy.orm import Session

from communify.models import User
from communify.schemas.user import ProfileUpdateRequest
from communify.services.identity import UserIdentity

__all__ = [
    "get_or_create_profile",
    "normalize_allergies",
    "update_profile",
    "reset_onboarding",
]


def get_or_create_profile(db: Session, identity: UserIdentity) -> User:
    """Return the caller's profile, creating an empty one on first access."""
    user = db.get(User, identity.email)
    if user is None:
        user = User(email=identity.email, full_name=identity.full_name, allergies=[])
        db.add(user)
        db.commit()
        db.refresh(user)
    return user


def normalize_allergies(allergies: list[str]) -> list[str]:
    """Trim entries, drop blanks and duplicates, keep first-seen order."""
    cleaned = (item.strip() for item in allergies)
    return list(dict.fromkeys(item for item in cleaned if item))


def update_profile(db: Session, user: User, update_data: ProfileUpdateRequest) -> User:
    """Apply partial updates to an existing profile."""
    update_dict = update_data.model_dump(exclude_unset=True)
    if update_dict.get("allergies") is not None:
        update_dict["allergies"] = normalize_allergies(update_dict["allergies"])
    for key, value in update_dict.items():
        setattr(user, key, value)

    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def reset_onboarding(db: Session, user: User) -> User:
    """Clear the fields collected during onboarding."""
    user.phone_number = None
    user.allergies = []
    user.notes = None
    db.add(user)
    db.commit()
    db.refresh(user)
    return user
