"""Intake types as data.

Each public form is one ``IntakeDefinition``; routes, validation, storage and
moderation are all parameterized by it.
"""
from dataclasses import dataclass, field
from html import escape
from typing import Callable, Dict, Optional, Tuple, Type

from pydantic import BaseModel

from leadintake.core.exceptions import NotFoundError
from leadintake.models.intake import CourierApplication, WaitlistEntry
from leadintake.schemas.intake import (
    CourierApplicationOut,
    CourierIn,
    IntakeRecordOut,
    WaitlistEntryOut,
    WaitlistIn,
)

# (record, site_name) -> (subject, html)
ConfirmationBuilder = Callable[[dict, str], Tuple[str, str]]


@dataclass(frozen=True)
class IntakeDefinition:
    name: str
    model: type
    schema: Type[BaseModel]
    out_schema: Type[IntakeRecordOut]
    aliases: Tuple[str, ...] = field(default_factory=tuple)
    confirmation: Optional[ConfirmationBuilder] = None


def _waitlist_confirmation(record: dict, site_name: str) -> Tuple[str, str]:
    subject = f"Welcome to {site_name} 🚀"
    html = f"<p>Hi {escape(record['name'])}, thanks for joining the {escape(site_name)} waitlist!</p>"
    return subject, html


WAITLIST = IntakeDefinition(
    name="waitlist",
    model=WaitlistEntry,
    schema=WaitlistIn,
    out_schema=WaitlistEntryOut,
    confirmation=_waitlist_confirmation,
)

COURIER = IntakeDefinition(
    name="courier",
    model=CourierApplication,
    schema=CourierIn,
    out_schema=CourierApplicationOut,
    aliases=("couriers",),
)

INTAKE_TYPES: Dict[str, IntakeDefinition] = {WAITLIST.name: WAITLIST, COURIER.name: COURIER}


def resolve_intake_type(name: str) -> IntakeDefinition:
    key = (name or "").strip().lower()
    for definition in INTAKE_TYPES.values():
        if key == definition.name or key in definition.aliases:
            return definition
    raise NotFoundError("Unknown intake type", details=name)
