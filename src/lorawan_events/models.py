from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class Scope(str, Enum):
    DEVICE = "device"
    GATEWAY = "gateway"
    APPLICATION = "application"
    ORGANIZATION = "organization"


class EventCategory(str, Enum):
    CRUD = "crud"
    DEVICE_JOIN = "device_join"
    DEVICE_DOWNLINK = "device_downlink"
    DEVICE_UPLINK = "device_uplink"
    DEVICE_NS_UTILITY = "device_ns_utility"
    GATEWAY_UPLINK = "gateway_uplink"
    GATEWAY_DOWNLINK = "gateway_downlink"
    GATEWAY_CONNECTION = "gateway_connection"
    UNKNOWN = "unknown"


FieldKind = Literal["text", "byte", "code"]


class NormalizedField(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    value: Any
    kind: FieldKind = "text"
    sensitive: bool = False


class Classification(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: EventCategory
    subtype: Optional[str] = None
    is_error: bool = False


class BuiltFields(BaseModel):
    """What a field builder contributes to a rendered event."""

    model_config = ConfigDict(frozen=True)

    fields: List[NormalizedField] = Field(default_factory=list)
    icon: Optional[str] = None
    identity_id: Optional[str] = None


class RenderedEvent(BaseModel):
    name: Optional[str] = None
    time: Optional[str] = None
    category: EventCategory
    subtype: Optional[str] = None
    is_error: bool = False
    identity_id: Optional[str] = None
    icon: Optional[str] = None
    fields: List[NormalizedField] = Field(default_factory=list)
    details: Optional[Dict[str, Any]] = None
