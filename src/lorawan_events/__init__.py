"""Classification and display-field extraction for LoRaWAN stack events."""

from .classifier import classify
from .dispatch import render_event, render_events
from .models import Classification, EventCategory, NormalizedField, RenderedEvent, Scope

__all__ = [
    "Classification",
    "EventCategory",
    "NormalizedField",
    "RenderedEvent",
    "Scope",
    "classify",
    "render_event",
    "render_events",
]
