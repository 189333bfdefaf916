"""
Known revenue-center identities and how the dashboard presents them.

Center names stay free-form strings in the database; anything that isn't one
of the identities below gets FALLBACK_DISPLAY.
"""
from typing import Optional

from django.core.exceptions import ImproperlyConfigured
from django.db import models


class CenterIdentity(models.TextChoices):
    DINING = 'dining', 'Dining Room'
    LOUNGE = 'lounge', 'Lounge'
    PATIO = 'patio', 'Patio'


CENTER_DISPLAY = {
    CenterIdentity.DINING: {'color': 'emerald', 'icon': '🍽️'},
    CenterIdentity.LOUNGE: {'color': 'purple', 'icon': '🍷'},
    CenterIdentity.PATIO: {'color': 'orange', 'icon': '🌿'},
}

FALLBACK_DISPLAY = {'color': 'blue', 'icon': '🏢'}

REQUIRED_DISPLAY_KEYS = ('color', 'icon')


def identify_center(name) -> Optional[CenterIdentity]:
    try:
        return CenterIdentity(str(name).strip().lower())
    except ValueError:
        return None


def center_display(name) -> dict:
    """Display config for a center name, with the fallback for unknown names."""
    identity = identify_center(name)
    if identity is None:
        return {**FALLBACK_DISPLAY, 'label': str(name).strip().title(), 'known': False}
    return {**CENTER_DISPLAY[identity], 'label': identity.label, 'known': True}


def validate_center_display(display=None):
    """Every identity needs a complete display entry; raise at startup if not."""
    display = CENTER_DISPLAY if display is None else display
    missing = [identity.value for identity in CenterIdentity if identity not in display]
    if missing:
        raise ImproperlyConfigured(f"No display config for revenue centers: {', '.join(missing)}")
    for identity, config in display.items():
        absent = [key for key in REQUIRED_DISPLAY_KEYS if not config.get(key)]
        if absent:
            raise ImproperlyConfigured(
                f"Display config for '{identity}' is missing: {', '.join(absent)}"
            )
