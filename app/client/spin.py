"""
Winner selection for a spin
"""

import random
from typing import Any, Dict, List, Optional


def active_entries(wheel: Dict[str, Any]) -> List[Dict[str, Any]]:
    return [entry for entry in wheel.get("entries") or [] if not entry.get("disabled")]


def pick_winner(wheel: Dict[str, Any], rng: Optional[random.Random] = None) -> Optional[Dict[str, Any]]:
    """Uniformly random enabled entry of a wheel payload, ``None`` if there is none"""
    candidates = active_entries(wheel)
    if not candidates:
        return None
    return (rng or random).choice(candidates)
