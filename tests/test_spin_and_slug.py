"""
Tests for winner selection and wheel slugs
"""

import random

from app.client.spin import active_entries, pick_winner
from app.utils.slug import assign_slugs, slug_for, slugify

def make_wheel(*disabled_flags):
    return {
        "id": 1,
        "entries": [{"id": i, "disabled": flag} for i, flag in enumerate(disabled_flags, start=1)]
    }

def test_pick_winner_only_returns_active_entries():
    wheel = make_wheel(True, False, True, False)
    rng = random.Random(42)

    winners = {pick_winner(wheel, rng)["id"] for _ in range(200)}
    assert winners == {2, 4}

def test_pick_winner_without_active_entries():
    assert pick_winner(make_wheel(True, True)) is None
    assert pick_winner({"entries": []}) is None
    assert pick_winner({}) is None

def test_active_entries_treats_missing_flag_as_enabled():
    assert [e["id"] for e in active_entries({"entries": [{"id": 1}, {"id": 2, "disabled": True}]})] == [1]

def test_slugify():
    assert slugify("Launch Celebration") == "launch-celebration"
    assert slugify("  --Q3 Prizes!!  ") == "q3-prizes"
    assert slugify("") == ""
    assert slugify(None) == ""

def test_slug_for_falls_back_to_id():
    assert slug_for(7, "!!!") == "wheel-7"
    assert slug_for(7, "Draw", used=["draw"]) == "draw-7"

def test_assign_slugs_keeps_first_plain():
    assert assign_slugs([(1, "Draw"), (2, "draw"), (3, "Other")]) == ["draw", "draw-2", "other"]
