"""
Test: Snapshot & Velocity Engine
================================
"""

from datetime import date

import pytest
from sqlalchemy import select

from feedgraph.crud.feeds import add_feed
from feedgraph.crud.mentions import add_mention, live_mention_counts
from feedgraph.crud.snapshots import (
    get_rising_mentions,
    get_snapshot_dates,
    prune_snapshots,
    snapshot_counts,
    take_snapshot,
)
from feedgraph.models.mention_snapshot import MentionSnapshot

D1 = date(2026, 1, 1)
D2 = date(2026, 1, 8)
D3 = date(2026, 1, 15)


@pytest.fixture
def feed(db):
    return add_feed(db, url="https://a.example.com/", title="A")


def _mentions(db, feed, name, count, start=0, entity_type="PERSON"):
    for i in range(start, start + count):
        add_mention(
            db,
            source_feed_id=feed,
            name=name,
            entity_type=entity_type,
            post_url=f"https://a.example.com/{name}/{i}",
        )


def test_take_snapshot_counts_per_name_and_type(db, feed):
    _mentions(db, feed, "Simon Willison", 3)
    _mentions(db, feed, "Hamel Husain", 1)
    _mentions(db, feed, "Anthropic", 2, entity_type="ORG")

    assert take_snapshot(db, D1) == 3
    assert snapshot_counts(db, "PERSON", D1) == {"Simon Willison": 3, "Hamel Husain": 1}
    assert snapshot_counts(db, "ORG", D1) == {"Anthropic": 2}


def test_take_snapshot_without_mentions(db):
    assert take_snapshot(db, D1) == 0
    assert get_snapshot_dates(db) == []


def test_retaking_same_date_replaces_count(db, feed):
    _mentions(db, feed, "Simon Willison", 2)
    take_snapshot(db, D1)
    _mentions(db, feed, "Simon Willison", 3, start=2)
    take_snapshot(db, D1)

    rows = db.execute(
        select(MentionSnapshot).where(MentionSnapshot.name == "Simon Willison")
    ).scalars().all()
    assert len(rows) == 1
    assert rows[0].mention_count == 5
    assert rows[0].snapshot_date == D1


def test_snapshot_dates_most_recent_first(db, feed):
    _mentions(db, feed, "Simon Willison", 1)
    for d in (D2, D1, D3):
        take_snapshot(db, d)

    assert get_snapshot_dates(db) == [D3, D2, D1]


def test_prune_boundary(db, feed):
    _mentions(db, feed, "Simon Willison", 1)
    _mentions(db, feed, "Hamel Husain", 1)
    for d in (D1, D2, D3):
        take_snapshot(db, d)

    assert prune_snapshots(db, D2) == 2
    assert get_snapshot_dates(db) == [D3, D2]
    # live facts untouched
    assert live_mention_counts(db, "PERSON") == {"Simon Willison": 1, "Hamel Husain": 1}
    assert prune_snapshots(db, D1) == 0


def test_rising_between_snapshots(db, feed):
    _mentions(db, feed, "Ada", 3)
    _mentions(db, feed, "Bob", 4)
    _mentions(db, feed, "Ed", 4)
    take_snapshot(db, D1)

    _mentions(db, feed, "Ada", 5, start=3)   # 3 -> 8 hot
    _mentions(db, feed, "Bob", 3, start=4)   # 4 -> 7 rising
    _mentions(db, feed, "Ed", 1, start=4)    # 4 -> 5 flat
    _mentions(db, feed, "Cy", 4)             # 0 -> 4 new
    _mentions(db, feed, "Di", 1)             # 0 -> 1 too few
    take_snapshot(db, D2)

    ranked = get_rising_mentions(db, "PERSON", D2, D1, 10)

    assert [(r.name, r.status, r.previous_count, r.current_count) for r in ranked] == [
        ("Cy", "new", 0, 4),
        ("Ada", "hot", 3, 8),
        ("Bob", "rising", 4, 7),
    ]
    assert ranked[1].velocity == pytest.approx(5 / 3)


def test_rising_falls_back_to_live_counts(db, feed):
    _mentions(db, feed, "Ada", 2)
    take_snapshot(db, D1)
    _mentions(db, feed, "Ada", 4, start=2)
    _mentions(db, feed, "Cy", 3)

    # no snapshot for D2 yet
    ranked = get_rising_mentions(db, "PERSON", D2, D1, 10)

    live = live_mention_counts(db, "PERSON")
    assert {r.name: r.current_count for r in ranked} == live
    assert {r.name: r.status for r in ranked} == {"Ada": "hot", "Cy": "new"}


def test_rising_without_previous_snapshot_treats_all_as_new(db, feed):
    _mentions(db, feed, "Ada", 2)
    _mentions(db, feed, "Bob", 1)
    take_snapshot(db, D2)

    ranked = get_rising_mentions(db, "PERSON", D2, D1, 10)

    assert [(r.name, r.status, r.velocity) for r in ranked] == [("Ada", "new", 2.0)]


def test_rising_is_scoped_to_entity_type(db, feed):
    _mentions(db, feed, "Anthropic", 3, entity_type="ORG")
    take_snapshot(db, D1)

    assert get_rising_mentions(db, "PERSON", D1, D2, 10) == []
    assert [r.name for r in get_rising_mentions(db, "ORG", D1, D2, 10)] == ["Anthropic"]
