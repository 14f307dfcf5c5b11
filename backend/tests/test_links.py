"""
Test: Link Graph
================
"""

from datetime import timedelta

from sqlalchemy import func, select

from feedgraph.crud.feeds import add_feed, get_feed
from feedgraph.crud.links import (
    add_link,
    get_inbound_links,
    get_most_linked,
    get_new_feeds,
    get_outbound_links,
)
from feedgraph.models.base import utcnow
from feedgraph.models.link import Link


def _feeds(db, *names):
    return [add_feed(db, url=f"https://{n}.example.com/", title=n) for n in names]


def test_add_link_with_provenance(db):
    src, tgt = _feeds(db, "source", "target")

    assert add_link(
        db,
        source_feed_id=src,
        target_feed_id=tgt,
        context_text="Great article!",
        post_url="https://source.example.com/post/123",
        post_title="My Recommendations",
    ) is True

    (link,) = get_outbound_links(db, src)
    assert link.target_feed_id == tgt
    assert link.context_text == "Great article!"
    assert link.post_url == "https://source.example.com/post/123"
    assert link.post_title == "My Recommendations"
    assert link.discovered_at is not None


def test_add_link_duplicate_is_a_silent_noop(db):
    src, tgt = _feeds(db, "source", "target")
    kwargs = dict(source_feed_id=src, target_feed_id=tgt, post_url="https://source.example.com/p")

    assert add_link(db, **kwargs) is True
    assert add_link(db, context_text="different text", **kwargs) is False
    assert db.execute(select(func.count()).select_from(Link)).scalar_one() == 1


def test_same_target_from_distinct_posts(db):
    src, tgt = _feeds(db, "source", "target")
    add_link(db, source_feed_id=src, target_feed_id=tgt, post_url="https://source.example.com/1")
    add_link(db, source_feed_id=src, target_feed_id=tgt, post_url="https://source.example.com/2")

    assert len(get_inbound_links(db, tgt)) == 2


def test_missing_post_url_still_deduplicates(db):
    src, tgt = _feeds(db, "source", "target")
    add_link(db, source_feed_id=src, target_feed_id=tgt)
    add_link(db, source_feed_id=src, target_feed_id=tgt, post_url=None)

    assert len(get_outbound_links(db, src)) == 1


def test_inbound_and_outbound(db):
    a, b, c = _feeds(db, "a", "b", "c")
    add_link(db, source_feed_id=a, target_feed_id=b, post_url="p1")
    add_link(db, source_feed_id=c, target_feed_id=b, post_url="p2")

    assert {link.source_feed_id for link in get_inbound_links(db, b)} == {a, c}
    assert get_outbound_links(db, b) == []
    assert [link.target_feed_id for link in get_outbound_links(db, a)] == [b]


def test_most_linked_ranking(db):
    a, b, c, d = _feeds(db, "a", "b", "c", "d")
    for target in (b, c, d):
        add_link(db, source_feed_id=a, target_feed_id=target, post_url="https://a.example.com/post")
    add_link(db, source_feed_id=b, target_feed_id=d, post_url="https://b.example.com/post")

    ranked = get_most_linked(db, 10)

    assert ranked[0].feed.id == d
    assert ranked[0].inbound_count == 2
    # A has no inbound links and is excluded
    assert a not in {r.feed.id for r in ranked}
    # equal counts fall back to feed id ascending
    assert [(r.feed.id, r.inbound_count) for r in ranked] == [(d, 2), (b, 1), (c, 1)]


def test_most_linked_limit(db):
    a, b, c, d = _feeds(db, "a", "b", "c", "d")
    for target in (b, c, d):
        add_link(db, source_feed_id=a, target_feed_id=target, post_url="p")

    assert len(get_most_linked(db, 2)) == 2
    assert get_most_linked(db, 0) == []


def test_most_linked_empty_graph(db):
    _feeds(db, "a", "b")
    assert get_most_linked(db, 10) == []


def test_new_feeds_window_and_order(db):
    old, mid, new = _feeds(db, "old", "mid", "new")
    now = utcnow()
    for feed_id, age in ((old, 45), (mid, 5), (new, 1)):
        get_feed(db, feed_id).created_at = now - timedelta(days=age)
    db.commit()
    add_link(db, source_feed_id=old, target_feed_id=mid, post_url="p1")
    add_link(db, source_feed_id=new, target_feed_id=mid, post_url="p2")

    ranked = get_new_feeds(db, 30, 10, now=now)

    assert [r.feed.id for r in ranked] == [new, mid]
    # inbound count is all-time, zero-count feeds included
    assert [r.inbound_count for r in ranked] == [0, 2]


def test_new_feeds_limit(db):
    _feeds(db, "a", "b", "c")
    assert len(get_new_feeds(db, 30, 2)) == 2
