"""Tests for feed ordering and quota services."""

from datetime import UTC, datetime, timedelta

import pytest

from src.errors import ConflictError, QuotaExceededError
from src.models.content import Content
from src.models.list import List, ListMember
from src.models.user import User
from src.services import ordering
from src.services.list_service import ListService
from src.services.quota import ResourceClass, enforce_quota, is_quota_exceeded, upgrade_to_premium


@pytest.fixture
def user(db):
    user = User(
        email="owner@example.com",
        name="Owner",
        provider="google",
        provider_id="g-owner",
    )
    db.add(user)
    db.commit()
    return user


@pytest.fixture
def lst(db, user):
    lst = List(title="Feed", owner_id=user.id)
    db.add(lst)
    db.flush()
    db.add(ListMember(list_id=lst.id, user_id=user.id, role="owner"))
    db.commit()
    return lst


def add(db, lst, user, order, created_at=None, url="https://example.com"):
    content = Content(
        list_id=lst.id,
        added_by=user.id,
        type="url",
        url=url,
        order=order,
    )
    if created_at is not None:
        content.created_at = created_at
    db.add(content)
    db.commit()
    return content


class TestNextOrder:
    """Tests for next_order."""

    def test_empty_list_starts_at_one(self, db, lst):
        assert ordering.next_order(db, lst.id) == 1

    def test_follows_highest_order(self, db, lst, user):
        add(db, lst, user, 1)
        add(db, lst, user, 7)
        assert ordering.next_order(db, lst.id) == 8

    def test_gaps_are_not_filled(self, db, lst, user):
        add(db, lst, user, 1)
        middle = add(db, lst, user, 2)
        add(db, lst, user, 3)
        db.delete(middle)
        db.commit()
        assert ordering.next_order(db, lst.id) == 4

    def test_computed_from_current_maximum(self, db, lst, user):
        add(db, lst, user, 1)
        last = add(db, lst, user, 2)
        db.delete(last)
        db.commit()
        assert ordering.next_order(db, lst.id) == 2


class TestFeedOrder:
    """Tests for feed ordering."""

    def test_orders_by_order_key(self, db, lst, user):
        add(db, lst, user, 3, url="https://example.com/c")
        add(db, lst, user, 1, url="https://example.com/a")
        add(db, lst, user, 2, url="https://example.com/b")

        assert [c.order for c in ordering.feed_order(db, lst.id)] == [1, 2, 3]

    def test_ties_break_newest_first(self, db, lst, user):
        now = datetime.now(UTC)
        older = add(db, lst, user, 1, created_at=now - timedelta(minutes=5))
        newer = add(db, lst, user, 1, created_at=now)

        assert [c.id for c in ordering.feed_order(db, lst.id)] == [newer.id, older.id]

    def test_iterates_in_batches_and_restarts(self, db, lst, user):
        for i in range(1, 8):
            add(db, lst, user, i)

        first_pass = [c.order for c in ordering.feed_order(db, lst.id, batch_size=3)]
        second_pass = [c.order for c in ordering.feed_order(db, lst.id, batch_size=3)]
        assert first_pass == list(range(1, 8))
        assert second_pass == first_pass

    def test_is_lazy(self, db, lst, user):
        add(db, lst, user, 1)
        feed = ordering.feed_order(db, lst.id)
        add(db, lst, user, 2)
        assert [c.order for c in feed] == [1, 2]

    def test_empty_feed(self, db, lst):
        assert list(ordering.feed_order(db, lst.id)) == []

    def test_feed_page(self, db, lst, user):
        for i in range(1, 6):
            add(db, lst, user, i)
        items, total = ordering.feed_page(db, lst.id, skip=4, limit=10)
        assert total == 5
        assert [c.order for c in items] == [5]

    def test_list_detail_uses_feed_order(self, db, lst, user):
        now = datetime.now(UTC)
        second = add(db, lst, user, 2, created_at=now - timedelta(minutes=10))
        older = add(db, lst, user, 1, created_at=now - timedelta(minutes=5))
        newer = add(db, lst, user, 1, created_at=now)

        detail = ListService(db).get_list_detail(user, lst.id)
        assert [c.id for c in detail.contents] == [newer.id, older.id, second.id]


class TestLatestContent:
    """The list thumbnail is the newest content, not the last in the feed."""

    def test_latest_is_by_creation_time(self, db, lst, user):
        now = datetime.now(UTC)
        newest = add(db, lst, user, 1, created_at=now)
        add(db, lst, user, 2, created_at=now - timedelta(hours=1))

        assert ordering.latest_content(db, lst.id).id == newest.id
        assert ordering.latest_contents(db, [lst.id])[lst.id].id == newest.id

    def test_no_content(self, db, lst):
        assert ordering.latest_content(db, lst.id) is None
        assert ordering.latest_contents(db, [lst.id]) == {}
        assert ordering.latest_contents(db, []) == {}


class TestQuota:
    """Tests for free plan limits."""

    def test_list_quota(self, db, user):
        for i in range(9):
            db.add(List(title=f"L{i}", owner_id=user.id))
        db.commit()
        assert not is_quota_exceeded(db, user, ResourceClass.LIST)

        db.add(List(title="L9", owner_id=user.id))
        db.commit()
        assert is_quota_exceeded(db, user, ResourceClass.LIST)
        with pytest.raises(QuotaExceededError):
            enforce_quota(db, user, ResourceClass.LIST)

    def test_content_quota_counts_all_authors(self, db, lst, user):
        other = User(email="o@example.com", name="O", provider="apple", provider_id="a-o")
        db.add(other)
        db.commit()
        for i in range(1, 11):
            add(db, lst, other if i % 2 else user, i)

        assert is_quota_exceeded(db, user, ResourceClass.CONTENT, list_id=lst.id)

    def test_content_quota_requires_list(self, db, user):
        with pytest.raises(ValueError):
            is_quota_exceeded(db, user, ResourceClass.CONTENT)

    def test_premium_bypasses_quota(self, db, lst, user):
        for i in range(1, 11):
            add(db, lst, user, i)
        upgrade_to_premium(db, user)

        assert not is_quota_exceeded(db, user, ResourceClass.CONTENT, list_id=lst.id)

    def test_upgrade_twice_is_rejected(self, db, user):
        upgrade_to_premium(db, user)
        with pytest.raises(ConflictError) as exc_info:
            upgrade_to_premium(db, user)
        assert exc_info.value.reason == "already-premium"
