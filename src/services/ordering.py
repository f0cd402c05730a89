"""Feed ordering for list contents.

Each content gets an order key of ``max(order) + 1`` within its list, so the
first content is 1 and 0 means "no content". Keys freed by deletion are never
reused. Callers assign keys inside a transaction holding the list row lock
(see ``lock_list``); if two inserts still collide, the feed breaks the tie by
newest first.
"""

from collections.abc import Iterator

from sqlalchemy import func
from sqlalchemy.orm import Query, Session

from src.models.content import Content
from src.models.list import List

FEED_BATCH_SIZE = 50


def lock_list(db: Session, list_id: int) -> List | None:
    """Load the list row with a write lock held until the transaction ends."""
    return db.query(List).filter(List.id == list_id).with_for_update().first()


def next_order(db: Session, list_id: int) -> int:
    """Order key for the next content added to the list."""
    current = db.query(func.max(Content.order)).filter(Content.list_id == list_id).scalar()
    return (current or 0) + 1


def feed_query(db: Session, list_id: int) -> Query:
    """Contents of a list in swipe-feed order."""
    return (
        db.query(Content)
        .filter(Content.list_id == list_id)
        .order_by(Content.order.asc(), Content.created_at.desc(), Content.id.desc())
    )


def feed_order(db: Session, list_id: int, batch_size: int = FEED_BATCH_SIZE) -> Iterator[Content]:
    """Iterate the feed lazily, one batch of rows at a time.

    Every call starts a fresh pass from the first item.
    """
    offset = 0
    while True:
        batch = feed_query(db, list_id).offset(offset).limit(batch_size).all()
        yield from batch
        if len(batch) < batch_size:
            return
        offset += batch_size


def feed_page(db: Session, list_id: int, skip: int, limit: int) -> tuple[list[Content], int]:
    """One page of the feed plus the total number of contents."""
    total = db.query(func.count(Content.id)).filter(Content.list_id == list_id).scalar() or 0
    items = feed_query(db, list_id).offset(skip).limit(limit).all()
    return items, total


def latest_content(db: Session, list_id: int) -> Content | None:
    """Most recently created content, used as the list's thumbnail.

    This is by creation time, not by order key. Single-list form of
    ``latest_contents``, which the home screen uses for many lists at once.
    """
    return (
        db.query(Content)
        .filter(Content.list_id == list_id)
        .order_by(Content.created_at.desc(), Content.id.desc())
        .first()
    )


def latest_contents(db: Session, list_ids: list[int]) -> dict[int, Content]:
    """Latest content for each of several lists in one query."""
    if not list_ids:
        return {}
    newest = (
        db.query(Content.list_id, func.max(Content.created_at).label("created_at"))
        .filter(Content.list_id.in_(list_ids))
        .group_by(Content.list_id)
        .subquery()
    )
    rows = (
        db.query(Content)
        .join(
            newest,
            (Content.list_id == newest.c.list_id) & (Content.created_at == newest.c.created_at),
        )
        .order_by(Content.id.desc())
        .all()
    )
    result: dict[int, Content] = {}
    for content in rows:
        # Highest id wins if two contents share the newest timestamp
        result.setdefault(content.list_id, content)
    return result
