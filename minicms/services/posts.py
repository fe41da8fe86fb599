"""
Post Storage

One parameterized statement per operation against the `posts` table.
Missing rows raise NotFoundError, driver failures StorageError.
"""

import logging
from contextlib import contextmanager
from datetime import date, datetime, timezone

from sqlalchemy import delete, update
from sqlalchemy.exc import SQLAlchemyError

from minicms.exceptions import InvalidDateError, NotFoundError, StorageError
from minicms.extensions import db
from minicms.models import Post, STATUS_PUBLISHED

logger = logging.getLogger(__name__)


def _utcnow():
    return datetime.now(timezone.utc)


def _driver_message(error):
    return str(getattr(error, 'orig', None) or error)


@contextmanager
def storage_errors():
    """Roll back and translate SQLAlchemy failures into StorageError."""
    try:
        yield
    except SQLAlchemyError as e:
        db.session.rollback()
        raise StorageError(_driver_message(e)) from e


def _to_date(value):
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise InvalidDateError(f'Ungültiges Datum: {value}') from e


def _ordered(query):
    return query.order_by(Post.post_date.desc(), Post.id.desc())


def list_posts(published_only=False):
    """All posts, newest post_date first, ties by highest id."""
    query = Post.query
    if published_only:
        query = query.filter(Post.status == STATUS_PUBLISHED)
    with storage_errors():
        return _ordered(query).all()


def get_post(post_id, published_only=False):
    """Fetch one post; drafts count as missing when `published_only`."""
    query = Post.query.filter(Post.id == post_id)
    if published_only:
        query = query.filter(Post.status == STATUS_PUBLISHED)
    with storage_errors():
        post = query.first()
    if post is None:
        raise NotFoundError()
    return post


def create_post(data):
    """Insert a normalized post record and return the stored row."""
    now = _utcnow()
    post = Post(
        title=data['title'],
        category=data['category'],
        post_date=_to_date(data['post_date']),
        body=data['body'],
        status=data['status'],
        created_at=now,
        updated_at=now,
    )
    with storage_errors():
        db.session.add(post)
        db.session.commit()
    logger.info('Created post %s (%s)', post.id, post.status)
    return post


def _update_returning(post_id, values):
    stmt = (
        update(Post)
        .where(Post.id == post_id)
        .values(updated_at=_utcnow(), **values)
        .returning(Post)
        .execution_options(synchronize_session=False)
    )
    with storage_errors():
        post = db.session.execute(stmt).scalar_one_or_none()
        db.session.commit()
    if post is None:
        raise NotFoundError()
    return post


def update_post(post_id, data):
    """Overwrite every mutable field of a post."""
    post = _update_returning(post_id, {
        'title': data['title'],
        'category': data['category'],
        'post_date': _to_date(data['post_date']),
        'body': data['body'],
        'status': data['status'],
    })
    logger.info('Updated post %s', post_id)
    return post


def publish_post(post_id):
    """Switch a post to published."""
    post = _update_returning(post_id, {'status': STATUS_PUBLISHED})
    logger.info('Published post %s', post_id)
    return post


def delete_post(post_id):
    """Remove a post and return its id."""
    stmt = delete(Post).where(Post.id == post_id).returning(Post.id)
    with storage_errors():
        deleted_id = db.session.execute(stmt).scalar_one_or_none()
        db.session.commit()
    if deleted_id is None:
        raise NotFoundError()
    logger.info('Deleted post %s', deleted_id)
    return deleted_id
