"""
Post Model
"""

from datetime import timezone

from minicms.extensions import db

STATUS_DRAFT = 'draft'
STATUS_PUBLISHED = 'published'
POST_STATUSES = (STATUS_DRAFT, STATUS_PUBLISHED)


def _timestamp(value):
    """ISO 8601 in UTC; SQLite hands back naive datetimes."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()


class Post(db.Model):
    """A single content item of the CMS"""
    __tablename__ = 'posts'
    __table_args__ = (
        db.CheckConstraint("status IN ('draft','published')", name='ck_posts_status'),
    )

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.Text, nullable=False)
    category = db.Column(db.Text, nullable=False, default='', server_default='')
    post_date = db.Column(db.Date, nullable=False)
    body = db.Column(db.Text, nullable=False)
    status = db.Column(db.Text, nullable=False, default=STATUS_DRAFT, server_default=STATUS_DRAFT)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    def to_dict(self, include_status=True):
        """Serialize for the JSON API; the public feed leaves out `status`."""
        data = {
            'id': self.id,
            'title': self.title,
            'category': self.category,
            'post_date': self.post_date.isoformat() if self.post_date else None,
            'body': self.body,
            'created_at': _timestamp(self.created_at),
            'updated_at': _timestamp(self.updated_at),
        }
        if include_status:
            data['status'] = self.status
        return data

    def __repr__(self):
        return f'<Post {self.id} {self.status}>'


db.Index('idx_posts_status', Post.status)
db.Index('idx_posts_post_date', Post.post_date.desc())
