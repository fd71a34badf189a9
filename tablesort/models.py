from datetime import datetime as dt, timezone

from tablesort import db


def utc_now():
    return dt.now(timezone.utc)


class EntityTest(db.Model):
    """Test-only content rows listed by the sortable table."""
    __tablename__ = 'entity_test'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(64), nullable=False)
    type = db.Column(db.String(32), nullable=False, default='entity_test')
    created = db.Column(db.DateTime, default=utc_now, nullable=False)

    def __repr__(self):
        return f'<EntityTest {self.id} {self.name!r}>'
