# grant_review/db/init_db.py
from grant_review import models  # noqa
from grant_review.db.base import Base
from grant_review.db.session import engine


def init_db():
    Base.metadata.create_all(bind=engine)
