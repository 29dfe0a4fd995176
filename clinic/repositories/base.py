from sqlalchemy.orm import Session


class SQLAlchemyRepository:
    """Storage handle bound to one request-scoped session.

    Writes commit immediately so each service call is its own transaction.
    Callers that catch a storage error call ``rollback`` before continuing.
    """

    def __init__(self, db: Session):
        self.db = db

    def rollback(self) -> None:
        self.db.rollback()
