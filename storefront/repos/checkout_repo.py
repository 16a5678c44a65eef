# storefront/repos/checkout_repo.py
from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from storefront.data.models.checkout_session import CheckoutSessionModel


class CheckoutRepo:
    def __init__(self, db: Session):
        self.db = db

    def create_session(self, session: CheckoutSessionModel) -> CheckoutSessionModel:
        self.db.add(session)
        self.db.commit()
        self.db.refresh(session)
        return session

    def get_session(self, session_id: str) -> CheckoutSessionModel | None:
        return self.db.get(CheckoutSessionModel, session_id)

    def get_pending_sessions(self, created_before: datetime) -> list[CheckoutSessionModel]:
        return list(
            self.db.execute(
                select(CheckoutSessionModel)
                .where(
                    CheckoutSessionModel.status == "pending",
                    CheckoutSessionModel.created_at < created_before,
                )
                .order_by(CheckoutSessionModel.created_at)
            ).scalars().all()
        )

    def resolve_session(self, session_id: str, new_data: dict) -> int:
        """
        Przejscie tylko z pending, np.
        update set status='completed' where id=:id and status='pending'
        """
        res = self.db.execute(
            update(CheckoutSessionModel)
            .where(
                CheckoutSessionModel.id == session_id,
                CheckoutSessionModel.status == "pending",
            )
            .values(**new_data)
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
        self.db.expire_all()
        return res.rowcount
