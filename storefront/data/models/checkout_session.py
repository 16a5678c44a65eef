from datetime import datetime, timezone

from sqlalchemy import Column, String, Text, DateTime, JSON

from storefront.data.database import Base


class CheckoutSessionModel(Base):
    __tablename__ = "checkout_sessions"

    id = Column(String, primary_key=True)  # id sesji z bramki
    principal = Column(String, nullable=False, index=True)
    url = Column(Text, nullable=False)

    status = Column(String(10), nullable=False, default="pending")  # pending, completed, failed
    #snapshot pozycji z chwili utworzenia sesji, nigdy nie modyfikowany
    line_items = Column(JSON, nullable=False)

    resolved_principal = Column(String, nullable=True)
    raw_response = Column(Text, nullable=True)
    error = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    resolved_at = Column(DateTime(timezone=True), nullable=True)
