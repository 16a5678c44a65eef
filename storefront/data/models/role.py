from sqlalchemy import Column, String

from storefront.data.database import Base


class RoleAssignmentModel(Base):
    __tablename__ = "role_assignments"

    principal = Column(String, primary_key=True)
    role = Column(String(10), nullable=False)
