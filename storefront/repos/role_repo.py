from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from storefront.data.models.role import RoleAssignmentModel


class RoleRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_assignment(self, principal: str) -> RoleAssignmentModel | None:
        return self.db.get(RoleAssignmentModel, principal)

    def upsert(self, principal: str, role: str) -> RoleAssignmentModel:
        assignment = self.get_assignment(principal)
        if assignment:
            assignment.role = role
            self.db.commit()
            return assignment

        try:
            assignment = RoleAssignmentModel(principal=principal, role=role)
            self.db.add(assignment)
            self.db.commit()
        except IntegrityError:
            #ktos wstawil wiersz w miedzyczasie - nadpisujemy role w istniejacym
            self.db.rollback()
            assignment = self.get_assignment(principal)
            assignment.role = role
            self.db.commit()
        return assignment
