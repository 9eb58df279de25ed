from __future__ import annotations

from ..extensions import db


class User(db.Model):
    """
    Login credential, optionally linked to an Employee.

    role is informational only (admin, manager, employee); nothing in the
    backend enforces it.
    """
    __tablename__ = "users"
    __table_args__ = (
        db.UniqueConstraint("username", name="uq_users_username"),
        db.UniqueConstraint("email", name="uq_users_email"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(64), nullable=False)
    email = db.Column(db.String(255), nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(32), nullable=True, default="employee")
    employee_id = db.Column(db.Integer, nullable=True)
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    def __repr__(self) -> str:
        return f"<User id={self.id} username={self.username!r}>"

    def to_dict(self) -> dict:
        # password_hash is never serialized
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "role": self.role,
            "employee_id": self.employee_id,
            "is_active": self.is_active,
        }
