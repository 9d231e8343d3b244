from sqlalchemy import Boolean, Column, ForeignKey, Table, Text
from sqlalchemy.orm import relationship
from marketplace.database import Base

user_roles = Table(
    "user_roles",
    Base.metadata,
    Column("user_id", Text, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("role_id", Text, ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
)


class User(Base):
    __tablename__ = "users"

    id = Column(Text, primary_key=True)
    name = Column(Text, nullable=False)
    username = Column(Text, nullable=False, unique=True)
    email = Column(Text, nullable=False, unique=True)
    password_hash = Column(Text, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    last_login_at = Column(Text)
    created_at = Column(Text, nullable=False)
    updated_at = Column(Text, nullable=False)

    roles = relationship("Role", secondary=user_roles, back_populates="users")
    tokens = relationship("AuthToken", back_populates="user", cascade="all, delete-orphan")
    businesses = relationship("Business", back_populates="owner")

    @property
    def role_codes(self) -> list[str]:
        return sorted(r.code for r in self.roles)


class Role(Base):
    __tablename__ = "roles"

    id = Column(Text, primary_key=True)
    code = Column(Text, nullable=False, unique=True)
    label = Column(Text, nullable=False)

    users = relationship("User", secondary=user_roles, back_populates="roles")


class AuthToken(Base):
    __tablename__ = "auth_tokens"

    id = Column(Text, primary_key=True)
    user_id = Column(Text, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    token = Column(Text, nullable=False, unique=True)
    token_type = Column(Text, nullable=False)
    expires_at = Column(Text, nullable=False)
    is_revoked = Column(Boolean, nullable=False, default=False)
    created_at = Column(Text, nullable=False)

    user = relationship("User", back_populates="tokens")
