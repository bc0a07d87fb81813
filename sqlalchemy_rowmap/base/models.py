from sqlalchemy import ForeignKey
from sqlalchemy.orm import declarative_base, mapped_column, Mapped

Base = declarative_base()


class User(Base):
    __tablename__ = "users"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(nullable=False)

    def __repr__(self):
        return f"User(id={self.id} name={self.name})"


class Post(Base):
    __tablename__ = "posts"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    content: Mapped[str] = mapped_column(nullable=False)

    def __repr__(self):
        return f"Post(id={self.id} user_id={self.user_id} content={self.content})"
