from sqlalchemy import BigInteger, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class CatalogApp(Base):
    """One row per Steam application, loaded from the GetAppList dump."""

    __tablename__ = "appinfo"

    appid: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    name: Mapped[str] = mapped_column(String(512), index=True)
    # e.g. "game", "dlc", "demo"; "invalid" marks rows Steam no longer serves
    type: Mapped[str | None] = mapped_column(String(32), nullable=True, index=True)
    header_image: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    background: Mapped[str | None] = mapped_column(String(1024), nullable=True)
