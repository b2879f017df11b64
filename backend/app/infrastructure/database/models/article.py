"""SQLAlchemy ORM models for the Article aggregate."""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.infrastructure.database.base import Base


class ArticleModel(Base):
    """ORM model: maps to the 'articles' table.

    Nested attribute groups and the like ledger are stored as JSON documents;
    tags and secondary categories live in child tables so they can be
    filtered with plain joins.
    """

    __tablename__ = "articles"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    slug: Mapped[str] = mapped_column(String(300), nullable=False, unique=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    primary_category_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("categories.id"), nullable=False
    )
    published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    cover_image: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    images: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    product_links: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    views: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    like_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    likes: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    like_attempts: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    like_tally: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    published_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    metadata_: Mapped[dict] = mapped_column("metadata", JSON, nullable=False, default=dict)
    care_info: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    growing_conditions: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    pests_diseases: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    plant_traits: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    tags: Mapped[list["ArticleTagModel"]] = relationship(
        back_populates="article",
        order_by="ArticleTagModel.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    secondary_categories: Mapped[list["ArticleSecondaryCategoryModel"]] = relationship(
        back_populates="article",
        order_by="ArticleSecondaryCategoryModel.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    __table_args__ = (
        Index("ix_articles_listing", "published", "published_at"),
        Index("ix_articles_primary_category", "primary_category_id"),
    )

    def __repr__(self) -> str:
        return f"<ArticleModel(id={self.id}, slug='{self.slug}')>"


class ArticleTagModel(Base):
    __tablename__ = "article_tags"

    article_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("articles.id", ondelete="CASCADE"), primary_key=True
    )
    tag: Mapped[str] = mapped_column(String(100), primary_key=True, index=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    article: Mapped[ArticleModel] = relationship(back_populates="tags")


class ArticleSecondaryCategoryModel(Base):
    __tablename__ = "article_secondary_categories"

    article_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("articles.id", ondelete="CASCADE"), primary_key=True
    )
    category_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("categories.id"), primary_key=True, index=True
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    article: Mapped[ArticleModel] = relationship(back_populates="secondary_categories")
