"""Database table for persisted index snapshots"""

import datetime

from sqlalchemy import JSON, Column, Date, DateTime, String, Text
from sqlmodel import Field, SQLModel


class PostRow(SQLModel, table=True):
    """One PostRecord as of the last saved ingest pass"""
    __tablename__ = "posts"
    slug: str = Field(primary_key=True)
    source: str = Field(..., sa_column=Column(Text, nullable=False, unique=True))
    position: int = Field(..., nullable=False, description="Order the record entered the index")
    content_hash: str = Field(..., sa_column=Column(String(64), nullable=False))
    title: str = Field(..., sa_column=Column(Text, nullable=False))
    date: datetime.date = Field(..., sa_column=Column(Date, nullable=False, index=True))
    excerpt: str = Field(default="", sa_column=Column(Text, nullable=False))
    tags: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    featured: bool = Field(default=False, nullable=False)
    cover_image: str = Field(default="", sa_column=Column(Text, nullable=False))
    body: str = Field(default="", sa_column=Column(Text, nullable=False))
    word_count: int = Field(default=0, nullable=False)
    reading_time: int = Field(default=1, nullable=False, description="Minutes")
    indexed_at: datetime.datetime = Field(default_factory=datetime.datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
