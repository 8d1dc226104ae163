"""
Database Tables
===============
SQLAlchemy ORM tables for the relational store.

    islands(island_id, island_name)
    characters(character_id, character_name)
    readings(reading_id, ultrasonic_value, lidar_value, island_id -> islands, character_id -> characters)

reading_id is assigned by the database and only ever goes up, so
"latest reading" = highest reading_id.

Author: Scan Data Collector Team
"""

from sqlalchemy import Float, ForeignKey, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class IslandRow(Base):
    __tablename__ = "islands"

    island_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    island_name: Mapped[str] = mapped_column(String(100), nullable=False)


class CharacterRow(Base):
    __tablename__ = "characters"

    character_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    character_name: Mapped[str] = mapped_column(String(100), nullable=False)


class ReadingRow(Base):
    __tablename__ = "readings"
    # Never reuse the id of a deleted latest reading (SQLite)
    __table_args__ = {"sqlite_autoincrement": True}

    reading_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    ultrasonic_value: Mapped[float] = mapped_column(Float, nullable=False)
    lidar_value: Mapped[float] = mapped_column(Float, nullable=False)
    island_id: Mapped[int] = mapped_column(
        ForeignKey("islands.island_id"), nullable=False, index=True
    )
    character_id: Mapped[int] = mapped_column(
        ForeignKey("characters.character_id"), nullable=False, index=True
    )

