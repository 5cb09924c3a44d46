"""
SQLAlchemy ORM models for the movie reviews database.

This module defines the User, Movie, and Review tables with their ownership
foreign keys and constraints.
"""

from datetime import datetime
from typing import List
from sqlalchemy import (
    Integer, String, Text, ForeignKey, UniqueConstraint, Index, TIMESTAMP
)
from sqlalchemy.orm import DeclarativeBase, relationship, Mapped, mapped_column
from sqlalchemy.sql import func


class Base(DeclarativeBase):
    """Base class for all ORM models."""
    pass


class User(Base):
    """
    User table storing account information.

    Attributes:
        id: Primary key, auto-incremented
        user_name: Display name
        email: Login email (unique)
        password_hash: Salted one-way derivation of the password
        created_at: Timestamp when record was created
        updated_at: Timestamp when record was last updated
    """
    __tablename__ = 'users'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP,
        nullable=False,
        server_default=func.current_timestamp()
    )
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP,
        nullable=False,
        server_default=func.current_timestamp(),
        onupdate=func.current_timestamp()
    )

    # Relationships
    movies: Mapped[List["Movie"]] = relationship("Movie", back_populates="owner")
    reviews: Mapped[List["Review"]] = relationship("Review", back_populates="user")

    __table_args__ = (
        UniqueConstraint('email', name='unique_user_email'),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, user_name='{self.user_name}', email='{self.email}')>"


class Movie(Base):
    """
    Movie table storing movie details and the owning user.

    Attributes:
        id: Primary key, auto-incremented
        movie_name: Movie title
        description: Free-text description
        director_name: Director's name
        release_date: Release date as entered (format is not validated)
        owner_id: Foreign key to the user who created the movie
        created_at: Timestamp when record was created
        updated_at: Timestamp when record was last updated
    """
    __tablename__ = 'movies'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    movie_name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    director_name: Mapped[str] = mapped_column(Text, nullable=False)
    release_date: Mapped[str] = mapped_column(String(50), nullable=False)
    owner_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey('users.id', ondelete='CASCADE'),
        nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP,
        nullable=False,
        server_default=func.current_timestamp()
    )
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP,
        nullable=False,
        server_default=func.current_timestamp(),
        onupdate=func.current_timestamp()
    )

    # Relationships
    owner: Mapped["User"] = relationship("User", back_populates="movies")
    reviews: Mapped[List["Review"]] = relationship(
        "Review",
        back_populates="movie",
        cascade="all, delete-orphan",
        passive_deletes=True
    )

    # Indexes for common queries
    __table_args__ = (
        Index('idx_movies_name', 'movie_name'),
        Index('idx_movies_director', 'director_name'),
        Index('idx_movies_owner', 'owner_id'),
    )

    def __repr__(self) -> str:
        return f"<Movie(id={self.id}, movie_name='{self.movie_name}', owner_id={self.owner_id})>"


class Review(Base):
    """
    Review table storing user reviews of movies.

    Attributes:
        id: Primary key, auto-incremented
        movie_id: Foreign key to movies table
        user_id: Foreign key to the user who wrote the review
        rating: Numeric rating
        comment: Review text
    """
    __tablename__ = 'reviews'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    movie_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey('movies.id', ondelete='CASCADE'),
        nullable=False
    )
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey('users.id', ondelete='CASCADE'),
        nullable=False
    )
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    comment: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP,
        nullable=False,
        server_default=func.current_timestamp()
    )
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP,
        nullable=False,
        server_default=func.current_timestamp(),
        onupdate=func.current_timestamp()
    )

    # Relationships
    user: Mapped["User"] = relationship("User", back_populates="reviews")
    movie: Mapped["Movie"] = relationship("Movie", back_populates="reviews")

    __table_args__ = (
        Index('idx_reviews_movie', 'movie_id'),
        Index('idx_reviews_user', 'user_id'),
    )

    def __repr__(self) -> str:
        return f"<Review(id={self.id}, movie_id={self.movie_id}, user_id={self.user_id}, rating={self.rating})>"
