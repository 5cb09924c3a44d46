"""
Unit tests for database CRUD operations.

Tests for User, Movie, and Review CRUD operations using an in-memory
SQLite database for fast, isolated testing.
"""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker

from moviereviews.core.errors import ConstraintViolation, StorageFailure
from moviereviews.database.models import Base
from moviereviews.database import crud


@pytest.fixture
def engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture
def session(engine):
    """Create a new database session for testing."""
    Session = sessionmaker(bind=engine, expire_on_commit=False)
    session = Session()
    yield session
    session.close()


@pytest.fixture
def owner(session):
    """A user to own movies and reviews."""
    return crud.create_user(session, user_name='owner', email='owner@example.com', password_hash='x')


def make_movie(session, owner_id, name='Heat', director='Michael Mann', release_date='1995-12-15'):
    return crud.create_movie(
        session,
        owner_id=owner_id,
        movie_name=name,
        description=f'{name} description',
        director_name=director,
        release_date=release_date,
    )


class TestUserCRUD:
    """Tests for User CRUD operations."""

    def test_create_user(self, session):
        """Test creating a new user."""
        user = crud.create_user(
            session,
            user_name='alice',
            email='alice@example.com',
            password_hash='hashed'
        )

        assert user.id is not None
        assert user.user_name == 'alice'
        assert user.email == 'alice@example.com'
        assert user.password_hash == 'hashed'

    def test_duplicate_email_violates_constraint(self, session):
        """Test that the unique email constraint surfaces as ConstraintViolation."""
        crud.create_user(session, user_name='a', email='same@example.com', password_hash='x')

        with pytest.raises(ConstraintViolation):
            crud.create_user(session, user_name='b', email='same@example.com', password_hash='y')

        # Session is usable again after the rollback
        assert crud.get_user_count(session) == 1

    def test_get_user(self, session, owner):
        """Test retrieving a user by ID."""
        retrieved = crud.get_user(session, owner.id)
        assert retrieved is not None
        assert retrieved.email == 'owner@example.com'

    def test_get_user_not_found(self, session):
        """Test that getting a non-existent user returns None."""
        assert crud.get_user(session, 999) is None

    def test_get_user_by_email(self, session, owner):
        """Test looking a user up by email."""
        assert crud.get_user_by_email(session, 'owner@example.com').id == owner.id
        assert crud.get_user_by_email(session, 'nobody@example.com') is None

    def test_update_user_password(self, session, owner):
        """Test replacing the password hash."""
        updated = crud.update_user_password(session, owner.id, 'new-hash')
        assert updated.password_hash == 'new-hash'
        assert updated.email == 'owner@example.com'  # Unchanged

    def test_update_password_missing_user(self, session):
        """Test that updating a missing user returns None."""
        assert crud.update_user_password(session, 999, 'new-hash') is None

    def test_get_user_count(self, session):
        """Test getting total user count."""
        assert crud.get_user_count(session) == 0

        crud.create_user(session, user_name='a', email='a@example.com', password_hash='x')
        crud.create_user(session, user_name='b', email='b@example.com', password_hash='x')

        assert crud.get_user_count(session) == 2


class TestMovieCRUD:
    """Tests for Movie CRUD operations."""

    def test_create_movie(self, session, owner):
        """Test creating a new movie."""
        movie = make_movie(session, owner.id)

        assert movie.id is not None
        assert movie.movie_name == 'Heat'
        assert movie.director_name == 'Michael Mann'
        assert movie.release_date == '1995-12-15'
        assert movie.owner_id == owner.id

    def test_create_movie_unknown_owner(self, session):
        """Test that the owner foreign key is enforced."""
        with pytest.raises(ConstraintViolation):
            make_movie(session, owner_id=42)

    def test_get_movie(self, session, owner):
        """Test retrieving a movie by ID."""
        movie = make_movie(session, owner.id)

        retrieved = crud.get_movie(session, movie.id)
        assert retrieved is not None
        assert retrieved.movie_name == 'Heat'

    def test_get_movie_not_found(self, session):
        """Test that getting a non-existent movie returns None."""
        assert crud.get_movie(session, 999) is None

    def test_update_movie(self, session, owner):
        """Test updating movie details."""
        movie = make_movie(session, owner.id)

        updated = crud.update_movie(
            session,
            movie.id,
            movie_name='Heat (Director\'s Cut)',
            release_date='1996-01-01'
        )

        assert updated.movie_name == 'Heat (Director\'s Cut)'
        assert updated.release_date == '1996-01-01'
        assert updated.director_name == 'Michael Mann'  # Unchanged
        assert updated.owner_id == owner.id

    def test_update_movie_not_found(self, session):
        """Test that updating a missing movie returns None."""
        assert crud.update_movie(session, 999, movie_name='Nothing') is None

    def test_update_movie_rejects_unknown_fields(self, session, owner):
        """Test that owner_id and other fields cannot be changed through update."""
        movie = make_movie(session, owner.id)

        with pytest.raises(ValueError):
            crud.update_movie(session, movie.id, owner_id=2)

    def test_delete_movie(self, session, owner):
        """Test deleting a movie."""
        movie = make_movie(session, owner.id)

        assert crud.delete_movie(session, movie.id) is True
        assert crud.get_movie(session, movie.id) is None

    def test_delete_movie_not_found(self, session):
        """Test that deleting a missing movie returns False."""
        assert crud.delete_movie(session, 999) is False

    def test_get_movie_count(self, session, owner):
        """Test getting total movie count."""
        assert crud.get_movie_count(session) == 0

        make_movie(session, owner.id, name='One')
        make_movie(session, owner.id, name='Two')

        assert crud.get_movie_count(session) == 2


class TestListMovies:
    """Tests for filtered, sorted and paginated movie listing."""

    @pytest.fixture
    def catalogue(self, session, owner):
        """Create a handful of movies."""
        make_movie(session, owner.id, name='The Matrix', director='Lana Wachowski', release_date='1999')
        make_movie(session, owner.id, name='Inception', director='Christopher Nolan', release_date='2010')
        make_movie(session, owner.id, name='The Matrix Reloaded', director='Lana Wachowski', release_date='2003')
        make_movie(session, owner.id, name='Dunkirk', director='Christopher Nolan', release_date='2017')

    def test_default_order_is_by_id(self, session, catalogue):
        """Test that movies come back in insertion order by default."""
        names = [m.movie_name for m in crud.list_movies(session)]
        assert names == ['The Matrix', 'Inception', 'The Matrix Reloaded', 'Dunkirk']

    def test_filter_matches_name_case_insensitively(self, session, catalogue):
        """Test filtering on the movie name."""
        results = crud.list_movies(session, filter_text='matrix')
        assert {m.movie_name for m in results} == {'The Matrix', 'The Matrix Reloaded'}

    def test_filter_matches_director(self, session, catalogue):
        """Test filtering on the director name."""
        results = crud.list_movies(session, filter_text='NOLAN')
        assert {m.movie_name for m in results} == {'Inception', 'Dunkirk'}

    def test_filter_treats_wildcards_literally(self, session, owner):
        """Test that % and _ in the filter match only themselves."""
        make_movie(session, owner.id, name='100% Wolf', director='Alexs Stadermann')
        make_movie(session, owner.id, name='Heat')

        assert [m.movie_name for m in crud.list_movies(session, filter_text='%')] == ['100% Wolf']
        assert crud.list_movies(session, filter_text='_') == []

    def test_sort_descending(self, session, catalogue):
        """Test ordering by a column in descending order."""
        results = crud.list_movies(session, sort_field='release_date', sort_direction='desc')
        assert [m.release_date for m in results] == ['2017', '2010', '2003', '1999']

    def test_filter_and_sort_combined(self, session, catalogue):
        """Test that filtering and ordering apply together."""
        results = crud.list_movies(
            session, filter_text='wachowski', sort_field='movie_name', sort_direction='desc'
        )
        assert [m.movie_name for m in results] == ['The Matrix Reloaded', 'The Matrix']

    def test_pagination(self, session, catalogue):
        """Test offset pagination."""
        first = crud.list_movies(session, page=1, limit=3)
        second = crud.list_movies(session, page=2, limit=3)
        third = crud.list_movies(session, page=3, limit=3)

        assert len(first) == 3
        assert [m.movie_name for m in second] == ['Dunkirk']
        assert third == []

    def test_invalid_sort_field(self, session):
        """Test that only whitelisted columns can be used for ordering."""
        with pytest.raises(ValueError):
            crud.list_movies(session, sort_field='owner_id; DROP TABLE movies')

    def test_invalid_page(self, session):
        """Test that page numbers start at 1."""
        with pytest.raises(ValueError):
            crud.list_movies(session, page=0)


class TestReviewCRUD:
    """Tests for Review CRUD operations."""

    @pytest.fixture
    def movie(self, session, owner):
        """Create a movie to review."""
        return make_movie(session, owner.id)

    def test_create_review(self, session, owner, movie):
        """Test creating a new review."""
        review = crud.create_review(
            session,
            movie_id=movie.id,
            user_id=owner.id,
            rating=4,
            comment='Great heist scenes'
        )

        assert review.id is not None
        assert review.movie_id == movie.id
        assert review.user_id == owner.id
        assert review.rating == 4

    def test_create_review_unknown_movie(self, session, owner):
        """Test that the movie foreign key is enforced."""
        with pytest.raises(ConstraintViolation):
            crud.create_review(session, movie_id=999, user_id=owner.id, rating=3, comment='?')

    def test_get_reviews_for_movie(self, session, owner, movie):
        """Test retrieving all reviews for a movie."""
        other = crud.create_user(session, user_name='b', email='b@example.com', password_hash='x')
        crud.create_review(session, movie.id, owner.id, 4, 'Good')
        crud.create_review(session, movie.id, other.id, 2, 'Too long')

        reviews = crud.get_reviews_for_movie(session, movie.id)
        assert [r.comment for r in reviews] == ['Good', 'Too long']
        assert crud.get_reviews_for_movie(session, 999) == []

    def test_update_review(self, session, owner, movie):
        """Test updating a review."""
        review = crud.create_review(session, movie.id, owner.id, 3, 'Fine')

        updated = crud.update_review(session, review.id, rating=5, comment='Even better twice')
        assert updated.rating == 5
        assert updated.comment == 'Even better twice'
        assert updated.user_id == owner.id

    def test_update_review_not_found(self, session):
        """Test that updating a missing review returns None."""
        assert crud.update_review(session, 999, rating=1, comment='x') is None

    def test_delete_review(self, session, owner, movie):
        """Test deleting a review."""
        review = crud.create_review(session, movie.id, owner.id, 4, 'Good')

        assert crud.delete_review(session, review.id) is True
        assert crud.get_review(session, review.id) is None
        assert crud.delete_review(session, review.id) is False

    def test_cascade_delete_movie(self, session, owner, movie):
        """Test that deleting a movie removes its reviews."""
        review = crud.create_review(session, movie.id, owner.id, 4, 'Good')
        review_id = review.id

        crud.delete_movie(session, movie.id)

        assert crud.get_review(session, review_id) is None


class TestStorageFailure:
    """Tests for translating storage faults."""

    def test_operational_error_becomes_storage_failure(self, session, monkeypatch):
        """Test that any SQLAlchemy error is surfaced as StorageFailure."""
        def broken_query(*args, **kwargs):
            raise OperationalError("SELECT 1", {}, Exception("database is locked"))

        monkeypatch.setattr(session, "query", broken_query)

        with pytest.raises(StorageFailure) as exc_info:
            crud.get_movie(session, 1)
        assert exc_info.value.code == "STORAGE_FAILURE"
        assert not isinstance(exc_info.value, ConstraintViolation)
