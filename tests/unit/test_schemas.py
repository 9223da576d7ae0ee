"""Tests for request and response schemas."""

from datetime import UTC, date, datetime, timedelta
from uuid import uuid4

import pytest
from pydantic import ValidationError

from bookcatalog.schemas.books import (
    API_V2,
    BookCreate,
    BookResponse,
    BookResponseV2,
    PaginationParams,
)
from bookcatalog.schemas.common import PagedResult


def valid_body(**overrides) -> dict:
    body = {
        "title": "Clean Code",
        "author": "Robert C. Martin",
        "isbn": "978-0132350884",
        "publishedDate": "2008-08-11",
    }
    body.update(overrides)
    return body


class TestBookCreate:
    """Tests for book creation validation."""

    def test_valid_camel_case_body(self) -> None:
        """Test that a camelCase JSON body is accepted."""
        book = BookCreate.model_validate(valid_body())
        assert book.published_date == date(2008, 8, 11)

    def test_snake_case_names_accepted(self) -> None:
        """Test population by field name."""
        book = BookCreate(
            title="Clean Code",
            author="Robert C. Martin",
            isbn="978-0132350884",
            published_date=date(2008, 8, 11),
        )
        assert book.title == "Clean Code"

    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("title", "AB"),
            ("title", ""),
            ("author", "XY"),
            ("isbn", ""),
        ],
    )
    def test_rejects_short_fields(self, field: str, value: str) -> None:
        """Test minimum length rules."""
        with pytest.raises(ValidationError) as exc_info:
            BookCreate.model_validate(valid_body(**{field: value}))
        assert exc_info.value.errors()[0]["loc"] == (field,)

    def test_three_character_title_is_enough(self) -> None:
        """Test the minimum length boundary."""
        assert BookCreate.model_validate(valid_body(title="SQL")).title == "SQL"

    def test_strings_are_kept_verbatim(self) -> None:
        """Test that surrounding whitespace is stored and counts towards length."""
        book = BookCreate.model_validate(
            valid_body(title="  Clean Code  ", author=" AB ", isbn=" 978 ")
        )
        assert book.title == "  Clean Code  "
        assert book.author == " AB "
        assert book.isbn == " 978 "

    @pytest.mark.parametrize("field", ["title", "author", "isbn"])
    def test_rejects_whitespace_only(self, field: str) -> None:
        """Test that a value of only whitespace is treated as empty."""
        with pytest.raises(ValidationError, match="must not be blank") as exc_info:
            BookCreate.model_validate(valid_body(**{field: "    "}))
        assert exc_info.value.errors()[0]["loc"] == (field,)

    def test_rejects_future_date(self) -> None:
        """Test that tomorrow's date is rejected."""
        tomorrow = datetime.now(UTC).date() + timedelta(days=1)
        with pytest.raises(ValidationError, match="cannot be in the future"):
            BookCreate.model_validate(valid_body(publishedDate=tomorrow.isoformat()))

    def test_accepts_today(self) -> None:
        """Test that today's date is allowed."""
        today = datetime.now(UTC).date()
        book = BookCreate.model_validate(valid_body(publishedDate=today.isoformat()))
        assert book.published_date == today

    def test_missing_field(self) -> None:
        """Test that every field is required."""
        body = valid_body()
        del body["isbn"]
        with pytest.raises(ValidationError):
            BookCreate.model_validate(body)

    def test_client_supplied_id_is_ignored(self) -> None:
        """Test that extra fields such as id do not leak into the request."""
        book = BookCreate.model_validate(valid_body(id=str(uuid4())))
        assert not hasattr(book, "id")


class TestPaginationParams:
    """Tests for paged query parameters."""

    def test_defaults(self) -> None:
        """Test the default page and page size."""
        params = PaginationParams()
        assert params.page == 1
        assert params.page_size == 10
        assert params.search is None
        assert params.sort_by is None
        assert params.desc is False

    def test_camel_case_aliases(self) -> None:
        """Test that query-style camelCase names are accepted."""
        params = PaginationParams.model_validate(
            {"page": 2, "pageSize": 25, "sortBy": "author", "desc": True}
        )
        assert params.page_size == 25
        assert params.sort_by == "author"

    @pytest.mark.parametrize(
        "overrides",
        [{"page": 0}, {"page_size": 0}, {"page_size": 101}],
    )
    def test_bounds(self, overrides: dict) -> None:
        """Test page and page size limits."""
        with pytest.raises(ValidationError):
            PaginationParams(**overrides)

    def test_search_is_not_stripped(self) -> None:
        """Test that the search term is kept verbatim."""
        assert PaginationParams(search="  clean ").search == "  clean "


class TestResponses:
    """Tests for response shapes."""

    @pytest.fixture
    def book(self) -> BookResponse:
        return BookResponse(
            id=uuid4(),
            title="Clean Code",
            author="Robert C. Martin",
            isbn="978-0132350884",
            published_date=date(2008, 8, 11),
            created_at=datetime(2024, 1, 1, tzinfo=UTC),
        )

    def test_book_serialises_camel_case(self, book: BookResponse) -> None:
        """Test that JSON output uses camelCase keys."""
        data = book.model_dump(mode="json", by_alias=True)
        assert set(data) == {
            "id",
            "title",
            "author",
            "isbn",
            "publishedDate",
            "createdAt",
            "updatedAt",
        }

    def test_v2_adds_summary_and_version(self, book: BookResponse) -> None:
        """Test the v2 representation."""
        v2 = BookResponseV2.from_book(book)
        assert v2.summary == "Book by Robert C. Martin, published in 2008"
        assert v2.version == API_V2
        assert v2.id == book.id

    @pytest.mark.parametrize(
        ("total_count", "page_size", "expected_pages"),
        [(0, 10, 0), (7, 5, 2), (10, 5, 2), (11, 5, 3), (1, 100, 1)],
    )
    def test_total_pages(
        self, total_count: int, page_size: int, expected_pages: int
    ) -> None:
        """Test the page count is the ceiling of total over page size."""
        result = PagedResult[BookResponse].create(
            items=[], total_count=total_count, page=1, page_size=page_size
        )
        assert result.total_pages == expected_pages

    def test_paged_result_camel_case(self) -> None:
        """Test paged envelope keys."""
        result = PagedResult[BookResponse].create(
            items=[], total_count=0, page=1, page_size=10
        )
        assert set(result.model_dump(by_alias=True)) == {
            "items",
            "page",
            "pageSize",
            "totalCount",
            "totalPages",
        }
