"""Demo catalogue loaded into the in-memory store at startup.

"Clean Architecture" appears twice with the same ISBN on purpose: the
store does not enforce ISBN uniqueness.
"""

from datetime import date

from bookcatalog.models.book import Book

SEED_BOOKS: tuple[Book, ...] = (
    Book(
        title="Clean Code",
        author="Robert C. Martin",
        isbn="978-0132350884",
        published_date=date(2008, 8, 11),
    ),
    Book(
        title="The Clean Architecture",
        author="Robert C. Martin",
        isbn="978-0134494166",
        published_date=date(2017, 9, 20),
    ),
    Book(
        title="Design Patterns",
        author="Gang of Four",
        isbn="978-0201633610",
        published_date=date(1994, 10, 21),
    ),
    Book(
        title="Refactoring",
        author="Martin Fowler",
        isbn="978-0201485677",
        published_date=date(1999, 7, 8),
    ),
    Book(
        title="Domain-Driven Design",
        author="Eric Evans",
        isbn="978-0321125217",
        published_date=date(2003, 8, 30),
    ),
    Book(
        title="Test Driven Development",
        author="Kent Beck",
        isbn="978-0321146533",
        published_date=date(2002, 11, 18),
    ),
    Book(
        title="The Pragmatic Programmer",
        author="Andrew Hunt",
        isbn="978-0201616224",
        published_date=date(1999, 10, 20),
    ),
    Book(
        title="Code Complete",
        author="Steve McConnell",
        isbn="978-0735619678",
        published_date=date(2004, 6, 9),
    ),
    Book(
        title="Working Effectively with Legacy Code",
        author="Michael Feathers",
        isbn="978-0131177055",
        published_date=date(2004, 9, 22),
    ),
    Book(
        title="You Don't Know JS",
        author="Kyle Simpson",
        isbn="978-1491924464",
        published_date=date(2015, 5, 1),
    ),
    Book(
        title="Effective Java",
        author="Joshua Bloch",
        isbn="978-0134685991",
        published_date=date(2018, 1, 6),
    ),
    Book(
        title="Clean Architecture",
        author="Robert C. Martin",
        isbn="978-0134494166",
        published_date=date(2017, 9, 20),
    ),
)
