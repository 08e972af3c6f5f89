from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest

from repocatalog.domain.indexing import IndexNamingScheme

ALIAS = "icgc-repository"


@pytest.fixture
def naming() -> IndexNamingScheme:
    return IndexNamingScheme()


def test_new_name_embeds_a_fixed_width_utc_stamp(naming: IndexNamingScheme) -> None:
    moment = datetime(2024, 3, 7, 9, 5, 1, 42, tzinfo=UTC)

    assert naming.new_name(ALIAS, moment) == "icgc-repository-20240307090501000042"


def test_new_name_converts_to_utc_and_assumes_utc_for_naive(naming: IndexNamingScheme) -> None:
    eastern = timezone(timedelta(hours=-5))

    assert naming.new_name("a", datetime(2024, 1, 1, 19, tzinfo=eastern)) == (
        "a-20240102000000000000"
    )
    assert naming.new_name("a", datetime(2024, 1, 1, 19)) == "a-20240101190000000000"


def test_lexical_order_is_chronological(naming: IndexNamingScheme) -> None:
    moments = [
        datetime(2023, 12, 31, 23, 59, 59, 999999, tzinfo=UTC),
        datetime(2024, 1, 1, tzinfo=UTC),
        datetime(2024, 1, 1, 0, 0, 0, 1, tzinfo=UTC),
        datetime(2024, 10, 2, tzinfo=UTC),
    ]
    names = [naming.new_name(ALIAS, moment) for moment in moments]

    assert sorted(names) == names
    assert [naming.extract_timestamp(name) for name in names] == moments


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("icgc-repository-20240307090501000042", True),
        ("icgc-repository-text-20240307090501000042", False),
        ("icgc-repository-2024030709050100004", False),
        ("icgc-repository-2024030709050100004x", False),
        ("icgc-repository", False),
        ("other-20240307090501000042", False),
    ],
)
def test_belongs_to(naming: IndexNamingScheme, name: str, *, expected: bool) -> None:
    assert naming.belongs_to(name, ALIAS) is expected


def test_extract_timestamp_rejects_foreign_names(naming: IndexNamingScheme) -> None:
    with pytest.raises(ValueError, match="Not a generation name"):
        naming.extract_timestamp("icgc-repository")


def test_next_name_uses_the_clock_when_it_is_ahead(naming: IndexNamingScheme) -> None:
    existing = ["icgc-repository-20240101000000000000"]
    now = datetime(2024, 2, 1, tzinfo=UTC)

    assert naming.next_name(ALIAS, existing, now) == naming.new_name(ALIAS, now)


def test_next_name_bumps_past_newer_generations(naming: IndexNamingScheme) -> None:
    existing = [
        "icgc-repository-20240101000000000000",
        "icgc-repository-20250101000000000000",
        "unrelated-20990101000000000000",
    ]

    name = naming.next_name(ALIAS, existing, datetime(2024, 6, 1, tzinfo=UTC))

    assert name == "icgc-repository-20250101000000000001"
    assert all(name > other for other in existing if naming.belongs_to(other, ALIAS))


def test_generations_are_listed_newest_first(naming: IndexNamingScheme) -> None:
    names = [
        "icgc-repository-20240101000000000000",
        "icgc-repository-20240301000000000000",
        "icgc-repository",
        "icgc-repository-20240201000000000000",
    ]

    assert naming.generations(names, ALIAS) == [
        "icgc-repository-20240301000000000000",
        "icgc-repository-20240201000000000000",
        "icgc-repository-20240101000000000000",
    ]
