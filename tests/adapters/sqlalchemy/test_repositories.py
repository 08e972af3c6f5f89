from __future__ import annotations

from typing import TYPE_CHECKING

from repocatalog.adapters.sqlalchemy import SqlAlchemyCanonicalFileRepository, canonical_file_table
from repocatalog.domain.model import IndexFile, OtherIdentifiers
from tests.helpers.files import make_canonical_file, make_donor

if TYPE_CHECKING:
    from sqlalchemy.orm import Session


def test_canonical_file_round_trips_as_a_document(sqlite_session: Session) -> None:
    file = make_canonical_file(
        "FI1",
        donors=[
            make_donor(
                "DO1",
                specimen_id=["SP1"],
                other_identifiers=OtherIdentifiers(tcga_sample_barcode=["TCGA-A1-01A"]),
            )
        ],
        repo_codes=("ega", "collaboratory"),
    )
    file.file_copies[0].index_file = IndexFile(object_id="idx-1", file_name="FI1.bam.bai")
    repository = SqlAlchemyCanonicalFileRepository(sqlite_session)

    repository.add(file)
    sqlite_session.commit()
    sqlite_session.expunge_all()

    assert repository.get_by_file_id("FI1") == file
    assert repository.get_by_file_id("FI404") is None


def test_add_all_inserts_in_batches_and_keeps_order(sqlite_session: Session) -> None:
    repository = SqlAlchemyCanonicalFileRepository(sqlite_session, batch_size=2)
    files = [make_canonical_file(f"FI{index}", object_id=f"obj-{index}") for index in range(5)]

    added = repository.add_all(iter(files))
    sqlite_session.commit()

    assert added == 5
    assert repository.count() == 5
    assert [file.id for file in repository.iter_files()] == [f"FI{index}" for index in range(5)]


def test_files_without_id_are_stored(sqlite_session: Session) -> None:
    repository = SqlAlchemyCanonicalFileRepository(sqlite_session)

    repository.add(make_canonical_file(None, object_id=None))
    sqlite_session.commit()

    [row] = sqlite_session.execute(canonical_file_table.select()).all()
    assert row.file_id is None
    assert row.object_id is None
    assert [file.id for file in repository.iter_files()] == [None]


def test_clear_removes_every_file(sqlite_session: Session) -> None:
    repository = SqlAlchemyCanonicalFileRepository(sqlite_session)
    repository.add_all([make_canonical_file("FI1"), make_canonical_file("FI2")])
    sqlite_session.commit()

    removed = repository.clear()
    sqlite_session.commit()

    assert removed == 2
    assert repository.count() == 0
