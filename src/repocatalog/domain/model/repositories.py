"""Registry of the repositories that host catalogued files."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final

from repocatalog.domain.model.enums import (
    Access,
    RepositoryEnvironment,
    RepositorySource,
    RepositoryStorage,
    RepositoryType,
)


@dataclass(frozen=True, slots=True, kw_only=True)
class Repository:
    code: str
    name: str
    type: RepositoryType
    source: RepositorySource
    storage: RepositoryStorage
    environment: RepositoryEnvironment
    access: frozenset[Access] = field(default_factory=lambda: frozenset({Access.CONTROLLED}))
    country: str
    timezone: str
    base_url: str

    @property
    def data_path(self) -> str:
        return self.type.data_path

    @property
    def metadata_path(self) -> str:
        return self.type.metadata_path


REPOSITORIES: Final[tuple[Repository, ...]] = (
    Repository(
        code="aws-virginia",
        name="AWS - Virginia",
        type=RepositoryType.S3,
        source=RepositorySource.AWS,
        storage=RepositoryStorage.OBJECT,
        environment=RepositoryEnvironment.CLOUD,
        access=frozenset({Access.OPEN, Access.CONTROLLED}),
        country="US",
        timezone="America/New_York",
        base_url="https://virginia.cloud.icgc.org/",
    ),
    Repository(
        code="collaboratory",
        name="Collaboratory - Toronto",
        type=RepositoryType.S3,
        source=RepositorySource.COLLAB,
        storage=RepositoryStorage.OBJECT,
        environment=RepositoryEnvironment.CLOUD,
        access=frozenset({Access.OPEN, Access.CONTROLLED}),
        country="CA",
        timezone="America/Toronto",
        base_url="https://storage.cancercollaboratory.org/",
    ),
    Repository(
        code="ega",
        name="EGA - United Kingdom",
        type=RepositoryType.EGA,
        source=RepositorySource.EGA,
        storage=RepositoryStorage.FILE,
        environment=RepositoryEnvironment.HPC,
        country="GB",
        timezone="Europe/London",
        base_url="https://ega-archive.org/",
    ),
    Repository(
        code="gdc",
        name="GDC - Chicago",
        type=RepositoryType.GDC,
        source=RepositorySource.GDC,
        storage=RepositoryStorage.OBJECT,
        environment=RepositoryEnvironment.CLOUD,
        access=frozenset({Access.OPEN, Access.CONTROLLED}),
        country="US",
        timezone="America/Chicago",
        base_url="https://api.gdc.cancer.gov/",
    ),
    Repository(
        code="pdc",
        name="PDC - Chicago",
        type=RepositoryType.PDC,
        source=RepositorySource.PDC,
        storage=RepositoryStorage.OBJECT,
        environment=RepositoryEnvironment.CLOUD,
        country="US",
        timezone="America/Chicago",
        base_url="https://bionimbus-pdc.opensciencedatacloud.org/",
    ),
    Repository(
        code="pcawg-chicago-icgc",
        name="PCAWG - Chicago (ICGC)",
        type=RepositoryType.GNOS,
        source=RepositorySource.PCAWG,
        storage=RepositoryStorage.FILE,
        environment=RepositoryEnvironment.HPC,
        country="US",
        timezone="America/Chicago",
        base_url="https://gtrepo-osdc-icgc.annailabs.com/",
    ),
    Repository(
        code="pcawg-heidelberg",
        name="PCAWG - Heidelberg",
        type=RepositoryType.GNOS,
        source=RepositorySource.PCAWG,
        storage=RepositoryStorage.FILE,
        environment=RepositoryEnvironment.HPC,
        country="DE",
        timezone="Europe/Berlin",
        base_url="https://gtrepo-dkfz.annailabs.com/",
    ),
    Repository(
        code="pcawg-tokyo",
        name="PCAWG - Tokyo",
        type=RepositoryType.GNOS,
        source=RepositorySource.PCAWG,
        storage=RepositoryStorage.FILE,
        environment=RepositoryEnvironment.HPC,
        country="JP",
        timezone="Asia/Tokyo",
        base_url="https://gtrepo-riken.annailabs.com/",
    ),
)

_BY_CODE: Final[dict[str, Repository]] = {repository.code: repository for repository in REPOSITORIES}


def get_repositories() -> tuple[Repository, ...]:
    return REPOSITORIES


def get_repository(code: str) -> Repository | None:
    return _BY_CODE.get(code)
