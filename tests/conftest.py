from typing import Callable, Optional

import pytest

from place_resolver.models import PointRecord

BASE_LAT = 43.0
BASE_LON = -77.0


@pytest.fixture
def make_record() -> Callable[..., PointRecord]:
    def _make(
        name: Optional[str],
        lat: float = BASE_LAT,
        lon: float = BASE_LON,
        **fields,
    ) -> PointRecord:
        return PointRecord(name=name, latitude=lat, longitude=lon, **fields)

    return _make
