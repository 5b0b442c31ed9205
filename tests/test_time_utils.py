from datetime import datetime, timezone

import pytest

from council_portal.utils.time_utils import from_epoch_ms, to_epoch_ms


def test_epoch_ms_conversion_is_utc() -> None:
    moment = datetime(2024, 4, 1, 9, 30)

    assert to_epoch_ms(moment) == 1711963800000
    assert from_epoch_ms(1711963800000) == moment


def test_from_epoch_ms_accepts_iso_strings_and_aware_datetimes() -> None:
    assert from_epoch_ms("2024-04-01T09:30:00Z") == datetime(2024, 4, 1, 9, 30)
    assert from_epoch_ms(datetime(2024, 4, 1, 9, 30, tzinfo=timezone.utc)) == datetime(2024, 4, 1, 9, 30)
    assert from_epoch_ms(None) is None


def test_from_epoch_ms_rejects_booleans() -> None:
    with pytest.raises(ValueError):
        from_epoch_ms(True)
