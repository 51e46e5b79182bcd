from __future__ import annotations

import pytest

from creatorsync.domain.model import (
    ExternalIdKind,
    InvalidExternalIdError,
    parse_external_id,
)
from tests.helpers.catalog import channel_id


def test_channel_id_is_kept_verbatim() -> None:
    identifier = parse_external_id(channel_id("x"))

    assert identifier.kind is ExternalIdKind.CHANNEL_ID
    assert identifier.value == channel_id("x")
    assert str(identifier) == channel_id("x")


def test_handle_is_stored_without_at_sign() -> None:
    identifier = parse_external_id(" @some.creator ")

    assert identifier.kind is ExternalIdKind.HANDLE
    assert identifier.value == "some.creator"
    assert str(identifier) == "@some.creator"


@pytest.mark.parametrize("raw", ["", "UCshort", "@ab", "plainname", "@has space"])
def test_malformed_identifiers_are_rejected(raw: str) -> None:
    with pytest.raises(InvalidExternalIdError):
        parse_external_id(raw)
