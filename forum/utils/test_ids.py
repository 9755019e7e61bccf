# forum/utils/test_ids.py
import uuid

import pytest

from forum.core.errors import InvalidReference
from forum.utils.ids import new_id, require_id


def test_new_ids_are_unique_uuids():
    a, b = new_id(), new_id()
    assert a != b
    assert str(uuid.UUID(a)) == a


def test_require_id_normalises():
    value = uuid.uuid4()
    assert require_id(value) == str(value)
    assert require_id(f"  {str(value).upper()} ") == str(value)


@pytest.mark.parametrize('bad', [None, '', '   ', 'abc', 123])
def test_require_id_rejects_malformed(bad):
    with pytest.raises(InvalidReference):
        require_id(bad, 'topic id')
