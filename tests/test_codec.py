from dataclasses import dataclass

import pytest
from pydantic import BaseModel

from restapi.networking.codec import JsonCodec


class Todo(BaseModel):
    id: int
    title: str


@dataclass
class Tag:
    name: str


def test_decodes_models_dataclasses_and_builtins():
    codec = JsonCodec()

    assert codec.decode(b'{"id": 1, "title": "a"}', Todo) == Todo(id=1, title="a")
    assert codec.decode(b'[{"name": "x"}]', list[Tag]) == [Tag(name="x")]
    assert codec.decode(b'"Success"', str) == "Success"


def test_decode_rejects_wrong_shape():
    codec = JsonCodec()

    with pytest.raises(ValueError):
        codec.decode(b'["Success"]', str)
    with pytest.raises(ValueError):
        codec.decode(b'{"id": "one"}', Todo)


def test_encode_uses_value_type():
    codec = JsonCodec()

    assert codec.encode(Todo(id=2, title="b")) == b'{"id":2,"title":"b"}'
    assert codec.encode(Tag(name="x")) == b'{"name":"x"}'
    assert codec.encode({"key": "value"}) == b'{"key":"value"}'


def test_encode_can_drop_none_fields():
    class Note(BaseModel):
        text: str
        author: str | None = None

    assert JsonCodec(exclude_none=True).encode(Note(text="t")) == b'{"text":"t"}'


def test_decode_does_not_coerce_strings_into_numbers_or_bools():
    codec = JsonCodec()

    with pytest.raises(ValueError):
        codec.decode(b'["1", "2"]', list[int])
    with pytest.raises(ValueError):
        codec.decode(b'"yes"', bool)


def test_lax_decoding_is_opt_in():
    codec = JsonCodec(strict=False)

    assert codec.decode(b'["1", "2"]', list[int]) == [1, 2]
    assert codec.decode(b'"yes"', bool) is True
