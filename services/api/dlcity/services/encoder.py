from __future__ import annotations

from typing import Mapping

from dlcity.schemas.centers import CenterResult
from dlcity.services.errors import EncodeError
from pydantic import BaseModel, TypeAdapter
from pydantic_core import PydanticSerializationError

_aggregate_adapter = TypeAdapter(dict[str, CenterResult])


def encode_model(model: BaseModel) -> bytes:
    """Serialize one response model with its wire (camelCase) names.

    Unset optional fields are left out, so a successful CenterResult has no
    ``error`` key.
    """
    try:
        return model.model_dump_json(by_alias=True, exclude_none=True).encode("utf-8")
    except PydanticSerializationError as exc:
        raise EncodeError(str(exc)) from exc


def encode_aggregate(aggregate: Mapping[str, CenterResult]) -> bytes:
    try:
        return _aggregate_adapter.dump_json(dict(aggregate), by_alias=True, exclude_none=True)
    except PydanticSerializationError as exc:
        raise EncodeError(str(exc)) from exc
