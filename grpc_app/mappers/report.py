from __future__ import annotations

from typing import List

from google.protobuf import json_format, struct_pb2
from pydantic import ValidationError

from application.dto import PickupPointReportDTO, ReportQueryDTO
from domain.common.exceptions import InvalidArgumentException
from shared.codes import BusinessCode


def report_query_from_struct(message: struct_pb2.Struct) -> ReportQueryDTO:
    """Struct{startDate, endDate, page, limit} -> ReportQueryDTO.

    Struct numbers arrive as doubles; integral values are accepted for page/limit.
    """
    payload = {k: v for k, v in json_format.MessageToDict(message).items() if v is not None}
    try:
        return ReportQueryDTO.model_validate(payload)
    except ValidationError as exc:
        first = exc.errors()[0] if exc.errors() else {}
        field = ".".join(str(loc) for loc in first.get("loc", ()))
        raise InvalidArgumentException(
            code=BusinessCode.PARAM_VALIDATION_ERROR,
            message=f"validation failed: {first.get('msg', 'unknown')}",
            error_type="ValidationError",
            field=field or None,
        ) from exc


def reports_to_struct(reports: List[PickupPointReportDTO]) -> struct_pb2.Struct:
    msg = struct_pb2.Struct()
    msg.update({"reports": [r.model_dump(mode="json", by_alias=True) for r in reports]})
    return msg
