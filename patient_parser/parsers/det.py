from typing import Sequence

from patient_parser.validation.errors import MissingPrimaryCondition

from .base import field_at

# DET-4: posición fija (no se escanea por contenido como en PRS)
PRIMARY_CONDITION_INDEX = 4


def interpret_det(fields: Sequence[str]) -> str:
    if len(fields) <= PRIMARY_CONDITION_INDEX:
        raise MissingPrimaryCondition(
            f"Primary condition is missing in DET segment "
            f"(expected at least {PRIMARY_CONDITION_INDEX + 1} fields, got {len(fields)})"
        )
    condition = field_at(fields, PRIMARY_CONDITION_INDEX)
    if not condition:
        raise MissingPrimaryCondition("Primary condition is missing in DET segment")
    return condition
