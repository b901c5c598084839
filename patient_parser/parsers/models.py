# ===============================
# File: patient_parser/parsers/models.py
# ===============================
from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass
class FullName:
    last_name: str = ""
    first_name: str = ""
    middle_name: Optional[str] = None  # None = sin tercer componente (o vacío)

    def to_dict(self) -> Dict[str, str]:
        out = {"lastName": self.last_name, "firstName": self.first_name}
        if self.middle_name is not None:
            out["middleName"] = self.middle_name
        return out


@dataclass
class PatientRecord:
    full_name: FullName = field(default_factory=FullName)
    date_of_birth: str = ""  # YYYY-MM-DD
    primary_condition: str = ""

    def to_dict(self) -> Dict:
        """Wire shape returned by the HTTP endpoint and written by the inbox."""
        return {
            "fullName": self.full_name.to_dict(),
            "dateOfBirth": self.date_of_birth,
            "primaryCondition": self.primary_condition,
        }
