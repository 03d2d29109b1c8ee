from __future__ import annotations

from enum import Enum
from typing import Optional

from cvss import CVSS3
from cvss.exceptions import CVSSError


class Severity(Enum):
    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def from_score(cls, score: float) -> Optional["Severity"]:
        if score >= 9.0:
            return cls.CRITICAL
        if score >= 7.0:
            return cls.HIGH
        if score >= 4.0:
            return cls.MEDIUM
        if score > 0.0:
            return cls.LOW
        return None

    @classmethod
    def from_str(cls, value: str) -> Optional["Severity"]:
        """Parse a severity from a label, a numeric score or a CVSS v3 vector.

        - Labels (case-insensitive): critical, high, medium, moderate->MEDIUM, low, unknown
        - CVSS v3 vector (starts with "CVSS:3"): base score computed via cvss
        - Numeric string: standard CVSS thresholds
        """
        s = value.strip()
        if not s:
            return None
        u = s.upper()
        label_map = {
            "CRITICAL": cls.CRITICAL,
            "HIGH": cls.HIGH,
            "MEDIUM": cls.MEDIUM,
            "MODERATE": cls.MEDIUM,
            "LOW": cls.LOW,
            "UNKNOWN": cls.UNKNOWN,
        }
        if u in label_map:
            return label_map[u]

        if u.startswith("CVSS:3"):
            try:
                base = float(CVSS3(s).scores()[0])
            except (CVSSError, ValueError, IndexError):
                return None
            return cls.from_score(base)

        try:
            return cls.from_score(float(s))
        except ValueError:
            return None
