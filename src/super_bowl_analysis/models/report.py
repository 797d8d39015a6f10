"""
ModelReport – uniform result object for every model stage.
"""
from dataclasses import dataclass, field
from typing import Any, Dict

STATUS_OK = "ok"
STATUS_INSUFFICIENT = "insufficient data"


@dataclass
class ModelReport:
    """Outcome of one model fit: status, printable summary and headline numbers."""
    name: str
    status: str = STATUS_OK
    summary: str = ""
    metrics: Dict[str, float] = field(default_factory=dict)
    details: Dict[str, Any] = field(default_factory=dict)
    result: Any = None  # fitted statsmodels / sklearn object

    @property
    def ok(self) -> bool:
        return self.status == STATUS_OK

    @classmethod
    def skipped(cls, name: str, reason: str) -> "ModelReport":
        """Report for a stage whose preconditions were not met."""
        return cls(name=name, status=STATUS_INSUFFICIENT,
                   summary=f"{name}: {STATUS_INSUFFICIENT} ({reason})",
                   details={"reason": reason})

    def __str__(self) -> str:
        return self.summary
