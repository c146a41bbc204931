"""
Uniform result of every simulator operation.

A result is either aborted (``abort=True`` with a human-readable ``error``)
or successful (an ``explanation`` tag, the illustrative ``command`` string,
optional ``data`` and a ``full_render`` hint for renderers). Expected
failures travel through this value, never through exceptions.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class OperationResult:
    """Outcome of one operation."""

    abort: bool = False
    error: Optional[str] = None
    explanation: Optional[str] = None
    command: Optional[str] = None
    data: Dict[str, Any] = field(default_factory=dict)
    full_render: bool = False

    @classmethod
    def failure(cls, error: str) -> "OperationResult":
        """Aborted result; the transaction leaves state untouched."""
        return cls(abort=True, error=error)

    @classmethod
    def success(
        cls,
        explanation: str,
        command: str,
        data: Optional[Dict[str, Any]] = None,
        full_render: bool = False,
    ) -> "OperationResult":
        return cls(
            explanation=explanation,
            command=command,
            data=dict(data or {}),
            full_render=full_render,
        )

    @property
    def ok(self) -> bool:
        return not self.abort

    def to_dict(self) -> Dict[str, Any]:
        """Wire shape: ``{abort, error}`` or ``{explanation, command, data?, fullRender?}``."""
        if self.abort:
            return {"abort": True, "error": self.error}
        payload: Dict[str, Any] = {
            "explanation": self.explanation,
            "command": self.command,
        }
        if self.data:
            payload["data"] = dict(self.data)
        if self.full_render:
            payload["fullRender"] = True
        return payload
