"""Alert data model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from marketwatch.models._convert import opt_float, opt_str, parse_timestamp, str_tuple


@dataclass(frozen=True)
class Alert:
    """Market alert.

    ``severity`` and ``type`` are kept as the raw strings the feed sent;
    ``marketwatch.classify`` maps them to ranks and buckets.

    Attributes:
        id: Unique alert id.
        type: Alert type tag.
        severity: ``critical``, ``high``, ``medium`` or ``low``.
        message: Alert body.
        timestamp: When the alert was raised.
        title: Optional headline.
        action_required: Whether the user should act.
        affected_assets: Symbols the alert refers to.
        ai_core_accuracy: Model confidence in [0, 1].
    """

    id: str
    type: str
    severity: str
    message: str
    timestamp: datetime
    title: str | None = None
    action_required: bool = False
    affected_assets: tuple[str, ...] = ()
    ai_core_accuracy: float | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Alert:
        return cls(
            id=str(data["id"]),
            type=str(data.get("type", "")),
            severity=str(data["severity"]),
            message=str(data.get("message", "")),
            timestamp=parse_timestamp(data["timestamp"]),
            title=opt_str(data.get("title")),
            action_required=bool(data.get("actionRequired", False)),
            affected_assets=str_tuple(data.get("affectedAssets")),
            ai_core_accuracy=opt_float(data.get("aiCoreAccuracy")),
        )
