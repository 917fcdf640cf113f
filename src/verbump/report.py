import dataclasses
import logging
import pathlib

__all__ = [
    "FieldChange",
    "UpdateReport",
]

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class FieldChange:
    field: str
    old: str
    new: str

    @property
    def changed(self) -> bool:
        return self.old != self.new


@dataclasses.dataclass
class UpdateReport:
    """Outcome of one adapter run, rendered by the command line layer."""

    path: pathlib.Path
    changes: list[FieldChange] = dataclasses.field(default_factory=list)
    warnings: list[str] = dataclasses.field(default_factory=list)
    written: bool = False

    def add_change(self, field: str, old: str, new: str) -> None:
        logger.info(f"{field}: {old} -> {new}")
        self.changes.append(FieldChange(field=field, old=old, new=new))

    def add_warning(self, msg: str) -> None:
        logger.warning(msg)
        self.warnings.append(msg)

    def get_change(self, field: str) -> FieldChange | None:
        for change in self.changes:
            if change.field == field:
                return change
        return None

    def format_lines(self) -> list[str]:
        lines = []
        for change in self.changes:
            lines.append(f"{change.field}: '{change.old}' -> '{change.new}'")
        for warning in self.warnings:
            lines.append(f"Warning: {warning}")
        if self.written:
            lines.append(f"Wrote {self.path}")
        else:
            lines.append(f"Left {self.path} unchanged")
        return lines
