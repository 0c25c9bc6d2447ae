"""Schema validation for collaborator payloads."""

from typing import Dict, List, Mapping

REQUIRED_FIELDS: Dict[str, List[str]] = {
    "on_court_players": [
        "gamesPlayed",
        "teamPoints",
        "oppPoints",
        "teamPossessionsNet",
        "oppPossessionsNet",
    ],
}


class SchemaValidationError(ValueError):
    pass


def validate_table(name: str, rows: list) -> None:
    """Validate a payload table: a list of mappings carrying the required fields."""
    if not isinstance(rows, list):
        raise SchemaValidationError(f"{name} must be a list, got {type(rows).__name__}")
    required = REQUIRED_FIELDS.get(name, [])
    for idx, row in enumerate(rows):
        if not isinstance(row, Mapping):
            raise SchemaValidationError(f"{name} row {idx} is not an object")
        missing = [field for field in required if field not in row]
        if missing:
            raise SchemaValidationError(
                f"{name} row {idx} missing fields: {', '.join(missing)}"
            )
