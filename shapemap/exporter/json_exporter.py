"""JSON exporter."""
import json
import logging
from pathlib import Path
from datetime import datetime
from typing import Any, Dict, List, Mapping

from shapemap.mapper.mapping import MappingDefinition
from shapemap.validator.errors import MappingValidationError

logger = logging.getLogger(__name__)


class JsonExporter:
    """Export validation results to JSON."""

    def build_report(
        self,
        mappings: Mapping[str, MappingDefinition],
        errors: List[MappingValidationError],
        strict_mode: bool,
    ) -> Dict[str, Any]:
        """Build the report dictionary."""
        return {
            "metadata": {
                "created_at": datetime.now().isoformat(),
                "strict_mode": strict_mode,
                "total_mappings": len(mappings),
                "total_errors": len(errors),
                "validation_result": "INVALID" if errors else "VALID",
            },
            "mappings": [m.to_dict() for m in mappings.values()],
            "errors": [e.to_dict() for e in errors],
        }

    def export(
        self,
        output_file: Path,
        mappings: Mapping[str, MappingDefinition],
        errors: List[MappingValidationError],
        strict_mode: bool,
    ) -> None:
        """Export to JSON file."""
        output_file = Path(output_file)
        output_file.parent.mkdir(parents=True, exist_ok=True)

        data = self.build_report(mappings, errors, strict_mode)

        with open(output_file, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, default=str)

        logger.info(f"Report written to {output_file}")
