"""JSON Schema checks for registry and asset documents, backed by jsonschema"""
import json
import logging
from pathlib import Path

from jsonschema import Draft7Validator

from core.errors import ResourceLoadError, SchemaValidationError

LOG = logging.getLogger("xrprofiles.schema")


class SchemaValidator:
    def __init__(self, schema: dict, document_kind: str):
        Draft7Validator.check_schema(schema)
        self._validator = Draft7Validator(schema)
        self.document_kind = document_kind

    @classmethod
    def from_file(cls, path, document_kind: str):
        path = Path(path)
        try:
            schema = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise ResourceLoadError(path, e) from e
        LOG.debug("loaded %s schema from %s", document_kind, path)
        return cls(schema, document_kind)

    def errors(self, document) -> list:
        """Return every violation as a dict, ordered by document path."""
        found = []
        for err in self._validator.iter_errors(document):
            found.append({
                "path": "/".join(str(p) for p in err.absolute_path),
                "message": err.message,
                "validator": err.validator,
            })
        found.sort(key=lambda e: e["path"])
        return found

    def validate(self, document):
        errors = self.errors(document)
        if errors:
            LOG.debug("%s document rejected with %d schema error(s)", self.document_kind, len(errors))
            raise SchemaValidationError(self.document_kind, errors)
