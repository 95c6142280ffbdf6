"""Error kinds raised while loading, validating and consuming profiles"""


class ProfileError(Exception):
    """Base for every fatal profile problem."""


class SchemaValidationError(ProfileError):
    """A document failed its JSON Schema check.

    `errors` holds one dict per schema violation with `path`, `message` and
    `validator` keys, sorted by document path.
    """

    def __init__(self, document_kind: str, errors):
        self.document_kind = document_kind
        self.errors = list(errors)
        lines = [f"{document_kind} document failed schema validation:"]
        for err in self.errors:
            lines.append(f"  {err['path'] or '<root>'}: {err['message']}")
        super().__init__("\n".join(lines))


class ProfileValidationError(ProfileError):
    """A structural rule that the schema cannot express was violated."""


class ResourceLoadError(ProfileError):
    def __init__(self, path, reason):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Unable to load {self.path}: {reason}")


class MissingAssetError(ProfileError):
    """A layout was consumed without an asset path."""
