"""Profile build pipeline: schema check -> structural check -> expand -> merge"""
import json
import logging
from pathlib import Path

from asset_tools import build as asset_build
from asset_tools.build import build_asset_profile
from core.errors import ResourceLoadError
from core.profile import AssetOverrides, Profile
from core.schema import SchemaValidator
from registry_tools import validate as registry_validate
from registry_tools.expand import expand_registry_profile
from registry_tools.validate import validate_registry_profile

LOG = logging.getLogger("xrprofiles.pipeline")


def load_json(path) -> dict:
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError) as e:
        raise ResourceLoadError(path, e) from e


class ProfileBuilder:
    def __init__(self, registry_validator: SchemaValidator = None, asset_validator: SchemaValidator = None,
                 strict: bool = False):
        self.registry_validator = registry_validator or SchemaValidator.from_file(
            registry_validate.SCHEMA_PATH, "registry")
        self.asset_validator = asset_validator or SchemaValidator.from_file(
            asset_build.SCHEMA_PATH, "asset")
        self.strict = strict

    def build(self, registry_doc: dict, asset_doc: dict = None) -> Profile:
        self.registry_validator.validate(registry_doc)
        if asset_doc is None:
            overrides = AssetOverrides.empty(registry_doc["profileId"])
        else:
            self.asset_validator.validate(asset_doc)
            overrides = AssetOverrides.from_dict(asset_doc)

        validate_registry_profile(registry_doc)
        expanded = expand_registry_profile(registry_doc)
        profile = build_asset_profile(overrides, expanded, strict=self.strict)
        LOG.info("built profile %s (%s)", profile.profile_id, ", ".join(profile.layouts))
        return profile

    def build_files(self, registry_path, asset_path=None) -> Profile:
        registry_doc = load_json(registry_path)
        asset_doc = load_json(asset_path) if asset_path else None
        return self.build(registry_doc, asset_doc)
