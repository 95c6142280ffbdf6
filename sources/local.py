"""Profile source for a hand-picked set of local files

Mirrors the viewer's file picker: `profile.json` is the asset override
document, any other `.json` file is the registry document, and `.glb` /
`.gltf` files are models addressable by file name.
"""
import asyncio
import logging
from pathlib import Path

from core.errors import ProfileError, ProfileValidationError
from core.reader import ProfileSource
from pipeline import ProfileBuilder, load_json

LOG = logging.getLogger("xrprofiles.local")

ASSET_OVERRIDE_NAME = "profile.json"
MODEL_SUFFIXES = (".glb", ".gltf")


class LocalProfileSource(ProfileSource):
    def __init__(self, registry_path, asset_path=None, model_paths=(), builder: ProfileBuilder = None):
        self.registry_path = Path(registry_path)
        self.asset_path = Path(asset_path) if asset_path else None
        self.models = {Path(p).name: str(Path(p)) for p in model_paths}
        self.builder = builder or ProfileBuilder()
        self.profile = None

    @classmethod
    def from_files(cls, paths, builder: ProfileBuilder = None):
        registry_paths = []
        asset_path = None
        models = []
        for p in map(Path, paths):
            if p.suffix.lower() in MODEL_SUFFIXES:
                models.append(p)
            elif p.name == ASSET_OVERRIDE_NAME:
                asset_path = p
            elif p.suffix.lower() == ".json":
                registry_paths.append(p)
            else:
                LOG.debug("ignoring %s", p)
        if not registry_paths:
            raise ProfileError("No registry profile selected")
        if len(registry_paths) > 1:
            raise ProfileValidationError(
                f"More than one registry profile selected: {', '.join(p.name for p in registry_paths)}")
        return cls(registry_paths[0], asset_path, models, builder)

    async def build(self):
        registry_doc = await asyncio.to_thread(load_json, self.registry_path)
        asset_doc = None
        if self.asset_path:
            asset_doc = await asyncio.to_thread(load_json, self.asset_path)
        self.profile = self.builder.build(registry_doc, asset_doc)
        LOG.info("local profile %s built from %s", self.profile.profile_id, self.registry_path.name)
        return self.profile

    async def list_profiles(self):
        if self.profile is None:
            await self.build()
        return {self.profile.profile_id: {"path": str(self.registry_path)}}

    async def load(self, profile_id: str):
        if self.profile is None:
            await self.build()
        if profile_id != self.profile.profile_id:
            raise ProfileError(f"Local files describe {self.profile.profile_id!r}, not {profile_id!r}")
        return self.profile

    def resolve_asset(self, profile_id: str, asset_path: str) -> str:
        if asset_path in self.models:
            return self.models[asset_path]
        # fall back to a model stored next to the override document
        if self.asset_path is not None:
            sibling = self.asset_path.parent / asset_path
            if sibling.is_file():
                return str(sibling)
        return asset_path
