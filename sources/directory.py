"""Profile source backed by a registry folder and an assets folder

    registry_dir/<profileId>.json          registry documents
    assets_dir/<profileId>/profile.json    optional asset overrides
    assets_dir/<profileId>/<model>.glb     models named by assetPath
"""
import asyncio
import logging
from pathlib import Path

from core.errors import ResourceLoadError
from core.reader import ProfileSource
from pipeline import ProfileBuilder, load_json

LOG = logging.getLogger("xrprofiles.directory")


class DirectoryProfileSource(ProfileSource):
    def __init__(self, registry_dir, assets_dir=None, builder: ProfileBuilder = None):
        self.registry_dir = Path(registry_dir)
        self.assets_dir = Path(assets_dir) if assets_dir else None
        self.builder = builder or ProfileBuilder()

    def _asset_override_path(self, profile_id: str):
        if self.assets_dir is None:
            return None
        path = self.assets_dir / profile_id / "profile.json"
        return path if path.is_file() else None

    async def list_profiles(self):
        if not self.registry_dir.is_dir():
            raise ResourceLoadError(self.registry_dir, "registry folder not found")
        profiles = {}
        for path in sorted(self.registry_dir.glob("*.json")):
            profiles[path.stem] = {
                "path": str(path),
                "assets": str(self._asset_override_path(path.stem) or ""),
            }
        LOG.debug("found %d profile(s) in %s", len(profiles), self.registry_dir)
        return profiles

    async def load(self, profile_id: str):
        registry_path = self.registry_dir / f"{profile_id}.json"
        asset_path = self._asset_override_path(profile_id)
        registry_doc = await asyncio.to_thread(load_json, registry_path)
        asset_doc = None
        if asset_path:
            asset_doc = await asyncio.to_thread(load_json, asset_path)
        else:
            LOG.info("no asset overrides for %s", profile_id)
        return self.builder.build(registry_doc, asset_doc)

    def resolve_asset(self, profile_id: str, asset_path: str) -> str:
        if self.assets_dir is None:
            return asset_path
        return str(self.assets_dir / profile_id / asset_path)
