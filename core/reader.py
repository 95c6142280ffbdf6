"""Base profile source abstraction"""
import abc


class ProfileSource(abc.ABC):
    @abc.abstractmethod
    async def list_profiles(self):
        """Return a dict of profile id -> description."""
        raise NotImplementedError

    @abc.abstractmethod
    async def load(self, profile_id: str):
        """Return the concrete Profile for `profile_id`."""
        raise NotImplementedError

    def resolve_asset(self, profile_id: str, asset_path: str) -> str:
        """Map an asset path from a profile to something the viewer can open."""
        return asset_path
