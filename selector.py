"""Profile and handedness selection

Profiles come from a repository source, plus an optional local source built
from hand-picked files. The local profile joins the listing when the
repository does not already list its id.

Every `select_profile` call takes a new request number. When its load
finishes, the result is applied only if no newer request has started since;
older results are dropped, so the most recent request always wins.
"""
import logging

from core.errors import ProfileError
from core.reader import ProfileSource
from core.state import GamepadState, MockInputSource
from core.store import MemoryStore, SelectionStore
from motion_controller import MotionController

LOG = logging.getLogger("xrprofiles.selector")

PROFILE_KEY = "profileId"
HANDEDNESS_KEY = "handedness"

SELECTION_CHANGE = "selectionchange"
SELECTION_CLEAR = "selectionclear"


class ProfileSelector:
    def __init__(self, source: ProfileSource, store: SelectionStore = None, local: ProfileSource = None):
        self.source = source
        self.local = local
        self.store = store or MemoryStore()
        self.profiles_list = None
        self.profile = None
        self.handedness = None
        self._request_seq = 0
        self._subs = []

    def subscribe(self, callback):
        """`callback(event, selector)` runs on every selection change or clear."""
        self._subs.append(callback)

    def _emit(self, event: str):
        LOG.debug("%s: profile=%s handedness=%s", event,
                  self.profile.profile_id if self.profile else None, self.handedness)
        for cb in self._subs:
            try:
                cb(event, self)
            except Exception:
                LOG.exception("subscriber callback failed")

    def clear(self):
        self.profile = None
        self.handedness = None
        self._emit(SELECTION_CLEAR)

    async def _local_profile_id(self):
        if self.local is None:
            return None
        return next(iter(await self.local.list_profiles()), None)

    async def list_profiles(self, refresh: bool = False):
        """Repository profiles, then the local profile if its id is not among them."""
        if self.profiles_list is None or refresh:
            self.profiles_list = await self.source.list_profiles()
        profiles = dict(self.profiles_list)
        if self.local is not None:
            for profile_id, info in (await self.local.list_profiles()).items():
                profiles.setdefault(profile_id, dict(info, local=True))
        return profiles

    async def restore(self):
        """Select the stored profile if it is still listed, else the first one."""
        profiles = await self.list_profiles()
        if not profiles:
            LOG.warning("no profiles available")
            self.clear()
            return False
        stored = self.store.get(PROFILE_KEY)
        profile_id = stored if stored in profiles else next(iter(profiles))
        return await self.select_profile(profile_id)

    async def select_profile(self, profile_id: str) -> bool:
        """Load and apply `profile_id`; return False if a newer request superseded it."""
        self._request_seq += 1
        request = self._request_seq
        try:
            source = self.local if profile_id == await self._local_profile_id() else self.source
            profile = await source.load(profile_id)
        except ProfileError:
            if request != self._request_seq:
                LOG.debug("dropping failed load of %s from superseded request %d", profile_id, request)
                return False
            raise

        if request != self._request_seq:
            LOG.debug("discarding stale load of %s (request %d, latest %d)",
                      profile_id, request, self._request_seq)
            return False

        self.profile = profile
        self.store.set(PROFILE_KEY, profile.profile_id)

        stored = self.store.get(HANDEDNESS_KEY)
        handedness = stored if stored in profile.layouts else next(iter(profile.layouts))
        self.select_handedness(handedness)
        return True

    def select_handedness(self, handedness: str):
        if self.profile is None:
            raise ProfileError("No profile selected")
        if handedness not in self.profile.layouts:
            raise ProfileError(f"Profile {self.profile.profile_id} has no {handedness!r} layout")
        self.handedness = handedness
        self.store.set(HANDEDNESS_KEY, handedness)
        self._emit(SELECTION_CHANGE)

    def mock_input_source(self, handedness: str = None) -> MockInputSource:
        """Input source for the current profile: a zeroed gamepad for the layout."""
        if self.profile is None:
            raise ProfileError("No profile selected")
        handedness = handedness or self.handedness
        gamepad = GamepadState.for_layout(self.profile.layout_for(handedness), self.profile.profile_id)
        return MockInputSource.for_gamepad(gamepad, handedness)

    async def create_motion_controller(self, input_source: MockInputSource = None) -> MotionController:
        """Build a runtime for `input_source`, or for the current selection.

        The input source's profile ids are tried in order against the known
        profiles. The local profile is used only when it is the first match;
        any other match is loaded from the repository source. The chosen
        layout must name an asset.
        """
        if input_source is None:
            input_source = self.mock_input_source()
        profiles = await self.list_profiles()
        match = next((pid for pid in input_source.profiles if pid in profiles), None)
        if match is None:
            raise ProfileError(f"No matching profile found for {', '.join(input_source.profiles) or 'input source'}")

        source = self.local if match == await self._local_profile_id() else self.source
        profile = await source.load(match)
        layout = profile.layout_for(input_source.handedness)
        asset_path = source.resolve_asset(profile.profile_id, layout.require_asset_path())
        LOG.debug("motion controller for %s %s from %s", match, input_source.handedness,
                  "local files" if source is self.local else "repository")
        return MotionController(profile, input_source.handedness, asset_path)
