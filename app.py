"""Entry point for xrprofiles

Builds, validates and inspects WebXR input profiles assembled from a
registry document and an optional asset override document.
"""
import argparse
import asyncio
import json
import logging
import sys

from asset_tools.verify import verify_asset_nodes
from config import AppConfig, load_config
from core.errors import ProfileError
from core.state import GamepadState
from core.store import MemoryStore, YamlFileStore
from motion_controller import MotionController
from pipeline import ProfileBuilder
from selector import ProfileSelector
from sources.directory import DirectoryProfileSource
from sources.local import LocalProfileSource

LOG = logging.getLogger("xrprofiles")

MODULE_MAP = {
    "registry": "xrprofiles.registry",
    "assets": "xrprofiles.assets",
    "pipeline": "xrprofiles.pipeline",
    "schema": "xrprofiles.schema",
    "selector": "xrprofiles.selector",
    "motion": "xrprofiles.motion",
    "store": "xrprofiles.store",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="WebXR input profile toolchain")
    parser.add_argument("--config", help="YAML config file")
    parser.add_argument("--log-level", default=None,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        help="Logging level (default: INFO)")
    parser.add_argument("--log-format", default=None,
                        help="Logging format string (default: %%(levelname)s:%%(name)s:%%(message)s)")
    parser.add_argument("--debug-modules", nargs="*", default=None,
                        help="Modules to set to DEBUG level (e.g., 'registry', 'assets', 'selector')")
    parser.add_argument("--strict", action="store_true",
                        help="Treat overrides for unknown layouts or components as errors")
    sub = parser.add_subparsers(dest="command", required=True)

    def add_inputs(p):
        p.add_argument("--registry", required=True, help="Registry profile JSON")
        p.add_argument("--asset", help="Asset override JSON (profile.json)")

    build = sub.add_parser("build", help="Validate, expand and merge into a concrete profile")
    add_inputs(build)
    build.add_argument("--output", help="Write the profile here instead of stdout")

    validate = sub.add_parser("validate", help="Validate the documents only")
    add_inputs(validate)

    lst = sub.add_parser("list", help="List profiles in a registry folder")
    lst.add_argument("--registry-dir", help="Folder of <profileId>.json registry documents")
    lst.add_argument("--assets-dir", help="Folder of <profileId>/profile.json overrides")
    lst.add_argument("--local", nargs="*", default=[],
                     help="Local registry, profile.json and model files to list alongside the folder")

    verify = sub.add_parser("verify", help="Check model files for every animated node")
    add_inputs(verify)
    verify.add_argument("--handedness", help="Only check this layout")
    verify.add_argument("--model", nargs="*", default=[], help="Model files, matched to assetPath by name")

    simulate = sub.add_parser("simulate", help="Feed a mock gamepad and print component data")
    add_inputs(simulate)
    simulate.add_argument("--handedness", required=True)
    simulate.add_argument("--button", action="append", default=[], metavar="INDEX=VALUE")
    simulate.add_argument("--axis", action="append", default=[], metavar="INDEX=VALUE")
    simulate.add_argument("--touched", action="append", type=int, default=[], metavar="INDEX")
    simulate.add_argument("--pressed", action="append", type=int, default=[], metavar="INDEX")
    return parser


def configure_logging(cfg: AppConfig):
    logging.basicConfig(level=getattr(logging, cfg.log_level), format=cfg.log_format)
    for module in cfg.debug_modules:
        logger_name = MODULE_MAP.get(module, f"xrprofiles.{module}")
        logging.getLogger(logger_name).setLevel(logging.DEBUG)


def resolve_config(args) -> AppConfig:
    cfg = load_config(args.config) if args.config else AppConfig()
    if args.log_level:
        cfg.log_level = args.log_level
    if args.log_format:
        cfg.log_format = args.log_format
    if args.debug_modules is not None:
        cfg.debug_modules = args.debug_modules
    cfg.strict = cfg.strict or args.strict
    if getattr(args, "registry_dir", None):
        cfg.registry_dir = args.registry_dir
    if getattr(args, "assets_dir", None):
        cfg.assets_dir = args.assets_dir
    return cfg


def _parse_pairs(pairs, kind):
    parsed = []
    for pair in pairs:
        index, sep, value = pair.partition("=")
        if not sep:
            raise ValueError(f"--{kind} expects INDEX=VALUE, got {pair!r}")
        parsed.append((int(index), float(value)))
    return parsed


def cmd_build(args, cfg, builder):
    profile = builder.build_files(args.registry, args.asset)
    text = json.dumps(profile.to_dict(), indent=2)
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(text + "\n")
        LOG.info("wrote %s", args.output)
    else:
        print(text)
    return 0


def cmd_validate(args, cfg, builder):
    profile = builder.build_files(args.registry, args.asset)
    print(f"{profile.profile_id}: OK ({', '.join(profile.layouts)})")
    return 0


def cmd_list(args, cfg, builder):
    if not cfg.registry_dir:
        raise ProfileError("No registry folder given (--registry-dir or registry_dir in config)")
    source = DirectoryProfileSource(cfg.registry_dir, cfg.assets_dir, builder)
    local = LocalProfileSource.from_files(args.local, builder) if args.local else None
    selector = ProfileSelector(source, local=local)
    for profile_id, info in asyncio.run(selector.list_profiles()).items():
        suffix = " (local)" if info.get("local") else " (assets)" if info.get("assets") else ""
        print(f"{profile_id}{suffix}")
    return 0


def cmd_verify(args, cfg, builder):
    source = LocalProfileSource(args.registry, args.asset, args.model, builder)
    store = YamlFileStore(cfg.store_path) if cfg.store_path else MemoryStore()
    selector = ProfileSelector(source, store)

    async def controllers():
        await selector.restore()
        keys = [args.handedness] if args.handedness else list(selector.profile.layouts)
        return [(key, await selector.create_motion_controller(selector.mock_input_source(key))) for key in keys]

    problems = 0
    for key, controller in asyncio.run(controllers()):
        missing = verify_asset_nodes(controller.layout, controller.asset_path)
        for message in missing:
            print(f"{key}: {message}")
        problems += len(missing)
    if problems:
        return 1
    print(f"{selector.profile.profile_id}: all model nodes present")
    return 0


def cmd_simulate(args, cfg, builder):
    profile = builder.build_files(args.registry, args.asset)
    layout = profile.layout_for(args.handedness)
    controller = MotionController(profile, args.handedness, layout.asset_path)
    gamepad = GamepadState.for_layout(layout, profile.profile_id)

    try:
        for index, value in _parse_pairs(args.button, "button"):
            gamepad.buttons[index].value = value
        for index in args.touched:
            gamepad.buttons[index].touched = True
        for index in args.pressed:
            gamepad.buttons[index].pressed = True
        for index, value in _parse_pairs(args.axis, "axis"):
            gamepad.axes[index] = value
    except IndexError as e:
        raise ProfileError(f"Index outside the {args.handedness} layout's gamepad: {e}") from e
    except ValueError as e:
        raise ProfileError(str(e)) from e

    data = controller.update_from_gamepad(gamepad)
    print(json.dumps({cid: d.to_dict() for cid, d in data.items()}, indent=2))
    return 0


COMMANDS = {
    "build": cmd_build,
    "validate": cmd_validate,
    "list": cmd_list,
    "verify": cmd_verify,
    "simulate": cmd_simulate,
}


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        cfg = resolve_config(args)
    except ProfileError as e:
        parser.error(str(e))
    configure_logging(cfg)

    try:
        builder = ProfileBuilder(strict=cfg.strict)
        return COMMANDS[args.command](args, cfg, builder)
    except ProfileError as e:
        LOG.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
