"""
Command-line adapter for the wallpaper module.

Architectural role:
- Terminal entrypoint for operators and headless hosts.
- Builds a `WallpaperModule` from `load_config` plus command-line overrides.

Commands:
- `once`: run a single update cycle; optionally write the decoded image to
  `--output`. Exit code 0 when an image was produced, 1 otherwise.
- `run`: start the scheduler and block until interrupted. Each image swap is
  logged; with `--output`, the file is rewritten on every swap.

Error handling strategy:
- Missing API key exits with code 2 after the module logs the error.
- Config validation errors are reported through `parser.error`.
- KeyboardInterrupt stops the scheduler without traceback output.
"""

from dotenv import load_dotenv

load_dotenv()

import argparse
import logging
import sys
import threading

from gemini_wallpaper.core.config import load_config
from gemini_wallpaper.core.engine import WallpaperModule
from gemini_wallpaper.image.service import decode_data_uri


logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def build_parser():
    parser = argparse.ArgumentParser(
        prog="gemini-wallpaper",
        description="Generate sports wallpapers with Gemini",
    )
    parser.add_argument("command", choices=["once", "run"])
    parser.add_argument("--config", default=None, help="JSON config file")
    parser.add_argument("--output", default=None, help="Write the decoded image here")
    parser.add_argument("--team", action="append", dest="teams", default=None)
    parser.add_argument("--league", action="append", dest="leagues", default=None)
    parser.add_argument("--color", action="store_true", default=None)
    parser.add_argument("--orientation", choices=["landscape", "portrait"], default=None)
    parser.add_argument("--log-level", default="INFO")
    return parser


def _overrides(args) -> dict:
    overrides = {
        "teams": args.teams,
        "leagues": args.leagues,
        "color": args.color,
        "orientation": args.orientation,
    }
    return {key: value for key, value in overrides.items() if value is not None}


def write_image(module: WallpaperModule, path: str) -> bool:
    """Write the module's current image to `path`. Returns False when none."""
    image_url = module.snapshot().image_url
    if not image_url:
        return False
    _, payload = decode_data_uri(image_url)
    with open(path, "wb") as f:
        f.write(payload)
    logger.info("Wrote %d bytes to %s", len(payload), path)
    return True


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format=LOG_FORMAT)

    try:
        config = load_config(args.config, **_overrides(args))
    except (OSError, ValueError) as err:
        parser.error(f"invalid configuration: {err}")

    module = WallpaperModule(config)

    if args.command == "once":
        if not config.api_key:
            # Mirrors the startup check without starting the scheduler.
            module.start()
            return 2
        produced = module.update_wallpaper()
        if produced and args.output:
            write_image(module, args.output)
        return 0 if produced else 1

    if args.output:
        module.add_listener(lambda _speed: write_image(module, args.output))

    if not module.start():
        return 2

    try:
        threading.Event().wait()
    except KeyboardInterrupt:
        logger.info("Interrupted; stopping scheduler")
    finally:
        module.stop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
