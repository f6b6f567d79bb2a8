"""Entry point for `python -m whistlybird` or the `whistlybird` console script."""

import argparse
import logging

from whistlybird.app import App
from whistlybird.config import DIFFICULTIES
from whistlybird.settings import Settings


def main() -> None:
    parser = argparse.ArgumentParser(description="Whistly Bird — steer with your whistle")
    parser.add_argument("--difficulty", choices=list(DIFFICULTIES), default="easy",
                        help="Pipe spawn rate preset")
    parser.add_argument("--sprites-dir", default="", help="Directory containing sprite PNGs")
    parser.add_argument("--device", type=int, default=None, help="Input device index (see --list-devices)")
    parser.add_argument("--list-devices", action="store_true", help="List audio input devices and exit")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.list_devices:
        from whistlybird.microphone import MicrophoneInput
        for i, name in MicrophoneInput.list_devices():
            print(f"{i}: {name}")
        return

    settings = Settings(difficulty=args.difficulty, pipe_spawn_interval=DIFFICULTIES[args.difficulty])
    app = App(settings=settings, sprites_dir=args.sprites_dir, device=args.device)
    app.run()


if __name__ == "__main__":
    main()
