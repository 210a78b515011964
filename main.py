#!/usr/bin/env python3
"""Install an Electron version and print its executable path."""

import asyncio
import sys


async def main(version: str) -> int:
    from electron_runner import Installer, InstallerError
    from electron_runner.utils import setup_logging

    setup_logging()
    installer = Installer()
    try:
        electron_exec = await installer.install(version)
    except InstallerError as e:
        print(e, file=sys.stderr)
        return 1

    print(electron_exec)
    return 0


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("usage: main.py <electron-version>", file=sys.stderr)
        sys.exit(2)
    try:
        sys.exit(asyncio.run(main(sys.argv[1])))
    except KeyboardInterrupt:
        pass
