#!/usr/bin/env python
import os
import sys


def main() -> None:
    os.environ.setdefault("FITPULSE_SETTINGS_MODULE", "fitpulse.settings.base")
    from fitpulse.core.management import execute_from_command_line

    if len(sys.argv) < 2:
        command = "heart_rate"
        args = []
    else:
        command = sys.argv[1]
        args = sys.argv[2:]

    sys.exit(execute_from_command_line(command, args))


if __name__ == "__main__":
    main()
