"""
Console entry point: `lalias ...` or `python -m lalias ...`.

Faults are printed as a single line on stderr and end the process with exit
status 1; success exits with 0.
"""
import sys

from .commands import run


def main():
    run(sys.argv[1:], shell=True)
    return 0


if __name__ == '__main__':
    sys.exit(main())
