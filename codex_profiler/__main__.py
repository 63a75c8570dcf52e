"""
Entry point for running codex-profiler as a module.

Usage:
    python -m codex_profiler list
    python -m codex_profiler run --help
"""

import asyncio
import sys

from codex_profiler.cli import run_cli


def main() -> int:
    """Main entry point."""
    try:
        return asyncio.run(run_cli(sys.argv[1:]))
    except KeyboardInterrupt:
        print("\nAborted.", file=sys.stderr)
        return 130
    except EOFError:
        print("\nAborted.", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"codex-profiler failed: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
