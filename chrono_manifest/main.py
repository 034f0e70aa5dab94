import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .core import ManifestApp, ManifestConfig
from .exceptions import ChronoManifestError
from .scanning.filesystem import DirectoryHarvester

__version__ = "0.1.0"

def setup_logging(verbose: bool):
    """Sets up logging to stderr; stdout is reserved for the manifest."""
    log_level = logging.DEBUG if verbose else logging.WARNING

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )

    # Silence chatty libraries
    logging.getLogger("exifread").setLevel(logging.ERROR)

def parse_args(argv: Optional[List[str]] = None) -> ManifestConfig:
    p = argparse.ArgumentParser(
        prog="chrono-manifest",
        description="List the files of a directory as CSV, ordered by capture time.",
    )

    p.add_argument("directory", type=Path, nargs="?", default=None,
                   help="Directory to scan for files (default: current working directory)")
    p.add_argument("-o", "--output", type=Path, default=None,
                   help="Destination file (default: standard output)")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    p.add_argument("--progress", action="store_true", help="Show a progress bar on stderr")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    args = p.parse_args(argv)
    return ManifestConfig(
        directory=args.directory,
        output=args.output,
        verbose=args.verbose,
        progress=args.progress,
    )

def main(argv: Optional[List[str]] = None) -> int:
    cfg = parse_args(argv)
    setup_logging(cfg.verbose)

    app = ManifestApp(harvester=DirectoryHarvester(show_progress=cfg.progress))

    try:
        app.run(cfg)
    except KeyboardInterrupt:
        print("Operation cancelled by user.", file=sys.stderr)
        return 1
    except (OSError, ChronoManifestError) as e:
        logging.debug("Fatal error while building manifest.", exc_info=True)
        print(e, file=sys.stderr)
        return 1

    return 0

if __name__ == "__main__":
    sys.exit(main())
