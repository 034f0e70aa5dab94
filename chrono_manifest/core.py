import io
import sys
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional, TextIO

from .exceptions import DestinationExistsError
from .scanning.filesystem import DirectoryHarvester
from .reporting import ManifestWriter
from . import config


@dataclass(frozen=True)
class ManifestConfig:
    """Validated options for one run."""
    directory: Optional[Path] = None   # None = current working directory
    output: Optional[Path] = None      # None = standard output
    verbose: bool = False
    progress: bool = False


def confirm_overwrite(path: Path, prompt_in: TextIO, prompt_out: TextIO) -> bool:
    """Asks once. Only a 'y' answer (any case) counts as yes."""
    prompt_out.write(f"'{path}' already exists. Overwrite? ")
    prompt_out.flush()
    answer = prompt_in.readline()
    return answer.strip().lower() == config.CONFIRM_ANSWER


@contextmanager
def _utf8_stdout() -> Iterator[TextIO]:
    buffer = getattr(sys.stdout, "buffer", None)
    if buffer is None:
        # Text-only replacement stream, nothing to re-encode
        yield sys.stdout
        return

    sys.stdout.flush()
    stream = io.TextIOWrapper(buffer, encoding="utf-8", newline="", write_through=True)
    try:
        yield stream
    finally:
        stream.flush()
        # Detach so the wrapper never closes the process's stdout
        stream.detach()


@contextmanager
def open_destination(output: Optional[Path],
                     prompt_in: Optional[TextIO] = None,
                     prompt_out: Optional[TextIO] = None) -> Iterator[TextIO]:
    """
    Yields the stream the manifest goes to.

    stdout when no path is given, re-wrapped as UTF-8 whatever the locale
    says and left open afterwards. For a path, the file is created
    exclusively; an existing file is only truncated after the user confirms.
    """
    if output is None:
        with _utf8_stdout() as stream:
            yield stream
        return

    prompt_in = prompt_in or sys.stdin
    prompt_out = prompt_out or sys.stderr

    try:
        f = open(output, "x", newline="", encoding="utf-8")
    except FileExistsError as e:
        if not confirm_overwrite(output, prompt_in, prompt_out):
            raise DestinationExistsError(f"'{output}' already exists") from e
        logging.info(f"Overwriting {output}")
        f = open(output, "w", newline="", encoding="utf-8")

    with f:
        yield f


class ManifestApp:
    def __init__(self, harvester: Optional[DirectoryHarvester] = None,
                 writer: Optional[ManifestWriter] = None):
        self.harvester = harvester or DirectoryHarvester()
        self.writer = writer or ManifestWriter()

    def run(self, cfg: ManifestConfig,
            prompt_in: Optional[TextIO] = None,
            prompt_out: Optional[TextIO] = None):
        """
        Executes the manifest pipeline.
        1. Resolve destination (may prompt)
        2. Harvest the directory
        3. Write the sorted manifest
        """
        directory = cfg.directory if cfg.directory is not None else Path.cwd()

        with open_destination(cfg.output, prompt_in, prompt_out) as stream:
            records = self.harvester.scan(directory)
            self.writer.write(records, stream)
