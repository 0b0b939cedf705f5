"""Run options for a single migration."""

from __future__ import annotations

import logging
import pathlib
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_FILE: str = "new_config.xml"


@dataclass
class MigrationConfig:
    """Options controlling one batch conversion.

    Attributes:
        input_file: OPNsense XML configuration to read.
        output_file: Destination for the rewritten configuration.
        dry_run: Report only; never write ``output_file``.
        verbose: Log per-mapping progress and the subnet summary.
        keep_existing: Append to existing Kea reservations instead of
            replacing them.
    """

    input_file: pathlib.Path
    output_file: pathlib.Path = pathlib.Path(DEFAULT_OUTPUT_FILE)
    dry_run: bool = False
    verbose: bool = False
    keep_existing: bool = False

    def __post_init__(self) -> None:
        self.input_file = pathlib.Path(self.input_file).expanduser()
        self.output_file = pathlib.Path(self.output_file).expanduser()
        if self.input_file.resolve() == self.output_file.resolve() and not self.dry_run:
            logger.warning("Output file %s overwrites the input file", self.output_file)
