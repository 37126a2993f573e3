"""Configuration schema: one dataclass per config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from acautils.output import OutputMode
from acautils.scanner.selector import DEFAULT_EXCLUDES, DEFAULT_INCLUDES


@dataclass
class ScanConfig:
    include: List[str] = field(default_factory=lambda: list(DEFAULT_INCLUDES))
    exclude: List[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDES))
    skip_comments: bool = False  # if True, '#'/';' lines are not searched for free-form IPs


@dataclass
class OutputConfig:
    format: OutputMode = "csv"  # ip-port
    flip_format: OutputMode = "table"  # flip-adapters (csv is not offered there)


@dataclass
class FlipConfig:
    properties_path: str = "env/{env}/parameters.properties"
    branch_template: str = "toggle/adapters-{env}"
    dry_run: bool = True


@dataclass
class StoreConfig:
    path: Optional[str] = None  # default: ~/.aca-utils/adapters.txt


@dataclass
class AcaConfig:
    version: str = "1.0"
    scan: ScanConfig = field(default_factory=ScanConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    flip: FlipConfig = field(default_factory=FlipConfig)
    store: StoreConfig = field(default_factory=StoreConfig)
