"""Client library for the Greenhouse Harvest and job board APIs."""

from importlib import metadata

from .api import GreenhouseAPIError, GreenhouseDecodeError, GreenhouseError, Record
from .attachments import attachment_from_file, encode_attachment
from .client import PERMITTED_OPTIONS, HarvestClient, RateLimit
from .config import GreenhouseConfig
from .job_board import JobBoard

try:
    __version__ = metadata.version("greenhouse-io")
except metadata.PackageNotFoundError:  # pragma: no cover - running from a source tree
    __version__ = "0.0.0"

__all__ = [
    "GreenhouseAPIError",
    "GreenhouseConfig",
    "GreenhouseDecodeError",
    "GreenhouseError",
    "HarvestClient",
    "JobBoard",
    "PERMITTED_OPTIONS",
    "RateLimit",
    "Record",
    "attachment_from_file",
    "encode_attachment",
]
