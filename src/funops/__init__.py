from .capture import QuietlyResult, SafelyResult, possibly, quietly, safely
from .chaining import chain
from .common.config_service import ConfigError, ConfigService
from .common.log_setup import configure_logging
from .delay import delay_at_least, delay_by, dot_every
from .observers import DirectorySnapshot, log_calls, track_dir
from .operators import FunctionOperators
from .vectorizing import vectorize

__all__ = [
	"possibly",
	"safely",
	"quietly",
	"SafelyResult",
	"QuietlyResult",
	"vectorize",
	"delay_by",
	"delay_at_least",
	"dot_every",
	"log_calls",
	"track_dir",
	"DirectorySnapshot",
	"chain",
	"FunctionOperators",
	"ConfigService",
	"ConfigError",
	"configure_logging",
]
