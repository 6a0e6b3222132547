# Copyright (c) 2025 Joe Walter
# GNU General Public License v3.0

from dataclasses import dataclass
from logging import Logger

@dataclass(frozen=True)
class _TreeConfig:
	'''Pass the essential properties from `FileTree` to a read-only data structure shared by one call graph.'''

	throw_exceptions  : bool
	dir_mode          : int
	copy_mode         : int
	preserve_metadata : bool

	# other
	logger            : Logger
