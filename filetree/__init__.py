# Copyright (c) 2025 Joe Walter
# GNU General Public License v3.0

from .core import FileTree, OperationResult, set_permission, create_directory, delete, copy
from .errors import FileTreeError, PathNotFoundError, SourceNotFoundError, PermissionChangeError, MkdirError, DeleteError, OpenDirError, CloseDirError, RmdirError, SymlinkError, CopyError, DirnameError

__all__ = [
	"FileTree",
	"OperationResult",
	"set_permission",
	"create_directory",
	"delete",
	"copy",
	"FileTreeError",
	"PathNotFoundError",
	"SourceNotFoundError",
	"PermissionChangeError",
	"MkdirError",
	"DeleteError",
	"OpenDirError",
	"CloseDirError",
	"RmdirError",
	"SymlinkError",
	"CopyError",
	"DirnameError",
]
