# Copyright (c) 2025 Joe Walter
# GNU General Public License v3.0

import errno

class FileTreeError(OSError):
	'''Base class for a failed filesystem operation. `errno` comes from the underlying `OSError` when there is one.'''

	default_errno = errno.EIO

	def __init__(self, strerror=None, filename=None, *, code=None):
		super().__init__(self.default_errno if code is None else code, strerror, filename)

class PathNotFoundError(FileTreeError, FileNotFoundError):
	'''Indicates the path is not a file, a directory, or (where allowed) a symlink.'''
	default_errno = errno.ENOENT

class SourceNotFoundError(PathNotFoundError):
	'''Indicates the source of a copy does not exist.'''
	pass

class PermissionChangeError(FileTreeError):
	'''Indicates a problem applying a mode with chmod.'''
	default_errno = errno.EPERM

class MkdirError(FileTreeError):
	'''Indicates a directory could not be created and does not exist.'''
	pass

class DeleteError(FileTreeError):
	'''Indicates a file or symlink could not be unlinked.'''
	pass

class OpenDirError(FileTreeError):
	'''Indicates a problem opening or reading a directory.'''
	pass

class CloseDirError(FileTreeError):
	'''Indicates a problem closing a directory handle.'''
	pass

class RmdirError(FileTreeError):
	'''Indicates an emptied directory could not be removed.'''
	pass

class SymlinkError(FileTreeError):
	'''Indicates a problem reading or recreating a symlink.'''
	pass

class CopyError(FileTreeError):
	'''Indicates a problem copying a regular file, or a copy that would never terminate.'''
	pass

class DirnameError(FileTreeError):
	'''Indicates the destination path has no parent directory to create.'''
	default_errno = errno.EINVAL
