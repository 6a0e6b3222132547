# Copyright (c) 2025 Joe Walter
# GNU General Public License v3.0

import sys
import logging

# Summary of logging levels used in this package:
# DEBUG    = a single filesystem change made during an operation
# INFO     = operation performed, no problems encountered
# WARNING  = problem encountered but the operation completed
# ERROR    = problem encountered and the operation failed
# CRITICAL = Exception raised which halted the program entirely

def _exc_summary(e) -> str:
	'''
	Get a one-line summary of an `Exception`.

	>>> _exc_summary(FileNotFoundError(2, "Path not found", "a/b"))
	'FileNotFoundError: Path not found: a/b'
	>>> _exc_summary(ValueError("bad mode"))
	'bad mode'
	'''

	error_type = type(e).__name__
	affected_file = getattr(e, "filename", None)
	error_message = getattr(e, "strerror", None)
	if isinstance(e, OSError) and affected_file and error_message:
		msg = f"{error_type}: {error_message}: {affected_file}"
	elif isinstance(e, OSError) and affected_file:
		msg = f"{error_type}: {affected_file}"
	elif error_message:
		msg = f"{error_type}: {error_message}"
	else:
		msg = str(e)
	return msg

class _DebugInfoFilter(logging.Filter):
	'''Logging filter that only allows DEBUG and INFO records to pass.'''
	def filter(self, record):
		return logging.DEBUG <= record.levelno <= logging.INFO

class _NonEmptyFilter(logging.Filter):
	'''Logging filter that only allows non-empty messages.'''
	def filter(self, record):
		return bool(str(record.msg).strip())

class _ConsoleFormatter(logging.Formatter):
	BASE_FORMAT = "%(message)s"

	def __init__(self, fmt=BASE_FORMAT, datefmt=None, style="%"):
		super().__init__(fmt, datefmt, style)

	def format(self, record):
		msg = super().format(record)
		if record.levelno == logging.DEBUG:
			msg = "  " + msg.replace("\n", "\n  ").rstrip(" ")
		return msg

class _LogFileFormatter(logging.Formatter):
	BASE_FORMAT = "%(asctime)s %(message)s"

	def __init__(self, fmt=BASE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S", style="%"):
		super().__init__(fmt, datefmt, style)

	def format(self, record):
		if record.levelno == logging.WARNING:
			prefix = "WARNING: "
		elif record.levelno == logging.ERROR:
			prefix = "ERROR: "
		elif record.levelno == logging.CRITICAL:
			prefix = "*** CRITICAL ***: "
		else:
			prefix = ""
		record.message = record.getMessage()
		msg = prefix + record.message
		if record.levelno == logging.DEBUG:
			msg = "  " + msg.replace("\n", "\n  ").rstrip(" ")
		return f"{self.formatTime(record, self.datefmt)} {msg}"

logger = logging.getLogger("filetree")

def setup_logger():
	if not logger.handlers:
		logger.setLevel(logging.WARNING)
		handler_stdout = logging.StreamHandler(sys.stdout)
		handler_stderr = logging.StreamHandler(sys.stderr)
		handler_stdout.addFilter(_DebugInfoFilter())
		handler_stdout.setLevel(logging.DEBUG)
		handler_stderr.setLevel(logging.WARNING)
		handler_stdout.setFormatter(_ConsoleFormatter())
		handler_stderr.setFormatter(_ConsoleFormatter())
		logger.addHandler(handler_stdout)
		logger.addHandler(handler_stderr)

def add_file_handler(path, level:int = logging.DEBUG) -> logging.FileHandler:
	'''Also write records of `level` and above to the file at `path`. Returns the handler so the caller can remove and close it.'''

	handler_file = logging.FileHandler(path, encoding="utf-8")
	handler_file.setLevel(level)
	handler_file.setFormatter(_LogFileFormatter())
	handler_file.addFilter(_NonEmptyFilter())
	logger.addHandler(handler_file)
	return handler_file

setup_logger()
